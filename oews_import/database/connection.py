"""Database connection and operations for the ``oews_data`` table."""

import logging
from contextlib import contextmanager, nullcontext
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

import pandas as pd
from sqlalchemy import create_engine, delete, func, select, text
from sqlalchemy.engine import Connection, Engine, URL, make_url
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from oews_import.cli.config import ImportConfig
from oews_import.lib.exceptions import ConnectionException, QueryException
from .schema import metadata, oews_data

logger = logging.getLogger(__name__)

MYSQL_DRIVER = "mysql+pymysql"


class OEWSStore:
    """
    Thin wrapper around a SQLAlchemy engine bound to the OEWS database.

    Every write method accepts an optional ``connection`` so callers can
    group several operations into one transaction; without it each call
    commits on its own.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @staticmethod
    def build_url(config: ImportConfig) -> URL:
        """Build the connection URL from configuration."""
        if config.database_url:
            return make_url(config.database_url)
        return URL.create(
            MYSQL_DRIVER,
            username=config.user,
            password=config.password,
            host=config.host,
            port=config.port,
            database=config.database,
            query={"charset": "utf8mb4"},
        )

    @staticmethod
    def _open_engine(url: URL) -> Engine:
        """Create an engine and verify that it can reach the server."""
        engine = create_engine(url, pool_pre_ping=True)
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            engine.dispose()
            raise
        return engine

    @staticmethod
    def _create_database(url: URL) -> None:
        """Connect without a database name and create the database if absent."""
        server_engine = create_engine(url.set(database=None))
        try:
            quoted = server_engine.dialect.identifier_preparer.quote(url.database)
            with server_engine.begin() as conn:
                conn.execute(text(f"CREATE DATABASE IF NOT EXISTS {quoted}"))
        finally:
            server_engine.dispose()

    @classmethod
    def connect(cls, config: ImportConfig) -> "OEWSStore":
        """
        Connect to the configured database.

        If the first attempt fails and the backend is a server database,
        the database is created (if absent) and the connection retried once.

        Raises:
            ConnectionException: If the database cannot be reached
        """
        url = cls.build_url(config)
        safe_url = url.render_as_string(hide_password=True)
        try:
            engine = cls._open_engine(url)
        except OperationalError as exc:
            if url.get_backend_name() == "sqlite" or not url.database:
                raise ConnectionException(
                    f"Failed to connect to database: {exc}", {"url": safe_url}
                ) from exc

            logger.warning("Failed to connect to database: %s", exc)
            logger.info("Attempting to connect without specifying database to create it...")
            try:
                cls._create_database(url)
                engine = cls._open_engine(url)
            except SQLAlchemyError as retry_exc:
                raise ConnectionException(
                    f"Failed to connect to database after creating it: {retry_exc}",
                    {"url": safe_url},
                ) from retry_exc
        except SQLAlchemyError as exc:
            raise ConnectionException(
                f"Failed to connect to database: {exc}", {"url": safe_url}
            ) from exc

        logger.info("Connected to database %s", safe_url)
        return cls(engine)

    def _scope(self, connection: Optional[Connection]):
        return nullcontext(connection) if connection is not None else self.engine.begin()

    @contextmanager
    def _reading(self, action: str) -> Iterator[Connection]:
        try:
            with self.engine.connect() as conn:
                yield conn
        except SQLAlchemyError as exc:
            raise QueryException(f"{action} failed: {exc}", {"table": oews_data.name}) from exc

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection whose work commits (or rolls back) as one unit."""
        with self.engine.begin() as conn:
            yield conn

    def create_table(self) -> None:
        """Create the ``oews_data`` table and its indexes if they do not exist."""
        try:
            metadata.create_all(self.engine, tables=[oews_data])
        except SQLAlchemyError as exc:
            raise QueryException(
                f"Failed to create table {oews_data.name}: {exc}", {"table": oews_data.name}
            ) from exc
        logger.info("OEWS table created/verified successfully")

    def execute(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        connection: Optional[Connection] = None,
    ) -> int:
        """
        Execute a DDL/DML statement with named parameters.

        Returns:
            Number of affected rows as reported by the driver
        """
        try:
            with self._scope(connection) as conn:
                result = conn.execute(text(sql), dict(params or {}))
                return result.rowcount
        except SQLAlchemyError as exc:
            raise QueryException(f"Statement failed: {exc}", {"sql": sql}) from exc

    def delete_year(self, year: int, connection: Optional[Connection] = None) -> int:
        """Delete every row of ``year``; returns the number of deleted rows."""
        with self._scope(connection) as conn:
            result = conn.execute(delete(oews_data).where(oews_data.c.year == year))
            return result.rowcount

    def append_rows(
        self,
        records: Sequence[Dict[str, Any]],
        connection: Optional[Connection] = None,
    ) -> int:
        """Insert ``records`` (dicts keyed by column name) into ``oews_data``."""
        if not records:
            return 0
        with self._scope(connection) as conn:
            conn.execute(oews_data.insert(), list(records))
        return len(records)

    def query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> pd.DataFrame:
        """
        Run a read query and return the rows as a DataFrame.

        Args:
            sql: SQL text with ``:name`` placeholders
            params: Values for the placeholders

        Returns:
            pandas DataFrame with query results
        """
        try:
            with self.engine.connect() as conn:
                return pd.read_sql_query(text(sql), conn, params=dict(params or {}))
        except SQLAlchemyError as exc:
            raise QueryException(f"Query failed: {exc}", {"sql": sql}) from exc

    def count_records(self, year: Optional[int] = None) -> int:
        """Count rows, optionally for a single year."""
        stmt = select(func.count()).select_from(oews_data)
        if year is not None:
            stmt = stmt.where(oews_data.c.year == year)
        with self._reading("Counting records") as conn:
            return int(conn.execute(stmt).scalar_one())

    def distinct_years(self) -> List[int]:
        """Sorted list of the years present in the table."""
        stmt = select(oews_data.c.year).distinct().order_by(oews_data.c.year)
        with self._reading("Listing years") as conn:
            return [int(year) for year in conn.execute(stmt).scalars()]

    def year_counts(self) -> Dict[int, int]:
        """Row count per year, oldest first."""
        stmt = (
            select(oews_data.c.year, func.count())
            .group_by(oews_data.c.year)
            .order_by(oews_data.c.year)
        )
        with self._reading("Counting records per year") as conn:
            return {int(year): int(count) for year, count in conn.execute(stmt)}

    def sample_rows(self, limit: int = 5) -> pd.DataFrame:
        """A few loaded rows with a mean annual wage, for the run summary."""
        return self.query(
            "SELECT year, occ_code, occ_title, a_mean FROM oews_data "
            "WHERE a_mean IS NOT NULL LIMIT :limit",
            {"limit": limit},
        )

    def close(self) -> None:
        """Dispose of the connection pool."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connection closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
