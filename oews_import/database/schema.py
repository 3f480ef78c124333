"""Table definition for the canonical ``oews_data`` table."""

from sqlalchemy import (
    BigInteger,
    CHAR,
    Column,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    TIMESTAMP,
    Table,
    text,
)

from oews_import.oews_schema import TABLE_NAME

metadata = MetaData()

# Hourly wages fit DECIMAL(10,2); annual wages need DECIMAL(12,2).
HourlyWage = Numeric(10, 2, asdecimal=False)
AnnualWage = Numeric(12, 2, asdecimal=False)

oews_data = Table(
    TABLE_NAME,
    metadata,
    Column("id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
    Column("year", Integer, nullable=False),
    Column("area", String(10)),
    Column("area_title", String(255)),
    Column("naics", String(10)),
    Column("naics_title", String(255)),
    Column("i_group", String(10)),
    Column("own_code", String(10)),
    Column("occ_code", String(10)),
    Column("occ_title", String(255)),
    Column("o_group", String(10)),
    Column("tot_emp", Integer),
    Column("emp_prse", String(10)),
    Column("jobs_1000", Numeric(10, 3, asdecimal=False)),
    Column("jobs_1000_prse", String(10)),
    Column("h_mean", HourlyWage),
    Column("a_mean", AnnualWage),
    Column("mean_prse", String(10)),
    Column("h_pct10", HourlyWage),
    Column("h_pct25", HourlyWage),
    Column("h_median", HourlyWage),
    Column("h_pct75", HourlyWage),
    Column("h_pct90", HourlyWage),
    Column("a_pct10", AnnualWage),
    Column("a_pct25", AnnualWage),
    Column("a_median", AnnualWage),
    Column("a_pct75", AnnualWage),
    Column("a_pct90", AnnualWage),
    Column("annual", CHAR(1)),
    Column("hourly", CHAR(1)),
    Column("created_at", TIMESTAMP, server_default=text("CURRENT_TIMESTAMP")),
    Index("idx_year", "year"),
    Index("idx_occ_code", "occ_code"),
    Index("idx_area", "area"),
    Index("idx_year_occ", "year", "occ_code"),
    mysql_engine="InnoDB",
    mysql_charset="utf8mb4",
    mysql_collate="utf8mb4_unicode_ci",
)

