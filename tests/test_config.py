import os
from pathlib import Path

import pytest

from oews_import.cli.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DATA_DIR,
    ImportConfig,
    load_env_file,
)
from oews_import.lib.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)


class TestFromEnv:
    """Tests for ImportConfig.from_env."""

    def test_defaults(self):
        config = ImportConfig.from_env(environ={"DB_USER": "bls", "DB_PASSWORD": "pw"})

        assert config.host == "localhost"
        assert config.port == 3306
        assert config.database == "bls_oews"
        assert config.data_dir == DEFAULT_DATA_DIR
        assert config.batch_size == DEFAULT_BATCH_SIZE
        assert config.database_url is None

    def test_overrides_from_environment(self):
        config = ImportConfig.from_env(
            environ={
                "DB_USER": "bls",
                "DB_PASSWORD": "pw",
                "DB_HOST": "db.internal",
                "DB_PORT": "3307",
                "DB_NAME": "oews_test",
                "OEWS_DATA_DIR": "/srv/oews",
                "BATCH_SIZE": "250",
            }
        )

        assert config.host == "db.internal"
        assert config.port == 3307
        assert config.database == "oews_test"
        assert config.data_dir == Path("/srv/oews")
        assert config.batch_size == 250

    def test_missing_credentials(self):
        with pytest.raises(MissingConfigurationException) as exc_info:
            ImportConfig.from_env(environ={"DB_USER": "bls"})

        assert "DB_PASSWORD" in exc_info.value.message
        assert "DB_USER" not in exc_info.value.message

    def test_database_url_skips_credentials(self):
        config = ImportConfig.from_env(environ={"DATABASE_URL": "sqlite:///oews.db"})

        assert config.user is None
        assert config.database_url == "sqlite:///oews.db"

    @pytest.mark.parametrize("key,value", [("DB_PORT", "mysql"), ("BATCH_SIZE", "lots"), ("BATCH_SIZE", "0")])
    def test_invalid_numbers(self, key, value):
        environ = {"DB_USER": "bls", "DB_PASSWORD": "pw", key: value}

        with pytest.raises(InvalidConfigurationException):
            ImportConfig.from_env(environ=environ)


def test_with_overrides_ignores_none():
    config = ImportConfig(user="bls", password="pw")

    assert config.with_overrides(data_dir=None, batch_size=None) is config
    updated = config.with_overrides(data_dir=Path("elsewhere"), batch_size=50)
    assert updated.data_dir == Path("elsewhere")
    assert updated.batch_size == 50
    assert config.batch_size == DEFAULT_BATCH_SIZE


def test_to_dict_masks_passwords():
    config = ImportConfig(user="bls", password="hunter2", database_url="mysql+pymysql://bls:hunter2@db/bls_oews")

    settings = config.to_dict()

    assert settings["password"] == "********"
    assert "hunter2" not in str(settings)
    assert settings["user"] == "bls"


def test_load_env_file_does_not_override(tmp_path, monkeypatch):
    env_file = tmp_path / "custom.env"
    env_file.write_text("DB_USER=from_file\nDB_NAME=file_db\n")
    monkeypatch.setenv("DB_USER", "from_shell")
    monkeypatch.setenv("DB_NAME", "")
    monkeypatch.delenv("DB_NAME")

    assert load_env_file(str(env_file)) == env_file

    assert os.environ["DB_USER"] == "from_shell"
    assert os.environ["DB_NAME"] == "file_db"


def test_load_env_file_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert load_env_file() is None
    assert load_env_file(str(tmp_path / "absent.env")) is None


def test_from_env_without_validation_skips_credentials():
    config = ImportConfig.from_env(environ={"OEWS_DATA_DIR": "/srv/oews"}, validate=False)

    assert config.user is None
    assert config.data_dir == Path("/srv/oews")
