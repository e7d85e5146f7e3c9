import json
import pathlib

import pydantic

from dbdelta import adapter, data


def _write(path: pathlib.Path, content: dict) -> pathlib.Path:
    path.write_text(json.dumps(content))
    return path


def test_load(tmp_path: pathlib.Path):
    config_file = _write(
        tmp_path / "config.json",
        {
            "log-assertions": True,
            "log-queries": True,
            "log-setup": True,
            "log-file": str(tmp_path / "reports.log"),
            "digest-algorithm": "sha256",
            "digest-chunk-size": 1024,
            "databases": [
                {
                    "db-id": "pg",
                    "api": "psycopg",
                    "host": "localhost",
                    "db-name": "test",
                    "keyring-db-username-entry": "pg-username",
                    "keyring-db-password-entry": "pg-password",
                },
                {"db-id": "local", "api": "sqlite", "db-name": str(tmp_path / "local.db")},
                {"db-id": "mssql", "api": "pyodbc", "connection-string": "Driver=x;Server=y"},
            ],
        },
    )

    config = adapter.config.load(config_file=config_file)

    assert isinstance(config, data.Config)
    assert config.log_assertions
    assert config.log_assertion_errors
    assert config.log_queries
    assert not config.log_snapshots
    assert config.log_setup
    assert config.log_file == tmp_path / "reports.log"
    assert config.digest_algorithm == "sha256"
    assert config.digest_chunk_size == 1024

    pg = config.db("pg")
    assert pg is not None
    assert pg.api == data.API.PSYCOPG
    assert pg.connection_string is None

    mssql = config.db("mssql")
    assert mssql is not None
    assert isinstance(mssql.connection_string, pydantic.SecretStr)
    assert mssql.connection_string.get_secret_value() == "Driver=x;Server=y"

    local = config.db("local")
    assert local is not None
    assert local.api == data.API.SQLITE

    assert config.db("missing") is None


def test_defaults():
    config = adapter.config.parse({"databases": []})

    assert isinstance(config, data.Config)
    assert config == data.Config()


def test_missing_file(tmp_path: pathlib.Path):
    assert isinstance(adapter.config.load(config_file=tmp_path / "missing.json"), data.Error)


def test_invalid_entries():
    assert isinstance(adapter.config.parse({}), data.Error)
    assert isinstance(adapter.config.parse({"databases": [{"api": "sqlite"}]}), data.Error)
    assert isinstance(adapter.config.parse({"databases": [{"db-id": "x", "api": "oracle"}]}), data.Error)
    assert isinstance(adapter.config.parse({"databases": [{"db-id": "x", "api": "psycopg"}]}), data.Error)
    assert isinstance(adapter.config.parse({"databases": [{"db-id": "x", "api": "sqlite"}]}), data.Error)
    assert isinstance(adapter.config.parse({"databases": [], "digest-chunk-size": 0}), data.Error)
