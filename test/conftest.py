import contextlib
import json
import pathlib
import sqlite3
import typing

import pydantic
import pytest

from dbdelta import adapter, data

USERS: typing.Final[tuple[tuple[str, str, str, str], ...]] = tuple(
    (f"user{i}", f"User {i}", f"pass{i}", f"2016-01-{i:02d}") for i in range(1, 11)
)


class RecordingLog(data.Log):
    """Keeps every report so tests can check what the reporting hook received."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, typing.Any]] = []

    def delta_assertion(self, /, result: data.DeltaAssertionResult) -> None:
        self.calls.append(("delta-assertion", result))

    def error(self, *, source: data.DataSource, error: data.Error) -> None:
        self.calls.append(("error", error))

    def query(self, /, data_set: data.DataSet) -> None:
        self.calls.append(("query", data_set))

    def setup(self, *, source: data.DataSource, operation: str, row_count: int, data_set: data.DataSet | None) -> None:
        self.calls.append(("setup", (operation, row_count)))

    def snapshot(self, /, data_set: data.DataSet) -> None:
        self.calls.append(("snapshot", data_set))

    def state_assertion(self, /, result: data.StateAssertionResult) -> None:
        self.calls.append(("state-assertion", result))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]


@pytest.fixture(scope="function")
def _root_dir_fixture(request: typing.Any) -> pathlib.Path:
    return next(p for p in pathlib.Path(request.fspath).parents if p.name == "test")


@pytest.fixture(scope="function")
def sqlite_path_fixture(tmp_path: pathlib.Path) -> pathlib.Path:
    db_path = tmp_path / "users.db"
    with contextlib.closing(sqlite3.connect(db_path)) as con:
        con.execute("""
            CREATE TABLE users (
                login TEXT NOT NULL PRIMARY KEY
            ,   name TEXT NOT NULL
            ,   password TEXT NOT NULL
            ,   created DATE NOT NULL
            )
        """)
        con.executemany("INSERT INTO users (login, name, password, created) VALUES (?, ?, ?, ?)", USERS)
        con.commit()
    return db_path


@pytest.fixture(scope="function")
def sqlite_connection_fixture(
    sqlite_path_fixture: pathlib.Path,
) -> typing.Generator[sqlite3.Connection, None, None]:
    """Connection used by tests to change the database behind the data sources' back."""
    with contextlib.closing(sqlite3.connect(sqlite_path_fixture, isolation_level=None)) as con:
        yield con


@pytest.fixture(scope="function")
def sqlite_db_config_fixture(sqlite_path_fixture: pathlib.Path) -> data.DbConfig:
    return data.DbConfig(db_id="test", api=data.API.SQLITE, db_name=str(sqlite_path_fixture))


@pytest.fixture(scope="function")
def recording_log_fixture() -> RecordingLog:
    return RecordingLog()


@pytest.fixture(scope="function")
def db_fixture(sqlite_db_config_fixture: data.DbConfig, recording_log_fixture: RecordingLog) -> data.Database:
    provider = adapter.cursor_provider.create(db_config=sqlite_db_config_fixture)
    assert not isinstance(provider, data.Error)

    return data.Database(cursor_provider=provider, log=recording_log_fixture)


@pytest.fixture(scope="function")
def users_table_fixture(db_fixture: data.Database) -> data.Table:
    return data.Table(db=db_fixture, name="users", columns=("login", "name", "password", "created"))


@pytest.fixture(scope="function")
def _config_fixture(_root_dir_fixture: pathlib.Path) -> dict[str, typing.Any]:
    config_path = _root_dir_fixture / "test-config.json"
    if not config_path.exists():
        pytest.skip(f"{config_path} does not exist.")

    with config_path.open("r") as fh:
        return typing.cast(dict[str, typing.Any], json.load(fh))


@pytest.fixture(scope="function")
def pg_connection_str_fixture(_config_fixture: dict[str, typing.Any]) -> str:
    return typing.cast(str, _config_fixture["ds"]["pg"]["connection-string"])


@pytest.fixture(scope="function")
def pg_db_config_fixture(pg_connection_str_fixture: str) -> data.DbConfig:
    return data.DbConfig(
        db_id="pg",
        api=data.API.PSYCOPG,
        connection_string=pydantic.SecretStr(pg_connection_str_fixture),
    )


@pytest.fixture(scope="function")
def users_fixture() -> tuple[tuple[str, str, str, str], ...]:
    return USERS
