import contextlib
import typing

import pydantic
import pyodbc

from dbdelta import data
from dbdelta.adapter.cursor.odbc import OdbcCursor

__all__ = ("OdbcCursorProvider",)


class OdbcCursorProvider(data.CursorProvider):
    def __init__(self, *, db_config: data.DbConfig):
        self._db_config: typing.Final[data.DbConfig] = db_config

    @contextlib.contextmanager
    def open(self) -> typing.Generator[data.Cursor | data.Error, None, None]:
        con_str = self._db_config.connection_string
        if con_str is None:
            yield data.Error.new(
                "Connection string is required for OdbcCursorProvider",
                db_id=self._db_config.db_id,
            )
        else:
            with _connect(connection_string=con_str) as con:
                if isinstance(con, data.Error):
                    yield con
                else:
                    with con.cursor() as cur:
                        yield OdbcCursor(cursor=cur)


@contextlib.contextmanager
def _connect(
    *,
    connection_string: pydantic.SecretStr,
) -> typing.Generator[pyodbc.Connection | data.Error, None, None]:
    # noinspection PyBroadException
    try:
        con = pyodbc.connect(connection_string.get_secret_value(), autocommit=False)
    except Exception as e:
        yield data.Error.new(f"An error occurred while connecting to the database: {e!s}")
    else:
        with con:
            yield con
