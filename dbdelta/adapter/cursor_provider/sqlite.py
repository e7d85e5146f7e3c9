import contextlib
import sqlite3
import typing

from dbdelta import data
from dbdelta.adapter.cursor.sqlite import SqliteCursor

__all__ = ("SqliteCursorProvider",)


class SqliteCursorProvider(data.CursorProvider):
    def __init__(self, *, db_config: data.DbConfig):
        self._db_config: typing.Final[data.DbConfig] = db_config

    @contextlib.contextmanager
    def open(self) -> typing.Generator[data.Cursor | data.Error, None, None]:
        if self._db_config.connection_string is not None:
            database = self._db_config.connection_string.get_secret_value()
        elif self._db_config.db_name is not None:
            database = self._db_config.db_name
        else:
            yield data.Error.new(
                "Either db-name or connection-string is required for SqliteCursorProvider.",
                db_id=self._db_config.db_id,
            )
            return

        # noinspection PyBroadException
        try:
            con = sqlite3.connect(database)
        except Exception as e:
            yield data.Error.new(
                f"An error occurred while connecting to the database: {e!s}",
                db_id=self._db_config.db_id,
            )
        else:
            try:
                cur = con.cursor()
                try:
                    yield SqliteCursor(cursor=cur)
                finally:
                    cur.close()
            except BaseException:
                con.rollback()
                raise
            else:
                con.commit()
            finally:
                con.close()
