import typing

import sqlite3

from dbdelta import data
from dbdelta.adapter.cursor import shared

__all__ = ("SqliteCursor",)


class SqliteCursor(data.Cursor):
    def __init__(self, *, cursor: sqlite3.Cursor):
        self._cursor: typing.Final[sqlite3.Cursor] = cursor

    @property
    def placeholder(self) -> str:
        return "?"

    def execute(
        self,
        *,
        sql: str,
        params: typing.Iterable[typing.Hashable] | None,
    ) -> int | data.Error:
        return shared.execute(
            cur=self._cursor,
            sql=sql,
            params=params,
        )

    def execute_many(
        self,
        *,
        sql: str,
        params_seq: typing.Sequence[typing.Sequence[typing.Any]],
    ) -> int | data.Error:
        return shared.execute_many(
            cur=self._cursor,
            sql=sql,
            params_seq=params_seq,
        )

    def fetch_all(
        self,
        *,
        sql: str,
        params: typing.Iterable[typing.Hashable] | None,
    ) -> data.ResultSet | data.Error:
        return shared.fetch_all(
            cur=self._cursor,
            sql=sql,
            params=params,
        )

    def truncate(self, *, table_name: str) -> None | data.Error:
        # sqlite has no TRUNCATE; an unqualified DELETE uses its truncate optimization
        result = shared.execute(cur=self._cursor, sql=f"DELETE FROM {table_name}", params=None)
        if isinstance(result, data.Error):
            return result

        return None
