import typing

import pyodbc

from dbdelta import data
from dbdelta.adapter.cursor import shared

__all__ = ("OdbcCursor",)


class OdbcCursor(data.Cursor):
    def __init__(self, *, cursor: pyodbc.Cursor):
        self._cursor: typing.Final[pyodbc.Cursor] = cursor

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
        result = shared.execute(cur=self._cursor, sql=f"TRUNCATE TABLE {table_name}", params=None)
        if isinstance(result, data.Error):
            return result

        return None
