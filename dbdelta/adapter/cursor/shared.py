import typing

from dbdelta import data

__all__ = (
    "execute",
    "execute_many",
    "fetch_all",
    "query_errors",
)


class DbApiCursor(typing.Protocol):
    description: typing.Any
    rowcount: int

    def execute(self, sql: str, *args: typing.Any) -> typing.Any: ...

    def executemany(self, sql: str, params_seq: typing.Any) -> typing.Any: ...

    def fetchall(self) -> typing.Sequence[typing.Sequence[typing.Any]]: ...


def execute(
    *,
    cur: DbApiCursor,
    sql: str,
    params: typing.Iterable[typing.Hashable] | None,
) -> int | data.Error:
    try:
        if errors := query_errors(sql=sql):
            return data.Error.new(
                "\n".join(errors),
                sql=sql,
                params=None if params is None else tuple(params),
            )

        if params:
            cur.execute(sql, list(params))
        else:
            cur.execute(sql)

        return cur.rowcount
    except Exception as e:
        return data.Error.new(
            str(e),
            sql=sql,
            params=None if params is None else tuple(params),
        )


def execute_many(
    *,
    cur: DbApiCursor,
    sql: str,
    params_seq: typing.Sequence[typing.Sequence[typing.Any]],
) -> int | data.Error:
    try:
        if errors := query_errors(sql=sql):
            return data.Error.new("\n".join(errors), sql=sql)

        if not params_seq:
            return 0

        cur.executemany(sql, [list(params) for params in params_seq])

        return cur.rowcount
    except Exception as e:
        return data.Error.new(str(e), sql=sql, rows=len(params_seq))


def fetch_all(
    *,
    cur: DbApiCursor,
    sql: str,
    params: typing.Iterable[typing.Hashable] | None,
) -> data.ResultSet | data.Error:
    try:
        if errors := query_errors(sql=sql):
            return data.Error.new(
                "\n".join(errors),
                sql=sql,
                params=None if params is None else tuple(params),
            )

        if params:
            cur.execute(sql, list(params))
        else:
            cur.execute(sql)

        if cur.description is None:
            return data.Error.new("The statement did not return a result set.", sql=sql)

        column_labels = tuple(str(col[0]) for col in cur.description)
        rows = tuple(tuple(row) for row in cur.fetchall())

        return data.ResultSet(column_labels=column_labels, rows=rows)
    except Exception as e:
        return data.Error.new(
            str(e),
            sql=sql,
            params=None if params is None else tuple(params),
        )


def query_errors(*, sql: str) -> list[str]:
    errors: list[str] = []

    if not sql.strip():
        errors.append("sql is empty.")

    if ";" in sql.strip().rstrip(";"):
        errors.append("Only a single statement is allowed per query.")

    return errors
