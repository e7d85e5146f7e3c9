"""Database setup: put a table into a known state before exercising the code under test."""

import typing

from loguru import logger

from dbdelta import data

__all__ = ("delete_all", "insert", "populate", "populate_if_changed", "truncate")

_R = typing.TypeVar("_R")


def insert(data_set: data.DataSet, /) -> int:
    """Insert the rows of ``data_set`` into its table, returning the number of rows inserted."""
    table = _table(data_set.source)
    params_seq = _parameters(table, data_set)
    labels = table.column_labels

    with table.db.cursor(source=table.name) as cur:
        _insert(cur, table=table, labels=labels, params_seq=params_seq)

    table.tracker.mark_changed()

    table.db.log.setup(source=table, operation="insert", row_count=data_set.size, data_set=data_set)

    return data_set.size


def populate(data_set: data.DataSet, /) -> int:
    """Replace the contents of the table with ``data_set``.

    The delete and the insert commit together.  The data set becomes the table's snapshot and
    the table is marked as unchanged, so a later ``populate_if_changed`` can skip the work when
    nothing touched the table in between.
    """
    table = _table(data_set.source)
    params_seq = _parameters(table, data_set)
    labels = table.column_labels

    with table.db.cursor(source=table.name) as cur:
        deleted = _check(cur.execute(sql=f"DELETE FROM {table.name}", params=None), table=table)
        _insert(cur, table=table, labels=labels, params_seq=params_seq)

    table.tracker.replace(data_set)
    table.tracker.mark_unchanged()
    logger.debug(f"Populated {table.name} with {data_set.size} row(s), replacing {deleted} row(s).")

    table.db.log.setup(source=table, operation="populate", row_count=data_set.size, data_set=data_set)

    return data_set.size


def populate_if_changed(data_set: data.DataSet, /) -> bool:
    """Populate the table unless it is known to be unchanged since it was last populated or verified."""
    if not data_set.source.tracker.changed:
        logger.debug(f"Skipped populating {data_set.source.name}, as it is unchanged.")
        return False

    populate(data_set)
    return True


def delete_all(
    table: data.Table,
    /,
    *,
    where: str | None = None,
    params: typing.Iterable[typing.Hashable] | None = None,
) -> int:
    """Delete every row of ``table``, or the rows matching ``where``.  Returns the driver's row count."""
    _table(table)

    sql = f"DELETE FROM {table.name}"
    if where:
        sql += f" WHERE {where}"

    deleted = table.db.execute(sql=sql, params=params)
    table.tracker.mark_changed()

    table.db.log.setup(source=table, operation="delete", row_count=deleted, data_set=None)

    return deleted


def truncate(table: data.Table, /) -> None:
    _table(table)

    with table.db.cursor(source=table.name) as cur:
        _check(cur.truncate(table_name=table.name), table=table)

    table.tracker.mark_changed()

    table.db.log.setup(source=table, operation="truncate", row_count=-1, data_set=None)


def _insert(
    cur: data.Cursor,
    /,
    *,
    table: data.Table,
    labels: tuple[str, ...],
    params_seq: list[tuple[typing.Any, ...]],
) -> None:
    markers = ", ".join([cur.placeholder] * len(labels))
    sql = f"INSERT INTO {table.name} ({', '.join(labels)}) VALUES ({markers})"

    _check(cur.execute_many(sql=sql, params_seq=params_seq), table=table)


def _parameters(table: data.Table, data_set: data.DataSet, /) -> list[tuple[typing.Any, ...]]:
    return [tuple(_parameter(table, v) for v in row) for row in data_set]


def _parameter(table: data.Table, value: data.Value, /) -> typing.Any:
    match value:
        case data.Null():
            return None
        case data.Scalar(value=v) if v is data.NaN:
            return float("nan")
        case data.Scalar(value=data.FrozenDict() as v):
            return dict(v)
        case data.Scalar(value=v):
            return v
        case data.Digest():
            raise data.UsageError.new(
                f"Large object values are only kept as digests, so they cannot be inserted into {table.name}.",
                source=table.name,
            )
        case _:
            raise data.InternalError.new(f"Unrecognized value type: {type(value).__name__}.")


def _check(result: _R | data.Error, /, *, table: data.Table) -> _R:
    if isinstance(result, data.Error):
        raise data.ExecutionError.wrap(result, source=table.name)
    return result


def _table(source: data.DataSource, /) -> data.Table:
    if not isinstance(source, data.Table):
        raise data.UsageError.new(
            f"Setup operations need a table, but {source.name} is a {source.__class__.__name__}.",
            source=source.name,
        )
    return source
