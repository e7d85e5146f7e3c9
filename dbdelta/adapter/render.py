"""Render data sets and sources as plain, json-friendly structures for logging.

Large content is shown by digest and length only, bytes as hex strings and
nulls as ``None``.
"""

import datetime
import decimal
import typing
import uuid

from dbdelta import data

__all__ = ("render_data_set", "render_source", "render_value")


def render_value(value: data.Value, /) -> typing.Any:
    match value:
        case data.Null():
            return None
        case data.Digest(kind=kind, hexdigest=hexdigest, length=length):
            return {"kind": kind, "digest": hexdigest, "length": length}
        case data.Scalar(value=v):
            return _render_scalar(v)
        case _:
            raise data.InternalError.new(f"Unrecognized value type: {type(value).__name__}.")


def render_data_set(data_set: data.DataSet, /) -> dict[str, typing.Any]:
    labels = data_set.source.column_labels
    return {
        "count": data_set.size,
        "rows": [
            {label: render_value(v) for label, v in zip(labels, row)}
            for row in data_set
        ],
    }


def render_source(source: data.DataSource, /) -> dict[str, typing.Any]:
    return {
        "name": source.name,
        "type": source.__class__.__name__,
        "sql": source.sql,
        "columns": [
            {"index": ix, "label": col.name, "data-type": col.data_type.name}
            for ix, col in enumerate(source.columns, start=1)
        ],
    }


def _render_scalar(v: typing.Any, /) -> typing.Any:
    if v is data.NaN:
        return "NaN"

    if isinstance(v, bytes):
        return v.hex()

    if isinstance(v, (datetime.date, datetime.time)):
        return v.isoformat()

    if isinstance(v, (decimal.Decimal, uuid.UUID)):
        return str(v)

    if isinstance(v, data.FrozenDict):
        return {k: _render_scalar(item) for k, item in v.items()}

    if isinstance(v, (tuple, frozenset)):
        return [_render_scalar(item) for item in v]

    if v is None or isinstance(v, (bool, int, float, str)):
        return v

    return str(v)
