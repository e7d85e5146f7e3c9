"""Tagged column values.

Every raw column value is converted once into one of three variants:

* ``Null`` for SQL NULL,
* ``Scalar`` for ordinary values (numbers, text, temporal values, booleans,
  UUIDs, fixed-size byte strings, arrays and JSON documents), normalized so
  that equality is total and symmetric,
* ``Digest`` for large sequential content (BLOB/CLOB columns, ``Lob`` values
  and file-like streams), represented by a streamed digest plus length.
"""

from __future__ import annotations

import dataclasses
import decimal
import io
import math
import pathlib
import typing

from dbdelta.data.data_type import DataType
from dbdelta.data.digest import Digester, DigestKind, StreamDigest
from dbdelta.data.error import InternalError, UsageError
from dbdelta.data.frozen_dict import FrozenDict

__all__ = (
    "Digest",
    "Lob",
    "NULL",
    "NaN",
    "Null",
    "Scalar",
    "Value",
    "to_value",
    "values_equal",
)


@dataclasses.dataclass(frozen=True, slots=True)
class Null:
    def __repr__(self) -> str:
        return "NULL"


NULL: typing.Final[Null] = Null()


@dataclasses.dataclass(frozen=True, slots=True)
class _NaN:
    def __repr__(self) -> str:
        return "NaN"


# every NaN (float or Decimal) normalizes to this marker so a value always equals itself
NaN: typing.Final[_NaN] = _NaN()


@dataclasses.dataclass(frozen=True, slots=True)
class Scalar:
    value: typing.Hashable

    def __repr__(self) -> str:
        return repr(self.value)


@dataclasses.dataclass(frozen=True, slots=True)
class Digest:
    kind: DigestKind
    hexdigest: str
    length: int

    def __repr__(self) -> str:
        return f"{self.kind}(digest={self.hexdigest}, length={self.length})"


Value: typing.TypeAlias = Null | Scalar | Digest


class Lob:
    """Large object supplied by test code or a driver.

    The content is only ever reached through ``open()``, which must return a
    fresh binary or text stream each time it is called.
    """

    def __init__(self, open_stream: typing.Callable[[], typing.IO[typing.Any]], /):
        self._open_stream: typing.Final = open_stream

    @classmethod
    def from_bytes(cls, content: bytes, /) -> Lob:
        return cls(lambda: io.BytesIO(content))

    @classmethod
    def from_text(cls, content: str, /) -> Lob:
        return cls(lambda: io.StringIO(content))

    @classmethod
    def from_file(cls, path: pathlib.Path, /, *, text: bool = False) -> Lob:
        if text:
            return cls(lambda: path.open("r", encoding="utf-8"))
        return cls(lambda: path.open("rb"))

    def open(self) -> typing.IO[typing.Any]:
        return self._open_stream()


def to_value(
    raw: typing.Any,
    /,
    *,
    digester: Digester,
    data_type: DataType = DataType.Unknown,
) -> Value:
    if raw is None:
        return NULL

    if isinstance(raw, (Null, Scalar, Digest)):
        return raw

    if isinstance(raw, Lob):
        try:
            fh = raw.open()
        except OSError as e:
            raise InternalError.new(
                f"An error occurred while opening a large object to digest it: {e!s}",
                algorithm=digester.algorithm,
            ) from e

        with fh:
            return _digest(digester.digest_stream(fh))

    if hasattr(raw, "read"):
        return _digest(digester.digest_stream(raw))

    if data_type.is_large_object:
        if isinstance(raw, str):
            return _digest(digester.digest_text(raw))

        if isinstance(raw, (bytes, bytearray, memoryview)):
            return _digest(digester.digest_bytes(raw))

    return Scalar(_normalize(raw))


def values_equal(a: Value, b: Value, /) -> bool:
    match a, b:
        case Null(), Null():
            return True
        case (Null(), _) | (_, Null()):
            return False
        case Scalar(value=x), Scalar(value=y):
            return bool(x == y)
        case Digest(), Digest():
            return a.kind == b.kind and a.length == b.length and a.hexdigest == b.hexdigest
        case _:
            return False


def _digest(d: StreamDigest, /) -> Digest:
    return Digest(kind=d.kind, hexdigest=d.hexdigest, length=d.length)


def _normalize(raw: typing.Any, /) -> typing.Hashable:
    if isinstance(raw, float) and math.isnan(raw):
        return NaN

    if isinstance(raw, decimal.Decimal) and raw.is_nan():
        return NaN

    if isinstance(raw, (bytearray, memoryview)):
        return bytes(raw)

    if isinstance(raw, (list, tuple)):
        return tuple(_normalize(item) for item in raw)

    if isinstance(raw, (set, frozenset)):
        return frozenset(_normalize(item) for item in raw)

    if isinstance(raw, dict):
        return FrozenDict({str(k): _normalize(v) for k, v in raw.items()})

    try:
        hash(raw)
    except TypeError:
        raise UsageError.new(
            f"Column values of type {type(raw).__name__} are not supported.",
            value_type=type(raw).__name__,
        )

    return typing.cast(typing.Hashable, raw)
