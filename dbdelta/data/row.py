from __future__ import annotations

import typing

from dbdelta.data.data_type import DataType
from dbdelta.data.digest import Digester
from dbdelta.data.error import UsageError
from dbdelta.data.value import Digest, Null, Scalar, Value, to_value, values_equal

__all__ = ("Row",)


class Row:
    """Immutable, ordered tuple of column values."""

    __slots__ = ("_values", "_hash")

    def __init__(self, values: typing.Iterable[Value], /):
        vals = tuple(values)
        for ix, v in enumerate(vals):
            if not isinstance(v, (Null, Scalar, Digest)):
                raise UsageError.new(
                    f"Row values must be Null, Scalar or Digest instances, but the value at position {ix} "
                    f"is of type {type(v).__name__}.  Use Row.of to convert raw values.",
                    position=ix,
                )

        object.__setattr__(self, "_values", vals)
        object.__setattr__(self, "_hash", hash(vals))

    @classmethod
    def of(
        cls,
        raw_values: typing.Iterable[typing.Any],
        /,
        *,
        digester: Digester,
        data_types: typing.Sequence[DataType] | None = None,
    ) -> Row:
        raw = tuple(raw_values)
        if data_types is None:
            return cls(to_value(v, digester=digester) for v in raw)

        if len(data_types) != len(raw):
            raise UsageError.new(
                f"Expected {len(data_types)} values, but got {len(raw)}.",
                expected=len(data_types),
                actual=len(raw),
            )

        return cls(to_value(v, digester=digester, data_type=dt) for v, dt in zip(raw, data_types))

    @property
    def values(self) -> tuple[Value, ...]:
        return self._values

    def __setattr__(self, key: str, value: typing.Any) -> typing.NoReturn:
        raise AttributeError(f"{self.__class__.__name__} is immutable.")

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> typing.Iterator[Value]:
        return iter(self._values)

    def __getitem__(self, ix: int) -> Value:
        return self._values[ix]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented

        if self._hash != other._hash or len(self._values) != len(other._values):
            return False

        return all(values_equal(a, b) for a, b in zip(self._values, other._values))

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"Row({', '.join(repr(v) for v in self._values)})"
