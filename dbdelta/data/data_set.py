from __future__ import annotations

import collections
import itertools
import typing

from dbdelta.data.error import UsageError
from dbdelta.data.row import Row

if typing.TYPE_CHECKING:
    from dbdelta.data.data_source import DataSource

__all__ = ("DataSet",)


class DataSet:
    """Multiset of rows for a single data source.

    Insertion order is kept for reporting, but it plays no part in comparisons.
    Duplicate rows are significant: two identical rows count twice.
    """

    def __init__(self, source: DataSource, /, rows: typing.Iterable[Row] = ()):
        self._source: typing.Final[DataSource] = source
        self._rows: typing.Final[list[Row]] = []
        self._frozen = False
        for row in rows:
            self.add(row)

    @classmethod
    def _of_checked_rows(cls, source: DataSource, rows: list[Row], /) -> DataSet:
        ds = cls(source)
        ds._rows.extend(rows)
        return ds

    @property
    def source(self) -> DataSource:
        return self._source

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    @property
    def size(self) -> int:
        return len(self._rows)

    @property
    def is_empty(self) -> bool:
        return not self._rows

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> typing.Iterator[Row]:
        return iter(self._rows)

    def __repr__(self) -> str:
        frozen = ", frozen" if self._frozen else ""
        return f"DataSet(source={self._source.name!r}, size={len(self._rows)}{frozen})"

    def add(self, row: Row, /) -> DataSet:
        if self._frozen:
            raise UsageError.new(
                f"The data set for {self._source.name} is frozen, so rows cannot be added to it.",
                source=self._source.name,
            )

        if len(row) != self._source.column_count:
            raise UsageError.new(
                f"{self._source.name} has {self._source.column_count} columns, but the row has {len(row)} values.",
                source=self._source.name,
                row=row,
            )

        self._rows.append(row)
        return self

    def add_all(self, other: DataSet, /) -> DataSet:
        self._check_same_source(other, operation="add_all")
        for row in other:
            self.add(row)
        return self

    def row(self, *values: typing.Any) -> DataSet:
        """Add one row built from raw column values."""
        return self.add(self._source.make_row(values))

    def add_rows(self, *rows: typing.Sequence[typing.Any]) -> DataSet:
        for values in rows:
            self.row(*values)
        return self

    def freeze(self) -> DataSet:
        self._frozen = True
        return self

    def first(self, n: int, /) -> DataSet:
        self._check_slice_size(n)
        return DataSet._of_checked_rows(self._source, self._rows[:n])

    def last(self, n: int, /) -> DataSet:
        self._check_slice_size(n)
        return DataSet._of_checked_rows(self._source, self._rows[len(self._rows) - n :])

    def subtract(self, other: DataSet, /) -> DataSet:
        """Multiset difference.

        For every distinct row the result holds ``max(0, count in self - count in other)``
        copies, in the order they occur in ``self``.  Rows are grouped by hash, so the cost is
        linear in the total number of rows.
        """
        self._check_same_source(other, operation="subtract")

        remaining: collections.Counter[Row] = collections.Counter(other._rows)
        rows: list[Row] = []
        for row in self._rows:
            if remaining[row] > 0:
                remaining[row] -= 1
            else:
                rows.append(row)

        return DataSet._of_checked_rows(self._source, rows)

    def equals_as_multiset(self, other: DataSet, /) -> bool:
        if len(self._rows) != len(other._rows):
            self._check_same_source(other, operation="equals_as_multiset")
            return False

        return self.subtract(other).is_empty and other.subtract(self).is_empty

    @staticmethod
    def join(*data_sets: DataSet) -> DataSet:
        if not data_sets:
            raise UsageError.new("At least one data set is required to join.")

        first = data_sets[0]
        for ds in data_sets[1:]:
            first._check_same_source(ds, operation="join")

        return DataSet._of_checked_rows(
            first.source,
            list(itertools.chain.from_iterable(ds._rows for ds in data_sets)),
        )

    def _check_same_source(self, other: DataSet, /, *, operation: str) -> None:
        if other._source is not self._source:
            raise UsageError.new(
                f"Cannot {operation} data sets from different data sources, {self._source.name} and "
                f"{other._source.name}.",
                operation=operation,
                source=self._source.name,
                other_source=other._source.name,
            )

    def _check_slice_size(self, n: int, /) -> None:
        if n < 0 or n > len(self._rows):
            raise UsageError.new(
                f"n must be between 0 and {len(self._rows)}, but got {n}.",
                source=self._source.name,
                n=n,
            )
