from __future__ import annotations

import abc
import typing

from dbdelta.data.column import Column
from dbdelta.data.data_set import DataSet
from dbdelta.data.error import ExecutionError, UsageError
from dbdelta.data.result_set import ResultSet
from dbdelta.data.row import Row
from dbdelta.data.snapshot_tracker import SnapshotTracker

if typing.TYPE_CHECKING:
    from dbdelta.data.database import Database

__all__ = ("DataSource", "Query", "Table")


class DataSource(abc.ABC):
    """A named origin of rows (a table or a query) with a fixed column layout.

    When no columns are declared, the labels are taken from the first result set; in that case
    every column is compared as an ordinary value.
    """

    def __init__(
        self,
        *,
        db: Database,
        columns: typing.Iterable[Column | str] | None,
        params: typing.Iterable[typing.Hashable] | None,
    ):
        self._db: typing.Final[Database] = db
        self._columns: tuple[Column, ...] | None = None
        if columns is not None:
            self._columns = tuple(Column(c) if isinstance(c, str) else c for c in columns)
            if not self._columns:
                raise UsageError.new(f"At least one column is required for {self.name}.", source=self.name)
        self._params: typing.Final[tuple[typing.Hashable, ...]] = tuple(params or ())
        self._tracker: typing.Final[SnapshotTracker] = SnapshotTracker(source_name=self.name)
        self._empty: DataSet | None = None

    @property
    @abc.abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def sql(self) -> str:
        raise NotImplementedError

    @property
    def db(self) -> Database:
        return self._db

    @property
    def params(self) -> tuple[typing.Hashable, ...]:
        return self._params

    @property
    def tracker(self) -> SnapshotTracker:
        return self._tracker

    @property
    def columns(self) -> tuple[Column, ...]:
        if self._columns is None:
            result = self._fetch()
            self._set_columns(result.column_labels)
        return typing.cast(tuple[Column, ...], self._columns)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def column_labels(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def column_name(self, /, ix: int) -> str:
        columns = self.columns
        if ix < 0 or ix >= len(columns):
            raise UsageError.new(f"Invalid column index: {ix}.", source=self.name, ix=ix)
        return columns[ix].name

    def data(self) -> DataSet:
        return DataSet(self)

    def empty(self) -> DataSet:
        if self._empty is None:
            self._empty = DataSet(self).freeze()
        return self._empty

    def make_row(self, values: typing.Sequence[typing.Any], /) -> Row:
        columns = self.columns
        if len(values) != len(columns):
            raise UsageError.new(
                f"{self.name} has {len(columns)} columns, but {len(values)} values were provided.",
                source=self.name,
                values=tuple(values),
            )

        return Row.of(
            values,
            digester=self._db.digester,
            data_types=tuple(c.data_type for c in columns),
        )

    def execute_query(self) -> DataSet:
        result = self._fetch()

        if self._columns is None:
            self._set_columns(result.column_labels)
        elif len(result.column_labels) != len(self._columns):
            error = ExecutionError.new(
                f"The query for {self.name} returned {len(result.column_labels)} columns, but "
                f"{len(self._columns)} were declared.",
                source=self.name,
                sql=self.sql,
                labels=result.column_labels,
            )
            self._db.log.error(source=self, error=error)
            raise error

        return DataSet(self, (self.make_row(row) for row in result.rows))

    def _fetch(self) -> ResultSet:
        """Run the source's query; failures are reported to the log and raised with the source name."""
        try:
            return self._db.fetch(sql=self.sql, params=self._params)
        except ExecutionError as e:
            error = ExecutionError.wrap(e, source=self.name)
            self._db.log.error(source=self, error=error)
            raise error from e

    def _set_columns(self, labels: typing.Iterable[str], /) -> None:
        self._columns = tuple(Column(label) for label in labels)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class Table(DataSource):
    def __init__(
        self,
        *,
        db: Database,
        name: str,
        columns: typing.Iterable[Column | str] | None = None,
    ):
        self._table_name: typing.Final[str] = name

        super().__init__(db=db, columns=columns, params=None)

    @property
    def name(self) -> str:
        return self._table_name

    @property
    def sql(self) -> str:
        if self._columns is None:
            return f"SELECT * FROM {self._table_name}"
        return f"SELECT {', '.join(c.name for c in self._columns)} FROM {self._table_name}"


class Query(DataSource):
    def __init__(
        self,
        *,
        db: Database,
        sql: str,
        params: typing.Iterable[typing.Hashable] | None = None,
        columns: typing.Iterable[Column | str] | None = None,
        name: str | None = None,
    ):
        self._sql: typing.Final[str] = sql
        self._query_name: typing.Final[str] = name or sql

        super().__init__(db=db, columns=columns, params=params)

    @property
    def name(self) -> str:
        return self._query_name

    @property
    def sql(self) -> str:
        return self._sql
