from __future__ import annotations

import abc
import typing

if typing.TYPE_CHECKING:
    from dbdelta.data.assertion_result import DeltaAssertionResult, StateAssertionResult
    from dbdelta.data.data_set import DataSet
    from dbdelta.data.data_source import DataSource
    from dbdelta.data.error import Error

__all__ = ("Log",)


class Log(abc.ABC):
    """Reporting hook.

    Called with every query result, snapshot, setup operation and assertion result (passed or
    failed); each implementation decides what to write and how to render it.
    """

    @abc.abstractmethod
    def delta_assertion(self, /, result: DeltaAssertionResult) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def error(self, *, source: DataSource, error: Error) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def query(self, /, data_set: DataSet) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def setup(self, *, source: DataSource, operation: str, row_count: int, data_set: DataSet | None) -> None:
        """Called after rows were inserted into or deleted from ``source``."""
        raise NotImplementedError

    @abc.abstractmethod
    def snapshot(self, /, data_set: DataSet) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def state_assertion(self, /, result: StateAssertionResult) -> None:
        raise NotImplementedError
