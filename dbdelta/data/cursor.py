import abc
import typing

from dbdelta.data.error import Error
from dbdelta.data.result_set import ResultSet

__all__ = ("Cursor",)


class Cursor(abc.ABC):
    @property
    @abc.abstractmethod
    def placeholder(self) -> str:
        """Parameter marker used by the driver, e.g. ``?`` or ``%s``."""
        raise NotImplementedError

    @abc.abstractmethod
    def execute(
        self,
        *,
        sql: str,
        params: typing.Iterable[typing.Hashable] | None,
    ) -> int | Error:
        """Run a statement, returning the driver's row count (-1 when unknown)."""
        raise NotImplementedError

    @abc.abstractmethod
    def execute_many(
        self,
        *,
        sql: str,
        params_seq: typing.Sequence[typing.Sequence[typing.Any]],
    ) -> int | Error:
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_all(
        self,
        *,
        sql: str,
        params: typing.Iterable[typing.Hashable] | None,
    ) -> ResultSet | Error:
        raise NotImplementedError

    @abc.abstractmethod
    def truncate(self, *, table_name: str) -> None | Error:
        raise NotImplementedError
