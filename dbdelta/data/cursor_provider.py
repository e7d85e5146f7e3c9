import abc
import contextlib
import typing

from dbdelta.data.cursor import Cursor
from dbdelta.data.error import Error

__all__ = ("CursorProvider",)


class CursorProvider(abc.ABC):
    @contextlib.contextmanager
    @abc.abstractmethod
    def open(self) -> typing.Generator[Cursor | Error, None, None]:
        raise NotImplementedError
