from __future__ import annotations

import inspect
import pathlib
import typing

if typing.TYPE_CHECKING:
    from dbdelta.data.assertion_result import AssertionResult

__all__ = (
    "DatabaseAssertionError",
    "Error",
    "ExecutionError",
    "InternalError",
    "UsageError",
)

_E = typing.TypeVar("_E", bound="Error")


class Error(Exception):
    """Base class for errors occurring in the dbdelta codebase"""

    def __init__(
        self,
        *,
        error_message: str,
        file: str | None = None,
        fn: str | None = None,
        fn_args: tuple[tuple[str, typing.Any], ...] = (),
    ):
        super().__init__(error_message)

        self.error_message: typing.Final[str] = error_message
        self.file: typing.Final[str | None] = file
        self.fn: typing.Final[str | None] = fn
        self.fn_args: typing.Final[tuple[tuple[str, typing.Any], ...]] = fn_args

    @classmethod
    def new(cls: type[_E], error_message: str, /, **fn_args: typing.Any) -> _E:
        file: str | None = None
        fn: str | None = None

        frame = inspect.currentframe()
        if frame is not None and frame.f_back is not None:
            file = pathlib.Path(frame.f_back.f_code.co_filename).name
            fn = frame.f_back.f_code.co_name
        del frame

        return cls(
            error_message=error_message,
            file=file,
            fn=fn,
            fn_args=tuple(fn_args.items()),
        )

    @classmethod
    def wrap(cls: type[_E], error: Error, /, **fn_args: typing.Any) -> _E:
        """Re-raise an adapter-level error as a more specific kind, keeping its origin."""
        return cls(
            error_message=error.error_message,
            file=error.file,
            fn=error.fn,
            fn_args=error.fn_args + tuple(fn_args.items()),
        )

    def __str__(self) -> str:
        if self.fn_args:
            args = ", ".join(f"{k}={v!r}" for k, v in self.fn_args)
            return f"{self.error_message} [{self.fn}({args})]"
        return self.error_message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(error_message={self.error_message!r}, "
            f"file={self.file!r}, fn={self.fn!r}, fn_args={self.fn_args!r})"
        )


class UsageError(Error):
    """The caller misused the api (no snapshot taken, mismatched sources, frozen data set, ...)."""


class ExecutionError(Error):
    """A query or connection failed while talking to the database."""


class InternalError(Error):
    """A collaborator malfunctioned, e.g. a stream could not be read while digesting it."""


class DatabaseAssertionError(AssertionError):
    def __init__(self, message: str, *, result: AssertionResult):
        super().__init__(message)

        self.result: typing.Final[AssertionResult] = result
