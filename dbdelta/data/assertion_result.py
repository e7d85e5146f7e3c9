from __future__ import annotations

import typing

import pydantic

from dbdelta.data.data_set import DataSet
from dbdelta.data.delta_result import DeltaResult

__all__ = (
    "AssertionResult",
    "DeltaAssertionResult",
    "Mismatch",
    "StateAssertionResult",
)

_CONFIG: typing.Final = pydantic.ConfigDict(arbitrary_types_allowed=True)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=_CONFIG)
class Mismatch:
    expected: DataSet
    """Rows that were expected but not found."""

    actual: DataSet
    """Rows that were found but not expected."""

    @property
    def is_empty(self) -> bool:
        return self.expected.is_empty and self.actual.is_empty


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=_CONFIG)
class DeltaAssertionResult:
    delta: DeltaResult
    expected_removed: DataSet
    expected_added: DataSet
    old_data: Mismatch
    new_data: Mismatch

    @property
    def passed(self) -> bool:
        return self.old_data.is_empty and self.new_data.is_empty

    @property
    def old_mismatch_expected(self) -> DataSet:
        return self.old_data.expected

    @property
    def old_mismatch_actual(self) -> DataSet:
        return self.old_data.actual

    @property
    def new_mismatch_expected(self) -> DataSet:
        return self.new_data.expected

    @property
    def new_mismatch_actual(self) -> DataSet:
        return self.new_data.actual

    def summary(self) -> str:
        if self.passed:
            return f"The delta for {self.expected_removed.source.name} matched."

        return (
            f"The delta for {self.expected_removed.source.name} did not match: "
            f"{self.old_mismatch_expected.size} row(s) expected to be removed were not, "
            f"{self.old_mismatch_actual.size} row(s) were removed unexpectedly, "
            f"{self.new_mismatch_expected.size} row(s) expected to be added were not, and "
            f"{self.new_mismatch_actual.size} row(s) were added unexpectedly."
        )


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=_CONFIG)
class StateAssertionResult:
    expected: DataSet
    actual: DataSet
    errors: Mismatch

    @property
    def passed(self) -> bool:
        return self.errors.is_empty

    @property
    def mismatch_expected(self) -> DataSet:
        return self.errors.expected

    @property
    def mismatch_actual(self) -> DataSet:
        return self.errors.actual

    def summary(self) -> str:
        if self.passed:
            return f"The state of {self.actual.source.name} matched."

        return (
            f"The state of {self.actual.source.name} did not match: "
            f"{self.mismatch_expected.size} expected row(s) were missing and "
            f"{self.mismatch_actual.size} row(s) were not expected."
        )


AssertionResult: typing.TypeAlias = DeltaAssertionResult | StateAssertionResult
