from dbdelta.data.assertion_result import DeltaAssertionResult, Mismatch, StateAssertionResult
from dbdelta.data.data_set import DataSet
from dbdelta.data.delta_result import DeltaResult
from dbdelta.data.error import UsageError

__all__ = ("evaluate_delta_assertion", "evaluate_state_assertion")


def evaluate_delta_assertion(
    *,
    delta: DeltaResult,
    expected_removed: DataSet,
    expected_added: DataSet,
) -> DeltaAssertionResult:
    for expected in (expected_removed, expected_added):
        if expected.source is not delta.removed.source:
            raise UsageError.new(
                f"The expected data set is for {expected.source.name}, but the delta is for "
                f"{delta.removed.source.name}.",
                expected_source=expected.source.name,
                delta_source=delta.removed.source.name,
            )

    return DeltaAssertionResult(
        delta=delta,
        expected_removed=expected_removed,
        expected_added=expected_added,
        old_data=Mismatch(
            expected=expected_removed.subtract(delta.removed).freeze(),
            actual=delta.removed.subtract(expected_removed).freeze(),
        ),
        new_data=Mismatch(
            expected=expected_added.subtract(delta.added).freeze(),
            actual=delta.added.subtract(expected_added).freeze(),
        ),
    )


def evaluate_state_assertion(*, expected: DataSet, actual: DataSet) -> StateAssertionResult:
    if expected.source is not actual.source:
        raise UsageError.new(
            f"The expected data set is for {expected.source.name}, but the actual data set is for "
            f"{actual.source.name}.",
            expected_source=expected.source.name,
            actual_source=actual.source.name,
        )

    return StateAssertionResult(
        expected=expected,
        actual=actual,
        errors=Mismatch(
            expected=expected.subtract(actual).freeze(),
            actual=actual.subtract(expected).freeze(),
        ),
    )
