from dbdelta import data
from dbdelta.service.snapshot import compute_delta, query

__all__ = (
    "assert_changed",
    "assert_data_set_equals",
    "assert_deleted",
    "assert_empty",
    "assert_inserted",
    "assert_no_changes",
    "assert_state",
    "assert_unchanged",
    "evaluate_delta_assertion",
    "evaluate_state_assertion",
)


def evaluate_delta_assertion(
    expected_removed: data.DataSet,
    expected_added: data.DataSet,
    /,
) -> data.DeltaAssertionResult:
    """Compute the delta of the shared source and compare it with the expected removed and added rows.

    The result is passed to the reporting hook whether or not it passed; the snapshot is replaced
    by the current state.
    """
    source = _shared_source(expected_removed, expected_added)

    delta = compute_delta(source)
    result = data.evaluate_delta_assertion(
        delta=delta,
        expected_removed=expected_removed,
        expected_added=expected_added,
    )

    source.db.log.delta_assertion(result)

    return result


def evaluate_state_assertion(expected: data.DataSet, /) -> data.StateAssertionResult:
    """Compare the current state of the source with ``expected``.  The snapshot is not touched."""
    source = expected.source
    actual = query(source)
    result = data.evaluate_state_assertion(expected=expected, actual=actual)

    source.db.log.state_assertion(result)

    return result


def assert_changed(pre: data.DataSet, post: data.DataSet, /) -> None:
    """Assert that exactly ``pre`` was removed and exactly ``post`` was added since the last snapshot."""
    _check(evaluate_delta_assertion(pre, post))


def assert_deleted(removed: data.DataSet, /) -> None:
    _check(evaluate_delta_assertion(removed, removed.source.empty()))


def assert_inserted(added: data.DataSet, /) -> None:
    _check(evaluate_delta_assertion(added.source.empty(), added))


def assert_no_changes(source: data.DataSource, /) -> None:
    empty = source.empty()
    _check(evaluate_delta_assertion(empty, empty))


def assert_unchanged(source: data.DataSource, /) -> None:
    """Like ``assert_no_changes``, but on success the source is marked as unchanged."""
    empty = source.empty()
    result = evaluate_delta_assertion(empty, empty)
    _check(result)
    source.tracker.mark_unchanged()


def assert_state(expected: data.DataSet, /) -> None:
    _check(evaluate_state_assertion(expected))


def assert_empty(source: data.DataSource, /) -> None:
    _check(evaluate_state_assertion(source.empty()))


def assert_data_set_equals(expected: data.DataSet, actual: data.DataSet, /) -> None:
    """Compare two data sets of the same source as multisets, without querying the database."""
    result = data.evaluate_state_assertion(expected=expected, actual=actual)

    actual.source.db.log.state_assertion(result)

    _check(result)


def _check(result: data.AssertionResult, /) -> None:
    source = _result_source(result)
    source.tracker.mark_changed()

    if not result.passed:
        raise data.DatabaseAssertionError(result.summary(), result=result)


def _result_source(result: data.AssertionResult, /) -> data.DataSource:
    if isinstance(result, data.DeltaAssertionResult):
        return result.expected_removed.source
    return result.actual.source


def _shared_source(a: data.DataSet, b: data.DataSet, /) -> data.DataSource:
    if a.source is not b.source:
        raise data.UsageError.new(
            f"The expected data sets belong to different data sources, {a.source.name} and {b.source.name}.",
            source=a.source.name,
            other_source=b.source.name,
        )
    return a.source
