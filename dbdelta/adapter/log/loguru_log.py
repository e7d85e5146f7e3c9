import json
import typing

from loguru import logger

from dbdelta import data
from dbdelta.adapter.render import render_data_set, render_source

__all__ = ("LoguruLog",)


class LoguruLog(data.Log):
    def __init__(self, *, config: data.Config):
        self._config: typing.Final[data.Config] = config

    def delta_assertion(self, /, result: data.DeltaAssertionResult) -> None:
        if not self._should_log_assertion(passed=result.passed):
            return

        report: dict[str, typing.Any] = {
            "data-source": render_source(result.expected_removed.source),
            "delta-assertion": {
                "expected": {
                    "old-data": render_data_set(result.expected_removed),
                    "new-data": render_data_set(result.expected_added),
                },
            },
        }
        if not result.passed:
            report["delta-assertion"]["errors"] = {
                "old-data": {
                    "expected": render_data_set(result.old_mismatch_expected),
                    "actual": render_data_set(result.old_mismatch_actual),
                },
                "new-data": {
                    "expected": render_data_set(result.new_mismatch_expected),
                    "actual": render_data_set(result.new_mismatch_actual),
                },
            }

        _write(kind="delta-assertion", summary=result.summary(), report=report, passed=result.passed)

    def error(self, *, source: data.DataSource, error: data.Error) -> None:
        logger.bind(kind="error", source=source.name).error(
            f"An error occurred while querying {source.name}: {error!s}"
        )

    def query(self, /, data_set: data.DataSet) -> None:
        if not self._config.log_queries:
            return

        report = {
            "data-source": render_source(data_set.source),
            "data-set": render_data_set(data_set),
        }
        _write(kind="query", summary=f"Queried {data_set.source.name}.", report=report, passed=True)

    def setup(
        self,
        *,
        source: data.DataSource,
        operation: str,
        row_count: int,
        data_set: data.DataSet | None,
    ) -> None:
        if not self._config.log_setup:
            return

        report: dict[str, typing.Any] = {
            "data-source": render_source(source),
            "setup": {"operation": operation, "count": row_count},
        }
        if data_set is not None:
            report["setup"]["data-set"] = render_data_set(data_set)

        _write(kind="setup", summary=f"Ran {operation} on {source.name}.", report=report, passed=True)

    def snapshot(self, /, data_set: data.DataSet) -> None:
        if not self._config.log_snapshots:
            return

        report = {
            "data-source": render_source(data_set.source),
            "data-set": render_data_set(data_set),
        }
        _write(kind="snapshot", summary=f"Took a snapshot of {data_set.source.name}.", report=report, passed=True)

    def state_assertion(self, /, result: data.StateAssertionResult) -> None:
        if not self._should_log_assertion(passed=result.passed):
            return

        report: dict[str, typing.Any] = {
            "data-source": render_source(result.actual.source),
            "assertion": {"expected": render_data_set(result.expected)},
        }
        if not result.passed:
            report["assertion"]["errors"] = {
                "expected": render_data_set(result.mismatch_expected),
                "actual": render_data_set(result.mismatch_actual),
            }

        _write(kind="state-assertion", summary=result.summary(), report=report, passed=result.passed)

    def _should_log_assertion(self, *, passed: bool) -> bool:
        if self._config.log_assertions:
            return True
        return not passed and self._config.log_assertion_errors


def _write(*, kind: str, summary: str, report: dict[str, typing.Any], passed: bool) -> None:
    bound = logger.bind(kind=kind, report=report)
    message = f"{summary}\n{json.dumps(report, indent=2, default=str)}"
    if passed:
        bound.info(message)
    else:
        bound.warning(message)
