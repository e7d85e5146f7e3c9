import json
import pathlib
import typing

import pytest
from loguru import logger

from dbdelta import adapter, data


@pytest.fixture(scope="function")
def records_fixture() -> typing.Generator[list[typing.Any], None, None]:
    records: list[typing.Any] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


def _reports(records: list[typing.Any]) -> list[typing.Any]:
    return [r for r in records if "report" in r["extra"]]


def _state_results(table: data.Table, users) -> tuple[data.StateAssertionResult, data.StateAssertionResult]:
    actual = table.data().add_rows(*users[:2])
    passed = data.evaluate_state_assertion(expected=table.data().add_rows(*users[:2]), actual=actual)
    failed = data.evaluate_state_assertion(expected=table.data().add_rows(users[0], users[2]), actual=actual)
    return passed, failed


def test_only_failed_assertions_are_logged_by_default(
    records_fixture: list[typing.Any], users_table_fixture: data.Table, users_fixture
):
    log = adapter.log.LoguruLog(config=data.Config())
    passed, failed = _state_results(users_table_fixture, users_fixture)

    log.state_assertion(passed)
    assert not _reports(records_fixture)

    log.state_assertion(failed)
    reports = _reports(records_fixture)
    assert len(reports) == 1
    assert reports[0]["level"].name == "WARNING"

    report = reports[0]["extra"]["report"]
    assert report["data-source"]["name"] == "users"
    assert report["data-source"]["columns"][0] == {"index": 1, "label": "login", "data-type": "Unknown"}
    assert report["assertion"]["errors"]["expected"]["rows"] == [
        {"login": "user3", "name": "User 3", "password": "pass3", "created": "2016-01-03"}
    ]
    assert report["assertion"]["errors"]["actual"]["count"] == 1


def test_log_assertions_includes_passed_results(
    records_fixture: list[typing.Any], users_table_fixture: data.Table, users_fixture
):
    log = adapter.log.LoguruLog(config=data.Config(log_assertions=True))
    passed, _ = _state_results(users_table_fixture, users_fixture)

    log.state_assertion(passed)

    reports = _reports(records_fixture)
    assert len(reports) == 1
    assert reports[0]["level"].name == "INFO"
    assert "errors" not in reports[0]["extra"]["report"]["assertion"]


def test_assertion_errors_can_be_silenced(
    records_fixture: list[typing.Any], users_table_fixture: data.Table, users_fixture
):
    log = adapter.log.LoguruLog(config=data.Config(log_assertion_errors=False))
    _, failed = _state_results(users_table_fixture, users_fixture)

    log.state_assertion(failed)

    assert not _reports(records_fixture)


def test_delta_assertion_report(
    records_fixture: list[typing.Any], users_table_fixture: data.Table, users_fixture
):
    log = adapter.log.LoguruLog(config=data.Config())
    delta = data.classify_delta(
        old=users_table_fixture.data().add_rows(*users_fixture[:2]),
        new=users_table_fixture.data().add_rows(users_fixture[0]),
    )
    result = data.evaluate_delta_assertion(
        delta=delta,
        expected_removed=users_table_fixture.empty(),
        expected_added=users_table_fixture.empty(),
    )

    log.delta_assertion(result)

    (record,) = _reports(records_fixture)
    errors = record["extra"]["report"]["delta-assertion"]["errors"]
    assert errors["old-data"]["actual"]["count"] == 1
    assert errors["old-data"]["expected"]["count"] == 0
    assert errors["new-data"]["actual"]["count"] == 0


def test_queries_and_snapshots_are_optional(
    records_fixture: list[typing.Any], users_table_fixture: data.Table, users_fixture
):
    ds = users_table_fixture.data().add_rows(*users_fixture)

    quiet = adapter.log.LoguruLog(config=data.Config())
    quiet.query(ds)
    quiet.snapshot(ds)
    assert not _reports(records_fixture)

    verbose = adapter.log.LoguruLog(config=data.Config(log_queries=True, log_snapshots=True))
    verbose.query(ds)
    verbose.snapshot(ds)
    assert [r["extra"]["kind"] for r in _reports(records_fixture)] == ["query", "snapshot"]
    assert _reports(records_fixture)[0]["extra"]["report"]["data-set"]["count"] == len(users_fixture)


def test_setup_is_reported_when_enabled(
    records_fixture: list[typing.Any], users_table_fixture: data.Table, users_fixture
):
    ds = users_table_fixture.data().add_rows(*users_fixture[:2])

    adapter.log.LoguruLog(config=data.Config()).setup(
        source=users_table_fixture, operation="populate", row_count=2, data_set=ds
    )
    assert not _reports(records_fixture)

    log = adapter.log.LoguruLog(config=data.Config(log_setup=True))
    log.setup(source=users_table_fixture, operation="populate", row_count=2, data_set=ds)
    log.setup(source=users_table_fixture, operation="truncate", row_count=-1, data_set=None)

    populated, truncated = _reports(records_fixture)
    assert populated["extra"]["kind"] == "setup"
    assert populated["level"].name == "INFO"
    assert populated["extra"]["report"]["setup"]["operation"] == "populate"
    assert populated["extra"]["report"]["setup"]["data-set"]["count"] == 2
    assert truncated["extra"]["report"]["setup"] == {"operation": "truncate", "count": -1}


def test_errors_are_logged(records_fixture: list[typing.Any], users_table_fixture: data.Table):
    log = adapter.log.LoguruLog(config=data.Config())

    log.error(source=users_table_fixture, error=data.ExecutionError.new("connection refused"))

    (record,) = [r for r in records_fixture if r["extra"].get("kind") == "error"]
    assert record["level"].name == "ERROR"
    assert "connection refused" in record["message"]


def test_reports_are_written_to_the_log_file(
    tmp_path: pathlib.Path, users_table_fixture: data.Table, users_fixture
):
    log_file = tmp_path / "reports.log"
    log = adapter.log.create(config=data.Config(log_file=log_file))
    assert isinstance(log, adapter.log.LoguruLog)
    _, failed = _state_results(users_table_fixture, users_fixture)

    log.state_assertion(failed)
    logger.info("not a report")
    logger.complete()

    lines = log_file.read_text().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["record"]["extra"]["kind"] == "state-assertion"
    adapter.log.remove_report_sinks()


def test_databases_sharing_a_log_file_share_one_sink(
    tmp_path: pathlib.Path, users_table_fixture: data.Table, users_fixture
):
    log_file = tmp_path / "reports.log"
    config = data.Config(log_file=log_file)
    first = adapter.log.create(config=config)
    second = adapter.log.create(config=config)
    assert isinstance(first, adapter.log.LoguruLog)
    assert isinstance(second, adapter.log.LoguruLog)
    _, failed = _state_results(users_table_fixture, users_fixture)

    try:
        second.state_assertion(failed)
        logger.complete()
    finally:
        adapter.log.remove_report_sinks()

    first.state_assertion(failed)
    logger.complete()

    assert len(log_file.read_text().splitlines()) == 1
