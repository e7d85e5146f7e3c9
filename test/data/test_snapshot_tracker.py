import pytest

from dbdelta import data


def test_starts_without_snapshot(users_table_fixture: data.Table):
    tracker = users_table_fixture.tracker
    assert tracker.state == data.SnapshotState.NO_SNAPSHOT
    assert tracker.changed

    with pytest.raises(data.UsageError) as exc_info:
        tracker.snapshot()

    assert "users" in exc_info.value.error_message


def test_replace_freezes_and_stores(users_table_fixture: data.Table, users_fixture):
    tracker = users_table_fixture.tracker
    first = users_table_fixture.data().add_rows(*users_fixture)

    tracker.replace(first)

    assert tracker.state == data.SnapshotState.HAS_SNAPSHOT
    assert tracker.snapshot() is first
    assert first.is_frozen

    second = users_table_fixture.data()
    tracker.replace(second)

    assert tracker.state == data.SnapshotState.HAS_SNAPSHOT
    assert tracker.snapshot() is second
    assert first.size == len(users_fixture)


def test_changed_flag(users_table_fixture: data.Table):
    tracker = users_table_fixture.tracker
    tracker.mark_unchanged()
    assert not tracker.changed
    tracker.mark_changed()
    assert tracker.changed
