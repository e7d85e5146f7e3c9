from __future__ import annotations

import enum
import typing

from dbdelta.data.error import UsageError

if typing.TYPE_CHECKING:
    from dbdelta.data.data_set import DataSet

__all__ = ("SnapshotState", "SnapshotTracker")


class SnapshotState(enum.Enum):
    NO_SNAPSHOT = "no-snapshot"
    HAS_SNAPSHOT = "has-snapshot"

    def __repr__(self) -> str:
        return f"SnapshotState.{self.name}"


class SnapshotTracker:
    """Holds the last snapshot of one data source and whether the source may have changed.

    A new snapshot replaces the previous one wholesale; stored snapshots are frozen and never
    mutated, so readers see either the old or the new data set.
    """

    def __init__(self, *, source_name: str):
        self._source_name: typing.Final[str] = source_name
        self._snapshot: DataSet | None = None
        self._changed = True

    @property
    def state(self) -> SnapshotState:
        if self._snapshot is None:
            return SnapshotState.NO_SNAPSHOT
        return SnapshotState.HAS_SNAPSHOT

    @property
    def changed(self) -> bool:
        return self._changed

    def mark_changed(self) -> None:
        self._changed = True

    def mark_unchanged(self) -> None:
        self._changed = False

    def snapshot(self) -> DataSet:
        snapshot = self._snapshot
        if snapshot is None:
            raise UsageError.new(
                f"No snapshot has been taken for {self._source_name}, so there is no earlier state to "
                f"compare against.",
                source=self._source_name,
            )
        return snapshot

    def replace(self, /, data_set: DataSet) -> None:
        self._snapshot = data_set.freeze()

    def __repr__(self) -> str:
        return (
            f"SnapshotTracker(source_name={self._source_name!r}, state={self.state!r}, "
            f"changed={self._changed})"
        )
