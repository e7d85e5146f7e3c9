from loguru import logger

from dbdelta import data

__all__ = ("changed", "compute_delta", "query", "take_snapshot")


def take_snapshot(source: data.DataSource, /) -> data.DataSet:
    """Query ``source`` and store the result as its new snapshot."""
    data_set = source.execute_query()
    source.tracker.replace(data_set)
    logger.debug(f"Took a snapshot of {source.name} with {data_set.size} row(s).")

    source.db.log.snapshot(data_set)

    return data_set


def query(source: data.DataSource, /) -> data.DataSet:
    """Query ``source`` without touching its snapshot."""
    data_set = source.execute_query().freeze()

    source.db.log.query(data_set)

    return data_set


def compute_delta(source: data.DataSource, /) -> data.DeltaResult:
    """Diff the current state of ``source`` against its snapshot, then make the current state the snapshot.

    Raises ``data.UsageError`` if no snapshot was taken.
    """
    old = source.tracker.snapshot()
    new = source.execute_query()
    source.tracker.replace(new)

    delta = data.classify_delta(old=old, new=new)
    logger.debug(
        f"Delta for {source.name}: {delta.removed.size} removed, {delta.added.size} added, "
        f"{delta.unchanged.size} unchanged."
    )
    return delta


def changed(*sources: data.DataSource) -> bool:
    """True if any of the sources may have changed since it was last populated or verified as unchanged."""
    return any(source.tracker.changed for source in sources)
