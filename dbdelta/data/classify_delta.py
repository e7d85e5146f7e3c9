from dbdelta.data.data_set import DataSet
from dbdelta.data.delta_result import DeltaResult
from dbdelta.data.error import UsageError

__all__ = ("classify_delta",)


def classify_delta(*, old: DataSet, new: DataSet) -> DeltaResult:
    if old.source is not new.source:
        raise UsageError.new(
            f"Cannot compute a delta between data sets of different data sources, {old.source.name} and "
            f"{new.source.name}.",
            old_source=old.source.name,
            new_source=new.source.name,
        )

    removed = old.subtract(new)
    added = new.subtract(old)
    unchanged = old.subtract(removed)

    return DeltaResult(
        removed=removed.freeze(),
        added=added.freeze(),
        unchanged=unchanged.freeze(),
    )
