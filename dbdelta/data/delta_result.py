from __future__ import annotations

import pydantic

from dbdelta.data.data_set import DataSet

__all__ = ("DeltaResult",)


@pydantic.dataclasses.dataclass(
    frozen=True,
    kw_only=True,
    config=pydantic.ConfigDict(arbitrary_types_allowed=True),
)
class DeltaResult:
    removed: DataSet
    added: DataSet
    unchanged: DataSet

    @property
    def has_changes(self) -> bool:
        return not (self.removed.is_empty and self.added.is_empty)
