import dataclasses
import typing

__all__ = ("ResultSet",)


@dataclasses.dataclass(frozen=True, kw_only=True)
class ResultSet:
    column_labels: tuple[str, ...]
    rows: tuple[tuple[typing.Any, ...], ...]
