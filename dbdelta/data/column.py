import dataclasses

from dbdelta.data.data_type import DataType

__all__ = ("Column",)


@dataclasses.dataclass(frozen=True)
class Column:
    name: str
    data_type: DataType = DataType.Unknown

    def __str__(self) -> str:
        return self.name
