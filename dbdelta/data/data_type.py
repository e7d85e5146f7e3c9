import enum

__all__ = ("DataType",)


# noinspection PyArgumentList
class DataType(enum.Enum):
    BigInt = enum.auto()
    Binary = enum.auto()
    Blob = enum.auto()
    Bool = enum.auto()
    Clob = enum.auto()
    Date = enum.auto()
    Decimal = enum.auto()
    Float = enum.auto()
    Int = enum.auto()
    Json = enum.auto()
    Text = enum.auto()
    Timestamp = enum.auto()
    TimestampTZ = enum.auto()
    UUID = enum.auto()
    Unknown = enum.auto()

    @property
    def is_large_object(self) -> bool:
        return self in (DataType.Blob, DataType.Clob)
