# core/types.py
from enum import Enum


class StorageType(str, Enum):
    """
    Declared storage type of a property, as the schema catalog knows it.
    """

    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    STRING = "string"
    BOOLEAN = "boolean"
    OTHER = "other"

    def is_numeric(self) -> bool:
        return self in {StorageType.INTEGER, StorageType.FLOAT, StorageType.DECIMAL}

    def is_temporal(self) -> bool:
        return self in {StorageType.DATE, StorageType.TIME, StorageType.DATETIME}


class Operator(str, Enum):
    COUNT = "count"
    MIN = "min"
    MAX = "max"
    AVG = "avg"
    SUM = "sum"


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Wildcard(Enum):
    """
    Target meaning "every row" rather than a named property.
    Deliberately not a str so a property called "all" is never confused with it.
    """

    ALL = "all"

    def __repr__(self) -> str:
        return "ALL"


ALL = Wildcard.ALL


# -----------------------------
# Allowed storage types per scalar aggregate
# -----------------------------
MIN_MAX_TYPES = (
    StorageType.INTEGER,
    StorageType.FLOAT,
    StorageType.DECIMAL,
    StorageType.DATETIME,
    StorageType.DATE,
    StorageType.TIME,
)

# summing or averaging dates has no meaning
AVG_SUM_TYPES = (
    StorageType.INTEGER,
    StorageType.FLOAT,
    StorageType.DECIMAL,
)
