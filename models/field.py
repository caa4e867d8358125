# FILE: models/field.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Union

from core.types import ALL, Operator, StorageType, Wildcard


# -----------------------------
# Property
# -----------------------------
class Property(BaseModel):
    """
    A named, typed attribute of a model.
    Owned by the schema catalog; immutable once loaded.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Logical property name")
    type: StorageType = Field(..., description="Declared storage type")

    # Operator accessors, e.g. `age.min`
    @property
    def count(self) -> "AggregateField":
        return AggregateField(operator=Operator.COUNT, target=self)

    @property
    def min(self) -> "AggregateField":
        return AggregateField(operator=Operator.MIN, target=self)

    @property
    def max(self) -> "AggregateField":
        return AggregateField(operator=Operator.MAX, target=self)

    @property
    def avg(self) -> "AggregateField":
        return AggregateField(operator=Operator.AVG, target=self)

    @property
    def sum(self) -> "AggregateField":
        return AggregateField(operator=Operator.SUM, target=self)

    def __str__(self) -> str:
        return self.name


# -----------------------------
# Aggregate field (operator + target)
# -----------------------------
class AggregateField(BaseModel):
    """
    An aggregate operator applied to a target.

    The target is a property name (unresolved), a resolved Property,
    or the ALL wildcard.
    """

    model_config = ConfigDict(frozen=True)

    operator: Operator
    target: Union[Property, Wildcard, str]

    @property
    def is_wildcard(self) -> bool:
        return isinstance(self.target, Wildcard)

    @property
    def is_resolved(self) -> bool:
        return self.is_wildcard or isinstance(self.target, Property)

    @property
    def target_name(self) -> str:
        if isinstance(self.target, Wildcard):
            return self.target.value
        return str(self.target)

    def __str__(self) -> str:
        return f"{self.target_name}.{self.operator.value}"


class Aggregate:
    """
    Shorthand constructors for aggregate fields.

        Aggregate.count()          # count of all rows
        Aggregate.count("address") # count of non-null addresses
        Aggregate.min("age")
    """

    @staticmethod
    def count(target: Union[Property, Wildcard, str] = ALL) -> AggregateField:
        return AggregateField(operator=Operator.COUNT, target=target)

    @staticmethod
    def min(target: Union[Property, str]) -> AggregateField:
        return AggregateField(operator=Operator.MIN, target=target)

    @staticmethod
    def max(target: Union[Property, str]) -> AggregateField:
        return AggregateField(operator=Operator.MAX, target=target)

    @staticmethod
    def avg(target: Union[Property, str]) -> AggregateField:
        return AggregateField(operator=Operator.AVG, target=target)

    @staticmethod
    def sum(target: Union[Property, str]) -> AggregateField:
        return AggregateField(operator=Operator.SUM, target=target)


# Anything accepted in a projection before normalization
FieldToken = Union[str, Property, AggregateField]

# A normalized projection element
FieldDescriptor = Union[Property, AggregateField]
