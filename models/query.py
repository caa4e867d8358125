# FILE: models/query.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional, Tuple

from core.types import Direction
from models.field import AggregateField, FieldDescriptor, Property


def _as_tuple(v: Any) -> Tuple[Any, ...]:
    """None -> (), a single value -> (value,), any list/tuple -> tuple."""
    if v is None:
        return ()
    if isinstance(v, (list, tuple)):
        return tuple(v)
    return (v,)


# -----------------------------
# Conditions
# -----------------------------
class Conditions(tuple):
    """
    Several conditions that must all hold.

    Anything else passed as `conditions`, a list included, is one opaque
    condition and reaches the repository untouched:

        count(friends, conditions=["gender = ?", "female"])
        count(friends, conditions=Conditions({"gender": "female"}, lambda r: r["age"] > 20))
    """

    def __new__(cls, *conditions: Any) -> "Conditions":
        return super().__new__(cls, conditions)

    def __add__(self, other: Tuple[Any, ...]) -> "Conditions":
        return Conditions(*self, *other)

    def __repr__(self) -> str:
        return f"Conditions{tuple.__repr__(self)}"


def _as_conditions(v: Any) -> Conditions:
    if v is None:
        return Conditions()
    if isinstance(v, Conditions):
        return v
    return Conditions(v)


# -----------------------------
# Order Directive
# -----------------------------
class OrderDirective(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: Property
    direction: Direction = Field(default=Direction.ASC)

    @classmethod
    def asc(cls, target: Property) -> "OrderDirective":
        return cls(target=target, direction=Direction.ASC)

    @classmethod
    def desc(cls, target: Property) -> "OrderDirective":
        return cls(target=target, direction=Direction.DESC)

    def __str__(self) -> str:
        return f"{self.target.name} {self.direction.value}"


# -----------------------------
# Scope (current query context)
# -----------------------------
class Scope(BaseModel):
    """
    Filters, limits and order already active on a collection
    before an aggregate call.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conditions: Tuple[Any, ...] = Field(default_factory=Conditions)
    order: Tuple[OrderDirective, ...] = Field(default_factory=tuple)
    limit: Optional[int] = Field(None, ge=0)
    offset: int = Field(default=0, ge=0)

    @field_validator("conditions", mode="plain")
    @classmethod
    def wrap_conditions(cls, v):
        return _as_conditions(v)

    @field_validator("offset", mode="before")
    @classmethod
    def default_offset(cls, v):
        return 0 if v is None else v


# -----------------------------
# Aggregate Options (caller → builder)
# -----------------------------
class AggregateOptions(BaseModel):
    """
    Fixed-shape options accepted by every aggregate entry point.

    `order=None` means the caller did not supply an order; an empty
    sequence is an explicit "no order" and disables order derivation.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    conditions: Tuple[Any, ...] = Field(default_factory=Conditions)
    fields: Tuple[Any, ...] = Field(default_factory=tuple)
    order: Optional[Tuple[Any, ...]] = Field(None)
    limit: Optional[int] = Field(None, ge=0)
    offset: Optional[int] = Field(None, ge=0)

    @field_validator("conditions", mode="plain")
    @classmethod
    def wrap_conditions(cls, v):
        return _as_conditions(v)

    @field_validator("fields", mode="before")
    @classmethod
    def wrap_fields(cls, v):
        return _as_tuple(v)

    @field_validator("order", mode="before")
    @classmethod
    def wrap_order(cls, v):
        if v is None:
            return None
        return _as_tuple(v)

    @property
    def has_explicit_order(self) -> bool:
        return self.order is not None


# -----------------------------
# Aggregate Request (builder → repository)
# -----------------------------
class AggregateRequest(BaseModel):
    """
    Fully normalized unit of work handed to the repository.
    Built fresh per call, never mutated.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fields: Tuple[FieldDescriptor, ...] = Field(..., min_length=1)
    conditions: Tuple[Any, ...] = Field(default_factory=tuple)
    order: Tuple[OrderDirective, ...] = Field(default_factory=tuple)
    limit: Optional[int] = Field(None, ge=0)
    offset: int = Field(default=0, ge=0)

    @property
    def grouping_fields(self) -> Tuple[Property, ...]:
        return tuple(f for f in self.fields if isinstance(f, Property))

    @property
    def aggregate_fields(self) -> Tuple[AggregateField, ...]:
        return tuple(f for f in self.fields if isinstance(f, AggregateField))

    @property
    def is_grouped(self) -> bool:
        return bool(self.grouping_fields)

    def describe(self) -> str:
        fields = ", ".join(str(f) for f in self.fields)
        order = ", ".join(str(o) for o in self.order) or "-"
        return (
            f"fields=[{fields}] order=[{order}] "
            f"conditions={len(self.conditions)} limit={self.limit} offset={self.offset}"
        )
