# FILE: models/result.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Tuple, Union

from core.query_shape import ResultShape


# -----------------------------
# Aggregate Result (resolver → caller)
# -----------------------------
class ScalarResult(BaseModel):
    """
    One value per aggregate column, no grouping.
    A single projected column is unwrapped to its bare value.
    """

    model_config = ConfigDict(frozen=True)

    value: Any = None

    @property
    def shape(self) -> ResultShape:
        return ResultShape.SCALAR

    def unwrap(self) -> Any:
        return self.value


class RowsResult(BaseModel):
    """One tuple per group, in field order."""

    model_config = ConfigDict(frozen=True)

    rows: List[Tuple[Any, ...]] = Field(default_factory=list)

    @property
    def shape(self) -> ResultShape:
        return ResultShape.GROUPED

    def unwrap(self) -> List[Tuple[Any, ...]]:
        return list(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


AggregateResult = Union[ScalarResult, RowsResult]
