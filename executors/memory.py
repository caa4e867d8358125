"""
In-memory Repository

- Executes AggregateRequest against a list of dict rows
- count, sum, avg, min, max with SQL null semantics
- Python-side grouping on the plain (grouping) fields
- Used by tests and examples; real backends implement BaseRepository
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from core.errors import InvalidArgumentError
from core.types import Direction, Operator
from executors.base import BaseRepository
from models.field import AggregateField, Property
from models.query import AggregateRequest, OrderDirective

logger = logging.getLogger("aggregates.memory_repository")


# -----------------------------
# Helper: read a value off a row
# -----------------------------
def _value(row: Mapping, name: str) -> Any:
    return row.get(name)


# -----------------------------
# Helper: apply conditions
# -----------------------------
def _matches(row: Mapping, conditions: Iterable[Any]) -> bool:
    """
    Mapping conditions match on equality of every key (a key may be a
    property name or a Property); callables are row predicates.
    """
    for condition in conditions:
        if isinstance(condition, Mapping):
            for key, expected in condition.items():
                name = key.name if isinstance(key, Property) else key
                if _value(row, name) != expected:
                    return False
        elif callable(condition):
            if not condition(row):
                return False
        else:
            raise InvalidArgumentError(
                f"unsupported condition for in-memory execution: {condition!r}",
                details={"condition": repr(condition)},
            )
    return True


# -----------------------------
# Helper: compute aggregate
# -----------------------------
def _compute_aggregate(field: AggregateField, rows: List[Mapping]) -> Optional[Any]:
    if field.is_wildcard:
        return len(rows)

    values = [_value(r, field.target.name) for r in rows]
    present = [v for v in values if v is not None]

    if field.operator is Operator.COUNT:
        return len(present)
    if not present:
        return None
    if field.operator is Operator.SUM:
        return sum(present)
    if field.operator is Operator.AVG:
        return sum(present) / len(present)
    if field.operator is Operator.MIN:
        return min(present)
    if field.operator is Operator.MAX:
        return max(present)
    return None


# -----------------------------
# Helper: sort output rows
# -----------------------------
def _sort_rows(
    rows: List[Tuple[Any, ...]],
    order: Sequence[OrderDirective],
    fields: Sequence[Any],
) -> List[Tuple[Any, ...]]:
    positions = {f: i for i, f in enumerate(fields) if isinstance(f, Property)}

    # stable sorts applied from the least significant directive up
    for directive in reversed(order):
        idx = positions.get(directive.target)
        if idx is None:
            continue
        reverse = directive.direction is Direction.DESC

        # NULLs always last
        present = [r for r in rows if r[idx] is not None]
        missing = [r for r in rows if r[idx] is None]
        present.sort(key=lambda row, idx=idx: row[idx], reverse=reverse)
        rows = present + missing
    return rows


# -----------------------------
# Helper: offset/limit window
# -----------------------------
def _window(rows: List[Any], offset: int, limit: Optional[int]) -> List[Any]:
    if offset:
        rows = rows[offset:]
    if limit is not None:
        rows = rows[:limit]
    return rows


class MemoryRepository(BaseRepository):
    """
    Executes requests over rows held in memory.
    """

    def __init__(self, rows: Iterable[Mapping[str, Any]]):
        self._rows: List[Dict[str, Any]] = [dict(r) for r in rows]

    def execute(self, request: AggregateRequest, distinct_rows: bool = False) -> List[Tuple[Any, ...]]:
        matched = [r for r in self._rows if _matches(r, request.conditions)]
        grouping = request.grouping_fields

        # ungrouped aggregates run over the scoped rows, grouped ones page their output
        if not request.is_grouped:
            matched = _window(matched, request.offset, request.limit)

        # -------- Aggregates (grouped by plain fields, one group if none) --------
        if request.aggregate_fields:
            groups: Dict[Tuple[Any, ...], List[Mapping]] = {}
            if grouping:
                for r in matched:
                    key = tuple(_value(r, p.name) for p in grouping)
                    groups.setdefault(key, []).append(r)
            else:
                groups[()] = matched

            results: List[Tuple[Any, ...]] = []
            for key, items in groups.items():
                group_values = dict(zip(grouping, key))
                results.append(tuple(
                    group_values[f] if isinstance(f, Property) else _compute_aggregate(f, items)
                    for f in request.fields
                ))

        # -------- Plain projection --------
        else:
            results = [tuple(_value(r, p.name) for p in request.fields) for r in matched]
            if distinct_rows:
                results = list(dict.fromkeys(results))

        results = _sort_rows(results, request.order, request.fields)

        if request.is_grouped:
            results = _window(results, request.offset, request.limit)

        logger.debug(f"Matched {len(matched)} rows, returning {len(results)}")
        return results
