# services/result_shape_resolver.py

import logging

from core.query_shape import ResultShape
from executors.base import BaseRepository
from models.query import AggregateRequest
from models.result import AggregateResult, RowsResult, ScalarResult

logger = logging.getLogger("aggregates.result_shape_resolver")


def resolve_result_shape(request: AggregateRequest) -> ResultShape:
    """
    Determine the authoritative shape of the aggregate result.

    HARD RULES:
    - Deterministic
    - No mutation
    - Any plain property in the projection is a grouping column
    """
    if request.is_grouped:
        return ResultShape.GROUPED
    return ResultShape.SCALAR


def shape_result(request: AggregateRequest, repository: BaseRepository) -> AggregateResult:
    """
    Execute the request and return the result in its resolved shape.

    GROUPED -> every distinct row, in order
    SCALAR  -> the single aggregate row (unwrapped when one column)
    """
    shape = resolve_result_shape(request)
    logger.info(f"Executing {shape.value} aggregate: {request.describe()}")

    # -----------------------------
    # Grouped: one row per group
    # -----------------------------
    if shape.is_grouped():
        rows = repository.execute(request, distinct_rows=True)
        return RowsResult(rows=[tuple(r) for r in rows])

    # -----------------------------
    # Scalar: only return one row
    # -----------------------------
    rows = repository.execute(request, distinct_rows=False)
    if not rows:
        return ScalarResult(value=None)

    first = tuple(rows[0])
    if len(first) == 1:
        return ScalarResult(value=first[0])
    return ScalarResult(value=first)
