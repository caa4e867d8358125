# services/scope_merger.py

from typing import Sequence

from models.field import FieldDescriptor
from models.query import AggregateOptions, AggregateRequest, OrderDirective, Scope


def merge_scope(
    scope: Scope,
    *,
    fields: Sequence[FieldDescriptor],
    order: Sequence[OrderDirective],
    options: AggregateOptions,
) -> AggregateRequest:
    """
    Build a new request from the collection's scope and the aggregate
    directives. The scope is the base; the directives override it.

    - conditions: scope conditions, then option conditions (all must hold)
    - limit/offset: option value when given, else the scope's
    - fields/order: always from the directives; the scope order is replaced

    Pure: neither input is modified.
    """
    return AggregateRequest(
        fields=tuple(fields),
        conditions=tuple(scope.conditions) + tuple(options.conditions),
        order=tuple(order),
        limit=options.limit if options.limit is not None else scope.limit,
        offset=options.offset if options.offset is not None else scope.offset,
    )
