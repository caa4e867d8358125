# services/order_preserver.py

from typing import Any, Dict, Iterable, Sequence, Tuple

from core.errors import InvalidArgumentError, OrderProjectionError
from models.field import FieldDescriptor, Property
from models.query import OrderDirective
from models.schema import SchemaCatalog


def direction_map(current_order: Iterable[OrderDirective]) -> Dict[Property, OrderDirective]:
    directions: Dict[Property, OrderDirective] = {}
    for directive in current_order:
        directions[directive.target] = directive
    return directions


def derive_order(
    fields: Sequence[FieldDescriptor],
    current_order: Iterable[OrderDirective],
) -> Tuple[OrderDirective, ...]:
    """
    Carry the collection's existing order over to the projected columns.

    The collection is already sorted and the aggregate projects some
    properties away, so the surviving plain properties keep the direction
    they had; plain properties without one sort ascending. Aggregate fields
    never contribute a directive.

    Callers must skip this entirely when an explicit order was supplied.
    """
    directions = direction_map(current_order)

    order = []
    for field in fields:
        if not isinstance(field, Property):
            continue
        order.append(directions.get(field, OrderDirective.asc(field)))

    return tuple(order)


def normalize_order(order: Iterable[Any], catalog: SchemaCatalog) -> Tuple[OrderDirective, ...]:
    """
    Resolve explicit order entries: an OrderDirective keeps its direction,
    a Property or property name sorts ascending.
    """
    normalized = []
    for entry in order:
        if isinstance(entry, OrderDirective):
            catalog.resolve_property(entry.target)
            normalized.append(entry)
        elif isinstance(entry, (str, Property)):
            normalized.append(OrderDirective.asc(catalog.resolve_property(entry)))
        else:
            raise InvalidArgumentError(
                f"order entries must be OrderDirective, Property or property name, got {type(entry).__name__}",
                details={"entry": repr(entry)},
            )
    return tuple(normalized)


def check_explicit_order(order: Sequence[OrderDirective], fields: Sequence[FieldDescriptor]) -> None:
    """
    Fail fast when an explicit order targets a property that is not a
    plain column of the projection; no executor can sort by it.
    """
    projected = {f for f in fields if isinstance(f, Property)}
    missing = [d.target.name for d in order if d.target not in projected]
    if missing:
        raise OrderProjectionError(
            f"cannot order by {', '.join(missing)}: not a grouping column of the projection",
            details={
                "order": missing,
                "projection": [str(f) for f in fields],
            },
        )
