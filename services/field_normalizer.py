# services/field_normalizer.py

import logging
from typing import Any, Iterable, List

from core.errors import InvalidFieldError
from core.types import Operator
from models.field import AggregateField, FieldDescriptor, Property
from models.schema import SchemaCatalog

logger = logging.getLogger("aggregates.field_normalizer")


def normalize_field(field: Any, catalog: SchemaCatalog) -> FieldDescriptor:
    """
    Turn any accepted field token into a descriptor bound to a real property.

    Accepted tokens:
    - AggregateField on ALL        -> returned unchanged
    - AggregateField on a name     -> target resolved, operator kept
    - str                          -> resolved Property
    - Property                     -> returned unchanged (must belong to catalog)

    Unknown names raise UnknownPropertyError. Anything else raises
    InvalidFieldError. Pure: no mutation.
    """
    if isinstance(field, AggregateField):
        if field.is_wildcard:
            if field.operator is not Operator.COUNT:
                raise InvalidFieldError(
                    f"{field} is not supported: only count may target all rows",
                    details={"field": str(field)},
                )
            return field

        resolved = catalog.resolve_property(field.target)
        if resolved is field.target:
            return field
        return AggregateField(operator=field.operator, target=resolved)

    if isinstance(field, str):
        return catalog.resolve_property(field)

    if isinstance(field, Property):
        catalog.resolve_property(field)
        return field

    raise InvalidFieldError(
        f"field must be a property name, Property or aggregate field, got {type(field).__name__}",
        details={"field": repr(field)},
    )


def normalize_fields(fields: Iterable[Any], catalog: SchemaCatalog) -> List[FieldDescriptor]:
    """
    Normalize every token, keeping first-seen order and collapsing
    tokens that resolve to the same descriptor.
    """
    normalized: List[FieldDescriptor] = []
    seen = set()
    for token in fields:
        descriptor = normalize_field(token, catalog)
        if descriptor in seen:
            logger.debug(f"Dropping duplicate field {descriptor}")
            continue
        seen.add(descriptor)
        normalized.append(descriptor)
    return normalized
