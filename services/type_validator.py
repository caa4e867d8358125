# services/type_validator.py

from typing import Any, Iterable

from core.errors import MissingPropertyError, TypeMismatchError
from core.types import StorageType
from models.field import Property
from models.schema import SchemaCatalog


def assert_property_type(name: Any, allowed_types: Iterable[StorageType], catalog: SchemaCatalog) -> Property:
    """
    Check that `name` resolves to a property whose storage type is one of
    `allowed_types`. Returns the resolved property.

    HARD RULES:
    - None is never a property ("property name must not be None")
    - the error message names the property and every allowed type
    """
    if name is None:
        raise MissingPropertyError("property name must not be None")

    allowed = tuple(allowed_types)
    prop = catalog.resolve_property(name)

    if prop.type not in allowed:
        expected = " or ".join(t.value for t in allowed)
        raise TypeMismatchError(
            f"{prop.name} must be {expected}, but was {prop.type.value}",
            details={
                "property": prop.name,
                "allowed": [t.value for t in allowed],
                "actual": prop.type.value,
            },
        )

    return prop
