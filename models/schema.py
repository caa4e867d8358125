# FILE: models/schema.py
from typing import Dict, Iterable, Iterator, Mapping, Union

from core.errors import InvalidArgumentError, UnknownPropertyError
from core.types import StorageType
from models.field import Property


class SchemaCatalog:
    """
    Read-only lookup of a model's properties by name.

    Built once at schema load; lookups never mutate it, so one catalog can be
    shared by concurrent aggregate calls.
    """

    def __init__(self, properties: Union[Iterable[Property], Mapping[str, StorageType]]):
        if isinstance(properties, Mapping):
            properties = [
                Property(name=name, type=StorageType(type_))
                for name, type_ in properties.items()
            ]

        self._properties: Dict[str, Property] = {}
        for prop in properties:
            if prop.name in self._properties:
                raise InvalidArgumentError(
                    f"duplicate property {prop.name!r} in schema",
                    details={"property": prop.name},
                )
            self._properties[prop.name] = prop

    def resolve_property(self, name: Union[str, Property]) -> Property:
        """
        Resolve a property name (or an already resolved Property) to the
        catalog's Property. Raises UnknownPropertyError if absent.
        """
        if isinstance(name, Property):
            known = self._properties.get(name.name)
            if known != name:
                raise UnknownPropertyError(
                    f"property {name.name!r} does not belong to this schema",
                    details={"property": name.name},
                )
            return known

        if not isinstance(name, str):
            raise InvalidArgumentError(
                f"property name must be a string, got {type(name).__name__}",
                details={"value": repr(name)},
            )

        try:
            return self._properties[name]
        except KeyError:
            raise UnknownPropertyError(
                f"unknown property {name!r}",
                details={"property": name, "known": sorted(self._properties)},
            ) from None

    def __contains__(self, name: object) -> bool:
        if isinstance(name, Property):
            return self._properties.get(name.name) == name
        return name in self._properties

    def __iter__(self) -> Iterator[Property]:
        return iter(self._properties.values())

    def __len__(self) -> int:
        return len(self._properties)
