# services/collection.py

from typing import Any, Iterable, Optional

from executors.base import BaseRepository
from models.query import Scope
from models.result import AggregateResult
from models.schema import SchemaCatalog
from services import aggregate_builder
from services.order_preserver import normalize_order


class Collection:
    """
    A model's rows narrowed by a scope (filters, order, limit, offset).

    Collections are immutable: `all()` returns a new, narrower collection.
    The aggregate functions run against the current scope.
    """

    def __init__(self, catalog: SchemaCatalog, repository: BaseRepository, scope: Optional[Scope] = None):
        self.catalog = catalog
        self.repository = repository
        self.scope = scope or Scope()

    def all(
        self,
        *,
        conditions: Any = None,
        order: Optional[Iterable[Any]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> "Collection":
        """
        Narrow the collection. Conditions are added to the existing ones;
        order, limit and offset replace the current values when given.
        """
        update = {}
        if conditions is not None:
            extra = Scope(conditions=conditions).conditions
            update["conditions"] = self.scope.conditions + extra
        if order is not None:
            update["order"] = normalize_order(order, self.catalog)
        if limit is not None:
            update["limit"] = limit
        if offset is not None:
            update["offset"] = offset

        scope = Scope(**{**dict(self.scope), **update})
        return Collection(self.catalog, self.repository, scope)

    # -----------------------------
    # Aggregates
    # -----------------------------
    def count(self, property: Any = None, options: Any = None, **overrides: Any) -> int:
        return aggregate_builder.count(self, property, options, **overrides)

    def min(self, property: Any = None, options: Any = None, **overrides: Any) -> Any:
        return aggregate_builder.min(self, property, options, **overrides)

    def max(self, property: Any = None, options: Any = None, **overrides: Any) -> Any:
        return aggregate_builder.max(self, property, options, **overrides)

    def avg(self, property: Any = None, options: Any = None, **overrides: Any) -> Any:
        return aggregate_builder.avg(self, property, options, **overrides)

    def sum(self, property: Any = None, options: Any = None, **overrides: Any) -> Any:
        return aggregate_builder.sum(self, property, options, **overrides)

    def aggregate(self, *fields: Any, options: Any = None, **overrides: Any) -> AggregateResult:
        return aggregate_builder.aggregate(self, *fields, options=options, **overrides)

    def __repr__(self) -> str:
        return (
            f"Collection(conditions={len(self.scope.conditions)}, "
            f"order={[str(o) for o in self.scope.order]}, "
            f"limit={self.scope.limit}, offset={self.scope.offset})"
        )
