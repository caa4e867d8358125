# FILE: services/aggregate_builder.py
"""
Aggregate Request Builder

- Public entry points: count, min, max, avg, sum, aggregate
- Options are coerced once into AggregateOptions at the call boundary
- Fields are normalized, type-checked and ordered before execution
- Returns a single value for scalar aggregates, rows for grouped ones

Every function takes the collection (the current query context) first.
A collection exposes `catalog`, `repository` and `scope`.
"""

import logging
from collections.abc import Mapping
from typing import Any, Union

from pydantic import ValidationError

import config
from core.errors import EmptyProjectionError, InvalidArgumentError
from core.types import AVG_SUM_TYPES, MIN_MAX_TYPES, Wildcard
from models.field import Aggregate, AggregateField
from models.query import AggregateOptions
from models.result import AggregateResult
from services.field_normalizer import normalize_fields
from services.order_preserver import check_explicit_order, derive_order, normalize_order
from services.result_shape_resolver import shape_result
from services.scope_merger import merge_scope
from services.type_validator import assert_property_type

logger = logging.getLogger("aggregates.aggregate_builder")

OptionsLike = Union[AggregateOptions, Mapping, None]


# -----------------------------
# Helper: coerce caller options
# -----------------------------
def coerce_options(options: OptionsLike = None, **overrides: Any) -> AggregateOptions:
    """
    Accept an AggregateOptions, a mapping, keyword overrides, or any mix.
    Keyword overrides win. Unknown keys are rejected.
    """
    if options is None:
        data = {}
    elif isinstance(options, AggregateOptions):
        data = {name: getattr(options, name) for name in options.model_fields_set}
    elif isinstance(options, Mapping):
        data = dict(options)
    else:
        raise InvalidArgumentError(
            f"options must be AggregateOptions or a mapping, got {type(options).__name__}",
            details={"options": repr(options)},
        )

    data.update(overrides)

    try:
        return AggregateOptions(**data)
    except ValidationError as e:
        raise InvalidArgumentError(
            f"invalid aggregate options: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e


def _split_property(property: Any, options: OptionsLike):
    # count(friends, {"conditions": ...}): the options structure took the property slot
    if isinstance(property, (AggregateOptions, Mapping)) and options is None:
        return None, property
    return property, options


def _scalar(collection, field: AggregateField, opts: AggregateOptions) -> Any:
    # the aggregate column replaces any caller-supplied fields
    result = aggregate(collection, options=opts.model_copy(update={"fields": (field,)}))
    return result.unwrap()


# -----------------------------
# Named aggregates
# -----------------------------
def count(collection, property: Any = None, options: OptionsLike = None, **overrides: Any) -> int:
    """
    Count rows matching the conditions, or the non-null values of
    `property` when one is given.

        count(friends)
        count(friends, conditions={"gender": "female"})
        count(friends, "address")
    """
    property, options = _split_property(property, options)
    opts = coerce_options(options, **overrides)

    if property is None or isinstance(property, Wildcard):
        field = Aggregate.count()
    else:
        field = collection.catalog.resolve_property(property).count

    return int(_scalar(collection, field, opts) or 0)


def min(collection, property: Any = None, options: OptionsLike = None, **overrides: Any) -> Any:
    """Lowest value of `property` given the conditions."""
    property, options = _split_property(property, options)
    opts = coerce_options(options, **overrides)
    prop = assert_property_type(property, MIN_MAX_TYPES, collection.catalog)
    return _scalar(collection, prop.min, opts)


def max(collection, property: Any = None, options: OptionsLike = None, **overrides: Any) -> Any:
    """Highest value of `property` given the conditions."""
    property, options = _split_property(property, options)
    opts = coerce_options(options, **overrides)
    prop = assert_property_type(property, MIN_MAX_TYPES, collection.catalog)
    return _scalar(collection, prop.max, opts)


def avg(collection, property: Any = None, options: OptionsLike = None, **overrides: Any) -> Any:
    """Average value of a numeric `property` given the conditions."""
    property, options = _split_property(property, options)
    opts = coerce_options(options, **overrides)
    prop = assert_property_type(property, AVG_SUM_TYPES, collection.catalog)
    return _scalar(collection, prop.avg, opts)


def sum(collection, property: Any = None, options: OptionsLike = None, **overrides: Any) -> Any:
    """Total of a numeric `property` given the conditions."""
    property, options = _split_property(property, options)
    opts = coerce_options(options, **overrides)
    prop = assert_property_type(property, AVG_SUM_TYPES, collection.catalog)
    return _scalar(collection, prop.sum, opts)


# -----------------------------
# Generic aggregate
# -----------------------------
def aggregate(collection, *fields: Any, options: OptionsLike = None, **overrides: Any) -> AggregateResult:
    """
    Perform an aggregate query.

        aggregate(friends, Aggregate.count())
        aggregate(friends, Aggregate.min("age"), Aggregate.max("age"), Aggregate.sum("age"))
        aggregate(friends, Aggregate.avg("age"), fields=["gender"])

    A trailing AggregateOptions (or mapping) among the positional
    arguments is taken as the options.
    """
    if fields and isinstance(fields[-1], (AggregateOptions, Mapping)):
        if options is not None:
            raise InvalidArgumentError("options given both positionally and by keyword")
        options, fields = fields[-1], fields[:-1]

    opts = coerce_options(options, **overrides)
    catalog = collection.catalog
    scope = collection.scope

    # option fields first, then positional ones
    normalized = normalize_fields(tuple(opts.fields) + tuple(fields), catalog)
    if not normalized:
        raise EmptyProjectionError("query fields must not be empty")

    if opts.has_explicit_order:
        order = normalize_order(opts.order, catalog)
        if config.settings.strict_order:
            check_explicit_order(order, normalized)
    else:
        # the collection is already sorted; some properties are projected
        # away and the rest aggregated, so keep the existing order as if
        # the rows were materialized and looped over in order
        order = derive_order(normalized, scope.order)

    request = merge_scope(scope, fields=normalized, order=order, options=opts)
    logger.debug(f"Normalized aggregate request: {request.describe()}")

    return shape_result(request, collection.repository)


__all__ = ["coerce_options", "count", "min", "max", "avg", "sum", "aggregate"]
