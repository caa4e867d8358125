import pytest

from core.errors import MissingPropertyError, TypeMismatchError, UnknownPropertyError
from core.types import AVG_SUM_TYPES, MIN_MAX_TYPES
from services.type_validator import assert_property_type


def test_missing_property_name():
    with pytest.raises(MissingPropertyError) as exc:
        assert_property_type(None, MIN_MAX_TYPES, catalog=None)

    assert str(exc.value) == "property name must not be None"


@pytest.mark.parametrize(
    "name",
    ["age", "weight", "income", "birthday", "wake_up", "created_at"],
)
def test_min_max_accept_numeric_and_temporal(catalog, name):
    prop = assert_property_type(name, MIN_MAX_TYPES, catalog)
    assert prop is catalog.resolve_property(name)


@pytest.mark.parametrize("name", ["age", "weight", "income"])
def test_avg_sum_accept_numeric(catalog, name):
    assert_property_type(name, AVG_SUM_TYPES, catalog)


@pytest.mark.parametrize("name", ["birthday", "wake_up", "created_at"])
def test_avg_sum_reject_temporal(catalog, name):
    with pytest.raises(TypeMismatchError):
        assert_property_type(name, AVG_SUM_TYPES, catalog)


def test_mismatch_message_names_property_and_allowed_types(catalog):
    with pytest.raises(TypeMismatchError) as exc:
        assert_property_type("name", AVG_SUM_TYPES, catalog)

    assert str(exc.value) == "name must be integer or float or decimal, but was string"
    assert exc.value.details == {
        "property": "name",
        "allowed": ["integer", "float", "decimal"],
        "actual": "string",
    }


def test_unknown_property_is_not_a_type_mismatch(catalog):
    with pytest.raises(UnknownPropertyError):
        assert_property_type("shoe_size", MIN_MAX_TYPES, catalog)
