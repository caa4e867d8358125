from datetime import date, datetime, time
from decimal import Decimal

import pytest

from core.errors import (
    InvalidArgumentError,
    MissingPropertyError,
    TypeMismatchError,
    UnknownPropertyError,
)


# ---------------------------------------------------------------------
# TESTS: COUNT
# ---------------------------------------------------------------------

def test_count_all_friends(friends):
    assert friends.count() == 4


def test_count_with_conditions(friends):
    assert friends.count(conditions={"gender": "female"}) == 2


def test_count_with_predicate_condition(friends):
    assert friends.count(conditions=lambda row: row["age"] > 18) == 3


def test_count_property_excludes_nulls(friends):
    """
    Friends without an address are not counted.
    """
    assert friends.count("address") == 2


def test_count_property_with_conditions(friends):
    assert friends.count("address", conditions={"gender": "male"}) == 1


def test_count_accepts_options_mapping_in_property_slot(friends):
    assert friends.count({"conditions": {"gender": "male"}}) == 2


def test_count_of_empty_selection_is_zero(friends):
    assert friends.count(conditions={"gender": "other"}) == 0


def test_count_returns_int(spied_friends, spy_repository):
    spy_repository.execute.return_value = [(Decimal("3"),)]
    assert spied_friends.count() == 3
    assert isinstance(spied_friends.count(), int)


def test_count_unknown_property(friends):
    with pytest.raises(UnknownPropertyError):
        friends.count("shoe_size")


# ---------------------------------------------------------------------
# TESTS: MIN / MAX
# ---------------------------------------------------------------------

def test_min_age(friends):
    assert friends.min("age") == 18


def test_min_age_of_women(friends):
    assert friends.min("age", conditions={"gender": "female"}) == 18


def test_max_age_of_men(friends):
    assert friends.max("age", conditions={"gender": "male"}) == 40


@pytest.mark.parametrize(
    "name, lowest, highest",
    [
        ("birthday", date(1984, 8, 20), date(2006, 11, 3)),
        ("wake_up", time(5, 45), time(8, 15)),
        ("created_at", datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 4, 9, 0)),
        ("income", Decimal("1000.00"), Decimal("7000.00")),
    ],
)
def test_min_max_on_temporal_and_decimal(friends, name, lowest, highest):
    assert friends.min(name) == lowest
    assert friends.max(name) == highest


def test_min_max_on_string_is_a_type_mismatch(friends):
    with pytest.raises(TypeMismatchError):
        friends.max("name")


@pytest.mark.parametrize("fn", ["min", "max", "avg", "sum"])
def test_property_is_mandatory(spied_friends, spy_repository, fn):
    with pytest.raises(MissingPropertyError):
        getattr(spied_friends, fn)()

    spy_repository.execute.assert_not_called()


# ---------------------------------------------------------------------
# TESTS: AVG / SUM
# ---------------------------------------------------------------------

def test_avg_age(friends):
    assert friends.avg("age") == pytest.approx(27.0)


def test_avg_age_of_women(friends):
    assert friends.avg("age", conditions={"gender": "female"}) == pytest.approx(24.0)


def test_sum_age(friends):
    assert friends.sum("age") == 108


def test_sum_and_avg_decimal_stay_decimal(friends):
    total = friends.sum("income")
    average = friends.avg("income")

    assert total == Decimal("16000.00")
    assert isinstance(average, Decimal)
    assert average == Decimal("4000")


@pytest.mark.parametrize("fn", ["avg", "sum"])
@pytest.mark.parametrize("name", ["birthday", "wake_up", "created_at"])
def test_avg_sum_on_temporal_never_execute(spied_friends, spy_repository, fn, name):
    with pytest.raises(TypeMismatchError):
        getattr(spied_friends, fn)(name)

    spy_repository.execute.assert_not_called()


def test_sum_of_no_rows_is_none(friends):
    assert friends.sum("age", conditions={"gender": "other"}) is None


# ---------------------------------------------------------------------
# TESTS: OPTIONS
# ---------------------------------------------------------------------

def test_unknown_option_is_rejected(friends):
    with pytest.raises(InvalidArgumentError) as exc:
        friends.count(having={"age": 1})

    assert exc.value.code == "INVALID_ARGUMENT"


def test_named_aggregate_replaces_caller_fields(spied_friends, spy_repository):
    spied_friends.min("age", fields=["gender"])

    request = spy_repository.execute.call_args.args[0]
    assert [str(f) for f in request.fields] == ["age.min"]
    assert spy_repository.execute.call_args.kwargs == {"distinct_rows": False}
