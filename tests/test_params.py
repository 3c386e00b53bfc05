"""Tests for the query parameter store."""

from __future__ import annotations

import math
from datetime import date

import pytest

from gdd_dashboard.params import (
    DEFAULT_BASE_TEMP,
    DEFAULT_LOCATION,
    ParameterStore,
    QueryParameters,
    coerce_number,
    format_number,
)

# =============================================================================
# coerce_number
# =============================================================================


class TestCoerceNumber:
    """Base temperature input is coerced like a browser Number() call."""

    def test_numbers_pass_through(self):
        assert coerce_number(10) == 10.0
        assert coerce_number(7.5) == 7.5

    def test_numeric_text(self):
        assert coerce_number("12.5") == 12.5
        assert coerce_number("  8 ") == 8.0

    def test_empty_text_is_zero(self):
        assert coerce_number("") == 0.0
        assert coerce_number("   ") == 0.0

    def test_none_is_zero(self):
        assert coerce_number(None) == 0.0

    def test_non_numeric_text_is_nan(self):
        """Bad input is not rejected, it silently becomes NaN."""
        assert math.isnan(coerce_number("warm"))

    def test_negative_passes_through(self):
        assert coerce_number("-4") == -4.0

    def test_bool(self):
        assert coerce_number(True) == 1.0
        assert coerce_number(False) == 0.0

    def test_int_too_large_for_float_is_infinite(self):
        assert coerce_number(10**400) == math.inf
        assert coerce_number(-(10**400)) == -math.inf


class TestFormatNumber:
    """Numbers in the query string."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(10.0, "10"), (-3.0, "-3"), (10.5, "10.5"), (0.0, "0")],
    )
    def test_values(self, value, expected):
        assert format_number(value) == expected

    def test_nan(self):
        assert format_number(math.nan) == "NaN"

    def test_infinity(self):
        assert format_number(math.inf) == "Infinity"
        assert format_number(-math.inf) == "-Infinity"


# =============================================================================
# QueryParameters
# =============================================================================


class TestQueryParameters:
    """Immutable parameter snapshot."""

    def test_defaults(self):
        params = QueryParameters()
        assert params.location == DEFAULT_LOCATION == "Larnaca"
        assert params.base_temperature == DEFAULT_BASE_TEMP == 10.0
        assert params.planting_date == ""
        assert not params.is_ready

    def test_ready_once_planting_date_set(self):
        assert QueryParameters(planting_date="2024-03-01").is_ready

    def test_query_params(self):
        params = QueryParameters("Larnaca", 10.0, "2024-03-01")
        assert params.query_params() == {
            "location": "Larnaca",
            "base_temp": "10",
            "start_date": "2024-03-01",
        }

    def test_same_as_treats_nan_as_equal(self):
        a = QueryParameters(base_temperature=math.nan)
        b = QueryParameters(base_temperature=math.nan)
        assert a.same_as(b)
        assert not a.same_as(QueryParameters(base_temperature=5.0))


# =============================================================================
# ParameterStore
# =============================================================================


class TestParameterStore:
    """Setters replace state and notify listeners only on real changes."""

    def test_initial_values(self):
        store = ParameterStore("Paphos", "12", date(2024, 4, 1))
        assert store.params == QueryParameters("Paphos", 12.0, "2024-04-01")

    def test_setters_replace_values(self):
        store = ParameterStore()
        store.set_location("Limassol")
        store.set_base_temperature("6.5")
        store.set_planting_date("2024-05-10")
        assert store.params == QueryParameters("Limassol", 6.5, "2024-05-10")

    def test_planting_date_accepts_date_and_none(self):
        store = ParameterStore()
        store.set_planting_date(date(2024, 3, 1))
        assert store.params.planting_date == "2024-03-01"
        store.set_planting_date(None)
        assert store.params.planting_date == ""

    def test_listener_notified_with_new_params(self):
        store = ParameterStore()
        seen: list[QueryParameters] = []
        store.subscribe(seen.append)
        store.set_location("Nicosia")
        assert seen == [QueryParameters("Nicosia", 10.0, "")]

    def test_same_value_does_not_notify(self):
        store = ParameterStore()
        seen: list[QueryParameters] = []
        store.subscribe(seen.append)
        store.set_location("Larnaca")
        store.set_base_temperature(10)
        store.set_base_temperature("10")
        assert seen == []

    def test_repeated_nan_does_not_notify(self):
        store = ParameterStore()
        seen: list[QueryParameters] = []
        store.subscribe(seen.append)
        store.set_base_temperature("abc")
        store.set_base_temperature("xyz")
        assert len(seen) == 1
        assert math.isnan(seen[0].base_temperature)

    def test_no_validation_of_base_temperature(self):
        store = ParameterStore()
        store.set_base_temperature(-40)
        assert store.params.base_temperature == -40.0

    def test_unsubscribe(self):
        store = ParameterStore()
        seen: list[QueryParameters] = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()  # second call is harmless
        store.set_location("Nicosia")
        assert seen == []
