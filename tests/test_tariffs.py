"""Tests for tariff lookup, seasons and peak sun hours."""

from datetime import date

import pytest

from services.tariffs import (
    DEFAULT_PEAK_SUN_HOURS,
    ESKOM_DIRECT_NAME,
    get_peak_sun_hours,
    get_rate,
    get_season,
    get_seasonal_rate,
)


def test_exact_match_is_case_insensitive():
    result = get_rate("cape town")
    assert result["municipality"] == "Cape Town"
    assert result["rate"] == 2.95
    assert result["is_ibt"] is True


def test_partial_match():
    assert get_rate("Sandton, Johannesburg North")["municipality"] == "Johannesburg"
    assert get_rate("Durb")["municipality"] == "Durban"


def test_province_lookup():
    assert get_rate("Gauteng")["rate"] == 3.02


@pytest.mark.parametrize("location", [None, "", "   ", "Atlantis"])
def test_unknown_location_falls_back_to_eskom(location):
    result = get_rate(location)
    assert result["municipality"] == ESKOM_DIRECT_NAME
    assert result["rate"] == 2.72
    assert result["is_ibt"] is False


def test_rates_are_copies():
    result = get_rate("Pretoria")
    result["rates"]["prepaid"] = 0
    assert get_rate("Pretoria")["rates"]["prepaid"] == 2.98


@pytest.mark.parametrize(
    "month, season",
    [(1, "SUMMER"), (4, "SUMMER"), (5, "WINTER"), (8, "WINTER"), (9, "SUMMER"), (12, "SUMMER")],
)
def test_season(month, season):
    assert get_season(date(2025, month, 15)) == season


def test_seasonal_rate_winter():
    result = get_seasonal_rate("Johannesburg", on=date(2025, 7, 1))
    assert result["season"] == "WINTER"
    assert result["multiplier"] == 1.15
    assert result["seasonal_rate"] == round(3.10 * 1.15, 2)


def test_seasonal_rate_summer():
    result = get_seasonal_rate("Johannesburg", on=date(2025, 1, 1))
    assert result["seasonal_rate"] == 3.10


def test_peak_sun_hours():
    assert get_peak_sun_hours("Northern Cape") == 6.0
    assert get_peak_sun_hours("Atlantis") == DEFAULT_PEAK_SUN_HOURS
    assert get_peak_sun_hours(None) == DEFAULT_PEAK_SUN_HOURS
