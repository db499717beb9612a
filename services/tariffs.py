"""South African electricity tariffs (2024/2025, approximate) and solar irradiance."""

from datetime import date
from typing import Any

from utils.helpers import today_utc


def _tariff(prepaid: float, conventional: float, tou_peak: float, tou_offpeak: float) -> dict[str, float]:
    return {
        "prepaid": prepaid,
        "conventional": conventional,
        "tou_peak": tou_peak,
        "tou_offpeak": tou_offpeak,
    }


JOHANNESBURG = _tariff(3.10, 2.85, 4.20, 1.55)
CAPE_TOWN = _tariff(2.95, 2.70, 3.85, 1.45)
ETHEKWINI = _tariff(2.88, 2.65, 3.90, 1.50)
TSHWANE = _tariff(2.98, 2.75, 4.05, 1.50)
EKURHULENI = _tariff(3.05, 2.80, 4.10, 1.52)
NELSON_MANDELA_BAY = _tariff(2.92, 2.68, 3.80, 1.42)
MANGAUNG = _tariff(2.85, 2.62, 3.75, 1.40)
BUFFALO_CITY = _tariff(2.80, 2.58, 3.70, 1.38)
POLOKWANE = _tariff(2.78, 2.55, 3.65, 1.35)
MBOMBELA = _tariff(2.82, 2.60, 3.72, 1.38)

# Lookup order matters for partial matches: metros and cities before provinces
MUNICIPAL_RATES: dict[str, dict[str, float]] = {
    # Major metros
    "City of Johannesburg": JOHANNESBURG,
    "Johannesburg": JOHANNESBURG,
    "Sandton": JOHANNESBURG,
    "Soweto": JOHANNESBURG,
    "City of Cape Town": CAPE_TOWN,
    "Cape Town": CAPE_TOWN,
    "eThekwini": ETHEKWINI,
    "Durban": ETHEKWINI,
    "City of Tshwane": TSHWANE,
    "Pretoria": TSHWANE,
    "Centurion": TSHWANE,
    "Ekurhuleni": EKURHULENI,
    "Germiston": EKURHULENI,
    "Benoni": EKURHULENI,
    "Nelson Mandela Bay": NELSON_MANDELA_BAY,
    "Port Elizabeth": NELSON_MANDELA_BAY,
    "Gqeberha": NELSON_MANDELA_BAY,
    # Secondary cities
    "Mangaung": MANGAUNG,
    "Bloemfontein": MANGAUNG,
    "Buffalo City": BUFFALO_CITY,
    "East London": BUFFALO_CITY,
    "Polokwane": POLOKWANE,
    "Pietersburg": POLOKWANE,
    "Mbombela": MBOMBELA,
    "Nelspruit": MBOMBELA,
    "Rustenburg": _tariff(2.75, 2.52, 3.60, 1.32),
    "Kimberley": _tariff(2.70, 2.48, 3.55, 1.30),
    "Mahikeng": _tariff(2.72, 2.50, 3.58, 1.32),
    # Province-level fallbacks
    "Gauteng": _tariff(3.02, 2.78, 4.10, 1.52),
    "Western Cape": _tariff(2.90, 2.65, 3.80, 1.42),
    "KwaZulu-Natal": _tariff(2.85, 2.62, 3.85, 1.45),
    "Eastern Cape": _tariff(2.78, 2.55, 3.65, 1.35),
    "Free State": _tariff(2.75, 2.52, 3.60, 1.32),
    "Limpopo": _tariff(2.72, 2.50, 3.58, 1.30),
    "Mpumalanga": _tariff(2.78, 2.55, 3.65, 1.35),
    "North West": _tariff(2.72, 2.50, 3.55, 1.30),
    "Northern Cape": _tariff(2.68, 2.45, 3.50, 1.28),
}

ESKOM_DIRECT_NAME = "Eskom Direct"
ESKOM_DIRECT = _tariff(2.72, 2.45, 3.50, 1.28)

WINTER_MONTHS = range(5, 9)  # May-August
SEASONAL_MULTIPLIERS = {
    "WINTER": 1.15,
    "SUMMER": 1.0,
}

PEAK_SUN_HOURS: dict[str, float] = {
    "Gauteng": 5.5,
    "Western Cape": 5.0,
    "KwaZulu-Natal": 4.8,
    "Eastern Cape": 5.0,
    "Free State": 5.8,
    "Limpopo": 5.6,
    "Mpumalanga": 5.2,
    "North West": 5.7,
    "Northern Cape": 6.0,
}
DEFAULT_PEAK_SUN_HOURS = 5.0


def _rate_result(municipality: str, rates: dict[str, float]) -> dict[str, Any]:
    return {
        "rate": rates["prepaid"],
        "municipality": municipality,
        "rates": dict(rates),
        # Municipal prepaid tariffs are inclining block tariffs
        "is_ibt": municipality != ESKOM_DIRECT_NAME,
    }


def _find_municipality(location: str) -> str | None:
    needle = location.strip().lower()
    if not needle:
        return None

    for name in MUNICIPAL_RATES:
        if name.lower() == needle:
            return name

    for name in MUNICIPAL_RATES:
        candidate = name.lower()
        if candidate in needle or needle in candidate:
            return name

    return None


def get_rate(location: str | None) -> dict[str, Any]:
    """
    Look up the prepaid tariff for a city, metro or province.

    Tries an exact case-insensitive match, then a partial match in either
    direction, then falls back to Eskom Direct.

    Returns:
        {"rate", "municipality", "rates", "is_ibt"}
    """
    municipality = _find_municipality(location) if location else None
    if municipality is None:
        return _rate_result(ESKOM_DIRECT_NAME, ESKOM_DIRECT)
    return _rate_result(municipality, MUNICIPAL_RATES[municipality])


def get_season(on: date | None = None) -> str:
    on = on or today_utc()
    return "WINTER" if on.month in WINTER_MONTHS else "SUMMER"


def get_seasonal_rate(location: str | None, on: date | None = None) -> dict[str, Any]:
    """Base rate plus the season multiplier in effect on ``on`` (default today)."""
    base = get_rate(location)
    season = get_season(on)
    multiplier = SEASONAL_MULTIPLIERS[season]
    return {
        **base,
        "season": season,
        "multiplier": multiplier,
        "seasonal_rate": round(base["rate"] * multiplier, 2),
    }


def get_peak_sun_hours(province: str | None) -> float:
    if not province:
        return DEFAULT_PEAK_SUN_HOURS
    return PEAK_SUN_HOURS.get(province, DEFAULT_PEAK_SUN_HOURS)
