"""Canned energy-saving tips served when the AI service is unavailable."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, NamedTuple


def _tip(**fields: Any) -> MappingProxyType:
    fields["implementation_steps"] = tuple(fields["implementation_steps"])
    return MappingProxyType(fields)


class OfflineTipRule(NamedTuple):
    """A keyword group and the single tip it contributes."""

    category: str
    keywords: tuple[str, ...]
    tip: Mapping[str, Any]


GEYSER_TIP = _tip(
    title="Geyser Timer Installation",
    description=(
        "Your geyser (water heater) is likely your highest energy consumer at ~3000W. "
        "Installing a timer to run only 2 hours before peak usage times (morning/evening) "
        "can reduce consumption by 40-50%."
    ),
    potential_savings="R200-400/month",
    implementation_steps=[
        "Purchase a geyser timer (R150-300 at hardware stores)",
        "Set timer for 4-6am and 4-6pm",
        "Consider a geyser blanket for additional 10% savings",
    ],
    priority="HIGH",
    payback_period="1 month",
)

FRIDGE_TIP = _tip(
    title="Refrigerator Efficiency",
    description=(
        "Running at optimal temperature (3-4°C for fridge, -18°C for freezer) prevents "
        "overcooling. Ensure door seals are intact and coils are dust-free."
    ),
    potential_savings="R50-100/month",
    implementation_steps=[
        "Check door seal by closing on a piece of paper - it should grip",
        "Clean condenser coils at the back",
        "Don't place hot food directly in fridge",
    ],
    priority="MEDIUM",
    payback_period="Immediate",
)

LIGHTING_TIP = _tip(
    title="LED Lighting Upgrade",
    description=(
        "Replacing old incandescent or CFL bulbs with LEDs reduces lighting energy by "
        "75-85%. A 60W incandescent = 7W LED with same brightness."
    ),
    potential_savings="R80-150/month",
    implementation_steps=[
        "Count all bulbs in home",
        "Replace most-used bulbs first (living room, kitchen)",
        "Choose warm white (2700K) for living areas",
    ],
    priority="HIGH",
    payback_period="3-6 months",
)

POOL_PUMP_TIP = _tip(
    title="Pool Pump Scheduling",
    description=(
        "Pool pumps typically run 8+ hours but often only need 4-6 hours. "
        "Run during off-peak hours (10pm-6am) for lower rates."
    ),
    potential_savings="R150-300/month",
    implementation_steps=[
        "Reduce run time to 6 hours in summer, 4 hours in winter",
        "Install a timer if not present",
        "Consider a variable speed pump for 70% savings",
    ],
    priority="HIGH",
    payback_period="Immediate with timer",
)

STOVE_TIP = _tip(
    title="Cooking Efficiency",
    description=(
        "Electric stoves at 1500-2500W are major consumers. Use correctly sized pots "
        "(matching element size) and lids to reduce cooking time by 25%."
    ),
    potential_savings="R50-100/month",
    implementation_steps=[
        "Match pot size to element size",
        "Always use lids when boiling",
        "Turn off elements 5 minutes before food is done",
    ],
    priority="MEDIUM",
    payback_period="Immediate",
)

STANDBY_TIP = _tip(
    title="Standby Power Elimination",
    description=(
        "Devices on standby consume 5-10% of household electricity. "
        "TVs, gaming consoles, and chargers are common culprits."
    ),
    potential_savings="R30-80/month",
    implementation_steps=[
        "Use power strips with switches",
        "Unplug phone chargers when not in use",
        "Switch off entertainment center at wall when sleeping",
    ],
    priority="LOW",
    payback_period="Immediate",
)

# Output order follows this table, not the device order
OFFLINE_TIP_RULES: tuple[OfflineTipRule, ...] = (
    OfflineTipRule("geyser", ("geyser", "water heater"), GEYSER_TIP),
    OfflineTipRule("fridge", ("fridge", "refrigerator"), FRIDGE_TIP),
    OfflineTipRule("lighting", ("light", "bulb", "lamp"), LIGHTING_TIP),
    OfflineTipRule("pool_pump", ("pool", "pump"), POOL_PUMP_TIP),
    OfflineTipRule("stove", ("stove", "oven", "hob"), STOVE_TIP),
)


def _device_name(device: Any) -> str:
    if isinstance(device, Mapping):
        name = device.get("name")
    else:
        name = getattr(device, "name", None)
    return str(name).lower() if name else ""


def _as_dict(tip: Mapping[str, Any]) -> dict[str, Any]:
    """Fresh JSON-friendly copy so callers cannot mutate the shared table."""
    result = dict(tip)
    result["implementation_steps"] = list(tip["implementation_steps"])
    return result


def offline_tips(devices: Iterable[Any]) -> dict[str, Any]:
    """
    Select canned tips for a device list.

    Each rule contributes its tip at most once when any device name contains
    one of its keywords (case-insensitive). The standby tip is always last,
    so the result is never empty.

    Returns:
        {"tips": [...], "offline": True}
    """
    names = [name for name in (_device_name(device) for device in devices or []) if name]

    tips = [
        _as_dict(rule.tip)
        for rule in OFFLINE_TIP_RULES
        if any(keyword in name for name in names for keyword in rule.keywords)
    ]
    tips.append(_as_dict(STANDBY_TIP))

    return {"tips": tips, "offline": True}
