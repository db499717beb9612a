"""Prompt builders for each advice category."""

import json
from collections.abc import Iterable, Mapping
from typing import Any

JSON_ONLY = "Return ONLY the JSON object. No markdown fences, no text before or after."


def _devices_json(devices: Iterable[Any]) -> str:
    return json.dumps([dict(device) if isinstance(device, Mapping) else device for device in devices], default=str)


def _context_block(context: Mapping[str, Any] | None) -> str:
    if not context:
        return ""
    lines = [f"- {key}: {value}" for key, value in context.items() if value not in (None, "")]
    if not lines:
        return ""
    return "Household context:\n" + "\n".join(lines) + "\n"


def tips_prompt(devices: Iterable[Any], context: Mapping[str, Any] | None = None) -> str:
    return f"""
You are a Senior Electrical Engineer and Energy Consultant with 20+ years of experience
in South African residential energy systems. You are conducting a professional energy audit.

Analyze the following electrical device inventory and usage patterns:
{_devices_json(devices)}
{_context_block(context)}
Provide PROFESSIONAL, ENGINEERING-GRADE recommendations. Your analysis should reflect:
1. Deep technical knowledge of electrical systems and power factor
2. Understanding of South African electricity tariffs (Eskom, Municipal)
3. Practical experience with load management and demand-side optimization
4. Knowledge of modern energy-efficient technologies (inverter motors, LED, VSD drives)
5. Insight into BEHAVIORAL and OPERATIONAL efficiency (e.g. "Run dishwasher only when full")

SPECIFIC CHECKS:
- Dishwasher/Washing Machine: full loads, eco-cycles, lower temperatures.
- Geyser: timing, temperature settings, blankets.
- Pool Pump: reduced running hours in winter vs summer.
- Fridge: seals and spacing if consumption seems high.

FORMAT YOUR RESPONSE AS JSON:
{{
  "tips": [
    {{
      "title": "Technical title",
      "description": "Current consumption, cause of inefficiency, solution, savings calculation.",
      "potential_savings": "R###/month",
      "implementation_steps": ["Step 1", "Step 2", "Step 3"],
      "priority": "HIGH/MEDIUM/LOW",
      "payback_period": "X months"
    }}
  ]
}}

Cite specific wattages and calculations, reference the tariff given above or ~R2.50/kWh,
and prioritize by ROI and ease of implementation.
{JSON_ONLY}
"""


def habits_prompt(devices: Iterable[Any]) -> str:
    return f"""
Act as a Professional Energy Consultant.
Analyze this inventory for a South African home:
{_devices_json(devices)}

Create 5-7 personalized daily energy-saving habits, focused on BEHAVIORAL changes
based on the SPECIFIC devices present.

Examples:
- Pool Pump -> "Run pool pump for 4h only (Winter)"
- Tumble Dryer -> "Sun dry one load of laundry"
- Geyser -> "Shower in under 5 minutes"
- General -> "Turn off lights in empty rooms"

Return JSON:
{{
  "habits": [
    {{ "title": "Short Title", "description": "Actionable description", "impact_level": "HIGH/MEDIUM/LOW" }}
  ]
}}
{JSON_ONLY}
"""


def completeness_prompt(devices: Iterable[Any]) -> str:
    return f"""
Analyze this list of electrical devices entered by a user for a home energy audit:
{_devices_json(devices)}

Identify common household appliances that are MISSING from this list. Check for:
Geyser / Water Heater, Refrigerator, Washing Machine, Electric Stove / Oven,
WiFi Router, Lighting, Kettle, TV.

Return a JSON object with a "missing_items" array. Each item has:
- name: (string) the missing appliance
- question: (string) a friendly question, e.g. "I didn't see a Geyser. Do you have an electric water heater?"
- estimated_watts: (number) typical wattage

Limit to the top 3 most likely missing essentials. If the list looks complete, return
{{"missing_items": []}}.
{JSON_ONLY}
"""


def interview_prompt(devices: Iterable[Any]) -> str:
    return f"""
You are an inquisitive Energy Auditor.
Review this list of devices:
{_devices_json(devices)}

Determine the ONE most critical appliance a typical home has that is missing here
(e.g. Geyser, Fridge, Stove, Kettle). Ask a friendly question to check if they have it
and suggest the device details in case they say "Yes".

Return JSON:
{{
  "question": "I noticed you don't have a Geyser listed. Do you use an electric water heater?",
  "suggested_device": {{ "name": "Geyser (150L)", "watts": 3000, "surge_watts": 0 }}
}}
If the list already has all essentials, return exactly: null
"""


def onboarding_prompt(profile: Mapping[str, Any], devices: Iterable[Any]) -> str:
    return f"""
You are onboarding a new user of a South African home energy audit app.
What we know about the household so far:
{json.dumps(dict(profile), default=str)}
Devices captured so far:
{_devices_json(devices)}

Choose the ONE next question that would most improve the energy audit. Prefer unanswered
profile fields (household_size, property_type, has_pool, cooking_fuel, work_from_home).

Return JSON:
{{
  "question": "How many people live in your home?",
  "field": "household_size",
  "options": ["1", "2", "3-4", "5+"]
}}
If nothing important is missing, return {{"complete": true}}.
{JSON_ONLY}
"""


def solar_quotes_prompt(
    devices: Iterable[Any],
    tariff: Mapping[str, Any],
    peak_sun_hours: float,
    monthly_spend: float | None,
) -> str:
    return f"""
You are a solar PV designer quoting residential backup/solar packages in South Africa.

Device inventory (watts, surge_watts, hours_per_day):
{_devices_json(devices)}

Electricity tariff: {tariff.get("municipality")} at R{tariff.get("seasonal_rate", tariff.get("rate"))}/kWh
({tariff.get("season", "")} season, inclining block tariff: {tariff.get("is_ibt")}).
Peak sun hours: {peak_sun_hours} h/day.
Current monthly electricity spend: {f"R{monthly_spend}" if monthly_spend else "unknown"}.

Size THREE packages (BASIC = load-shedding backup of essentials, STANDARD = daytime
solar offset, PREMIUM = near off-grid). Size inverters for the surge load of the devices
each tier covers and batteries for the evening load.

Return JSON:
{{
  "packages": [
    {{
      "tier": "BASIC/STANDARD/PREMIUM",
      "inverter_kw": 5,
      "panels": 6,
      "panel_watts": 550,
      "battery_kwh": 5.1,
      "estimated_cost": "R##### ",
      "monthly_savings": "R###",
      "payback_years": 5,
      "covers_devices": ["Fridge", "Lights"]
    }}
  ]
}}
{JSON_ONLY}
"""


def device_scan_prompt() -> str:
    return f"""
Analyze this image of an electrical device.
Identify the device type and estimate its power consumption details.
Return a JSON object with:
- name: (string) a short, descriptive name (e.g. "Kettle", "LED Bulb")
- watts: (number) estimated running wattage
- surge_watts: (number) estimated surge wattage (0 if none)
- hours_per_day: (number) estimated average daily usage in hours (e.g. 0.5 for a kettle)
- days_per_week: (number) estimated usage days per week (usually 7)

If you cannot identify the device, make a best guess based on similar looking appliances.
{JSON_ONLY}
"""
