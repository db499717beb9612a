"""Tests for the offline tip selector."""

from services.offline_tips import OFFLINE_TIP_RULES, offline_tips


def titles(result):
    return [tip["title"] for tip in result["tips"]]


def test_empty_device_list_gets_standby_tip():
    result = offline_tips([])
    assert result["offline"] is True
    assert titles(result) == ["Standby Power Elimination"]


def test_none_devices_gets_standby_tip():
    assert titles(offline_tips(None)) == ["Standby Power Elimination"]


def test_tips_follow_table_order_not_device_order():
    devices = [
        {"name": "Stove"},
        {"name": "Pool pump"},
        {"name": "Kitchen light"},
        {"name": "Fridge"},
        {"name": "Geyser"},
    ]
    assert titles(offline_tips(devices)) == [
        "Geyser Timer Installation",
        "Refrigerator Efficiency",
        "LED Lighting Upgrade",
        "Pool Pump Scheduling",
        "Cooking Efficiency",
        "Standby Power Elimination",
    ]


def test_each_group_contributes_once():
    devices = [{"name": "Bedroom lamp"}, {"name": "LED bulb"}, {"name": "Porch light"}]
    assert titles(offline_tips(devices)) == ["LED Lighting Upgrade", "Standby Power Elimination"]


def test_matching_is_case_insensitive():
    assert "Geyser Timer Installation" in titles(offline_tips([{"name": "GEYSER 150L"}]))
    assert "Refrigerator Efficiency" in titles(offline_tips([{"name": "Samsung Refrigerator"}]))


def test_water_heater_alias():
    assert titles(offline_tips([{"name": "Solar water heater"}]))[0] == "Geyser Timer Installation"


def test_unmatched_and_nameless_devices_are_ignored():
    devices = [{"name": "Television"}, {"watts": 100}, {"name": None}, {"name": ""}]
    assert titles(offline_tips(devices)) == ["Standby Power Elimination"]


def test_accepts_objects_with_name_attribute():
    class Row:
        name = "Oven"

    assert titles(offline_tips([Row()]))[0] == "Cooking Efficiency"


def test_returned_tips_are_copies():
    result = offline_tips([{"name": "Geyser"}])
    result["tips"][0]["implementation_steps"].append("mutated")
    result["tips"][0]["title"] = "mutated"

    fresh = offline_tips([{"name": "Geyser"}])
    assert fresh["tips"][0]["title"] == "Geyser Timer Installation"
    assert "mutated" not in fresh["tips"][0]["implementation_steps"]


def test_tip_records_are_complete():
    fields = {"title", "description", "potential_savings", "implementation_steps", "priority", "payback_period"}
    for rule in OFFLINE_TIP_RULES:
        assert set(rule.tip) == fields
    for tip in offline_tips([{"name": "Geyser"}])["tips"]:
        assert set(tip) == fields
        assert isinstance(tip["implementation_steps"], list)
