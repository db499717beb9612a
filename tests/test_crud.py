"""Tests for CRUD operations with mocked session."""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from database.models import Device, Habit, Quotation, User


def execute_result(**attrs):
    result = MagicMock()
    for name, value in attrs.items():
        setattr(result, name, value)
    return result


@pytest.mark.asyncio
async def test_create_user_commits(mock_session):
    from database.crud import create_user

    user = await create_user(
        mock_session,
        email="sipho@example.co.za",
        password_hash="hash",
        name="Sipho",
        province="Gauteng",
        monthly_spend=None,
    )

    assert isinstance(user, User)
    assert user.email == "sipho@example.co.za"
    assert user.monthly_spend == 0
    mock_session.add.assert_called_once_with(user)
    mock_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_budget_missing_user(mock_session):
    with patch("database.crud.get_user", return_value=None):
        from database.crud import update_budget

        assert await update_budget(mock_session, user_id=42, budget=900) is None

    mock_session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_user_profile_applies_coercions(mock_session, sample_user):
    with patch("database.crud.get_user", return_value=sample_user):
        from database.crud import ProfileField, ProfileUpdate, update_user_profile

        result = await update_user_profile(mock_session, sample_user.id, [
            ProfileUpdate(ProfileField.HAS_POOL, 1),
            ProfileUpdate(ProfileField.CITY, ""),
            ProfileUpdate(ProfileField.MONTHLY_SPEND, None),
            ProfileUpdate(ProfileField.HOUSEHOLD_SIZE, "5+"),
        ])

    assert result is sample_user
    assert sample_user.has_pool is True
    assert sample_user.city is None
    assert sample_user.monthly_spend == 0
    assert sample_user.household_size == "5+"
    mock_session.commit.assert_awaited_once()


def test_every_profile_field_has_a_coercion():
    from database.crud import PROFILE_COERCIONS, ProfileField

    assert set(PROFILE_COERCIONS) == set(ProfileField)
    for field in ProfileField:
        assert hasattr(User, field.value)


def test_user_profile_has_no_credentials(sample_user):
    from database.crud import user_profile

    profile = user_profile(sample_user)

    assert "password" not in profile
    assert "email" not in profile
    assert profile["city"] == "Johannesburg"
    assert profile["monthly_spend"] == 1500.0


@pytest.mark.asyncio
async def test_get_user_devices_uses_latest_usage(mock_session):
    device = MagicMock(spec=Device)
    device.id = 7
    device.name = "Geyser"
    device.watts = 3000
    device.surge_watts = None
    device.image_url = None
    device.user_id = 1

    mock_session.execute = AsyncMock(return_value=execute_result(
        all=MagicMock(return_value=[(device, Decimal("2.50"), 5)])
    ))

    from database.crud import get_user_devices

    devices = await get_user_devices(mock_session, user_id=1)

    assert devices == [{
        "id": 7,
        "name": "Geyser",
        "watts": 3000,
        "surge_watts": 0,
        "image_url": None,
        "user_id": 1,
        "hours_per_day": 2.5,
        "days_per_week": 5,
    }]


@pytest.mark.asyncio
@pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
async def test_delete_device(mock_session, rowcount, expected):
    mock_session.execute = AsyncMock(side_effect=[
        execute_result(rowcount=3),
        execute_result(rowcount=rowcount),
    ])

    from database.crud import delete_device

    assert await delete_device(mock_session, device_id=7) is expected
    assert mock_session.execute.await_count == 2
    mock_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_habits_skips_untitled(mock_session):
    from database.crud import create_habits

    created = await create_habits(mock_session, user_id=1, habits=[
        {"title": "Shower in 5 minutes", "description": "Less hot water", "impact_level": "high"},
        {"description": "no title"},
        {"title": "   "},
        {"title": "Air-dry laundry"},
    ])

    assert created == 2
    added = [call.args[0] for call in mock_session.add.call_args_list]
    assert all(isinstance(habit, Habit) for habit in added)
    assert [habit.impact_level for habit in added] == ["HIGH", "MEDIUM"]


@pytest.mark.asyncio
async def test_get_user_habits_completion_flags(mock_session):
    habit = MagicMock(spec=Habit)
    habit.id = 3
    habit.user_id = 1
    habit.title = "Switch off at the wall"
    habit.description = None
    habit.impact_level = "LOW"

    mock_session.execute = AsyncMock(return_value=execute_result(
        all=MagicMock(return_value=[(habit, 1, 4)])
    ))

    from database.crud import get_user_habits

    habits = await get_user_habits(mock_session, user_id=1, on=date(2025, 6, 1))

    assert habits[0]["completed_today"] is True
    assert habits[0]["total_completions"] == 4


@pytest.mark.asyncio
async def test_log_habit_completion_once_per_day(mock_session):
    existing = execute_result()
    existing.scalars.return_value.first.return_value = MagicMock()
    mock_session.execute = AsyncMock(return_value=existing)

    from database.crud import log_habit_completion

    assert await log_habit_completion(mock_session, user_id=1, habit_id=3) is False
    mock_session.add.assert_not_called()


@pytest.mark.asyncio
async def test_log_habit_completion_new(mock_session):
    empty = execute_result()
    empty.scalars.return_value.first.return_value = None
    mock_session.execute = AsyncMock(return_value=empty)

    from database.crud import log_habit_completion

    assert await log_habit_completion(mock_session, user_id=1, habit_id=3, on=date(2025, 6, 1)) is True
    mock_session.add.assert_called_once()
    mock_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_quotation_snapshots_user(mock_session, sample_user):
    from database.crud import create_quotation

    quotation = await create_quotation(
        mock_session,
        sample_user,
        package_tier="STANDARD",
        package_details='{"inverter_kw": 5}',
        total_cost="R85 000",
    )

    assert isinstance(quotation, Quotation)
    assert quotation.user_id == sample_user.id
    assert quotation.user_email == sample_user.email
    assert quotation.user_city == "Johannesburg"
    assert quotation.status == "pending"
