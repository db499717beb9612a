"""CRUD operations for database."""

import enum
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User, Device, UsageLog, Habit, UserHabitLog, Quotation
from utils.helpers import today_utc
from utils.logger import logger


# ============== USER OPERATIONS ==============

async def get_user(session: AsyncSession, user_id: int) -> User | None:
    result = await session.execute(
        select(User).where(User.id == user_id)
    )
    return result.scalar_one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(
        select(User).where(func.lower(User.email) == email.lower())
    )
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    email: str,
    password_hash: str,
    name: str | None = None,
    province: str | None = None,
    city: str | None = None,
    monthly_spend: float = 0,
) -> User:
    user = User(
        email=email,
        password=password_hash,
        name=name,
        province=province,
        city=city,
        monthly_spend=monthly_spend or 0,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)

    logger.info(f"Created user: {user.id} ({email})")
    return user


async def update_budget(session: AsyncSession, user_id: int, budget: float) -> User | None:
    user = await get_user(session, user_id)
    if not user:
        return None

    user.monthly_budget = budget
    await session.commit()
    await session.refresh(user)

    logger.info(f"Updated monthly budget for user {user_id}: {budget}")
    return user


class ProfileField(enum.Enum):
    """User profile columns that may be changed through the onboarding flow."""

    HOUSEHOLD_SIZE = "household_size"
    PROPERTY_TYPE = "property_type"
    HAS_POOL = "has_pool"
    COOKING_FUEL = "cooking_fuel"
    WORK_FROM_HOME = "work_from_home"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    ONBOARDING_COMPLETED = "onboarding_completed"
    MONTHLY_SPEND = "monthly_spend"
    PROVINCE = "province"
    CITY = "city"


@dataclass(frozen=True)
class ProfileUpdate:
    """One field/value change to a user profile."""

    field: ProfileField
    value: Any


def _as_flag(value: Any) -> bool:
    return bool(value)


def _as_optional(value: Any) -> Any:
    return value if value != "" else None


def _as_amount(value: Any) -> Any:
    return value or 0


# Each enumerated field names its own column and value coercion
PROFILE_COERCIONS = {
    ProfileField.HOUSEHOLD_SIZE: _as_optional,
    ProfileField.PROPERTY_TYPE: _as_optional,
    ProfileField.HAS_POOL: _as_flag,
    ProfileField.COOKING_FUEL: _as_optional,
    ProfileField.WORK_FROM_HOME: _as_optional,
    ProfileField.LATITUDE: _as_optional,
    ProfileField.LONGITUDE: _as_optional,
    ProfileField.ONBOARDING_COMPLETED: _as_flag,
    ProfileField.MONTHLY_SPEND: _as_amount,
    ProfileField.PROVINCE: _as_optional,
    ProfileField.CITY: _as_optional,
}


async def update_user_profile(
    session: AsyncSession,
    user_id: int,
    updates: list[ProfileUpdate],
) -> User | None:
    """Apply enumerated profile changes; returns None if the user does not exist."""
    user = await get_user(session, user_id)
    if not user:
        return None

    for update in updates:
        coerce = PROFILE_COERCIONS[update.field]
        setattr(user, update.field.value, coerce(update.value))

    await session.commit()
    await session.refresh(user)

    logger.info(f"Updated profile for user {user_id}: {[u.field.value for u in updates]}")
    return user


def user_profile(user: User) -> dict[str, Any]:
    """Profile fields used as AI prompt context (no credentials)."""
    return {
        "province": user.province,
        "city": user.city,
        "household_size": user.household_size,
        "property_type": user.property_type,
        "has_pool": user.has_pool,
        "cooking_fuel": user.cooking_fuel,
        "work_from_home": user.work_from_home,
        "monthly_spend": float(user.monthly_spend) if user.monthly_spend is not None else None,
    }


# ============== DEVICE OPERATIONS ==============

def device_to_dict(device: Device, hours_per_day: Any = 0, days_per_week: Any = 7) -> dict[str, Any]:
    return {
        "id": device.id,
        "name": device.name,
        "watts": device.watts,
        "surge_watts": device.surge_watts or 0,
        "image_url": device.image_url,
        "user_id": device.user_id,
        "hours_per_day": float(hours_per_day or 0),
        "days_per_week": int(days_per_week or 7),
    }


async def get_user_devices(session: AsyncSession, user_id: int) -> list[dict[str, Any]]:
    """Devices of a user with hours/days from each device's latest usage log."""
    def latest(column):
        return (
            select(column)
            .where(UsageLog.device_id == Device.id)
            .order_by(UsageLog.log_date.desc(), UsageLog.id.desc())
            .limit(1)
            .correlate(Device)
            .scalar_subquery()
        )

    result = await session.execute(
        select(
            Device,
            func.coalesce(latest(UsageLog.hours_per_day), 0).label("hours_per_day"),
            func.coalesce(latest(UsageLog.days_per_week), 7).label("days_per_week"),
        )
        .where(Device.user_id == user_id)
        .order_by(Device.id)
    )
    return [
        device_to_dict(device, hours_per_day, days_per_week)
        for device, hours_per_day, days_per_week in result.all()
    ]


async def get_device(session: AsyncSession, device_id: int) -> Device | None:
    result = await session.execute(
        select(Device).where(Device.id == device_id)
    )
    return result.scalar_one_or_none()


async def create_device(
    session: AsyncSession,
    name: str,
    watts: int,
    user_id: int,
    surge_watts: int = 0,
    image_url: str | None = None,
) -> Device:
    device = Device(
        name=name,
        watts=watts,
        surge_watts=surge_watts or 0,
        image_url=image_url,
        user_id=user_id,
    )
    session.add(device)
    await session.commit()
    await session.refresh(device)

    logger.info(f"Created device {device.id} for user {user_id}: {name} ({watts}W)")
    return device


async def update_device(
    session: AsyncSession,
    device_id: int,
    name: str,
    watts: int,
    surge_watts: int = 0,
    image_url: str | None = None,
) -> Device | None:
    device = await get_device(session, device_id)
    if not device:
        return None

    device.name = name
    device.watts = watts
    device.surge_watts = surge_watts or 0
    device.image_url = image_url
    await session.commit()
    await session.refresh(device)

    logger.info(f"Updated device {device_id}: {name} ({watts}W)")
    return device


async def delete_device(session: AsyncSession, device_id: int) -> bool:
    """Delete a device and its usage logs. Returns False if it did not exist."""
    await session.execute(
        delete(UsageLog).where(UsageLog.device_id == device_id)
    )
    result = await session.execute(
        delete(Device).where(Device.id == device_id)
    )
    await session.commit()

    deleted = result.rowcount > 0
    if deleted:
        logger.info(f"Deleted device {device_id}")
    return deleted


# ============== USAGE OPERATIONS ==============

async def create_usage_log(
    session: AsyncSession,
    device_id: int,
    hours_per_day: float,
    days_per_week: int = 7,
) -> UsageLog:
    log = UsageLog(
        device_id=device_id,
        hours_per_day=hours_per_day,
        days_per_week=days_per_week or 7,
    )
    session.add(log)
    await session.commit()
    await session.refresh(log)

    logger.info(f"Logged usage for device {device_id}: {hours_per_day}h/day, {days_per_week}d/week")
    return log


async def get_usage_history(session: AsyncSession, user_id: int | None = None) -> list[dict[str, Any]]:
    """Usage logs joined with device names, newest first."""
    query = (
        select(Device.name, UsageLog.hours_per_day, UsageLog.days_per_week, UsageLog.log_date)
        .join(Device, UsageLog.device_id == Device.id)
        .order_by(UsageLog.log_date.desc(), UsageLog.id.desc())
    )
    if user_id is not None:
        query = query.where(Device.user_id == user_id)

    result = await session.execute(query)
    return [
        {
            "name": name,
            "hours_per_day": float(hours),
            "days_per_week": days,
            "date": log_date,
        }
        for name, hours, days, log_date in result.all()
    ]


# ============== HABIT OPERATIONS ==============

async def count_user_habits(session: AsyncSession, user_id: int) -> int:
    result = await session.execute(
        select(func.count(Habit.id)).where(Habit.user_id == user_id)
    )
    return result.scalar_one()


async def create_habits(session: AsyncSession, user_id: int, habits: list[dict[str, Any]]) -> int:
    """Store generated habits; entries without a title are skipped."""
    created = 0
    for habit in habits:
        title = str(habit.get("title") or "").strip()
        if not title:
            continue
        session.add(Habit(
            user_id=user_id,
            title=title[:255],
            description=habit.get("description"),
            impact_level=str(habit.get("impact_level") or "MEDIUM").upper()[:10],
        ))
        created += 1

    await session.commit()
    logger.info(f"Created {created} habit(s) for user {user_id}")
    return created


async def get_user_habits(
    session: AsyncSession,
    user_id: int,
    on: date | None = None,
) -> list[dict[str, Any]]:
    """Habits with today's completion flag and the all-time completion count."""
    on = on or today_utc()

    completed_today = (
        select(func.count(UserHabitLog.id))
        .where(UserHabitLog.habit_id == Habit.id, UserHabitLog.date_completed == on)
        .correlate(Habit)
        .scalar_subquery()
    )
    total_completions = (
        select(func.count(UserHabitLog.id))
        .where(UserHabitLog.habit_id == Habit.id)
        .correlate(Habit)
        .scalar_subquery()
    )

    result = await session.execute(
        select(Habit, completed_today.label("completed_today"), total_completions.label("total"))
        .where(Habit.user_id == user_id)
        .order_by(Habit.id)
    )
    return [
        {
            "id": habit.id,
            "user_id": habit.user_id,
            "title": habit.title,
            "description": habit.description,
            "impact_level": habit.impact_level,
            "completed_today": today_count > 0,
            "total_completions": total,
        }
        for habit, today_count, total in result.all()
    ]


async def log_habit_completion(
    session: AsyncSession,
    user_id: int,
    habit_id: int,
    on: date | None = None,
) -> bool:
    """Record a completion once per day. Returns False if already logged."""
    on = on or today_utc()

    result = await session.execute(
        select(UserHabitLog).where(
            UserHabitLog.user_id == user_id,
            UserHabitLog.habit_id == habit_id,
            UserHabitLog.date_completed == on,
        )
    )
    if result.scalars().first() is not None:
        return False

    session.add(UserHabitLog(user_id=user_id, habit_id=habit_id, date_completed=on))
    await session.commit()

    logger.info(f"User {user_id} completed habit {habit_id} on {on}")
    return True


# ============== QUOTATION OPERATIONS ==============

async def create_quotation(
    session: AsyncSession,
    user: User,
    package_tier: str,
    package_details: str | None = None,
    devices_summary: str | None = None,
    total_cost: str | None = None,
) -> Quotation:
    quotation = Quotation(
        user_id=user.id,
        user_name=user.name,
        user_email=user.email,
        user_city=user.city,
        user_province=user.province,
        package_tier=package_tier,
        package_details=package_details,
        devices_summary=devices_summary,
        total_cost=total_cost,
        status="pending",
    )
    session.add(quotation)
    await session.commit()
    await session.refresh(quotation)

    logger.info(f"Created quotation {quotation.id} for user {user.id}: {package_tier} ({total_cost})")
    return quotation


async def get_user_quotations(session: AsyncSession, user_id: int) -> list[Quotation]:
    result = await session.execute(
        select(Quotation)
        .where(Quotation.user_id == user_id)
        .order_by(Quotation.created_at.desc())
    )
    return list(result.scalars().all())
