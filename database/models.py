"""SQLAlchemy models: User, Device, UsageLog, Habit, UserHabitLog, Quotation."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class User(Base):
    """Registered household account with its onboarding profile."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    province: Mapped[str | None] = mapped_column(String(50), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    monthly_spend: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, server_default="0")
    monthly_budget: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, server_default="0")

    # Onboarding profile
    household_size: Mapped[str | None] = mapped_column(String(10), nullable=True)
    property_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    has_pool: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")
    cooking_fuel: Mapped[str | None] = mapped_column(String(20), nullable=True)
    work_from_home: Mapped[str | None] = mapped_column(String(20), nullable=True)
    latitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 7), nullable=True)
    longitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 7), nullable=True)
    onboarding_completed: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    devices: Mapped[list["Device"]] = relationship(back_populates="user")
    habits: Mapped[list["Habit"]] = relationship(back_populates="user")
    quotations: Mapped[list["Quotation"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


class Device(Base):
    """Electrical appliance in a household inventory."""

    __tablename__ = "devices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    watts: Mapped[int] = mapped_column(Integer, nullable=False)
    surge_watts: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    # Relationships
    user: Mapped["User | None"] = relationship(back_populates="devices")
    usage_logs: Mapped[list["UsageLog"]] = relationship(
        back_populates="device", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Device {self.id}: {self.name} ({self.watts}W)>"


class UsageLog(Base):
    """How long a device runs, as reported on a given day."""

    __tablename__ = "usage_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("devices.id", ondelete="CASCADE"), nullable=False, index=True
    )
    hours_per_day: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    days_per_week: Mapped[int] = mapped_column(Integer, default=7, server_default="7")
    log_date: Mapped[date] = mapped_column("date", Date, server_default=func.current_date())

    # Relationships
    device: Mapped["Device"] = relationship(back_populates="usage_logs")

    def __repr__(self) -> str:
        return f"<UsageLog {self.id}: device={self.device_id} {self.hours_per_day}h>"


class Habit(Base):
    """Daily energy-saving habit generated for a user."""

    __tablename__ = "habits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    impact_level: Mapped[str] = mapped_column(String(10), default="MEDIUM", server_default="MEDIUM")

    # Relationships
    user: Mapped["User"] = relationship(back_populates="habits")
    logs: Mapped[list["UserHabitLog"]] = relationship(back_populates="habit")

    def __repr__(self) -> str:
        return f"<Habit {self.id}: {self.title}>"


class UserHabitLog(Base):
    """One completion of a habit on a given day."""

    __tablename__ = "user_habit_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    habit_id: Mapped[int] = mapped_column(Integer, ForeignKey("habits.id"), nullable=False)
    date_completed: Mapped[date] = mapped_column(Date, server_default=func.current_date())

    # Relationships
    habit: Mapped["Habit"] = relationship(back_populates="logs")

    def __repr__(self) -> str:
        return f"<UserHabitLog habit={self.habit_id} on {self.date_completed}>"


class Quotation(Base):
    """Solar package quotation request, with a snapshot of the requesting user."""

    __tablename__ = "quotations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Snapshot at request time
    user_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    user_email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    user_city: Mapped[str | None] = mapped_column(String(50), nullable=True)
    user_province: Mapped[str | None] = mapped_column(String(50), nullable=True)

    package_tier: Mapped[str] = mapped_column(String(20), nullable=False)
    package_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    devices_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_cost: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Status: pending, contacted, accepted, declined
    status: Mapped[str] = mapped_column(String(20), default="pending", server_default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="quotations")

    def __repr__(self) -> str:
        return f"<Quotation {self.id}: {self.package_tier} ({self.status})>"
