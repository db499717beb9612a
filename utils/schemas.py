"""Request and response models for the HTTP API."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from database.crud import ProfileField, ProfileUpdate

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RequestModel(BaseModel):
    """Accepts both the camelCase aliases and snake_case field names."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


# ============== AUTH / USERS ==============

class RegisterRequest(RequestModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)
    name: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=50)
    city: str | None = Field(default=None, max_length=100)
    monthly_spend: float | None = Field(default=None, ge=0)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class LoginRequest(RequestModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None = None
    province: str | None = None
    city: str | None = None
    monthly_spend: float | None = 0
    monthly_budget: float | None = 0
    household_size: str | None = None
    property_type: str | None = None
    has_pool: bool | None = False
    cooking_fuel: str | None = None
    work_from_home: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    onboarding_completed: bool | None = False


class AuthResponse(UserResponse):
    token: str


class OnboardingRequest(RequestModel):
    """Only the fields present in the request body are updated."""

    household_size: str | None = Field(default=None, max_length=10)
    property_type: str | None = Field(default=None, max_length=20)
    has_pool: bool | None = None
    cooking_fuel: str | None = Field(default=None, max_length=20)
    work_from_home: str | None = Field(default=None, max_length=20)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    onboarding_completed: bool | None = None
    monthly_spend: float | None = Field(default=None, ge=0)
    province: str | None = Field(default=None, max_length=50)
    city: str | None = Field(default=None, max_length=100)

    def to_profile_updates(self) -> list[ProfileUpdate]:
        return [
            ProfileUpdate(field=ProfileField(name), value=getattr(self, name))
            for name in sorted(self.model_fields_set)
        ]


class BudgetRequest(RequestModel):
    budget: float = Field(..., ge=0)


class BudgetResponse(BaseModel):
    monthly_budget: float


# ============== DEVICES / USAGE ==============

class DeviceCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    watts: int = Field(..., ge=1, le=50000)
    surge_watts: int = Field(default=0, ge=0, le=100000)
    image_url: str | None = None
    user_id: int


class DeviceUpdate(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    watts: int = Field(..., ge=1, le=50000)
    surge_watts: int = Field(default=0, ge=0, le=100000)
    image_url: str | None = None


class DeviceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    watts: int
    surge_watts: int | None = 0
    image_url: str | None = None
    user_id: int | None = None
    hours_per_day: float = 0
    days_per_week: int = 7


class UsageCreate(RequestModel):
    device_id: int
    hours_per_day: float = Field(..., ge=0, le=24)
    days_per_week: int = Field(default=7, ge=1, le=7)


class UsageLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    device_id: int
    hours_per_day: float
    days_per_week: int
    date: dt.date | None = Field(default=None, validation_alias="log_date")


class UsageHistoryItem(BaseModel):
    name: str
    hours_per_day: float
    days_per_week: int
    date: dt.date | None = None


# ============== AI ADVICE ==============

class DeviceInput(RequestModel):
    """Device descriptor as sent by the app for AI advice."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, max_length=255)
    watts: float = Field(default=0, ge=0)
    surge_watts: float | None = Field(default=None, ge=0)
    hours_per_day: float | None = Field(default=None, ge=0, le=24, alias="hoursPerDay")
    days_per_week: int | None = Field(default=None, ge=0, le=7)


def devices_payload(devices: list[DeviceInput]) -> list[dict[str, Any]]:
    """Plain dicts for prompts and cache keys, unset fields dropped."""
    return [device.model_dump(exclude_none=True) for device in devices]


class DevicesRequest(RequestModel):
    devices: list[DeviceInput]


class TipsRequest(DevicesRequest):
    user_id: int | None = Field(default=None, alias="userId")
    location: str | None = None
    province: str | None = None


class ScanRequest(RequestModel):
    image_base64: str = Field(..., min_length=1, alias="imageBase64")
    mime_type: str = Field(default="image/jpeg", alias="mimeType")


class OnboardRequest(RequestModel):
    devices: list[DeviceInput] = Field(default_factory=list)
    user_id: int | None = Field(default=None, alias="userId")
    profile: dict[str, Any] = Field(default_factory=dict)


class SolarQuoteRequest(DevicesRequest):
    location: str | None = None
    province: str | None = None
    monthly_spend: float | None = Field(default=None, ge=0)


# ============== HABITS ==============

class HabitResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    impact_level: str
    completed_today: bool = False
    total_completions: int = 0


class HabitLogRequest(RequestModel):
    user_id: int = Field(..., alias="userId")
    habit_id: int = Field(..., alias="habitId")


# ============== QUOTATIONS / REPORTS ==============

class QuotationCreate(RequestModel):
    package_tier: str = Field(..., min_length=1, max_length=20)
    package_details: dict[str, Any] | str | None = None
    devices_summary: str | None = None
    total_cost: str | None = Field(default=None, max_length=50)


class QuotationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    user_name: str | None = None
    user_email: str | None = None
    user_city: str | None = None
    user_province: str | None = None
    package_tier: str
    package_details: str | None = None
    devices_summary: str | None = None
    total_cost: str | None = None
    status: str
    created_at: dt.datetime | None = None


class ReportRequest(RequestModel):
    user_id: int


class MessageResponse(BaseModel):
    message: str
