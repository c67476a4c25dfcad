# backend/Records/schemas.py
"""
Request/response shapes for the record endpoints.

Tables keep snake_case attributes; the JSON API speaks camelCase
(`badgeNumber`, `isOnDuty`, ...). Both spellings are accepted on input.
"""
from datetime import datetime, timezone
from typing import ClassVar, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

PersonnelStatus = Literal["active", "on_leave", "suspended"]
CaseStatus = Literal["open", "under_investigation", "closed"]
Priority = Literal["low", "medium", "high", "urgent"]
DutyStatus = Literal["pending", "in_progress", "completed", "cancelled"]
AlertType = Literal["emergency", "warning", "info"]
CommunicationType = Literal["sms", "email", "circular"]
CommunicationStatus = Literal["pending", "sent", "failed"]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("*")
    @classmethod
    def as_utc(cls, value):
        # timestamps leave and enter the API in UTC; naive ones already are
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        return value


class PartialUpdate(CamelModel):
    """Every field optional, but NOT NULL columns may not be sent as null."""

    not_null: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_for_required(self):
        for name in self.not_null:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# ─── PERSONNEL ──────────────────────────────────────────────────────────────
class PersonnelCreate(CamelModel):
    user_id: Optional[str] = None
    badge_number: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    rank: str = Field(min_length=1)
    unit: str = Field(min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    status: PersonnelStatus = "active"
    is_on_duty: bool = False
    current_location: Optional[str] = None


class PersonnelUpdate(PartialUpdate):
    not_null = ("badge_number", "first_name", "last_name", "rank", "unit", "status", "is_on_duty")

    user_id: Optional[str] = None
    badge_number: Optional[str] = Field(default=None, min_length=1)
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    rank: Optional[str] = Field(default=None, min_length=1)
    unit: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    status: Optional[PersonnelStatus] = None
    is_on_duty: Optional[bool] = None
    current_location: Optional[str] = None


class PersonnelRead(PersonnelCreate):
    id: int
    created_at: datetime
    updated_at: datetime


class DutyStatusUpdate(CamelModel):
    is_on_duty: bool
    location: Optional[str] = None


# ─── CASES ──────────────────────────────────────────────────────────────────
class CaseCreate(CamelModel):
    case_number: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    type: str = Field(min_length=1)
    status: CaseStatus = "open"
    priority: Priority = "medium"
    assigned_to: Optional[int] = None
    reported_by: Optional[str] = None
    reported_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None


class CaseUpdate(PartialUpdate):
    not_null = ("case_number", "title", "type", "status", "priority")

    case_number: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    type: Optional[str] = Field(default=None, min_length=1)
    status: Optional[CaseStatus] = None
    priority: Optional[Priority] = None
    assigned_to: Optional[int] = None
    reported_by: Optional[str] = None
    reported_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None


class CaseRead(CaseCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# ─── DUTIES ─────────────────────────────────────────────────────────────────
class DutyCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: datetime
    status: DutyStatus = "pending"
    created_by: Optional[str] = None


class DutyUpdate(PartialUpdate):
    not_null = ("title", "start_time", "end_time", "status")

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    location: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[DutyStatus] = None
    created_by: Optional[str] = None


class DutyRead(DutyCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# ─── ALERTS ─────────────────────────────────────────────────────────────────
class AlertCreate(CamelModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    type: AlertType
    priority: Priority = "medium"
    sent_by: Optional[str] = None
    recipients: Optional[List[str]] = None
    is_read: bool = False


class AlertUpdate(PartialUpdate):
    not_null = ("title", "message", "type", "priority", "is_read")

    title: Optional[str] = Field(default=None, min_length=1)
    message: Optional[str] = Field(default=None, min_length=1)
    type: Optional[AlertType] = None
    priority: Optional[Priority] = None
    sent_by: Optional[str] = None
    recipients: Optional[List[str]] = None
    is_read: Optional[bool] = None


class AlertRead(AlertCreate):
    id: int
    created_at: datetime


# ─── COMMUNICATIONS ─────────────────────────────────────────────────────────
class CommunicationCreate(CamelModel):
    type: CommunicationType
    subject: Optional[str] = None
    message: str = Field(min_length=1)
    sender: Optional[str] = None
    recipients: Optional[List[str]] = None
    status: CommunicationStatus = "pending"
    sent_at: Optional[datetime] = None


class CommunicationUpdate(PartialUpdate):
    not_null = ("type", "message", "status")

    type: Optional[CommunicationType] = None
    subject: Optional[str] = None
    message: Optional[str] = Field(default=None, min_length=1)
    sender: Optional[str] = None
    recipients: Optional[List[str]] = None
    status: Optional[CommunicationStatus] = None
    sent_at: Optional[datetime] = None


class CommunicationRead(CommunicationCreate):
    id: int
    created_at: datetime


# ─── DASHBOARD ──────────────────────────────────────────────────────────────
class DashboardStats(CamelModel):
    total_personnel: int
    active_cases: int
    pending_duties: int
    active_alerts: int


class Message(BaseModel):
    message: str
