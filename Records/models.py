# backend/Records/models.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

from Auth.models import UTCDateTime, utcnow


class Personnel(SQLModel, table=True):
    __tablename__ = "personnel"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id")
    badge_number: str = Field(index=True, unique=True, nullable=False)
    first_name: str
    last_name: str
    rank: str                                       # Constable, Corporal, Sergeant, Inspector …
    unit: str                                       # Patrol, Investigation, Admin …
    phone: Optional[str] = None
    email: Optional[str] = None
    status: str = Field(default="active")           # active | on_leave | suspended
    is_on_duty: bool = Field(default=False, index=True)
    current_location: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class Case(SQLModel, table=True):
    __tablename__ = "cases"

    id: Optional[int] = Field(default=None, primary_key=True)
    case_number: str = Field(index=True, unique=True, nullable=False)
    title: str
    description: Optional[str] = None
    type: str                                       # theft, assault, burglary …
    status: str = Field(default="open", index=True)  # open | under_investigation | closed
    priority: str = Field(default="medium")         # low | medium | high | urgent
    assigned_to: Optional[int] = Field(default=None, foreign_key="personnel.id")
    reported_by: Optional[str] = None
    reported_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime)
    closed_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class Duty(SQLModel, table=True):
    __tablename__ = "duties"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    assigned_to: Optional[int] = Field(default=None, foreign_key="personnel.id", index=True)
    location: Optional[str] = None
    start_time: datetime = Field(sa_type=UTCDateTime)
    end_time: datetime = Field(sa_type=UTCDateTime)
    status: str = Field(default="pending", index=True)  # pending | in_progress | completed | cancelled
    created_by: Optional[str] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class Alert(SQLModel, table=True):
    __tablename__ = "alerts"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    message: str
    type: str                                       # emergency | warning | info
    priority: str = Field(default="medium")
    sent_by: Optional[str] = Field(default=None, foreign_key="users.id")
    recipients: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    is_read: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class Communication(SQLModel, table=True):
    __tablename__ = "communications"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str                                       # sms | email | circular
    subject: Optional[str] = None
    message: str
    sender: Optional[str] = Field(default=None, foreign_key="users.id")
    recipients: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    status: str = Field(default="pending")          # pending | sent | failed
    sent_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
