# backend/Auth/schemas.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from Auth.security import MIN_PASSWORD_LENGTH

from Records.schemas import CamelModel, PartialUpdate

Role = Literal["personnel", "supervisor", "admin", "commander"]


class Credentials(CamelModel):
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class SignupIn(CamelModel):
    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    role: Role = "personnel"


class ProfileUpdate(PartialUpdate):
    not_null = ("first_name", "last_name", "email")

    first_name: Optional[str] = Field(default=None, min_length=2)
    last_name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[EmailStr] = None
    profile_image_url: Optional[str] = None


class UserRead(CamelModel):
    """A user as the API shows it: never with the password."""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginOut(CamelModel):
    session_id: str
    user: UserRead


class SignupOut(CamelModel):
    user: UserRead
