from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from zuhri.core.constants import RoleEnum, StudentLevelEnum
from zuhri.schemas.base import CamelModel
from zuhri.schemas.token import Token

class UserBase(CamelModel):
    email: EmailStr
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

class UserCreate(UserBase):
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password cannot be empty or contain only whitespace.")
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        return v

class ProfileUpdate(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    specialization: Optional[str] = Field(None, max_length=200)
    level: Optional[StudentLevelEnum] = None

class User(UserBase):
    id: int
    profile_image_url: Optional[str] = None
    city: Optional[str] = None
    specialization: Optional[str] = None
    level: Optional[str] = None
    role: RoleEnum
    created_at: Optional[datetime] = None

class AuthResult(CamelModel):
    user: User
    token: Token
