from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

# Largest id a 64-bit integer column can hold
MAX_USER_ID = 2**63 - 1


def _not_blank(value: Optional[str], field: str) -> Optional[str]:
    if value is not None and not value.strip():
        raise PydanticCustomError("blank", "{field} must not be blank", {"field": field})
    return value


class UserCreate(BaseModel):
    username: str = Field(max_length=64)
    password: str = Field(max_length=128)
    nickname: Optional[str] = Field(default=None, max_length=64)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=32)

    @field_validator("username", "password")
    @classmethod
    def check_not_blank(cls, value, info):
        return _not_blank(value, info.field_name)


class UserLogin(BaseModel):
    username: str
    password: str

    @field_validator("username", "password")
    @classmethod
    def check_not_blank(cls, value, info):
        return _not_blank(value, info.field_name)


class UserUpdate(BaseModel):
    """Fields left as None are not touched by the update"""
    id: int = Field(ge=1, le=MAX_USER_ID)
    username: Optional[str] = Field(default=None, max_length=64)
    password: Optional[str] = Field(default=None, max_length=128)
    nickname: Optional[str] = Field(default=None, max_length=64)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=32)
    status: Optional[int] = None

    @field_validator("username", "password")
    @classmethod
    def check_not_blank(cls, value, info):
        return _not_blank(value, info.field_name)


class UserResponse(BaseModel):
    """Public profile; also the payload cached for a session token"""
    id: int
    username: str
    nickname: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
