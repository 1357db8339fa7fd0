import uuid
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class UserCreate(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    name: Optional[str] = None
    surname: Optional[str] = None
    nickname: Optional[str] = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value

    @field_validator("nickname")
    @classmethod
    def _normalize_nickname(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class Profile(BaseModel):
    """Public view of a user as shown to other users."""

    id: uuid.UUID
    nickname: Optional[str] = None
    name: Optional[str] = None
    surname: Optional[str] = None
    contact: str = Field(validation_alias=AliasChoices("contact", "email"))

    model_config = {"from_attributes": True}


class UserRead(Profile):
    is_active: bool
    created_at: datetime


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
