from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.enums import ContentType


class ContentCreate(BaseModel):
    tmdb_id: int
    title: str
    type: ContentType
    genre: str = ""
    year: Optional[int] = None
    runtime: int = Field(default=0, ge=0)
    poster_path: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value


class ContentRead(ContentCreate):
    id: int

    model_config = {"from_attributes": True}


class PlatformRead(BaseModel):
    id: str
    description: str

    model_config = {"from_attributes": True}


class WatchLogCreate(BaseModel):
    content: ContentCreate
    platform_id: Optional[str] = None
    rating: int = Field(..., ge=0, le=10)
    comment: Optional[str] = None
    watched_at: Optional[datetime] = None


class WatchLogUpdate(BaseModel):
    platform_id: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=0, le=10)
    comment: Optional[str] = None
    watched_at: Optional[datetime] = None


class WatchLogRead(BaseModel):
    id: int
    platform_id: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    watched_at: datetime
    content: ContentRead

    model_config = {"from_attributes": True}
