from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ActivityOwner(BaseModel):
    name: Optional[str] = None
    nickname: Optional[str] = None
    surname: Optional[str] = None


class ActivityContent(BaseModel):
    title: str
    type: str
    poster_ref: Optional[str] = None


class ActivityItem(BaseModel):
    """One watch-log entry of a friend, as shown in the activity feed."""

    id: int
    timestamp: datetime
    rating: int
    comment: Optional[str] = None
    owner: ActivityOwner
    content: ActivityContent
