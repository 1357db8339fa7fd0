import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from app.schemas.enums import FriendshipStatus
from app.schemas.user import Profile


class FriendRequestCreate(BaseModel):
    target_id: uuid.UUID


class FriendRequestAnswer(BaseModel):
    accept: bool


class FriendshipRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    friend_id: uuid.UUID
    status: FriendshipStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class FriendRequestRead(FriendshipRead):
    """Incoming pending request together with the requester's profile."""

    requester: Profile


class SocialOverview(BaseModel):
    friends: List[Profile] = Field(default_factory=list)
    requests: List[FriendRequestRead] = Field(default_factory=list)
