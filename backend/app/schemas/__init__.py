from .activity import ActivityContent, ActivityItem, ActivityOwner
from .enums import ContentType, FriendshipStatus
from .friendship import (
    FriendRequestAnswer,
    FriendRequestCreate,
    FriendRequestRead,
    FriendshipRead,
    SocialOverview,
)
from .stats import MonthCount, NamedValue, UserStats
from .user import Profile, Token, UserCreate, UserRead
from .watch_log import (
    ContentCreate,
    ContentRead,
    PlatformRead,
    WatchLogCreate,
    WatchLogRead,
    WatchLogUpdate,
)

__all__ = [
    "ActivityContent",
    "ActivityItem",
    "ActivityOwner",
    "ContentType",
    "FriendshipStatus",
    "FriendRequestAnswer",
    "FriendRequestCreate",
    "FriendRequestRead",
    "FriendshipRead",
    "SocialOverview",
    "MonthCount",
    "NamedValue",
    "UserStats",
    "Profile",
    "Token",
    "UserCreate",
    "UserRead",
    "ContentCreate",
    "ContentRead",
    "PlatformRead",
    "WatchLogCreate",
    "WatchLogRead",
    "WatchLogUpdate",
]
