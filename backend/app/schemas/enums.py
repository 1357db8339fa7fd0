# Enums for CineLog
from enum import Enum


class FriendshipStatus(str, Enum):
    """Status of a friendship row"""

    PENDING = "pending"
    ACCEPTED = "accepted"


class ContentType(str, Enum):
    """Kind of content as reported by the metadata provider"""

    MOVIE = "movie"
    TV = "tv"


__all__ = [
    "FriendshipStatus",
    "ContentType",
]
