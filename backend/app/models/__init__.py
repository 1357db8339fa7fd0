from .content import Content
from .friendship import Friendship
from .platform import Platform
from .user import User
from .watch_log import WatchLogEntry

__all__ = [
    "Content",
    "Friendship",
    "Platform",
    "User",
    "WatchLogEntry",
]
