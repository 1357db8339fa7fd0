from . import auth, content, me, social, watch_logs

__all__ = [
    "auth",
    "content",
    "me",
    "social",
    "watch_logs",
]
