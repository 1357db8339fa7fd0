from __future__ import annotations

from collections import Counter
from typing import Iterable

from app import models
from app.schemas import MonthCount, NamedValue, UserStats

UNKNOWN = "Unknown"
TOP_GENRES = 5


def _genres(entry: models.WatchLogEntry) -> list[str]:
    raw = entry.content.genre if entry.content is not None else None
    if not raw:
        return [UNKNOWN]
    return [g for g in raw.split(", ") if g] or [UNKNOWN]


def build_user_stats(entries: Iterable[models.WatchLogEntry]) -> UserStats:
    """
    Aggregate a user's watch log for the dashboard: totals per month,
    per platform and the most watched genres.
    """
    entries = list(entries)
    months: Counter[str] = Counter()
    platforms: Counter[str] = Counter()
    genres: Counter[str] = Counter()

    for entry in entries:
        months[entry.watched_at.strftime("%Y-%m")] += 1
        platforms[entry.platform_id or UNKNOWN] += 1
        genres.update(_genres(entry))

    # stable sort: ties keep first-seen order
    top = sorted(genres.items(), key=lambda item: item[1], reverse=True)[:TOP_GENRES]

    return UserStats(
        total=len(entries),
        by_month=[MonthCount(name=key, count=months[key]) for key in sorted(months)],
        by_platform=[NamedValue(name=name, value=count) for name, count in platforms.items()],
        top_genres=[NamedValue(name=name, value=count) for name, count in top],
    )
