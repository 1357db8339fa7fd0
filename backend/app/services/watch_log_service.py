from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, contains_eager

from app import models
from app.core.logging import get_logger
from app.schemas import ContentCreate, WatchLogCreate, WatchLogUpdate

logger = get_logger(__name__)

DEFAULT_PLATFORMS = [
    ("Netflix", "Netflix"),
    ("HBO", "HBO Max"),
    ("Disney", "Disney+"),
    ("Prime", "Amazon Prime Video"),
    ("AppleTV", "Apple TV+"),
    ("Movistar", "Movistar Plus+"),
    ("Cine", "Cine"),
    ("Otro", "Otro"),
]


def seed_platforms(db: Session) -> int:
    """Insert the default streaming platforms that are not there yet."""
    existing = {pid for (pid,) in db.query(models.Platform.id).all()}
    created = 0
    for platform_id, description in DEFAULT_PLATFORMS:
        if platform_id in existing:
            continue
        db.add(models.Platform(id=platform_id, description=description))
        created += 1
    if created:
        db.commit()
        logger.info("platforms_seeded", created=created)
    return created


def list_platforms(db: Session) -> List[models.Platform]:
    return db.query(models.Platform).order_by(models.Platform.description).all()


def upsert_content(db: Session, payload: ContentCreate) -> models.Content:
    """
    Create or refresh the content row keyed by its TMDB id.
    Flushes but does not commit.
    """
    content = db.query(models.Content).filter(models.Content.tmdb_id == payload.tmdb_id).first()
    data = payload.model_dump()
    data["type"] = payload.type.value
    if content is None:
        content = models.Content(**data)
        db.add(content)
    else:
        for field, value in data.items():
            setattr(content, field, value)
    db.flush()
    return content


def log_watch(db: Session, user_id: uuid.UUID, payload: WatchLogCreate) -> models.WatchLogEntry:
    content = upsert_content(db, payload.content)
    entry = models.WatchLogEntry(
        user_id=user_id,
        content_id=content.id,
        platform_id=payload.platform_id,
        rating=payload.rating,
        comment=payload.comment,
    )
    if payload.watched_at is not None:
        entry.watched_at = payload.watched_at
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("watch_logged", user_id=str(user_id), entry_id=entry.id, tmdb_id=content.tmdb_id)
    return entry


def list_history(
    db: Session, user_id: uuid.UUID, query: Optional[str] = None
) -> List[models.WatchLogEntry]:
    """Own entries, newest first; ``query`` matches content title or platform id."""
    q = (
        db.query(models.WatchLogEntry)
        .join(models.WatchLogEntry.content)
        .options(contains_eager(models.WatchLogEntry.content))
        .filter(models.WatchLogEntry.user_id == user_id)
    )
    query = (query or "").strip()
    if query:
        q = q.filter(
            or_(
                models.Content.title.icontains(query, autoescape=True),
                models.WatchLogEntry.platform_id.icontains(query, autoescape=True),
            )
        )
    return q.order_by(models.WatchLogEntry.watched_at.desc(), models.WatchLogEntry.id.desc()).all()


def _get_own_entry(db: Session, user_id: uuid.UUID, entry_id: int) -> Optional[models.WatchLogEntry]:
    entry = db.get(models.WatchLogEntry, entry_id)
    if entry is None or entry.user_id != user_id:
        return None
    return entry


def update_entry(
    db: Session, user_id: uuid.UUID, entry_id: int, payload: WatchLogUpdate
) -> Optional[models.WatchLogEntry]:
    """Apply the fields present in ``payload``. Returns None for missing or foreign entries."""
    entry = _get_own_entry(db, user_id, entry_id)
    if entry is None:
        return None
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field in ("rating", "watched_at") and value is None:
            continue
        setattr(entry, field, value)
    db.commit()
    db.refresh(entry)
    return entry


def delete_entry(db: Session, user_id: uuid.UUID, entry_id: int) -> bool:
    entry = _get_own_entry(db, user_id, entry_id)
    if entry is None:
        return False
    db.delete(entry)
    db.commit()
    logger.info("watch_log_deleted", user_id=str(user_id), entry_id=entry_id)
    return True
