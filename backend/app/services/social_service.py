"""
Friend graph operations: search, requests, responses, friend list, removal
and the friends' activity feed.

A friendship is a single ``friendships`` row per unordered pair. ``user_id``
is whoever sent the request, ``friend_id`` whoever received it; every read
below checks both columns and resolves the *other* party itself.

Reads degrade to an empty list when the store fails (the failure is logged).
Writes report failure through :class:`WriteResult` and never retry.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app import models
from app.core.logging import get_logger
from app.schemas import (
    ActivityContent,
    ActivityItem,
    ActivityOwner,
    FriendRequestRead,
    FriendshipStatus,
    Profile,
)

logger = get_logger(__name__)

MIN_QUERY_LENGTH = 3
SEARCH_PAGE_SIZE = 10
ACTIVITY_FEED_SIZE = 10


@dataclass
class WriteResult:
    """Outcome of a mutation. ``error`` is None on success."""

    error: Optional[str] = None
    conflict: bool = False
    not_found: bool = False
    friendship: Optional[models.Friendship] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _touching(user_id: uuid.UUID):
    return or_(models.Friendship.user_id == user_id, models.Friendship.friend_id == user_id)


def _other_party_id(
    user_id: uuid.UUID, friend_id: uuid.UUID, current_user_id: uuid.UUID
) -> uuid.UUID:
    return friend_id if user_id == current_user_id else user_id


def search_users(db: Session, query: str, current_user_id: uuid.UUID) -> List[Profile]:
    """
    Find users by nickname or email (case-insensitive substring).

    Excludes the caller and anyone already linked to the caller by a
    friendship row in either direction, pending or accepted.
    """
    query = (query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    outgoing = select(models.Friendship.friend_id).where(
        models.Friendship.user_id == current_user_id
    )
    incoming = select(models.Friendship.user_id).where(
        models.Friendship.friend_id == current_user_id
    )

    try:
        users = (
            db.query(models.User)
            .filter(
                or_(
                    models.User.nickname.icontains(query, autoescape=True),
                    models.User.email.icontains(query, autoescape=True),
                ),
                models.User.id != current_user_id,
                models.User.id.not_in(outgoing),
                models.User.id.not_in(incoming),
            )
            .order_by(models.User.nickname, models.User.email)
            .limit(SEARCH_PAGE_SIZE)
            .all()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("user_search_failed", user_id=str(current_user_id), error=str(exc))
        return []

    return [Profile.model_validate(u) for u in users]


def send_friend_request(db: Session, requester_id: uuid.UUID, target_id: uuid.UUID) -> WriteResult:
    """
    Insert a pending friendship from ``requester_id`` to ``target_id``.

    No existence check is made up front: the unique pair key on the table
    turns a duplicate (either direction) into a conflict result.
    """
    friendship = models.Friendship(
        user_id=requester_id,
        friend_id=target_id,
        status=FriendshipStatus.PENDING.value,
    )
    try:
        db.add(friendship)
        db.commit()
        db.refresh(friendship)
    except IntegrityError as exc:
        db.rollback()
        logger.info(
            "friend_request_duplicate",
            requester_id=str(requester_id),
            target_id=str(target_id),
            error=str(exc.orig),
        )
        return WriteResult(error="A friendship or request already exists for this pair", conflict=True)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "friend_request_failed",
            requester_id=str(requester_id),
            target_id=str(target_id),
            error=str(exc),
        )
        return WriteResult(error=str(exc))

    logger.info(
        "friend_request_sent",
        friendship_id=str(friendship.id),
        requester_id=str(requester_id),
        target_id=str(target_id),
    )
    return WriteResult(friendship=friendship)


def get_friend_requests(db: Session, current_user_id: uuid.UUID) -> List[FriendRequestRead]:
    """Pending requests addressed to the user, with the requester's profile."""
    try:
        rows = (
            db.query(models.Friendship)
            .options(joinedload(models.Friendship.requester))
            .filter(
                models.Friendship.friend_id == current_user_id,
                models.Friendship.status == FriendshipStatus.PENDING.value,
            )
            .all()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("friend_requests_read_failed", user_id=str(current_user_id), error=str(exc))
        return []

    return [FriendRequestRead.model_validate(row) for row in rows]


def respond_to_friend_request(db: Session, request_id: uuid.UUID, accept: bool) -> WriteResult:
    """
    Accept (status -> accepted) or reject (row deleted) a request.

    Accepting twice is a harmless repeated update. Rejecting leaves nothing
    behind, so the requester may ask again later.
    An id that matches no row is reported as a ``not_found`` failure.
    """
    try:
        rows = db.query(models.Friendship).filter(models.Friendship.id == request_id)
        if accept:
            affected = rows.update(
                {models.Friendship.status: FriendshipStatus.ACCEPTED.value},
                synchronize_session="fetch",
            )
        else:
            affected = rows.delete(synchronize_session="fetch")
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "friend_request_response_failed",
            request_id=str(request_id),
            accept=accept,
            error=str(exc),
        )
        return WriteResult(error=str(exc))

    if not affected:
        logger.info("friend_request_missing", request_id=str(request_id), accept=accept)
        return WriteResult(error="Friend request not found", not_found=True)

    logger.info(
        "friend_request_answered",
        request_id=str(request_id),
        accept=accept,
    )
    return WriteResult()


def get_friends(db: Session, current_user_id: uuid.UUID) -> List[Profile]:
    """Profiles on the other side of every accepted friendship of the user."""
    try:
        rows = (
            db.query(models.Friendship)
            .options(
                joinedload(models.Friendship.requester),
                joinedload(models.Friendship.recipient),
            )
            .filter(
                models.Friendship.status == FriendshipStatus.ACCEPTED.value,
                _touching(current_user_id),
            )
            .all()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("friends_read_failed", user_id=str(current_user_id), error=str(exc))
        return []

    return [
        Profile.model_validate(row.recipient if row.user_id == current_user_id else row.requester)
        for row in rows
    ]


def remove_friend(db: Session, current_user_id: uuid.UUID, friend_id: uuid.UUID) -> WriteResult:
    """
    Delete the row joining the two users, whichever of them sent the request
    and whatever its status. Removing a missing friendship succeeds.
    """
    try:
        affected = (
            db.query(models.Friendship)
            .filter(
                or_(
                    and_(
                        models.Friendship.user_id == current_user_id,
                        models.Friendship.friend_id == friend_id,
                    ),
                    and_(
                        models.Friendship.user_id == friend_id,
                        models.Friendship.friend_id == current_user_id,
                    ),
                )
            )
            .delete(synchronize_session="fetch")
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "friend_remove_failed",
            user_id=str(current_user_id),
            friend_id=str(friend_id),
            error=str(exc),
        )
        return WriteResult(error=str(exc))

    logger.info(
        "friend_removed",
        user_id=str(current_user_id),
        friend_id=str(friend_id),
        rows=affected,
    )
    return WriteResult()


def get_friend_ids(db: Session, current_user_id: uuid.UUID) -> List[uuid.UUID]:
    """Ids of accepted friends. Raises SQLAlchemyError on store failure."""
    rows = (
        db.query(models.Friendship.user_id, models.Friendship.friend_id)
        .filter(
            models.Friendship.status == FriendshipStatus.ACCEPTED.value,
            _touching(current_user_id),
        )
        .all()
    )
    ids = [_other_party_id(user_id, friend_id, current_user_id) for user_id, friend_id in rows]
    return list(dict.fromkeys(ids))


def get_friends_activity(db: Session, current_user_id: uuid.UUID) -> List[ActivityItem]:
    """
    Latest watch-log entries of the user's accepted friends, newest first.

    The friend set and the entries are read in two separate queries; a
    friendship changing in between is reflected only on the next call.
    """
    try:
        friend_ids = get_friend_ids(db, current_user_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("activity_friends_read_failed", user_id=str(current_user_id), error=str(exc))
        return []

    if not friend_ids:
        return []

    try:
        entries = (
            db.query(models.WatchLogEntry)
            .options(
                joinedload(models.WatchLogEntry.owner),
                joinedload(models.WatchLogEntry.content),
            )
            .filter(models.WatchLogEntry.user_id.in_(friend_ids))
            .order_by(models.WatchLogEntry.watched_at.desc(), models.WatchLogEntry.id.desc())
            .limit(ACTIVITY_FEED_SIZE)
            .all()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("activity_entries_read_failed", user_id=str(current_user_id), error=str(exc))
        return []

    return [
        ActivityItem(
            id=entry.id,
            timestamp=entry.watched_at,
            rating=entry.rating,
            comment=entry.comment,
            owner=ActivityOwner(
                name=entry.owner.name,
                nickname=entry.owner.nickname,
                surname=entry.owner.surname,
            ),
            content=ActivityContent(
                title=entry.content.title,
                type=entry.content.type,
                poster_ref=entry.content.poster_path,
            ),
        )
        for entry in entries
    ]
