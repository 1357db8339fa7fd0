from datetime import datetime

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app import models
from app.core.security import hash_password


def register_and_login(
    client: TestClient, nickname: str, password: str = "secret123", **profile
) -> tuple[str, dict]:
    """Register a user through the API and return (user_id, auth headers)."""
    email = profile.pop("email", f"{nickname}@example.com")
    payload = {"email": email, "password": password, "nickname": nickname, **profile}
    reg_resp = client.post("/api/auth/register", json=payload)
    assert reg_resp.status_code == 201, reg_resp.text
    token_resp = client.post(
        "/api/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert token_resp.status_code == 200
    token = token_resp.json()["access_token"]
    return reg_resp.json()["id"], {"Authorization": f"Bearer {token}"}


def make_user(db, nickname: str, email: str | None = None, **profile) -> models.User:
    user = models.User(
        email=email or f"{nickname}@example.com",
        nickname=nickname,
        name=profile.get("name", nickname.title()),
        surname=profile.get("surname"),
        hashed_password=hash_password("secret123"),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_friendship(db, requester: models.User, recipient: models.User, status: str = "accepted"):
    friendship = models.Friendship(user_id=requester.id, friend_id=recipient.id, status=status)
    db.add(friendship)
    db.commit()
    db.refresh(friendship)
    return friendship


def make_entry(
    db,
    user: models.User,
    tmdb_id: int,
    title: str,
    watched_at: datetime,
    rating: int = 7,
    content_type: str = "movie",
    comment: str | None = None,
    platform_id: str | None = None,
    genre: str = "Drama",
) -> models.WatchLogEntry:
    content = db.query(models.Content).filter(models.Content.tmdb_id == tmdb_id).first()
    if content is None:
        content = models.Content(
            tmdb_id=tmdb_id,
            title=title,
            type=content_type,
            genre=genre,
            poster_path=f"/poster-{tmdb_id}.jpg",
        )
        db.add(content)
        db.flush()
    entry = models.WatchLogEntry(
        user_id=user.id,
        content_id=content.id,
        platform_id=platform_id,
        rating=rating,
        comment=comment,
        watched_at=watched_at,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


class FailingSession:
    """Stand-in for a session whose database connection is gone."""

    def __init__(self):
        self.rollbacks = 0

    def _fail(self, statement: str):
        raise OperationalError(statement, {}, Exception("database is unavailable"))

    def query(self, *entities, **kwargs):
        self._fail("SELECT")

    def add(self, instance):
        pass

    def commit(self):
        self._fail("COMMIT")

    def refresh(self, instance):
        pass

    def rollback(self):
        self.rollbacks += 1
