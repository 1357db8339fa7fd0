from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List

from app import models
from app.core.security import hash_password
from app.db import Base, SessionLocal, engine
from app.schemas import ContentCreate, WatchLogCreate
from app.services import social_service, watch_log_service

DEMO_PASSWORD = "demo1234"

DEMO_USERS = [
    {"nickname": "demo", "email": "demo@example.com", "name": "Demo", "surname": "User"},
    {"nickname": "lucia", "email": "lucia@example.com", "name": "Lucía", "surname": "García"},
    {"nickname": "marcos", "email": "marcos@example.com", "name": "Marcos", "surname": "Ruiz"},
    {"nickname": "sofia", "email": "sofia@example.com", "name": "Sofía", "surname": "López"},
]

DEMO_CONTENT = [
    ContentCreate(tmdb_id=27205, title="Origen", type="movie", genre="Acción, Ciencia ficción", year=2010, runtime=148),
    ContentCreate(tmdb_id=1399, title="Juego de tronos", type="tv", genre="Drama, Aventura", year=2011, runtime=60),
    ContentCreate(tmdb_id=496243, title="Parásitos", type="movie", genre="Comedia, Suspense, Drama", year=2019, runtime=132),
    ContentCreate(tmdb_id=66732, title="Stranger Things", type="tv", genre="Drama, Misterio", year=2016, runtime=50),
]


def seed_users(db) -> Dict[str, models.User]:
    users: Dict[str, models.User] = {}
    for data in DEMO_USERS:
        user = db.query(models.User).filter_by(email=data["email"]).first()
        if not user:
            user = models.User(**data, hashed_password=hash_password(DEMO_PASSWORD))
            db.add(user)
            db.commit()
            db.refresh(user)
        users[data["nickname"]] = user
    return users


def seed_friendships(db, users: Dict[str, models.User]) -> None:
    """demo <-> lucia accepted, marcos -> demo pending, sofia unconnected."""
    demo, lucia, marcos = users["demo"], users["lucia"], users["marcos"]

    sent = social_service.send_friend_request(db, demo.id, lucia.id)
    if sent.ok:
        social_service.respond_to_friend_request(db, sent.friendship.id, accept=True)
    social_service.send_friend_request(db, marcos.id, demo.id)


def seed_watch_logs(db, users: Dict[str, models.User]) -> List[models.WatchLogEntry]:
    if db.query(models.WatchLogEntry).count():
        print("Demo watch logs already present, skipping.")
        return []

    now = datetime.now(timezone.utc)
    plan = [
        ("demo", 0, "Netflix", 8, 3),
        ("demo", 2, "Prime", 10, 40),
        ("lucia", 1, "HBO", 9, 1),
        ("lucia", 3, "Netflix", 7, 6),
        ("marcos", 2, None, 9, 2),
    ]
    created = []
    for nickname, content_idx, platform_id, rating, days_ago in plan:
        entry = watch_log_service.log_watch(
            db,
            users[nickname].id,
            WatchLogCreate(
                content=DEMO_CONTENT[content_idx],
                platform_id=platform_id,
                rating=rating,
                watched_at=now - timedelta(days=days_ago),
            ),
        )
        created.append(entry)
    return created


def seed_demo_data() -> None:
    db = SessionLocal()
    try:
        Base.metadata.create_all(bind=engine)

        watch_log_service.seed_platforms(db)
        users = seed_users(db)
        seed_friendships(db, users)
        seed_watch_logs(db, users)

        print("Demo data seeded successfully.")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_data()
