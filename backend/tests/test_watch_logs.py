from fastapi.testclient import TestClient

from app import models
from app.schemas import ContentCreate
from app.services import watch_log_service

from .utils import register_and_login

DUNE = {"tmdb_id": 438631, "title": "Dune", "type": "movie", "genre": "Science Fiction, Adventure", "year": 2021, "runtime": 155}


def _log(client: TestClient, headers: dict, **overrides) -> dict:
    payload = {"content": DUNE, "platform_id": "HBO", "rating": 8, "comment": "Spice"}
    payload.update(overrides)
    resp = client.post("/api/watch-logs", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_platforms_are_seeded_on_startup(client: TestClient):
    resp = client.get("/api/platforms")
    assert resp.status_code == 200
    ids = {p["id"] for p in resp.json()}
    assert {"Netflix", "HBO", "Disney", "Prime"}.issubset(ids)
    descriptions = [p["description"] for p in resp.json()]
    assert descriptions == sorted(descriptions)


def test_log_and_list_history(client: TestClient):
    _, headers = register_and_login(client, "alice")

    older = _log(client, headers, watched_at="2024-01-10T20:00:00")
    newer = _log(
        client,
        headers,
        content={"tmdb_id": 1399, "title": "Game of Thrones", "type": "tv", "genre": "Drama"},
        platform_id="HBO",
        rating=10,
        watched_at="2024-02-01T21:30:00",
    )

    assert older["content"]["title"] == "Dune"
    assert older["content"]["runtime"] == 155

    history = client.get("/api/watch-logs", headers=headers)
    assert history.status_code == 200
    assert [e["id"] for e in history.json()] == [newer["id"], older["id"]]


def test_same_content_is_upserted_by_tmdb_id(client: TestClient, db):
    _, headers = register_and_login(client, "alice")

    _log(client, headers)
    _log(client, headers, content={**DUNE, "title": "Dune: Part One"})

    contents = db.query(models.Content).all()
    assert len(contents) == 1
    assert contents[0].title == "Dune: Part One"
    assert db.query(models.WatchLogEntry).count() == 2


def test_rating_must_be_between_zero_and_ten(client: TestClient):
    _, headers = register_and_login(client, "alice")

    too_high = client.post("/api/watch-logs", json={"content": DUNE, "rating": 11}, headers=headers)
    negative = client.post("/api/watch-logs", json={"content": DUNE, "rating": -1}, headers=headers)

    assert too_high.status_code == 422
    assert negative.status_code == 422


def test_unknown_platform_is_rejected(client: TestClient):
    _, headers = register_and_login(client, "alice")

    resp = client.post(
        "/api/watch-logs", json={"content": DUNE, "rating": 5, "platform_id": "Betamax"}, headers=headers
    )
    assert resp.status_code == 400


def test_update_entry(client: TestClient):
    _, headers = register_and_login(client, "alice")
    entry = _log(client, headers)

    resp = client.patch(
        f"/api/watch-logs/{entry['id']}",
        json={"rating": 6, "comment": "Second watch was slower", "platform_id": "Netflix"},
        headers=headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["rating"] == 6
    assert body["comment"] == "Second watch was slower"
    assert body["platform_id"] == "Netflix"
    assert body["watched_at"] == entry["watched_at"]


def test_delete_entry(client: TestClient):
    _, headers = register_and_login(client, "alice")
    entry = _log(client, headers)

    assert client.delete(f"/api/watch-logs/{entry['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/watch-logs/{entry['id']}", headers=headers).status_code == 404
    assert client.get("/api/watch-logs", headers=headers).json() == []


def test_entries_of_other_users_are_not_editable(client: TestClient):
    _, alice = register_and_login(client, "alice")
    _, bob = register_and_login(client, "bob")
    entry = _log(client, alice)

    assert client.patch(f"/api/watch-logs/{entry['id']}", json={"rating": 1}, headers=bob).status_code == 404
    assert client.delete(f"/api/watch-logs/{entry['id']}", headers=bob).status_code == 404
    assert client.get("/api/watch-logs", headers=bob).json() == []


def test_seed_platforms_is_idempotent(db):
    assert watch_log_service.seed_platforms(db) == len(watch_log_service.DEFAULT_PLATFORMS)
    assert watch_log_service.seed_platforms(db) == 0


def test_upsert_content_flushes_without_commit(db):
    content = watch_log_service.upsert_content(
        db, ContentCreate(tmdb_id=603, title="The Matrix", type="movie")
    )
    assert content.id is not None
    db.rollback()
    assert db.query(models.Content).count() == 0


def test_history_search_matches_title_or_platform(client: TestClient):
    _, headers = register_and_login(client, "alice")
    dune = _log(client, headers, platform_id="HBO", watched_at="2024-01-10T20:00:00")
    matrix = _log(
        client,
        headers,
        content={"tmdb_id": 603, "title": "The Matrix", "type": "movie"},
        platform_id="Netflix",
        watched_at="2024-02-01T21:30:00",
    )

    by_title = client.get("/api/watch-logs", params={"q": "dUNe"}, headers=headers)
    by_platform = client.get("/api/watch-logs", params={"q": "netf"}, headers=headers)
    no_match = client.get("/api/watch-logs", params={"q": "%"}, headers=headers)
    blank = client.get("/api/watch-logs", params={"q": "  "}, headers=headers)

    assert [e["id"] for e in by_title.json()] == [dune["id"]]
    assert [e["id"] for e in by_platform.json()] == [matrix["id"]]
    assert no_match.json() == []
    assert [e["id"] for e in blank.json()] == [matrix["id"], dune["id"]]


def test_history_search_is_scoped_to_owner(client: TestClient):
    _, alice = register_and_login(client, "alice")
    _, bob = register_and_login(client, "bob")
    _log(client, alice)

    assert client.get("/api/watch-logs", params={"q": "Dune"}, headers=bob).json() == []
