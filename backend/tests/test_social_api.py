import uuid

from fastapi.testclient import TestClient

from .utils import register_and_login


def test_friendship_lifecycle(client: TestClient):
    alice_id, alice = register_and_login(client, "alice", name="Alice")
    bob_id, bob = register_and_login(client, "bob", name="Bob")

    search = client.get("/api/social/search", params={"q": "bob"}, headers=alice)
    assert search.status_code == 200
    assert [p["id"] for p in search.json()] == [bob_id]
    assert set(search.json()[0]) == {"id", "nickname", "name", "surname", "contact"}

    sent = client.post("/api/social/requests", json={"target_id": bob_id}, headers=alice)
    assert sent.status_code == 201
    request_body = sent.json()
    assert request_body["user_id"] == alice_id
    assert request_body["friend_id"] == bob_id
    assert request_body["status"] == "pending"

    # Pending requests hide each side from the other's search
    assert client.get("/api/social/search", params={"q": "bob"}, headers=alice).json() == []
    assert client.get("/api/social/search", params={"q": "alice"}, headers=bob).json() == []

    incoming = client.get("/api/social/requests", headers=bob)
    assert incoming.status_code == 200
    assert len(incoming.json()) == 1
    assert incoming.json()[0]["requester"]["nickname"] == "alice"
    assert client.get("/api/social/requests", headers=alice).json() == []

    accept = client.post(
        f"/api/social/requests/{request_body['id']}/respond", json={"accept": True}, headers=bob
    )
    assert accept.status_code == 200

    assert [p["id"] for p in client.get("/api/social/friends", headers=alice).json()] == [bob_id]
    assert [p["id"] for p in client.get("/api/social/friends", headers=bob).json()] == [alice_id]
    assert client.get("/api/social/requests", headers=bob).json() == []

    removed = client.delete(f"/api/social/friends/{bob_id}", headers=alice)
    assert removed.status_code == 204
    removed_again = client.delete(f"/api/social/friends/{bob_id}", headers=alice)
    assert removed_again.status_code == 204

    assert client.get("/api/social/friends", headers=alice).json() == []
    assert client.get("/api/social/friends", headers=bob).json() == []
    assert client.get("/api/social/requests", headers=bob).json() == []


def test_reject_then_request_again(client: TestClient):
    _, alice = register_and_login(client, "alice")
    bob_id, bob = register_and_login(client, "bob")

    first = client.post("/api/social/requests", json={"target_id": bob_id}, headers=alice).json()
    reject = client.post(f"/api/social/requests/{first['id']}/respond", json={"accept": False}, headers=bob)
    assert reject.status_code == 200
    assert client.get("/api/social/requests", headers=bob).json() == []

    second = client.post("/api/social/requests", json={"target_id": bob_id}, headers=alice)
    assert second.status_code == 201
    assert second.json()["id"] != first["id"]


def test_duplicate_request_is_conflict(client: TestClient):
    alice_id, alice = register_and_login(client, "alice")
    bob_id, bob = register_and_login(client, "bob")

    assert client.post("/api/social/requests", json={"target_id": bob_id}, headers=alice).status_code == 201
    assert client.post("/api/social/requests", json={"target_id": bob_id}, headers=alice).status_code == 409
    assert client.post("/api/social/requests", json={"target_id": alice_id}, headers=bob).status_code == 409


def test_request_validation(client: TestClient):
    alice_id, alice = register_and_login(client, "alice")

    to_self = client.post("/api/social/requests", json={"target_id": alice_id}, headers=alice)
    assert to_self.status_code == 400

    unknown = client.post("/api/social/requests", json={"target_id": str(uuid.uuid4())}, headers=alice)
    assert unknown.status_code == 404


def test_only_recipient_can_answer(client: TestClient):
    _, alice = register_and_login(client, "alice")
    bob_id, _ = register_and_login(client, "bob")
    _, carol = register_and_login(client, "carol")

    sent = client.post("/api/social/requests", json={"target_id": bob_id}, headers=alice).json()

    by_requester = client.post(f"/api/social/requests/{sent['id']}/respond", json={"accept": True}, headers=alice)
    by_stranger = client.post(f"/api/social/requests/{sent['id']}/respond", json={"accept": True}, headers=carol)
    missing = client.post(f"/api/social/requests/{uuid.uuid4()}/respond", json={"accept": True}, headers=carol)

    assert by_requester.status_code == 404
    assert by_stranger.status_code == 404
    assert missing.status_code == 404


def test_search_short_query_returns_empty(client: TestClient):
    _, alice = register_and_login(client, "alice")
    register_and_login(client, "bob")

    resp = client.get("/api/social/search", params={"q": "bo"}, headers=alice)
    assert resp.status_code == 200
    assert resp.json() == []


def test_activity_feed(client: TestClient):
    alice_id, alice = register_and_login(client, "alice")
    bob_id, bob = register_and_login(client, "bob", name="Bob", surname="Marley")

    assert client.get("/api/social/activity", headers=alice).json() == []

    log = client.post(
        "/api/watch-logs",
        json={
            "content": {"tmdb_id": 27205, "title": "Inception", "type": "movie", "poster_path": "/inception.jpg"},
            "platform_id": "Netflix",
            "rating": 9,
            "comment": "Dreams within dreams",
        },
        headers=bob,
    )
    assert log.status_code == 201

    sent = client.post("/api/social/requests", json={"target_id": bob_id}, headers=alice).json()
    # Pending friends do not feed activity
    assert client.get("/api/social/activity", headers=alice).json() == []

    client.post(f"/api/social/requests/{sent['id']}/respond", json={"accept": True}, headers=bob)

    feed = client.get("/api/social/activity", headers=alice)
    assert feed.status_code == 200
    items = feed.json()
    assert len(items) == 1
    item = items[0]
    assert item["rating"] == 9
    assert item["comment"] == "Dreams within dreams"
    assert item["owner"] == {"name": "Bob", "nickname": "bob", "surname": "Marley"}
    assert item["content"] == {"title": "Inception", "type": "movie", "poster_ref": "/inception.jpg"}
    assert "timestamp" in item

    # Bob's own feed only shows Alice's activity, and she has none
    assert client.get("/api/social/activity", headers=bob).json() == []


def test_overview_combines_friends_and_requests(client: TestClient):
    alice_id, alice = register_and_login(client, "alice")
    bob_id, bob = register_and_login(client, "bob")
    _, carol = register_and_login(client, "carol")

    sent = client.post("/api/social/requests", json={"target_id": bob_id}, headers=alice).json()
    client.post(f"/api/social/requests/{sent['id']}/respond", json={"accept": True}, headers=bob)
    client.post("/api/social/requests", json={"target_id": bob_id}, headers=carol)

    overview = client.get("/api/social/overview", headers=bob)
    assert overview.status_code == 200
    body = overview.json()
    assert [p["id"] for p in body["friends"]] == [alice_id]
    assert [r["requester"]["nickname"] for r in body["requests"]] == ["carol"]


def test_social_requires_authentication(client: TestClient):
    assert client.get("/api/social/friends").status_code == 401
    assert client.get("/api/social/requests").status_code == 401
    assert client.get("/api/social/activity").status_code == 401
    assert client.get("/api/social/search", params={"q": "alice"}).status_code == 401
    assert client.post("/api/social/requests", json={"target_id": str(uuid.uuid4())}).status_code == 401
    assert client.delete(f"/api/social/friends/{uuid.uuid4()}").status_code == 401
