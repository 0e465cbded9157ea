from conftest import add_post, add_profile


async def test_health_reports_store(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["store_reachable"] is True


async def test_health_degraded_without_schema(bare_client):
    response = await bare_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["store_reachable"] is False


async def test_profile_placeholder_when_store_unavailable(bare_client):
    response = await bare_client.get("/api/v1/profiles/alice")

    assert response.status_code == 200
    assert response.json()["full_name"] == "User"
    assert response.json()["id"] == "alice"


async def test_ensure_then_update_profile(client):
    created = await client.post(
        "/api/v1/profiles/ensure",
        json={"id": "alice", "email": "alice@example.org", "full_name": "Alice"},
    )
    assert created.status_code == 200

    updated = await client.patch("/api/v1/profiles/alice", json={"headline": "Pediatrician"})
    assert updated.status_code == 200
    assert updated.json()["headline"] == "Pediatrician"

    missing = await client.patch("/api/v1/profiles/ghost", json={"headline": "x"})
    assert missing.status_code == 404


async def test_feed_and_likes(client, db):
    await add_profile(db, "alice", full_name="Alice")
    await add_profile(db, "bob")
    post_id = await add_post(db, "alice", "hello")

    feed = await client.get("/api/v1/posts/", params={"page": 0, "limit": 10})
    assert feed.status_code == 200
    assert feed.json()[0]["author"]["full_name"] == "Alice"

    liked = await client.post(f"/api/v1/posts/{post_id}/likes", json={"user_id": "bob"})
    assert liked.json() == {"success": True}
    status = await client.get(f"/api/v1/posts/{post_id}/likes/bob")
    assert status.json() == {"liked": True}

    unliked = await client.delete(f"/api/v1/posts/{post_id}/likes/bob")
    assert unliked.json() == {"success": True}

    past_end = await client.get("/api/v1/posts/", params={"page": 5})
    assert past_end.json() == []


async def test_comment_on_missing_post_is_404(client, db):
    await add_profile(db, "bob")

    response = await client.post("/api/v1/posts/missing/comments", json={"author_id": "bob", "content": "hi"})

    assert response.status_code == 404


async def test_connection_flow(client, db):
    await add_profile(db, "alice")
    await add_profile(db, "bob")

    sent = await client.post("/api/v1/connections/", json={"requester_id": "alice", "recipient_id": "bob"})
    assert sent.status_code == 201
    connection_id = sent.json()["id"]

    status = await client.get("/api/v1/connections/status", params={"user_id": "bob", "target_id": "alice"})
    assert status.json() == {"status": "pending", "state": "pending"}

    accepted = await client.post(f"/api/v1/connections/{connection_id}/accept")
    assert accepted.json() == {"success": True}

    status = await client.get("/api/v1/connections/status", params={"user_id": "alice", "target_id": "bob"})
    assert status.json() == {"status": "accepted", "state": "connected"}

    connections = await client.get("/api/v1/connections/alice")
    assert [p["id"] for p in connections.json()] == ["bob"]

    removed = await client.delete("/api/v1/connections/", params={"user_id": "bob", "target_id": "alice"})
    assert removed.json() == {"success": True}


async def test_self_connection_rejected(client, db):
    await add_profile(db, "alice")

    response = await client.post("/api/v1/connections/", json={"requester_id": "alice", "recipient_id": "alice"})

    assert response.status_code == 400


async def test_accept_unknown_connection_is_404(client):
    response = await client.post("/api/v1/connections/nope/accept")

    assert response.status_code == 404


async def test_follow_endpoints(client, db):
    await add_profile(db, "alice")
    await add_profile(db, "bob")

    followed = await client.post("/api/v1/follows/", json={"follower_id": "alice", "following_id": "bob"})
    assert followed.status_code == 201

    status = await client.get("/api/v1/follows/status", params={"follower_id": "alice", "following_id": "bob"})
    assert status.json() == {"following": True}

    followers = await client.get("/api/v1/follows/bob/followers")
    assert followers.json()[0]["follower"]["id"] == "alice"

    unfollowed = await client.delete("/api/v1/follows/", params={"follower_id": "alice", "following_id": "bob"})
    assert unfollowed.json() == {"success": True}


async def test_reads_degrade_to_empty_lists(bare_client):
    for path in ("/api/v1/posts/", "/api/v1/jobs/", "/api/v1/events/", "/api/v1/connections/alice"):
        response = await bare_client.get(path)
        assert response.status_code == 200, path
        assert response.json() == [], path


async def test_permanent_store_error_is_503(client, monkeypatch):
    from medlink.crud import post as post_crud
    from medlink.store.guard import Outcome, StoreResult

    async def rejected(db, page=0, limit=None):
        return StoreResult(Outcome.PERMANENT_ERROR, [], ValueError("column missing"))

    monkeypatch.setattr(post_crud, "get_posts", rejected)

    response = await client.get("/api/v1/posts/")

    assert response.status_code == 503


async def test_nested_creates_take_the_id_from_the_path(client, db):
    await add_profile(db, "alice")
    await add_profile(db, "org")

    experience = await client.post(
        "/api/v1/profiles/alice/experiences",
        json={"title": "Registrar", "company": "City General", "start_date": "2020-01-01"},
    )
    assert experience.status_code == 201
    assert experience.json()["profile_id"] == "alice"

    education = await client.post(
        "/api/v1/profiles/alice/education",
        json={"school": "Med School", "degree": "MD", "start_date": "2012-09-01"},
    )
    assert education.status_code == 201
    assert education.json()["profile_id"] == "alice"

    job = await client.post("/api/v1/jobs/", json={"title": "Night Nurse"})
    application = await client.post(
        f"/api/v1/jobs/{job.json()['id']}/applications", json={"applicant_id": "alice"},
    )
    assert application.status_code == 201
    assert application.json()["job_id"] == job.json()["id"]

    event = await client.post(
        "/api/v1/events/",
        json={"title": "Grand Rounds", "organizer_id": "org", "start_date": "2025-03-01T09:00:00Z"},
    )
    registration = await client.post(
        f"/api/v1/events/{event.json()['id']}/attendees", json={"attendee_id": "alice"},
    )
    assert registration.status_code == 201
    assert registration.json()["event_id"] == event.json()["id"]
