from datetime import datetime, timedelta, timezone


def _iso(hours_from_now: float) -> str:
    moment = datetime.now(timezone.utc) + timedelta(hours=hours_from_now)
    return moment.isoformat().replace("+00:00", "Z")


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_register_login_and_profile(client, register):
    ada = await register("Ada", "ada@example.com")

    login = await client.post("/api/auth/login", json={"email": "ada@example.com", "password": "secret123"})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == ada["id"]

    bad = await client.post("/api/auth/login", json={"email": "ada@example.com", "password": "nope-nope"})
    assert bad.status_code == 401

    dup = await client.post("/api/auth/register", json={"name": "Ada", "email": "ada@example.com", "password": "secret123"})
    assert dup.status_code == 409

    patched = await client.patch("/api/users/me", json={"bio": "Mathematician"}, headers=ada["headers"])
    assert patched.status_code == 200
    assert patched.json()["bio"] == "Mathematician"

    skill = await client.post("/api/users/me/skills/teaching", json={"name": "Math"}, headers=ada["headers"])
    assert skill.status_code == 201
    assert skill.json()["skillsTeaching"][0]["name"] == "Math"
    dup_skill = await client.post("/api/users/me/skills/teaching", json={"name": "math"}, headers=ada["headers"])
    assert dup_skill.status_code == 400

    me = await client.get("/api/users/me", headers=ada["headers"])
    assert me.json()["stats"] == {"sessionsTaught": 0, "sessionsLearned": 0, "avgRating": 0.0}


async def test_requests_without_token_are_rejected(client):
    response = await client.get("/api/credits/wallet")
    assert response.status_code in (401, 403)
    response = await client.get("/api/credits/wallet", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


async def test_wallet_starts_with_welcome_bonus(client, register):
    ada = await register("Ada", "ada@example.com")

    wallet = await client.get("/api/credits/wallet", headers=ada["headers"])
    assert wallet.status_code == 200
    assert wallet.json()["balance"] == 100
    assert wallet.json()["monthly"] == {"earned": 100, "spent": 0}

    transactions = await client.get("/api/credits/transactions", headers=ada["headers"])
    body = transactions.json()
    assert body["total"] == 1
    assert body["hasMore"] is False
    assert body["transactions"][0]["type"] == "bonus"

    check = await client.get("/api/credits/check-balance", headers=ada["headers"])
    assert check.json() == {"balance": 100, "sessionCost": 25, "canAffordSession": True}


async def test_happy_path_schedule_complete_rate(client, register):
    alice = await register("Alice", "alice@example.com")
    bob = await register("Bob", "bob@example.com")
    await client.post("/api/users/me/skills/teaching", json={"name": "Guitar"}, headers=bob["headers"])

    created = await client.post(
        "/api/meetings",
        json={
            "otherUserId": bob["id"],
            "title": "Guitar basics",
            "startsAt": _iso(-2),
            "sessionType": "learning",
            "skill": "Guitar",
        },
        headers=alice["headers"],
    )
    assert created.status_code == 201, created.text
    body = created.json()
    meeting_id = body["meeting"]["id"]
    assert body["newBalance"] == 75
    assert body["meeting"]["joinUrl"].startswith("https://meet.jit.si/skillbridge-general-")

    upcoming = await client.get("/api/meetings", headers=bob["headers"])
    assert upcoming.json()["meetings"] == []

    history = await client.get("/api/meetings/history", params={"status": "completed"}, headers=alice["headers"])
    assert [item["id"] for item in history.json()["meetings"]] == [meeting_id]

    rated = await client.post(f"/api/meetings/{meeting_id}/rate", json={"rating": 5}, headers=alice["headers"])
    assert rated.status_code == 200
    assert rated.json()["rating"] == 5
    again = await client.post(f"/api/meetings/{meeting_id}/rate", json={"rating": 1}, headers=alice["headers"])
    assert again.status_code == 409

    profile = await client.get(f"/api/users/{bob['id']}", headers=alice["headers"])
    guitar = profile.json()["skillsTeaching"][0]
    assert guitar["sessions"] == 1
    assert guitar["rating"] == 5.0
    assert profile.json()["stats"]["avgRating"] == 5.0

    feedback = await client.post(
        "/api/feedback",
        json={"toUserId": bob["id"], "skill": "Guitar", "rating": 4, "comment": "Patient", "meetingId": meeting_id},
        headers=alice["headers"],
    )
    assert feedback.status_code == 201
    duplicate = await client.post(
        "/api/feedback",
        json={"toUserId": bob["id"], "skill": "Guitar", "rating": 4, "meetingId": meeting_id},
        headers=alice["headers"],
    )
    assert duplicate.status_code == 409
    received = await client.get("/api/feedback/received", headers=bob["headers"])
    assert received.json()["feedback"][0]["comment"] == "Patient"
    pending = await client.get("/api/feedback/pending", headers=bob["headers"])
    assert [item["meetingId"] for item in pending.json()["pending"]] == [meeting_id]


async def test_insufficient_credits_returns_402_and_creates_nothing(client, register):
    alice = await register("Alice", "alice@example.com")
    bob = await register("Bob", "bob@example.com")
    payload = {"otherUserId": bob["id"], "title": "Lesson", "startsAt": _iso(24), "sessionType": "learning"}
    for _ in range(4):
        ok = await client.post("/api/meetings", json=payload, headers=alice["headers"])
        assert ok.status_code == 201

    refused = await client.post("/api/meetings", json=payload, headers=alice["headers"])

    assert refused.status_code == 402
    assert refused.json()["required"] == 25
    assert refused.json()["available"] == 0
    upcoming = await client.get("/api/meetings", headers=alice["headers"])
    assert len(upcoming.json()["meetings"]) == 4
    transactions = await client.get("/api/credits/transactions", headers=alice["headers"])
    assert transactions.json()["total"] == 5


async def test_cancel_then_cancel_or_rate_conflicts(client, register):
    alice = await register("Alice", "alice@example.com")
    bob = await register("Bob", "bob@example.com")
    mallory = await register("Mallory", "mallory@example.com")
    created = await client.post(
        "/api/meetings",
        json={"otherUserId": bob["id"], "title": "Lesson", "startsAt": _iso(24), "sessionType": "teaching"},
        headers=alice["headers"],
    )
    meeting_id = created.json()["meeting"]["id"]

    forbidden = await client.post(f"/api/meetings/{meeting_id}/cancel", headers=mallory["headers"])
    assert forbidden.status_code == 403

    cancelled = await client.post(f"/api/meetings/{meeting_id}/cancel", headers=bob["headers"])
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    assert (await client.post(f"/api/meetings/{meeting_id}/cancel", headers=alice["headers"])).status_code == 409
    rate = await client.post(f"/api/meetings/{meeting_id}/rate", json={"rating": 4}, headers=bob["headers"])
    assert rate.status_code == 409

    missing = await client.get("/api/meetings/does-not-exist", headers=alice["headers"])
    assert missing.status_code == 404

    assert (await client.delete(f"/api/meetings/{meeting_id}", headers=bob["headers"])).status_code == 403
    assert (await client.delete(f"/api/meetings/{meeting_id}", headers=alice["headers"])).status_code == 204


async def test_invalid_schedule_payload_is_a_client_error(client, register):
    alice = await register("Alice", "alice@example.com")
    bob = await register("Bob", "bob@example.com")

    bad_date = await client.post(
        "/api/meetings",
        json={"otherUserId": bob["id"], "title": "Lesson", "startsAt": "soon", "sessionType": "learning"},
        headers=alice["headers"],
    )
    assert bad_date.status_code == 400

    with_self = await client.post(
        "/api/meetings",
        json={"otherUserId": alice["id"], "title": "Lesson", "startsAt": _iso(1), "sessionType": "learning"},
        headers=alice["headers"],
    )
    assert with_self.status_code == 400


async def test_chat_flow_and_meeting_in_conversation(client, register):
    alice = await register("Alice", "alice@example.com")
    bob = await register("Bob", "bob@example.com")
    mallory = await register("Mallory", "mallory@example.com")

    opened = await client.post("/api/chat/conversations", json={"otherUserId": bob["id"]}, headers=alice["headers"])
    assert opened.status_code == 200
    conversation_id = opened.json()["id"]
    assert opened.json()["otherUser"]["name"] == "Bob"
    reopened = await client.post("/api/chat/conversations", json={"otherUserId": alice["id"]}, headers=bob["headers"])
    assert reopened.json()["id"] == conversation_id

    sent = await client.post(
        f"/api/chat/conversations/{conversation_id}/messages", json={"text": "Hello!"}, headers=alice["headers"]
    )
    assert sent.status_code == 201
    assert sent.json()["recipientId"] == bob["id"]
    blank = await client.post(
        f"/api/chat/conversations/{conversation_id}/messages", json={"text": "   "}, headers=alice["headers"]
    )
    assert blank.status_code == 400

    inbox = await client.get("/api/chat/conversations", headers=bob["headers"])
    assert inbox.json()["conversations"][0]["unreadCount"] == 1
    assert inbox.json()["conversations"][0]["lastMessage"]["text"] == "Hello!"
    read = await client.post(f"/api/chat/conversations/{conversation_id}/read", headers=bob["headers"])
    assert read.json() == {"updated": 1}
    messages = await client.get(f"/api/chat/conversations/{conversation_id}/messages", headers=bob["headers"])
    assert [item["text"] for item in messages.json()["messages"]] == ["Hello!"]
    assert messages.json()["hasMore"] is False

    snooping = await client.get(f"/api/chat/conversations/{conversation_id}/messages", headers=mallory["headers"])
    assert snooping.status_code == 403
    missing = await client.get("/api/chat/conversations/nope/messages", headers=alice["headers"])
    assert missing.status_code == 404

    payload = {"otherUserId": bob["id"], "title": "Lesson", "startsAt": _iso(24), "sessionType": "teaching"}
    created = await client.post(
        "/api/meetings", json={**payload, "conversationId": conversation_id}, headers=alice["headers"]
    )
    assert created.status_code == 201
    assert created.json()["meeting"]["conversationId"] == conversation_id
    foreign = await client.post(
        "/api/meetings",
        json={**payload, "otherUserId": bob["id"], "conversationId": conversation_id},
        headers=mallory["headers"],
    )
    assert foreign.status_code == 403
    unknown = await client.post("/api/meetings", json={**payload, "conversationId": "nope"}, headers=alice["headers"])
    assert unknown.status_code == 404
