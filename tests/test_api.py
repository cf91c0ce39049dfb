"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from supplement_rewards.api.app import create_app


def _client(container) -> TestClient:
    return TestClient(create_app(container))


def test_health(container) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_take_supplement_awards_once(container) -> None:
    client = _client(container)

    first = client.post("/supplements/zinc/take", json={})
    second = client.post("/supplements/zinc/take", json={})

    assert first.status_code == 200
    assert first.json()["coins_awarded"] == 5
    assert second.json()["coins_awarded"] == 0
    summary = client.get("/rewards/summary").json()
    assert summary["summary"]["total_coins_earned"] == 5
    assert summary["summary"]["available_coins"] == 5
    assert summary["earned_today"] == 5

    [transaction] = client.get("/rewards/transactions").json()["transactions"]
    assert transaction["title"] == "Took Zinc"


def test_today_records(container) -> None:
    client = _client(container)
    client.post("/supplements/zinc/take", json={})

    data = client.get("/supplements/today").json()

    assert data["taken"] == 1
    assert data["total"] == 1
    assert data["records"][0]["supplement_id"] == "zinc"


def test_spend_overdraft_conflicts(container) -> None:
    client = _client(container)
    client.post("/supplements/zinc/take", json={})

    response = client.post("/rewards/spend", json={"amount": 10, "title": "Theme"})

    assert response.status_code == 409
    assert response.json()["available"] == 5


def test_quiz_flow_saves_history(container) -> None:
    client = _client(container)

    state = client.post("/quiz/start", json={"difficulty": "Easy"}).json()
    assert state["status"] == "in_progress"
    assert state["question"]["correct_answer"] is None

    while state["status"] == "in_progress":
        option = state["question"]["options"][0]
        client.post("/quiz/answer", json={"option": option})
        revealed = client.post("/quiz/reveal").json()
        assert revealed["question"]["correct_answer"] is not None
        state = client.post("/quiz/next").json()

    assert state["status"] == "completed"
    assert state["result"]["correct"] + state["result"]["incorrect"] == 5
    assert state["coins_earned"] == state["result"]["correct"] * 5
    [attempt] = client.get("/quiz/history").json()["history"]
    assert attempt["difficulty"] == "Easy"
    assert attempt["coins_earned"] == state["coins_earned"]


def test_disallowed_quiz_step_is_not_applied(container) -> None:
    client = _client(container)
    client.post("/quiz/start", json={})

    response = client.post("/quiz/next")

    assert response.status_code == 200
    assert response.json()["applied"] is False
    assert response.json()["index"] == 0


def test_unknown_difficulty_is_bad_request(container) -> None:
    response = _client(container).post("/quiz/start", json={"difficulty": "Insane"})

    assert response.status_code == 400


def test_invalid_email_is_bad_request(container) -> None:
    response = _client(container).put(
        "/users/local", json={"user_name": "Ada", "email": "not-an-email"}
    )

    assert response.status_code == 400


def test_profile_roundtrip(container) -> None:
    client = _client(container)
    assert client.get("/users/me").status_code == 404

    client.put("/users/local", json={"user_name": "Ada", "email": "ada@example.com"})
    client.patch("/users/local/preferences", json={"language": "German"})

    user = client.get("/users/me").json()["user"]
    assert user["user_name"] == "Ada"
    assert user["language"] == "German"


def test_favorites_toggle(container) -> None:
    client = _client(container)

    assert client.post("/favorites/zinc/toggle", json={}).json()["is_favorite"]
    assert len(client.get("/favorites").json()["favorites"]) == 1
    assert not client.post("/favorites/zinc/toggle", json={}).json()["is_favorite"]


def test_achievements_endpoint(container) -> None:
    client = _client(container)
    client.post("/supplements/zinc/take", json={})

    data = client.get("/rewards/achievements").json()

    assert data["unlocked"] == 1
    assert data["total"] == 6


def test_daily_reminder_endpoint(container) -> None:
    client = _client(container)

    client.put("/reminders/daily", json={"at": "08:30:00"})

    [reminder] = client.get("/reminders").json()["reminders"]
    assert reminder["identifier"] == "daily_reminder"


def test_record_quiz_result(container) -> None:
    client = _client(container)

    response = client.post(
        "/quiz/results",
        json={
            "total_questions": 5,
            "correct_count": 4,
            "incorrect_count": 1,
            "coins_earned": 40,
            "difficulty": "medium",
        },
    )

    assert response.status_code == 200
    assert response.json()["summary"]["quizzes_completed"] == 1
    [attempt] = client.get("/quiz/history").json()["history"]
    assert attempt["difficulty"] == "Medium"


def test_quiz_result_rejects_negative_counts(container) -> None:
    client = _client(container)

    response = client.post(
        "/quiz/results",
        json={
            "total_questions": 5,
            "correct_count": 3,
            "incorrect_count": 2,
            "coins_earned": -10,
        },
    )

    assert response.status_code == 422
    assert client.get("/quiz/history").json()["history"] == []
