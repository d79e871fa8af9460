from fastapi.testclient import TestClient

import bank
from main import app

client = TestClient(app)


def _solve_current(snap):
    q = bank.get_bank().get(snap["current"]["question_id"])
    for w in q.scrambled_words:
        r = client.post("/session/place", json={"word": w})
        assert r.status_code == 200
    return r.json()


def test_lobby_snapshot():
    r = client.get("/session")
    assert r.status_code == 200
    body = r.json()
    assert body["state"] == "lobby"
    assert body["current"] is None


def test_full_session_flow():
    r = client.post("/session/start", json={"difficulty": "University"})
    assert r.status_code == 200
    snap = r.json()
    assert snap["state"] == "quiz"
    assert snap["total"] == 3
    assert snap["index"] == 0
    assert snap["timer_active"] is True

    for _ in range(3):
        snap = _solve_current(snap)
        assert snap["current"]["complete"] is True
        r = client.post("/session/submit")
        assert r.status_code == 200
        assert r.json()["is_correct"] is True
        snap = client.get("/session").json()

    assert snap["state"] == "result"
    assert snap["result"]["score"] == 3
    # scored out of the configured nine
    assert snap["result"]["total_questions"] == 9
    assert snap["result"]["percentage"] == 33
    assert len(snap["review"]) == 3

    r = client.get("/session/result")
    assert r.status_code == 200 and r.json()["score"] == 3

    r = client.post("/session/quit")
    assert r.json()["state"] == "lobby"
    assert client.get("/session/result").status_code == 404


def test_place_and_clear():
    snap = client.post("/session/start", json={"difficulty": "High School"}).json()
    assert snap["current"]["question_id"] == "h1"
    assert sorted(snap["current"]["pool"]) == ["We", "are", "is"]

    snap = client.post("/session/place", json={"word": "We"}).json()
    assert snap["current"]["slots"] == ["We", None]
    assert snap["current"]["complete"] is False

    r = client.post("/session/submit")
    assert r.status_code == 409

    snap = client.post("/session/clear", json={"slot": 0}).json()
    assert snap["current"]["slots"] == [None, None]
    assert "We" in snap["current"]["pool"]

    r = client.post("/session/clear", json={"slot": 5})
    assert r.status_code == 422


def test_timer_forces_result():
    client.post("/session/start", json={"difficulty": "University"})
    snap = client.post("/session/tick", json={"seconds": 10}).json()
    assert snap["state"] == "quiz"
    assert snap["remaining_seconds"] == 350

    snap = client.post("/session/tick", json={"seconds": 3600}).json()
    assert snap["state"] == "result"
    assert snap["result"]["score"] == 0
    assert snap["result"]["answers"] == []

    r = client.post("/session/place", json={"word": "I"})
    assert r.status_code == 409


def test_restart_after_result():
    client.post("/session/start", json={"difficulty": "High School"})
    client.post("/session/tick", json={"seconds": 3600})
    r = client.post("/session/restart")
    assert r.status_code == 200
    body = r.json()
    assert body["state"] == "quiz" and body["difficulty"] == "High School"
    assert body["answered"] == 0


def test_start_with_no_questions_for_tier():
    r = client.post("/session/start", json={"difficulty": "Middle School"})
    assert r.status_code == 404
    snap = client.get("/session").json()
    assert snap["state"] == "lobby"
    assert "Middle School" in snap["last_error"]


def test_start_twice_conflicts():
    client.post("/session/start", json={"difficulty": "University"})
    r = client.post("/session/start", json={"difficulty": "University"})
    assert r.status_code == 409


def test_start_with_missing_bank(tmp_path):
    bank.set_bank(bank.QuestionBank(source=str(tmp_path / "missing.csv")))
    r = client.post("/session/start", json={"difficulty": "University"})
    assert r.status_code == 502
    assert client.get("/session").json()["state"] == "lobby"
