from geoquiz.api.deps import SCREENS
from geoquiz.core.config import settings

API = "/api/v1/quiz/sessions"


def _create(client, session_id=None):
    body = {"sessionId": session_id} if session_id else {}
    resp = client.post(f"{API}/", json=body)
    assert resp.status_code == 201
    return resp.json()


def test_create_screen(client):
    screen = _create(client, "s1")
    assert screen["sessionId"] == "s1"
    assert screen["index"] == 0
    assert screen["total"] == 5
    assert screen["prompt"] == "question_oceans"


def test_create_without_body(client):
    resp = client.post(f"{API}/")
    assert resp.status_code == 201
    assert resp.json()["sessionId"]


def test_navigation(client):
    _create(client, "s1")
    for expected in (1, 2, 3, 4, 0):
        resp = client.post(f"{API}/s1/next")
        assert resp.status_code == 200
        assert resp.json()["index"] == expected
    assert client.post(f"{API}/s1/previous").json()["index"] == 4
    assert client.post(f"{API}/s1/question").json()["index"] == 0
    assert client.get(f"{API}/s1").json()["index"] == 0


def test_answer(client):
    _create(client, "s1")
    client.post(f"{API}/s1/next")

    resp = client.post(f"{API}/s1/answer", json={"answer": False})
    assert resp.status_code == 200
    body = resp.json()
    assert body["toast"] == {"correct": True, "message": "Correct!", "durationMs": 2000}
    assert body["screen"]["index"] == 1

    body = client.post(f"{API}/s1/answer", json={"answer": True}).json()
    assert body["toast"]["correct"] is False
    assert body["toast"]["message"] == "Incorrect!"


def test_answer_requires_boolean(client):
    _create(client, "s1")
    resp = client.post(f"{API}/s1/answer", json={})
    assert resp.status_code == 422


def test_unknown_session(client):
    for path in ("next", "previous", "question", "save", "lifecycle/start"):
        resp = client.post(f"{API}/missing/{path}")
        assert resp.status_code == 404, path
        assert resp.json()["detail"] == "Screen session not found"
    assert client.get(f"{API}/missing").status_code == 404
    assert client.delete(f"{API}/missing").status_code == 404
    assert client.post(f"{API}/missing/answer", json={"answer": True}).status_code == 404


def test_lifecycle(client):
    _create(client, "s1")
    assert client.post(f"{API}/s1/lifecycle/pause").status_code == 204
    assert client.post(f"{API}/s1/lifecycle/rotate").status_code == 422


def test_save_and_restore_across_recreation(client, repo):
    _create(client, "s1")
    client.post(f"{API}/s1/next")
    client.post(f"{API}/s1/next")

    resp = client.post(f"{API}/s1/save")
    assert resp.json() == {"sessionId": "s1", "index": 2}

    assert client.delete(f"{API}/s1").status_code == 204
    assert client.get(f"{API}/s1").status_code == 404

    assert _create(client, "s1")["index"] == 2


def test_restore_out_of_range_saved_index(client, fake_redis):
    fake_redis.hashes["geoquiz:screen:s9"] = {"index": "7"}
    assert _create(client, "s9")["index"] == 2


def test_idle_screens_are_evicted(client, monkeypatch):
    monkeypatch.setattr(settings, "POSITION_TTL_SECONDS", 60)
    for n in range(20):
        _create(client, f"old{n}")
    for screen in SCREENS.values():
        screen.touched_at -= 120

    _create(client, "s1")
    assert list(SCREENS) == ["s1"]
    assert client.get(f"{API}/old0").status_code == 404


def test_cors_preflight(client):
    resp = client.options(
        f"{API}/",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
