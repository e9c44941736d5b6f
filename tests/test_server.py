# tests/test_server.py
from conftest import mismatch_positions, pair_positions


def engine_of(flask_app):
    return flask_app.extensions["memory_match"]["engine"]


def test_state_hides_the_board(client):
    resp = client.get("/state")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "ok"
    assert data["difficulty"] == "easy"
    assert len(data["cards"]) == 16
    assert all(c["symbol"] is None for c in data["cards"])
    assert data["started"] is False


def test_flip_before_start_is_ignored(client):
    data = client.post("/flip", json={"position": 0}).get_json()
    assert data["status"] == "ok"
    assert data["cards"][0]["state"] == "hidden"


def test_clock_follows_wall_time(client, clock):
    client.post("/start")
    clock.now += 3
    data = client.get("/state").get_json()
    assert data["seconds"] == 3
    assert data["time"] == "00:03"


def test_match_over_http(client, flask_app):
    client.post("/start")
    a, b = pair_positions(engine_of(flask_app).deck)
    client.post("/flip", json={"position": a})
    data = client.post("/flip", json={"position": b}).get_json()
    assert data["moves"] == 1
    assert data["score"] == 200
    assert data["matched_pairs"] == 1
    assert data["cards"][a]["state"] == "matched"


def test_mismatch_flips_back_after_delay(client, flask_app, clock):
    client.post("/start")
    a, b = mismatch_positions(engine_of(flask_app).deck)
    client.post("/flip", json={"position": a})
    data = client.post("/flip", json={"position": b}).get_json()
    assert data["accepting_input"] is False

    clock.now += 1
    data = client.get("/state").get_json()
    assert data["accepting_input"] is True
    assert data["cards"][a]["state"] == "hidden"
    assert data["cards"][b]["state"] == "hidden"


def test_hint_and_reset(client):
    client.post("/start")
    data = client.post("/hint").get_json()
    assert sum(1 for c in data["cards"] if c["state"] == "flipped") == 2
    assert data["score"] == 0

    data = client.post("/reset").get_json()
    assert data["started"] is False
    assert all(c["state"] == "hidden" for c in data["cards"])


def test_change_difficulty(client):
    data = client.post("/difficulty", json={"level": "hard"}).get_json()
    assert data["difficulty"] == "hard"
    assert data["columns"] == 8
    assert len(data["cards"]) == 64


def test_bad_requests(client):
    resp = client.post("/difficulty", json={"level": "impossible"})
    assert resp.status_code == 400
    assert resp.get_json()["status"] == "error"

    resp = client.post("/flip", json={})
    assert resp.status_code == 400

    resp = client.post("/flip", json={"position": "abc"})
    assert resp.status_code == 400


def test_events_since(client):
    client.post("/start")
    first = client.get("/events").get_json()
    assert [e["event"] for e in first["events"]] == ["started"]

    client.post("/reset")
    later = client.get(f"/events?since={first['last_seq']}").get_json()
    assert [e["event"] for e in later["events"]] == ["reset", "moves", "score", "pairs", "timer"]


def test_body_must_be_a_json_object(client):
    resp = client.post("/difficulty", json=["level"])
    assert resp.status_code == 400
    assert resp.get_json()["status"] == "error"

    resp = client.post("/flip", json="position")
    assert resp.status_code == 400


def test_non_integer_positions_are_rejected(client):
    client.post("/start")
    for body in ({"position": True}, {"position": 1.9}, {"position": "1"}):
        resp = client.post("/flip", json=body)
        assert resp.status_code == 400

    data = client.get("/state").get_json()
    assert data["cards"][1]["state"] == "hidden"
    assert all(c["state"] == "hidden" for c in data["cards"])
