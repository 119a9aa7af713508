import pytest
from fastapi.testclient import TestClient

from golf_games import main


@pytest.fixture
def client():
    return TestClient(main.app)


@pytest.fixture
def payload(holes):
    return {
        "course_name": "Test Links",
        "date": "2024-05-04",
        "tee": {"name": "white", "course_rating": 72.0, "slope_rating": 113, "par": 72},
        "holes": [h.model_dump() for h in holes],
        "golfers": [
            {"id": "ann", "name": "Ann", "handicap_index": 4.0, "side": "A"},
            {"id": "bob", "name": "Bob", "handicap_index": 10.0, "side": "A"},
            {"id": "cat", "name": "Cat", "handicap_index": 6.0, "side": "B"},
        ],
        "scores": [
            {"hole": 1, "golfer_id": "ann", "gross": 4},
            {"hole": 1, "golfer_id": "bob", "gross": 5},
            {"hole": 1, "golfer_id": "cat", "gross": 6},
        ],
        "games": {
            "match_play": {"golfer_ids": ["ann", "cat"]},
            "nine_point": {},
            "stableford_net": {},
        },
    }


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_course_handicap(client, holes):
    r = client.post("/handicaps/course", json={
        "handicap_index": 2.5,
        "tee": {"name": "blue", "course_rating": 72.0, "slope_rating": 113, "par": 72},
        "holes": [h.model_dump() for h in holes],
    })
    assert r.status_code == 200
    assert r.json() == {"course_handicap": 3, "stroke_holes": [3, 12, 5]}


def test_scorecard(client, payload):
    r = client.post("/scorecards", json=payload)
    assert r.status_code == 200
    body = r.json()

    assert [g["course_handicap"] for g in body["golfers"]] == [4, 10, 6]
    assert body["gross_scores"]["1"] == {"ann": 4, "bob": 5, "cat": 6}
    assert body["match_play"]["status"] == "Ann 1UP thru 1"
    assert body["nine_point"]["points"]["1"] == {"ann": 5, "bob": 3, "cat": 1}
    assert body["stableford_net"]["totals"]["ann"] == 2
    assert body["better_ball"] is None


def test_scorecard_rejects_bad_game(client, payload):
    payload["games"] = {"better_ball": {"teams": {"ann": "A", "bob": "A"}}}
    r = client.post("/scorecards", json=payload)
    assert r.status_code == 422
    assert "no players" in r.json()["detail"]


def test_scorecard_rejects_unknown_golfer(client, payload):
    payload["scores"].append({"hole": 2, "golfer_id": "zed", "gross": 4})
    r = client.post("/scorecards", json=payload)
    assert r.status_code == 422


def test_round_lifecycle(client, payload):
    r = client.post("/rounds", json=payload)
    assert r.status_code == 200
    stored = r.json()
    round_id = stored["id"]
    assert stored["course_name"] == "Test Links"
    assert stored["summary"]["match_play"]["status"] == "Ann 1UP thru 1"

    r = client.get("/rounds")
    assert round_id in [x["id"] for x in r.json()]

    r = client.get(f"/rounds/{round_id}")
    assert r.status_code == 200
    assert r.json()["summary"]["gross_scores"]["1"]["cat"] == 6

    r = client.delete(f"/rounds/{round_id}")
    assert r.status_code == 200
    assert client.get(f"/rounds/{round_id}").status_code == 404


def test_missing_round(client):
    assert client.get("/rounds/999999").status_code == 404
    assert client.delete("/rounds/999999").status_code == 404


def test_delete_needs_admin_key(client, payload, monkeypatch):
    monkeypatch.setattr(main, "ADMIN_KEY", "secret")
    round_id = client.post("/rounds", json=payload).json()["id"]

    assert client.delete(f"/rounds/{round_id}").status_code == 401
    assert client.delete(f"/rounds/{round_id}", headers={"X-Admin-Key": "wrong"}).status_code == 401
    assert client.delete(f"/rounds/{round_id}", headers={"X-Admin-Key": "secret"}).status_code == 200


def test_init_db_creates_round_tables():
    from golf_games.db import init_db

    assert {"rounds", "round_golfers", "hole_scores"} <= set(init_db())
