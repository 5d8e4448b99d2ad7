import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api.main import create_app
from database.memory import InMemoryStorage


@pytest.fixture
def client():
    app = create_app(storage=InMemoryStorage())
    with TestClient(app) as c:
        yield c


def _create(client, host="h", **overrides):
    body = {"host_id": host, "host_name": "Host", "course_name": "Augusta", "handicap": 10}
    body.update(overrides)
    resp = client.post("/api/games", json=body)
    assert resp.status_code == 201
    return resp.json()


def _started(client):
    game = _create(client)
    resp = client.post(
        f"/api/games/code/{game['game_code']}/join",
        json={"player_id": "p1", "name": "P1", "handicap": 2},
    )
    assert resp.status_code == 200
    resp = client.post(f"/api/games/{game['id']}/start", json={"player_id": "h"})
    assert resp.status_code == 200
    return resp.json()


def _score(client, game_id, player_id, hole, strokes):
    return client.post(
        f"/api/games/{game_id}/scores",
        json={"player_id": player_id, "hole": hole, "strokes": strokes},
    )


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_lobby_flow(client):
    game = _create(client, number_of_holes=9)
    assert game["status"] == "waiting"
    assert len(game["holes"]) == 9

    resp = client.get(f"/api/games/code/{game['game_code']}")
    assert resp.json()["player_count"] == 1

    assert client.get("/api/games/code/ZZZZZZ").status_code == 404

    join = {"player_id": "p1", "name": "P1"}
    assert client.post(f"/api/games/code/{game['game_code']}/join", json=join).status_code == 200
    assert client.post(f"/api/games/code/{game['game_code']}/join", json=join).status_code == 409

    assert client.post(f"/api/games/{game['id']}/start", json={"player_id": "p1"}).status_code == 403
    assert client.post(f"/api/games/{game['id']}/start", json={"player_id": "h"}).status_code == 200

    detail = client.get(f"/api/games/{game['id']}").json()
    assert detail["game"]["status"] == "in_progress"
    assert [p["player_id"] for p in detail["players"]] == ["h", "p1"]


def test_create_game_rejects_bad_hole_count(client):
    resp = client.post("/api/games", json={
        "host_id": "h", "host_name": "Host", "course_name": "X", "number_of_holes": 12,
    })
    assert resp.status_code == 400


def test_create_game_storage_failure_is_server_error():
    storage = InMemoryStorage()
    storage.games.create_game = AsyncMock(side_effect=ValueError("bad row"))
    with TestClient(create_app(storage=storage), raise_server_exceptions=False) as c:
        resp = c.post("/api/games", json={"host_id": "h", "host_name": "Host", "course_name": "X"})
    assert resp.status_code == 500


def test_score_validation_bounds(client):
    game = _started(client)
    assert _score(client, game["id"], "h", 1, 16).status_code == 422
    assert _score(client, game["id"], "h", 1, 0).status_code == 422
    assert _score(client, game["id"], "h", 1, None).status_code == 200
    assert _score(client, game["id"], "stranger", 1, 4).status_code == 404


def test_scorecard_and_leaderboard(client):
    game = _started(client)
    _score(client, game["id"], "h", 3, 1)
    _score(client, game["id"], "h", 4, 6)

    card = client.get(f"/api/games/{game['id']}/scorecard/h").json()
    assert card["total"] == 7
    assert card["holes_played"] == 2
    assert card["score_types"][2] == "eagle"
    assert card["score_types"][3] == "bogey"
    assert card["score_type_counts"]["eagle"] == 1

    board = client.get(f"/api/games/{game['id']}/leaderboard").json()
    assert len(board) == 1                  # p1 has not scored
    assert board[0]["player_id"] == "h"
    assert board[0]["net_score"] == 7 - 10
    assert board[0]["rank"] == 1

    scores = client.get(f"/api/games/{game['id']}/scores", params={"player_id": "h"}).json()
    assert len(scores) == 18


def test_complete_game_flow(client):
    game = _started(client)
    for hole in range(1, 19):
        _score(client, game["id"], "h", hole, 5)    # 90 - 10 = 80
        _score(client, game["id"], "p1", hole, 4)   # 72 - 2 = 70

    assert client.get(f"/api/games/{game['id']}/results").status_code == 400
    assert client.post(f"/api/games/{game['id']}/complete", json={"player_id": "p1"}).status_code == 403

    resp = client.post(f"/api/games/{game['id']}/complete", json={"player_id": "h"})
    assert resp.status_code == 200
    results = resp.json()
    assert [(r["player_id"], r["position"], r["is_winner"]) for r in results] == [
        ("p1", 1, True),
        ("h", 2, False),
    ]

    again = client.post(f"/api/games/{game['id']}/complete", json={"player_id": "h"})
    assert again.status_code == 409

    stored = client.get(f"/api/games/{game['id']}/results").json()
    assert stored == results

    history = client.get("/api/players/p1/games").json()
    assert history[0]["status"] == "completed"
    assert history[0]["is_host"] is False


def test_complete_waiting_game_is_rejected(client):
    game = _create(client)
    resp = client.post(f"/api/games/{game['id']}/complete", json={"player_id": "h"})
    assert resp.status_code == 400
    assert client.get(f"/api/games/{game['id']}").json()["game"]["status"] == "waiting"


def test_unknown_game(client):
    assert client.get("/api/games/nope").status_code == 404
    assert client.get("/api/games/nope/leaderboard").status_code == 404
    assert client.post("/api/games/nope/complete", json={"player_id": "h"}).status_code == 404
