from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from catalogue_service.main import create_app
from catalogue_service.models import VideoGame

from .conftest import MOCK_GAMES, NEW_GAME


def _payload(game_id: int, **changes) -> dict:
    body = {
        "id": game_id,
        "title": "Updated Game Title",
        "publisher": "Updated Publisher",
        "genre": "Updated Genre",
        "releaseDate": "2023-12-31",
        "price": 69.99,
        "platform": "Multi-Platform",
    }
    body.update(changes)
    return body


def test_list_returns_all_games(client: TestClient) -> None:
    resp = client.get("/api/videogames")
    assert resp.status_code == 200
    games = resp.json()
    assert len(games) == 5
    assert {g["id"] for g in games} == {1, 2, 3, 4, 5}


def test_list_is_empty_without_seed() -> None:
    with TestClient(create_app("sqlite://", seed_games=[])) as client:
        resp = client.get("/api/videogames")
    assert resp.status_code == 200
    assert resp.json() == []


def test_get_returns_record_in_camel_case(client: TestClient) -> None:
    resp = client.get("/api/videogames/1")
    assert resp.status_code == 200
    assert resp.json() == {
        "id": 1,
        "title": "Test Game 1 - Action",
        "publisher": "Test Publisher A",
        "genre": "Action",
        "releaseDate": "2020-01-15",
        "price": 49.99,
        "platform": "PC",
    }


@pytest.mark.parametrize("game_id", [999, 0, -1])
def test_get_missing_returns_404(client: TestClient, game_id: int) -> None:
    resp = client.get(f"/api/videogames/{game_id}")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Video game not found"}


def test_get_non_integer_id_is_bad_request(client: TestClient) -> None:
    assert client.get("/api/videogames/abc").status_code == 400


def test_create_assigns_new_id_and_location(client: TestClient) -> None:
    before = len(client.get("/api/videogames").json())

    resp = client.post("/api/videogames", json=NEW_GAME)
    assert resp.status_code == 201
    created = resp.json()
    assert created["id"] > 5
    assert resp.headers["location"].endswith(f"/api/videogames/{created['id']}")

    assert len(client.get("/api/videogames").json()) == before + 1

    fetched = client.get(f"/api/videogames/{created['id']}").json()
    assert fetched == {**NEW_GAME, "id": created["id"]}


def test_create_ignores_client_id(client: TestClient) -> None:
    resp = client.post("/api/videogames", json={**NEW_GAME, "id": 3})
    assert resp.status_code == 201
    new_id = resp.json()["id"]
    assert new_id not in {1, 2, 3, 4, 5}
    # запись с id 3 не тронута
    assert client.get("/api/videogames/3").json()["title"] == "Test Game 3 - Strategy"


def test_created_ids_are_unique(client: TestClient) -> None:
    ids = {client.post("/api/videogames", json=NEW_GAME).json()["id"] for _ in range(3)}
    assert len(ids) == 3
    assert all(i > 0 for i in ids)


def test_create_accepts_empty_strings_and_negative_price(client: TestClient) -> None:
    body = {**NEW_GAME, "title": "", "publisher": "", "price": -10.0}
    resp = client.post("/api/videogames", json=body)
    assert resp.status_code == 201
    assert resp.json()["price"] == -10.0
    assert resp.json()["title"] == ""


def test_create_rejects_too_long_title(client: TestClient) -> None:
    resp = client.post("/api/videogames", json={**NEW_GAME, "title": "x" * 201})
    assert resp.status_code == 400


def test_create_rejects_missing_field(client: TestClient) -> None:
    body = dict(NEW_GAME)
    body.pop("platform")
    assert client.post("/api/videogames", json=body).status_code == 400


def test_create_accepts_snake_case_fields(client: TestClient) -> None:
    body = dict(NEW_GAME)
    body["release_date"] = body.pop("releaseDate")
    resp = client.post("/api/videogames", json=body)
    assert resp.status_code == 201
    assert resp.json()["releaseDate"] == "2024-05-15"


def test_update_replaces_all_fields(client: TestClient) -> None:
    resp = client.put("/api/videogames/1", json=_payload(1))
    assert resp.status_code == 204
    assert resp.content == b""

    assert client.get("/api/videogames/1").json() == _payload(1)


def test_update_price_round_trip(client: TestClient, session_factory) -> None:
    original = client.get("/api/videogames/2").json()
    resp = client.put("/api/videogames/2", json={**original, "price": 79.99})
    assert resp.status_code == 204

    # свежая сессия, а не кэш identity map
    db = session_factory()
    try:
        game = db.get(VideoGame, 2)
        assert game.price == Decimal("79.99")
        assert game.title == original["title"]
        assert game.platform == original["platform"]
    finally:
        db.close()

    assert client.get("/api/videogames/2").json() == {**original, "price": 79.99}


@pytest.mark.parametrize("path_id, body_id", [(1, 2), (999, 1), (1, 999), (998, 999)])
def test_update_id_mismatch_is_bad_request(client: TestClient, path_id: int, body_id: int) -> None:
    resp = client.put(f"/api/videogames/{path_id}", json=_payload(body_id))
    assert resp.status_code == 400
    # ничего не изменилось
    assert client.get("/api/videogames/1").json()["title"] == "Test Game 1 - Action"


def test_update_without_body_id_is_bad_request(client: TestClient) -> None:
    body = _payload(1)
    body.pop("id")
    assert client.put("/api/videogames/1", json=body).status_code == 400


@pytest.mark.parametrize("game_id", [999, -1])
def test_update_missing_returns_404(client: TestClient, game_id: int) -> None:
    resp = client.put(f"/api/videogames/{game_id}", json=_payload(game_id))
    assert resp.status_code == 404


def test_delete_removes_only_that_record(client: TestClient) -> None:
    resp = client.delete("/api/videogames/1")
    assert resp.status_code == 204
    assert resp.content == b""

    assert client.get("/api/videogames/1").status_code == 404
    for game_id in (2, 3, 4, 5):
        assert client.get(f"/api/videogames/{game_id}").status_code == 200
    assert len(client.get("/api/videogames").json()) == 4


@pytest.mark.parametrize("game_id", [999, -1])
def test_delete_missing_returns_404(client: TestClient, game_id: int) -> None:
    assert client.delete(f"/api/videogames/{game_id}").status_code == 404
    assert len(client.get("/api/videogames").json()) == 5


def test_count_after_creates_and_deletes(client: TestClient) -> None:
    created = [client.post("/api/videogames", json=NEW_GAME).json()["id"] for _ in range(3)]
    hits = 0
    for game_id in (created[0], 2, 12345, 2):
        if client.delete(f"/api/videogames/{game_id}").status_code == 204:
            hits += 1
    assert hits == 2
    assert len(client.get("/api/videogames").json()) == 5 + 3 - hits


def test_cors_allows_only_configured_origin(client: TestClient) -> None:
    allowed = client.get("/api/videogames", headers={"Origin": "http://localhost:4200"})
    assert allowed.headers.get("access-control-allow-origin") == "http://localhost:4200"

    other = client.get("/api/videogames", headers={"Origin": "http://evil.example"})
    assert "access-control-allow-origin" not in other.headers


def test_docs_disabled_outside_development(client: TestClient) -> None:
    assert client.get("/docs").status_code == 404


def test_update_of_concurrently_deleted_game_returns_404(client: TestClient, session_factory, monkeypatch) -> None:
    from catalogue_service import routes_videogames

    original = routes_videogames._get_or_404

    def load_then_delete_elsewhere(db, game_id):
        game = original(db, game_id)
        other = session_factory()
        try:
            other.delete(other.get(VideoGame, game_id))
            other.commit()
        finally:
            other.close()
        return game

    monkeypatch.setattr(routes_videogames, "_get_or_404", load_then_delete_elsewhere)

    resp = client.put("/api/videogames/3", json=_payload(3))
    assert resp.status_code == 404


def test_stale_update_of_existing_game_is_server_error(monkeypatch) -> None:
    from sqlalchemy.orm import Session
    from sqlalchemy.orm.exc import StaleDataError

    app = create_app("sqlite://", seed_games=MOCK_GAMES)
    with TestClient(app, raise_server_exceptions=False) as client:
        original = client.get("/api/videogames/1").json()

        def failing_commit(self):
            raise StaleDataError("UPDATE statement on table 'video_games' expected to update 1 row(s); 0 were matched.")

        # запись 1 существует, поэтому ошибка не превращается в 404
        monkeypatch.setattr(Session, "commit", failing_commit)
        resp = client.put("/api/videogames/1", json=_payload(1))
        monkeypatch.undo()

        assert resp.status_code == 500
        assert resp.json() == {"detail": "Request processing error"}
        assert client.get("/api/videogames/1").json() == original


def test_price_with_fifteen_digits_round_trips(client: TestClient) -> None:
    resp = client.post("/api/videogames", json={**NEW_GAME, "price": 9999999999999.99})
    assert resp.status_code == 201
    assert resp.json()["price"] == 9999999999999.99

    fetched = client.get(f"/api/videogames/{resp.json()['id']}").json()
    assert fetched["price"] == 9999999999999.99


def test_price_with_more_than_fifteen_digits_is_bad_request(client: TestClient) -> None:
    resp = client.post("/api/videogames", json={**NEW_GAME, "price": "1234567890123456.78"})
    assert resp.status_code == 400
