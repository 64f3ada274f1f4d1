from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from catalogue_service.main import create_app


def _mock(title, publisher, genre, released, price, platform):
    return {
        "title": title,
        "publisher": publisher,
        "genre": genre,
        "release_date": released,
        "price": Decimal(price),
        "platform": platform,
    }


# Пять тестовых записей: получают id 1..5.
MOCK_GAMES = [
    _mock("Test Game 1 - Action", "Test Publisher A", "Action", date(2020, 1, 15), "49.99", "PC"),
    _mock("Test Game 2 - RPG", "Test Publisher B", "RPG", date(2021, 6, 20), "59.99", "PlayStation 5"),
    _mock("Test Game 3 - Strategy", "Test Publisher C", "Strategy", date(2019, 3, 10), "39.99", "Xbox Series X"),
    _mock("Test Game 4 - Adventure", "Test Publisher D", "Adventure", date(2022, 11, 5), "29.99", "Nintendo Switch"),
    _mock("Test Game 5 - Simulation", "Test Publisher E", "Simulation", date(2018, 8, 12), "19.99", "PC"),
]

NEW_GAME = {
    "title": "Brand New Game",
    "publisher": "New Publisher",
    "genre": "Indie",
    "releaseDate": "2024-05-15",
    "price": 24.99,
    "platform": "PC",
}


@pytest.fixture
def app():
    return create_app("sqlite://", seed_games=MOCK_GAMES)


@pytest.fixture
def client(app):
    # with: чтобы отработал startup (создание таблицы и seed)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_factory(app, client):
    return app.state.session_factory
