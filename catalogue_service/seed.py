import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .db import Base
from .models import VideoGame

logger = logging.getLogger(__name__)


def _game(title, publisher, genre, released, price, platform):
    return {
        "title": title,
        "publisher": publisher,
        "genre": genre,
        "release_date": released,
        "price": Decimal(price),
        "platform": platform,
    }


# Стартовый набор каталога. id назначает БД (1..15 в порядке списка на пустой таблице).
SEED_GAMES = [
    _game("The Legend of Zelda: Breath of the Wild", "Nintendo", "Action-Adventure", date(2017, 3, 3), "59.99", "Nintendo Switch"),
    _game("Elden Ring", "FromSoftware", "Action RPG", date(2022, 2, 25), "59.99", "PC"),
    _game("God of War", "Sony Interactive Entertainment", "Action-Adventure", date(2018, 4, 20), "49.99", "PlayStation 5"),
    _game("Cyberpunk 2077", "CD Projekt Red", "RPG", date(2020, 12, 10), "39.99", "PC"),
    _game("Hades", "Supergiant Games", "Roguelike", date(2020, 9, 17), "24.99", "Nintendo Switch"),
    _game("Red Dead Redemption 2", "Rockstar Games", "Action-Adventure", date(2018, 10, 26), "59.99", "Xbox Series X"),
    _game("Stardew Valley", "ConcernedApe", "Simulation", date(2016, 2, 26), "14.99", "PC"),
    _game("Hollow Knight", "Team Cherry", "Metroidvania", date(2017, 2, 24), "14.99", "PC"),
    _game("The Witcher 3: Wild Hunt", "CD Projekt Red", "RPG", date(2015, 5, 19), "39.99", "PC"),
    _game("Minecraft", "Mojang Studios", "Sandbox", date(2011, 11, 18), "26.95", "PC"),
    _game("Dark Souls III", "FromSoftware", "Action RPG", date(2016, 4, 12), "39.99", "PlayStation 4"),
    _game("Celeste", "Maddy Makes Games", "Platformer", date(2018, 1, 25), "19.99", "Nintendo Switch"),
    _game("Portal 2", "Valve", "Puzzle", date(2011, 4, 19), "9.99", "PC"),
    _game("Sekiro: Shadows Die Twice", "FromSoftware", "Action-Adventure", date(2019, 3, 22), "59.99", "PC"),
    _game("Animal Crossing: New Horizons", "Nintendo", "Simulation", date(2020, 3, 20), "59.99", "Nintendo Switch"),
]


def init_db(engine: Engine, session_factory: sessionmaker, seed_games=None) -> int:
    """Создаёт таблицу video_games и заполняет её стартовыми данными, если она пуста.

    Возвращает количество вставленных записей (0, если таблица уже была заполнена).
    """
    if seed_games is None:
        seed_games = SEED_GAMES

    Base.metadata.create_all(bind=engine, tables=[VideoGame.__table__])

    db = session_factory()
    try:
        existing = db.scalar(select(func.count()).select_from(VideoGame))
        if existing:
            logger.info("video_games already has %s rows, seeding skipped", existing)
            return 0

        db.add_all(VideoGame(**data) for data in seed_games)
        db.commit()
        logger.info("Seeded %s video games", len(seed_games))
        return len(seed_games)
    finally:
        db.close()
