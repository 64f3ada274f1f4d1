import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import exists, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from .db import get_db
from .models import VideoGame
from .schemas import VideoGameIn, VideoGameOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/videogames", tags=["videogames"])

# Поля, которые клиент может записать (id назначает БД).
EDITABLE_FIELDS = ("title", "publisher", "genre", "release_date", "price", "platform")


def _get_or_404(db: Session, game_id: int) -> VideoGame:
    game = db.get(VideoGame, game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Video game not found")
    return game


def _game_exists(db: Session, game_id: int) -> bool:
    return bool(db.scalar(select(exists().where(VideoGame.id == game_id))))


@router.get(
    "",
    response_model=list[VideoGameOut],
    summary="Список игр",
    description="Возвращает все игры каталога. Фильтрация, сортировка и пагинация на сервере не выполняются.",
)
def list_video_games(db: Session = Depends(get_db)):
    """Возвращает все записи таблицы video_games."""
    return db.scalars(select(VideoGame)).all()


@router.get(
    "/{game_id}",
    response_model=VideoGameOut,
    summary="Получить игру",
    description="Возвращает одну игру по идентификатору или 404.",
)
def get_video_game(game_id: int, db: Session = Depends(get_db)):
    """Возвращает игру по id (в том числе 404 для отрицательных и несуществующих id)."""
    return _get_or_404(db, game_id)


@router.post(
    "",
    response_model=VideoGameOut,
    status_code=status.HTTP_201_CREATED,
    summary="Добавить игру",
    description="Создаёт игру. Переданный id игнорируется, его назначает БД. Заголовок Location указывает на созданную запись.",
)
def create_video_game(
    data: VideoGameIn,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """Создаёт запись каталога и возвращает её вместе с новым id."""
    game = VideoGame(**data.model_dump(include=set(EDITABLE_FIELDS)))
    db.add(game)
    db.commit()
    db.refresh(game)

    response.headers["Location"] = str(request.url_for("get_video_game", game_id=game.id))
    logger.info("Created video game %s (%s)", game.id, game.title)
    return game


@router.put(
    "/{game_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Обновить игру",
    description="Полностью заменяет поля игры. id в пути должен совпадать с id в теле (иначе 400).",
)
def update_video_game(game_id: int, data: VideoGameIn, db: Session = Depends(get_db)):
    """Загружает запись, заменяет все поля в памяти и сохраняет целиком."""
    # Несовпадение id - это 400 независимо от того, существуют ли записи.
    if game_id != data.id:
        raise HTTPException(status_code=400, detail="Id mismatch")

    game = _get_or_404(db, game_id)
    for field in EDITABLE_FIELDS:
        setattr(game, field, getattr(data, field))

    try:
        db.commit()
    except StaleDataError:
        # Запись удалили между загрузкой и UPDATE: проверяем ещё раз один раз.
        db.rollback()
        if not _game_exists(db, game_id):
            raise HTTPException(status_code=404, detail="Video game not found")
        raise

    logger.info("Updated video game %s", game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{game_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить игру",
    description="Удаляет игру по id или возвращает 404.",
)
def delete_video_game(game_id: int, db: Session = Depends(get_db)):
    """Удаляет запись каталога."""
    game = _get_or_404(db, game_id)

    db.delete(game)
    db.commit()

    logger.info("Deleted video game %s", game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
