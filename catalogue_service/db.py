from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Базовый класс декларативных моделей SQLAlchemy."""

    pass


def make_engine(database_url: str) -> Engine:
    """Создаёт engine по URL подключения к БД.

    Для SQLite разрешаем доступ из разных потоков (FastAPI выполняет sync-хендлеры
    в threadpool), а in-memory базу держим на одном соединении, иначе каждое
    новое соединение видело бы пустую базу.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency: отдаёт сессию SQLAlchemy и гарантирует её закрытие.

    Фабрика сессий передаётся приложению явно через create_app() и лежит в app.state.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
