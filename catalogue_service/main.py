from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .db import make_engine, make_session_factory
from .logging_setup import setup_logging
from .routes_videogames import router as videogames_router
from .seed import init_db

logger = setup_logging(config.SERVICE_NAME)


def create_app(database_url: str | None = None, seed_games=None) -> FastAPI:
    """Собирает приложение каталога.

    Engine и фабрика сессий создаются здесь и передаются обработчикам через app.state,
    поэтому в тестах достаточно передать свой database_url (и свой набор seed-данных).
    """
    is_dev = config.APP_ENV == "development"
    app = FastAPI(
        title="Video Game Catalogue",
        description="Каталог видеоигр (минимальный CRUD)",
        version="1.0.0",
        docs_url="/docs" if is_dev else None,
        redoc_url="/redoc" if is_dev else None,
        openapi_url="/openapi.json" if is_dev else None,
    )

    engine = make_engine(database_url or config.DATABASE_URL)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.CORS_ORIGIN],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        """Логирует входящие и исходящие HTTP-запросы."""
        logger.info("IN %s %s", request.method, request.url.path)
        resp = await call_next(request)
        logger.info("OUT %s %s -> %s", request.method, request.url.path, resp.status_code)
        return resp

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        """Превращает ошибки валидации в ответ 400."""
        logger.warning("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(StarletteHTTPException)
    async def http_handler(request: Request, exc: StarletteHTTPException):
        """Логирует штатные HTTP-ошибки (400/404/...) и возвращает их клиенту."""
        logger.info("HTTP error %s on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def any_handler(request: Request, exc: Exception):
        """Глобальный перехватчик: ошибки БД и прочие необработанные исключения -> 500."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Request processing error"})

    @app.on_event("startup")
    def on_startup():
        """Создаёт таблицу video_games и заполняет её при первом запуске."""
        try:
            inserted = init_db(engine, app.state.session_factory, seed_games)
        except Exception:
            # Лучше упасть при старте, чем работать без таблицы.
            logger.exception("DB init failed")
            raise
        logger.info("DB schema ensured, %s seed rows inserted", inserted)

    app.include_router(videogames_router)
    return app


app = create_app()
