import uvicorn

from . import config


def main() -> None:
    """Запускает API каталога под uvicorn (HOST/PORT из окружения)."""
    uvicorn.run("catalogue_service.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
