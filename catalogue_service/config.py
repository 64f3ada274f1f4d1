import os

# Все настройки сервиса берутся из переменных окружения (как в docker-compose).
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./videogames.db")

# Единственный origin, которому разрешён CORS (фронтенд каталога).
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:4200")

SERVICE_NAME = os.getenv("SERVICE_NAME", "catalogue_service")

# development включает /docs и /openapi.json
APP_ENV = os.getenv("APP_ENV", "production")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
