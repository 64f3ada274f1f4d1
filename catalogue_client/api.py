import logging
from typing import List, Optional

import httpx

from .models import VideoGame

logger = logging.getLogger(__name__)

RESOURCE_PATH = "/api/videogames"


class VideoGameApi:
    """Тонкая обёртка над REST API каталога: по одному методу на эндпоинт.

    Ошибки HTTP не перехватываются: raise_for_status() бросает httpx.HTTPStatusError,
    а сетевые ошибки пробрасываются как есть.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def _url(self, game_id: Optional[int] = None) -> str:
        url = f"{self.base_url}{RESOURCE_PATH}"
        if game_id is not None:
            url = f"{url}/{game_id}"
        return url

    def list_games(self) -> List[VideoGame]:
        resp = self.client.get(self._url())
        resp.raise_for_status()
        return [VideoGame.from_json(item) for item in resp.json()]

    def get_game(self, game_id: int) -> VideoGame:
        resp = self.client.get(self._url(game_id))
        resp.raise_for_status()
        return VideoGame.from_json(resp.json())

    def create_game(self, game: VideoGame) -> VideoGame:
        resp = self.client.post(self._url(), json=game.to_json())
        resp.raise_for_status()
        created = VideoGame.from_json(resp.json())
        logger.debug("Created game %s at %s", created.id, resp.headers.get("location"))
        return created

    def update_game(self, game_id: int, game: VideoGame) -> None:
        resp = self.client.put(self._url(game_id), json=game.to_json())
        resp.raise_for_status()

    def delete_game(self, game_id: int) -> None:
        resp = self.client.delete(self._url(game_id))
        resp.raise_for_status()

    def close(self) -> None:
        self.client.close()
