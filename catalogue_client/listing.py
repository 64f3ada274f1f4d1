"""Фильтрация и сортировка списка игр в памяти (без запросов к серверу)."""

from typing import Iterable, List, Optional

from .models import VideoGame

DEFAULT_SORT = "title"

# ключ сортировки -> (функция ключа, reverse)
SORT_OPTIONS = {
    "title": (lambda g: g.title.casefold(), False),
    "price-low": (lambda g: g.price, False),
    "price-high": (lambda g: g.price, True),
    "date-new": (lambda g: g.release_date, True),
    "date-old": (lambda g: g.release_date, False),
}


def distinct_genres(games: Iterable[VideoGame]) -> List[str]:
    return sorted({g.genre for g in games})


def distinct_platforms(games: Iterable[VideoGame]) -> List[str]:
    return sorted({g.platform for g in games})


def matches(
    game: VideoGame,
    search: str = "",
    genre: Optional[str] = None,
    platform: Optional[str] = None,
) -> bool:
    """Поиск - подстрока в title или publisher без учёта регистра; genre/platform - точное совпадение."""
    term = (search or "").lower()
    matches_search = term in game.title.lower() or term in game.publisher.lower()
    matches_genre = not genre or game.genre == genre
    matches_platform = not platform or game.platform == platform
    return matches_search and matches_genre and matches_platform


def sort_games(games: Iterable[VideoGame], sort_by: str = DEFAULT_SORT) -> List[VideoGame]:
    # Неизвестный ключ оставляет порядок, в котором записи пришли с сервера.
    option = SORT_OPTIONS.get(sort_by)
    if option is None:
        return list(games)
    key, reverse = option
    return sorted(games, key=key, reverse=reverse)


def apply_filters(
    games: Iterable[VideoGame],
    search: str = "",
    genre: Optional[str] = None,
    platform: Optional[str] = None,
    sort_by: str = DEFAULT_SORT,
) -> List[VideoGame]:
    filtered = [g for g in games if matches(g, search, genre, platform)]
    return sort_games(filtered, sort_by)
