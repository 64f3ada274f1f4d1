from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List

from .models import VideoGame

# Те же ограничения, что и у колонок на сервере.
MAX_LENGTHS = {"title": 200, "publisher": 100, "genre": 50, "platform": 50}

# Цена уходит в JSON числом (float), точно - не больше 15 значащих цифр.
MAX_PRICE_DIGITS = 15

FORM_FIELDS = ("title", "publisher", "genre", "platform", "release_date", "price")


class FormError(ValueError):
    """Форма заполнена неверно; errors - сообщения по полям."""

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{name}: {msg}" for name, msg in errors.items()))


def validate_form(values: dict) -> Dict[str, str]:
    """Проверяет значения формы и возвращает словарь ошибок (пустой, если всё верно)."""
    errors: Dict[str, str] = {}

    for name in FORM_FIELDS:
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors[name] = "is required"

    for name, limit in MAX_LENGTHS.items():
        value = values.get(name)
        if isinstance(value, str) and len(value) > limit:
            errors[name] = f"must be at most {limit} characters"

    if "release_date" not in errors:
        try:
            _to_date(values["release_date"])
        except ValueError:
            errors["release_date"] = "must be a date (YYYY-MM-DD)"

    if "price" not in errors:
        try:
            price = _to_decimal(values["price"])
        except (InvalidOperation, ValueError):
            errors["price"] = "must be a number"
        else:
            if not price.is_finite():
                errors["price"] = "must be a number"
            elif price < 0:
                errors["price"] = "must be at least 0"
            elif len(price.as_tuple().digits) > MAX_PRICE_DIGITS:
                errors["price"] = f"must have at most {MAX_PRICE_DIGITS} digits"

    return errors


def build_game(values: dict, game_id: int = 0) -> VideoGame:
    """Собирает VideoGame из значений формы; для новой записи id = 0."""
    errors = validate_form(values)
    if errors:
        raise FormError(errors)
    return VideoGame(
        id=game_id,
        title=values["title"],
        publisher=values["publisher"],
        genre=values["genre"],
        release_date=_to_date(values["release_date"]),
        price=_to_decimal(values["price"]),
        platform=values["platform"],
    )


def _to_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).split("T")[0])


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value).strip())


def missing_fields(values: dict) -> List[str]:
    return [name for name in FORM_FIELDS if values.get(name) in (None, "")]
