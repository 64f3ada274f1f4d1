from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# В JSON цена уходит числом (24.99), а не строкой "24.99".
# float точно передаёт до 15 значащих цифр, поэтому цена ограничена max_digits=15.
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class VideoGameBase(BaseModel):
    # Ограничения длины совпадают с колонками таблицы video_games.
    # Пустые строки и отрицательная цена допускаются.
    title: str = Field(max_length=200)
    publisher: str = Field(max_length=100)
    genre: str = Field(max_length=50)
    release_date: date
    price: Price = Field(max_digits=15)
    platform: str = Field(max_length=50)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class VideoGameIn(VideoGameBase):
    """Тело POST/PUT. id при создании игнорируется, при обновлении сверяется с path."""

    id: int = 0


class VideoGameOut(VideoGameBase):
    id: int

    class Config:
        from_attributes = True
