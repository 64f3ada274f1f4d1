from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal


@dataclass
class VideoGame:
    """Запись каталога на стороне клиента (JSON API <-> Python)."""

    id: int
    title: str
    publisher: str
    genre: str
    release_date: date
    price: Decimal
    platform: str

    @classmethod
    def from_json(cls, data: dict) -> "VideoGame":
        # releaseDate может прийти и как "2017-03-03", и как "2017-03-03T00:00:00"
        released = str(data["releaseDate"]).split("T")[0]
        return cls(
            id=int(data["id"]),
            title=data["title"],
            publisher=data["publisher"],
            genre=data["genre"],
            release_date=date.fromisoformat(released),
            price=Decimal(str(data["price"])),
            platform=data["platform"],
        )

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "publisher": self.publisher,
            "genre": self.genre,
            "releaseDate": self.release_date.isoformat(),
            # сервер принимает не больше 15 цифр, их float передаёт без потерь
            "price": float(self.price),
            "platform": self.platform,
        }

    def as_form(self) -> dict:
        """Значения для формы редактирования (все поля, кроме id)."""
        values = asdict(self)
        values.pop("id")
        return values
