from __future__ import annotations

from datetime import date as Date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FeedRecord(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class PlayRecord(_FeedRecord):
    """One `<play>` element of the plays feed.

    Numeric attributes arrive as strings; blank or missing `length` means the
    duration was not logged and is stored as 0.
    """

    game_id: str = Field(min_length=1)
    game_name: str
    date: str
    length_minutes: int = Field(default=0, ge=0)
    quantity: int = Field(default=1, ge=1)

    @field_validator("date")
    @classmethod
    def iso_date(cls, value: str) -> str:
        Date.fromisoformat(value)
        return value

    @field_validator("length_minutes", mode="before")
    @classmethod
    def blank_length_is_unknown(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value

    @field_validator("quantity", mode="before")
    @classmethod
    def blank_quantity_is_one(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 1
        return value

    @property
    def month(self) -> int:
        return int(self.date.split("-")[1])


class PlaysPage(_FeedRecord):
    total: int = Field(ge=0)
    page: int = Field(default=1, ge=1)
    plays: tuple[PlayRecord, ...] = ()


class GameLink(_FeedRecord):
    id: str
    name: str


class GameDetail(_FeedRecord):
    game_id: str = Field(min_length=1)
    image_url: str | None = None
    categories: tuple[GameLink, ...] = ()
    mechanics: tuple[GameLink, ...] = ()
