"""Pydantic schemas for boardgames, categories and search filters."""

from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

TITLE_MAX_LEN = 100
IMAGE_URL_MAX_LEN = 255
DESCRIPTION_MAX_LEN = 500
CATEGORY_NAME_MAX_LEN = 50

# Characters that may never appear in a category filter value.
FORBIDDEN_CATEGORY_CHARS = frozenset({";"})


def _validate_image_url(value: str | None) -> str | None:
    """Accept any absolute URI (scheme + location); empty means no image."""
    if value is None or not value.strip():
        return None
    parsed = urlparse(value.strip())
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        raise ValueError("image_url must be an absolute URI")
    return value.strip()


class CategoryOut(BaseModel):
    """Category as stored and returned."""

    model_config = {"from_attributes": True}

    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=CATEGORY_NAME_MAX_LEN)


class CategoryRef(BaseModel):
    """Category reference in a write request; only the id is used."""

    id: int = Field(..., ge=1)
    name: str | None = Field(default=None, max_length=CATEGORY_NAME_MAX_LEN)


class BoardgameBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LEN)
    image_url: str | None = Field(default=None, max_length=IMAGE_URL_MAX_LEN)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LEN)
    min_players: int = Field(..., ge=1)
    max_players: int = Field(..., ge=1)
    min_time: int = Field(..., ge=1, description="Minimum play time in minutes")
    max_time: int = Field(..., ge=1, description="Maximum play time in minutes")
    min_age: int = Field(..., ge=1)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        return _validate_image_url(v)


class BoardgameCreate(BoardgameBase):
    """Body for POST /boardgames."""

    categories: list[CategoryRef] = Field(..., min_length=1)


class BoardgameUpdate(BaseModel):
    """Body for PUT /boardgames/{id}; only the provided fields change."""

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LEN)
    image_url: str | None = Field(default=None, max_length=IMAGE_URL_MAX_LEN)
    description: str | None = Field(
        default=None, min_length=1, max_length=DESCRIPTION_MAX_LEN
    )
    min_players: int | None = Field(default=None, ge=1)
    max_players: int | None = Field(default=None, ge=1)
    min_time: int | None = Field(default=None, ge=1)
    max_time: int | None = Field(default=None, ge=1)
    min_age: int | None = Field(default=None, ge=1)
    categories: list[CategoryRef] | None = Field(default=None, min_length=1)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        return _validate_image_url(v)


class BoardgameOut(BoardgameBase):
    """Boardgame with its complete category set."""

    model_config = {"from_attributes": True}

    id: int = Field(..., ge=1)
    categories: list[CategoryOut]


class BoardgameFilters(BaseModel):
    """
    Search criteria for GET /boardgames. Every dimension is optional.

    categories accepts the raw comma-separated query value; newlines are stripped and
    values containing a statement separator are rejected.
    """

    categories: list[str] | None = None
    players: int | None = Field(default=None, ge=1)
    time: int | None = Field(default=None, ge=1)
    min_age: int | None = Field(default=None, ge=1)

    @field_validator("categories", mode="before")
    @classmethod
    def split_categories(cls, v: object) -> object:
        if v is None:
            return None
        if isinstance(v, str):
            v = v.replace("\n", "").split(",")
        if not isinstance(v, list):
            return v
        names: list[str] = []
        for name in v:
            if not isinstance(name, str):
                raise ValueError("category names must be strings")
            if any(ch in FORBIDDEN_CATEGORY_CHARS for ch in name):
                raise ValueError("category must not contain ';'")
            if name:
                names.append(name)
        return names or None
