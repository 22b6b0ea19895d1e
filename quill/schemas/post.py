"""
Post schemas for the Quill API.

Request models carry the length rules for titles and bodies; response models
map database rows to the public JSON shape (``imageURL``, ``author``,
``createdAt``).
"""

from datetime import UTC, datetime
from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    UrlConstraints,
    field_validator,
    model_validator,
)

from quill.configs import (
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
    MIN_CONTENT_LENGTH,
    MIN_TITLE_LENGTH,
)

EXAMPLE_CONTENT = (
    "Writing the first post on a fresh blog is always the hardest part, "
    "so this one simply says hello."
)

ImageUrl = Annotated[HttpUrl, UrlConstraints(max_length=MAX_URL_LENGTH)]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PostCreate(BaseModel):
    """Post creation payload. Any client-supplied author is ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(
        ...,
        min_length=MIN_TITLE_LENGTH,
        max_length=MAX_TITLE_LENGTH,
        description="Post title",
        examples=["Hello World"],
    )
    content: str = Field(
        ...,
        min_length=MIN_CONTENT_LENGTH,
        description="Post body",
        examples=[EXAMPLE_CONTENT],
    )
    image_url: ImageUrl | None = Field(
        default=None,
        alias="imageURL",
        description="Optional cover image URL",
        examples=["https://example.com/cover.jpg"],
    )

    @field_validator("image_url", mode="before")
    @classmethod
    def empty_image_url(cls, value: Any) -> Any:
        """Treat an empty image field as no image."""
        return _blank_to_none(value)


class PostUpdate(BaseModel):
    """Partial post update. Omitted fields keep their stored value."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = Field(
        default=None,
        min_length=MIN_TITLE_LENGTH,
        max_length=MAX_TITLE_LENGTH,
        description="New title",
    )
    content: str | None = Field(
        default=None,
        min_length=MIN_CONTENT_LENGTH,
        description="New body",
    )
    image_url: ImageUrl | None = Field(
        default=None,
        alias="imageURL",
        description="New cover image URL, empty or null to remove it",
    )

    @field_validator("image_url", mode="before")
    @classmethod
    def empty_image_url(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def required_fields_not_null(self) -> Self:
        """Reject explicit nulls for fields a post cannot be without."""
        for name in ("title", "content"):
            if name in self.model_fields_set and getattr(self, name) is None:
                mssg = f"{name} cannot be null"
                raise ValueError(mssg)
        return self

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, with URLs rendered as strings."""
        return self.model_dump(exclude_unset=True, mode="json")


class PostResponse(BaseModel):
    """Public representation of a post."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    title: str
    content: str
    image_url: str | None = Field(default=None, alias="imageURL")
    author_username: str = Field(alias="author")
    created_at: datetime = Field(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """SQLite hands back naive datetimes; everything is stored in UTC."""
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class PostPage(BaseModel):
    """One page of the post listing."""

    posts: list[PostResponse]
    total: int = Field(..., ge=0, description="Number of matching posts")
    page: int = Field(..., ge=1, description="Requested page")
    pages: int = Field(..., ge=0, description="Number of pages")


class MessageResponse(BaseModel):
    message: str
