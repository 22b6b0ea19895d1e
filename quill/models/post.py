"""Post database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from quill.configs.settings import MAX_TITLE_LENGTH, MAX_URL_LENGTH, MAX_USERNAME_LENGTH


class PostDB(SQLModel, table=True):
    """
    Post database model.

    ``id`` is assigned by the store and grows with insertion order, which
    makes it the tie-breaker for posts sharing a creation timestamp.
    ``author_username`` and ``created_at`` are written once, at creation.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (Index("ix_posts_created_at_id", "created_at", "id"),)

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Post ID",
    )
    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Post title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post body",
    )
    image_url: str | None = Field(
        default=None,
        sa_column=Column(String(MAX_URL_LENGTH)),
        description="Optional cover image URL",
    )
    author_username: str = Field(
        sa_column=Column(
            "author_username",
            String(MAX_USERNAME_LENGTH),
            ForeignKey("users.username"),
            nullable=False,
            index=True,
        ),
        description="Username of the author (foreign key to users.username)",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Hello World",
                "content": "A first post that is long enough to pass validation.",
                "image_url": "https://example.com/cover.jpg",
                "author_username": "alice",
            },
        },
    )
