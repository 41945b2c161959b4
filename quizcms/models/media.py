from typing import ClassVar

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizcms.models.base import Base, TimestampMixin


class MediaFile(Base, TimestampMixin):
    """Uploaded file (cover images, thumbnails, video/audio)"""
    __tablename__ = "media"

    id: Mapped[int] = mapped_column(primary_key=True)
    filename: Mapped[str | None] = mapped_column(String(512), default=None)
    url: Mapped[str | None] = mapped_column(String(1024), default=None)
    alt: Mapped[str | None] = mapped_column(String(512), default=None)
    mime_type: Mapped[str | None] = mapped_column(String(128), default=None)


class MediaItemMixin(TimestampMixin):
    """Columns shared by the four rateable asset collections.

    Subclasses set ``kind`` (the collection tag used by polymorphic
    references) and ``creator_field`` (artist, director or author).
    """
    kind: ClassVar[str]
    creator_field: ClassVar[str]

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    year: Mapped[int | None] = mapped_column(default=None)
    slug: Mapped[str] = mapped_column(String(512), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    cover_image_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"), default=None)

    @property
    def creator(self) -> str | None:
        return getattr(self, self.creator_field)


class Art(Base, MediaItemMixin):
    __tablename__ = "art"
    kind = "art"
    creator_field = "artist"

    artist: Mapped[str] = mapped_column(String(512), nullable=False)

    cover_image: Mapped["MediaFile | None"] = relationship("MediaFile")


class Film(Base, MediaItemMixin):
    __tablename__ = "films"
    kind = "films"
    creator_field = "director"

    director: Mapped[str] = mapped_column(String(512), nullable=False)

    cover_image: Mapped["MediaFile | None"] = relationship("MediaFile")


class Album(Base, MediaItemMixin):
    __tablename__ = "albums"
    kind = "albums"
    creator_field = "artist"

    artist: Mapped[str] = mapped_column(String(512), nullable=False)

    cover_image: Mapped["MediaFile | None"] = relationship("MediaFile")


class Book(Base, MediaItemMixin):
    __tablename__ = "books"
    kind = "books"
    creator_field = "author"

    author: Mapped[str] = mapped_column(String(512), nullable=False)

    cover_image: Mapped["MediaFile | None"] = relationship("MediaFile")


MediaItem = Art | Film | Album | Book
