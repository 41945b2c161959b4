from typing import Any

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizcms.models.base import Base, JSONType, TimestampMixin
from quizcms.models.media import MediaFile


class Step(Base, TimestampMixin):
    """A question or statement.

    Media references (``option_a``, ``option_b``, ``rating_item`` and the
    ``item`` of each ``ranking_options`` entry) are stored as JSON and are
    normalized to ``MediaRef`` when compiled.
    """
    __tablename__ = "steps"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(1024), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(1024), default=None)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    status: Mapped[str] = mapped_column(String(16), default="draft", nullable=False)  # 'draft', 'published'

    step_type: Mapped[str] = mapped_column(String(16), nullable=False)  # 'question', 'statement'
    question_type: Mapped[str | None] = mapped_column(String(32), default=None)
    statement_type: Mapped[str | None] = mapped_column(String(16), default=None)

    # Questions
    placeholder: Mapped[str | None] = mapped_column(String(512), default=None)
    options: Mapped[list[dict[str, Any]] | None] = mapped_column(JSONType, default=None)
    media_type: Mapped[str | None] = mapped_column(String(16), default=None)  # 'art', 'films', 'albums', 'books'
    option_a: Mapped[Any | None] = mapped_column(JSONType, default=None)
    option_b: Mapped[Any | None] = mapped_column(JSONType, default=None)
    rating_item: Mapped[Any | None] = mapped_column(JSONType, default=None)
    rating_labels: Mapped[list[dict[str, Any]] | None] = mapped_column(JSONType, default=None)
    ranking_options: Mapped[list[dict[str, Any]] | None] = mapped_column(JSONType, default=None)

    # Statements
    text_content: Mapped[Any | None] = mapped_column(JSONType, default=None)
    thumbnail_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"), default=None)
    media_file_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"), default=None)
    cta_text: Mapped[str | None] = mapped_column(String(256), default=None)
    cta_url: Mapped[str | None] = mapped_column(String(1024), default=None)

    thumbnail: Mapped["MediaFile | None"] = relationship("MediaFile", foreign_keys=[thumbnail_id])
    media_file: Mapped["MediaFile | None"] = relationship("MediaFile", foreign_keys=[media_file_id])
