from typing import Any

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quizcms.models.base import Base, JSONType, TimestampMixin


class DeployedTemplate(Base, TimestampMixin):
    """Production store row read by the quiz runtime"""
    __tablename__ = "cms_quiz_templates"

    id: Mapped[int] = mapped_column(primary_key=True)
    quiz_id: Mapped[str] = mapped_column(String(512), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    icon: Mapped[str | None] = mapped_column(String(32), default=None)
    category: Mapped[str | None] = mapped_column(String(128), default=None)
    estimated_time: Mapped[str | None] = mapped_column(String(64), default=None)
    quiz_data: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False)
    version: Mapped[str] = mapped_column(String(32), nullable=False, default="1")
    is_active: Mapped[bool] = mapped_column(default=False, nullable=False, index=True)
    order: Mapped[int] = mapped_column(default=0, nullable=False)
    is_required: Mapped[bool] = mapped_column(default=False, nullable=False)
    # Back-references into the content database (no FK: separate store)
    section_id: Mapped[int | None] = mapped_column(default=None)
    application_id: Mapped[int | None] = mapped_column(default=None)
