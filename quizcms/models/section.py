from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizcms.models.base import Base, TimestampMixin


class Section(Base, TimestampMixin):
    __tablename__ = "sections"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    display_order: Mapped[int] = mapped_column("order", default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="draft", nullable=False)  # 'draft', 'published'

    step_links: Mapped[list["SectionStep"]] = relationship(
        "SectionStep",
        back_populates="section",
        order_by="SectionStep.position",
        cascade="all, delete-orphan",
    )


class SectionStep(Base):
    """A step placed in a section: declared ``order`` plus storage ``position``"""
    __tablename__ = "section_steps"

    id: Mapped[int] = mapped_column(primary_key=True)
    section_id: Mapped[int] = mapped_column(ForeignKey("sections.id"), nullable=False, index=True)
    step_id: Mapped[int] = mapped_column(ForeignKey("steps.id"), nullable=False, index=True)
    order: Mapped[int] = mapped_column(default=0, nullable=False)
    position: Mapped[int] = mapped_column(default=0, nullable=False)

    section: Mapped["Section"] = relationship("Section", back_populates="step_links")
    step: Mapped["Step"] = relationship("Step")
