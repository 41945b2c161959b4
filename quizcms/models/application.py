from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizcms.models.base import Base, TimestampMixin

SECTION_KIND_MAIN = "main"
SECTION_KIND_FOLLOW_UP = "follow_up"


class Application(Base, TimestampMixin):
    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    slug: Mapped[str] = mapped_column(String(512), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    published: Mapped[bool] = mapped_column(default=False, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), default="draft", nullable=False)  # 'draft', 'published'

    section_links: Mapped[list["ApplicationSection"]] = relationship(
        "ApplicationSection",
        back_populates="application",
        order_by="ApplicationSection.position",
        cascade="all, delete-orphan",
    )

    def _links(self, kind: str) -> list["ApplicationSection"]:
        return [link for link in self.section_links if link.kind == kind]

    @property
    def main_section_links(self) -> list["ApplicationSection"]:
        return self._links(SECTION_KIND_MAIN)

    @property
    def follow_up_section_links(self) -> list["ApplicationSection"]:
        return self._links(SECTION_KIND_FOLLOW_UP)

    @property
    def main_section_ids(self) -> list[int]:
        return [link.section_id for link in self.main_section_links]

    @property
    def follow_up_section_ids(self) -> list[int]:
        return [link.section_id for link in self.follow_up_section_links]


class ApplicationSection(Base):
    """Ordered reference from an application to a main or follow-up section"""
    __tablename__ = "application_sections"

    id: Mapped[int] = mapped_column(primary_key=True)
    application_id: Mapped[int] = mapped_column(ForeignKey("applications.id"), nullable=False, index=True)
    section_id: Mapped[int] = mapped_column(ForeignKey("sections.id"), nullable=False, index=True)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)  # 'main', 'follow_up'
    position: Mapped[int] = mapped_column(default=0, nullable=False)

    application: Mapped["Application"] = relationship("Application", back_populates="section_links")
    section: Mapped["Section"] = relationship("Section")
