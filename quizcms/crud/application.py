import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from quizcms.models.application import Application, ApplicationSection
from quizcms.models.section import Section
from quizcms.schemas.content import PublishOptions

logger = logging.getLogger(__name__)


def _section_tree_options():
    return (
        selectinload(Application.section_links)
        .selectinload(ApplicationSection.section)
        .selectinload(Section.step_links),
    )


async def get_application_by_id(
    session: AsyncSession,
    application_id: int,
    load_sections: bool = False,
) -> Application | None:
    """Get an application by ID

    Args:
        session: database session
        application_id: application ID
        load_sections: eager load section references (with each section's step links)
    """
    stmt = select(Application).where(Application.id == application_id)
    if load_sections:
        stmt = stmt.options(*_section_tree_options())
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_published_application(session: AsyncSession) -> Application | None:
    """Get the live application (``published`` flag set, lowest id wins)"""
    stmt = (
        select(Application)
        .where(Application.published.is_(True))
        .order_by(Application.id)
        .options(*_section_tree_options())
    )
    result = await session.execute(stmt)
    applications = result.scalars().all()
    if len(applications) > 1:
        logger.warning(
            f"Multiple published applications, using the first: "
            f"ids={[a.id for a in applications]}"
        )
    return applications[0] if applications else None


async def update_application(
    session: AsyncSession,
    application: Application,
    data: dict[str, Any],
    options: PublishOptions,
) -> Application:
    """Write application fields (no hooks; see publish_service.update_application)"""
    logger.debug(
        f"Application write: application_id={application.id}, fields={sorted(data)}, "
        f"suppress_cascade={options.suppress_cascade}"
    )
    for field, value in data.items():
        setattr(application, field, value)
    await session.commit()
    return application
