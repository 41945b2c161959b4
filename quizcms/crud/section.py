import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from quizcms.models.section import Section, SectionStep
from quizcms.models.step import Step
from quizcms.schemas.content import ContentStatus, PublishOptions

logger = logging.getLogger(__name__)


async def get_section_by_id(
    session: AsyncSession,
    section_id: int,
    load_steps: bool = False,
    load_step_details: bool = False,
) -> Section | None:
    """Get a section by ID

    Args:
        session: database session
        section_id: section ID
        load_steps: eager load the step links (step ids and orders)
        load_step_details: also load each step with its thumbnail and media file
    """
    stmt = select(Section).where(Section.id == section_id)
    if load_step_details:
        step_path = selectinload(Section.step_links).selectinload(SectionStep.step)
        # Step links may already sit in the identity map without their steps
        stmt = stmt.options(
            step_path.selectinload(Step.thumbnail),
            step_path.selectinload(Step.media_file),
        ).execution_options(populate_existing=True)
    elif load_steps:
        stmt = stmt.options(selectinload(Section.step_links))
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def update_section_status(
    session: AsyncSession,
    section: Section,
    status: ContentStatus,
    options: PublishOptions,
) -> Section:
    """Set a section's version status"""
    logger.debug(
        f"Section write: section_id={section.id}, status={status.value}, "
        f"suppress_cascade={options.suppress_cascade}"
    )
    section.status = status.value
    await session.commit()
    return section
