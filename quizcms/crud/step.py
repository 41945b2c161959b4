import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.models.step import Step
from quizcms.schemas.content import ContentStatus, PublishOptions

logger = logging.getLogger(__name__)


async def get_step_by_id(session: AsyncSession, step_id: int) -> Step | None:
    """Get a step by ID"""
    result = await session.execute(select(Step).where(Step.id == step_id))
    return result.scalar_one_or_none()


async def update_step_status(
    session: AsyncSession,
    step: Step,
    status: ContentStatus,
    options: PublishOptions,
) -> Step:
    """Set a step's version status"""
    logger.debug(
        f"Step write: step_id={step.id}, status={status.value}, "
        f"suppress_cascade={options.suppress_cascade}"
    )
    step.status = status.value
    await session.commit()
    return step
