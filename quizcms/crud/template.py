"""Production store access.

These functions only flush; the deployment service owns the transaction and
commits once every template has been written.
"""
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.core.config import settings
from quizcms.models.template import DeployedTemplate
from quizcms.schemas.deploy import CompiledTemplate


async def get_template_by_quiz_id(session: AsyncSession, quiz_id: str) -> DeployedTemplate | None:
    """Get a template by its unique quiz_id"""
    result = await session.execute(select(DeployedTemplate).where(DeployedTemplate.quiz_id == quiz_id))
    return result.scalar_one_or_none()


async def get_active_templates(session: AsyncSession) -> Sequence[DeployedTemplate]:
    """Active templates in display order"""
    result = await session.execute(
        select(DeployedTemplate)
        .where(DeployedTemplate.is_active.is_(True))
        .order_by(DeployedTemplate.order, DeployedTemplate.id)
    )
    return result.scalars().all()


async def deactivate_active_templates(session: AsyncSession) -> int:
    """Set is_active=false on every active template, returns the number of rows changed"""
    result = await session.execute(
        update(DeployedTemplate)
        .where(DeployedTemplate.is_active.is_(True))
        .values(is_active=False)
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount or 0


async def upsert_template(
    session: AsyncSession,
    compiled: CompiledTemplate,
) -> tuple[DeployedTemplate, bool]:
    """Insert or update a template by quiz_id and activate it

    Returns:
        (template, created) where created is False when an existing row was updated
    """
    template = await get_template_by_quiz_id(session, compiled.quiz_id)
    created = template is None
    if created:
        template = DeployedTemplate(quiz_id=compiled.quiz_id)
        session.add(template)

    template.title = compiled.title
    template.description = compiled.description
    template.icon = settings.template_icon
    template.category = settings.template_category
    template.estimated_time = settings.template_estimated_time
    template.quiz_data = compiled.quiz_data
    template.version = settings.quiz_template_version
    template.is_active = True
    template.order = compiled.order
    template.is_required = compiled.is_required
    template.section_id = compiled.section_id
    template.application_id = compiled.application_id

    await session.flush()
    return template, created
