"""Cascade publish: Application → Sections → Steps.

Children are promoted (and committed) before the application row is written.
If the cascade fails part way, already promoted sections and steps stay
published while the application stays draft; re-running is safe because
published entities are skipped.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.crud import application as application_crud, section as section_crud, step as step_crud
from quizcms.exceptions import (
    ApplicationNotFoundError,
    BaseAppError,
    ContentGraphError,
    InvalidPublishRequestError,
    SectionNotFoundError,
    StepNotFoundError,
)
from quizcms.models.application import Application
from quizcms.schemas.content import (
    ApplicationUpdateRequest,
    ContentStatus,
    PublishOptions,
    PublishSummary,
)

logger = logging.getLogger(__name__)

# Options for writes made by the cascade itself
CASCADE_WRITE = PublishOptions(suppress_cascade=True)


async def update_application(
    session: AsyncSession,
    application_id: int,
    request: ApplicationUpdateRequest,
    options: PublishOptions | None = None,
) -> tuple[Application, PublishSummary | None]:
    """Write an application; publishing it cascades to its sections and steps first

    Returns:
        (application, summary) where summary is None when no cascade ran
    """
    options = options or PublishOptions()
    application = await _get_application(session, application_id)

    if (
        application.status == ContentStatus.PUBLISHED.value
        and request.status is not None
        and request.status != ContentStatus.PUBLISHED
    ):
        raise InvalidPublishRequestError(
            f"Application {application_id} is published; status cannot go back to {request.status.value}"
        )

    data = request.model_dump(exclude_unset=True, exclude_none=True)
    if "status" in data:
        data["status"] = request.status.value

    summary = None
    if request.status == ContentStatus.PUBLISHED and not options.suppress_cascade:
        summary = await cascade_publish(session, application)

    try:
        application = await application_crud.update_application(session, application, data, options)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(
            f"Application write failed after cascade: application_id={application_id}, "
            f"error={e.__class__.__name__}",
            exc_info=True,
        )
        raise ContentGraphError(f"Failed to write application {application_id}")
    return application, summary


async def publish_application(session: AsyncSession, application_id: int) -> PublishSummary:
    """Publish an application together with every section and step it references"""
    _, summary = await update_application(
        session,
        application_id,
        ApplicationUpdateRequest(status=ContentStatus.PUBLISHED),
    )
    return summary


async def cascade_publish(session: AsyncSession, application: Application) -> PublishSummary:
    """Promote every draft section (and its draft steps) referenced by the application

    The first failure aborts the cascade and propagates.
    """
    section_ids = list(dict.fromkeys(application.main_section_ids + application.follow_up_section_ids))
    if not application.main_section_ids:
        raise InvalidPublishRequestError(
            f"Application {application.id} needs at least one main section to be published"
        )

    summary = PublishSummary(application_id=application.id)
    logger.info(f"Cascade publish started: application_id={application.id}, section_ids={section_ids}")

    try:
        for section_id in section_ids:
            await _publish_section(session, section_id, summary)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(
            f"Cascade publish failed: application_id={application.id}, error={e.__class__.__name__}",
            exc_info=True,
        )
        raise ContentGraphError(f"Cascade publish failed for application {application.id}")
    except BaseAppError as e:
        logger.error(f"Cascade publish aborted: application_id={application.id}, error={e.message}")
        raise

    logger.info(
        f"Cascade publish complete: application_id={application.id}, "
        f"sections={len(summary.published_section_ids)} published/{len(summary.skipped_section_ids)} skipped, "
        f"steps={len(summary.published_step_ids)} published/{len(summary.skipped_step_ids)} skipped"
    )
    return summary


async def _publish_section(session: AsyncSession, section_id: int, summary: PublishSummary) -> None:
    section = await section_crud.get_section_by_id(session, section_id, load_steps=True)
    if not section:
        raise SectionNotFoundError(section_id)

    if section.status == ContentStatus.PUBLISHED.value:
        logger.info(f"Section already published, skipping: section_id={section_id}")
        summary.skipped_section_ids.append(section_id)
        return

    logger.info(f"Publishing section: section_id={section_id}")
    for link in section.step_links:
        await _publish_step(session, link.step_id, summary)

    await section_crud.update_section_status(session, section, ContentStatus.PUBLISHED, CASCADE_WRITE)
    summary.published_section_ids.append(section_id)


async def _publish_step(session: AsyncSession, step_id: int, summary: PublishSummary) -> None:
    step = await step_crud.get_step_by_id(session, step_id)
    if not step:
        raise StepNotFoundError(step_id)

    if step.status == ContentStatus.PUBLISHED.value:
        logger.debug(f"Step already published, skipping: step_id={step_id}")
        if step_id not in summary.skipped_step_ids and step_id not in summary.published_step_ids:
            summary.skipped_step_ids.append(step_id)
        return

    await step_crud.update_step_status(session, step, ContentStatus.PUBLISHED, CASCADE_WRITE)
    summary.published_step_ids.append(step_id)


async def _get_application(session: AsyncSession, application_id: int) -> Application:
    try:
        application = await application_crud.get_application_by_id(session, application_id, load_sections=True)
    except SQLAlchemyError as e:
        logger.error(
            f"Application lookup failed: application_id={application_id}, error={e.__class__.__name__}",
            exc_info=True,
        )
        raise ContentGraphError(f"Failed to read application {application_id}")
    if not application:
        raise ApplicationNotFoundError(application_id)
    return application
