"""Push the published application live.

Compiles every section of the published application, then replaces the
active production templates: deactivate all active rows and upsert the
compiled templates by quiz_id, inside one production-store transaction with
a savepoint per template. A failing section is reported and skipped; the
other sections still deploy.
"""
import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.core.config import settings
from quizcms.crud import application as application_crud, template as template_crud
from quizcms.exceptions import (
    ApplicationNotFoundError,
    BaseAppError,
    ContentGraphError,
    InvalidDeployRequestError,
    ProductionStoreError,
)
from quizcms.models.application import Application, ApplicationSection
from quizcms.schemas.deploy import (
    CompiledTemplate,
    DeployedTemplateResponse,
    DeploySummary,
    SectionReport,
)
from quizcms.services import quiz_compiler
from quizcms.utils.slug import slugify

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], what: str) -> T:
    """Await a remote call, bounded by settings.remote_call_timeout"""
    try:
        return await asyncio.wait_for(awaitable, timeout=settings.remote_call_timeout)
    except asyncio.TimeoutError:
        logger.error(f"Remote call timed out after {settings.remote_call_timeout}s: {what}")
        raise


def build_worklist(application: Application) -> list[tuple[ApplicationSection, bool]]:
    """Main sections (required) followed by follow-up sections (optional)"""
    return (
        [(link, True) for link in application.main_section_links]
        + [(link, False) for link in application.follow_up_section_links]
    )


async def push_application_live(
    content_session: AsyncSession,
    store_session: AsyncSession,
) -> DeploySummary:
    """Compile the published application and replace the active production templates

    Raises:
        ApplicationNotFoundError: no published application
        InvalidDeployRequestError: the application has no sections
        ContentGraphError / ProductionStoreError: the deployment as a whole failed
    """
    try:
        application = await with_timeout(
            application_crud.get_published_application(content_session),
            "find published application",
        )
    except (SQLAlchemyError, asyncio.TimeoutError) as e:
        logger.error(f"Failed to load the published application: {e.__class__.__name__}", exc_info=True)
        raise ContentGraphError("Failed to load the published application")
    if not application:
        raise ApplicationNotFoundError()

    worklist = build_worklist(application)
    if not worklist:
        raise InvalidDeployRequestError(
            "Application has no sections. Please add sections to the application."
        )

    summary = DeploySummary(
        application_id=application.id,
        application_title=application.title,
        main_sections=len(application.main_section_links),
        follow_up_sections=len(application.follow_up_section_links),
    )
    logger.info(
        f"Push live started: application_id={application.id}, title={application.title}, "
        f"main={summary.main_sections}, follow_up={summary.follow_up_sections}"
    )

    compiled = await _compile_worklist(content_session, application, worklist, summary)
    await _replace_templates(store_session, compiled, summary)

    logger.info(
        f"Push live complete: application_id={application.id}, deactivated={summary.deactivated_count}, "
        f"created={summary.created_count}, updated={summary.updated_count}, "
        f"skipped={len(summary.skipped_sections)}, failed={len(summary.failed_sections)}"
    )
    return summary


async def _compile_worklist(
    session: AsyncSession,
    application: Application,
    worklist: list[tuple[ApplicationSection, bool]],
    summary: DeploySummary,
) -> list[CompiledTemplate]:
    compiled: list[CompiledTemplate] = []
    seen_quiz_ids: dict[str, int] = {}

    for link, is_required in worklist:
        section = link.section
        if section is None:
            logger.error(f"Section not found: section_id={link.section_id}, application_id={application.id}")
            summary.failed_sections.append(
                SectionReport(section_id=link.section_id, title="", reason=f"Section not found: {link.section_id}")
            )
            continue
        if not section.step_links:
            logger.warning(f"Section has no steps, skipping: section_id={section.id}, title={section.title}")
            summary.skipped_sections.append(
                SectionReport(section_id=section.id, title=section.title, reason="Section has no steps")
            )
            continue

        quiz_id = slugify(section.title)
        if not quiz_id or quiz_id in seen_quiz_ids:
            reason = (
                f"quiz_id '{quiz_id}' already used by section {seen_quiz_ids[quiz_id]}"
                if quiz_id else "Section title does not produce a quiz_id"
            )
            logger.error(f"Section not deployable: section_id={section.id}, {reason}")
            summary.failed_sections.append(SectionReport(section_id=section.id, title=section.title, reason=reason))
            continue

        try:
            document = await with_timeout(
                quiz_compiler.compile_section(session, section.id),
                f"compile section {section.id}",
            )
        except Exception as e:
            # Any compile error fails this section only
            reason = e.message if isinstance(e, BaseAppError) else f"Compile failed: {e.__class__.__name__}"
            logger.error(f"Section compile failed: section_id={section.id}, {reason}", exc_info=True)
            summary.failed_sections.append(SectionReport(section_id=section.id, title=section.title, reason=reason))
            continue

        seen_quiz_ids[quiz_id] = section.id
        compiled.append(
            CompiledTemplate(
                quiz_id=quiz_id,
                title=section.title,
                description=f"Quiz based on {section.title} section",
                quiz_data=document.to_wire(),
                order=len(compiled),
                is_required=is_required,
                section_id=section.id,
                application_id=application.id,
            )
        )

    return compiled


async def _replace_templates(
    session: AsyncSession,
    compiled: list[CompiledTemplate],
    summary: DeploySummary,
) -> None:
    try:
        summary.deactivated_count = await with_timeout(
            template_crud.deactivate_active_templates(session),
            "deactivate active templates",
        )

        written = []
        for template in compiled:
            try:
                async with session.begin_nested():
                    row, created = await with_timeout(
                        template_crud.upsert_template(session, template),
                        f"upsert template {template.quiz_id}",
                    )
            except (SQLAlchemyError, asyncio.TimeoutError) as e:
                logger.error(
                    f"Template upsert failed: quiz_id={template.quiz_id}, section_id={template.section_id}, "
                    f"error={e.__class__.__name__}",
                    exc_info=True,
                )
                summary.failed_sections.append(
                    SectionReport(
                        section_id=template.section_id,
                        title=template.title,
                        reason=f"Template upsert failed: {e.__class__.__name__}",
                    )
                )
                continue

            if created:
                summary.created_count += 1
            else:
                summary.updated_count += 1
            written.append(row)

        await with_timeout(session.commit(), "commit templates")
    except (SQLAlchemyError, asyncio.TimeoutError) as e:
        await session.rollback()
        logger.error(f"Production store update failed, nothing deployed: {e.__class__.__name__}", exc_info=True)
        raise ProductionStoreError("Failed to update the production templates")

    summary.templates = [DeployedTemplateResponse.model_validate(row) for row in written]
