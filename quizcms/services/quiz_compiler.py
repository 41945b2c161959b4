"""Section → QuizDocument compiler.

Read-only: resolves media references through the content store and applies
one transformation rule per (step type, question/statement type).
"""
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.core.config import settings
from quizcms.crud import media as media_crud, section as section_crud
from quizcms.exceptions import MediaResolutionError, SectionNotFoundError
from quizcms.models.media import MediaFile, MediaItem
from quizcms.models.section import SectionStep
from quizcms.models.step import Step
from quizcms.schemas.content import MediaRef
from quizcms.schemas.quiz import (
    MediaContent,
    QuizChoice,
    QuizDocument,
    QuizStep,
    RatingLabel,
)
from quizcms.utils.rich_text import rich_text_to_plain

logger = logging.getLogger(__name__)

MEDIA_FILE_PATH = "/api/media/file/"
MAX_RANKING_ITEMS = 4

StepRule = Callable[[AsyncSession, Step, QuizStep], Awaitable[None]]


async def compile_section(session: AsyncSession, section_id: int) -> QuizDocument:
    """Compile a section and its steps into the quiz wire format

    Raises:
        SectionNotFoundError: the section does not exist
    """
    section = await section_crud.get_section_by_id(session, section_id, load_step_details=True)
    if not section:
        raise SectionNotFoundError(section_id)

    steps: list[QuizStep] = []
    for link in order_step_links(section.step_links):
        if link.step is None:
            logger.warning(f"Section step link without step: section_id={section_id}, link_id={link.id}")
            continue
        steps.append(await compile_step(session, link.step))

    logger.debug(f"Section compiled: section_id={section_id}, steps={len(steps)}")
    return QuizDocument(section_id=section.id, title=section.title, steps=steps)


def order_step_links(links: list[SectionStep]) -> list[SectionStep]:
    """Ascending declared order; ties keep storage position, then link id"""
    return sorted(links, key=lambda link: (link.order, link.position, link.id))


async def compile_step(session: AsyncSession, step: Step) -> QuizStep:
    """Compile a single step"""
    quiz_step = QuizStep(
        id=f"step-{step.id}",
        type=_wire_type(step),
        title=step.title,
        subtitle=step.subtitle or None,
    )

    if step.step_type == "question":
        quiz_step.question_type = step.question_type
        quiz_step.description = step.description or None
        rule = QUESTION_RULES.get(step.question_type)
    else:
        rule = STATEMENT_RULES.get(step.statement_type)

    if rule is None:
        logger.warning(
            f"No compile rule for step: step_id={step.id}, step_type={step.step_type}, "
            f"question_type={step.question_type}, statement_type={step.statement_type}"
        )
        return quiz_step

    await rule(session, step, quiz_step)

    if step.step_type == "statement":
        if step.cta_text:
            quiz_step.properties.button_text = step.cta_text
        if step.cta_url:
            quiz_step.properties.button_url = step.cta_url

    return quiz_step


def _wire_type(step: Step) -> str:
    if step.step_type == "statement":
        if step.statement_type in ("video", "audio"):
            return f"{step.statement_type}_statement"
        return "statement"
    return "question"


# ----- media -----

def media_file_url(media_file: MediaFile | None) -> str | None:
    """Absolute URL of an uploaded file (SERVER_URL + /api/media/file/<filename>)"""
    if media_file is None:
        return None
    if media_file.filename:
        return f"{settings.server_url.rstrip('/')}{MEDIA_FILE_PATH}{media_file.filename}"
    return media_file.url or None


def format_media_item(item: MediaItem) -> QuizChoice:
    """Media item as a quiz choice: "<title> - <creator>" label, cover image, year"""
    creator = item.creator
    return QuizChoice(
        id=item.slug or f"{item.kind}-{item.id}",
        label=f"{item.title} - {creator}" if creator else item.title,
        image_url=media_file_url(item.cover_image),
        description=str(item.year) if item.year else None,
    )


async def resolve_media_choice(
    session: AsyncSession,
    raw_ref: Any,
    fallback_kind: str | None,
) -> QuizChoice | None:
    """Resolve a stored media reference; unresolvable references are logged and dropped"""
    try:
        ref = MediaRef.coerce(raw_ref, fallback_kind)
        if ref is None:
            return None
        item = await media_crud.get_media_item(session, ref)
        if item is None:
            raise MediaResolutionError(ref.kind.value, ref.id)
    except MediaResolutionError as e:
        logger.warning(f"Media reference skipped: {e.message}")
        return None
    return format_media_item(item)


# ----- question rules -----

async def _text_input(session: AsyncSession, step: Step, quiz_step: QuizStep) -> None:
    if step.placeholder:
        quiz_step.properties.placeholder = step.placeholder


async def _multiple_choice(session: AsyncSession, step: Step, quiz_step: QuizStep) -> None:
    choices = []
    for option in step.options or []:
        if option.get("value") is None or option.get("label") is None:
            logger.warning(f"Incomplete multiple choice option skipped: step_id={step.id}, option={option}")
            continue
        choices.append(QuizChoice(id=str(option["value"]), label=str(option["label"])))
    quiz_step.properties.choices = choices


async def _this_or_that(session: AsyncSession, step: Step, quiz_step: QuizStep) -> None:
    choices = []
    for raw_ref in (step.option_a, step.option_b):
        choice = await resolve_media_choice(session, raw_ref, step.media_type)
        if choice:
            choices.append(choice)
    quiz_step.properties.choices = choices


async def _rating(session: AsyncSession, step: Step, quiz_step: QuizStep) -> None:
    item = await resolve_media_choice(session, step.rating_item, step.media_type)
    quiz_step.properties.items = [item] if item else []
    if step.rating_labels:
        rating_labels = []
        for label in step.rating_labels:
            try:
                rating_labels.append(RatingLabel.model_validate(label))
            except ValidationError:
                logger.warning(f"Invalid rating label skipped: step_id={step.id}, label={label}")
        quiz_step.properties.rating_labels = rating_labels


async def _ranking(session: AsyncSession, step: Step, quiz_step: QuizStep) -> None:
    options = step.ranking_options or []
    if len(options) > MAX_RANKING_ITEMS:
        logger.warning(
            f"Ranking step has {len(options)} items, only the first {MAX_RANKING_ITEMS} are used: "
            f"step_id={step.id}"
        )
    choices = []
    for option in options[:MAX_RANKING_ITEMS]:
        raw_ref = option.get("item") if isinstance(option, dict) and "item" in option else option
        choice = await resolve_media_choice(session, raw_ref, step.media_type)
        if choice:
            choices.append(choice)
    quiz_step.properties.choices = choices


# ----- statement rules -----

async def _text_statement(session: AsyncSession, step: Step, quiz_step: QuizStep) -> None:
    quiz_step.description = step.description or None
    content = rich_text_to_plain(step.text_content)
    if content:
        quiz_step.properties.content = content


async def _media_statement(session: AsyncSession, step: Step, quiz_step: QuizStep) -> None:
    content: list[MediaContent | str] = []
    link = media_file_url(step.media_file)
    if link:
        content.append(MediaContent(link=link, name=step.media_file.filename or step.title))
    if step.description:
        content.append(step.description)
    quiz_step.properties.content = content

    thumbnail_url = media_file_url(step.thumbnail)
    if thumbnail_url:
        quiz_step.properties.thumbnail_url = thumbnail_url


QUESTION_RULES: dict[str | None, StepRule] = {
    "short_text": _text_input,
    "long_text": _text_input,
    "multiple_choice": _multiple_choice,
    "this_or_that": _this_or_that,
    "rating": _rating,
    "ranking": _ranking,
}

STATEMENT_RULES: dict[str | None, StepRule] = {
    "text": _text_statement,
    "video": _media_statement,
    "audio": _media_statement,
}
