"""Builders for content graph rows used across the tests"""
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.models import (
    Album,
    Application,
    ApplicationSection,
    Art,
    Book,
    Film,
    MediaFile,
    Section,
    SectionStep,
    Step,
)


async def add(session: AsyncSession, *rows):
    """Persist rows and detach them, so services load them fresh"""
    session.add_all(rows)
    await session.commit()
    session.expunge_all()
    return rows[0] if len(rows) == 1 else rows


def make_media_file(id: int, filename: str | None = None, url: str | None = None) -> MediaFile:
    return MediaFile(id=id, filename=filename, url=url)


def make_film(id: int, title: str, director: str, year: int | None = None, cover_image_id: int | None = None) -> Film:
    return Film(
        id=id,
        title=title,
        director=director,
        year=year,
        slug=f"film-{id}",
        cover_image_id=cover_image_id,
    )


def make_book(id: int, title: str, author: str, year: int | None = None) -> Book:
    return Book(id=id, title=title, author=author, year=year, slug=f"book-{id}")


def make_album(id: int, title: str, artist: str, year: int | None = None) -> Album:
    return Album(id=id, title=title, artist=artist, year=year, slug=f"album-{id}")


def make_art(id: int, title: str, artist: str, year: int | None = None) -> Art:
    return Art(id=id, title=title, artist=artist, year=year, slug=f"art-{id}")


def make_question(id: int, question_type: str = "short_text", status: str = "draft", **fields) -> Step:
    return Step(
        id=id,
        title=fields.pop("title", f"Question {id}"),
        step_type="question",
        question_type=question_type,
        status=status,
        **fields,
    )


def make_statement(id: int, statement_type: str = "text", status: str = "draft", **fields) -> Step:
    return Step(
        id=id,
        title=fields.pop("title", f"Statement {id}"),
        step_type="statement",
        statement_type=statement_type,
        status=status,
        **fields,
    )


def make_section(
    id: int,
    step_ids: list[int],
    title: str | None = None,
    status: str = "draft",
    orders: list[int] | None = None,
) -> Section:
    """Section whose step links keep the given storage order; ``orders`` sets the declared order"""
    orders = orders if orders is not None else list(range(len(step_ids)))
    section = Section(id=id, title=title or f"Section {id}", status=status)
    section.step_links = [
        SectionStep(step_id=step_id, order=order, position=position)
        for position, (step_id, order) in enumerate(zip(step_ids, orders))
    ]
    return section


def make_application(
    id: int,
    main: list[int],
    follow_up: list[int] | None = None,
    title: str | None = None,
    published: bool = False,
    status: str = "draft",
) -> Application:
    application = Application(
        id=id,
        title=title or f"Application {id}",
        slug=f"application-{id}",
        published=published,
        status=status,
    )
    links = [ApplicationSection(section_id=section_id, kind="main") for section_id in main]
    links += [ApplicationSection(section_id=section_id, kind="follow_up") for section_id in follow_up or []]
    for position, link in enumerate(links):
        link.position = position
    application.section_links = links
    return application
