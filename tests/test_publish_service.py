"""Cascade publish tests"""
import pytest
from unittest.mock import AsyncMock, patch
from sqlalchemy.exc import OperationalError

from quizcms.crud import application as application_crud, section as section_crud, step as step_crud
from quizcms.exceptions import (
    ApplicationNotFoundError,
    ContentGraphError,
    InvalidPublishRequestError,
    SectionNotFoundError,
    StepNotFoundError,
)
from quizcms.schemas.content import ApplicationUpdateRequest, ContentStatus, PublishOptions
from quizcms.services import publish_service
from tests.factories import (
    add,
    make_application,
    make_question,
    make_section,
    make_statement,
)


async def seed_application(session, section_status="draft", step_status="draft"):
    """Application 1: main sections 1, 2 and follow-up section 3 (steps 1..5)"""
    await add(
        session,
        make_question(1, status=step_status),
        make_question(2, status=step_status),
        make_statement(3, status=step_status),
        make_question(4, status=step_status),
        make_question(5, status=step_status),
        make_section(1, [1, 2], status=section_status),
        make_section(2, [3], status=section_status),
        make_section(3, [4, 5], status=section_status),
        make_application(1, main=[1, 2], follow_up=[3]),
    )


@pytest.mark.asyncio
async def test_publish_application_cascades_to_sections_and_steps(test_db_session):
    """Every referenced section and step ends up published before the application"""
    await seed_application(test_db_session)

    summary = await publish_service.publish_application(test_db_session, 1)

    assert summary.published_section_ids == [1, 2, 3]
    assert summary.published_step_ids == [1, 2, 3, 4, 5]
    assert summary.skipped_section_ids == []
    for section_id in (1, 2, 3):
        section = await section_crud.get_section_by_id(test_db_session, section_id)
        assert section.status == ContentStatus.PUBLISHED.value
    for step_id in range(1, 6):
        step = await step_crud.get_step_by_id(test_db_session, step_id)
        assert step.status == ContentStatus.PUBLISHED.value
    application = await application_crud.get_application_by_id(test_db_session, 1)
    assert application.status == ContentStatus.PUBLISHED.value


@pytest.mark.asyncio
async def test_children_are_written_before_the_application(test_db_session):
    """The application row is written last"""
    await seed_application(test_db_session)
    calls = []

    async def record_section(session, section, status, options):
        calls.append(("section", section.id))
        section.status = status.value
        return section

    async def record_step(session, step, status, options):
        calls.append(("step", step.id))
        step.status = status.value
        return step

    async def record_application(session, application, data, options):
        calls.append(("application", application.id))
        return application

    with patch.object(section_crud, "update_section_status", side_effect=record_section), \
            patch.object(step_crud, "update_step_status", side_effect=record_step), \
            patch.object(application_crud, "update_application", side_effect=record_application):
        await publish_service.publish_application(test_db_session, 1)

    assert calls[-1] == ("application", 1)
    assert calls.index(("step", 1)) < calls.index(("section", 1))
    assert len(calls) == 3 + 5 + 1


@pytest.mark.asyncio
async def test_publish_is_idempotent(test_db_session):
    """A fully published graph is not written again"""
    await seed_application(test_db_session, section_status="published", step_status="published")

    with patch.object(section_crud, "update_section_status", wraps=section_crud.update_section_status) as section_write, \
            patch.object(step_crud, "update_step_status", wraps=step_crud.update_step_status) as step_write:
        summary = await publish_service.publish_application(test_db_session, 1)

    section_write.assert_not_called()
    step_write.assert_not_called()
    assert summary.write_count == 0
    assert summary.skipped_section_ids == [1, 2, 3]


@pytest.mark.asyncio
async def test_second_publish_performs_no_writes(test_db_session):
    """Running the cascade twice writes children once"""
    await seed_application(test_db_session)
    await publish_service.publish_application(test_db_session, 1)

    with patch.object(section_crud, "update_section_status", wraps=section_crud.update_section_status) as section_write, \
            patch.object(step_crud, "update_step_status", wraps=step_crud.update_step_status) as step_write:
        await publish_service.publish_application(test_db_session, 1)

    section_write.assert_not_called()
    step_write.assert_not_called()


@pytest.mark.asyncio
async def test_child_writes_suppress_the_cascade(test_db_session):
    """Each section/step write carries suppress_cascade and happens exactly once"""
    await seed_application(test_db_session)

    with patch.object(section_crud, "update_section_status", wraps=section_crud.update_section_status) as section_write, \
            patch.object(step_crud, "update_step_status", wraps=step_crud.update_step_status) as step_write:
        await publish_service.publish_application(test_db_session, 1)

    assert section_write.call_count == 3
    assert step_write.call_count == 5
    for call in section_write.call_args_list + step_write.call_args_list:
        options = call.args[3]
        assert options.suppress_cascade is True


@pytest.mark.asyncio
async def test_already_published_section_is_skipped_with_its_steps(test_db_session):
    """A published section is not descended into"""
    await add(
        test_db_session,
        make_question(1),
        make_question(2),
        make_section(1, [1], status="published"),
        make_section(2, [2]),
        make_application(1, main=[1, 2]),
    )

    summary = await publish_service.publish_application(test_db_session, 1)

    assert summary.skipped_section_ids == [1]
    assert summary.published_section_ids == [2]
    assert summary.published_step_ids == [2]
    step = await step_crud.get_step_by_id(test_db_session, 1)
    assert step.status == "draft"


@pytest.mark.asyncio
async def test_shared_section_and_step_visited_once(test_db_session):
    """A section listed as main and follow-up, and a step shared by two sections, are written once"""
    await add(
        test_db_session,
        make_question(1),
        make_section(1, [1]),
        make_section(2, [1]),
        make_application(1, main=[1, 2], follow_up=[1]),
    )

    with patch.object(step_crud, "update_step_status", wraps=step_crud.update_step_status) as step_write:
        summary = await publish_service.publish_application(test_db_session, 1)

    assert step_write.call_count == 1
    assert summary.published_section_ids == [1, 2]
    assert summary.published_step_ids == [1]
    assert summary.skipped_step_ids == []


@pytest.mark.asyncio
async def test_update_with_suppress_cascade_skips_children(test_db_session):
    """An application write with suppress_cascade leaves children untouched"""
    await seed_application(test_db_session)

    application, summary = await publish_service.update_application(
        test_db_session,
        1,
        ApplicationUpdateRequest(status=ContentStatus.PUBLISHED),
        PublishOptions(suppress_cascade=True),
    )

    assert summary is None
    assert application.status == "published"
    section = await section_crud.get_section_by_id(test_db_session, 1)
    assert section.status == "draft"


@pytest.mark.asyncio
async def test_update_without_status_change_runs_no_cascade(test_db_session):
    """Title-only writes do not publish anything"""
    await seed_application(test_db_session)

    application, summary = await publish_service.update_application(
        test_db_session, 1, ApplicationUpdateRequest(title="Renamed", published=True)
    )

    assert summary is None
    assert application.title == "Renamed"
    assert application.published is True
    assert application.status == "draft"


@pytest.mark.asyncio
async def test_missing_section_aborts_cascade(test_db_session):
    """A dangling section reference aborts and leaves the application draft"""
    await add(
        test_db_session,
        make_question(1),
        make_section(1, [1]),
        make_application(1, main=[1, 42]),
    )

    with pytest.raises(SectionNotFoundError):
        await publish_service.publish_application(test_db_session, 1)

    application = await application_crud.get_application_by_id(test_db_session, 1)
    assert application.status == "draft"
    # Earlier children stay published
    section = await section_crud.get_section_by_id(test_db_session, 1)
    assert section.status == "published"


@pytest.mark.asyncio
async def test_missing_step_aborts_cascade(test_db_session):
    """A dangling step reference aborts before the section is published"""
    await add(
        test_db_session,
        make_question(1),
        make_section(1, [1, 77]),
        make_application(1, main=[1]),
    )

    with pytest.raises(StepNotFoundError):
        await publish_service.publish_application(test_db_session, 1)

    section = await section_crud.get_section_by_id(test_db_session, 1)
    assert section.status == "draft"


@pytest.mark.asyncio
async def test_application_without_main_section(test_db_session):
    """Publishing needs at least one main section"""
    await add(
        test_db_session,
        make_question(1),
        make_section(1, [1]),
        make_application(1, main=[], follow_up=[1]),
    )

    with pytest.raises(InvalidPublishRequestError):
        await publish_service.publish_application(test_db_session, 1)


@pytest.mark.asyncio
async def test_application_not_found(test_db_session):
    with pytest.raises(ApplicationNotFoundError):
        await publish_service.publish_application(test_db_session, 404)


@pytest.mark.asyncio
async def test_database_error_becomes_content_graph_error(test_db_session):
    """Driver errors during the cascade surface as ContentGraphError"""
    await seed_application(test_db_session)
    failing_write = AsyncMock(side_effect=OperationalError("UPDATE steps", {}, Exception("connection lost")))

    with patch.object(step_crud, "update_step_status", failing_write):
        with pytest.raises(ContentGraphError):
            await publish_service.publish_application(test_db_session, 1)


@pytest.mark.asyncio
async def test_published_status_is_terminal(test_db_session):
    """A published application rejects a draft status without writing"""
    await seed_application(test_db_session)
    await publish_service.publish_application(test_db_session, 1)

    with patch.object(application_crud, "update_application", wraps=application_crud.update_application) as write:
        with pytest.raises(InvalidPublishRequestError):
            await publish_service.update_application(
                test_db_session, 1, ApplicationUpdateRequest(status=ContentStatus.DRAFT)
            )

    write.assert_not_called()
    application = await application_crud.get_application_by_id(test_db_session, 1)
    assert application.status == "published"
