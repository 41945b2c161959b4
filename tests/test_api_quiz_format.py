"""Quiz format API tests"""
import pytest

from tests.factories import add, make_film, make_question, make_section


@pytest.mark.asyncio
async def test_get_quiz_format(client, test_db_session):
    """Compiled section as a JSON array of steps"""
    await add(
        test_db_session,
        make_film(1, "Alien", "Ridley Scott"),
        make_film(2, "Heat", "Michael Mann"),
        make_question(1, "this_or_that", media_type="films", option_a=1, option_b=2),
        make_section(1, [1]),
    )

    response = await client.get("/api/v1/quiz-format", params={"sectionId": 1})

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["id"] == "step-1"
    assert data[0]["questionType"] == "this_or_that"
    assert [c["label"] for c in data[0]["properties"]["choices"]] == [
        "Alien - Ridley Scott",
        "Heat - Michael Mann",
    ]


@pytest.mark.asyncio
async def test_get_quiz_format_section_not_found(client):
    """Unknown section returns 404"""
    response = await client.get("/api/v1/quiz-format", params={"sectionId": 999})

    assert response.status_code == 404
    assert "999" in response.json()["detail"]


@pytest.mark.asyncio
async def test_get_quiz_format_requires_section_id(client):
    """sectionId is mandatory"""
    response = await client.get("/api/v1/quiz-format")

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
