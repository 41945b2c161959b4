from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.models.base import get_db
from quizcms.services import quiz_compiler

router = APIRouter(prefix="/quiz-format", tags=["quiz-format"])


@router.get("", response_model=list[dict[str, Any]])
async def get_quiz_format(
    section_id: int = Query(..., alias="sectionId", description="Section ID"),
    db: AsyncSession = Depends(get_db),
):
    """Compiled quiz document of a section"""
    document = await quiz_compiler.compile_section(db, section_id)
    return document.to_wire()
