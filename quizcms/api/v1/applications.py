import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.models.base import get_db
from quizcms.schemas import content as content_schema
from quizcms.services import publish_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


@router.patch("/{application_id}", response_model=content_schema.ApplicationUpdateResponse)
async def update_application(
    application_id: int,
    request: content_schema.ApplicationUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Application write API

    Setting status to "published" first publishes every referenced section and step.
    """
    application, summary = await publish_service.update_application(db, application_id, request)
    return content_schema.ApplicationUpdateResponse(
        application=content_schema.ApplicationResponse.model_validate(application),
        publish_summary=summary,
    )


@router.post("/{application_id}/publish", response_model=content_schema.PublishSummary)
async def publish_application(
    application_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Publish an application with all of its sections and steps"""
    logger.info(f"Publish requested: application_id={application_id}")
    return await publish_service.publish_application(db, application_id)
