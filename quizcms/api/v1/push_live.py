import logging

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from quizcms.exceptions import BaseAppError
from quizcms.models.base import get_db, get_production_db
from quizcms.schemas import deploy as deploy_schema
from quizcms.services import deploy_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/push-live", tags=["push-live"])


@router.post("", response_model=deploy_schema.PushLiveResponse, response_model_exclude_none=True)
async def push_application_live(
    db: AsyncSession = Depends(get_db),
    production_db: AsyncSession = Depends(get_production_db),
):
    """Deploy the published application to the production template store"""
    try:
        summary = await deploy_service.push_application_live(db, production_db)
    except BaseAppError as e:
        logger.warning(f"Push live failed: [{e.component}] {e.__class__.__name__} - {e.message}")
        response = deploy_schema.PushLiveResponse(success=False, error=e.message)
        return JSONResponse(
            status_code=e.status_code,
            content=jsonable_encoder(response, by_alias=True, exclude_none=True),
        )
    return deploy_schema.PushLiveResponse.from_summary(summary)
