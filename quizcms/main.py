import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text

from quizcms.api.v1 import applications, push_live, quiz_format
from quizcms.core.config import settings
from quizcms.core.logging import setup_logging
from quizcms.exceptions import BaseAppError
from quizcms.models.base import get_engine

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Quiz CMS API",
    description="Publishes quiz applications and deploys compiled quizzes to production",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(applications.router, prefix="/api/v1")
app.include_router(quiz_format.router, prefix="/api/v1")
app.include_router(push_live.router, prefix="/api/v1")

def create_cors_response(
    status_code: int,
    content: dict,
    request: Request,
) -> JSONResponse:
    """JSONResponse with CORS headers"""
    response = JSONResponse(
        status_code=status_code,
        content=content,
    )
    # Exception handlers bypass the CORS middleware headers
    origin = request.headers.get("origin")
    if origin and origin in settings.allowed_origins_list:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Methods"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "*"
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation error handler"""
    logger.warning(f"Request validation error: {exc.errors()}, path={request.url.path}")
    return create_cors_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
        request=request,
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Database error handler"""
    logger.error(
        f"Database error: {exc.__class__.__name__}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )

    if settings.environment == "production":
        return create_cors_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Database error occurred"},
            request=request,
        )
    else:
        return create_cors_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
            request=request,
        )


@app.exception_handler(BaseAppError)
async def app_exception_handler(request: Request, exc: BaseAppError):
    """Application error handler

    Store failures (5xx) are logged as errors, rejected requests as warnings.
    """
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"[{exc.component}] {exc.__class__.__name__} - {exc.message}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "component": exc.component,
        }
    )
    return create_cors_response(
        status_code=exc.status_code,
        content={"detail": exc.message},
        request=request,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all handler, logs every unhandled exception"""
    logger.error(
        f"Unhandled exception: {exc.__class__.__name__}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
            "query_params": dict(request.query_params),
        }
    )

    # Hide details in production
    if settings.environment == "production":
        return create_cors_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
            request=request,
        )
    else:
        return create_cors_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc),
                "type": exc.__class__.__name__,
            },
            request=request,
        )


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Quiz CMS API", "version": "0.1.0"}


@app.get("/health")
async def health_check():
    """Health check"""
    return {"status": "healthy"}


@app.get("/health/db")
async def health_check_db():
    """Database connectivity check"""
    try:
        engine = get_engine()
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "disconnected"},
        )
