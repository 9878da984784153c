from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
import uvicorn
import logging
import sys

from sme_assessment.core.config import settings
from sme_assessment.core.database_utils import check_database_connection, get_db_session
from sme_assessment.core.exceptions import AssessmentError
from sme_assessment.db.base import Base
from sme_assessment.middleware.request_logging import RequestLoggingMiddleware
from sme_assessment.utils.timezone import isoformat_now

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting up {settings.PROJECT_NAME} ({settings.ENVIRONMENT.value})...")

    # Check database tables
    try:
        from sqlalchemy import inspect

        with get_db_session() as db:
            inspector = inspect(db.bind)
            existing_tables = inspector.get_table_names()
            required_tables = [table.name for table in Base.metadata.tables.values()]
            missing_tables = [table for table in required_tables if table not in existing_tables]

            if missing_tables:
                logger.warning(f"Missing database tables: {missing_tables}")
                logger.warning("Run 'alembic upgrade head' before starting the server")
            else:
                logger.info("All required database tables exist")
    except Exception as e:
        logger.warning(f"Could not check database tables: {e}")

    yield

    logger.info(f"{settings.PROJECT_NAME} shutdown complete")


def error_body(
    request: Request, code: str, message: Any, details: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    error = {
        "code": code,
        "message": message,
        "timestamp": isoformat_now(),
        "request_id": getattr(request.state, "request_id", "unknown"),
    }
    if details:
        error["details"] = details
    return {"error": error}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AssessmentError)
    async def assessment_error_handler(request: Request, exc: AssessmentError):
        logger.info(f"{exc.code}: {exc.message} - {request.url.path}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, exc.code, exc.message, exc.details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Global HTTP exception handler"""
        logger.info(f"HTTP {exc.status_code}: {exc.detail} - {request.url.path}")
        code = HTTP_ERROR_CODES.get(exc.status_code, "INTERNAL_SERVER_ERROR" if exc.status_code >= 500 else "ERROR")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, code, exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            {"field": ".".join(str(p) for p in err.get("loc", ())[1:]), "message": err.get("msg")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=error_body(request, "VALIDATION_ERROR", "Validation failed", details),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled exceptions"""
        logger.exception(f"Unhandled exception: {exc} - {request.url.path}")
        message = str(exc) if settings.debug_mode else "An error occurred"
        return JSONResponse(
            status_code=500,
            content=error_body(request, "INTERNAL_SERVER_ERROR", message),
        )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="SME Self-Assessment - business performance survey, scoring and reporting",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)
    logger.info(f"CORS configured for {settings.ENVIRONMENT.value} with origins: {settings.allowed_cors_origins}")

    register_exception_handlers(app)

    from sme_assessment.api.v1.api import api_router
    from sme_assessment.scoring.api import router as scoring_router

    app.include_router(api_router, prefix=settings.API_V1_STR)
    app.include_router(scoring_router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint that redirects to API documentation"""
        return RedirectResponse(url=f"{settings.API_V1_STR}/docs")

    @app.get("/health", tags=["Health Check"])
    def health_check():
        db_ok = check_database_connection()
        return {
            "status": "healthy" if db_ok else "degraded",
            "version": settings.VERSION,
            "project": settings.PROJECT_NAME,
            "database": "healthy" if db_ok else "unhealthy",
        }

    return app


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    uvicorn.run(
        "sme_assessment.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.debug_mode,
        log_level=settings.LOG_LEVEL.lower(),
    )
