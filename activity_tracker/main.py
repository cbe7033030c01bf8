import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse
from sentry_sdk import set_tag
from sqlalchemy.exc import SQLAlchemyError

from .app_factory import create_service_app
from .config import get_settings
from .logging_config import configure_logging
from .routers.analytics import router as analytics_router
from .routers.categories import router as categories_router
from .routers.logs import router as logs_router
from .routers.plans import router as plans_router
from .routers.weekly_plans import router as weekly_plans_router

settings = get_settings()

configure_logging()
set_tag("service", settings.SERVICE_NAME)
logger = structlog.get_logger(__name__)

app = create_service_app(
    title=settings.SERVICE_NAME,
    version="0.1.0",
    description="Personal study and football tracker with weekly recurring plans",
    cors_allow_origins=settings.cors_origins,
)


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("database_error", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(weekly_plans_router)
app.include_router(logs_router)
app.include_router(categories_router)
app.include_router(plans_router)
app.include_router(analytics_router)
