from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.routes.asset import router as asset_router
from .config import get_settings
from .errors import ValidationError
from .logging_config import configure_logging, get_logger

logger = get_logger("main")


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    """Translate engine validation failures into 422 responses."""
    logger.warning(
        "asset_rejected",
        extra={"path": request.url.path, "field": exc.field, "reason": exc.message},
    )
    return JSONResponse(status_code=422, content=exc.to_dict())


def create_app() -> FastAPI:
    """Build FastAPI instance with registered routers."""
    configure_logging(level=get_settings().log_level.upper())

    app = FastAPI(
        title="Asset Ledger Engine API",
        version="0.1.0",
        description="Fixed-asset depreciation endpoints (point-in-time figures, schedules and register exports).",
    )

    app.add_exception_handler(ValidationError, handle_validation_error)
    app.include_router(asset_router, prefix="/asset", tags=["Asset Depreciation"])

    @app.get("/health", tags=["Health"])
    def health_check() -> dict[str, str]:
        """Simple readiness check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
