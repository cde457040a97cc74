from fastapi import FastAPI
from fastapi.responses import Response

from textshare.routers.share import router as share_router
from textshare.routers.health import router as health_router
from textshare.routers.metrics import router as metrics_router
from textshare.utils.telemetry import init_otel
from textshare.db.base import engine
from textshare.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers
from textshare.observability.metrics import instrument_fastapi
from textshare import config

app = FastAPI(
    title="TextShare API",
    description="Turn text into self-contained shareable links",
    version="1.0.0",
)

# Add middleware (order matters: first added = outermost)
# Error handler should be outermost to catch all errors
app.add_middleware(ErrorHandlerMiddleware, debug=config.DEBUG)
instrument_fastapi(app)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(health_router)  # Health checks at root level
app.include_router(metrics_router)
app.include_router(share_router, prefix="/api")


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return empty response for favicon to prevent 404 errors."""
    return Response(status_code=204)


# Initialize OpenTelemetry after app is constructed
init_otel(app=app, engine=engine, service_name=config.SERVICE_NAME, export=config.DEBUG)


def get_app() -> FastAPI:
    return app
