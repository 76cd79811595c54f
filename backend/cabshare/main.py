from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration

from .api.routes import chat as chat_routes
from .api.routes import feedback as feedback_routes
from .api.routes import maps as maps_routes
from .api.routes import pricing as pricing_routes
from .api.routes import rides as rides_routes
from .llm_client import LLMNotConfigured, close_llm_client
from .logging_config import SERVICE_NAME, SERVICE_VERSION, configure_structlog, get_logger
from .maps_client import MapsNotConfigured, close_maps_client
from .settings import settings
from .utils import add_cors, add_request_id_tracing

# Configure structured logging (must be done before any logging calls)
configure_structlog(json_logs=not settings.DEBUG)

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        release=settings.SENTRY_RELEASE or f"{SERVICE_NAME}@dev",
        integrations=[FastApiIntegration()],
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
    )

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    await close_maps_client()
    await close_llm_client()


app = FastAPI(
    title="CabShare API",
    version=SERVICE_VERSION,
    description="Ride posting, smart ride matching and distance lookup for campus cab sharing",
    lifespan=lifespan,
)
add_cors(app)
add_request_id_tracing(app)

API_PREFIX = "/v1"

app.include_router(rides_routes.router, prefix=API_PREFIX)
app.include_router(chat_routes.router, prefix=API_PREFIX)
app.include_router(maps_routes.router, prefix=API_PREFIX)
app.include_router(pricing_routes.router, prefix=API_PREFIX)
app.include_router(feedback_routes.router, prefix=API_PREFIX)


@app.exception_handler(MapsNotConfigured)
@app.exception_handler(LLMNotConfigured)
async def provider_not_configured(request: Request, exc: RuntimeError) -> JSONResponse:
    logger.error("provider_not_configured", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health")
def health():
    """Liveness plus which upstream providers are configured."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "checks": {
            "maps": "configured" if settings.GOOGLE_MAPS_API_KEY else "missing_key",
            "llm": "configured" if settings.OPENAI_API_KEY else "missing_key",
        },
    }
