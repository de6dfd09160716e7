# apps/pricing_api/main.py
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from apps.pricing_api.routes.catalog import router as catalog_router
from apps.pricing_api.routes.health import router as health_router
from apps.pricing_api.services.admin.logger import log_request_response
from apps.pricing_api.services.pricing.fee_models import CHANNELS
from apps.pricing_api.settings import settings
from apps.pricing_api.utils.envelope import error

log = logging.getLogger("pricing_api.main")

app = FastAPI(
    title="Channel Pricing Catalog",
    version=settings.SERVICE_VERSION,
    description="Partner catalog priced for iFood, 99Food and Keeta",
)

# -------------------------------------------------------------------
# Error handling (stable envelopes, no stack leaks)
# -------------------------------------------------------------------
@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error("Internal server error", code="internal_error", status=500)

# -------------------------------------------------------------------
# CORS (only when an allowlist is configured)
# -------------------------------------------------------------------
if settings.CORS_ALLOW_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

# -------------------------------------------------------------------
# Request logging
# -------------------------------------------------------------------
@app.middleware("http")
async def request_logging(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    await log_request_response(request, response, start_time)
    return response

# -------------------------------------------------------------------
# Routers
# -------------------------------------------------------------------
app.include_router(health_router)
app.include_router(catalog_router)

# -------------------------------------------------------------------
# Root
# -------------------------------------------------------------------
@app.get("/")
async def root():
    return {
        "status": "Channel Pricing Online",
        "channels": list(CHANNELS),
        "routes": [
            "/health",
            "/catalog",
            "/catalog/grouped",
            "/catalog/bands",
            "/catalog/export.json",
            "/catalog/export.csv",
        ],
    }

# -------------------------------------------------------------------
# Startup
# -------------------------------------------------------------------
@app.on_event("startup")
async def startup_event():
    log.info("Channel pricing starting, default km_band=%s", settings.DEFAULT_KM_BAND)
