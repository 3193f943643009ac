"""
FastAPI application entry point.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from invitely.api import health, users, templates, invitations, rsvps, guestbook, payments, analytics
from invitely.core.config import get_settings
from invitely.core.exceptions import ServiceError

app_settings = get_settings()

logging.basicConfig(
    level=getattr(logging, str(app_settings.log_level).upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Invitely API",
    description="Wedding invitations: templates, publishing, RSVPs, guestbooks and visitor analytics",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Translate service failures into JSON errors; nothing is retried."""
    logger.info(f"{request.url.path} failed ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Every procedure lives at /api/<procedureName>
app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix="/api", tags=["users"])
app.include_router(templates.router, prefix="/api", tags=["templates"])
app.include_router(invitations.router, prefix="/api", tags=["invitations"])
app.include_router(rsvps.router, prefix="/api", tags=["rsvps"])
app.include_router(guestbook.router, prefix="/api", tags=["guestbook"])
app.include_router(payments.router, prefix="/api", tags=["payments"])
app.include_router(analytics.router, prefix="/api", tags=["analytics"])
