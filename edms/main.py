"""
Point d'entree FastAPI / FastAPI entry point.
EDMS - Suivi des equipements de securite incendie / Emergency device management.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from edms.api import api_router
from edms.api.responses import ActionFailed, action_failed_handler, database_error_handler, invalid_body_handler
from edms.config import settings
from edms.database import async_session, close_db, init_db
from edms.rate_limit import limiter
from edms.utils.seed import seed_demo_data

logger = logging.getLogger("edms")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialisation et fermeture / Startup and shutdown."""
    # Validation SECRET_KEY en production / Validate SECRET_KEY in production
    if not settings.DEBUG and settings.SECRET_KEY == "change-me-in-production":
        raise RuntimeError("CRITICAL: SECRET_KEY must be changed in production!")

    await init_db()
    if settings.SEED_DEMO_DATA:
        async with async_session() as session:
            await seed_demo_data(session)
    yield
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Suivi des equipements d'urgence et de leurs inspections / Emergency device and inspection tracking",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Erreurs metier et base / Action and database errors
app.add_exception_handler(ActionFailed, action_failed_handler)
app.add_exception_handler(RequestValidationError, invalid_body_handler)
app.add_exception_handler(SQLAlchemyError, database_error_handler)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Ajoute les headers de securite / Add security headers."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Ajoute un X-Request-ID unique a chaque requete / Add unique X-Request-ID to each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)


# Routes API
app.include_router(api_router)


# Sante de l'API / API health check
@app.get("/api/")
async def api_health():
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}


# Plans de site / Site maps (served under /static)
Path(settings.STATIC_DIR).mkdir(parents=True, exist_ok=True)
Path(settings.SITE_MAPS_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")


# Logging JSON structure en production / Structured JSON logging in production
if not settings.DEBUG:
    import json

    class JSONFormatter(logging.Formatter):
        def format(self, record):
            log_entry = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info and record.exc_info[0]:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.INFO)
