"""
Réponses d'action du tableau de bord / Dashboard action responses.

Les mutations renvoient `{"message", "redirectURL"}` en cas de succès et
`{"error", "redirectURL"}` en cas d'échec. Les formulaires HTML (POST
multipart ou urlencoded) reçoivent une redirection à la place.
"""

import logging

from fastapi import Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from edms.schemas.common import ErrorResult, MessageResult

logger = logging.getLogger(__name__)


class ActionFailed(Exception):
    """Échec d'une action, rendu en ErrorResult / Failed action, rendered as ErrorResult."""

    def __init__(self, status_code: int, error: str, redirect_url: str | None = None):
        self.status_code = status_code
        self.error = error
        self.redirect_url = redirect_url
        super().__init__(error)


async def action_failed_handler(request: Request, exc: ActionFailed) -> JSONResponse:
    logger.info("%s %s failed: %s", request.method, request.url.path, exc.error)
    body = ErrorResult(error=exc.error, redirect_url=exc.redirect_url)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(by_alias=True, exclude_none=True))


def success(message: str, page: str | None = "/dashboard") -> dict:
    """Corps de succès avec redirection / Success body with redirect URL."""
    redirect_url = f"{page}?message={message}" if page else None
    return MessageResult(message=message, redirect_url=redirect_url).model_dump(by_alias=True, exclude_none=True)


def failure(status_code: int, error: str, page: str = "/dashboard", detail: str | None = None) -> ActionFailed:
    """ActionFailed avec redirection vers `page` / ActionFailed redirecting to `page`."""
    return ActionFailed(status_code, error, f"{page}?error={detail or error}")


def redirect_message(page: str, message: str) -> RedirectResponse:
    # 302 comme le tableau de bord l'attend / 302 as the dashboard expects
    return RedirectResponse(f"{page}?message={message}", status_code=302)


def redirect_error(page: str, error: str) -> RedirectResponse:
    return RedirectResponse(f"{page}?error={error}", status_code=303)


# Routes au contrat ErrorResult pour les corps invalides / Routes answering bad bodies with ErrorResult
ERROR_RESULT_PREFIXES = ("/api/emergency-device/",)


async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps illisible ou mal type / Unreadable or mistyped body.

    Les routes appareil repondent 400 "Invalid request body", les autres
    gardent la reponse 422 de FastAPI.
    """
    if not request.url.path.startswith(ERROR_RESULT_PREFIXES):
        return await request_validation_exception_handler(request, exc)
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.errors())
    return await action_failed_handler(request, failure(400, "Invalid request body"))


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    body = ErrorResult(error="Database error", redirect_url="/dashboard?error=Database error")
    return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))
