# juliaydavid/core/errors.py
"""
Error taxonomy shared by every resource.

Controllers raise these; the handlers registered by
``register_exception_handlers`` turn them into ``{"error": message}``
JSON responses with the matching status code.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Error interno del servidor"


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = GENERIC_SERVER_ERROR

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.message
        # Raw backend text, only shown to clients in development
        self.detail = detail
        super().__init__(self.message if detail is None else f"{self.message}: {detail}")


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Faltan datos"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No autenticado"


class MalformedToken(AuthError):
    message = "Token inválido"


class ExpiredToken(AuthError):
    message = "Token expirado"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "No tienes permisos para esta acción"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "No encontrado"


class StoreError(AppError):
    message = "Error del servidor"


class BlobError(AppError):
    message = "Error al guardar el archivo"


class InvalidUpload(BlobError):
    """The caller sent no file, a file of the wrong type, or one too large."""
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Archivo no válido"


class ConfigError(AppError):
    message = "Configuración del servidor incompleta"


class CleanupError(AppError):
    """
    A blob that should have been removed is still stored.

    Never returned to clients: the database change it follows has already
    been committed. Logged so the leftover can be reconciled by hand.
    """
    message = "No se pudo borrar el archivo"

    def __init__(self, backend: str, provider_id: str, detail: Optional[str] = None):
        self.backend = backend
        self.provider_id = provider_id
        super().__init__(f"{self.message} {backend}:{provider_id}", detail)


def error_body(exc: AppError, expose_details: bool) -> dict:
    message = exc.message
    if expose_details and exc.detail:
        message = f"{message}: {exc.detail}"
    return {"error": message}


def register_exception_handlers(app: FastAPI, expose_details: bool) -> None:
    """Map the taxonomy (and FastAPI's own errors) onto ``{"error": ...}``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc, expose_details),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        content = {"error": "Datos inválidos"}
        if expose_details:
            content["details"] = [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
                for err in exc.errors()
            ]
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": GENERIC_SERVER_ERROR},
        )
