"""Application error kinds and their HTTP rendering."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = 'internal_error'
    message = 'Something went wrong.'

    def __init__(self, message: str | None = None, details=None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'validation_error'
    message = 'Invalid request.'


class DuplicateEmailError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = 'duplicate_email'
    message = 'Email already exists.'


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'invalid_credentials'
    message = 'Invalid credentials.'


class MissingTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'missing_token'
    message = 'Unauthorized - no token provided.'


class InvalidTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'invalid_token'
    message = 'Invalid token.'


class ExpiredTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'expired_token'
    message = 'Token has expired.'


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = 'forbidden'
    message = 'Access denied.'


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = 'not_found'
    message = 'Not found.'


class StorageError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = 'storage_error'
    message = 'Database unavailable. Verify DATABASE_URL and database credentials.'


class InternalError(AppError):
    pass


HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: 'unauthorized',
    status.HTTP_403_FORBIDDEN: 'forbidden',
    status.HTTP_404_NOT_FOUND: 'not_found',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'method_not_allowed',
}


def _error_body(error: AppError) -> dict:
    body = {'error': error.message, 'code': error.code}
    if error.details is not None:
        body['details'] = error.details
    return body


def install_error_handlers(app: FastAPI, *, include_details: bool) -> None:
    """Register handlers that render every failure as ``{"error", "code"}``.

    ``include_details`` controls whether unexpected exception messages are
    echoed back to the client; it is off in production.
    """

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        body = {'error': exc.detail, 'code': HTTP_ERROR_CODES.get(exc.status_code, 'http_error')}
        return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, 'headers', None))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {'loc': list(error.get('loc', ())), 'msg': error.get('msg', '')}
            for error in exc.errors()
        ]
        error = ValidationError(details=jsonable_encoder(errors))
        return JSONResponse(status_code=error.status_code, content=_error_body(error))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception('Unhandled error on %s %s', request.method, request.url.path)
        error = InternalError(details=str(exc) if include_details else None)
        return JSONResponse(status_code=error.status_code, content=_error_body(error))
