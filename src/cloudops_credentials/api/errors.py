"""
cloudops_credentials.api.errors

Translation of credentials errors into HTTP responses.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_502_BAD_GATEWAY,
)

from cloudops_credentials.credentials.errors import (
    BackendError,
    CredentialsError,
    DecodeError,
    InvalidName,
    MalformedAuthorization,
    NotFound,
    PermissionDenied,
)
from cloudops_credentials.observability.logging import get_logger

log = get_logger(__name__)

_STATUS_BY_ERROR: dict[type[CredentialsError], int] = {
    InvalidName: HTTP_400_BAD_REQUEST,
    MalformedAuthorization: HTTP_401_UNAUTHORIZED,
    PermissionDenied: HTTP_403_FORBIDDEN,
    NotFound: HTTP_404_NOT_FOUND,
    BackendError: HTTP_502_BAD_GATEWAY,
    DecodeError: HTTP_502_BAD_GATEWAY,
}


def status_for(exc: CredentialsError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return HTTP_502_BAD_GATEWAY


async def credentials_error_handler(_: Request, exc: CredentialsError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        log.error("backend.failure", error_type=type(exc).__name__, error=str(exc))
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CredentialsError, credentials_error_handler)
