"""Mapping of registry failures onto HTTP responses.

Resource-shaped failures become an empty 404, everything else an empty 500.
"""

from fastapi import FastAPI, Request, Response, status

from arregistry.logging_config import get_logger
from arregistry.registry.errors import (
    AssetNotFoundError,
    DigestNotFoundError,
    DownloadFailedError,
    InvalidPackageKeyError,
    ListingTransportError,
    MalformedKeyRingError,
    RegistryError,
)

logger = get_logger(__name__)

_NOT_FOUND_ERRORS = (
    AssetNotFoundError,
    DigestNotFoundError,
    InvalidPackageKeyError,
    MalformedKeyRingError,
)


def status_for(exc: RegistryError) -> int:
    """HTTP status for a registry error."""
    if isinstance(exc, _NOT_FOUND_ERRORS):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DownloadFailedError | ListingTransportError) and exc.status_code == 404:
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def registry_error_handler(request: Request, exc: RegistryError) -> Response:
    code = status_for(exc)
    log = logger.warning if code == status.HTTP_404_NOT_FOUND else logger.error
    log(
        "Registry request failed",
        path=str(request.url.path),
        error=str(exc),
        error_type=type(exc).__name__,
        status_code=code,
    )
    return Response(status_code=code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistryError, registry_error_handler)  # type: ignore[arg-type]
