"""Map domain errors to HTTP responses.

Bodies take the form ``{"code": ..., "error": {"field": ["reason", ...]}}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.errors import MarketplaceError, StorageFailure

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, messages) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "error": messages})


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    if isinstance(exc, StorageFailure):
        logger.error("storage_failure", path=request.url.path, method=request.method)
    return _error_response(exc.status_code, exc.code, exc.messages)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:  # noqa: ARG001
    return _error_response(400, "invalid_argument", exc.messages)


async def object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:  # noqa: ARG001
    messages = exc.messages if isinstance(getattr(exc, "messages", None), dict) else {"_entity": [str(exc)]}
    return _error_response(404, "not_found", messages)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, object_not_found_handler)
