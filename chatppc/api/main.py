"""
FastAPI application with assembled routers.

Initializes the FastAPI app, registers routers under /api, installs the
observability middleware and maps application exceptions onto the
uniform error body {"success": false, "error": ..., "details": null}.

Dependencies: fastapi, uvicorn, chatppc.api.routers, chatppc.observability
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatppc.api.deps.dependencies import get_service_cache
from chatppc.configs import get_settings
from chatppc.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ChatPPCException,
    NotFoundError,
    ValidationError,
)
from chatppc.models.common import ErrorResponse
from chatppc.observability.log_utils import log_exception_with_context
from chatppc.observability.logger import configure_logging, get_logger
from chatppc.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    admin_analytics_router,
    admin_conversations_router,
    admin_documents_router,
    chat_router,
    health_router,
)

logger = get_logger(__name__)

EXCEPTION_STATUS_CODES: dict[type[ChatPPCException], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def status_code_for(exc: ChatPPCException) -> int:
    """Map an application exception to its HTTP status (500 when unmapped)."""
    for exc_type, code in EXCEPTION_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def chatppc_exception_handler(request: Request, exc: ChatPPCException) -> JSONResponse:
    code = status_code_for(exc)
    if code >= 500:
        log_exception_with_context(logger, "Request failed", exc, path=request.url.path)
        return error_response(code, "Internal server error")
    logger.info(
        "Request rejected",
        extra={"path": request.url.path, "status_code": code, "error": exc.message},
    )
    return error_response(code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_exception_with_context(logger, "Unhandled exception", exc, path=request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging(get_settings().log_level)
    logger.info("ChatPPC API starting")

    yield

    # Shutdown
    get_service_cache().clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="ChatPPC API",
        description="Retrieval-augmented clinical chat backend and admin API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(ChatPPCException, chatppc_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_router)
    app.include_router(chat_router, prefix="/api")
    app.include_router(admin_conversations_router, prefix="/api")
    app.include_router(admin_documents_router, prefix="/api")
    app.include_router(admin_analytics_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "chatppc.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
