"""
FastAPI application for Imagen generation with S3 storage.

POST /api/generate takes a prompt, calls Imagen once, uploads every
returned image to the configured bucket and answers with their public URLs.
"""
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from config import Config
from common.context import ServiceContext, build_context
from common.error_messages import ErrorCode, ServiceError, UpstreamError, StorageError, get_error_response
from image.routes import router as image_router
from utils.logger import get_logger

logger = get_logger("main")


def _format_validation_error(exc: RequestValidationError) -> str:
    """Condense pydantic errors into one line, e.g. ``body.numberOfImages: Input should be a valid integer``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if not isinstance(p, int))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid"))
    return "; ".join(parts)


async def service_error_handler(request: Request, exc: ServiceError):
    """Map service errors to plain-text responses; details stay in the logs."""
    if isinstance(exc, (UpstreamError, StorageError)):
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    message, status_code = exc.response()
    return PlainTextResponse(message, status_code=status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed or mistyped JSON is a 400, not FastAPI's default 422."""
    detail = _format_validation_error(exc)
    logger.warning(f"{request.method} {request.url.path} invalid payload: {detail}")
    message, status_code = get_error_response(ErrorCode.INVALID_FORMAT, detail)
    return PlainTextResponse(message, status_code=status_code)


async def unhandled_error_handler(request: Request, exc: Exception):
    """Handle all unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    message, status_code = get_error_response(ErrorCode.UNKNOWN_ERROR)
    return PlainTextResponse(message, status_code=status_code)


async def log_requests(request: Request, call_next):
    """Log all HTTP requests with timing."""
    start_time = time.time()
    client = request.client.host if request.client else "unknown"
    logger.info(f"→ {request.method} {request.url.path} - Client: {client}")
    try:
        response = await call_next(request)
    except Exception as e:
        process_time = (time.time() - start_time) * 1000
        logger.error(f"← {request.method} {request.url.path} - Error: {e} - Time: {process_time:.2f}ms")
        raise
    process_time = (time.time() - start_time) * 1000
    logger.info(f"← {request.method} {request.url.path} - Status: {response.status_code} - Time: {process_time:.2f}ms")
    return response


def health():
    """Health check endpoint."""
    return {"status": "ok"}


def create_app(context: Optional[ServiceContext] = None) -> FastAPI:
    """
    Build the application around a service context.

    Without an explicit context one is built from the environment, which
    raises StartupError when required settings are missing.
    """
    if context is None:
        context = build_context()

    app = FastAPI(
        title="Imagen Relay",
        description="Generates images with Imagen and publishes them to S3.",
        version="1.0.0"
    )
    app.state.context = context

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.middleware("http")(log_requests)

    app.include_router(image_router)
    app.add_api_route("/healthz", health, methods=["GET"])

    logger.info(f"Application ready, bucket={context.bucket} region={context.region}")
    return app


# Run server directly
if __name__ == "__main__":
    logger.info(f"Starting server on {Config.HOST}:{Config.PORT}")
    uvicorn.run(
        "app:create_app",
        factory=True,
        host=Config.HOST,
        port=Config.PORT,
        log_level="info"
    )
