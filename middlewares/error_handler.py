import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from utils.errors import BatchRequestError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message), latency_ms=0)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def add_error_handlers(app: FastAPI):
    # ✅ the whole batch request is unusable (missing ids, closed year ...)
    @app.exception_handler(BatchRequestError)
    async def batch_request_error_handler(request: Request, exc: BatchRequestError):
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(500, "INTERNAL_ERROR", str(exc))
