import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.errors import GradePortalError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message), latency_ms=0)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def add_error_handlers(app: FastAPI):
    # 서비스 계층 예외: 종류(code)별로 구분해서 응답
    @app.exception_handler(GradePortalError)
    async def grade_portal_exception_handler(request: Request, exc: GradePortalError):
        logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc}")
        return _error_response(exc.status_code, exc.code, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(500, "INTERNAL_ERROR", str(exc))
