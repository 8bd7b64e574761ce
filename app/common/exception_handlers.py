import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.common.cors import cors_headers
from app.common.errors import AnalysisError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    # 500 핸들러 응답은 미들웨어를 거치지 않으므로 CORS 헤더를 직접 붙인다
    return JSONResponse(status_code=status_code, content={"error": message}, headers=cors_headers())


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    logger.warning(f"⚠️ {request.method} {request.url.path} → {exc.status_code} {type(exc).__name__}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"❌ Error in {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, "Unknown error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AnalysisError, analysis_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
