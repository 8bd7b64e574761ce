import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.api import include_all_routers
from app.common.cors import cors_middleware
from app.common.exception_handlers import register_exception_handlers
from app.config.settings import settings

if not logging.getLogger().handlers:
    logging.basicConfig(
        level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

# 앱 생성
app = FastAPI(debug=settings.DEBUG_MODE)

# 모든 응답에 CORS 헤더, OPTIONS 는 빈 200
app.middleware("http")(cors_middleware)

# AnalysisError → {"error": ...}
register_exception_handlers(app)

# 자동으로 app/api/* 모듈을 스캔해 라우터 전부 등록
include_all_routers(app)

app.openapi = lambda: get_openapi(
    title="AI Sports Video Coach API",
    version="1.0.0",
    description="스포츠 영상 프레임 기반 AI 코칭 분석 API",
    routes=app.routes,
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.FASTAPI_PORT, reload=True)
