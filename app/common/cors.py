from typing import Dict

from fastapi import Request, Response

from app.config.settings import settings


def cors_headers() -> Dict[str, str]:
    """모든 응답에 붙는 허용적 CORS 헤더"""
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Headers": ", ".join(settings.CORS_ALLOW_HEADERS),
    }


async def cors_middleware(request: Request, call_next):
    """
    - OPTIONS(preflight): 라우팅 없이 빈 200 + CORS 헤더
    - 그 외: 응답에 CORS 헤더 추가
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers())

    response = await call_next(request)
    response.headers.update(cors_headers())
    return response
