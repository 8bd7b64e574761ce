from fastapi import APIRouter
from app.config.settings import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    # 자격 증명 값 자체는 노출하지 않는다
    return {
        "status": "ok",
        "ai_gateway_configured": bool(settings.AI_GATEWAY_API_KEY),
        "model": settings.AI_MODEL,
    }


ROUTERS = [router]
