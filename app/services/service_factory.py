from typing import Optional

import httpx

from app.config.settings import settings
from app.domain.video.frame_sampler import FrameSampler
from app.infrastructure.llm.gateway_client import AIGatewayClient
from app.services.video_analysis_service import VideoAnalysisService


def create_video_analysis_service(
        model: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
) -> VideoAnalysisService:
    """
    VideoAnalysisService 인스턴스 생성

    Args:
        model: 모델 식별자 (없으면 settings.AI_MODEL)
        transport: httpx transport (테스트용)

    Returns:
        VideoAnalysisService 인스턴스
    """
    # Infrastructure 컴포넌트 초기화 (자격 증명은 요청마다 새로 읽는다)
    gateway_client = AIGatewayClient(
        gateway_url=settings.AI_GATEWAY_URL,
        model=model or settings.AI_MODEL,
        api_key=settings.AI_GATEWAY_API_KEY,
        timeout=settings.AI_GATEWAY_TIMEOUT,
        max_attempts=settings.AI_MAX_ATTEMPTS,
        backoff_base=settings.AI_BACKOFF_BASE_MS / 1000.0,
        transport=transport,
    )

    return VideoAnalysisService(gateway_client=gateway_client)


def create_frame_sampler() -> FrameSampler:
    return FrameSampler(
        sample_count=settings.FRAME_SAMPLE_COUNT,
        max_width=settings.FRAME_MAX_WIDTH,
        jpeg_quality=settings.FRAME_JPEG_QUALITY,
    )
