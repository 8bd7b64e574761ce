from typing import Any

from fastapi import Request
from app.common.errors import InvalidInput
from app.domain.video.frame_sampler import FrameSampler
from app.services.service_factory import create_video_analysis_service, create_frame_sampler
from app.services.video_analysis_service import VideoAnalysisService
import logging

logger = logging.getLogger(__name__)


# Service 주입 (테스트에서는 app.dependency_overrides 로 교체)
def get_video_analysis_service() -> VideoAnalysisService:
    return create_video_analysis_service()


def get_frame_sampler() -> FrameSampler:
    return create_frame_sampler()


# JSON 본문 → dict
async def read_json_body(request: Request) -> Any:
    """
    본문을 직접 파싱한다.

    왜 Pydantic Body 가 아닌가?
    - frames 누락/빈 배열/타입 오류를 422 가 아닌 400 {"error": ...} 로 돌려줘야 함
    - 검증 순서(frames → 자격 증명)를 Service 가 결정
    """
    try:
        return await request.json()
    except ValueError:
        logger.warning("⚠️ Request body is not valid JSON")
        raise InvalidInput("Request body must be valid JSON")
