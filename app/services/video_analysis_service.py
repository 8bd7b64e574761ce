"""
영상 분석 Service Layer
입력 검증 → 설정 확인 → 프롬프트 구성 → 게이트웨이 호출 → 응답 정규화
"""
import logging
from typing import Any, List

from app.common.errors import ConfigurationError, InvalidInput
from app.domain.report.parser import parse_report
from app.infrastructure.llm.gateway_client import AIGatewayClient
from app.infrastructure.llm.prompts import build_messages
from app.schemas.analysis_dto import AnalysisReport

logger = logging.getLogger(__name__)


class VideoAnalysisService:
    """
    영상 프레임 코칭 분석 서비스

    책임:
    - 프레임 입력 검증
    - 게이트웨이 자격 증명 사전 확인 (재시도 예산을 쓰지 않음)
    - 모델 응답을 항상 완전한 AnalysisReport 로 정규화

    상태를 보관하지 않으므로 요청 간 공유해도 안전하다.
    """

    def __init__(self, gateway_client: AIGatewayClient):
        self.gateway_client = gateway_client

    async def analyze(self, frames: Any) -> AnalysisReport:
        """
        Args:
            frames: data URI 프레임 리스트 (JSON 본문 그대로)

        Returns:
            AnalysisReport (파싱 실패 시 fallback 리포트)

        Raises:
            AnalysisError 하위 클래스
        """
        valid_frames = validate_frames(frames)
        self.ensure_configured()

        logger.info(f"🔄 Analyzing video with AI using {len(valid_frames)} frames...")

        messages = build_messages(valid_frames)
        reply = await self.gateway_client.complete(messages)

        outcome = parse_report(reply)
        if outcome.is_fallback:
            logger.warning("⚠️ Returning fallback analysis report")
        else:
            logger.info(f"✅ Analysis complete: sport={outcome.report.sport}")

        return outcome.report

    def ensure_configured(self) -> None:
        if not self.gateway_client.api_key:
            logger.error("❌ AI_GATEWAY_API_KEY not configured")
            raise ConfigurationError()


def validate_frames(frames: Any) -> List[str]:
    """프레임이 없거나, 리스트가 아니거나, 비어 있으면 InvalidInput"""
    if not frames or not isinstance(frames, list):
        raise InvalidInput()

    for i, frame in enumerate(frames):
        if not isinstance(frame, str) or not frame:
            raise InvalidInput(f"Frame {i + 1} must be a non-empty encoded image string")

    return frames
