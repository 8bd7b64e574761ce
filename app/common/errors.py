"""
분석 에러 분류
Service 계층에서 raise → app.main 의 exception handler 가 {"error": message} 로 변환
"""
from typing import Optional


class AnalysisError(Exception):
    """모든 분석 에러의 기반 클래스 (HTTP 상태 코드 + 사용자용 메시지)"""

    status_code: int = 500
    message: str = "Unknown error occurred"

    def __init__(self, message: Optional[str] = None):
        if message:
            self.message = message
        super().__init__(self.message)


class InvalidInput(AnalysisError):
    """호출자 입력 오류"""
    status_code = 400
    message = "Video frames are required"


class PayloadTooLarge(AnalysisError):
    status_code = 413
    message = "Video file too large. Max 100MB"


class ConfigurationError(AnalysisError):
    """운영자 설정 오류 (게이트웨이 자격 증명 누락 등)"""
    status_code = 500
    message = "AI service not configured"


class RateLimited(AnalysisError):
    status_code = 429
    message = "Rate limit exceeded. Please try again in a moment."


class QuotaExhausted(AnalysisError):
    status_code = 402
    message = "AI credits exhausted. Please add credits to continue."


class ServiceUnavailable(AnalysisError):
    """일시적 업스트림 장애 (재시도 후에도 실패)"""
    status_code = 503
    message = "AI service temporarily unavailable. Please retry shortly."


class UpstreamError(AnalysisError):
    status_code = 500
    message = "Failed to analyze video"


class EmptyResponse(AnalysisError):
    status_code = 500
    message = "No analysis generated"


# 네트워크 장애로 재시도가 모두 소진됐을 때의 메시지
UNREACHABLE_MESSAGE = "AI service temporarily unreachable. Please retry shortly."
