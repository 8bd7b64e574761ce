"""
영상 분석 API의 Request/Response DTO
Router ↔ Service 간 데이터 전달용
"""
from pydantic import BaseModel, Field
from typing import List, Literal, Optional


# ============ Report DTO ============
class AnalysisReport(BaseModel):
    """모델이 반환해야 하는 코칭 리포트 (고정 스키마)"""
    sport: str = Field(..., description="영상 속 종목")
    confidence: float = Field(..., ge=0.0, le=1.0, description="종목 판별 신뢰도 (0~1)")
    technique_analysis: List[str] = Field(..., description="기술/자세 분석")
    improvement_suggestions: List[str] = Field(..., description="개선 제안")
    positive_highlights: List[str] = Field(..., description="잘한 점")
    areas_of_concern: List[str] = Field(..., description="주의가 필요한 부분")

    class Config:
        json_schema_extra = {
            "example": {
                "sport": "Tennis",
                "confidence": 0.92,
                "technique_analysis": ["Good shoulder rotation on the forehand"],
                "improvement_suggestions": ["Bend the knees more before contact"],
                "positive_highlights": ["Consistent follow-through"],
                "areas_of_concern": ["Wrist snaps early, risk of strain"],
            }
        }


class ParseOutcome(BaseModel):
    """파싱 경계의 결과 (parsed | fallback), 예외는 이 경계를 넘지 않는다"""
    kind: Literal["parsed", "fallback"]
    report: AnalysisReport
    reason: Optional[str] = Field(None, description="fallback 사유 (로그용)")

    @property
    def is_fallback(self) -> bool:
        return self.kind == "fallback"


# ============ API DTO ============
class AnalyzeVideoRequest(BaseModel):
    """영상 분석 요청 (문서화용, 실제 검증은 Service 에서 수행)"""
    frames: List[str] = Field(..., description="data URI 로 인코딩된 프레임 (시간 순)")

    class Config:
        json_schema_extra = {
            "example": {"frames": ["data:image/jpeg;base64,/9j/4AAQSkZJRg..."]}
        }


class AnalyzeVideoResponse(BaseModel):
    """영상 분석 응답"""
    analysis: AnalysisReport


class ErrorResponse(BaseModel):
    error: str
