"""
모델 응답 텍스트 → AnalysisReport 정규화
외부 의존성 없는 순수 함수
"""
import json
import logging
import re

from pydantic import ValidationError

from app.schemas.analysis_dto import AnalysisReport, ParseOutcome

logger = logging.getLogger(__name__)

# ```json ... ``` 우선, 그다음 언어 태그와 무관한 ``` ... ```
_JSON_FENCE = re.compile(r"```json(?![\w+-])[ \t]*\n?([\s\S]*?)\n?```", re.IGNORECASE)
_ANY_FENCE = re.compile(r"```[\w+-]*[ \t]*\n?([\s\S]*?)\n?```")


def fallback_report() -> AnalysisReport:
    """파싱 실패 시 돌려주는 고정 리포트"""
    return AnalysisReport(
        sport="Unknown",
        confidence=0.5,
        technique_analysis=["Analysis could not be parsed correctly"],
        improvement_suggestions=["Please try again"],
        positive_highlights=["Unable to analyze"],
        areas_of_concern=["Analysis parsing failed"],
    )


def extract_json_candidate(text: str) -> str:
    """
    응답 텍스트에서 JSON 후보 문자열 추출

    순서:
    1. ```json 펜스 블록
    2. 아무 펜스 블록
    3. 원문 그대로
    """
    for pattern in (_JSON_FENCE, _ANY_FENCE):
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1)
    return text


def parse_report(text: str) -> ParseOutcome:
    """
    모델 응답을 리포트로 변환

    Returns:
        ParseOutcome
        - kind="parsed": 스키마 검증 통과
        - kind="fallback": JSON 아님 (과도한 중첩 포함) / 객체 아님 / 스키마 불일치
    """
    candidate = extract_json_candidate(text)

    try:
        data = json.loads(candidate)
    except (json.JSONDecodeError, RecursionError) as e:
        return _fallback(f"invalid JSON: {e}")

    if not isinstance(data, dict):
        return _fallback(f"expected JSON object, got {type(data).__name__}")

    try:
        report = AnalysisReport.model_validate(data)
    except ValidationError as e:
        return _fallback(f"schema mismatch: {e.error_count()} error(s)")

    return ParseOutcome(kind="parsed", report=report)


def _fallback(reason: str) -> ParseOutcome:
    logger.error(f"❌ Failed to parse AI response: {reason}")
    return ParseOutcome(kind="fallback", report=fallback_report(), reason=reason)
