"""
코칭 분석 프롬프트
instruction 안의 JSON 예시는 AnalysisReport 스키마와 정확히 일치해야 한다 (파서가 이 형태를 기대)
"""
from typing import Any, Dict, List

SYSTEM_PROMPT = (
    "You are an expert sports coach and biomechanics analyst. "
    "Analyze sports performance and provide detailed, actionable coaching feedback. "
    "Focus on technique, form, strengths, and areas for improvement."
)

ANALYSIS_INSTRUCTION = """Analyze the following sports video as a coach with a focus on technique and performance. Provide a comprehensive and detailed feedback report in JSON format, including the following sections:

{
  "sport": "Name of the sport being played in the video",
  "confidence": 0.95,

  "technique_analysis": [
    "A detailed, point-by-point breakdown of the player's technique and form, highlighting strengths and weaknesses.",
    "Consider positioning, body movements, coordination, and any sport-specific techniques relevant to the video."
  ],

  "improvement_suggestions": [
    "Specific actionable feedback on how the player can improve their technique, form, or approach during the activity.",
    "Suggestions should be clear, practical, and aimed at enhancing overall performance."
  ],

  "positive_highlights": [
    "Notable strengths in the player's performance, such as effective movement, precision, or technique that stands out positively.",
    "Focus on moments where the player demonstrated superior skills or decision-making."
  ],

  "areas_of_concern": [
    "Potential issues or areas that need attention, such as improper form, risky movements, or missed opportunities for improvement.",
    "Be specific about what went wrong and how it might impact performance or safety."
  ]
}

The frames that follow are stills sampled from the video in chronological order.
Make sure to provide your analysis in a structured and well-organized manner, adhering to the provided JSON format."""


def build_user_content(frames: List[str]) -> List[Dict[str, Any]]:
    """instruction 텍스트 1개 + 프레임마다 image_url 1개 (입력 순서 유지)"""
    content: List[Dict[str, Any]] = [{"type": "text", "text": ANALYSIS_INSTRUCTION}]
    for frame in frames:
        content.append({"type": "image_url", "image_url": {"url": frame}})
    return content


def build_messages(frames: List[str]) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_content(frames)},
    ]
