"""
Pytest Configuration & Shared Fixtures

이 파일은 모든 테스트에서 재사용 가능한 fixture를 정의합니다.
"""
import json
from typing import Any, List

import httpx
import pytest
from fastapi.testclient import TestClient

from app.infrastructure.llm.gateway_client import AIGatewayClient
from app.services.video_analysis_service import VideoAnalysisService


# ========================================
# Application Fixtures
# ========================================

@pytest.fixture(scope="session")
def app():
    """FastAPI 애플리케이션 인스턴스"""
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def client(app):
    """FastAPI TestClient (API 테스트용), 테스트마다 dependency override 초기화"""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ========================================
# Gateway Fakes
# ========================================

def chat_completion(content: Any) -> dict:
    """OpenAI 호환 chat completion 응답 본문"""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class ScriptedGateway:
    """
    시도마다 준비된 응답을 순서대로 돌려주는 가짜 게이트웨이

    script 항목:
    - int: 해당 상태 코드 (본문 "upstream error")
    - dict: 200 + JSON 본문
    - Exception 클래스: 네트워크 장애 (httpx.ConnectError 등)
    """

    def __init__(self, script: List[Any]):
        self.script = list(script)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.script[min(len(self.requests), len(self.script)) - 1]
        if isinstance(item, type) and issubclass(item, Exception):
            raise item("connection failed", request=request)
        if isinstance(item, int):
            return httpx.Response(item, text="upstream error")
        return httpx.Response(200, json=item)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


class SleepRecorder:
    """asyncio.sleep 대체 (실제로 기다리지 않고 지연값만 기록)"""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_service(sleep_recorder):
    """ScriptedGateway 를 물린 VideoAnalysisService 생성기"""
    def _make(gateway: ScriptedGateway, api_key: str = "test-gateway-key") -> VideoAnalysisService:
        gateway_client = AIGatewayClient(
            gateway_url="https://gateway.test/v1/chat/completions",
            model="google/gemini-2.5-flash",
            api_key=api_key,
            timeout=5.0,
            max_attempts=3,
            backoff_base=0.3,
            transport=httpx.MockTransport(gateway),
            sleep=sleep_recorder,
        )
        return VideoAnalysisService(gateway_client=gateway_client)
    return _make


# ========================================
# Sample Data Fixtures
# ========================================

@pytest.fixture
def sample_frames() -> List[str]:
    """data URI 프레임 3장 (내용은 의미 없음)"""
    return [f"data:image/jpeg;base64,ZnJhbWUt{i}" for i in range(3)]


@pytest.fixture
def tennis_report() -> dict:
    return {
        "sport": "Tennis",
        "confidence": 0.9,
        "technique_analysis": ["a"],
        "improvement_suggestions": ["b"],
        "positive_highlights": ["c"],
        "areas_of_concern": ["d"],
    }


@pytest.fixture
def sample_video_path(tmp_path):
    """OpenCV 로 만든 30프레임짜리 MJPG 영상"""
    import cv2
    import numpy as np

    path = tmp_path / "sample_swing.avi"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 10.0, (64, 48))
    if not writer.isOpened():
        pytest.skip("OpenCV VideoWriter(MJPG) unavailable in this build")
    for i in range(30):
        frame = np.full((48, 64, 3), i * 8, dtype=np.uint8)
        writer.write(frame)
    writer.release()
    return path


# ========================================
# Utility Functions
# ========================================

@pytest.fixture
def scripted_gateway():
    """ScriptedGateway 생성 헬퍼"""
    return ScriptedGateway


@pytest.fixture
def completion():
    """chat completion 응답 본문 생성 헬퍼"""
    return chat_completion
