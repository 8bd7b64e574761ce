import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
from pydantic import BaseModel

from app.common.errors import (
    AnalysisError,
    EmptyResponse,
    QuotaExhausted,
    RateLimited,
    ServiceUnavailable,
    UpstreamError,
    UNREACHABLE_MESSAGE,
)

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RetryState(str, Enum):
    """재시도 루프 상태"""
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    EXHAUSTED = "exhausted"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"  # 네트워크 장애 또는 5xx
    TERMINAL = "terminal"  # 그 외 non-2xx, 깨진 응답


class GatewayCallOutcome(BaseModel):
    """게이트웨이 호출 1회의 결과 (요청 수명 동안만 존재)"""
    kind: OutcomeKind
    attempt: int
    status_code: Optional[int] = None
    payload: Optional[Dict[str, Any]] = None
    network_error: bool = False
    detail: str = ""


def classify_status(status_code: int) -> Optional[AnalysisError]:
    """
    최종 응답 상태 코드 → 에러 분류 (2xx 는 None)

    429 → RateLimited / 402 → QuotaExhausted / ≥500 → ServiceUnavailable / 그 외 → UpstreamError
    """
    if 200 <= status_code < 300:
        return None
    if status_code == 429:
        return RateLimited()
    if status_code == 402:
        return QuotaExhausted()
    if status_code >= 500:
        return ServiceUnavailable()
    return UpstreamError()


def extract_message_content(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    """OpenAI 호환 응답에서 choices[0].message.content 추출 (없으면 None)"""
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content:
        return None
    return content


class AIGatewayClient:
    """
    비전 모델 게이트웨이(OpenAI 호환 /v1/chat/completions) 클라이언트

    - 최대 max_attempts 회 시도
    - 네트워크 장애 / 5xx 만 재시도, 선형 backoff (base * n)
    - 나머지는 즉시 분류
    """

    def __init__(
        self,
        gateway_url: str,
        model: str,
        api_key: Optional[str] = None,
        timeout: float = 60.0,
        max_attempts: int = 3,
        backoff_base: float = 0.3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Args:
            gateway_url: 게이트웨이 chat completions URL
            model: 비전 모델 식별자 (예: google/gemini-2.5-flash)
            api_key: Bearer 자격 증명 (없으면 Service 가 호출 전에 ConfigurationError)
            timeout: 시도 1회당 타임아웃(초)
            max_attempts: 총 시도 횟수
            backoff_base: backoff 기본 단위(초)
            transport: httpx transport (테스트에서 MockTransport 주입)
            sleep: backoff 대기 함수 (테스트에서 대체)
        """
        self.gateway_url = gateway_url
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.backoff_base = backoff_base
        self._transport = transport
        self._sleep = sleep

    async def complete(self, messages: List[Dict[str, Any]]) -> str:
        """
        메시지를 전송하고 모델의 텍스트 응답을 반환

        Raises:
            ServiceUnavailable / RateLimited / QuotaExhausted / UpstreamError / EmptyResponse
        """
        outcome = await self._call_with_retry(messages)

        if outcome.kind is OutcomeKind.RETRYABLE:
            # 재시도 소진
            if outcome.network_error:
                raise ServiceUnavailable(UNREACHABLE_MESSAGE)
            raise ServiceUnavailable()

        if outcome.status_code is not None:
            error = classify_status(outcome.status_code)
            if error is not None:
                logger.error(f"❌ AI gateway error: {outcome.status_code} {outcome.detail}")
                raise error

        content = extract_message_content(outcome.payload)
        if content is None:
            logger.error("❌ No response from AI")
            raise EmptyResponse()

        logger.debug(f"AI Response: {content}")
        return content

    async def _call_with_retry(self, messages: List[Dict[str, Any]]) -> GatewayCallOutcome:
        body = {"model": self.model, "messages": messages}
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        state = RetryState.ATTEMPTING
        attempt = 0
        outcome: Optional[GatewayCallOutcome] = None

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            while state is not RetryState.EXHAUSTED:
                if state is RetryState.RETRYING:
                    delay = self.backoff_base * attempt
                    logger.warning(f"🔁 Retrying AI gateway in {delay:.1f}s (attempt {attempt + 1}/{self.max_attempts})")
                    await self._sleep(delay)

                attempt += 1
                outcome = await self._attempt(client, body, headers, attempt)

                if outcome.kind is not OutcomeKind.RETRYABLE:
                    return outcome

                state = RetryState.RETRYING if attempt < self.max_attempts else RetryState.EXHAUSTED

        logger.error(f"❌ AI gateway retries exhausted after {attempt} attempts")
        return outcome

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        body: Dict[str, Any],
        headers: Dict[str, str],
        attempt: int,
    ) -> GatewayCallOutcome:
        try:
            response = await client.post(self.gateway_url, json=body, headers=headers)
        except httpx.TransportError as e:
            logger.error(f"❌ AI gateway fetch failed (network): {type(e).__name__}: {e}")
            return GatewayCallOutcome(
                kind=OutcomeKind.RETRYABLE, attempt=attempt, network_error=True, detail=str(e)
            )

        if response.status_code >= 500:
            logger.error(f"❌ AI gateway error: {response.status_code} {response.text}")
            return GatewayCallOutcome(
                kind=OutcomeKind.RETRYABLE,
                attempt=attempt,
                status_code=response.status_code,
                detail=response.text,
            )

        if not response.is_success:
            return GatewayCallOutcome(
                kind=OutcomeKind.TERMINAL,
                attempt=attempt,
                status_code=response.status_code,
                detail=response.text,
            )

        try:
            payload = response.json()
        except ValueError:
            logger.error("❌ AI gateway returned a non-JSON body")
            return GatewayCallOutcome(
                kind=OutcomeKind.TERMINAL, attempt=attempt, status_code=response.status_code
            )

        return GatewayCallOutcome(
            kind=OutcomeKind.SUCCESS,
            attempt=attempt,
            status_code=response.status_code,
            payload=payload if isinstance(payload, dict) else None,
        )
