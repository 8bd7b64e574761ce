from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# helpers
from app.config.env_utils import env_bool, env_int, env_float, env_list


# ─────────────────────────────────────────────────────────
# Project root 탐색
#   - .git / pyproject.toml / requirements.txt 중 하나가 보이는 최상단을 루트로 간주
#   - 실패 시 BASE_DIR 환경변수, 그것도 없으면 현재 작업 디렉토리
# ─────────────────────────────────────────────────────────
def find_project_root() -> Path:
    cur = Path(__file__).resolve()
    for parent in cur.parents:
        if any(
            (parent / m).exists()
            for m in (".git", "pyproject.toml", "requirements.txt")
        ):
            return parent
    env_root = os.getenv("BASE_DIR")
    if env_root:
        return Path(env_root).resolve()
    return Path.cwd()


ROOT: Path = find_project_root()

# ─────────────────────────────────────────────────────────
# .env 로딩
#   - ENV_FILE 지정 시 우선
#   - 없으면 ROOT/.env.<ENV> → 없으면 ROOT/.env
# ─────────────────────────────────────────────────────────
_DEFAULT_ENV = os.getenv("ENV", "test")
_env_file_candidate = ROOT / f".env.{_DEFAULT_ENV}"
_ENV_FILE = (
    Path(os.getenv("ENV_FILE")).resolve()
    if os.getenv("ENV_FILE")
    else (_env_file_candidate if _env_file_candidate.exists() else (ROOT / ".env"))
)
load_dotenv(dotenv_path=_ENV_FILE, override=False)


class Settings:
    # ── App / Runtime ─────────────────────────────────────
    ENV: str = os.getenv("ENV", _DEFAULT_ENV)
    FASTAPI_PORT: int = env_int("FASTAPI_PORT", 8000)
    DEBUG_MODE: bool = env_bool("DEBUG_MODE", False)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # ── AI Gateway ────────────────────────────────────────
    AI_GATEWAY_URL: str = os.getenv(
        "AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions"
    )
    AI_MODEL: str = os.getenv("AI_MODEL", "google/gemini-2.5-flash")
    AI_GATEWAY_TIMEOUT: float = env_float("AI_GATEWAY_TIMEOUT", 60.0)  # 시도 1회당(초)
    AI_MAX_ATTEMPTS: int = env_int("AI_MAX_ATTEMPTS", 3)
    AI_BACKOFF_BASE_MS: int = env_int("AI_BACKOFF_BASE_MS", 300)  # n번째 실패 후 base*n ms

    # ── CORS ──────────────────────────────────────────────
    CORS_ALLOW_ORIGIN: str = os.getenv("CORS_ALLOW_ORIGIN", "*")
    CORS_ALLOW_HEADERS = env_list(
        "CORS_ALLOW_HEADERS",
        ["authorization", "x-client-info", "apikey", "content-type"],
    )

    # ── Upload / Frame sampling ───────────────────────────
    MAX_UPLOAD_BYTES: int = env_int("MAX_UPLOAD_BYTES", 100 * 1024 * 1024)
    FRAME_SAMPLE_COUNT: int = env_int("FRAME_SAMPLE_COUNT", 8)
    FRAME_MAX_WIDTH: int = env_int("FRAME_MAX_WIDTH", 640)
    FRAME_JPEG_QUALITY: int = env_int("FRAME_JPEG_QUALITY", 80)
    SAMPLING_CONCURRENCY: int = env_int("SAMPLING_CONCURRENCY", 2)

    # 자격 증명은 import 시점이 아니라 호출 시점에 읽는다 (운영 중 교체/테스트 대응)
    @property
    def AI_GATEWAY_API_KEY(self) -> Optional[str]:
        return os.getenv("AI_GATEWAY_API_KEY") or None


# 전역 싱글톤처럼 사용
settings = Settings()
