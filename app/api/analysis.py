from fastapi import APIRouter, Depends, File, Request, UploadFile
from starlette.concurrency import run_in_threadpool
import logging
import os
import tempfile

from app.common.dependencies import get_frame_sampler, get_video_analysis_service, read_json_body
from app.common.errors import InvalidInput, PayloadTooLarge
from app.config.settings import settings
from app.domain.video.frame_sampler import FrameSampler
from app.schemas.analysis_dto import AnalyzeVideoRequest, AnalyzeVideoResponse, ErrorResponse
from app.services.video_analysis_service import VideoAnalysisService
from app.utils.concurrency import sampling_slot

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/analyze-video", tags=["Video Analysis"])

_ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (400, 402, 413, 429, 500, 503)
}

_UPLOAD_CHUNK_BYTES = 1024 * 1024


# ========== API Endpoint ==========
@router.post(
    "",
    response_model=AnalyzeVideoResponse,
    responses=_ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": AnalyzeVideoRequest.model_json_schema()}},
        }
    },
)
async def analyze_video(
        request: Request,
        service: VideoAnalysisService = Depends(get_video_analysis_service),
) -> AnalyzeVideoResponse:
    """
    샘플링된 프레임(data URI)으로 코칭 분석

    Body: {"frames": ["data:image/jpeg;base64,...", ...]}
    """
    payload = await read_json_body(request)
    frames = payload.get("frames") if isinstance(payload, dict) else None

    report = await service.analyze(frames)
    return AnalyzeVideoResponse(analysis=report)


@router.post("/upload", response_model=AnalyzeVideoResponse, responses=_ERROR_RESPONSES)
async def analyze_uploaded_video(
        file: UploadFile = File(..., description="분석할 스포츠 영상 (mp4, mov, avi 등)"),
        service: VideoAnalysisService = Depends(get_video_analysis_service),
        sampler: FrameSampler = Depends(get_frame_sampler),
) -> AnalyzeVideoResponse:
    """
    원본 영상 업로드 → 서버에서 프레임 샘플링 → 코칭 분석
    """
    logger.info(f"📥 Upload: {file.filename} ({file.content_type})")

    if not (file.content_type or "").startswith("video/"):
        raise InvalidInput("Please select a video file")

    # 크기를 이미 알고 있으면 읽기 전에 거절, 모르면 스트리밍 중 확인
    if file.size is not None and file.size > settings.MAX_UPLOAD_BYTES:
        raise PayloadTooLarge()

    # 샘플링(CPU) 전에 설정부터 확인
    service.ensure_configured()

    suffix = os.path.splitext(file.filename or "")[1] or ".mp4"
    temp_file = tempfile.NamedTemporaryFile(delete=False, suffix=suffix)
    temp_path = temp_file.name

    try:
        with temp_file:
            written = 0
            while chunk := await file.read(_UPLOAD_CHUNK_BYTES):
                written += len(chunk)
                if written > settings.MAX_UPLOAD_BYTES:
                    raise PayloadTooLarge()
                temp_file.write(chunk)

        async with sampling_slot():
            sampled = await run_in_threadpool(sampler.sample, temp_path)
    finally:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
            logger.info(f"🗑️ Temp file removed: {temp_path}")

    report = await service.analyze(sampled.frames)
    return AnalyzeVideoResponse(analysis=report)


ROUTERS = [router]
