"""
비디오 → 프레임 샘플링 Domain Logic
클라이언트의 Frame Submitter 와 같은 일을 서버에서 수행 (트랜스코딩 없음)
"""
import base64
import logging

import cv2
import numpy as np

from app.common.errors import InvalidInput
from app.schemas.video_dto import SampledFrames

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:image/jpeg;base64,"


class FrameSampler:
    """균등 간격으로 N개 프레임을 뽑아 JPEG data URI 로 인코딩"""

    def __init__(self, sample_count: int = 8, max_width: int = 640, jpeg_quality: int = 80):
        self.sample_count = max(1, sample_count)
        self.max_width = max_width
        self.jpeg_quality = jpeg_quality

    def sample(self, file_path: str) -> SampledFrames:
        """
        Args:
            file_path: 로컬 비디오 파일 경로

        Returns:
            SampledFrames (프레임 data URI 리스트 + 메타데이터)
        """
        cap = cv2.VideoCapture(file_path)

        if not cap.isOpened():
            raise InvalidInput("Cannot open video file")

        try:
            fps = cap.get(cv2.CAP_PROP_FPS) or 0.0
            total_frames = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
            width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
            height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

            # webm 등 컨테이너에 따라 프레임 수가 0/음수로 나올 수 있음
            if total_frames <= 0:
                total_frames = self._count_frames(cap)
                cap.set(cv2.CAP_PROP_POS_FRAMES, 0)

            frames = []
            for frame_idx in frame_indices(total_frames, self.sample_count):
                cap.set(cv2.CAP_PROP_POS_FRAMES, frame_idx)
                ret, frame = cap.read()
                if not ret:
                    logger.warning(f"⚠️ Frame {frame_idx} could not be read, skipping")
                    continue
                frames.append(self.encode(frame))
        finally:
            cap.release()

        if not frames:
            raise InvalidInput("No frames could be extracted from the video")

        logger.info(f"🎞️ Sampled {len(frames)}/{total_frames} frames ({width}x{height} @ {fps:.1f}fps)")

        return SampledFrames(
            frames=frames,
            fps=fps,
            total_frames=total_frames,
            duration=total_frames / fps if fps > 0 else 0.0,
            width=width,
            height=height,
        )

    def encode(self, frame: np.ndarray) -> str:
        """BGR 프레임 → (축소) → JPEG → data URI"""
        h, w = frame.shape[:2]
        if self.max_width and w > self.max_width:
            scale = self.max_width / w
            frame = cv2.resize(frame, (self.max_width, max(1, int(h * scale))), interpolation=cv2.INTER_AREA)

        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, self.jpeg_quality])
        if not ok:
            raise InvalidInput("Failed to encode video frame")

        return DATA_URI_PREFIX + base64.b64encode(buf.tobytes()).decode("ascii")

    @staticmethod
    def _count_frames(cap) -> int:
        count = 0
        while cap.grab():
            count += 1
        return count


def frame_indices(total_frames: int, sample_count: int) -> list[int]:
    """0..total_frames-1 구간에서 균등 간격 인덱스 (중복 없음, 오름차순)"""
    if total_frames <= 0:
        return []
    n = min(sample_count, total_frames)
    return sorted({int(i * total_frames / n) for i in range(n)})
