"""
프레임 샘플링 관련 DTO
FrameSampler 입출력용
"""
from pydantic import BaseModel, Field
from typing import List


class SampledFrames(BaseModel):
    """프레임 샘플링 결과"""
    frames: List[str] = Field(..., description="data:image/jpeg;base64,... (시간 순)")
    fps: float
    total_frames: int
    duration: float  # 초
    width: int
    height: int
