# tests/unit/test_frame_sampler.py
import base64

import cv2
import numpy as np
import pytest

from app.common.errors import InvalidInput
from app.domain.video.frame_sampler import DATA_URI_PREFIX, FrameSampler, frame_indices


def test_frame_indices_evenly_spaced():
    assert frame_indices(80, 8) == [0, 10, 20, 30, 40, 50, 60, 70]
    assert frame_indices(3, 8) == [0, 1, 2]
    assert frame_indices(0, 8) == []


def test_encode_downscales_to_max_width():
    sampler = FrameSampler(max_width=320, jpeg_quality=70)
    frame = np.zeros((480, 1280, 3), dtype=np.uint8)

    uri = sampler.encode(frame)

    assert uri.startswith(DATA_URI_PREFIX)
    raw = base64.b64decode(uri[len(DATA_URI_PREFIX):])
    decoded = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert decoded.shape[1] == 320
    assert decoded.shape[0] == 120


def test_sample_video(sample_video_path):
    result = FrameSampler(sample_count=8).sample(str(sample_video_path))

    assert len(result.frames) == 8
    assert all(f.startswith(DATA_URI_PREFIX) for f in result.frames)
    assert result.total_frames == 30
    assert (result.width, result.height) == (64, 48)


def test_unreadable_video_is_invalid_input(tmp_path):
    path = tmp_path / "broken.mp4"
    path.write_bytes(b"fake video content")

    with pytest.raises(InvalidInput):
        FrameSampler().sample(str(path))
