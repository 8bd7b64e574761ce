import asyncio
from contextlib import asynccontextmanager

from app.config.settings import settings

# OpenCV 프레임 샘플링 동시 실행 상한
_sampling_semaphore = asyncio.Semaphore(max(1, settings.SAMPLING_CONCURRENCY))


@asynccontextmanager
async def sampling_slot():
    """
    프레임 샘플링 작업의 동시 실행 개수를 제한 (CPU 혼잡 방지)
    """
    await _sampling_semaphore.acquire()
    try:
        yield
    finally:
        _sampling_semaphore.release()
