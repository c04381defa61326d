from typing import Annotated, Dict

from fastapi import Depends

from ..core.config import settings
from ..core.redis_manager import get_redis
from ..repositories.position_repository import PositionRepository
from ..services.quiz_screen import QuizScreenService, Screen

# Active screens of this process, keyed by session id
SCREENS: Dict[str, Screen] = {}


async def get_position_repository() -> PositionRepository:
    return PositionRepository(await get_redis(), settings.POSITION_TTL_SECONDS)


def get_service(
    repo: Annotated[PositionRepository, Depends(get_position_repository)],
) -> QuizScreenService:
    return QuizScreenService(
        repo,
        SCREENS,
        toast_duration_ms=settings.TOAST_DURATION_MS,
        idle_ttl_seconds=settings.POSITION_TTL_SECONDS,
    )


ServiceDep = Annotated[QuizScreenService, Depends(get_service)]
