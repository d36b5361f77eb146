from typing import Annotated

import redis.asyncio as aioredis
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.session import get_db
from app.models.profile import Profile
from app.services.profile_service import get_or_create_profile


async def get_current_profile(db: AsyncSession = Depends(get_db)) -> Profile:
    # Single-user mode: every request acts as the default profile
    return await get_or_create_profile(db)


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]


# Module-level Redis client (connection pool, created once on first use)
_redis_client: aioredis.Redis | None = None


def _get_redis() -> aioredis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis_client


async def get_redis():
    yield _get_redis()
