from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.profile import Profile
from app.schemas.profile import ProfileUpdate


async def get_profile(db: AsyncSession, profile_id: int) -> Optional[Profile]:
    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    return result.scalar_one_or_none()


async def get_or_create_profile(db: AsyncSession, profile_id: Optional[int] = None) -> Profile:
    profile_id = profile_id or settings.DEFAULT_PROFILE_ID
    profile = await get_profile(db, profile_id)
    if profile is None:
        profile = Profile(id=profile_id)
        db.add(profile)
        await db.commit()
        await db.refresh(profile)
    return profile


async def update_profile(db: AsyncSession, profile: Profile, data: ProfileUpdate) -> Profile:
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    await db.commit()
    await db.refresh(profile)
    return profile
