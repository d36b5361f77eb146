from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentProfile, get_db
from app.schemas.profile import ProfileRead, ProfileUpdate
from app.services.profile_service import update_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileRead)
async def get_my_profile(current_profile: CurrentProfile):
    return current_profile


@router.put("", response_model=ProfileRead)
async def put_my_profile(
    body: ProfileUpdate,
    current_profile: CurrentProfile,
    db: AsyncSession = Depends(get_db),
):
    return await update_profile(db, current_profile, body)
