import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentProfile, get_db, get_redis
from app.models.seed import Seed
from app.schemas.seed import Category, ImageFixReport, SeedCreate, SeedRead, SeedUpdate
from app.services.seed_service import create_seed, delete_seed, get_seed, list_seeds, update_seed
from app.tasks.fix_images import repair_missing_images

router = APIRouter(prefix="/seeds", tags=["seeds"])


@router.get("", response_model=list[SeedRead])
async def list_my_seeds(
    current_profile: CurrentProfile,
    db: AsyncSession = Depends(get_db),
    search: str | None = Query(None, description="Partial match on variety or common name"),
    category: Category | None = Query(None, description="Filter by category (vegetable, flower, herb)"),
    favorites_only: bool = Query(False, description="Only show favorited seeds"),
    hide_planted: bool = Query(False, description="Hide seeds already marked as planted"),
):
    return await list_seeds(
        db,
        current_profile.id,
        search=search,
        category=category.value if category else None,
        favorites_only=favorites_only,
        hide_planted=hide_planted,
    )


@router.post("", response_model=SeedRead, status_code=status.HTTP_201_CREATED)
async def add_seed(data: SeedCreate, current_profile: CurrentProfile, db: AsyncSession = Depends(get_db)):
    return await create_seed(db, data, current_profile.id)


@router.post("/fix-images", response_model=ImageFixReport)
async def fix_images(
    current_profile: CurrentProfile,
    db: AsyncSession = Depends(get_db),
    redis: aioredis.Redis = Depends(get_redis),
):
    """Re-extract image URLs for seeds that have a product URL but no image."""
    return await repair_missing_images(db, redis, profile_id=current_profile.id)


@router.get("/{seed_id}", response_model=SeedRead)
async def get_my_seed(seed_id: int, current_profile: CurrentProfile, db: AsyncSession = Depends(get_db)):
    return await _get_owned_seed(db, seed_id, current_profile.id)


@router.put("/{seed_id}", response_model=SeedRead)
async def update_my_seed(
    seed_id: int, data: SeedUpdate, current_profile: CurrentProfile, db: AsyncSession = Depends(get_db)
):
    seed = await _get_owned_seed(db, seed_id, current_profile.id)
    return await update_seed(db, seed, data)


@router.delete("/{seed_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_seed(seed_id: int, current_profile: CurrentProfile, db: AsyncSession = Depends(get_db)):
    seed = await _get_owned_seed(db, seed_id, current_profile.id)
    await delete_seed(db, seed)


# ── Helpers ───────────────────────────────────────────────────────────────────


async def _get_owned_seed(db: AsyncSession, seed_id: int, profile_id: int) -> Seed:
    seed = await get_seed(db, seed_id, profile_id)
    if not seed:
        raise HTTPException(status_code=404, detail="Seed not found")
    return seed
