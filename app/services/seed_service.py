from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.seed import Seed
from app.schemas.seed import SeedCreate, SeedUpdate
from app.services.plant_defaults import get_category

# Columns that can't be cleared by sending null in an update
_NOT_NULL_FIELDS = {
    "variety_name",
    "quantity_packets",
    "cold_hardy",
    "succession_planting",
    "fall_planting",
    "cold_stratification_required",
    "is_favorite",
    "is_planted",
}


async def get_seed(db: AsyncSession, seed_id: int, profile_id: int) -> Optional[Seed]:
    result = await db.execute(
        select(Seed).where(Seed.id == seed_id, Seed.profile_id == profile_id)
    )
    return result.scalar_one_or_none()


async def list_seeds(
    db: AsyncSession,
    profile_id: int,
    search: Optional[str] = None,
    category: Optional[str] = None,
    favorites_only: bool = False,
    hide_planted: bool = False,
) -> list[Seed]:
    """Seeds for a profile, newest first. Category is resolved in Python from common_name."""
    query = select(Seed).where(Seed.profile_id == profile_id)

    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(
            or_(
                func.lower(Seed.variety_name).like(pattern),
                func.lower(Seed.common_name).like(pattern),
            )
        )
    if favorites_only:
        query = query.where(Seed.is_favorite.is_(True))
    if hide_planted:
        query = query.where(Seed.is_planted.is_(False))

    result = await db.execute(query.order_by(Seed.created_at.desc(), Seed.id.desc()))
    seeds = list(result.scalars().all())

    if category:
        seeds = [s for s in seeds if get_category(s) == category]
    return seeds


async def create_seed(db: AsyncSession, data: SeedCreate, profile_id: int) -> Seed:
    seed = Seed(**data.model_dump(mode="json"), profile_id=profile_id)
    if seed.ai_extracted:
        seed.ai_extraction_date = datetime.now(timezone.utc)
    db.add(seed)
    await db.commit()
    await db.refresh(seed)
    return seed


async def update_seed(db: AsyncSession, seed: Seed, data: SeedUpdate) -> Seed:
    for field, value in data.model_dump(mode="json", exclude_unset=True).items():
        if value is None and field in _NOT_NULL_FIELDS:
            continue
        setattr(seed, field, value)
    await db.commit()
    await db.refresh(seed)
    return seed


async def delete_seed(db: AsyncSession, seed: Seed) -> None:
    await db.delete(seed)
    await db.commit()


async def list_seeds_missing_images(db: AsyncSession, profile_id: Optional[int] = None) -> list[Seed]:
    """Seeds that have a product URL but no (or a blank) image URL."""
    query = select(Seed).where(
        Seed.product_url.isnot(None),
        Seed.product_url != "",
        or_(Seed.image_url.is_(None), func.trim(Seed.image_url) == ""),
    )
    if profile_id is not None:
        query = query.where(Seed.profile_id == profile_id)
    result = await db.execute(query.order_by(Seed.id))
    return list(result.scalars().all())
