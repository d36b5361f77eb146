"""
Seed image repair.

repair_missing_images — re-runs page fetch + extraction for seeds that have a
    product_url but no image_url and stores the image the model found.
    One seed failing never stops the batch; each seed gets a status line.

fix_seed_images — ARQ job wrapper, runs daily at 03:00 UTC and records a PipelineRun.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import AsyncSessionLocal
from app.models.logs import PipelineRun
from app.schemas.seed import ImageFixReport, ImageFixResult
from app.services.scraper import PageFetchError, fetch_page_content
from app.services.seed_extraction import SeedExtractionError, extract_seed_data
from app.services.seed_service import list_seeds_missing_images

logger = logging.getLogger(__name__)

MIN_PAGE_LENGTH = 100


async def repair_missing_images(
    db: AsyncSession, redis: Optional[Any] = None, profile_id: Optional[int] = None
) -> ImageFixReport:
    seeds = await list_seeds_missing_images(db, profile_id)
    if not seeds:
        return ImageFixReport(message="No seeds need fixing", fixed=0, total=0, results=[])

    results: list[ImageFixResult] = []
    for seed in seeds:
        try:
            page_content = await fetch_page_content(seed.product_url)
            if len(page_content) < MIN_PAGE_LENGTH:
                results.append(ImageFixResult(id=seed.id, name=seed.variety_name,
                                              status="failed - page content too short"))
                continue

            extracted = await extract_seed_data(page_content, seed.product_url, redis)
            image_url = extracted.get("image_url")
            if not image_url:
                results.append(ImageFixResult(id=seed.id, name=seed.variety_name,
                                              status="failed - no image found on page"))
                continue

            seed.image_url = image_url
            await db.commit()
            results.append(ImageFixResult(id=seed.id, name=seed.variety_name, status="fixed", image_url=image_url))

        except (PageFetchError, SeedExtractionError) as exc:
            logger.warning("repair_missing_images: seed %d failed: %s", seed.id, exc)
            results.append(ImageFixResult(id=seed.id, name=seed.variety_name, status=f"error - {exc}"))

    fixed = sum(1 for r in results if r.status == "fixed")
    return ImageFixReport(
        message=f"Fixed {fixed} of {len(seeds)} seeds",
        fixed=fixed,
        total=len(seeds),
        results=results,
    )


async def fix_seed_images(ctx: dict) -> None:
    """Back-fill missing seed images across all profiles."""
    logger.info("fix_seed_images: starting")
    started_at = datetime.now(timezone.utc)

    async with AsyncSessionLocal() as db:
        pipeline = PipelineRun(
            pipeline_name="seed_image_repair",
            status="running",
            started_at=started_at,
        )
        db.add(pipeline)
        await db.commit()
        await db.refresh(pipeline)

        try:
            report = await repair_missing_images(db, ctx.get("redis"))

            finished_at = datetime.now(timezone.utc)
            pipeline.status = "success" if report.total else "skipped"
            pipeline.finished_at = finished_at
            pipeline.duration_ms = int((finished_at - started_at).total_seconds() * 1000)
            pipeline.records_processed = report.fixed
            await db.commit()

        except Exception as exc:
            logger.exception("fix_seed_images: unexpected error")
            finished_at = datetime.now(timezone.utc)
            pipeline.status = "failed"
            pipeline.finished_at = finished_at
            pipeline.duration_ms = int((finished_at - started_at).total_seconds() * 1000)
            pipeline.error_message = str(exc)
            await db.commit()
            raise

    logger.info("fix_seed_images: complete — %s", report.message)
