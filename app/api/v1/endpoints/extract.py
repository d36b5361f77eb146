import logging

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import get_redis
from app.schemas.extract import ExtractedSeedData, ExtractRequest
from app.services.scraper import (
    PageFetchError,
    blocked_site_message,
    check_blocked_site,
    fetch_page_content,
)
from app.services.seed_extraction import (
    ExtractionNotConfiguredError,
    SeedExtractionError,
    extract_seed_data,
)
from app.tasks.fix_images import MIN_PAGE_LENGTH

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/extract", tags=["extract"])


@router.post("", response_model=ExtractedSeedData)
async def extract_from_url(body: ExtractRequest, redis: aioredis.Redis = Depends(get_redis)):
    """Fetch a seed product page and extract planting data from it with the AI model."""
    url = body.url

    blocked = check_blocked_site(url)
    if blocked:
        raise HTTPException(status_code=400, detail=blocked_site_message(blocked))

    try:
        page_content = await fetch_page_content(url)
    except PageFetchError as exc:
        logger.info("extract: could not fetch %s: %s", url, exc)
        raise HTTPException(
            status_code=400,
            detail="Could not fetch the page. Please check the URL and try again.",
        )

    if len(page_content) < MIN_PAGE_LENGTH:
        raise HTTPException(
            status_code=400,
            detail="Page content too short or empty. Make sure the URL points to a seed product page.",
        )

    try:
        data = await extract_seed_data(page_content, url, redis)
    except ExtractionNotConfiguredError:
        raise HTTPException(status_code=500, detail="AI extraction is not configured. Please contact support.")
    except SeedExtractionError:
        logger.exception("extract: extraction failed for %s", url)
        raise HTTPException(
            status_code=500,
            detail="Failed to extract seed data. Please try again or enter data manually.",
        )

    if not data.get("is_seed_product_page"):
        raise HTTPException(
            status_code=400,
            detail="This doesn't look like a seed product page. Please enter the seed details manually.",
        )

    return ExtractedSeedData(**{**data, "product_url": url, "ai_extracted": True})
