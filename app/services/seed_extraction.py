"""
AI seed data extraction.

Sends cleaned product page text to the Anthropic Messages API with a forced
`extract_seed_info` tool call and returns the tool input as a dict.
Timeout: 60 seconds. Retries on timeout, 429 and 5xx (up to 3) with exponential backoff.
Results are cached in Redis per product URL (EXTRACTION_CACHE_TTL_SECONDS).

API: POST {ANTHROPIC_BASE_URL}/messages
"""
import asyncio
import json
import logging
from typing import Any, Optional

import httpx

from app.core.config import settings
from app.services.plant_defaults import get_default_timing

logger = logging.getLogger(__name__)

_TIMEOUT = 60.0
_MAX_RETRIES = 3
_ANTHROPIC_VERSION = "2023-06-01"
_TOOL_NAME = "extract_seed_info"

TIMING_FIELDS = (
    "planting_method",
    "weeks_before_last_frost",
    "weeks_after_last_frost",
    "weeks_before_last_frost_outdoor",
    "cold_hardy",
)


class SeedExtractionError(Exception):
    """Raised when the model call fails or returns no tool output."""


class ExtractionNotConfiguredError(SeedExtractionError):
    """Raised when no ANTHROPIC_API_KEY is set."""


EXTRACTION_PROMPT = """You are a seed packet information extractor. Extract planting and growing
information from seed company product pages.

FIRST: Determine if this is actually a seed/plant product page. Set is_seed_product_page to true ONLY if the page
is selling seeds, plants, or bulbs with planting information. Set to false for:
- General articles or blog posts about gardening
- News sites, search engines, social media
- Non-gardening e-commerce (electronics, clothing, etc.)
- Garden tools, fertilizers, or other non-plant products

IMPORTANT GUIDELINES:
1. Extract ONLY information explicitly stated on the page
2. Do not make assumptions or fill in default values
3. Convert measurements to inches (e.g., "1/4 inch" = 0.25)
4. Split maturity ranges into min/max (e.g., "65-75 days" = min: 65, max: 75)
5. For planting_method, determine which method the seed company RECOMMENDS:
   - "start_indoors" = seeds started indoors before transplanting
   - "direct_sow" = seeds planted directly in garden
   - If both methods are mentioned but one says "recommended", use that one
   - If unclear, use "start_indoors" for heat-loving crops (tomatoes, peppers) and "direct_sow" for root crops
     and cold-hardy greens

TIMING FIELDS - Use the correct field based on planting method and cold hardiness:
6. weeks_before_last_frost = ONLY for planting_method="start_indoors": weeks before last frost to start seeds indoors
7. weeks_after_last_frost = ONLY for planting_method="direct_sow" with cold_hardy=false: weeks AFTER last frost
8. weeks_before_last_frost_outdoor = ONLY for planting_method="direct_sow" with cold_hardy=true: weeks BEFORE
   last frost for outdoor direct sowing
   - If it says "as soon as soil can be worked" or similar, use 4-6 weeks before last frost

9. cold_hardy = true if plant can tolerate frost or be planted before last frost date
10. Look for succession planting recommendations
11. Check for fall planting options or cold stratification requirements
12. Extract the main product image URL from the [Product Images] section at the end of the content
    (prefer the first URL listed, which is usually og:image)"""


def _int_prop(description: str) -> dict:
    return {"type": "integer", "description": description}


def _bool_prop(description: str) -> dict:
    return {"type": "boolean", "description": description}


EXTRACTION_TOOL: dict[str, Any] = {
    "name": _TOOL_NAME,
    "description": "Extracts structured seed planting information from a product page",
    "input_schema": {
        "type": "object",
        "properties": {
            "is_seed_product_page": _bool_prop(
                "True if this page is selling seeds/plants/bulbs with planting info."
            ),
            "variety_name": {"type": "string", "description": 'The specific variety name (e.g., "Brandywine")'},
            "common_name": {"type": "string", "description": 'The common plant name (e.g., "Tomato")'},
            "company_name": {"type": "string", "description": "The seed company name"},
            "days_to_maturity_min": _int_prop("Minimum days to maturity/harvest"),
            "days_to_maturity_max": _int_prop("Maximum days to maturity/harvest"),
            "planting_depth_inches": {"type": "number", "description": "Planting depth in inches"},
            "spacing_inches": _int_prop("Plant spacing in inches"),
            "row_spacing_inches": _int_prop("Row spacing in inches"),
            "sun_requirement": {"type": "string", "enum": ["full_sun", "partial_shade", "shade"]},
            "water_requirement": {"type": "string", "enum": ["low", "medium", "high"]},
            "planting_method": {
                "type": "string",
                "enum": ["direct_sow", "start_indoors"],
                "description": "The recommended planting method based on seed company guidance",
            },
            "weeks_before_last_frost": _int_prop("ONLY for start_indoors: weeks before last frost to start indoors"),
            "weeks_after_last_frost": _int_prop("ONLY for direct_sow + NOT cold hardy: weeks after last frost"),
            "cold_hardy": _bool_prop("True if plant tolerates frost or can be planted before last frost"),
            "weeks_before_last_frost_outdoor": _int_prop(
                "ONLY for direct_sow + cold hardy: weeks BEFORE last frost for outdoor sowing"
            ),
            "succession_planting": _bool_prop("Whether succession planting is recommended"),
            "succession_interval_days": _int_prop("Days between succession plantings"),
            "fall_planting": _bool_prop("Whether fall planting is recommended"),
            "cold_stratification_required": _bool_prop("Whether cold stratification is required"),
            "cold_stratification_weeks": _int_prop("Weeks of cold stratification needed"),
            "description": {"type": "string", "description": "Brief description of the variety"},
            "image_url": {"type": "string", "description": "URL to the main product image"},
        },
        "required": ["is_seed_product_page"],
    },
}


def _cache_key(url: str) -> str:
    return f"seed_extraction:{url}"


def _headers() -> dict[str, str]:
    return {
        "x-api-key": settings.ANTHROPIC_API_KEY,
        "anthropic-version": _ANTHROPIC_VERSION,
        "content-type": "application/json",
    }


def build_request(page_content: str, source_url: str) -> dict:
    user_message = (
        f"{EXTRACTION_PROMPT}\n\n"
        f"<webpage_content>\n{page_content}\n</webpage_content>\n\n"
        f"<source_url>\n{source_url}\n</source_url>\n\n"
        f"Extract the seed planting information from this product page and use the {_TOOL_NAME} tool."
    )
    return {
        "model": settings.ANTHROPIC_MODEL,
        "max_tokens": 4096,
        "tools": [EXTRACTION_TOOL],
        "tool_choice": {"type": "tool", "name": _TOOL_NAME},
        "messages": [{"role": "user", "content": user_message}],
    }


async def _post_with_retry(payload: dict) -> dict:
    """POST to the Messages API with retry on timeout, 429 and 5xx."""
    url = f"{settings.ANTHROPIC_BASE_URL}/messages"
    for attempt in range(_MAX_RETRIES):
        last_attempt = attempt == _MAX_RETRIES - 1
        try:
            async with httpx.AsyncClient(timeout=_TIMEOUT) as client:
                response = await client.post(url, headers=_headers(), json=payload)
        except httpx.TimeoutException as exc:
            if last_attempt:
                raise SeedExtractionError(f"Timeout after {_MAX_RETRIES} attempts") from exc
            wait = 2 ** (attempt + 1)
            logger.warning("seed_extraction: timeout, retrying in %ds (attempt %d/%d)", wait, attempt + 1, _MAX_RETRIES)
            await asyncio.sleep(wait)
            continue
        except httpx.HTTPError as exc:
            raise SeedExtractionError(f"Failed to reach model API: {exc}") from exc

        if response.status_code == 429 or response.status_code >= 500:
            if last_attempt:
                break
            wait = 2 ** (attempt + 1)
            logger.warning(
                "seed_extraction: HTTP %d, retrying in %ds (attempt %d/%d)",
                response.status_code, wait, attempt + 1, _MAX_RETRIES,
            )
            await asyncio.sleep(wait)
            continue

        if response.status_code >= 400:
            raise SeedExtractionError(f"HTTP {response.status_code} from model API: {response.text[:200]}")

        try:
            return response.json()
        except ValueError as exc:
            raise SeedExtractionError("Model API returned invalid JSON") from exc

    raise SeedExtractionError("Retries exhausted calling model API")


def parse_tool_output(body: dict) -> dict:
    for block in body.get("content", []):
        if block.get("type") == "tool_use" and block.get("name") == _TOOL_NAME:
            return dict(block.get("input") or {})
    raise SeedExtractionError("Failed to extract seed data: no tool use in response")


def apply_default_timing(data: dict) -> dict:
    """Fill timing fields the page didn't state from the plant defaults table."""
    defaults = get_default_timing(data.get("common_name"))
    if defaults is None:
        return data
    # Defaults for a different planting method than the page recommends don't apply
    method = data.get("planting_method")
    if method is not None and method != defaults["planting_method"]:
        return data

    merged = dict(data)
    for field in TIMING_FIELDS:
        if merged.get(field) is None and defaults[field] is not None:
            merged[field] = defaults[field]
    return merged


async def extract_seed_data(page_content: str, source_url: str, redis: Optional[Any] = None) -> dict:
    """
    Return structured seed data for a product page.

    Checks Redis first (when given). On miss: calls the model and caches the raw
    tool output. Default timing is applied after the cache so table updates
    take effect immediately.
    """
    if not settings.ANTHROPIC_API_KEY:
        raise ExtractionNotConfiguredError("ANTHROPIC_API_KEY is not configured")

    key = _cache_key(source_url)
    if redis is not None:
        cached = await redis.get(key)
        if cached is not None:
            logger.debug("seed extraction cache hit: %s", key)
            raw_str = cached.decode("utf-8") if isinstance(cached, bytes) else cached
            return apply_default_timing(json.loads(raw_str))

    logger.info("seed_extraction: calling model for %s", source_url)
    body = await _post_with_retry(build_request(page_content, source_url))
    data = parse_tool_output(body)

    if redis is not None:
        await redis.setex(key, settings.EXTRACTION_CACHE_TTL_SECONDS, json.dumps(data))
    return apply_default_timing(data)
