#!/usr/bin/env python3
"""
One-off script to manually back-fill missing seed images.

Usage (inside the API container):
    python scripts/run_fix_images.py
"""
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    stream=sys.stdout,
)

from app.tasks.fix_images import fix_seed_images


async def main() -> None:
    print("Starting seed image repair...\n")
    await fix_seed_images(ctx={})
    print("\nImage repair finished.")


if __name__ == "__main__":
    asyncio.run(main())
