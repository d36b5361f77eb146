"""
ARQ worker — background task definitions.
Run with: python -m app.worker
"""
import logging

from arq import cron
from arq.connections import RedisSettings

from app.core.config import settings
from app.tasks.fix_images import fix_seed_images

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Worker settings ───────────────────────────────────────────────────────────


class WorkerSettings:
    redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)
    functions = [fix_seed_images]
    cron_jobs = [
        cron(fix_seed_images, hour=3, minute=0),  # Daily 3am UTC
    ]
    on_startup = None
    on_shutdown = None


if __name__ == "__main__":
    from arq import run_worker

    run_worker(WorkerSettings)
