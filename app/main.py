import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.router import api_router
from app.core.config import settings
from app.db.base import Base
from app.db.session import AsyncSessionLocal, engine
from app.models.logs import ApiRequestLog

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the default SQLite database works without running migrations
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() == "sqlite" and url.database:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite database ready at %s", url.database)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Seed Wizard API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    start = time.monotonic()
    response = await call_next(request)
    latency_ms = int((time.monotonic() - start) * 1000)

    if not settings.REQUEST_LOGGING_ENABLED:
        return response

    # Best-effort logging — don't fail the request if DB write fails
    try:
        async with AsyncSessionLocal() as db:
            log = ApiRequestLog(
                timestamp=datetime.now(timezone.utc),
                method=request.method,
                endpoint=str(request.url.path),
                status_code=response.status_code,
                latency_ms=latency_ms,
                ip_address=request.client.host if request.client else None,
            )
            db.add(log)
            await db.commit()
    except SQLAlchemyError as exc:
        logger.warning("request log write failed for %s %s: %s", request.method, request.url.path, exc)

    return response


@app.get("/api/health", tags=["health"])
async def health():
    return {"status": "ok"}


app.include_router(api_router, prefix="/api/v1")
