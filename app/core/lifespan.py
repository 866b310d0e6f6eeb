from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from app.analytics.db import init_db, purge_old_records
from app.core.config import settings
from app.core.resume_store import init_resume_store
from app.semantic.similarity import get_similarity_client

logger = logging.getLogger(__name__)

RETENTION_INTERVAL_S = 3600


async def _retention_loop(stop_event: asyncio.Event, interval_s: float) -> None:
    while not stop_event.is_set():
        try:
            deleted = purge_old_records()
        except Exception as exc:  # pragma: no cover
            logger.warning("analytics_retention_purge_failed: %s", exc)
        else:
            if deleted.get("analysis_runs"):
                logger.info("analytics_retention_purge deleted=%s", deleted)
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(stop_event.wait(), timeout=interval_s)


@asynccontextmanager
async def lifespan(app):
    init_resume_store()
    init_db()
    try:
        client = get_similarity_client()
    except Exception as exc:
        # Startup continues; each request reports the provider error instead.
        logger.warning("similarity_client_unavailable provider=%s: %s", settings.similarity_provider, exc)
    else:
        logger.info("similarity_client_ready provider=%s", client.provider)

    stop_event = asyncio.Event()
    retention_task = asyncio.create_task(_retention_loop(stop_event, RETENTION_INTERVAL_S))
    try:
        yield
    finally:
        stop_event.set()
        retention_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await retention_task
