from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

from dump1090_exporter.api import api_router
from dump1090_exporter.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("dump1090_exporter")

app = FastAPI(title="dump1090 Exporter", docs_url=None, redoc_url=None)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    if settings.log_requests:
        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "HTTP %s %s -> %s (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
    return response


app.include_router(api_router)
