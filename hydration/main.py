"""
CzechAlert site

Serves the static site with publications and articles hydrated from Sanity
on the server.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from hydration.config import get_settings
from hydration.middleware import PageHeadersMiddleware, RequestIDMiddleware
from hydration.routers import pages
from hydration.services import http_client

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: close the shared HTTP client on shutdown."""
    yield
    if http_client._client is not None:
        await http_client._client.aclose()


app = FastAPI(
    title="CzechAlert Site",
    description="Static marketing site with CMS-hydrated publications",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(PageHeadersMiddleware)

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "HEAD", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)


def _check_config() -> dict[str, str]:
    """Verify required configuration is present."""
    s = get_settings()
    return {
        "sanity": "ok" if s.sanity_project_id and s.sanity_dataset else "fail",
        "site_root": "ok" if Path(s.site_root).is_dir() else "fail",
    }


@app.get("/api/health")
async def health_check() -> JSONResponse:
    """Health check verifying configuration."""
    checks = _check_config()
    failed = [k for k, v in checks.items() if v != "ok"]
    if failed:
        logger.warning("Health check degraded, failed: %s", ", ".join(failed))

    result: dict[str, Any] = {
        "status": "degraded" if failed else "ok",
        "service": "czechalert-site",
        "version": "0.1.0",
        "checks": checks,
    }
    return JSONResponse(content=result, status_code=200)


# Pages first so HTML is hydrated; everything else comes from disk
app.include_router(pages.router)

if Path(settings.site_root).is_dir():
    app.mount("/", StaticFiles(directory=settings.site_root), name="static")
else:
    logger.warning("Site root %s not found; static assets disabled", settings.site_root)
