"""Health check and monitoring endpoints."""

from __future__ import annotations

from datetime import datetime
from time import time
from typing import Any

from fastapi import APIRouter

from hookrelay import __version__
from hookrelay.settings import RelayConfig

# Track server start time for uptime metrics
start_time = time()

SERVICE_NAME = "hookrelay"


def _configured(value: str) -> dict[str, str]:
    return {"status": "configured" if value else "not_configured"}


def create_health_router(config: RelayConfig) -> APIRouter:
    """Create health endpoints reporting on the given configuration."""
    router = APIRouter(prefix="/api", tags=["Health"])

    @router.get("/healthz", summary="Basic Health Check")
    async def healthz() -> dict[str, Any]:
        """
        Basic health check endpoint for load balancers and monitoring.

        **Example Response:**
        ```json
        {"status": "ok", "timestamp": "2025-12-04T13:45:00.000000", "service": "hookrelay"}
        ```
        """
        return {"status": "ok", "timestamp": datetime.now().isoformat(), "service": SERVICE_NAME}

    @router.get("/health/detailed", summary="Detailed Health Check")
    async def health_detailed() -> dict[str, Any]:
        """
        Health check including which integrations are configured.

        Secret values are never included, only whether they are set. `status` is
        `degraded` when the Discord webhook URL is missing, since nothing can be
        relayed without it.
        """
        checks = {
            "discord": _configured(config.discord_webhook_url),
            "github": _configured(config.github_secret),
            "trello": _configured(config.trello_api_key),
        }
        degraded = not config.discord_webhook_url and not config.test_mode

        return {
            "status": "degraded" if degraded else "healthy",
            "timestamp": datetime.now().isoformat(),
            "service": SERVICE_NAME,
            "version": __version__,
            "uptime_seconds": round(time() - start_time, 2),
            "test_mode": config.test_mode,
            "checks": checks,
        }

    return router
