"""FastAPI server relaying GitHub and Trello webhooks to Discord."""

from __future__ import annotations

import asyncio
import logging
import os

# Configure Rich logging early so all modules get proper handlers
from hookrelay.logging import configure_logging
from hookrelay.settings import RelayConfig, Settings, load_config

configure_logging(Settings().log_level)

import logfire
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.routes import sandbox
from api.routes.health import create_health_router
from api.routes.trello import create_trello_registration_router
from api.webhooks import create_github_webhook_router, create_trello_webhook_router
from hookrelay import __version__
from hookrelay.exceptions import RelayError
from hookrelay.integrations.discord import DiscordTransport, build_transport

logger = logging.getLogger(__name__)

DESCRIPTION = """
# hookrelay

Relays GitHub and Trello webhook events to a Discord channel as embeds.

## Endpoints

- `POST /webhooks/github` - GitHub events (push, pull_request, issues, issue_comment)
- `POST /webhooks/trello` - Trello board actions (`GET`/`HEAD` answer webhook validation)
- `GET /api/trello/register?boardId=...` - Connect a Trello board

## Environment Setup

- `DISCORD_WEBHOOK_URL` - Discord webhook receiving the embeds
- `GITHUB_SECRET` - GitHub webhook secret (signature verification is skipped when unset)
- `TRELLO_API_KEY` - Trello API key, needed for board registration
- `TRELLO_API_URL` - Trello REST base URL (default `https://api.trello.com/1`)
- `PUBLIC_BASE_URL` - Public URL of this service, when behind a proxy
"""


def create_app(config: RelayConfig | None = None, transport: DiscordTransport | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Resolved configuration (defaults to the environment)
        transport: Discord transport (defaults to the one matching the config mode)

    Returns:
        Configured FastAPI app
    """
    config = config or load_config()
    transport = transport or build_transport(config)

    app = FastAPI(
        title="hookrelay",
        description=DESCRIPTION,
        version=__version__,
        openapi_tags=[
            {"name": "Health", "description": "Health check and monitoring endpoints"},
            {"name": "webhooks", "description": "Inbound GitHub and Trello webhooks"},
            {"name": "Trello", "description": "Trello board registration"},
        ],
    )
    app.state.config = config
    app.state.transport = transport

    app.include_router(create_health_router(config))
    app.include_router(create_github_webhook_router(config, transport))
    app.include_router(create_trello_webhook_router(config, transport))
    app.include_router(create_trello_registration_router(config))

    if config.test_mode:
        logger.warning("[API] WEBHOOK_TEST_MODE enabled, sandbox routes mounted")
        app.include_router(sandbox.router)

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        message = f"[{type(exc).__name__}] {request.method} {request.url.path}: {exc.detail}"
        if exc.status_code >= 500:
            logger.error(message)
        else:
            logger.warning(message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"[UNHANDLED ERROR] {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return app


app = create_app()

logfire.configure(
    send_to_logfire="if-token-present",
    service_name="hookrelay",
    token=os.environ.get("LOGFIRE_TOKEN"),
    environment=os.environ.get("ENVIRONMENT", "development"),
    console=False,
)
logfire.instrument_fastapi(app)


async def main_http() -> None:
    """Run the HTTP server."""
    port = int(os.environ.get("PORT", 8000))
    logger.info(f"Starting hookrelay on http://0.0.0.0:{port}")

    config = uvicorn.Config(app, host="0.0.0.0", port=port, log_level="info")
    server = uvicorn.Server(config)
    await server.serve()


def run_http() -> None:
    """Entry point for HTTP server command."""
    asyncio.run(main_http())


def run_dev() -> None:
    """Entry point for local development with hot reload."""
    port = int(os.environ.get("PORT", 8000))
    logger.info(f"Starting dev server on http://0.0.0.0:{port} (reload enabled)")
    uvicorn.run(
        "api.server:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    asyncio.run(main_http())
