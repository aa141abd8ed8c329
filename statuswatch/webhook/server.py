"""FastAPI server for the Jira status webhook."""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..common import log_server_message, setup_logging
from ..dedup import DedupCache
from ..delivery import SlackClient
from ..exceptions import WebhookError
from .config import NotifierConfig
from .handler import WebhookHandler

logger = logging.getLogger(__name__)

SERVICE_NAME = "statuswatch"


def create_app(
    config: Optional[NotifierConfig] = None,
    dedup_cache: Optional[DedupCache] = None,
    slack_client: Optional[SlackClient] = None,
) -> FastAPI:
    """Build the application.

    Called without arguments (as uvicorn's app factory) it reads its
    configuration from the environment.
    """
    config = config or NotifierConfig.from_env()
    if dedup_cache is None:
        dedup_cache = DedupCache(
            retention_seconds=config.dedup_retention_seconds,
            sweep_interval_seconds=config.dedup_sweep_interval_seconds,
        )
    slack_client = slack_client or SlackClient(timeout=config.slack_timeout)
    handler = WebhookHandler(config, dedup_cache, slack_client)

    app = FastAPI(title="Statuswatch", version=__version__)
    app.state.config = config
    app.state.dedup_cache = dedup_cache
    app.state.handler = handler

    @app.on_event("startup")
    async def startup_event() -> None:
        """Handle application startup."""
        setup_logging(config.log_dir)
        dedup_cache.start()
        log_server_message("Server starting up")
        log_server_message(f"Webhook endpoint: {config.webhook_endpoint}")
        log_server_message(f"Match rule: {config.match_rule.expected_transition} (project {config.project_key or 'any'})")
        if not config.secret_configured:
            log_server_message("JIRA_WEBHOOK_SECRET is not set; all webhooks will be rejected")
        if not config.slack_configured:
            log_server_message("SLACK_WEBHOOK_URL is not set; matched events cannot be delivered")
        log_server_message("Server ready")

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        """Handle application shutdown."""
        await dedup_cache.stop()
        log_server_message("Server shutting down")

    def health() -> Dict[str, Any]:
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "slack_configured": config.slack_configured,
            "secret_configured": config.secret_configured,
            "dedup_entries": len(dedup_cache),
        }

    @app.get("/health")
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint."""
        return health()

    @app.get(config.webhook_endpoint)
    async def webhook_status() -> Dict[str, Any]:
        """Liveness and configuration check on the webhook URL itself."""
        return health()

    @app.post(config.webhook_endpoint)
    async def jira_webhook(request: Request) -> Dict[str, Any]:
        """Handle Jira webhook requests."""
        body = await request.body()
        return await handler.handle(body, request.headers)

    @app.exception_handler(WebhookError)
    async def webhook_error_handler(request: Request, exc: WebhookError) -> JSONResponse:
        """Answer handler failures with their status code and JSON body."""
        log_server_message(f"{exc.status_code} {type(exc).__name__}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle 404 errors."""
        log_server_message(f"404 Not Found: {request.url}")
        return JSONResponse(
            status_code=404,
            content={"error": "Not found", "path": str(request.url)}
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle errors raised outside the webhook handler, e.g. while encoding a response."""
        log_server_message(f"500 Internal Server Error: {type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"}
        )

    return app


if __name__ == "__main__":
    import uvicorn

    _config = NotifierConfig.from_env()
    uvicorn.run(
        "statuswatch.webhook.server:create_app",
        factory=True,
        host=_config.host,
        port=_config.port,
        reload=False,
        log_level="info"
    )
