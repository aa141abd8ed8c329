"""CLI for the Jira status webhook."""

import sys
from pathlib import Path

import click
from rich.console import Console

from ..common import compute_hmac_sha256
from .config import NotifierConfig

console = Console()


def _mask(value: str) -> str:
    return '*' * len(value) if value else 'Not set'


@click.group()
def cli():
    """Jira status transition notifier CLI."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (overrides STATUSWATCH_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind to (overrides STATUSWATCH_PORT)")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host, port, reload):
    """Start the webhook server."""
    try:
        config = NotifierConfig.from_env()
        host = host or config.host
        port = port or config.port

        console.print("🚀 Starting statuswatch webhook server...")
        console.print(f"📡 Host: {host}")
        console.print(f"🔌 Port: {port}")
        console.print(f"🪝 Endpoint: {config.webhook_endpoint}")
        console.print(f"🔄 Reload: {reload}")

        import uvicorn
        uvicorn.run(
            "statuswatch.webhook.server:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level="info"
        )

    except KeyboardInterrupt:
        console.print("⏹️  Server stopped by user")
    except Exception as e:
        console.print(f"❌ Server failed: {e}", style="red")
        sys.exit(1)


@cli.command()
def config():
    """Show current configuration."""
    try:
        config = NotifierConfig.from_env()
    except Exception as e:
        console.print(f"❌ Failed to load configuration: {e}", style="red")
        sys.exit(1)

    console.print("📋 Statuswatch Configuration:")
    console.print(f"  Webhook Secret: {_mask(config.webhook_secret)}")
    console.print(f"  Slack Webhook URL: {'Set' if config.slack_configured else 'Not set'}")
    console.print(f"  Project: {config.project_key or 'any'}")
    console.print(f"  Transition: {config.match_rule.expected_transition}")
    console.print(f"  Jira Base URL: {config.jira_base_url or 'Not set'}")
    console.print(f"  Webhook Endpoint: {config.webhook_endpoint}")
    console.print(f"  Host: {config.host}")
    console.print(f"  Port: {config.port}")
    console.print(f"  Log Directory: {config.log_dir}")
    console.print(f"  Slack Timeout: {config.slack_timeout}s")
    console.print(f"  Dedup Retention: {config.dedup_retention_seconds}s")
    console.print(f"  Dedup Sweep Interval: {config.dedup_sweep_interval_seconds}s")
    console.print(f"  Release Dedup On Failure: {config.release_dedup_on_failure}")


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--secret", envvar="JIRA_WEBHOOK_SECRET", help="Signing secret (defaults to JIRA_WEBHOOK_SECRET)")
def sign(payload_file, secret):
    """Print the X-Hub-Signature header value for a payload file."""
    if not secret:
        console.print("❌ No secret given and JIRA_WEBHOOK_SECRET is not set", style="red")
        sys.exit(1)

    data = payload_file.read_bytes()
    click.echo(f"sha256={compute_hmac_sha256(data, secret)}")


if __name__ == "__main__":
    cli()
