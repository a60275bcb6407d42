"""
Entry point: CLI options → Config → SentinelApp.

Every option falls back to its APP_* environment variable and then to the
built-in default. Startup failures (bad config, no pointer source) exit
with status 1; there is no restart loop.
"""

from typing import Optional

import typer

from .app import SentinelApp
from .config import (
    ConfigError, load_config, load_runtime_env, log, safe_print, setup_logging,
)
from .constants import AGENT_VERSION, APP_NAME
from .listeners import InputSourceError

app = typer.Typer(add_completion=False, help=f"{APP_NAME}: pointer telemetry agent.")


@app.command()
def main(
    api_key_name: Optional[str] = typer.Option(None, help="Credential header name sent with every submission."),
    api_key_value: Optional[str] = typer.Option(None, help="Credential header value sent with every submission."),
    buffer_size_limit: Optional[int] = typer.Option(None, help="Submit once the buffer holds more than this many events."),
    idle_timeout: Optional[int] = typer.Option(None, help="Submit after this many ms without a new event."),
    lock_enabled: Optional[bool] = typer.Option(None, "--lock-enabled/--no-lock-enabled", help="Lock the session on a low verify score."),
    lock_threshold: Optional[float] = typer.Option(None, help="Verify score below which the session is locked."),
    lock_utility: Optional[str] = typer.Option(None, help="Program used to lock the session."),
    metadata_query_interval: Optional[int] = typer.Option(None, help="Metadata refresh interval in ms."),
    status_base_url: Optional[str] = typer.Option(None, help="Base URL of the status endpoint."),
    status_interval: Optional[int] = typer.Option(None, help="Status poll interval in seconds."),
    submit_url: Optional[str] = typer.Option(None, help="URL of the chunk submission endpoint."),
    user_id: Optional[str] = typer.Option(None, help="Unique identifier of the user."),
) -> None:
    """Primary agent entry point."""
    overrides = {
        "api_key_name": api_key_name,
        "api_key_value": api_key_value,
        "buffer_size_limit": buffer_size_limit,
        "idle_timeout": idle_timeout,
        "lock_enabled": lock_enabled,
        "lock_threshold": lock_threshold,
        "lock_utility": lock_utility,
        "metadata_query_interval": metadata_query_interval,
        "status_base_url": status_base_url,
        "status_interval": status_interval,
        "submit_url": submit_url,
        "user_id": user_id,
    }

    setup_logging()
    load_runtime_env()
    safe_print(f"{APP_NAME} v{AGENT_VERSION}")
    safe_print()

    try:
        config = load_config(overrides=overrides)
    except ConfigError as e:
        log.error("Invalid configuration: %s", e)
        raise typer.Exit(code=1)

    log.info("Submitting to %s as %s", config.submit_url, config.user_id)

    sentinel = SentinelApp(config)
    try:
        sentinel.run()
    except InputSourceError as e:
        log.error("Fatal: %s", e)
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        safe_print("\nAgent stopped by user.")


def cli():
    app()
