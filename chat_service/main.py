"""Main entry point for chat-service.

Routes to the API server when ``--server`` is passed, otherwise to the CLI.
"""

from __future__ import annotations

import sys


def run_fastapi_server() -> None:
    """Run the FastAPI application server with settings from configuration."""
    import uvicorn

    from chat_service.core.settings import get_app_settings, get_logging_settings

    settings = get_app_settings()
    log_settings = get_logging_settings()

    uvicorn.run(
        "chat_service.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=settings.debug,
        log_level=log_settings.level.lower(),
    )


def run_cli() -> None:
    """Run the CLI interface."""
    from chat_service.cli.main import main as cli_main

    cli_main()


def main() -> None:
    """Entry point: ``--server`` runs the API server, anything else the CLI."""
    if "--server" in sys.argv:
        sys.argv.remove("--server")
        run_fastapi_server()
    else:
        run_cli()


if __name__ == "__main__":
    main()
