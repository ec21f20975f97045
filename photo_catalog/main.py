"""Main entry point for photo-catalog.

- With ``--server``: runs the FastAPI server
- Otherwise: runs the management CLI
"""

from __future__ import annotations

import sys
from typing import NoReturn


def run_fastapi_server() -> NoReturn:
    """Run the FastAPI application server with uvicorn."""
    import uvicorn

    from photo_catalog.core.settings import get_app_settings, get_logging_settings

    settings = get_app_settings()
    log_settings = get_logging_settings()

    uvicorn.run(
        "photo_catalog.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=settings.debug,
        log_level=log_settings.level.lower(),
    )
    sys.exit(0)


def run_cli() -> NoReturn:
    """Run the CLI interface."""
    from photo_catalog.cli.main import main as cli_main

    cli_main()
    sys.exit(0)


def main() -> NoReturn:
    """Route to the server or the CLI based on arguments."""
    if "--server" in sys.argv:
        sys.argv.remove("--server")
        run_fastapi_server()
    else:
        run_cli()


if __name__ == "__main__":
    main()
