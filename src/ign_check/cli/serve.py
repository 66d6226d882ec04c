from __future__ import annotations

import typer
import uvicorn

from ign_check.core.config import settings


def serve_cmd(
    host: str = typer.Option(settings.host, "--host"),
    port: int = typer.Option(settings.port, "--port"),
    reload: bool = typer.Option(False, "--reload/--no-reload"),
) -> None:
    """Serve the HTTP API with uvicorn."""

    uvicorn.run(
        "ign_check.api.app:main_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
