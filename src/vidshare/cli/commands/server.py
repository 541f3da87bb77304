"""`serve` command running the HTTP API under uvicorn."""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn
from rich.console import Console

from vidshare.config.settings import get_settings


def register(app: typer.Typer, console: Console) -> None:
    """Register the API server command."""

    @app.command("serve")
    def serve(
        host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (defaults to HOST)"),
        port: Optional[int] = typer.Option(None, "--port", help="Port to listen on (defaults to PORT)"),
        reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
    ) -> None:
        """Run the vidshare API."""

        settings = get_settings()
        bind_host = host or settings.host
        bind_port = port or settings.port
        console.print(f"[bold green]Starting vidshare API[/bold green] on http://{bind_host}:{bind_port}")
        uvicorn.run(
            "vidshare.api.app:create_app",
            factory=True,
            host=bind_host,
            port=bind_port,
            reload=reload,
            log_level=settings.log_level.lower(),
        )


__all__ = ["register"]
