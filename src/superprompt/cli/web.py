"""Web server CLI command."""

import typer
import uvicorn

from ..config import get_settings
from ..logging_config import configure_logging
from . import app


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host to bind to."),
    port: int = typer.Option(8000, help="Port to bind to."),
    reload: bool = typer.Option(False, help="Enable auto-reload."),
):
    """Start the JSON API server."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    uvicorn.run(
        "superprompt.web_app:app",
        host=host,
        port=port,
        reload=reload,
    )
