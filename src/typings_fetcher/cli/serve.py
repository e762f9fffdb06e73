import logging
from typing import Annotated

import typer
from rich.console import Console

console = Console()


def serve(
    host: Annotated[str, typer.Option(help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port to listen on.")] = 8000,
    log_level: Annotated[str, typer.Option(help="Log level for the server and pipeline.")] = "info",
) -> None:
    """Start the typings API server."""
    import uvicorn

    from typings_fetcher.api.app import create_app

    logging.basicConfig(level=log_level.upper(), format="%(levelname)s:     %(name)s - %(message)s")
    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port, log_level=log_level)
