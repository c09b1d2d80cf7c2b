"""
Server management commands.
"""
from typing import Optional

import typer

from ..utils import print_info, print_success

# Create the command group
app = typer.Typer(help="Server management commands")


@app.command("run")
def run_server(
    target: str = typer.Option("examples.basic_app.main:app", "--app", help="ASGI app import path"),
    host: Optional[str] = typer.Option(None, help="Bind address, defaults to COMPRESSAPI_HOST"),
    port: Optional[int] = typer.Option(None, help="Bind port, defaults to COMPRESSAPI_PORT"),
    reload: bool = False,
) -> None:
    """Run a development server."""
    # Import uvicorn only when needed
    import uvicorn
    from compressapi.core.config import settings

    host = host or settings.HOST
    port = port or settings.PORT
    print_success(f"Starting server at http://{host}:{port}")
    uvicorn.run(target, host=host, port=port, reload=reload, log_level=settings.LOG_LEVEL.lower())


@app.command("status")
def server_status() -> None:
    """Show the compression settings a server would start with."""
    from compressapi.core.config import settings

    print_info("Server settings:")
    print_info(f"  Bind: {settings.HOST}:{settings.PORT}")
    print_info(f"  Debug mode: {settings.DEBUG}")
    print_info(f"  Encodings: {', '.join(settings.encodings)}")
