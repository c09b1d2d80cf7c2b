"""
Main CLI command registration.

Sets up the main command group and registers all subcommands. Commands import the
compression modules lazily so `--help` stays fast.
"""
import typer

from rich.markup import escape

from ..utils import console, print_error

# Create the main command group
app = typer.Typer(help="compressapi command line interface")


@app.callback()
def main_callback():
    """Inspect payloads and run compressapi servers."""
    pass


from .inspect import inspect_file
app.command("inspect")(inspect_file)


@app.command("config")
def show_config():
    """Print the effective compression configuration."""
    from compressapi.core.config import settings
    from compressapi.exceptions import CompressAPIError

    try:
        summary = settings.compression_config().summary()
    except CompressAPIError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    for key, value in summary.items():
        console.print(f"[bold]{key}[/bold]: {escape(str(value))}")


from . import server as server_module
app.add_typer(server_module.app, name="server", help="Server management commands")

__all__ = ['app']
