"""
Inspect how a payload would be compressed.
"""
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..utils import console, format_size, print_error, print_info, print_warning


def inspect_file(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Payload to inspect"),
    accept_encoding: str = typer.Option(
        "br, gzip, deflate", "--accept-encoding", "-a", help="Accept-Encoding header to negotiate against"
    ),
    content_type: Optional[str] = typer.Option(None, "--content-type", "-t", help="Response Content-Type"),
) -> None:
    """Show negotiation, gate decision and compressed sizes for a file."""
    from compressapi.compression import CompressibilityGate, compress, negotiate_encoding
    from compressapi.core.config import settings
    from compressapi.exceptions import CompressAPIError

    try:
        config = settings.compression_config()
    except CompressAPIError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    body = path.read_bytes()
    encoding = negotiate_encoding(accept_encoding, config.encodings)
    reason = CompressibilityGate(config).check_body(body, content_type)

    table = Table(title=f"{path.name} ({format_size(len(body))})")
    table.add_column("Encoding")
    table.add_column("Size", justify="right")
    table.add_column("Ratio", justify="right")
    table.add_column("Selected", justify="center")

    for candidate in config.encodings:
        compressed = compress(candidate, body, config.options_for(candidate))
        ratio = f"{len(compressed) / len(body):.1%}" if body else "-"
        table.add_row(candidate, format_size(len(compressed)), ratio, "*" if candidate == encoding else "")

    console.print(table)

    if encoding is None:
        print_warning(f"No configured encoding matches {accept_encoding!r}")
    elif reason:
        print_warning(f"Would not compress: {reason}")
    else:
        print_info(f"Would respond with Content-Encoding: {encoding}")
