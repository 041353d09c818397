"""sigmeta CLI — inspect SigMF recordings.

Commands:
    sigmeta info <file>          Show metadata and capture byte ranges
    sigmeta datatype <token>     Show how a datatype token is parsed
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()


@click.group()
@click.version_option(version="0.1.0", prog_name="sigmeta")
def cli() -> None:
    """sigmeta — SigMF metadata core.

    Parse, validate and inspect SigMF metadata documents.
    """
    pass


@cli.command()
@click.argument("file", type=click.Path(path_type=Path))
def info(file: Path) -> None:
    """Show recording metadata."""
    from sigmeta.errors import SigMFError
    from sigmeta.storage.reader import SigMF

    try:
        recording = SigMF.from_file(file)
    except (SigMFError, FileNotFoundError) as e:
        console.print(f"[red]Error reading {file}: {escape(str(e))}[/red]")
        raise SystemExit(1)

    meta = recording.metadata
    console.print()
    console.print(Panel.fit(
        f"[bold]{meta.global_.datatype}[/bold]",
        subtitle=f"{file}",
    ))

    # Global fields
    global_table = Table(show_header=False, box=None, padding=(0, 2))
    global_table.add_column("Key", style="dim")
    global_table.add_column("Value")

    for name, value in meta.global_.model_dump(by_alias=True, exclude_none=True).items():
        global_table.add_row(name, escape(str(value)))
    console.print(global_table)

    # Captures
    if meta.captures:
        console.print()
        captures_table = Table(title="Captures")
        captures_table.add_column("#", justify="right")
        captures_table.add_column("Sample Start", justify="right")
        captures_table.add_column("Frequency", justify="right")
        captures_table.add_column("Header", justify="right")
        captures_table.add_column("Bytes", justify="right")

        for i, capture in enumerate(meta.captures):
            byte_range = capture.byte_range
            captures_table.add_row(
                str(i),
                str(capture.sample_start),
                f"{capture.frequency:.0f}" if capture.frequency is not None else "",
                str(capture.header_bytes or 0),
                f"{byte_range.start}-{byte_range.end}" if byte_range is not None else "-",
            )
        console.print(captures_table)

    # Annotations
    if meta.annotations:
        console.print()
        annotations_table = Table(title="Annotations")
        annotations_table.add_column("Sample Start", justify="right")
        annotations_table.add_column("Count", justify="right")
        annotations_table.add_column("Label")

        for annotation in meta.annotations[:10]:
            count = annotation.sample_count
            annotations_table.add_row(
                str(annotation.sample_start),
                str(count) if count is not None else "",
                annotation.label or "",
            )

        if len(meta.annotations) > 10:
            annotations_table.add_row("...", f"({len(meta.annotations) - 10} more)", "")

        console.print(annotations_table)

    console.print()


@cli.command()
@click.argument("token")
def datatype(token: str) -> None:
    """Parse a datatype token such as cf32_le."""
    from sigmeta.datatype import parse_datatype
    from sigmeta.errors import ParseError

    try:
        fmt = parse_datatype(token)
    except ParseError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    element = fmt.element_type
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="dim")
    table.add_column("Value")
    table.add_row("Number type", fmt.number_type.name.lower())
    table.add_row("Element", element.kind.name.lower())
    table.add_row("Endianness", element.endianness.name.lower() if element.endianness else "-")
    table.add_row("Bytes per sample", str(fmt.byte_size))
    table.add_row("numpy dtype", str(fmt.numpy_dtype))
    console.print(table)


if __name__ == "__main__":
    cli()
