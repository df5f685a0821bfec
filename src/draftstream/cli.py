"""CLI interface for draftstream.

Requires the 'cli' extra: pip install draftstream[cli]
"""

from __future__ import annotations

import sys
from pathlib import Path

try:
    import typer
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table
    from rich.text import Text
except ImportError:
    print(
        "CLI dependencies not installed. Install with: pip install draftstream[cli]",
        file=sys.stderr,
    )
    sys.exit(1)

from draftstream import __version__
from draftstream.streaming.session import GenerationSession

app = typer.Typer(
    name="draftstream",
    help="Streaming segmentation toolkit for LLM-drafted social notes.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
) -> None:
    if version:
        console.print(f"draftstream {__version__}")
        raise typer.Exit()


@app.command()
def info() -> None:
    """Show information about the draftstream installation."""
    table = Table(title="draftstream info")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Version", __version__)
    table.add_row("Python", sys.version.split()[0])

    for dep_name in ["pydantic", "typer", "rich"]:
        try:
            mod = __import__(dep_name)
            ver = getattr(mod, "__version__", "installed")
            table.add_row(dep_name, str(ver))
        except ImportError:
            table.add_row(dep_name, "[red]not installed[/red]")

    console.print(table)


@app.command()
def segment(
    path: Path = typer.Argument(..., help="Recorded stream to replay"),  # noqa: B008
    sse: bool = typer.Option(False, "--sse", help="Input is raw SSE transport data"),
    chunk_size: int = typer.Option(
        64, "--chunk-size", "-c", min=1, help="Replay chunk size in bytes"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Replay a recorded generation stream through the segmenter."""
    if not path.is_file():
        console.print(f"[red]Error: file does not exist: {path}[/red]")
        raise typer.Exit(code=1)

    data = path.read_bytes()
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]
    result = GenerationSession(sse=sse).run(chunks)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    console.print(Panel(Text(result.thought_text or "(none)"), title="Thought", style="dim"))
    console.print(Panel(Text(result.dialogue_text or "(empty)"), title="Dialogue"))

    if result.data_payload_raw is None:
        console.print("[yellow]No data marker found in stream[/yellow]")
    elif not result.records:
        console.print("[yellow]Data block present but no notes could be extracted[/yellow]")

    table = Table(title=f"Notes ({len(result.records)})")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Title", style="green")
    table.add_column("Content")
    for i, note in enumerate(result.records, start=1):
        table.add_row(str(i), Text(note.title), Text(note.content))
    console.print(table)


if __name__ == "__main__":
    app()
