"""Command-line interface for critpath."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, TypeVar

import typer

from . import context
from .config import discover_config
from .exceptions import CritPathError
from .formatting import format_report
from .logger import setup_logger
from .models import sample_graph
from .parser import GraphParser, dump_graph
from .service import GraphAnalysisService
from .svg import SvgRenderer

T = TypeVar("T")

app = typer.Typer(
    name="critpath",
    help="Critical Path Method scheduling and layered drawing of activity graphs",
    add_completion=False,
)

GraphFile = Annotated[Path, typer.Argument(help="Path to the graph YAML file")]
OutputFile = Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show results, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: critpath_config.yaml)",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on invalid nodes or edges instead of skipping them"),
    ] = False,
) -> None:
    """Global options for critpath commands."""
    setup_logger(verbose)
    context.set_config_path(config)
    context.set_strict(strict)


@app.command()
def schedule(
    file: GraphFile = Path("graph.yaml"),
    *,
    as_json: Annotated[bool, typer.Option("--json", help="Emit the result as JSON")] = False,
    output: OutputFile = None,
) -> None:
    """Compute the CPM schedule: activity and event tables plus critical paths."""
    service = _load_service(file)
    result = _run(service.schedule)

    if as_json:
        text = json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"
    else:
        text = format_report(result) + "\n"
    _emit(text, output)


@app.command()
def layout(file: GraphFile = Path("graph.yaml"), *, output: OutputFile = None) -> None:
    """Compute the layered layout as JSON."""
    service = _load_service(file)
    result = _run(service.layout)
    _emit(json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n", output)


@app.command()
def render(file: GraphFile = Path("graph.yaml"), *, output: OutputFile = None) -> None:
    """Draw the scheduled graph as SVG."""
    service = _load_service(file)
    result = _run(service.layout)
    renderer = SvgRenderer(
        result, label_line_height=service.layout_config.edge_label_line_height
    )
    _emit(renderer.render(), output)


@app.command()
def sample(output: OutputFile = None) -> None:
    """Write the demonstration project as a graph YAML file."""
    _emit(dump_graph(sample_graph()), output)


def _load_service(file: Path) -> GraphAnalysisService:
    try:
        graph = GraphParser(strict=context.is_strict()).parse_file(file)
        config = discover_config(file)
    except (CritPathError, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    return GraphAnalysisService(graph, config.cpm, config.layout)


def _run(compute: Callable[[], T]) -> T:
    try:
        return compute()
    except CritPathError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


def _emit(text: str, output: Path | None) -> None:
    if output:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"Wrote {output}", err=True)
    else:
        typer.echo(text, nl=False)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
