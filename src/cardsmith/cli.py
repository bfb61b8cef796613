"""Command-line interface for Cardsmith."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from cardsmith import __version__
from cardsmith.card.deck import Deck
from cardsmith.card.renderer import CardRenderer, RenderError
from cardsmith.config import get_settings
from cardsmith.export import SUPPORTED_EXTENSIONS, get_exporter
from cardsmith.formatting.renderer import FormattedTextRenderer
from cardsmith.logging_config import setup_logging
from cardsmith.project.model import ProjectLayout, ProjectLayoutElement
from cardsmith.project.session import ProjectSession
from cardsmith.render.fonts import FontCache
from cardsmith.render.surface import Surface

app = typer.Typer(
    name="cardsmith",
    help="Design card layouts and render formatted card text.",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Cardsmith v{__version__}")
        raise typer.Exit()


def layout_output_path(output: Path, layout: ProjectLayout, layout_count: int) -> Path:
    """Output path for one layout; several layouts get the layout name appended."""
    if layout_count <= 1:
        return output
    return output.with_name(f"{output.stem}_{layout.name}{output.suffix}")


def open_project(path: Path) -> ProjectSession:
    """Open a project or exit with an error."""
    session = ProjectSession()
    if session.open_project(path) is None:
        console.print(f"[red]Error:[/red] Could not load project: {path}")
        raise typer.Exit(1)
    return session


def render_layout(
    renderer: CardRenderer,
    layout: ProjectLayout,
    project_dir: Optional[Path],
    output: Path,
) -> list[Path]:
    """Render every card of a layout and export them."""
    deck = Deck(layout, project_dir)
    exporter = get_exporter(output.suffix)()
    cards = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Rendering {layout.name}...", total=len(deck))
        for row in deck:
            cards.append(renderer.render_card(layout, row))
            progress.advance(task)

    return exporter.write(cards, output, layout.dpi)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Design card layouts and render formatted card text.
    """
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def render(
    project: Path = typer.Argument(
        ...,
        help="Project file",
        exists=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help=f"Output file ({', '.join(SUPPORTED_EXTENSIONS)})",
    ),
    layout_name: Optional[str] = typer.Option(
        None,
        "--layout",
        "-l",
        help="Render only this layout (default: all layouts)",
    ),
) -> None:
    """
    Render the cards of a project.

    Examples:

        cardsmith render deck.xml -o out/cards.png

        cardsmith render deck.xml -o sheet.pdf --layout Monsters
    """
    if output.suffix.lower() not in SUPPORTED_EXTENSIONS:
        console.print(
            f"[red]Error:[/red] Unsupported output format: {output.suffix}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
        raise typer.Exit(1)

    session = open_project(project)
    loaded = session.loaded_project
    if layout_name is not None:
        layout = loaded.get_layout(layout_name)
        if layout is None:
            console.print(f"[red]Error:[/red] No layout named {layout_name!r}")
            raise typer.Exit(1)
        layouts = [layout]
    else:
        layouts = loaded.layouts

    renderer = CardRenderer(session.project_path, get_settings())
    failures = 0
    for layout in layouts:
        target = layout_output_path(output, layout, len(layouts))
        try:
            written = render_layout(renderer, layout, session.project_path, target)
        except (OSError, RenderError) as e:
            console.print(f"[red]Error rendering {layout.name}:[/red] {e}")
            logger.debug("Render failure", exc_info=True)
            failures += 1
            continue
        console.print(
            f"[green]Success:[/green] {layout.name} -> {len(written)} file(s)"
        )

    raise typer.Exit(0 if failures == 0 else 1)


@app.command()
def text(
    markup: str = typer.Argument(..., help="Formatted text to render"),
    output: Path = typer.Option(..., "--output", "-o", help="Output PNG file"),
    width: int = typer.Option(300, "--width", "-w", min=1, help="Element width"),
    height: int = typer.Option(200, "--height", "-H", min=1, help="Element height"),
    font: str = typer.Option("", "--font", "-f", help="Font string: family;size;bold;underline;italic;strikeout"),
    color: str = typer.Option("", "--color", "-c", help="Default text colour"),
    align: str = typer.Option("left", "--align", "-a", help="left, center or right"),
) -> None:
    """
    Render a single formatted text snippet to a PNG.

    Example:

        cardsmith text "<bgcolor:Yellow;2><b>Hello</b><close> world" -o hello.png
    """
    settings = get_settings()
    element = ProjectLayoutElement(
        name="text",
        width=width,
        height=height,
        font=font,
        color=color,
        align=align,
    )
    surface = Surface.blank(width, height, font_cache=FontCache(settings.font_dirs))
    try:
        result = FormattedTextRenderer(settings).render(element, markup, surface)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not result.ok:
        console.print(f"[yellow]Warning:[/yellow] Rendered as plain text: {result.error}")
    output.parent.mkdir(parents=True, exist_ok=True)
    surface.image.save(output, dpi=(settings.export_dpi, settings.export_dpi))
    console.print(f"[green]Success:[/green] {output}")


@app.command()
def info(
    project: Path = typer.Argument(..., help="Project file", exists=True, dir_okay=False),
) -> None:
    """Show the layouts of a project."""
    session = open_project(project)

    table = Table(title=str(project))
    table.add_column("Layout")
    table.add_column("Size")
    table.add_column("DPI", justify="right")
    table.add_column("Elements", justify="right")
    table.add_column("References")
    for layout in session.loaded_project.layouts:
        table.add_row(
            layout.name,
            f"{layout.width}x{layout.height}",
            str(layout.dpi),
            str(len(layout.elements)),
            ", ".join(r.relative_path for r in layout.references) or "-",
        )
    console.print(table)


@app.command("save-as")
def save_as(
    project: Path = typer.Argument(..., help="Project file", exists=True, dir_okay=False),
    target: Path = typer.Argument(..., help="New project file"),
) -> None:
    """Save a project to a new location, keeping references resolvable."""
    session = open_project(project)
    target.parent.mkdir(parents=True, exist_ok=True)
    if not session.save(target, project):
        console.print(f"[red]Error:[/red] Could not save project to {target}")
        raise typer.Exit(1)
    console.print(f"[green]Success:[/green] {target}")


if __name__ == "__main__":
    app()
