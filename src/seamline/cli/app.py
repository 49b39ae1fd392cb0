"""CLI application entry point for seamline.

This module provides the main CLI interface using Typer.
"""

import random
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from seamline import __version__
from seamline.cli.output import (
    console,
    print_document_info,
    print_error,
    print_header,
    print_hit,
    print_rebuild_stats,
    print_sewing_table,
    print_step,
    print_success,
)
from seamline.config import LoggingConfig, SeamlineSettings
from seamline.core import (
    BlockNormalizer,
    DragConstraintSolver,
    PolygonAssembler,
    SewingDirection,
    Viewport,
    arc_length,
    classify_direction,
    generate_layout,
    hit_test,
    hit_threshold,
    point_at_arc_length,
)
from seamline.domain import Block, Point
from seamline.exceptions import (
    DocumentLoadError,
    DocumentSaveError,
    EntityNotFoundError,
    GenerationError,
    SeamlineError,
)
from seamline.io import DocumentReader, DocumentWriter
from seamline.utils import GeometryLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="seamline",
    help="Inspect, normalize and edit ratio-anchored sewings on polyline pattern blocks.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Seamline[/bold blue] v{__version__}")
        raise typer.Exit()


def _parse_point(value: str) -> Point:
    """Parse an ``X,Y`` pair."""
    try:
        x_text, y_text = value.split(",")
        return Point(float(x_text), float(y_text))
    except ValueError:
        raise typer.BadParameter(f"expected X,Y but got '{value}'") from None


def _settings(ctx: typer.Context) -> SeamlineSettings:
    return ctx.obj["settings"] if ctx.obj else SeamlineSettings()


def _quiet(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj["quiet"])


def _load(
    document: Path, normalizer: BlockNormalizer
) -> tuple[int, list[Block]]:
    """Load and normalize a document.

    Raises:
        DocumentLoadError: If the file cannot be read
        DocumentFormatError: If the document does not match the schema
    """
    with DocumentReader(document) as reader:
        version = reader.version
        blocks = normalizer.normalize(reader.iter_raw_blocks())
    return version, blocks


def _handle_errors(error: Exception) -> NoReturn:
    """Report a domain error and exit with status 1."""
    if isinstance(error, DocumentLoadError):
        print_error(f"Could not load document: {error.reason}")
    elif isinstance(error, DocumentSaveError):
        print_error(f"Could not save document: {error.reason}")
    else:
        print_error(str(error))
    raise typer.Exit(code=1)


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Seamline keeps sewings glued to their parent segments by arc-length ratio."""
    settings = SeamlineSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = {"settings": settings, "quiet": quiet}


@app.command()
def inspect(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(help="Path to a block JSON document", show_default=False),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="List every sewing with its direction"),
    ] = False,
) -> None:
    """Summarize a document and report sewings that could not be rebuilt.

    Example:
        seamline inspect blocks.json --verbose
    """
    settings = _settings(ctx)
    quiet = _quiet(ctx)
    normalizer = BlockNormalizer(settings)

    try:
        if not quiet:
            print_header(__version__)
            print_step("Loading document")
        version, blocks = _load(document, normalizer)
    except SeamlineError as e:
        _handle_errors(e)

    if quiet:
        return

    print_document_info(str(document), version, blocks)
    print_step("Rebuilding sewings")
    print_rebuild_stats(normalizer.stats, verbose=verbose)

    if verbose:
        geometry = settings.geometry
        rows = []
        for block in blocks:
            for sewing in block.sewings():
                parent = block.get_segment(sewing.segment_id)
                direction = SewingDirection.UNKNOWN
                if parent is not None:
                    direction = classify_direction(
                        parent.vertexes,
                        sewing.vertexes,
                        tolerance=geometry.direction_tolerance,
                        closed_tolerance=geometry.closed_tolerance,
                    )
                rows.append(
                    (
                        block.id,
                        sewing.id,
                        sewing.segment_id,
                        sewing.start_ratio,
                        sewing.end_ratio,
                        direction.value,
                    )
                )
        print_step("Sewings")
        print_sewing_table(rows)


@app.command()
def normalize(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(help="Path to a block JSON document", show_default=False),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-normalized.json)",
        ),
    ] = None,
) -> None:
    """Convert legacy offsets to ratios and rebuild all sewing vertexes.

    Example:
        seamline normalize blocks.json
    """
    settings = _settings(ctx)
    quiet = _quiet(ctx)
    normalizer = BlockNormalizer(settings)
    output_path = output or DocumentWriter.get_normalized_path(document)

    try:
        if not quiet:
            print_header(__version__)
            print_step("Normalizing")
        version, blocks = _load(document, normalizer)
        DocumentWriter(output_path).write(blocks)
    except SeamlineError as e:
        _handle_errors(e)

    if not quiet:
        print_document_info(str(document), version, blocks)
        print_rebuild_stats(normalizer.stats)
        print_success("Normalized", str(output_path))


@app.command()
def hit(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(help="Path to a block JSON document", show_default=False),
    ],
    x: Annotated[float, typer.Argument(help="Pointer X")],
    y: Annotated[float, typer.Argument(help="Pointer Y")],
    zoom: Annotated[
        float,
        typer.Option("--zoom", "-z", help="Zoom level used for the hit threshold", min=0.01),
    ] = 1.0,
    screen: Annotated[
        bool,
        typer.Option("--screen", help="Treat X,Y as screen coordinates"),
    ] = False,
    pan_x: Annotated[float, typer.Option("--pan-x", help="Horizontal pan (with --screen)")] = 0.0,
    pan_y: Annotated[float, typer.Option("--pan-y", help="Vertical pan (with --screen)")] = 0.0,
) -> None:
    """Report what lies under a pointer position.

    Example:
        seamline hit blocks.json 120 80 --zoom 2
    """
    settings = _settings(ctx)
    normalizer = BlockNormalizer(settings)

    try:
        _, blocks = _load(document, normalizer)
    except SeamlineError as e:
        _handle_errors(e)

    point = Point(x, y)
    if screen:
        point = Viewport(zoom=zoom, pan_x=pan_x, pan_y=pan_y).screen_to_world(point)

    assembler = PolygonAssembler(snap_tolerance=settings.geometry.polygon_snap_tolerance)
    result = hit_test(
        point,
        blocks,
        zoom,
        config=settings.hit_test,
        geometry=settings.geometry,
        assembler=assembler,
    )
    threshold = hit_threshold(
        zoom,
        base=settings.hit_test.base_threshold,
        minimum=settings.hit_test.min_threshold,
        maximum=settings.hit_test.max_threshold,
    )
    print_hit(result, point.x, point.y, threshold)


@app.command()
def drag(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(help="Path to a block JSON document", show_default=False),
    ],
    sewing_id: Annotated[
        int,
        typer.Option("--sewing", "-s", help="Id of the sewing to drag", show_default=False),
    ],
    to: Annotated[
        list[str],
        typer.Option("--to", "-t", help="Pointer position X,Y (repeat for a path)"),
    ],
    grab: Annotated[
        str | None,
        typer.Option("--grab", help="Grab position X,Y (default: middle of the sewing)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-normalized.json)",
        ),
    ] = None,
) -> None:
    """Drag a sewing along a pointer path and save the result.

    Example:
        seamline drag blocks.json --sewing 7 --to 40,0 --to 55,3
    """
    settings = _settings(ctx)
    quiet = _quiet(ctx)
    normalizer = BlockNormalizer(settings)
    output_path = output or DocumentWriter.get_normalized_path(document)
    path = [_parse_point(value) for value in to]

    try:
        _, blocks = _load(document, normalizer)

        owner = next((b for b in blocks if b.get_sewing(sewing_id) is not None), None)
        if owner is None:
            raise EntityNotFoundError(sewing_id, "sewing")
        sewing = owner.get_sewing(sewing_id)

        if grab is not None:
            grab_point = _parse_point(grab)
        elif sewing.is_renderable():
            grab_point = point_at_arc_length(sewing.vertexes, arc_length(sewing.vertexes) / 2)
        else:
            grab_point = path[0]

        solver = DragConstraintSolver(settings, GeometryLogger())
        session = solver.begin_drag(grab_point, sewing, owner)
        for point in path:
            blocks = solver.update_drag(point, session, blocks)
        frames = session.frames
        solver.end_drag(session)

        DocumentWriter(output_path).write(blocks)
    except SeamlineError as e:
        _handle_errors(e)

    if not quiet:
        moved = next(b for b in blocks if b.id == owner.id).get_sewing(sewing_id)
        console.print(
            f"  sewing {sewing_id} on segment {moved.segment_id} "
            f"[{moved.start_ratio:.4f}, {moved.end_ratio:.4f}] "
            f"after {frames}/{len(path)} frames"
        )
        print_success("Dragged", str(output_path))


@app.command()
def generate(
    ctx: typer.Context,
    template: Annotated[
        Path,
        typer.Argument(help="Document whose blocks are used as templates", show_default=False),
    ],
    count: Annotated[
        int,
        typer.Option("--count", "-n", help="Number of blocks to generate", show_default=False),
    ],
    gap: Annotated[
        float | None,
        typer.Option(
            "--gap", "-g", help="Spacing between blocks (default: from settings)", min=0.0
        ),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Random seed for template choice (default: from settings)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-generated.json)",
        ),
    ] = None,
) -> None:
    """Clone template blocks into a grid layout.

    Example:
        seamline generate blocks.json --count 500 --seed 1
    """
    settings = _settings(ctx)
    quiet = _quiet(ctx)
    normalizer = BlockNormalizer(settings)
    output_path = output or template.parent / f"{template.stem}-generated{template.suffix}"

    try:
        _, templates = _load(template, normalizer)
        blocks = generate_layout(
            templates,
            count,
            gap=gap if gap is not None else settings.generation.gap,
            blocks_per_row=settings.generation.blocks_per_row,
            rng=random.Random(seed if seed is not None else settings.generation.seed),
        )
        if not blocks:
            if count <= 0:
                reason = "count must be positive"
            elif not templates:
                reason = "template has no blocks"
            else:
                reason = "blocks per row must be positive"
            raise GenerationError(reason)
        DocumentWriter(output_path).write(blocks)
    except SeamlineError as e:
        _handle_errors(e)

    if not quiet:
        print_success(f"Generated {len(blocks)} blocks", str(output_path))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
