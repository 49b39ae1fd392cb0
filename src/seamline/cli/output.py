"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from seamline.core.hit_test import HitKind, HitResult
from seamline.domain import Block
from seamline.utils.logging import RebuildStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Seamline[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_document_info(path: str, version: int, blocks: list[Block]) -> None:
    """Print document summary.

    Args:
        path: Path to the document
        version: Document format version
        blocks: Normalized blocks
    """
    segments = sum(len(b.segments()) for b in blocks)
    sewings = sum(len(b.sewings()) for b in blocks)
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    line.append(f" (v{version})")
    console.print(line)
    console.print(
        f"  {len(blocks):,} blocks {SYM_DOT} {segments:,} segments {SYM_DOT} {sewings:,} sewings"
    )


def print_rebuild_stats(stats: RebuildStats, verbose: bool = False) -> None:
    """Print sewing rebuild counts.

    Args:
        stats: Rebuild statistics
        verbose: Whether to list the skipped sewings
    """
    skipped_style = "yellow" if stats.skipped_count else "green"
    console.print(
        f"  {stats.rebuilt_count} rebuilt {SYM_DOT} "
        f"[{skipped_style}]{stats.skipped_count} skipped[/{skipped_style}]"
    )
    if stats.skipped_count:
        console.print(
            f"  {stats.missing_parent_count} missing parent {SYM_DOT} "
            f"{stats.degenerate_parent_count} degenerate parent {SYM_DOT} "
            f"{stats.empty_span_count} empty span"
        )
    if verbose and stats.skipped:
        for sewing_id, reason in stats.skipped[:20]:
            console.print(f"  sewing {sewing_id}: {reason.replace('_', ' ')}")
        if len(stats.skipped) > 20:
            console.print(f"  ... +{len(stats.skipped) - 20} more")


def print_sewing_table(rows: list[tuple[int, int, int, float, float, str]]) -> None:
    """Print one row per sewing.

    Args:
        rows: (block id, sewing id, parent id, start ratio, end ratio, direction)
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Block", justify="right")
    table.add_column("Sewing", justify="right")
    table.add_column("Parent", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Direction")
    for block_id, sewing_id, parent_id, start, end, direction in rows:
        table.add_row(
            str(block_id),
            str(sewing_id),
            str(parent_id),
            f"{start:.4f}",
            f"{end:.4f}",
            direction,
        )
    console.print(table)


def print_hit(result: HitResult, x: float, y: float, threshold: float) -> None:
    """Print a hit test result."""
    console.print(f"  world ({x:g}, {y:g}) {SYM_DOT} threshold {threshold:g}")
    if result.kind is HitKind.NONE:
        console.print("  [dim]nothing hit[/dim]")
        return
    console.print(f"  [green]{result.kind.value}[/green] {result.id} (block {result.block_id})")


def print_success(message: str, output_path: str | None = None) -> None:
    """Print success message.

    Args:
        message: Summary message
        output_path: Path to the written file, if any
    """
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green]")
    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
