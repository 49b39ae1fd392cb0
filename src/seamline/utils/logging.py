"""Logging utilities for Seamline."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_FILE_HANDLER_NAME = "seamline.file"
_CONSOLE_HANDLER_NAME = "seamline.console"


@dataclass
class RebuildStats:
    """Statistics from a sewing rebuild pass."""

    rebuilt_count: int = 0
    missing_parent_count: int = 0
    degenerate_parent_count: int = 0
    empty_span_count: int = 0
    skipped: list[tuple[int, str]] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        """Sewings left with their previous vertexes."""
        return self.missing_parent_count + self.degenerate_parent_count + self.empty_span_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces the handlers installed by a previous call.
    for handler in list(root_logger.handlers):
        if handler.get_name() in (_FILE_HANDLER_NAME, _CONSOLE_HANDLER_NAME):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name(_CONSOLE_HANDLER_NAME)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("seamline")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class GeometryLogger:
    """Logger for sewing rebuilds and drag sessions, with rebuild statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger("seamline")
        self._stats = RebuildStats()

    def log_sewing_rebuilt(self, block_id: int, sewing_id: int, vertex_count: int) -> None:
        """Log a sewing whose vertexes were regenerated."""
        self._logger.debug(
            "Sewing rebuilt",
            block=block_id,
            sewing=sewing_id,
            vertexes=vertex_count,
        )
        self._stats.rebuilt_count += 1

    def log_sewing_skipped(self, block_id: int, sewing_id: int, reason: str) -> None:
        """Log a sewing left with its previous vertexes.

        Args:
            block_id: Owning block
            sewing_id: Skipped sewing
            reason: One of "missing_parent", "degenerate_parent", "empty_span"
        """
        self._logger.warning(
            "Sewing skipped",
            block=block_id,
            sewing=sewing_id,
            reason=reason,
        )
        if reason == "missing_parent":
            self._stats.missing_parent_count += 1
        elif reason == "degenerate_parent":
            self._stats.degenerate_parent_count += 1
        else:
            self._stats.empty_span_count += 1
        self._stats.skipped.append((sewing_id, reason))

    def log_drag_begin(self, sewing_id: int, anchor_ratio: float, span_ratio: float) -> None:
        self._logger.debug(
            "Drag started",
            sewing=sewing_id,
            anchor_ratio=round(anchor_ratio, 4),
            span_ratio=round(span_ratio, 4),
        )

    def log_drag_update(
        self,
        sewing_id: int,
        segment_id: int,
        start_ratio: float,
        end_ratio: float,
    ) -> None:
        self._logger.debug(
            "Drag updated",
            sewing=sewing_id,
            segment=segment_id,
            start_ratio=round(start_ratio, 4),
            end_ratio=round(end_ratio, 4),
        )

    def log_drag_rejected(self, sewing_id: int, reason: str) -> None:
        self._logger.debug("Drag frame rejected", sewing=sewing_id, reason=reason)

    def log_drag_end(self, sewing_id: int | None, frames: int) -> None:
        self._logger.debug("Drag ended", sewing=sewing_id, frames=frames)

    @property
    def stats(self) -> RebuildStats:
        """Get current rebuild statistics."""
        return self._stats
