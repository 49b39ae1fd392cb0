"""Document writer for saving blocks.

This module provides the DocumentWriter class. Documents are always written
in the current format: ratios only, no legacy offsets.
"""

from collections.abc import Sequence
from pathlib import Path

from seamline.domain import Block
from seamline.exceptions import DocumentSaveError
from seamline.io.converter import domain_block_to_raw
from seamline.io.schema import DOCUMENT_VERSION_CURRENT, RawDocument


def blocks_to_document(blocks: Sequence[Block]) -> RawDocument:
    """Build a current-version document from domain blocks."""
    return RawDocument(
        version=DOCUMENT_VERSION_CURRENT,
        blocks=[domain_block_to_raw(block) for block in blocks],
    )


class DocumentWriter:
    """Writes blocks to a JSON document.

    Example:
        writer = DocumentWriter(Path("blocks-normalized.json"))
        writer.write(blocks)
    """

    def __init__(self, output_path: Path, indent: int | None = 2) -> None:
        """Initialize the writer.

        Args:
            output_path: Destination file
            indent: JSON indentation (None for compact output)
        """
        self._output_path = output_path
        self._indent = indent

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write(self, blocks: Sequence[Block]) -> None:
        """Serialize blocks and write them to the output path.

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        document = blocks_to_document(blocks)
        text = document.model_dump_json(by_alias=True, exclude_none=True, indent=self._indent)
        try:
            self._output_path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise DocumentSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_normalized_path(input_path: Path) -> Path:
        """Generate output path with the normalized naming convention.

        Converts: blocks.json -> blocks-normalized.json

        Args:
            input_path: Original document path

        Returns:
            Path with -normalized suffix before extension
        """
        return input_path.parent / f"{input_path.stem}-normalized{input_path.suffix}"
