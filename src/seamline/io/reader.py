"""Document reader for block JSON files.

This module provides the DocumentReader class for loading block documents
and validating them against the document schema.
"""

import json
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from seamline.exceptions import DocumentFormatError, DocumentLoadError
from seamline.io.schema import RawBlock, RawDocument


class DocumentReader:
    """Loads block documents and exposes their raw blocks.

    Example:
        reader = DocumentReader(Path("blocks.json"))
        reader.load()
        blocks = normalize(reader.iter_raw_blocks())
    """

    def __init__(self, document_path: Path) -> None:
        """Initialize the document reader.

        Args:
            document_path: Path to the JSON document
        """
        self._document_path = document_path
        self._document: RawDocument | None = None

    def load(self) -> None:
        """Load and validate the document.

        Raises:
            DocumentLoadError: If the file is missing, unreadable or not JSON
            DocumentFormatError: If the JSON does not match the block schema
        """
        path = str(self._document_path)
        if not self._document_path.exists():
            raise DocumentLoadError(path, "file not found")

        try:
            text = self._document_path.read_text(encoding="utf-8")
            data = json.loads(text)
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(path, str(e)) from e
        except json.JSONDecodeError as e:
            raise DocumentLoadError(path, f"invalid JSON: {e}") from e

        try:
            self._document = RawDocument.model_validate(data)
        except ValidationError as e:
            raise DocumentFormatError(path, str(e)) from e

    @property
    def document(self) -> RawDocument:
        """Return the validated document.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._document is None:
            raise RuntimeError("Document not loaded. Call load() first.")
        return self._document

    @property
    def version(self) -> int:
        """Return the document format version (1 = legacy offsets, 2 = ratios)."""
        return self.document.version

    @property
    def block_count(self) -> int:
        return len(self.document.blocks)

    def iter_raw_blocks(self) -> Iterator[RawBlock]:
        """Iterate over the raw blocks in document order.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        yield from self.document.blocks

    def close(self) -> None:
        self._document = None

    def __enter__(self) -> "DocumentReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
