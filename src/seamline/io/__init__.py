"""Document I/O layer for seamline.

This module handles reading and writing block documents. It provides a
clean abstraction layer between the JSON document format and the domain
models.

Key responsibilities:
- Load and validate JSON block documents (pydantic schema)
- Convert between schema models and domain models
- Write documents in the current ratio-only format

Key classes:
- DocumentReader: Load documents and iterate raw blocks
- DocumentWriter: Save blocks
"""

from seamline.io.converter import domain_block_to_raw, raw_points_to_domain
from seamline.io.reader import DocumentReader
from seamline.io.schema import RawBlock, RawDocument, RawEntity, RawPoint
from seamline.io.writer import DocumentWriter, blocks_to_document

__all__ = [
    "DocumentReader",
    "DocumentWriter",
    "RawBlock",
    "RawDocument",
    "RawEntity",
    "RawPoint",
    "blocks_to_document",
    "domain_block_to_raw",
    "raw_points_to_domain",
]
