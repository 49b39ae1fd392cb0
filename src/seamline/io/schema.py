"""Pydantic schema for block documents.

Documents are JSON objects with a ``blocks`` list and an optional
``version``. Version 1 (the default when absent) may carry legacy absolute
``startOffset``/``endOffset`` on sewings; version 2 stores only ratios.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DOCUMENT_VERSION_LEGACY = 1
DOCUMENT_VERSION_CURRENT = 2


class RawPoint(BaseModel):
    x: float
    y: float


class RawEntity(BaseModel):
    """An entity as stored in a document."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    type: str = "polyline"
    layer: Literal["segment", "sewing"]
    vertexes: list[RawPoint] = Field(default_factory=list)
    segment_id: int | None = Field(default=None, alias="segmentId")
    start_offset: float | None = Field(default=None, alias="startOffset")
    end_offset: float | None = Field(default=None, alias="endOffset")
    start_ratio: float | None = Field(default=None, alias="startRatio")
    end_ratio: float | None = Field(default=None, alias="endRatio")

    @model_validator(mode="after")
    def _check_sewing_parent(self) -> "RawEntity":
        if self.layer == "sewing" and self.segment_id is None:
            raise ValueError(f"sewing {self.id} has no segmentId")
        return self

    @property
    def has_ratios(self) -> bool:
        return self.start_ratio is not None and self.end_ratio is not None

    @property
    def has_offsets(self) -> bool:
        return self.start_offset is not None and self.end_offset is not None


class RawBlock(BaseModel):
    id: int
    name: str = ""
    entities: list[RawEntity] = Field(default_factory=list)


class RawDocument(BaseModel):
    """Top-level document."""

    version: Literal[1, 2] = DOCUMENT_VERSION_LEGACY
    blocks: list[RawBlock] = Field(default_factory=list)
