"""Exception hierarchy for Seamline.

Geometry code never raises on malformed input; these exceptions are used at
the document boundary and by lookups requested explicitly by the caller.
"""


class SeamlineError(Exception):
    """Base exception for all Seamline errors."""

    pass


class DocumentError(SeamlineError):
    """Errors related to document loading or saving."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a block document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error saving a block document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save document '{path}': {reason}")


class DocumentFormatError(DocumentError):
    """Document does not match the block schema."""

    def __init__(self, source: str, details: str) -> None:
        self.source = source
        self.details = details
        super().__init__(f"Invalid document '{source}': {details}")


class EntityError(SeamlineError):
    """Errors related to block and entity lookup."""

    pass


class EntityNotFoundError(EntityError):
    """Requested entity not found."""

    def __init__(self, entity_id: int, layer: str = "entity") -> None:
        self.entity_id = entity_id
        self.layer = layer
        super().__init__(f"No {layer} with id {entity_id}")


class GenerationError(SeamlineError):
    """Synthetic layout generation produced nothing."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Layout generation failed: {reason}")
