"""Selection and hover state.

Either several blocks or several entities can be selected, never both at
once. Selecting or toggling in one kind clears the other.
"""

from dataclasses import dataclass, field


@dataclass
class SelectionState:
    """Selected block ids or selected entity ids, in selection order."""

    block_ids: list[int] = field(default_factory=list)
    entity_ids: list[int] = field(default_factory=list)

    def is_block_selected(self, block_id: int) -> bool:
        return block_id in self.block_ids

    def is_entity_selected(self, entity_id: int) -> bool:
        return entity_id in self.entity_ids

    def select_block(self, block_id: int) -> None:
        self.block_ids = [block_id]
        self.entity_ids = []

    def select_entity(self, entity_id: int) -> None:
        self.entity_ids = [entity_id]
        self.block_ids = []

    def toggle_block(self, block_id: int) -> None:
        """Add or remove a block from a multi-selection."""
        self.entity_ids = []
        if block_id in self.block_ids:
            self.block_ids.remove(block_id)
        else:
            self.block_ids.append(block_id)

    def toggle_entity(self, entity_id: int) -> None:
        """Add or remove an entity from a multi-selection."""
        self.block_ids = []
        if entity_id in self.entity_ids:
            self.entity_ids.remove(entity_id)
        else:
            self.entity_ids.append(entity_id)

    def clear(self) -> None:
        self.block_ids = []
        self.entity_ids = []

    @property
    def is_empty(self) -> bool:
        return not self.block_ids and not self.entity_ids


@dataclass
class HoverState:
    """Hovered entity or block. An entity hover clears the block hover."""

    entity_id: int | None = None
    block_id: int | None = None

    def set_entity(self, entity_id: int | None) -> None:
        self.entity_id = entity_id
        if entity_id is not None:
            self.block_id = None

    def set_block(self, block_id: int | None) -> None:
        self.block_id = block_id

    def clear(self) -> None:
        self.entity_id = None
        self.block_id = None
