"""
System Characteristics Model — owns the items collected from one system.

Created by: the document parser, or collectors building items directly
Queried by: the serializer and definition evaluation

Items are keyed by id; insertion order is preserved. Locking is one-way:
after lock() no item can be created, registered or removed, and every
item mutator rejects writes made with this model's lock state.
"""

import logging
from typing import Dict, List, Optional

from oval_syschar.models.config import SyscharConfig
from oval_syschar.models.lock import LockState, MutationOutcome
from oval_syschar.models.sysitem import SysItem

logger = logging.getLogger(__name__)


class SyscharModel:
    """In-memory registry of system items."""

    def __init__(self, config: Optional[SyscharConfig] = None):
        self.config = config or SyscharConfig()
        self.lock_state = LockState()
        self._items: Dict[str, SysItem] = {}

    @property
    def is_locked(self) -> bool:
        return self.lock_state.locked

    def lock(self) -> None:
        """Freeze the model and every item it owns."""
        self.lock_state.engage()

    def create_item(self, item_id: str) -> Optional[SysItem]:
        """Allocate and register a new item. None if the model is locked."""
        if self.is_locked:
            logger.warning("Attempt to create item %s in a locked model", item_id)
            return None
        item = SysItem(id=item_id)
        self._items[item_id] = item
        return item

    def register(self, item: SysItem) -> MutationOutcome:
        """Register an item built elsewhere, replacing any item with the same id."""
        if self.is_locked:
            logger.warning("Attempt to register item %s in a locked model", item.id)
            return MutationOutcome.REJECTED
        self._items[item.id] = item
        return MutationOutcome.ACCEPTED

    def get_item(self, item_id: str) -> Optional[SysItem]:
        return self._items.get(item_id)

    def get_or_create_item(self, item_id: str) -> Optional[SysItem]:
        """Existing item for this id, or a newly created one."""
        item = self._items.get(item_id)
        if item is not None:
            return item
        return self.create_item(item_id)

    def remove_item(self, item_id: str) -> bool:
        """Unregister an item and release its entries and message."""
        if self.is_locked:
            logger.warning("Attempt to remove item %s from a locked model", item_id)
            return False
        item = self._items.pop(item_id, None)
        if item is None:
            return False
        item.entries.clear()
        item.message = None
        return True

    def items(self) -> List[SysItem]:
        """All items in registration order."""
        return list(self._items.values())

    def count(self) -> int:
        return len(self._items)

    def is_valid(self) -> bool:
        return all(item.is_valid() for item in self._items.values())

    def clone(self) -> "SyscharModel":
        """Unlocked deep copy of this model."""
        new_model = SyscharModel(config=self.config.model_copy())
        for item in self._items.values():
            item.clone(new_model)
        return new_model
