"""
System Item — one piece of collected system-characteristics data.

Behavioral Contract:
- Items are created only through their owning SyscharModel, which registers them
- An item keeps no reference to its model; every mutator is handed the
  model's LockState and refuses to write once it is engaged
- Mutators report MutationOutcome.REJECTED instead of failing silently
- Entries keep append order
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, Field

from oval_syschar.models.lock import LockState, MutationOutcome
from oval_syschar.models.sysent import SysEnt
from oval_syschar.models.vocabulary import MessageLevel, Subtype, SyscharStatus

if TYPE_CHECKING:
    from oval_syschar.syschar_model.store import SyscharModel

logger = logging.getLogger(__name__)


class SysItem(BaseModel):
    """
    A collected-fact record of one subtype, e.g. a unix file item.

    Mutators must be given the owning model's `lock_state`; the item cannot
    check which model the token belongs to.
    """

    id: str = Field(frozen=True)
    subtype: Subtype = Subtype.UNKNOWN
    status: SyscharStatus = SyscharStatus.UNKNOWN
    message: Optional[str] = None
    message_level: MessageLevel = MessageLevel.NONE
    entries: List[SysEnt] = []

    # --- Mutators ---

    def _writable(self, lock: LockState, field: str) -> bool:
        if lock.locked:
            logger.warning(
                "Attempt to update locked content: %s of item %s", field, self.id
            )
            return False
        return True

    def set_subtype(self, subtype: Subtype, lock: LockState) -> MutationOutcome:
        if not self._writable(lock, "subtype"):
            return MutationOutcome.REJECTED
        self.subtype = subtype
        return MutationOutcome.ACCEPTED

    def set_status(self, status: SyscharStatus, lock: LockState) -> MutationOutcome:
        if not self._writable(lock, "status"):
            return MutationOutcome.REJECTED
        self.status = status
        return MutationOutcome.ACCEPTED

    def set_message(self, message: Optional[str], lock: LockState) -> MutationOutcome:
        """Replace the message. None clears it; the level is left as it was."""
        if not self._writable(lock, "message"):
            return MutationOutcome.REJECTED
        self.message = message
        return MutationOutcome.ACCEPTED

    def set_message_level(self, level: MessageLevel, lock: LockState) -> MutationOutcome:
        if not self._writable(lock, "message_level"):
            return MutationOutcome.REJECTED
        self.message_level = level
        return MutationOutcome.ACCEPTED

    def add_entry(self, entry: SysEnt, lock: LockState) -> MutationOutcome:
        if not self._writable(lock, "entries"):
            return MutationOutcome.REJECTED
        self.entries.append(entry)
        return MutationOutcome.ACCEPTED

    # --- Queries ---

    def is_valid(self) -> bool:
        """Known subtype and every entry valid."""
        if self.subtype == Subtype.UNKNOWN:
            logger.warning("Item %s is not valid: subtype is unknown", self.id)
            return False
        return all(entry.is_valid() for entry in self.entries)

    def summary(self) -> dict:
        """Flat description of the item for debug output."""
        summary = {
            "id": self.id,
            "subtype": self.subtype.name,
            "status": self.status.text,
            "message_level": self.message_level.text,
            "entries": len(self.entries),
        }
        if self.message_level != MessageLevel.NONE:
            summary["message"] = self.message
        return summary

    # --- Copying ---

    def clone(self, new_model: "SyscharModel") -> Optional["SysItem"]:
        """
        Deep copy into another model.

        Returns None if the new model refuses creation (it is locked).
        The message and its level are copied only when a message is present.
        """
        new_item = new_model.create_item(self.id)
        if new_item is None:
            return None

        lock = new_model.lock_state
        if self.message is not None:
            new_item.set_message(self.message, lock)
            new_item.set_message_level(self.message_level, lock)
        new_item.set_status(self.status, lock)
        new_item.set_subtype(self.subtype, lock)
        for entry in self.entries:
            new_item.add_entry(entry.clone(), lock)
        return new_item
