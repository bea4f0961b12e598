"""Lock state — the one-way freeze shared by a model and the items it owns."""

from enum import Enum

from pydantic import BaseModel


class MutationOutcome(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class LockState(BaseModel):
    """
    Capability passed to every mutator at call time.

    Once engaged it stays engaged. Reading the flag and then writing a field
    is not atomic; callers that lock from another thread must synchronize.
    """

    locked: bool = False

    def engage(self) -> None:
        self.locked = True
