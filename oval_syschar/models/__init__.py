"""System characteristics data models."""

from oval_syschar.models.config import SyscharConfig
from oval_syschar.models.lock import LockState, MutationOutcome
from oval_syschar.models.sysent import SysEnt
from oval_syschar.models.sysitem import SysItem
from oval_syschar.models.vocabulary import (
    SYSCHAR_NAMESPACE,
    Datatype,
    Family,
    ItemTag,
    MessageLevel,
    Subtype,
    SyscharError,
    SyscharStatus,
    VocabularyError,
)

__all__ = [
    "SYSCHAR_NAMESPACE",
    "Datatype",
    "Family",
    "ItemTag",
    "LockState",
    "MessageLevel",
    "MutationOutcome",
    "Subtype",
    "SysEnt",
    "SysItem",
    "SyscharConfig",
    "SyscharError",
    "SyscharStatus",
    "VocabularyError",
]
