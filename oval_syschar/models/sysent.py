"""System entry — one collected field/value within an item."""

from typing import Optional

from pydantic import BaseModel, field_validator

from oval_syschar.models.vocabulary import Datatype, SyscharStatus


class SysEnt(BaseModel):
    """A single collected fact, e.g. <path datatype="string">/etc</path>."""

    name: str                               # element local name, e.g. "path"
    value: str = ""                         # element content; empty and absent are the same
    datatype: Datatype = Datatype.STRING
    mask: bool = False                      # value must not be disclosed in results
    status: SyscharStatus = SyscharStatus.EXISTS

    @field_validator("value", mode="before")
    @classmethod
    def _absent_value_is_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else value

    def is_valid(self) -> bool:
        return bool(self.name) and self.datatype != Datatype.UNKNOWN

    def clone(self) -> "SysEnt":
        return self.model_copy(deep=True)
