"""Parser and serializer configuration."""

from pydantic import BaseModel

from oval_syschar.models.vocabulary import Datatype, MessageLevel, SyscharStatus


class SyscharConfig(BaseModel):
    """Defaults applied when a document omits an attribute, plus output options."""

    default_item_status: SyscharStatus = SyscharStatus.EXISTS
    default_message_level: MessageLevel = MessageLevel.INFO
    default_entry_datatype: Datatype = Datatype.STRING
    xml_declaration: bool = True
    indent: bool = False
