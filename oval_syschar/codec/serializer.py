"""
System Characteristics Serializer — deterministic ElementTree emission.

Items with an unknown subtype are dropped with a warning; their siblings are
still written. Entries are written in stored order.
"""

import logging
from typing import Optional
from xml.etree import ElementTree as ET

from oval_syschar.codec.tags import qualified, split_tag
from oval_syschar.models.sysent import SysEnt
from oval_syschar.models.sysitem import SysItem
from oval_syschar.models.vocabulary import (
    SYSCHAR_NAMESPACE,
    Datatype,
    Subtype,
    SyscharStatus,
    item_tag,
    namespace_prefixes,
)
from oval_syschar.syschar_model.store import SyscharModel

logger = logging.getLogger(__name__)

for _namespace, _prefix in namespace_prefixes().items():
    ET.register_namespace(_prefix, _namespace)


def sysent_to_dom(entry: SysEnt, parent: ET.Element) -> ET.Element:
    """Write one entry under its item, in the item's namespace."""
    namespace, _ = split_tag(parent.tag)
    element = ET.SubElement(parent, qualified(namespace, entry.name))
    if entry.datatype != Datatype.STRING:
        element.set("datatype", entry.datatype.text)
    if entry.mask:
        element.set("mask", "true")
    if entry.status != SyscharStatus.EXISTS:
        element.set("status", entry.status.text)
    element.text = entry.value or None
    return element


def sysitem_to_dom(item: SysItem, parent: ET.Element) -> Optional[ET.Element]:
    """Append the item's element to parent. None if the item cannot be typed."""
    if item.subtype == Subtype.UNKNOWN:
        logger.warning("Skipping XML generation of item %s with unknown subtype", item.id)
        return None

    tag = item_tag(item.subtype)
    element = ET.SubElement(parent, qualified(tag.namespace, tag.local_name))
    element.set("id", item.id)
    element.set("status", item.status.text)

    if item.message is not None:
        message = ET.SubElement(element, qualified(SYSCHAR_NAMESPACE, "message"))
        message.set("level", item.message_level.text)
        message.text = item.message

    for entry in item.entries:
        sysent_to_dom(entry, element)
    return element


def system_data_to_dom(model: SyscharModel) -> ET.Element:
    """Document root holding every item of the model under <system_data>."""
    root = ET.Element(qualified(SYSCHAR_NAMESPACE, "oval_system_characteristics"))
    system_data = ET.SubElement(root, qualified(SYSCHAR_NAMESPACE, "system_data"))
    for item in model.items():
        sysitem_to_dom(item, system_data)
    return root


def dump_system_characteristics(model: SyscharModel) -> bytes:
    """Serialize the model as a UTF-8 document."""
    root = system_data_to_dom(model)
    if model.config.indent:
        ET.indent(root)
    return ET.tostring(
        root,
        encoding="utf-8",
        xml_declaration=model.config.xml_declaration,
    )
