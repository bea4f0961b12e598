"""
System Characteristics Parser — rebuilds items from a materialized XML tree.

Behavioral Contract:
- An element whose (namespace, local name) is not a known item is logged,
  skipped with its whole subtree, and does not count as a failure
- Items are get-or-create by id: a repeated id updates the same item
- Missing attributes fall back to SyscharConfig defaults
- A failing child is logged; its siblings are still parsed
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Union
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DET

from oval_syschar.codec.tags import is_element, qualified, split_tag
from oval_syschar.models.config import SyscharConfig
from oval_syschar.models.lock import MutationOutcome
from oval_syschar.models.sysent import SysEnt
from oval_syschar.models.sysitem import SysItem
from oval_syschar.models.vocabulary import (
    SYSCHAR_NAMESPACE,
    Datatype,
    MessageLevel,
    Subtype,
    SyscharError,
    SyscharStatus,
    subtype_from_tag,
)
from oval_syschar.syschar_model.store import SyscharModel

logger = logging.getLogger(__name__)

_TRUE_TEXT = ("true", "1")


class SyscharParseError(SyscharError):
    """Raised when a document cannot be read as system characteristics."""
    pass


class ParserContext:
    """State shared by every element parsed from one document."""

    def __init__(self, model: SyscharModel):
        self.model = model
        self.items_parsed = 0
        self.items_skipped = 0

    @property
    def config(self) -> SyscharConfig:
        return self.model.config


# --- Entries ---

def parse_sysent(element: Element, config: Optional[SyscharConfig] = None) -> Optional[SysEnt]:
    """Parse one entry element. None if the element cannot be an entry."""
    config = config or SyscharConfig()
    _, local_name = split_tag(element.tag)
    if len(element):
        logger.warning("Entry <%s> has child elements; structured entries are not supported", local_name)
        return None

    datatype = Datatype.parse(element.get("datatype"), config.default_entry_datatype)
    if datatype == Datatype.UNKNOWN:
        logger.warning("Entry <%s> has unrecognised datatype %r", local_name, element.get("datatype"))

    return SysEnt(
        name=local_name,
        value=element.text or "",
        datatype=datatype,
        mask=element.get("mask", "false").strip().lower() in _TRUE_TEXT,
        status=SyscharStatus.parse(element.get("status"), SyscharStatus.EXISTS),
    )


# --- Item children ---

def _parse_message(child: Element, item: SysItem, context: ParserContext) -> bool:
    """A message child replaces any message seen before it."""
    lock = context.model.lock_state
    level = MessageLevel.parse(child.get("level"), context.config.default_message_level)
    outcomes = (
        item.set_message_level(level, lock),
        item.set_message(child.text or "", lock),
    )
    return all(o == MutationOutcome.ACCEPTED for o in outcomes)


def _parse_entry(child: Element, item: SysItem, context: ParserContext) -> bool:
    entry = parse_sysent(child, context.config)
    if entry is None:
        return False
    return item.add_entry(entry, context.model.lock_state) == MutationOutcome.ACCEPTED


SubtagHandler = Callable[[Element, SysItem, ParserContext], bool]

# Keyed by (namespace, local name); a None local name matches the whole namespace.
_SUBTAG_HANDLERS: Dict[Tuple[Optional[str], Optional[str]], SubtagHandler] = {
    (SYSCHAR_NAMESPACE, None): _parse_message,
}


def _resolve_subtag_handler(child: Element) -> SubtagHandler:
    namespace, local_name = split_tag(child.tag)
    return (
        _SUBTAG_HANDLERS.get((namespace, local_name))
        or _SUBTAG_HANDLERS.get((namespace, None))
        or _parse_entry
    )


# --- Items ---

def parse_sysitem(element: Element, context: ParserContext) -> bool:
    """
    Parse one item element into the context's model.

    Returns False when the item could not be stored or one of its children
    failed; unknown item elements are skipped and return True.
    """
    if not is_element(element):
        return True
    namespace, local_name = split_tag(element.tag)
    subtype = subtype_from_tag(namespace, local_name)
    if subtype == Subtype.UNKNOWN:
        logger.warning("Expected <item>, got <%s:%s>", namespace, local_name)
        context.items_skipped += 1
        return True

    item_id = element.get("id")
    if item_id is None:
        logger.warning("Item <%s:%s> has no id attribute; skipped", namespace, local_name)
        context.items_skipped += 1
        return False

    item = context.model.get_or_create_item(item_id)
    if item is None:
        return False

    lock = context.model.lock_state
    status = SyscharStatus.parse(element.get("status"), context.config.default_item_status)
    ok = (
        item.set_subtype(subtype, lock) == MutationOutcome.ACCEPTED
        and item.set_status(status, lock) == MutationOutcome.ACCEPTED
    )

    for child in element:
        if not is_element(child):
            continue
        handler = _resolve_subtag_handler(child)
        if not handler(child, item, context):
            logger.warning("Failed to parse <%s> of item %s", child.tag, item_id)
            ok = False

    context.items_parsed += 1
    logger.debug("Parsed item %s", item.summary())
    if not ok:
        logger.warning("Item %s was not parsed cleanly", item_id)
    return ok


# --- Documents ---

def parse_system_data(root: Element, context: ParserContext) -> bool:
    """
    Parse every item under <system_data>.

    `root` may be the <system_data> element itself or an
    <oval_system_characteristics> document root.
    """
    namespace, local_name = split_tag(root.tag)
    if local_name == "oval_system_characteristics":
        system_data = root.find(qualified(namespace, "system_data"))
        if system_data is None:
            return True
    elif local_name == "system_data":
        system_data = root
    else:
        raise SyscharParseError(f"Expected system characteristics, got <{root.tag}>")

    ok = True
    for element in system_data:
        if not is_element(element):
            continue
        if not parse_sysitem(element, context):
            ok = False
    return ok


def load_system_characteristics(
    source: Union[str, bytes, Path],
    model: Optional[SyscharModel] = None,
) -> SyscharModel:
    """Parse a document (text, bytes or file path) into a model."""
    model = model if model is not None else SyscharModel()
    try:
        if isinstance(source, Path):
            root = DET.parse(str(source)).getroot()
        else:
            root = DET.fromstring(source)
    except (ParseError, DefusedXmlException) as e:
        raise SyscharParseError(f"Cannot parse system characteristics: {e}") from e

    context = ParserContext(model)
    if not parse_system_data(root, context):
        logger.warning(
            "System characteristics parsed with errors (%d items, %d skipped)",
            context.items_parsed,
            context.items_skipped,
        )
    return model
