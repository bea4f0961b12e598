"""ElementTree qualified-name helpers."""

from typing import Optional, Tuple


def split_tag(tag: str) -> Tuple[Optional[str], str]:
    """'{ns}local' -> (ns, local); unqualified tags have namespace None."""
    if tag.startswith("{"):
        namespace, _, local_name = tag[1:].partition("}")
        return namespace, local_name
    return None, tag


def qualified(namespace: Optional[str], local_name: str) -> str:
    if namespace:
        return f"{{{namespace}}}{local_name}"
    return local_name


def is_element(node) -> bool:
    """False for comments and processing instructions kept by a TreeBuilder."""
    return isinstance(node.tag, str)
