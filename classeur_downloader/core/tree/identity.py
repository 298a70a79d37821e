"""Canonical identifiers and display strings for nodes."""
from typing import Any, Mapping, Union

from .models import IdentityMode, Node

NodeLike = Union[Node, Mapping[str, Any]]


def _id_and_name(node: NodeLike):
    if isinstance(node, Node):
        return node.node_id, node.name
    return node.get('id'), node.get('name')


def canonical_id(node: NodeLike, mode: IdentityMode) -> str:
    """Return the node's ID in BY_ID mode, its name otherwise.

    Accepts either a built node or a raw API object. A missing attribute
    yields an empty string.
    """
    node_id, name = _id_and_name(node)
    value = node_id if mode is IdentityMode.BY_ID else name
    return '' if value is None else str(value)


def display_string(node: NodeLike, mode: IdentityMode) -> str:
    """Return ``"id (name)"`` in BY_ID mode or ``"name (id)"`` otherwise.

    Nodes carrying neither an ID nor a name render as an empty string.
    """
    node_id, name = _id_and_name(node)
    if not node_id and not name:
        return ''

    primary, secondary = (node_id, name) if mode is IdentityMode.BY_ID else (name, node_id)
    return f"{primary or ''} ({secondary or ''})"
