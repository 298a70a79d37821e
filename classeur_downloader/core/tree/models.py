"""Tree node models using Composite Pattern."""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# Attribute names that carry a folder's children, in lookup order.
# The Classeur API uses 'files'.
CHILDREN_KEYS = ('files', 'children')


class IdentityMode(Enum):
    """Which attribute identifies a node: its opaque ID or its name."""
    BY_ID = 'id'
    BY_NAME = 'name'

    @classmethod
    def from_flag(cls, by_id: bool) -> 'IdentityMode':
        return cls.BY_ID if by_id else cls.BY_NAME


class Node(ABC):
    """Base node class."""

    is_folder = False

    def __init__(
        self,
        node_id: Optional[str] = None,
        name: Optional[str] = None,
        raw: Optional[Dict[str, Any]] = None
    ):
        """Initializes node."""
        self.node_id = node_id
        self.name = name
        self.raw = raw if raw is not None else {}

    @property
    def is_file(self) -> bool:
        return not self.is_folder

    def get_children(self) -> List['Node']:
        """Gets child nodes."""
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.node_id!r}, name={self.name!r})"


class FileNode(Node):
    """Leaf document with fetchable content."""


class FolderNode(Node):
    """Container node holding files and nested folders."""

    is_folder = True

    def __init__(self, is_root: bool = False, **kwargs):
        """Initializes folder node."""
        super().__init__(**kwargs)
        self.is_root = is_root
        self._children: List[Node] = []

    def get_children(self) -> List[Node]:
        """Gets child nodes in insertion order."""
        return self._children.copy()

    def add_child(self, child: Node):
        """Adds child node."""
        self._children.append(child)

    def __len__(self) -> int:
        return len(self._children)


@dataclass(frozen=True)
class FoundPath:
    """
    A node located in a tree.

    ``segments`` holds the canonical identifier of every node from the
    root's children down to and including ``node``; the root contributes
    no segment.
    """
    node: Node
    segments: Tuple[str, ...]

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def depth(self) -> int:
        return len(self.segments)
