"""Tree builder using Builder Pattern."""
import os
from pathlib import Path, PurePath
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .identity import canonical_id
from .models import CHILDREN_KEYS, FileNode, FolderNode, FoundPath, IdentityMode, Node
from ..exceptions import MalformedNodeError, NodeNotFoundError
from ..logging import get_logger

logger = get_logger('tree')

SEPARATORS = ''.join(sep for sep in (os.sep, os.altsep) if sep)


def clean_segment(segment: str) -> str:
    """
    Turns a node name into a relative path below its parent.

    Leading separators are dropped, so `/x` names `x` under the parent.
    Names that are empty or step upwards are rejected with ValueError.
    """
    name = segment.lstrip(SEPARATORS)
    parts = PurePath(name).parts
    if not parts or PurePath(name).anchor or '..' in parts:
        raise ValueError(f"{segment!r} is not a usable file name")
    return name


def join_segments(base: Union[str, Path], segments: Sequence[str]) -> Path:
    """Joins ``segments`` under ``base``; the result never leaves ``base``."""
    path = Path(base).joinpath(*(clean_segment(segment) for segment in segments))

    root = os.path.abspath(base)
    if os.path.commonpath([root, os.path.abspath(path)]) != root:
        raise ValueError(f"{path} is outside {base}")
    return path


class Tree:
    """
    A node tree under a synthetic root, navigable by canonical identifier.

    The identity mode is fixed at construction; every lookup, path segment
    and sort key uses it.
    """

    def __init__(self, root: FolderNode, mode: IdentityMode):
        self.root = root
        self.mode = mode

    def key(self, node: Node) -> str:
        """Canonical identifier of ``node`` under this tree's mode."""
        return canonical_id(node, self.mode)

    def walk(self, include_root: bool = False) -> Iterator[Tuple[Node, Tuple[str, ...]]]:
        """Yields ``(node, segments)`` pairs in pre-order."""
        if include_root:
            yield self.root, ()
        yield from self._walk_children(self.root, ())

    def _walk_children(self, folder: Node, segments: Tuple[str, ...]):
        for child in folder.get_children():
            child_segments = segments + (self.key(child),)
            yield child, child_segments
            yield from self._walk_children(child, child_segments)

    def find_node(self, identifier: Optional[str]) -> FoundPath:
        """
        Finds the first node, depth first, whose canonical identifier matches.

        The root is tested first, then each subtree in child order.

        Raises:
            NodeNotFoundError: If no node matches
        """
        for node, segments in self.walk(include_root=True):
            if self._matches(node, identifier):
                return FoundPath(node, segments)
        raise NodeNotFoundError(identifier)

    def find_all(self, identifier: Optional[str]) -> List[FoundPath]:
        """Finds every node whose canonical identifier matches, in pre-order."""
        return [
            FoundPath(node, segments)
            for node, segments in self.walk(include_root=True)
            if self._matches(node, identifier)
        ]

    def _matches(self, node: Node, identifier: Optional[str]) -> bool:
        if node is self.root:
            value = node.node_id if self.mode is IdentityMode.BY_ID else node.name
            return value == identifier
        return self.key(node) == identifier

    @staticmethod
    def path_for(found: FoundPath, base: Union[str, Path]) -> Path:
        """
        Joins the found node's segments under ``base``.

        Raises:
            MalformedNodeError: If a segment would name a path outside ``base``
        """
        try:
            return join_segments(base, found.segments)
        except ValueError as e:
            raise MalformedNodeError(found.node, str(e)) from e

    def __len__(self) -> int:
        return sum(1 for _ in self.walk())


class TreeBuilder:
    """Builds a node tree from nested API objects."""

    def __init__(self, mode: IdentityMode = IdentityMode.BY_NAME):
        self.mode = mode

    def build(
        self,
        root_children: Sequence[Mapping[str, Any]],
        root_label: Optional[str] = None
    ) -> Tree:
        """
        Builds a tree over top-level folders and files.

        Args:
            root_children: Top-level API objects; folders carry their
                children under ``files`` (or ``children``)
            root_label: ID and name of the synthetic root, usually the
                destination path

        Returns:
            Tree rooted at a synthetic folder node
        """
        root = FolderNode(
            is_root=True,
            node_id=root_label,
            name=root_label,
            raw={'id': root_label, 'name': root_label, 'files': list(root_children)}
        )
        for child in self._build_children(root_children):
            root.add_child(child)

        logger.debug(f"Built tree with {len(root)} top-level items")
        return Tree(root, self.mode)

    def build_node(self, data: Mapping[str, Any]) -> Node:
        """Builds one node, and its subtree if it is a folder."""
        children = self._children_of(data)
        kwargs = dict(node_id=data.get('id'), name=data.get('name'), raw=dict(data))

        if children is None:
            return FileNode(**kwargs)

        folder = FolderNode(**kwargs)
        for child in self._build_children(children):
            folder.add_child(child)
        return folder

    def _build_children(self, items: Sequence[Any]) -> Iterator[Node]:
        for item in items:
            if not isinstance(item, Mapping):
                logger.warning(f"Skipping malformed tree item: {item!r}")
                continue
            yield self.build_node(item)

    @staticmethod
    def _children_of(data: Mapping[str, Any]) -> Optional[List[Dict[str, Any]]]:
        """Children list of a folder object, or None for a file."""
        for key in CHILDREN_KEYS:
            if key in data and data[key] is not None:
                return list(data[key])
        return None
