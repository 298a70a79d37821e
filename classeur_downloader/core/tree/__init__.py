"""Tree assembly, lookup and rendering."""
from .models import IdentityMode, Node, FileNode, FolderNode, FoundPath
from .identity import canonical_id, display_string
from .tree_builder import Tree, TreeBuilder
from .printer import TreePrinter

__all__ = [
    'IdentityMode',
    'Node',
    'FileNode',
    'FolderNode',
    'FoundPath',
    'canonical_id',
    'display_string',
    'Tree',
    'TreeBuilder',
    'TreePrinter',
]
