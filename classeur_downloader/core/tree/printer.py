"""Console rendering of node trees."""
from typing import Callable, Iterable, List, Optional

from .identity import canonical_id, display_string
from .models import IdentityMode, Node
from .tree_builder import Tree

CONNECTOR = '\\_ '
INDENT = '    '


class TreePrinter:
    """
    Renders trees as indented text, one line per node.

    Siblings are sorted by canonical identifier so the output does not
    depend on the order the API returned them in. The root's children are
    rendered as separate top-level trees without a connector.
    """

    def __init__(self, mode: IdentityMode = IdentityMode.BY_NAME):
        self.mode = mode

    def sort(self, nodes: Iterable[Node]) -> List[Node]:
        return sorted(nodes, key=lambda node: canonical_id(node, self.mode))

    def render(self, tree: Tree) -> List[str]:
        """Renders every top-level item of ``tree``."""
        lines: List[str] = []
        for node in self.sort(tree.root.get_children()):
            lines.extend(self.render_node(node))
        return lines

    def render_node(self, node: Node, depth: int = 0) -> List[str]:
        """Renders ``node`` and its subtree."""
        label = display_string(node, self.mode)
        if depth == 0:
            lines = [label]
        else:
            lines = [INDENT * (depth - 1) + CONNECTOR + label]

        for child in self.sort(node.get_children()):
            lines.extend(self.render_node(child, depth + 1))
        return lines

    def print(self, tree: Tree, echo: Optional[Callable[[str], None]] = None) -> List[str]:
        """Renders ``tree`` and emits each line through ``echo``."""
        if echo is None:
            from rich.console import Console
            console = Console()

            def echo(line: str) -> None:
                console.print(line, markup=False, highlight=False, emoji=False)

        lines = self.render(tree)
        for line in lines:
            echo(line)
        return lines
