from __future__ import annotations

"""Rich tree rendering (no side-effects).

build_rich_tree(root) returns a Rich *Tree* ready for printing. The tree is
built by a visitor, so rendering is just one more operation over the nodes.
"""
from dataclasses import dataclass
from typing import List, Optional

from rich.markup import escape
from rich.tree import Tree

from canopy.core.composite import Composite
from canopy.core.leaf import Leaf
from canopy.core.node import Node
from canopy.core.visitor import Visitor
from canopy.core.visitors import SubtreeTotals
from canopy.utils.constants import STYLE, SYMBOLS

__all__ = [
    "RenderOptions",
    "RichTreeBuilder",
    "build_rich_tree",
]


@dataclass
class RenderOptions:  # noqa: D101
    icons_on: bool = True
    max_children: Optional[int] = None  # per composite; rest summarised
    show_values: bool = True


class RichTreeBuilder(Visitor):
    """Visitor producing a :class:`rich.tree.Tree` mirroring the nodes."""

    def __init__(self, opts: RenderOptions | None = None) -> None:
        self.opts = opts or RenderOptions()
        if self.opts.max_children is not None and self.opts.max_children < 0:
            raise ValueError("max_children must be >= 0")
        super().__init__()

    def reset(self) -> None:
        self.tree: Tree | None = None
        self._parents: List[Tree] = []
        self._totals = SubtreeTotals()

    # -------------------------------------------------- #
    def visit_leaf(self, leaf: Leaf) -> None:
        icon = SYMBOLS["leaf"] if self.opts.icons_on else ""
        label = f"{icon}[{STYLE['leaf']}]{escape(leaf.name)}[/]"
        if self.opts.show_values:
            label += f" [{STYLE['value']}]({leaf.value})[/]"
        self._attach(label)

    def visit_composite(self, composite: Composite) -> None:
        icon = SYMBOLS["composite"] if self.opts.icons_on else ""
        label = f"{icon}[{STYLE['composite']}]{escape(composite.name)}[/]"
        if self.opts.show_values:
            label += f" [{STYLE['total']}]({self._totals(composite)})[/]"
        branch = self._attach(label)

        self._parents.append(branch)
        limit = self.opts.max_children
        shown = composite.children if limit is None else composite.children[:limit]
        for child in shown:
            child.accept(self)
        hidden = len(composite) - len(shown)
        if hidden > 0:
            branch.add(f"[{STYLE['dim']}]{SYMBOLS['more']}+{hidden} more[/]")
        self._parents.pop()

    def result(self) -> Tree:
        if self.tree is None:
            raise RuntimeError("RichTreeBuilder has not visited any node yet")
        return self.tree

    # -------------------------------------------------- #
    def _attach(self, label: str) -> Tree:
        if not self._parents:
            self.tree = Tree(label)
            return self.tree
        return self._parents[-1].add(label)


def build_rich_tree(root: Node, opts: RenderOptions | None = None) -> Tree:  # noqa: D401
    """Return a *rich.tree.Tree* visualisation of *root* (side-effect-free)."""
    builder = RichTreeBuilder(opts)
    root.accept(builder)
    return builder.result()
