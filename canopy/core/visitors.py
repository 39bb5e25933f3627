from __future__ import annotations

"""Built-in visitors.

* :class:`SizeCalculator` – sum of all leaf values.
* :class:`Printer` – indented, pre-order listing (one line per node).
* :class:`NodeCounter` – number of leaves and composites.
* :class:`PathCollector` – ``/``-joined path of every leaf.
* :class:`DepthMeter` – height of the tree.
"""

from typing import Callable, Dict, List, Optional

from pydantic import BaseModel

from canopy.utils.templates import render

from .composite import Composite
from .leaf import Leaf
from .node import Node
from .visitor import Visitor

__all__ = [
    "SizeCalculator",
    "SubtreeTotals",
    "subtree_totals",
    "Printer",
    "NodeCount",
    "NodeCounter",
    "PathCollector",
    "DepthMeter",
]


# --------------------------------------------------------------------------- #
# Aggregation
# --------------------------------------------------------------------------- #

class SizeCalculator(Visitor):
    """Total of every leaf value below (and including) the visited node."""

    def reset(self) -> None:
        self.total = 0

    def visit_leaf(self, leaf: Leaf) -> None:
        self.total += leaf.value

    def visit_composite(self, composite: Composite) -> None:
        self.visit_children(composite)

    def result(self) -> int:
        return self.total


def subtree_totals(root: Node) -> Dict[int, int]:
    """Map ``id(node)`` to its subtree's leaf total, for every node under *root*.

    A single post-order pass over the tree.
    """
    totals: Dict[int, int] = {}

    def _sum(node: Node) -> int:
        if isinstance(node, Composite):
            total = sum(_sum(child) for child in node.children)
        else:
            total = node.value
        totals[id(node)] = total
        return total

    _sum(root)
    return totals


class SubtreeTotals:
    """Per-composite totals computed once for the tree they are asked about."""

    def __init__(self) -> None:
        self._root: Optional[Node] = None  # keeps the ids below alive
        self._totals: Dict[int, int] = {}

    def __call__(self, node: Node) -> int:
        if id(node) not in self._totals:
            self._root = node
            self._totals = subtree_totals(node)
        return self._totals[id(node)]


class NodeCount(BaseModel):  # noqa: D101
    leaves: int = 0
    composites: int = 0

    @property
    def total(self) -> int:  # noqa: D401
        return self.leaves + self.composites


class NodeCounter(Visitor):  # noqa: D101
    def reset(self) -> None:
        self.leaves = 0
        self.composites = 0

    def visit_leaf(self, leaf: Leaf) -> None:
        self.leaves += 1

    def visit_composite(self, composite: Composite) -> None:
        self.composites += 1
        self.visit_children(composite)

    def result(self) -> NodeCount:
        return NodeCount(leaves=self.leaves, composites=self.composites)


class DepthMeter(Visitor):
    """Number of levels in the tree; a lone leaf has depth 1."""

    def reset(self) -> None:
        self._level = 0
        self.max_depth = 0

    def visit_leaf(self, leaf: Leaf) -> None:
        self.max_depth = max(self.max_depth, self._level + 1)

    def visit_composite(self, composite: Composite) -> None:
        self._level += 1
        self.max_depth = max(self.max_depth, self._level)
        self.visit_children(composite)
        self._level -= 1

    def result(self) -> int:
        return self.max_depth


# --------------------------------------------------------------------------- #
# Order-sensitive visitors
# --------------------------------------------------------------------------- #

class PathCollector(Visitor):  # noqa: D101
    def __init__(self, sep: str = "/") -> None:
        self.sep = sep
        super().__init__()

    def reset(self) -> None:
        self._stack: List[str] = []
        self.paths: List[str] = []

    def visit_leaf(self, leaf: Leaf) -> None:
        self.paths.append(self.sep.join([*self._stack, leaf.name]))

    def visit_composite(self, composite: Composite) -> None:
        self._stack.append(composite.name)
        self.visit_children(composite)
        self._stack.pop()

    def result(self) -> List[str]:
        return list(self.paths)


class Printer(Visitor):
    """Render the tree as indented lines, composites before their children.

    Line formats are Jinja2 templates receiving ``name``, ``value`` (leaf
    value, or the subtree total for composites when ``with_totals`` is set),
    ``depth`` and ``node``.

    Args:
        indent: Spaces added per nesting level.
        leaf_template: Format for leaf lines.
        composite_template: Format for composite lines.
        sink: Optional callable receiving each line as it is produced
            (``print``, ``log.info`` …). Lines are always kept in
            :attr:`lines` as well.
        with_totals: Compute each composite's subtree size for its template.
    """

    LEAF_TEMPLATE = "{{ name }} ({{ value }} bytes)"
    COMPOSITE_TEMPLATE = "[{{ name }}]"

    def __init__(
        self,
        *,
        indent: int = 2,
        leaf_template: str | None = None,
        composite_template: str | None = None,
        sink: Optional[Callable[[str], object]] = None,
        with_totals: bool = False,
    ) -> None:
        if indent < 0:
            raise ValueError("indent must be >= 0")
        self.indent = indent
        self.leaf_template = leaf_template or self.LEAF_TEMPLATE
        self.composite_template = composite_template or self.COMPOSITE_TEMPLATE
        self.sink = sink
        self.with_totals = with_totals
        super().__init__()

    def reset(self) -> None:
        self.depth = 0
        self.lines: List[str] = []
        self._totals = SubtreeTotals()

    # -------------------------------------------------- #
    def visit_leaf(self, leaf: Leaf) -> None:
        self._emit(self.leaf_template, leaf, leaf.value)

    def visit_composite(self, composite: Composite) -> None:
        value = self._totals(composite) if self.with_totals else None
        self._emit(self.composite_template, composite, value)

        self.depth += 1
        self.visit_children(composite)
        self.depth -= 1

    def result(self) -> List[str]:
        return list(self.lines)

    # -------------------------------------------------- #
    def _emit(self, template: str, node, value) -> None:
        text = render(
            template,
            {"name": node.name, "value": value, "depth": self.depth, "node": node},
        )
        line = " " * (self.indent * self.depth) + text
        self.lines.append(line)
        if self.sink is not None:
            self.sink(line)
