from __future__ import annotations
"""Traversal driver.

run_visitor(root, visitor) runs one visitor over a tree and returns its result.
iter_nodes(root) yields (depth, node) pre-order, in child insertion order.

Traversal is plain recursion: height is bounded by the interpreter's
recursion limit and a RecursionError on pathological depth is not caught.
"""
from typing import Any, Iterator, Tuple

from canopy.utils.events import TraversalFinished, TraversalStarted, publish

from .composite import Composite
from .node import Node
from .visitor import Visitor

__all__ = ["run_visitor", "iter_nodes"]


def run_visitor(root: Node, visitor: Visitor) -> Any:  # noqa: D401
    """Invoke ``root.accept(visitor)`` and return ``visitor.result()``."""
    if not isinstance(root, Node):
        raise TypeError(f"root must be a Node, got {type(root).__name__}")
    vname = type(visitor).__name__
    publish(TraversalStarted(root=root.name, visitor=vname))
    root.accept(visitor)
    result = visitor.result()
    publish(TraversalFinished(root=root.name, visitor=vname, result=result))
    return result


def iter_nodes(root: Node) -> Iterator[Tuple[int, Node]]:  # noqa: D401
    """Yield *(depth, node)* for every node below *root* (DFS, pre-order)."""

    def _walk(node: Node, depth: int) -> Iterator[Tuple[int, Node]]:
        yield depth, node
        if isinstance(node, Composite):
            for child in node.children:
                yield from _walk(child, depth + 1)

    yield from _walk(root, 0)
