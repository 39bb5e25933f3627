from __future__ import annotations

"""Visitor base class.

A visitor implements one tree-wide operation. Nodes call back into it via
``accept`` so new operations never require touching Leaf or Composite.

Visitors keep their running state (totals, depth, collected lines) on the
instance. Reusing one instance for a second, independent traversal carries
that state over – create a new visitor or call :meth:`Visitor.reset` first.
"""

from abc import ABC, abstractmethod
from typing import Any

from .composite import Composite
from .leaf import Leaf

__all__ = ["Visitor"]


class Visitor(ABC):
    def __init__(self) -> None:
        self.reset()

    # -------------------------------------------------- #
    @abstractmethod
    def visit_leaf(self, leaf: Leaf) -> Any:
        """Handle one leaf."""

    @abstractmethod
    def visit_composite(self, composite: Composite) -> Any:
        """Handle one composite; responsible for recursing into its children."""

    @abstractmethod
    def result(self) -> Any:
        """Return what the traversal accumulated."""

    def reset(self) -> None:  # noqa: D401
        """Clear per-traversal state. Subclasses extend this."""

    # -------------------------------------------------- #
    def visit_children(self, composite: Composite) -> None:
        """Run ``child.accept(self)`` for every child, in insertion order."""
        for child in composite.children:
            child.accept(self)
