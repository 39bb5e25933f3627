from __future__ import annotations

"""Leaf nodes – terminal entries carrying a non-negative integer value."""

from typing import Any, TYPE_CHECKING

from .node import Node

if TYPE_CHECKING:  # pragma: no cover
    from .visitor import Visitor

__all__ = ["Leaf"]


class Leaf(Node):
    """Terminal node, e.g. a file and its size in bytes.

    Leaves are immutable: ``name`` and ``value`` are fixed at construction.
    """

    value: int

    def __init__(self, name: str, value: int = 0):
        if not isinstance(name, str):
            raise TypeError(f"Leaf name must be a string, got {type(name).__name__}")
        # bool is an int subclass but never a meaningful size
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Leaf '{name}' value must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"Leaf '{name}' value must be >= 0, got {value}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "_owner", None)

    def __setattr__(self, key: str, val: Any) -> None:
        raise AttributeError(f"Leaf '{self.name}' is immutable")

    # -------------------------------------------------- #

    def accept(self, visitor: "Visitor") -> Any:
        return visitor.visit_leaf(self)

    def __repr__(self) -> str:
        return f"Leaf({self.name!r}, {self.value})"
