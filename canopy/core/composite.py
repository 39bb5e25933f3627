from __future__ import annotations
"""Composite – container node owning an ordered, fixed set of children.

Children are adopted once, at construction time. A node that already has an
owner cannot be adopted again, which (together with bottom-up construction)
keeps every Canopy structure a tree: no sharing, no cycles.
"""
from typing import Any, Iterable, Iterator, Optional, Tuple, TYPE_CHECKING

from .node import Node

if TYPE_CHECKING:  # pragma: no cover
    from .visitor import Visitor

__all__ = ["Composite", "OwnershipError"]


class OwnershipError(ValueError):
    """Raised when a node would end up with more than one parent."""


class Composite(Node):  # noqa: D101
    def __init__(self, name: str, children: Iterable[Node] = ()):
        if not isinstance(name, str):
            raise TypeError(f"Composite name must be a string, got {type(name).__name__}")
        kids = tuple(children)
        _check_adoptable(name, kids)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "_owner", None)
        object.__setattr__(self, "_children", kids)
        for child in kids:
            object.__setattr__(child, "_owner", self)

    def __setattr__(self, key: str, val: Any) -> None:
        raise AttributeError(f"Composite '{self.name}' is immutable")

    # -------------------------------------------------- #

    def accept(self, visitor: "Visitor") -> Any:
        return visitor.visit_composite(self)

    # Read-only child access ------------------------------------------- #
    @property
    def children(self) -> Tuple[Node, ...]:
        return self._children

    @property
    def is_empty(self) -> bool:
        return not self._children

    def get_child(self, index: int) -> Optional[Node]:
        """Return the child at *index*, or None when out of range."""
        if 0 <= index < len(self._children):
            return self._children[index]
        return None

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._children)

    def __repr__(self) -> str:
        return f"Composite({self.name!r}, {len(self._children)} children)"


def _check_adoptable(name: str, kids: Tuple[Node, ...]) -> None:
    seen: set[int] = set()
    for child in kids:
        if not isinstance(child, Node):
            raise TypeError(
                f"Composite '{name}' children must be Nodes, got {type(child).__name__}"
            )
        if child.owned:
            raise OwnershipError(
                f"Node '{child.name}' already belongs to '{child._owner.name}'"  # type: ignore[union-attr]
            )
        if id(child) in seen:
            raise OwnershipError(f"Node '{child.name}' passed twice to '{name}'")
        seen.add(id(child))
