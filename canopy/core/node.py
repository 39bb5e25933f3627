from __future__ import annotations

"""Base Node class for Canopy trees."""

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from canopy.core.visitor import Visitor

__all__ = ["Node"]


class Node:  # noqa: D101 – minimalist base class
    name: str

    # Set by the Composite that adopts this node; never reassigned.
    _owner: "Node | None" = None

    def accept(self, visitor: "Visitor") -> Any:
        """Dispatch to the handler of *visitor* matching this node kind."""
        raise NotImplementedError

    @property
    def owned(self) -> bool:  # noqa: D401
        """True once a Composite has adopted this node."""
        return self._owner is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
