from __future__ import annotations
"""Ultra-lightweight pub/sub **EventBus** for traversal hooks.

Example
-------
```python
from canopy.utils.events import subscribe, TraversalFinished

@subscribe(TraversalFinished)
def _on_done(evt: TraversalFinished):
    print(f"{evt.visitor} on {evt.root} -> {evt.result}")
```
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Type, TypeVar

__all__ = [
    "Event",
    "TraversalStarted",
    "TraversalFinished",
    "subscribe",
    "unsubscribe",
    "publish",
]

T = TypeVar("T", bound="Event")
_Handler = Callable[[Any], None]
_REGISTRY: Dict[Type["Event"], List[_Handler]] = {}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, kw_only=True)
class Event:  # noqa: D101 – base event
    ts: datetime = field(default_factory=_now)


# --------------------------------------------------------------------------- #
# Concrete events
# --------------------------------------------------------------------------- #
@dataclass(slots=True)
class TraversalStarted(Event):
    root: str
    visitor: str


@dataclass(slots=True)
class TraversalFinished(Event):
    root: str
    visitor: str
    result: Any = None


# --------------------------------------------------------------------------- #
# API helpers
# --------------------------------------------------------------------------- #

def subscribe(event_type: Type[T]):  # noqa: D401
    """Decorator: register *func* to receive *event_type* events."""

    def _decorator(func: _Handler) -> _Handler:
        _REGISTRY.setdefault(event_type, []).append(func)
        return func

    return _decorator


def unsubscribe(event_type: Type[T], func: _Handler) -> None:
    handlers = _REGISTRY.get(event_type, [])
    if func in handlers:
        handlers.remove(func)


def publish(evt: Event) -> None:  # noqa: D401
    """Publish an event to all registered subscribers."""
    for func in list(_REGISTRY.get(type(evt), [])):
        try:
            func(evt)
        except Exception as e:  # noqa: BLE001
            # Failure to handle an event must never break a traversal.
            from canopy.utils.logging import log

            log.warning("event handler %s failed: %s", getattr(func, "__name__", func), e)
