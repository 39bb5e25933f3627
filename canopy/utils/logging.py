from __future__ import annotations
"""Rich console logging and tree display.

Importing this module configures the root logger once with a RichHandler and
subscribes to traversal events so they show up at DEBUG level.
"""
from logging import DEBUG, ERROR, INFO, WARNING, Logger, basicConfig, getLogger
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from canopy.utils.events import TraversalFinished, TraversalStarted, subscribe

console = Console()

__all__ = [
    "console",
    "get",
    "log",
    "show_tree",
]

_LEVEL_MAP = {
    "info": INFO,
    "debug": DEBUG,
    "warning": WARNING,
    "error": ERROR,
}

# Configure root once with Rich handler for plain log messages
basicConfig(
    level=INFO,
    format="%(message)s",
    datefmt="%H:%M:%S",
    handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=True)],
)

log: Logger = getLogger("canopy")


def get(level: str = "info") -> Logger:  # noqa: D401
    """Return the canopy logger set to *level* (str, unknown → INFO)."""
    lvl = _LEVEL_MAP.get(level.lower(), INFO)
    log.setLevel(lvl)
    return log


# --------------------------------------------------------------------------- #
# Event subscribers
# --------------------------------------------------------------------------- #
@subscribe(TraversalStarted)
def _on_started(evt: TraversalStarted):  # noqa: D401 – event hook
    log.debug("%s → '%s'", evt.visitor, escape(evt.root))


@subscribe(TraversalFinished)
def _on_finished(evt: TraversalFinished):  # noqa: D401 – event hook
    log.debug("%s ← '%s': %s", evt.visitor, escape(evt.root), escape(repr(evt.result)))


# --------------------------------------------------------------------------- #
# Public helpers
# --------------------------------------------------------------------------- #

def show_tree(root: Any, **kw) -> None:  # noqa: D401
    """Print *root* as a Rich tree on the shared console."""
    from canopy.utils.render import build_rich_tree

    console.print(build_rich_tree(root, **kw))
