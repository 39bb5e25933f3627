from __future__ import annotations

"""Tree assembly.

Two collaborators produce Canopy trees, both strictly bottom-up:

* :func:`build_tree` – from a nested mapping, e.g. parsed JSON/YAML::

    {"name": "root", "children": [
        {"name": "a.txt", "value": 120},
        {"name": "sub", "children": [{"name": "c.txt", "value": 45}]},
    ]}

* :func:`scan_directory` – from a real directory, files sized in bytes.
"""

import logging
import os
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .composite import Composite
from .leaf import Leaf
from .node import Node

logger = logging.getLogger(__name__)

__all__ = ["NodeSpec", "build_tree", "scan_directory"]


class NodeSpec(BaseModel):
    """Declarative description of one node.

    Exactly one of ``value`` (leaf) or ``children`` (composite) must be set.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    value: Optional[int] = Field(default=None, ge=0, strict=True)
    children: Optional[List["NodeSpec"]] = None

    @model_validator(mode="after")
    def _one_kind(self) -> "NodeSpec":
        if (self.value is None) == (self.children is None):
            raise ValueError(
                f"node '{self.name}' needs exactly one of 'value' (leaf) or 'children' (composite)"
            )
        return self

    @property
    def is_leaf(self) -> bool:
        return self.children is None


NodeSpec.model_rebuild()


# --------------------------------------------------------------------------- #
# Mapping → tree
# --------------------------------------------------------------------------- #

def build_tree(spec: Union[NodeSpec, Dict[str, Any], Node]) -> Node:  # noqa: D401
    """Return the root Node described by *spec*.

    Raises:
        pydantic.ValidationError: when *spec* is not a valid node description.
    """
    if isinstance(spec, Node):
        return spec
    if not isinstance(spec, NodeSpec):
        spec = NodeSpec.model_validate(spec)
    return _build(spec)


def _build(spec: NodeSpec) -> Node:
    if spec.is_leaf:
        return Leaf(spec.name, spec.value)  # type: ignore[arg-type]
    return Composite(spec.name, [_build(c) for c in spec.children or []])


# --------------------------------------------------------------------------- #
# Directory → tree
# --------------------------------------------------------------------------- #

def scan_directory(
        path: Union[str, os.PathLike],
        *,
        follow_symlinks: bool = False,
        include_hidden: bool = False,
) -> Composite:
    """
    Build a Composite mirroring the directory at *path*.

    Directories become composites and regular files become leaves valued at
    their size in bytes. Siblings are ordered by name. A top-down walk picks
    the directories to descend into, then they are assembled deepest first so
    every directory is built after all of its entries.

    With ``follow_symlinks`` a linked directory that resolves to one of its
    own ancestors is skipped, so link loops never repeat a subtree.

    Args:
        path: Root directory of the scan.
        follow_symlinks: Descend into symlinked directories.
        include_hidden: Keep entries whose name starts with a dot.

    Returns:
        Composite: The root, named after the directory's basename.

    Raises:
        FileNotFoundError: *path* does not exist.
        NotADirectoryError: *path* is not a directory.
        OSError: the root directory itself cannot be listed.
    """
    root_path = os.path.abspath(os.fspath(path))
    if not os.path.exists(root_path):
        raise FileNotFoundError(root_path)
    if not os.path.isdir(root_path):
        raise NotADirectoryError(root_path)

    logger.info("Scanning directory: %s", root_path)
    failures: List[OSError] = []

    def _on_error(err: OSError) -> None:
        logger.warning("Skipping unreadable entry: %s", err)
        failures.append(err)

    # directory path -> identities of itself and its ancestors
    lineage: Dict[str, FrozenSet[Tuple[int, int]]] = {
        root_path: frozenset(filter(None, [_dir_identity(root_path)]))
    }
    walked: List[Tuple[str, List[str], List[str]]] = []
    for current, dirs, files in os.walk(
            root_path, topdown=True, onerror=_on_error, followlinks=follow_symlinks
    ):
        ancestors = lineage.pop(current, frozenset())
        kept: List[str] = []
        for d in dirs:
            if not include_hidden and d.startswith("."):
                continue
            full = os.path.join(current, d)
            if os.path.islink(full):
                if not follow_symlinks:
                    continue
                ident = _dir_identity(full)
                if ident is None:
                    continue
                if ident in ancestors:
                    logger.info("Skipping symlink loop: %s", full)
                    continue
            else:
                ident = _dir_identity(full)
            lineage[full] = ancestors | {ident} if ident is not None else ancestors
            kept.append(d)
        dirs[:] = kept
        walked.append((current, kept, files))

    if not walked:
        # os.walk reports a failure to list the root through onerror only
        raise failures[0] if failures else PermissionError(root_path)

    built: Dict[str, Composite] = {}
    for current, dirs, files in reversed(walked):
        entries: Dict[str, Node] = {}
        for d in dirs:
            sub = built.pop(os.path.join(current, d), None)
            if sub is not None:
                entries[d] = sub
        for f in files:
            if not include_hidden and f.startswith("."):
                continue
            leaf = _file_leaf(os.path.join(current, f), f, follow_symlinks)
            if leaf is not None:
                entries[f] = leaf

        name = os.path.basename(current) or current
        built[current] = Composite(name, [entries[k] for k in sorted(entries)])

    root = built.pop(root_path)
    logger.debug("Scan finished: %s (%d top-level entries)", root.name, len(root))
    return root


def _dir_identity(full_path: str) -> Optional[Tuple[int, int]]:
    try:
        st = os.stat(full_path)
    except OSError as e:
        logger.warning("Cannot stat '%s': %s", full_path, e)
        return None
    return st.st_dev, st.st_ino


def _file_leaf(full_path: str, name: str, follow_symlinks: bool) -> Optional[Leaf]:
    try:
        st = os.stat(full_path, follow_symlinks=follow_symlinks)
    except OSError as e:
        logger.warning("Cannot stat '%s': %s", full_path, e)
        return None
    return Leaf(name, int(st.st_size))
