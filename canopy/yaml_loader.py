from __future__ import annotations
"""Minimal YAML → tree loader.

A declarative alternative to building nodes in Python. Example YAML:

```yaml
name: Disk usage          # optional, informational
tree:
  name: root
  children:
    - {name: a.txt, value: 120}
    - {name: b.txt, value: 2048}
    - name: sub
      children:
        - {name: c.txt, value: 45}
        - {name: d.txt, value: 12}
```

Usage:
    from canopy.yaml_loader import load_tree
    root = load_tree("disk.yml")

The document is checked against a JSON Schema first (shape errors point at
the offending YAML path), then handed to :func:`canopy.core.builder.build_tree`.
"""
from pathlib import Path
from typing import Any, Dict

import yaml
from jsonschema import validate as _js_validate

from canopy.core.builder import build_tree
from canopy.core.node import Node

__all__ = ["load_tree", "loads_tree"]


# --------------------------------------------------------------------------- #

def loads_tree(text: str) -> Node:  # noqa: D401
    """Parse YAML *text* into a tree."""
    data = yaml.safe_load(text)
    _js_validate(instance=data, schema=_SCHEMA)
    return build_tree(data["tree"])


def load_tree(path: str | Path) -> Node:  # noqa: D401
    """Load YAML file at *path* into a tree."""
    return loads_tree(Path(path).read_text(encoding="utf-8"))


# --------------------------------------------------------------------------- #
# Minimal JSON Schema for YAML files
# --------------------------------------------------------------------------- #

_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["tree"],
    "properties": {
        "name": {"type": "string"},
        "tree": {"$ref": "#/$defs/node"},
    },
    "$defs": {
        "node": {
            "type": "object",
            "required": ["name"],
            "additionalProperties": False,
            "properties": {
                "name": {"type": "string"},
                "value": {"type": "integer", "minimum": 0},
                "children": {
                    "type": "array",
                    "items": {"$ref": "#/$defs/node"},
                },
            },
            "oneOf": [
                {"required": ["value"], "not": {"required": ["children"]}},
                {"required": ["children"], "not": {"required": ["value"]}},
            ],
        },
    },
}
