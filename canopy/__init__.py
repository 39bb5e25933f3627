"""Canopy: tiny, typed tree composition and traversal.

Main components:
* `Leaf`: terminal node holding a non-negative integer value
* `Composite`: node owning an ordered, fixed list of children
* `Visitor`: one operation over a tree, dispatched per node kind
* `run_visitor`: run a visitor on a root and return its result
* `build_tree` / `scan_directory`: assemble trees from mappings or directories
"""

# Version info
__version__ = "0.1.0"

# Core components
from canopy.core.node import Node
from canopy.core.leaf import Leaf
from canopy.core.composite import Composite, OwnershipError
from canopy.core.visitor import Visitor
from canopy.core.visitors import (
    SizeCalculator,
    Printer,
    NodeCount,
    NodeCounter,
    PathCollector,
    DepthMeter,
)
from canopy.core.traversal import run_visitor, iter_nodes
from canopy.core.builder import NodeSpec, build_tree, scan_directory

# Export all important symbols
__all__ = [
    # Core classes
    "Node",
    "Leaf",
    "Composite",
    "OwnershipError",
    "Visitor",
    "NodeSpec",

    # Visitors
    "SizeCalculator",
    "Printer",
    "NodeCount",
    "NodeCounter",
    "PathCollector",
    "DepthMeter",

    # Functions
    "run_visitor",
    "iter_nodes",
    "build_tree",
    "scan_directory",
]
