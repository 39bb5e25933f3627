"""Canopy core: node types, visitors, traversal and tree assembly."""
