"""Debug utilities for the generation pipeline."""

from .graph_export import derive_seed, export_layout_json, export_tree_dot

__all__ = ['derive_seed', 'export_layout_json', 'export_tree_dot']
