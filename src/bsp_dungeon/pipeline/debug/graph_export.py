"""
Graph export utilities for layout debugging.

Provides export functions to inspect dungeon layouts in:
- DOT format (Graphviz) showing the partition tree and its corridors
- JSON format for programmatic analysis and reproducibility tracking
"""

from typing import Dict
import json

from ...conversion.layout_export import layout_to_dict
from ...generators.bsp.dungeon_generator import DungeonLayout
from ...generators.bsp.tree import TreeNode


def _node_label(node: TreeNode) -> str:
    bounds = node.bounds
    label_lines = [
        f"depth {node.depth}",
        f"({bounds.x1}, {bounds.y1}) - ({bounds.x2}, {bounds.y2})",
    ]
    if node.split_line is not None:
        label_lines.append(f"split {node.split_line.orientation.name.lower()} @ {node.split_line.coordinate}")
    if node.room is not None:
        room = node.room.bounds
        label_lines.append(f"room {room.width}x{room.length}")
    return '\\n'.join(label_lines)


def export_tree_dot(layout: DungeonLayout) -> str:
    """Export the partition tree as Graphviz DOT.

    Partitions are boxes (leaves with rooms are filled), tree edges are
    solid and corridors are dashed edges between the two structures they
    join.

    Args:
        layout: Generated dungeon layout

    Returns:
        DOT format string for visualization with Graphviz or online viewers
    """
    node_ids: Dict[int, str] = {}
    for index, node in enumerate(layout.tree.nodes):
        node_ids[id(node)] = f"p{index}"

    lines = ['digraph DungeonTree {']
    lines.append('  rankdir=TB;')
    lines.append('  node [shape=box, style=filled];')
    lines.append('')

    for node in layout.tree.nodes:
        color = '#90EE90' if node.room is not None else '#D3D3D3'
        lines.append(f'  {node_ids[id(node)]} [label="{_node_label(node)}" fillcolor="{color}"];')

    lines.append('')

    for node in layout.tree.nodes:
        for child in node.children:
            lines.append(f'  {node_ids[id(node)]} -> {node_ids[id(child)]};')

    lines.append('')

    for corridor in layout.corridors:
        anchor, target = corridor.structures
        direction = 'vertical' if corridor.is_vertical else 'horizontal'
        lines.append(f'  {node_ids[id(anchor)]} -> {node_ids[id(target)]} '
                     f'[dir=none, style=dashed, color="#FF8C00", label="{direction}"];')

    lines.append('}')
    return '\n'.join(lines)


def export_layout_json(layout: DungeonLayout, seed: int) -> str:
    """Export a layout as JSON with metadata.

    Args:
        layout: Generated dungeon layout
        seed: The seed used for generation

    Returns:
        JSON string with layout and debug metadata
    """
    stats = layout.get_layout_stats()
    output = {
        'metadata': {
            'seed': seed,
            'version': '1.0',
            'generator': 'bsp-dungeon',
        },
        'statistics': {
            'room_count': stats['room_count'],
            'corridor_count': stats['corridor_count'],
            'missing_corridors': stats['missing_corridors'],
            'tree_depth': stats['tree_depth'],
        },
        'layout': layout_to_dict(layout),
    }
    return json.dumps(output, indent=2, sort_keys=True)


def derive_seed(global_seed: int, index: int) -> int:
    """Derive a deterministic per-layout seed from a global seed.

    Args:
        global_seed: The seed of the whole batch
        index: Index of the layout in generation order

    Returns:
        Deterministic seed for this specific layout
    """
    return (global_seed * 31 + index) % (2**31 - 1)
