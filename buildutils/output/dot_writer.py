"""DOT graph output writer.

Generates a Graphviz DOT file for the package dependency graph.
"""

from __future__ import annotations

import os

from ..graphs.models import PackageGraph


def write_package_graph_dot(
    graph: PackageGraph,
    output_dir: str,
    local_only: bool = True,
) -> str:
    """Write the package dependency graph as DOT file.

    Args:
        graph: Package dependency graph.
        output_dir: Output directory.
        local_only: If True, show only local packages and the edges between them.
    """
    path = os.path.join(output_dir, "graph_packages.dot")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write("digraph package_graph {\n")
        f.write("  rankdir=LR;\n")
        f.write("  node [shape=box];\n")
        f.write("\n")

        # Local nodes
        for name, manifest in graph.nodes.items():
            if name not in graph.local_names:
                continue
            attr_str = f"\\nv{manifest.version}" if manifest.version else ""
            f.write(f'  "{_esc(name)}" [label="{_esc(name)}{_esc(attr_str)}"];\n')

        if not local_only:
            # External nodes (grey)
            for ext in graph.external_packages:
                f.write(
                    f'  "{_esc(ext)}" [label="{_esc(ext)}", '
                    f'style=filled, fillcolor=lightgray, shape=ellipse];\n'
                )
        f.write("\n")

        # Edges
        for edge in graph.edges:
            if local_only and edge.to_node not in graph.local_names:
                continue
            constraint = graph.nodes[edge.from_node].dependencies.get(edge.to_node, "")
            style = f' [label="{_esc(constraint)}"]' if constraint else ""
            f.write(f'  "{_esc(edge.from_node)}" -> "{_esc(edge.to_node)}"{style};\n')

        f.write("}\n")

    return path


def _esc(text: str) -> str:
    """Escape double quotes for a quoted DOT ID or label."""
    return str(text).replace('"', '\\"')
