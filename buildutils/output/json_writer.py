"""JSON output writer."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import List, Optional

from ..graphs.models import PackageGraph


def write_package_graph_json(
    graph: PackageGraph,
    output_dir: str,
    order: Optional[List[str]] = None,
) -> str:
    """Write the package dependency graph to JSON."""
    path = os.path.join(output_dir, "package_graph.json")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    data = {
        "generated_at": _now_iso(),
        "node_count": graph.node_count,
        "edge_count": graph.edge_count,
        **graph.to_dict(order=order),
    }

    _write_json(path, data)
    return path


def _write_json(path: str, data: dict):
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, ensure_ascii=False, default=str)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
