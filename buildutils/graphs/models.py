"""Data models for the package dependency graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from ..errors import CyclicDependencyError
from ..models import PackageManifest


@dataclass(frozen=True)
class DependencyEdge:
    """``from_node`` declares ``to_node`` as a dependency."""
    from_node: str
    to_node: str

    def to_dict(self) -> dict:
        return {"from_node": self.from_node, "to_node": self.to_node}


class PackageGraph:
    """Directed graph of package name -> manifest, with depends-on edges.

    Each name maps to exactly one node: adding an existing name replaces
    its payload and keeps its edges.
    """

    def __init__(self):
        self.nodes: Dict[str, PackageManifest] = {}
        self.local_names: Set[str] = set()
        self._outgoing: Dict[str, List[str]] = {}
        self._incoming: Dict[str, List[str]] = {}

    # -- construction -------------------------------------------------------

    def add_node(self, name: str, data: PackageManifest, local: bool = False):
        self.nodes[name] = data
        self._outgoing.setdefault(name, [])
        self._incoming.setdefault(name, [])
        if local:
            self.local_names.add(name)

    def add_dependency(self, from_name: str, to_name: str):
        """Record that *from_name* depends on *to_name*. Both must exist."""
        for name in (from_name, to_name):
            if name not in self.nodes:
                raise KeyError(f"Node does not exist: {name}")
        if to_name not in self._outgoing[from_name]:
            self._outgoing[from_name].append(to_name)
            self._incoming[to_name].append(from_name)

    # -- queries ------------------------------------------------------------

    def has_node(self, name: str) -> bool:
        return name in self.nodes

    def get_node_data(self, name: str) -> PackageManifest:
        if name not in self.nodes:
            raise KeyError(f"Node does not exist: {name}")
        return self.nodes[name]

    @property
    def edges(self) -> List[DependencyEdge]:
        return [
            DependencyEdge(from_node=a, to_node=b)
            for a, targets in self._outgoing.items()
            for b in targets
        ]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(t) for t in self._outgoing.values())

    @property
    def external_packages(self) -> List[str]:
        return sorted(n for n in self.nodes if n not in self.local_names)

    def direct_dependencies(self, name: str) -> List[str]:
        self.get_node_data(name)
        return list(self._outgoing[name])

    def dependencies_of(self, name: str) -> List[str]:
        """Transitive dependencies of *name*, dependencies first."""
        self.get_node_data(name)
        return [n for n in self._walk([name], self._outgoing) if n != name]

    def dependants_of(self, name: str) -> List[str]:
        """Transitive dependants of *name*, nearest last."""
        self.get_node_data(name)
        return [n for n in self._walk([name], self._incoming) if n != name]

    def overall_order(self, local_only: bool = False) -> List[str]:
        """All nodes in dependency order (a node follows what it depends on).

        Raises:
            CyclicDependencyError: the graph has a cycle.
        """
        order = self._walk(self.nodes, self._outgoing)
        if local_only:
            return [n for n in order if n in self.local_names]
        return order

    def to_dict(self, order: Optional[List[str]] = None) -> dict:
        data = {
            "nodes": [
                {
                    "name": name,
                    "version": manifest.version,
                    "path": manifest.path,
                    "is_local": name in self.local_names,
                }
                for name, manifest in self.nodes.items()
            ],
            "edges": [e.to_dict() for e in self.edges],
            "external_packages": self.external_packages,
        }
        if order is not None:
            data["order"] = order
        return data

    # -- internals ----------------------------------------------------------

    @staticmethod
    def _walk(starts: Iterable[str], adjacency: Dict[str, List[str]]) -> List[str]:
        """Iterative depth-first post-order walk with cycle detection."""
        visited: Set[str] = set()
        order: List[str] = []

        for start in starts:
            if start in visited:
                continue
            visited.add(start)
            stack = [(start, iter(adjacency[start]))]
            path = [start]

            while stack:
                node, children = stack[-1]
                for child in children:
                    if child in path:
                        cycle = path[path.index(child):] + [child]
                        raise CyclicDependencyError(cycle)
                    if child not in visited:
                        visited.add(child)
                        stack.append((child, iter(adjacency[child])))
                        path.append(child)
                        break
                else:
                    stack.pop()
                    path.pop()
                    order.append(node)

        return order
