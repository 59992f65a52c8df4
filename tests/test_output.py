"""Graph output writer tests."""

from __future__ import annotations

import json
from pathlib import Path

from buildutils.graphs.models import PackageGraph
from buildutils.models import PackageManifest
from buildutils.output.dot_writer import write_package_graph_dot
from buildutils.output.json_writer import write_package_graph_json


def _graph() -> PackageGraph:
    graph = PackageGraph()
    graph.add_node("app", PackageManifest(name="app", version="1.0.0", dependencies={"react": "^17"}), local=True)
    graph.add_node("react", PackageManifest(name="react", version="17.0.2"))
    graph.add_dependency("app", "react")
    return graph


def test_json_output(tmp_path: Path) -> None:
    path = write_package_graph_json(_graph(), str(tmp_path / "out"))

    data = json.loads(Path(path).read_text())
    assert data["node_count"] == 2
    assert data["edge_count"] == 1
    assert data["external_packages"] == ["react"]
    assert "generated_at" in data
    assert "order" not in data


def test_dot_output_local_only(tmp_path: Path) -> None:
    text = Path(write_package_graph_dot(_graph(), str(tmp_path))).read_text()

    assert '"app" [label="app\\nv1.0.0"];' in text
    assert "react" not in text


def test_dot_output_with_external(tmp_path: Path) -> None:
    text = Path(write_package_graph_dot(_graph(), str(tmp_path), local_only=False)).read_text()

    assert "fillcolor=lightgray" in text
    assert '"app" -> "react" [label="^17"];' in text


def test_dot_output_escapes_quotes(tmp_path: Path) -> None:
    graph = PackageGraph()
    graph.add_node('odd"name', PackageManifest(name='odd"name', dependencies={"dep": '>=1 "x"'}), local=True)
    graph.add_node("dep", PackageManifest(name="dep"), local=True)
    graph.add_dependency('odd"name', "dep")

    text = Path(write_package_graph_dot(graph, str(tmp_path))).read_text()

    assert '"odd\\"name" [label="odd\\"name"];' in text
    assert '"odd\\"name" -> "dep" [label=">=1 \\"x\\""];' in text
