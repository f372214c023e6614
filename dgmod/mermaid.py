from __future__ import annotations

from typing import List

from .graph import ModuleGraph
from .model import EdgeKind


ARROWS = {
	EdgeKind.DECLARATION: "-->",
	EdgeKind.REFERENCE: "-.->",
}


def sanitize_id(path: str) -> str:
	# Mermaid node ids cannot contain "::"
	return path.replace("::", "_")


def _node_lines(graph: ModuleGraph) -> List[str]:
	paths = sorted(m.path.as_str() for m in graph.modules())
	return [f'    {sanitize_id(path)}["{path}"]' for path in paths]


def _edge_lines(graph: ModuleGraph) -> List[str]:
	edges = sorted((f.as_str(), t.as_str(), k.value, k) for f, t, k in graph.edges())
	return [f"    {sanitize_id(f)} {ARROWS[kind]} {sanitize_id(t)}" for f, t, _, kind in edges]


def to_mermaid(graph: ModuleGraph) -> str:
	lines = ["flowchart TD"]
	lines.extend(_node_lines(graph))
	lines.append("")
	lines.extend(_edge_lines(graph))
	return "\n".join(lines) + "\n"


def render_section(graph: ModuleGraph) -> str:
	"""Markdown section with the crate name as heading and a fenced diagram."""
	return f"## {graph.crate_name}\n\n```mermaid\n{to_mermaid(graph)}```\n"
