from __future__ import annotations

from collections import Counter
from typing import Dict, List

from .graph import ModuleGraph
from .model import EdgeKind, ModuleKind


def summarize_graph(graph: ModuleGraph) -> str:
	kinds: Counter = Counter(m.kind for m in graph.modules())
	edge_kinds: Counter = Counter(k for _, _, k in graph.edges())
	module_count = sum(kinds.values())
	edge_count = sum(edge_kinds.values())

	parts: List[str] = []
	parts.append(
		f"Crate {graph.crate_name}: {module_count} modules "
		f"({kinds[ModuleKind.ROOT]} root, {kinds[ModuleKind.INLINE]} inline, "
		f"{kinds[ModuleKind.EXTERNAL]} external), {edge_count} edges "
		f"({edge_kinds[EdgeKind.DECLARATION]} declarations, {edge_kinds[EdgeKind.REFERENCE]} references)"
	)

	referenced: Dict[str, int] = {}
	for _, to_path, kind in graph.edges():
		if kind is EdgeKind.REFERENCE:
			referenced[to_path.as_str()] = referenced.get(to_path.as_str(), 0) + 1
	if referenced:
		path, count = min(referenced.items(), key=lambda item: (-item[1], item[0]))
		parts.append(f"  Most referenced: {path} ({count})")
	return "\n".join(parts)
