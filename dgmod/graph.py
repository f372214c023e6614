from __future__ import annotations

from typing import Dict, Iterator, Optional, Set, Tuple

from .model import EdgeFacts, EdgeKind, GraphFacts, Module, ModuleFacts, ModulePath


class ModuleGraph:
    """Module dependency graph of a single crate.

    Edges are keyed by ``(from, to)`` so each pair appears once; a
    declaration edge always wins over a reference edge for the same pair.
    """

    def __init__(self, crate_name: str):
        self.crate_name = crate_name
        self._modules: Dict[ModulePath, Module] = {}
        self._edges: Dict[Tuple[ModulePath, ModulePath], EdgeKind] = {}

    def add_module(self, module: Module):
        """Add a module, replacing any module already stored at the same path."""
        self._modules[module.path] = module

    def add_edge(self, from_path: ModulePath, to_path: ModulePath, kind: EdgeKind):
        """Add an edge from one module to another, ignoring self-edges."""
        if from_path == to_path:
            return
        key = (from_path, to_path)
        existing = self._edges.get(key)
        if existing is None or kind.precedence > existing.precedence:
            self._edges[key] = kind

    def modules(self) -> Iterator[Module]:
        return iter(self._modules.values())

    def module_paths(self) -> Set[ModulePath]:
        return set(self._modules)

    def get_module(self, path: ModulePath) -> Optional[Module]:
        return self._modules.get(path)

    def edges(self) -> Iterator[Tuple[ModulePath, ModulePath, EdgeKind]]:
        """Iterate over all edges as ``(from, to, kind)`` tuples."""
        for (from_path, to_path), kind in self._edges.items():
            yield from_path, to_path, kind

    def edge_kind(self, from_path: ModulePath, to_path: ModulePath) -> Optional[EdgeKind]:
        return self._edges.get((from_path, to_path))

    def exclude_tests_modules(self):
        """Remove every `tests` module and each edge touching one."""
        for path in [p for p in self._modules if p.is_tests_module()]:
            del self._modules[path]
        self._edges = {
            (from_path, to_path): kind
            for (from_path, to_path), kind in self._edges.items()
            if not from_path.is_tests_module() and not to_path.is_tests_module()
        }

    def to_facts(self) -> GraphFacts:
        """Serializable snapshot, ordered the same way as the Mermaid output."""
        modules = sorted(self._modules.values(), key=lambda m: m.path.as_str())
        edges = sorted(self.edges(), key=lambda e: (e[0].as_str(), e[1].as_str(), e[2].value))
        return GraphFacts(
            crate_name=self.crate_name,
            modules=[
                ModuleFacts(path=m.path.as_str(), source_file=m.source_file, kind=m.kind)
                for m in modules
            ],
            edges=[
                EdgeFacts(from_module=f.as_str(), to_module=t.as_str(), kind=k)
                for f, t, k in edges
            ],
        )
