"""Module dependency graphs for Rust crates and Cargo workspaces.

Modules:
- model.py: Module paths, module and edge kinds, serializable facts.
- rust_parse.py: tree-sitter parsing of `mod` declarations and `use` paths.
- resolver.py: Module file lookup and `use` path resolution.
- graph.py: The deduplicated module graph.
- analyze.py: Crate analysis from the root file down.
- mermaid.py: Mermaid flowchart output.
- workspace.py: Workspace member detection via `cargo metadata`.
- summarize.py: Deterministic textual summary of a graph.
"""

from .analyze import analyze_crate
from .graph import ModuleGraph

__all__ = [
	"analyze_crate",
	"ModuleGraph",
	"model",
	"rust_parse",
	"resolver",
	"graph",
	"mermaid",
	"workspace",
	"summarize",
]
