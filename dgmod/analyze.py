from __future__ import annotations

import logging
import os
from typing import AbstractSet, Dict, List, Tuple

from .errors import NoCrateRootError
from .graph import ModuleGraph
from .model import EdgeKind, Module, ModuleKind, ModulePath
from .resolver import find_crate_root, is_internal_path, resolve_module_file, resolve_use_target
from .rust_parse import ParsedFile, imports, parse_rust_file, submodule_declarations


logger = logging.getLogger(__name__)

ParsedUnit = Tuple[ModulePath, ParsedFile]


def analyze_crate(crate_dir: str, crate_name: str) -> ModuleGraph:
	"""Build the module dependency graph of the crate rooted at ``crate_dir``.

	Modules are discovered by following `mod` declarations from the crate
	root; `use` statements are then resolved against the discovered modules.
	Raises an :class:`~dgmod.errors.AnalyzeError` subclass when the root,
	a declared module file, or any parsed file is missing or invalid.
	"""
	root_file = find_crate_root(crate_dir)
	if root_file is None:
		raise NoCrateRootError(crate_dir)

	graph = ModuleGraph(crate_name)
	root_path = ModulePath.crate_root()
	graph.add_module(Module(path=root_path, source_file=root_file, kind=ModuleKind.ROOT))

	logger.debug("analyzing crate %s from %s", crate_name, root_file)
	root_parsed = parse_rust_file(root_file)
	parsed_units: List[ParsedUnit] = [(root_path, root_parsed)]
	visited: Dict[str, ParsedFile] = {os.path.realpath(root_file): root_parsed}
	_discover_modules(root_parsed, root_path, graph, parsed_units, visited)

	known_modules = graph.module_paths()
	for module_path, parsed in parsed_units:
		_add_use_edges(module_path, parsed, known_modules, graph)

	return graph


def _discover_modules(
	parsed: ParsedFile,
	parent_path: ModulePath,
	graph: ModuleGraph,
	parsed_units: List[ParsedUnit],
	visited: Dict[str, ParsedFile],
) -> None:
	parent_dir = os.path.dirname(parsed.path)

	for declaration in submodule_declarations(parsed):
		child_path = parent_path.child(declaration.name)
		graph.add_edge(parent_path, child_path, EdgeKind.DECLARATION)

		if declaration.body is not None:
			graph.add_module(Module(path=child_path, source_file=parsed.path, kind=ModuleKind.INLINE))
			parsed_units.append((child_path, declaration.body))
			_discover_modules(declaration.body, child_path, graph, parsed_units, visited)
			continue

		child_file = resolve_module_file(parent_dir, declaration.name, declaration.path_override)
		graph.add_module(Module(path=child_path, source_file=child_file, kind=ModuleKind.EXTERNAL))

		canonical = os.path.realpath(child_file)
		shared = visited.get(canonical)
		if shared is not None:
			# Reached again through a #[path] override: its imports still count for
			# this module, but its declarations were already walked.
			logger.warning("module %s reuses already analyzed file %s", child_path, child_file)
			parsed_units.append((child_path, shared))
			continue

		logger.debug("module %s -> %s", child_path, child_file)
		child_parsed = parse_rust_file(child_file)
		visited[canonical] = child_parsed
		parsed_units.append((child_path, child_parsed))
		_discover_modules(child_parsed, child_path, graph, parsed_units, visited)


def _add_use_edges(
	module_path: ModulePath,
	parsed: ParsedFile,
	known_modules: AbstractSet[ModulePath],
	graph: ModuleGraph,
) -> None:
	for segments in imports(parsed):
		if not is_internal_path(segments):
			continue
		target = resolve_use_target(segments, module_path, known_modules)
		if target is not None:
			graph.add_edge(module_path, target, EdgeKind.REFERENCE)
