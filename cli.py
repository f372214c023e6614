from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence, Tuple

import uvicorn
from pydantic import ValidationError

from dgmod.analyze import analyze_crate
from dgmod.errors import AnalyzeError, WorkspaceMetadataError
from dgmod.graph import ModuleGraph
from dgmod.mermaid import render_section
from dgmod.settings import LOG_LEVELS, DgmodSettings, load_settings
from dgmod.workspace import detect_workspace


logger = logging.getLogger("dgmod")


def find_targets(path: str, settings: DgmodSettings) -> List[Tuple[str, str]]:
	"""Return ``(crate_dir, crate_name)`` pairs to analyze for ``path``."""
	try:
		members = detect_workspace(path, settings.cargo)
	except WorkspaceMetadataError as e:
		logger.info("%s; analyzing %s as a single crate", e, path)
		members = []

	if members:
		return [(m.path, m.name) for m in members]
	name = os.path.basename(os.path.abspath(path)) or "crate"
	return [(path, name)]


def cmd_analyze(args: argparse.Namespace, settings: DgmodSettings) -> int:
	graphs: List[ModuleGraph] = []
	try:
		for crate_dir, crate_name in find_targets(args.path, settings):
			graph = analyze_crate(crate_dir, crate_name)
			if args.exclude_tests or settings.exclude_tests:
				graph.exclude_tests_modules()
			graphs.append(graph)
	except AnalyzeError as e:
		print(f"error: {e}", file=sys.stderr)
		return 1

	sys.stdout.write("\n".join(render_section(g) for g in graphs))
	return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
	try:
		settings = load_settings()
	except ValidationError as e:
		error = e.errors()[0]
		field = ".".join(str(part) for part in error["loc"])
		print(f"error: invalid DGMOD_{field.upper()}: {error['msg']}", file=sys.stderr)
		return 1

	parser = argparse.ArgumentParser(
		prog="dgmod", description="Generate Mermaid diagrams of Rust module dependencies"
	)
	parser.add_argument("path", nargs="?", default=".", help="Rust crate or workspace to analyze")
	parser.add_argument("--exclude-tests", action="store_true", help="Exclude `tests` modules from the output")
	parser.add_argument(
		"--log-level",
		default=settings.log_level,
		type=str.upper,
		choices=LOG_LEVELS,
		help="Logging level for stderr diagnostics",
	)
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=args.log_level,
		format="%(levelname)s %(name)s: %(message)s",
		stream=sys.stderr,
	)
	return cmd_analyze(args, settings)


def serve_main(argv: Optional[Sequence[str]] = None) -> None:
	parser = argparse.ArgumentParser(prog="dgmod-serve", description="Serve the dgmod HTTP API")
	parser.add_argument("--host", default="127.0.0.1")
	parser.add_argument("--port", type=int, default=8000)
	parser.add_argument("--reload", action="store_true")
	args = parser.parse_args(argv)
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
	sys.exit(main())
