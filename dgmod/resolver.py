from __future__ import annotations

import os
from typing import AbstractSet, Optional, Sequence

from .errors import SubmoduleNotFoundError
from .model import ModulePath


INTERNAL_PREFIXES = ("crate", "self", "super")

CRATE_ROOT_FILES = ("lib.rs", "main.rs")


def find_crate_root(crate_dir: str) -> Optional[str]:
	"""Return ``src/lib.rs`` or, failing that, ``src/main.rs`` under ``crate_dir``."""
	src_dir = os.path.join(crate_dir, "src")
	for filename in CRATE_ROOT_FILES:
		candidate = os.path.join(src_dir, filename)
		if os.path.isfile(candidate):
			return candidate
	return None


def resolve_module_file(parent_dir: str, mod_name: str, path_override: Optional[str] = None) -> str:
	"""Find the file holding the body of `mod <mod_name>;`.

	A ``#[path]`` override is returned as-is; reading it reports a missing file.
	Otherwise ``<name>.rs`` wins over ``<name>/mod.rs``.
	"""
	if path_override is not None:
		return os.path.join(parent_dir, path_override)

	direct = os.path.join(parent_dir, f"{mod_name}.rs")
	if os.path.isfile(direct):
		return direct

	nested = os.path.join(parent_dir, mod_name, "mod.rs")
	if os.path.isfile(nested):
		return nested

	raise SubmoduleNotFoundError(mod_name, [direct, nested])


def is_internal_path(segments: Sequence[str]) -> bool:
	return bool(segments) and segments[0] in INTERNAL_PREFIXES


def resolve_relative(
	base: ModulePath, segments: Sequence[str], known_modules: AbstractSet[ModulePath]
) -> Optional[ModulePath]:
	# Imports usually name items inside a module, so keep the deepest known prefix.
	current = base
	last_known = base if base in known_modules else None
	for segment in segments:
		current = current.child(segment)
		if current in known_modules:
			last_known = current
	return last_known


def resolve_use_target(
	segments: Sequence[str], current_module: ModulePath, known_modules: AbstractSet[ModulePath]
) -> Optional[ModulePath]:
	"""Map a `use` path to the module it depends on, or None for external crates."""
	if not segments:
		return None

	head = segments[0]
	if head == "crate":
		return resolve_relative(ModulePath.crate_root(), segments[1:], known_modules)
	if head == "self":
		return resolve_relative(current_module, segments[1:], known_modules)
	if head == "super":
		base = current_module.parent()
		remaining = list(segments[1:])
		while base is not None and remaining and remaining[0] == "super":
			base = base.parent()
			remaining = remaining[1:]
		if base is None:
			return None
		return resolve_relative(base, remaining, known_modules)
	return None
