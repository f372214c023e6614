"""Cargo workspace detection through `cargo metadata`."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from typing import Any, Dict, List

from pydantic import BaseModel

from .errors import WorkspaceMetadataError


logger = logging.getLogger(__name__)


class CrateMember(BaseModel):
	name: str
	# Directory holding the member's Cargo.toml
	path: str


def run_cargo_metadata(path: str, cargo: str = "cargo") -> Dict[str, Any]:
	"""Run ``cargo metadata`` for the manifest in ``path`` and decode its JSON."""
	manifest = os.path.join(path, "Cargo.toml")
	command = [cargo, "metadata", "--format-version", "1", "--no-deps", "--manifest-path", manifest]
	try:
		result = subprocess.run(command, capture_output=True, text=True)
	except OSError as e:
		raise WorkspaceMetadataError(f"could not run {cargo}: {e}") from e

	if result.returncode != 0:
		stderr = result.stderr.strip().splitlines()
		reason = stderr[-1] if stderr else f"exit status {result.returncode}"
		raise WorkspaceMetadataError(reason)

	try:
		return json.loads(result.stdout)
	except json.JSONDecodeError as e:
		raise WorkspaceMetadataError(f"invalid metadata output: {e}") from e


def detect_workspace(path: str, cargo: str = "cargo") -> List[CrateMember]:
	"""List workspace members in the order cargo reports them."""
	metadata = run_cargo_metadata(path, cargo)
	packages = {p["id"]: p for p in metadata.get("packages", [])}

	members: List[CrateMember] = []
	for package_id in metadata.get("workspace_members", []):
		package = packages.get(package_id)
		if package is None:
			continue
		members.append(
			CrateMember(
				name=package["name"],
				path=os.path.dirname(package["manifest_path"]),
			)
		)
	logger.debug("workspace at %s has %d members", path, len(members))
	return members


def is_workspace(path: str, cargo: str = "cargo") -> bool:
	return len(detect_workspace(path, cargo)) > 1
