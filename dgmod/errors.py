"""Errors raised while analyzing a crate.

Everything the analyzer raises derives from :class:`AnalyzeError`, so callers
that only need to report a failure can catch that one type.
"""

from __future__ import annotations

from typing import List, Optional


class AnalyzeError(Exception):
	pass


class SourceIOError(AnalyzeError):
	"""A source file could not be opened or read."""

	def __init__(self, path: str, reason: Optional[str] = None) -> None:
		self.path = path
		message = f"Failed to read {path}"
		if reason:
			message = f"{message}: {reason}"
		super().__init__(message)


class SourceSyntaxError(AnalyzeError):
	"""A source file is not valid Rust."""

	def __init__(self, path: str, line: int) -> None:
		self.path = path
		self.line = line
		super().__init__(f"Parse error in {path} at line {line}")


class NoCrateRootError(AnalyzeError):
	def __init__(self, path: str) -> None:
		self.path = path
		super().__init__(f"No crate root found at {path}. Expected src/lib.rs or src/main.rs")


class SubmoduleNotFoundError(AnalyzeError):
	"""A `mod name;` declaration matched none of the probed files."""

	def __init__(self, name: str, probed_paths: List[str]) -> None:
		self.name = name
		self.probed_paths = list(probed_paths)
		super().__init__(f"Module '{name}' not found. Expected: {', '.join(self.probed_paths)}")


class WorkspaceMetadataError(AnalyzeError):
	def __init__(self, reason: str) -> None:
		self.reason = reason
		super().__init__(f"Failed to read workspace metadata: {reason}")
