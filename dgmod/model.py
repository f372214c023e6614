from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


CRATE = "crate"


class ModulePath(BaseModel):
	"""Path of a module inside a crate: ``crate``, ``alpha`` or ``alpha::delta``."""

	model_config = ConfigDict(frozen=True)

	# The crate root is implicit, so the root path stores no segments.
	segments: Tuple[str, ...] = ()

	@classmethod
	def crate_root(cls) -> "ModulePath":
		return cls()

	@classmethod
	def parse(cls, text: str) -> "ModulePath":
		if text == CRATE:
			return cls()
		return cls(segments=tuple(text.split("::")))

	def child(self, name: str) -> "ModulePath":
		return ModulePath(segments=self.segments + (name,))

	def parent(self) -> Optional["ModulePath"]:
		if self.is_root():
			return None
		return ModulePath(segments=self.segments[:-1])

	def is_root(self) -> bool:
		return not self.segments

	def is_tests_module(self) -> bool:
		return bool(self.segments) and self.segments[-1] == "tests"

	def as_str(self) -> str:
		if self.is_root():
			return CRATE
		return "::".join(self.segments)

	def __str__(self) -> str:
		return self.as_str()

	def __repr__(self) -> str:
		return f"ModulePath({self.as_str()!r})"


class ModuleKind(str, Enum):
	ROOT = "root"
	INLINE = "inline"
	EXTERNAL = "external"


class EdgeKind(str, Enum):
	# `mod foo;` in the parent
	DECLARATION = "declaration"
	# `use crate::foo::Bar;`
	REFERENCE = "reference"

	@property
	def precedence(self) -> int:
		return 1 if self is EdgeKind.DECLARATION else 0


class Module(BaseModel):
	path: ModulePath
	source_file: str
	kind: ModuleKind


class ModuleFacts(BaseModel):
	path: str
	source_file: str
	kind: ModuleKind


class EdgeFacts(BaseModel):
	from_module: str
	to_module: str
	kind: EdgeKind


class GraphFacts(BaseModel):
	crate_name: str
	modules: List[ModuleFacts] = []
	edges: List[EdgeFacts] = []


class AnalyzeResult(BaseModel):
	facts: GraphFacts
	mermaid: str
	summary: str
