from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser, Tree

from .errors import SourceIOError, SourceSyntaxError


RUST_LANGUAGE = Language(tree_sitter_rust.language())

_COMMENTS = {"line_comment", "block_comment"}

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", "'": "'", '"': '"'}


class ParsedFile:
	"""The items of a Rust source file, or of an inline module body inside one."""

	def __init__(self, path: str, tree: Tree, node: Node) -> None:
		self.path = path
		# Nodes are only valid while their tree is alive.
		self.tree = tree
		self.node = node

	def items(self) -> Iterator[Node]:
		for child in self.node.named_children:
			if child.type not in _COMMENTS:
				yield child


@dataclass
class ModDeclaration:
	name: str
	body: Optional[ParsedFile] = None
	path_override: Optional[str] = None

	@property
	def is_inline(self) -> bool:
		return self.body is not None


def _text(node: Node) -> str:
	return node.text.decode("utf-8")


def _first_error(root: Node) -> Optional[Node]:
	if not root.has_error:
		return None
	stack = [root]
	while stack:
		node = stack.pop()
		if node.type == "ERROR" or node.is_missing:
			return node
		stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
	return root


def parse_rust_file(path: str) -> ParsedFile:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except (OSError, UnicodeDecodeError) as e:
		raise SourceIOError(path, getattr(e, "strerror", None) or str(e)) from e

	tree = Parser(RUST_LANGUAGE).parse(text.encode("utf-8"))
	error = _first_error(tree.root_node)
	if error is not None:
		raise SourceSyntaxError(path, error.start_point[0] + 1)
	return ParsedFile(path, tree, tree.root_node)


def _unescape(sequence: str) -> str:
	body = sequence[1:]
	if body in _ESCAPES:
		return _ESCAPES[body]
	if body.startswith("u{"):
		return chr(int(body[2:-1].replace("_", ""), 16))
	if body.startswith("x"):
		return chr(int(body[1:], 16))
	# Line continuation; the caller also drops the next line's leading whitespace.
	return ""


def _string_value(node: Node) -> Optional[str]:
	if node.type not in ("string_literal", "raw_string_literal"):
		return None
	parts: List[str] = []
	continued = False
	for part in node.named_children:
		if part.type == "string_content":
			text = _text(part)
			parts.append(text.lstrip() if continued else text)
			continued = False
		elif part.type == "escape_sequence":
			sequence = _text(part)
			parts.append(_unescape(sequence))
			continued = sequence[1:].startswith(("\n", "\r\n"))
	return "".join(parts)


def _path_attribute_value(item: Node) -> Optional[str]:
	# #[path = "foo/bar.rs"]
	attribute = next((c for c in item.named_children if c.type == "attribute"), None)
	if attribute is None or not attribute.named_children:
		return None
	name = attribute.named_children[0]
	if name.type != "identifier" or _text(name) != "path":
		return None
	value = attribute.child_by_field_name("value")
	if value is None:
		return None
	return _string_value(value)


def _path_override(mod_item: Node) -> Optional[str]:
	found: Optional[str] = None
	sibling = mod_item.prev_named_sibling
	while sibling is not None and (sibling.type == "attribute_item" or sibling.type in _COMMENTS):
		if sibling.type == "attribute_item":
			value = _path_attribute_value(sibling)
			if value is not None:
				# Walking backwards, so the last hit is the first attribute.
				found = value
		sibling = sibling.prev_named_sibling
	return found


def submodule_declarations(parsed: ParsedFile) -> List[ModDeclaration]:
	declarations: List[ModDeclaration] = []
	for item in parsed.items():
		if item.type != "mod_item":
			continue
		body_node = item.child_by_field_name("body")
		body = ParsedFile(parsed.path, parsed.tree, body_node) if body_node is not None else None
		declarations.append(
			ModDeclaration(
				name=_text(item.child_by_field_name("name")),
				body=body,
				path_override=_path_override(item),
			)
		)
	return declarations


def _path_segments(node: Node) -> List[str]:
	if node.type == "scoped_identifier":
		path = node.child_by_field_name("path")
		head = _path_segments(path) if path is not None else []
		return head + [_text(node.child_by_field_name("name"))]
	return [_text(node)]


def _walk_use_tree(node: Node, prefix: List[str], results: List[List[str]]) -> None:
	kind = node.type
	if kind in _COMMENTS:
		return
	if kind == "use_as_clause":
		# The alias does not change which module is depended on.
		results.append(prefix + _path_segments(node.child_by_field_name("path")))
	elif kind == "use_list":
		for item in node.named_children:
			_walk_use_tree(item, prefix, results)
	elif kind == "scoped_use_list":
		path = node.child_by_field_name("path")
		scoped = prefix + _path_segments(path) if path is not None else prefix
		_walk_use_tree(node.child_by_field_name("list"), scoped, results)
	elif kind == "use_wildcard":
		paths = [c for c in node.named_children if c.type not in _COMMENTS]
		results.append(prefix + _path_segments(paths[0]) if paths else list(prefix))
	else:
		results.append(prefix + _path_segments(node))


def imports(parsed: ParsedFile) -> List[List[str]]:
	results: List[List[str]] = []
	for item in parsed.items():
		if item.type != "use_declaration":
			continue
		argument = item.child_by_field_name("argument")
		if argument is not None:
			_walk_use_tree(argument, [], results)
	return results
