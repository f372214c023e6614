import pytest
from pydantic import ValidationError

from dgmod.model import EdgeKind, ModulePath


def test_crate_root_renders_as_crate():
	root = ModulePath.crate_root()
	assert root.as_str() == "crate"
	assert str(root) == "crate"
	assert root.is_root()
	assert root.segments == ()


def test_child_of_root_has_one_segment():
	alpha = ModulePath.crate_root().child("alpha")
	assert alpha.segments == ("alpha",)
	assert alpha.as_str() == "alpha"
	assert alpha.child("delta").as_str() == "alpha::delta"


def test_parent():
	delta = ModulePath.parse("alpha::delta")
	assert delta.parent() == ModulePath.parse("alpha")
	assert delta.parent().parent() == ModulePath.crate_root()
	assert ModulePath.crate_root().parent() is None


def test_paths_are_structural_values():
	a = ModulePath.crate_root().child("a").child("b")
	b = ModulePath.parse("a::b")
	assert a == b
	assert hash(a) == hash(b)
	assert len({a, b}) == 1
	with pytest.raises(ValidationError):
		a.segments = ("c",)


def test_parse_round_trips_display():
	for text in ["crate", "a", "a::b::c"]:
		assert ModulePath.parse(text).as_str() == text


def test_is_tests_module():
	assert ModulePath.parse("tests").is_tests_module()
	assert ModulePath.parse("a::tests").is_tests_module()
	assert not ModulePath.parse("tests::helpers").is_tests_module()
	assert not ModulePath.parse("a::my_tests").is_tests_module()
	assert not ModulePath.crate_root().is_tests_module()


def test_declaration_outranks_reference():
	assert EdgeKind.DECLARATION.precedence > EdgeKind.REFERENCE.precedence
