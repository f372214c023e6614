from textwrap import dedent

import pytest


SAMPLE_CRATE = {
	"src/lib.rs": """
		mod alpha;
		mod beta;
		mod gamma;

		pub struct Root;
		""",
	"src/alpha/mod.rs": """
		mod delta;

		pub struct Alpha;
		""",
	"src/alpha/delta.rs": """
		pub fn delta() {}
		""",
	"src/beta.rs": """
		use crate::alpha::Alpha;
		use crate::gamma;
		""",
	"src/gamma.rs": """
		use super::Root;
		""",
}


@pytest.fixture
def make_crate(tmp_path):
	def _make(files, name="sample"):
		root = tmp_path / name
		root.mkdir(parents=True, exist_ok=True)
		for rel_path, code in files.items():
			p = root / rel_path
			p.parent.mkdir(parents=True, exist_ok=True)
			p.write_text(dedent(code))
		return root

	return _make


@pytest.fixture
def sample_crate(make_crate):
	return make_crate(SAMPLE_CRATE)
