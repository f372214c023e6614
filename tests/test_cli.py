import pytest

import cli
from dgmod.errors import WorkspaceMetadataError
from dgmod.workspace import CrateMember


@pytest.fixture
def no_workspace(monkeypatch):
	def detect(path, cargo="cargo"):
		raise WorkspaceMetadataError("cargo not available")

	monkeypatch.setattr(cli, "detect_workspace", detect)


def test_single_crate(sample_crate, no_workspace, capsys):
	assert cli.main([str(sample_crate)]) == 0
	out = capsys.readouterr().out
	assert out.startswith("## sample\n\n```mermaid\nflowchart TD\n")
	assert out.endswith("```\n")
	assert "    gamma -.-> crate\n" in out


def test_exclude_tests(make_crate, no_workspace, capsys):
	crate = make_crate({"src/lib.rs": "mod a;\n#[cfg(test)]\nmod tests {\n    use super::a;\n}\n", "src/a.rs": ""})
	assert cli.main([str(crate)]) == 0
	assert "tests" in capsys.readouterr().out

	assert cli.main([str(crate), "--exclude-tests"]) == 0
	assert "tests" not in capsys.readouterr().out


def test_error_is_one_line_on_stderr(tmp_path, no_workspace, capsys):
	assert cli.main([str(tmp_path)]) == 1
	captured = capsys.readouterr()
	assert captured.out == ""
	assert captured.err.startswith("error: No crate root found at ")
	assert captured.err.count("\n") == 1


def test_workspace_members(make_crate, monkeypatch, capsys):
	one = make_crate({"src/lib.rs": "mod x;\n", "src/x.rs": ""}, name="one")
	two = make_crate({"src/main.rs": "fn main() {}\n"}, name="two")
	members = [CrateMember(name="one", path=str(one)), CrateMember(name="two", path=str(two))]
	monkeypatch.setattr(cli, "detect_workspace", lambda path, cargo="cargo": members)

	assert cli.main(["ws"]) == 0
	out = capsys.readouterr().out
	assert out.index("## one") < out.index("## two")
	assert "```\n\n## two" in out


def test_workspace_member_failure_prints_nothing(make_crate, monkeypatch, capsys):
	good = make_crate({"src/lib.rs": ""}, name="good")
	bad = make_crate({"src/lib.rs": "mod missing;\n"}, name="bad")
	members = [CrateMember(name="good", path=str(good)), CrateMember(name="bad", path=str(bad))]
	monkeypatch.setattr(cli, "detect_workspace", lambda path, cargo="cargo": members)

	assert cli.main(["ws"]) == 1
	captured = capsys.readouterr()
	assert captured.out == ""
	assert captured.err.startswith("error: Module 'missing' not found.")


def test_single_member_uses_reported_name(make_crate, monkeypatch, capsys):
	crate = make_crate({"src/lib.rs": ""}, name="dir-name")
	monkeypatch.setattr(cli, "detect_workspace", lambda path, cargo="cargo": [CrateMember(name="real-name", path=str(crate))])
	assert cli.main([str(crate)]) == 0
	assert capsys.readouterr().out.startswith("## real-name\n")


def test_exclude_tests_from_environment(make_crate, no_workspace, monkeypatch, capsys):
	crate = make_crate({"src/lib.rs": "mod tests {}\n"})
	monkeypatch.setenv("DGMOD_EXCLUDE_TESTS", "1")
	assert cli.main([str(crate)]) == 0
	assert "tests" not in capsys.readouterr().out


def test_unknown_log_level_option(sample_crate, no_workspace, capsys):
	with pytest.raises(SystemExit) as excinfo:
		cli.main([str(sample_crate), "--log-level", "chatty"])
	assert excinfo.value.code == 2
	assert "invalid choice" in capsys.readouterr().err


def test_log_level_option_is_case_insensitive(sample_crate, no_workspace, capsys):
	assert cli.main([str(sample_crate), "--log-level", "debug"]) == 0
	assert capsys.readouterr().out.startswith("## sample\n")


def test_unknown_log_level_in_environment(sample_crate, no_workspace, monkeypatch, capsys):
	monkeypatch.setenv("DGMOD_LOG_LEVEL", "chatty")
	assert cli.main([str(sample_crate)]) == 1
	captured = capsys.readouterr()
	assert captured.out == ""
	assert captured.err.startswith("error: invalid DGMOD_LOG_LEVEL: ")
	assert captured.err.count("\n") == 1
