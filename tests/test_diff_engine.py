"""Tests for the diff engine."""

import pytest

from deploy_changed_functions.api.exceptions import DiffError
from deploy_changed_functions.core.diff_engine import DiffEngine
from deploy_changed_functions.utils.process_utils import CommandResult

from .fakes import FakeRunner, requires_diff, write_files


class TestBuildCommand:
    """Tests for DiffEngine.build_command."""

    def test_command_with_excludes(self):
        engine = DiffEngine()
        command = engine.build_command("src", "/live", "/snap", ["node_modules", "", "*.log"])

        assert command == [
            "diff", "-Nqr", "-w", "-B",
            "-x", "node_modules", "-x", "*.log",
            "/live/src", "/snap/src",
        ]

    def test_custom_diff_bin(self):
        engine = DiffEngine(diff_bin="/usr/bin/diff")
        assert engine.build_command("a", "/l", "/s")[0] == "/usr/bin/diff"


class TestParseOutput:
    """Tests for DiffEngine.parse_output."""

    def test_files_differ(self):
        output = (
            "Files /live/src/sendEmail/index.js and /snap/src/sendEmail/index.js differ\n"
            "Files /live/src/cleanup/a.js and /snap/src/cleanup/a.js differ\n"
        )
        assert DiffEngine.parse_output(output, "/live", "/snap") == [
            "src/sendEmail/index.js",
            "src/cleanup/a.js",
        ]

    def test_type_mismatch(self):
        output = (
            "File /live/src/report is a directory while file /snap/src/report "
            "is a regular file\n"
        )
        assert DiffEngine.parse_output(output, "/live", "/snap") == ["src/report"]

    def test_only_in_either_root(self):
        output = (
            "Only in /live/src/newFn: index.js\n"
            "Only in /snap/src: oldFn\n"
        )
        assert DiffEngine.parse_output(output, "/live", "/snap") == [
            "src/newFn/index.js",
            "src/oldFn",
        ]

    def test_blank_output(self):
        assert DiffEngine.parse_output("", "/live", "/snap") == []
        assert DiffEngine.parse_output("\n\n", "/live", "/snap") == []

    def test_unknown_line_raises(self):
        with pytest.raises(DiffError):
            DiffEngine.parse_output("Binary soup\n", "/live", "/snap")

    def test_roots_with_regex_characters(self):
        output = "Files /tmp/a+b/src/x/i.js and /tmp/c(d)/src/x/i.js differ\n"
        assert DiffEngine.parse_output(output, "/tmp/a+b", "/tmp/c(d)") == ["src/x/i.js"]


class TestDiffWithFakeRunner:
    """Tests for exit code handling."""

    def test_identical_and_different(self):
        runner = FakeRunner({"diff": [
            CommandResult(exit_code=0),
            CommandResult(exit_code=1, stdout="Files /l/b and /s/b differ\n"),
        ]}, passthrough=())
        engine = DiffEngine(runner)

        outputs = engine.diff(["a", "b"], "/l", "/s")

        assert len(outputs) == 2
        assert DiffEngine.changed_paths(["a", "b"], outputs) == ["b"]

    def test_trouble_exit_code_raises(self):
        runner = FakeRunner({"diff": [
            CommandResult(exit_code=2, stderr="diff: /l/a: Permission denied"),
        ]}, passthrough=())
        engine = DiffEngine(runner)

        with pytest.raises(DiffError) as exc_info:
            engine.diff(["a"], "/l", "/s")

        assert 'Error checking for diff for path "a"' in str(exc_info.value)
        assert "Permission denied" in str(exc_info.value)

    def test_difference_without_output_raises(self):
        runner = FakeRunner({"diff": [CommandResult(exit_code=1)]}, passthrough=())
        with pytest.raises(DiffError):
            DiffEngine(runner).diff(["a"], "/l", "/s")

    def test_missing_executable(self):
        engine = DiffEngine(diff_bin="definitely-not-a-diff-binary")
        with pytest.raises(DiffError) as exc_info:
            engine.diff(["src"], "/l", "/s")
        assert "diff executable not found" in str(exc_info.value)

    def test_no_paths(self):
        runner = FakeRunner(passthrough=())
        assert DiffEngine(runner).diff([], "/l", "/s") == []
        assert runner.calls == []


@requires_diff
class TestDiffWithRealTool:
    """Tests running the real diff binary against temporary trees."""

    @pytest.fixture
    def trees(self, tmp_path):
        files = {
            "src/sendEmail/index.js": "a();\nb();\n",
            "src/cleanup/index.js": "c();\n",
            "package.json": "{}\n",
        }
        live = tmp_path / "live"
        snap = tmp_path / "snap"
        write_files(live, files)
        write_files(snap, files)
        return live, snap

    def test_identical_trees(self, trees):
        live, snap = trees
        engine = DiffEngine()

        assert engine.diff(["src", "package.json"], live, snap) == ["", ""]
        assert engine.changed_files(["src"], live, snap) == []

    def test_modified_file(self, trees):
        live, snap = trees
        (live / "src/sendEmail/index.js").write_text("a();\nchanged();\n")

        assert DiffEngine().changed_files(["src"], live, snap) == ["src/sendEmail/index.js"]

    def test_whitespace_ignored(self, trees):
        live, snap = trees
        (live / "src/sendEmail/index.js").write_text("a( );\nb();   \n")

        assert DiffEngine().changed_files(["src"], live, snap) == []

    def test_new_file_is_reported(self, trees):
        live, snap = trees
        write_files(live, {"src/newFn/index.js": "n();\n"})

        assert DiffEngine().changed_files(["src"], live, snap) == ["src/newFn/index.js"]

    def test_deleted_file_is_reported(self, trees):
        live, snap = trees
        (live / "src/cleanup/index.js").unlink()

        assert DiffEngine().changed_files(["src"], live, snap) == ["src/cleanup/index.js"]

    def test_excluded_paths_ignored(self, trees):
        live, snap = trees
        write_files(live, {"src/sendEmail/node_modules/dep.js": "x\n"})

        engine = DiffEngine()
        assert engine.changed_files(["src"], live, snap, ["node_modules"]) == []
        assert engine.changed_files(["src"], live, snap) == [
            "src/sendEmail/node_modules/dep.js"
        ]

    def test_global_file_change(self, trees):
        live, snap = trees
        (live / "package.json").write_text('{"dependencies": {}}\n')

        engine = DiffEngine()
        outputs = engine.diff(["package.json"], live, snap)
        assert DiffEngine.changed_paths(["package.json"], outputs) == ["package.json"]
