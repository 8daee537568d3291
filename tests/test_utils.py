"""Tests for async and process helpers."""

import asyncio
import shutil

import pytest

from deploy_changed_functions.api.exceptions import CommandTimeoutError
from deploy_changed_functions.utils import (
    CommandRunner,
    format_command,
    gather_fail_fast,
    run_async,
)


class TestGatherFailFast:
    """Tests for gather_fail_fast."""

    def test_results_keep_input_order(self):
        async def value(v, delay):
            await asyncio.sleep(delay)
            return v

        results = run_async(gather_fail_fast([value(1, 0.03), value(2, 0), value(3, 0.01)]))
        assert results == [1, 2, 3]

    def test_first_failure_cancels_rest(self):
        finished = []

        async def slow():
            await asyncio.sleep(5)
            finished.append("slow")

        async def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            run_async(gather_fail_fast([slow(), broken()]))

        assert finished == []

    def test_empty(self):
        assert run_async(gather_fail_fast([])) == []

    def test_run_async_inside_running_loop(self):
        async def inner():
            return 42

        async def outer():
            return run_async(inner())

        assert asyncio.run(outer()) == 42


class TestCommandRunner:
    """Tests for CommandRunner."""

    def test_format_command_quotes(self):
        assert format_command(["firebase", "deploy", "--only", "a b"]) == (
            "firebase deploy --only 'a b'"
        )

    @pytest.mark.skipif(shutil.which("sh") is None, reason="sh not installed")
    def test_captures_output_and_env(self, tmp_path):
        runner = CommandRunner()
        result = run_async(runner.run(
            ["sh", "-c", 'echo "$DCF_VALUE"; pwd; echo err >&2; exit 3'],
            env={"DCF_VALUE": "hello"},
            cwd=tmp_path,
        ))

        assert result.exit_code == 3
        assert not result.ok
        assert result.stdout.splitlines()[0] == "hello"
        assert result.stdout.splitlines()[1] == str(tmp_path.resolve())
        assert result.stderr.strip() == "err"

    @pytest.mark.skipif(shutil.which("sleep") is None, reason="sleep not installed")
    def test_timeout(self):
        runner = CommandRunner(timeout=0.1)
        with pytest.raises(CommandTimeoutError) as exc_info:
            run_async(runner.run(["sleep", "5"]))
        assert "sleep 5" in str(exc_info.value)

    def test_missing_program(self):
        with pytest.raises(FileNotFoundError):
            run_async(CommandRunner().run(["definitely-not-a-program-xyz"]))
