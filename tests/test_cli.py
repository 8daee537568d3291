"""Tests for the command line interface."""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from deploy_changed_functions.api.exceptions import DeployError
from deploy_changed_functions.cli import cli
from deploy_changed_functions.models import (
    DeployResult,
    DeployState,
    DeployTarget,
    OperationStatus,
    RunPlan,
    RunResult,
)

RUN_SERVICE = "deploy_changed_functions.cli.commands.run.RunService"
PLAN_RUN_SERVICE = "deploy_changed_functions.cli.commands.plan.RunService"


@pytest.fixture
def runner(monkeypatch):
    for name in ("GITHUB_ACTIONS", "GITHUB_OUTPUT", "GITHUB_WORKSPACE", "FIREBASE_TOKEN",
                 "INPUT_PROJECT-ID", "INPUT_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


def deployed_result():
    result = RunResult(target=DeployTarget.subset(["sendEmail"]))
    result.attempts.append(DeployResult(exit_code=0))
    result.transition(DeployState.SUCCESS)
    result.complete(OperationStatus.SUCCESS)
    result.message = "Deployed sendEmail"
    result.cache_updated = True
    return result


class TestMainCommand:
    """Tests for the command group."""

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "run" in result.output
        assert "plan" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestRunCommand:
    """Tests for the run command."""

    def test_run_passes_inputs(self, runner, tmp_path):
        with patch(RUN_SERVICE) as service_class:
            service_class.return_value.run.return_value = deployed_result()

            result = runner.invoke(cli, [
                "run", "--workspace", str(tmp_path),
                "--project-id", "my-proj", "--token", "secret",
                "--global-paths", "package.json", "--skip-deploy", "false",
            ])

        assert result.exit_code == 0, result.output
        settings = service_class.call_args[0][0]
        assert settings.project_id == "my-proj"
        assert settings.global_paths == ["package.json"]
        assert settings.skip_deploy is False
        assert "Deployed sendEmail" in result.output

    def test_inputs_from_environment(self, runner, tmp_path):
        with patch(RUN_SERVICE) as service_class:
            service_class.return_value.run.return_value = deployed_result()

            result = runner.invoke(cli, ["run"], env={
                "GITHUB_WORKSPACE": str(tmp_path),
                "INPUT_PROJECT-ID": "env-proj",
                "FIREBASE_TOKEN": "env-token",
                "INPUT_CACHE-FOLDER": "env-cache",
            })

        assert result.exit_code == 0, result.output
        settings = service_class.call_args[0][0]
        assert settings.project_id == "env-proj"
        assert settings.token == "env-token"
        assert settings.cache_folder == "env-cache"
        assert settings.workspace == tmp_path.resolve()

    def test_missing_project_id(self, runner, tmp_path):
        result = runner.invoke(cli, ["run", "--workspace", str(tmp_path), "--token", "t"])

        assert result.exit_code == 1
        assert 'Missing required input "project-id"' in result.output

    def test_deploy_failure_reports_error(self, runner, tmp_path):
        with patch(RUN_SERVICE) as service_class:
            service_class.return_value.run.side_effect = DeployError(
                "Deploy failed with exit code 1", "Error: quota"
            )

            result = runner.invoke(cli, [
                "run", "--workspace", str(tmp_path), "--project-id", "p", "--token", "t",
            ], env={"GITHUB_ACTIONS": "true"})

        assert result.exit_code == 1
        assert "Deploy failed with exit code 1" in result.output
        assert "::error::Deploy failed with exit code 1%0AError: quota" in result.output

    def test_writes_github_outputs(self, runner, tmp_path):
        output_file = tmp_path / "github_output"
        with patch(RUN_SERVICE) as service_class:
            service_class.return_value.run.return_value = deployed_result()

            result = runner.invoke(cli, [
                "run", "--workspace", str(tmp_path), "--project-id", "p", "--token", "t",
            ], env={"GITHUB_OUTPUT": str(output_file)})

        assert result.exit_code == 0, result.output
        assert output_file.read_text().splitlines() == [
            "targets=functions:sendEmail",
            "deployed=true",
        ]

    def test_invalid_policy_choice(self, runner, tmp_path):
        result = runner.invoke(cli, [
            "run", "--workspace", str(tmp_path), "--project-id", "p", "--token", "t",
            "--on-missing-cache", "panic",
        ])
        assert result.exit_code == 2


class TestPlanCommand:
    """Tests for the plan command."""

    @pytest.fixture
    def run_plan(self):
        return RunPlan(
            target=DeployTarget.subset(["cleanup"]),
            changed_files=["src/cleanup/index.js"],
        )

    def test_plan_table(self, runner, tmp_path, run_plan):
        with patch(PLAN_RUN_SERVICE) as service_class:
            service_class.return_value.plan.return_value = run_plan

            result = runner.invoke(cli, [
                "plan", "--workspace", str(tmp_path), "--project-id", "p", "--token", "t",
            ])

        assert result.exit_code == 0, result.output
        assert "src/cleanup/index.js" in result.output
        assert "cleanup" in result.output
        service_class.return_value.run.assert_not_called()

    def test_plan_json(self, runner, tmp_path, run_plan):
        with patch(PLAN_RUN_SERVICE) as service_class:
            service_class.return_value = MagicMock()
            service_class.return_value.plan.return_value = run_plan

            result = runner.invoke(cli, [
                "plan", "--json", "--workspace", str(tmp_path),
                "--project-id", "p", "--token", "t",
            ])

        assert result.exit_code == 0, result.output
        assert '"target": "cleanup"' in result.output
        assert '"snapshot_found": true' in result.output
        assert '"global_changed": false' in result.output

    def test_plan_table_shows_forced_deploy(self, runner, tmp_path):
        forced = RunPlan(
            target=DeployTarget.all_functions(force=True),
            changed_global_paths=["package.json"],
        )
        with patch(PLAN_RUN_SERVICE) as service_class:
            service_class.return_value.plan.return_value = forced

            result = runner.invoke(cli, [
                "plan", "--workspace", str(tmp_path), "--project-id", "p", "--token", "t",
            ])

        assert result.exit_code == 0, result.output
        assert "Full deploy forced" in result.output
        assert "yes" in result.output
