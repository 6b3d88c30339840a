"""Tests for the first-time deployment workflow."""

import pytest

from fleet.exceptions import ExternalCommandFailure, IoError, ProbeError
from fleet.models.workflow import DeployState
from fleet.services.deploy_workflow import DeploymentWorkflow

from conftest import UPGRADE_AUTHORITY

NOT_FOUND = "Error: Unable to find the account"


def not_deployed(runner):
    runner.on("solana program show", returncode=1, stderr=NOT_FOUND)
    runner.on("solana program show", stdout="Program Id: escrow")
    return runner


class TestDeployHappyPath:
    def test_command_sequence(self, workspace_root, make_workspace, runner, console):
        workspace = make_workspace(workspace_root)
        not_deployed(runner)

        result = DeploymentWorkflow(workspace, runner, console=console).run()

        assert result.state is DeployState.DONE
        assert result.is_success
        assert runner.names == [
            "solana program show",
            "solana program deploy",
            "solana program set-upgrade-authority",
            "solana program show",
        ]
        assert result.history == [
            DeployState.START,
            DeployState.ALREADY_DEPLOYED_CHECK,
            DeployState.DEPLOYING,
            DeployState.AUTHORITY_SET,
            DeployState.ARTIFACTS_COPIED,
            DeployState.DONE,
        ]

    def test_deploy_arguments(self, workspace_root, make_workspace, runner, console):
        workspace = make_workspace(workspace_root)
        not_deployed(runner)

        DeploymentWorkflow(workspace, runner, console=console).run()

        deploy_args = runner.find("solana program deploy")[0]["args"]
        assert deploy_args == [
            "program",
            "deploy",
            str(workspace.program_paths.bin),
            "--keypair",
            str(workspace.deployer_path),
            "--program-id",
            str(workspace.program_paths.id),
            "--url",
            "https://api.devnet.solana.com",
        ]

        authority_args = runner.find("solana program set-upgrade-authority")[0]["args"]
        assert authority_args[2] == workspace.program_key
        assert authority_args[authority_args.index("--new-upgrade-authority") + 1] == UPGRADE_AUTHORITY
        assert authority_args[authority_args.index("--keypair") + 1] == str(workspace.deployer_path)

    def test_artifacts_archived(self, workspace_root, make_workspace, runner, console):
        workspace = make_workspace(workspace_root)
        not_deployed(runner)

        DeploymentWorkflow(workspace, runner, console=console).run()

        artifacts = workspace_root / "artifacts" / "devnet" / "escrow" / "1.2.0"
        assert workspace.artifact_paths.root == artifacts
        assert workspace.artifact_paths.exists()
        assert (artifacts / "program.so").read_bytes() == workspace.program_paths.bin.read_bytes()

    def test_commands_run_in_workspace_root(self, workspace_root, make_workspace, runner, console):
        workspace = make_workspace(workspace_root)
        not_deployed(runner)

        DeploymentWorkflow(workspace, runner, console=console).run()

        assert {call["cwd"] for call in runner.calls} == {workspace_root}


class TestDeployWithIdl:
    def test_idl_steps(self, anchor_root, make_workspace, runner, console):
        workspace = make_workspace(anchor_root)
        not_deployed(runner)

        result = DeploymentWorkflow(workspace, runner, console=console).run()

        assert runner.names == [
            "solana program show",
            "solana program deploy",
            "solana program set-upgrade-authority",
            "solana program show",
            "anchor idl init",
            "anchor idl set-authority",
        ]
        assert DeployState.IDL_INITIALIZED in result.history
        assert DeployState.IDL_AUTHORITY_SET in result.history
        assert workspace.artifact_paths.idl.is_file()

    def test_idl_arguments(self, anchor_root, make_workspace, runner, console):
        workspace = make_workspace(anchor_root)
        not_deployed(runner)

        DeploymentWorkflow(workspace, runner, console=console).run()

        init_args = runner.find("anchor idl init")[0]["args"]
        assert init_args[2] == workspace.program_key
        assert init_args[init_args.index("--filepath") + 1] == str(workspace.program_paths.idl)
        assert init_args[init_args.index("--provider.cluster") + 1] == "devnet"
        assert init_args[init_args.index("--provider.wallet") + 1] == str(workspace.deployer_path)

        authority_args = runner.find("anchor idl set-authority")[0]["args"]
        assert authority_args[authority_args.index("--new-authority") + 1] == UPGRADE_AUTHORITY


class TestAlreadyDeployed:
    def test_short_circuits(self, workspace_root, make_workspace, runner, console):
        workspace = make_workspace(workspace_root)
        runner.on("solana program show", stdout="Program Id: escrow")

        result = DeploymentWorkflow(workspace, runner, console=console).run()

        assert result.state is DeployState.ALREADY_DEPLOYED
        assert result.is_success
        assert "fleet upgrade" in result.notice
        assert runner.names == ["solana program show"]
        assert not workspace.artifact_paths.root.exists()


class TestDeployFailures:
    def test_deploy_failure_aborts(self, workspace_root, make_workspace, runner, console):
        workspace = make_workspace(workspace_root)
        runner.on("solana program show", returncode=1, stderr=NOT_FOUND)
        runner.on("solana program deploy", returncode=1, stderr="insufficient funds")
        workflow = DeploymentWorkflow(workspace, runner, console=console)

        with pytest.raises(ExternalCommandFailure) as exc_info:
            workflow.run()

        assert exc_info.value.returncode == 1
        assert "insufficient funds" in exc_info.value.message
        assert workflow.state is DeployState.FAILED
        assert runner.names == ["solana program show", "solana program deploy"]
        assert not workspace.artifact_paths.root.exists()

    def test_authority_failure_explains_partial_state(
        self, workspace_root, make_workspace, runner, console
    ):
        workspace = make_workspace(workspace_root)
        runner.on("solana program show", returncode=1, stderr=NOT_FOUND)
        runner.on("solana program set-upgrade-authority", returncode=1)
        workflow = DeploymentWorkflow(workspace, runner, console=console)

        with pytest.raises(ExternalCommandFailure) as exc_info:
            workflow.run()

        assert "still owned by the deployer key" in exc_info.value.context
        assert workflow.history[-2] is DeployState.AUTHORITY_SET
        assert workflow.state is DeployState.FAILED

    def test_missing_solana_binary(self, workspace_root, make_workspace, runner, console):
        workspace = make_workspace(workspace_root)
        runner.on("solana program show", raises=FileNotFoundError("solana"))

        with pytest.raises(ProbeError):
            DeploymentWorkflow(workspace, runner, console=console).run()
        assert "solana program deploy" not in runner.names

    def test_archive_failure_is_reported(self, workspace_root, make_workspace, runner, console):
        workspace = make_workspace(workspace_root)
        not_deployed(runner)
        workspace.program_paths.bin.unlink()

        with pytest.raises(IoError) as exc_info:
            DeploymentWorkflow(workspace, runner, console=console).run()
        assert "live on devnet" in exc_info.value.context

    def test_status_query_failure_after_deploy_is_a_warning(
        self, workspace_root, make_workspace, runner, console
    ):
        workspace = make_workspace(workspace_root)
        runner.on("solana program show", returncode=1, stderr=NOT_FOUND)
        runner.on("solana program show", raises=FileNotFoundError("solana"))

        result = DeploymentWorkflow(workspace, runner, console=console).run()

        assert result.state is DeployState.DONE
        assert "was deployed but its status could not be shown" in console.file.getvalue()
        assert workspace.artifact_paths.exists()
