"""
First-time deployment workflow

Start → AlreadyDeployedCheck → Deploying → AuthoritySet
      → IdlInitialized → IdlAuthoritySet → ArtifactsCopied → Done

Each step runs only after the previous one succeeded. Nothing is retried
and nothing on chain is rolled back; errors raised after the deploy carry
the manual remediation in their context.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from fleet.constants import MESSAGE_ALREADY_DEPLOYED
from fleet.core.artifact_layout import ArtifactArchiver
from fleet.exceptions import FleetError, IoError, ProbeError
from fleet.logger import DeployLogger
from fleet.models.workflow import DeployState, WorkflowResult
from fleet.models.workspace import Workspace
from fleet.services.command_runner import CommandRunner
from fleet.services.program_probe import ProgramStateProbe
from fleet.services.toolchain import AnchorCli, SolanaCli

STEP_TITLES = {
    DeployState.ALREADY_DEPLOYED_CHECK: "Checking for existing program",
    DeployState.DEPLOYING: "Deploying program",
    DeployState.AUTHORITY_SET: "Setting upgrade authority",
    DeployState.IDL_INITIALIZED: "Initializing IDL",
    DeployState.IDL_AUTHORITY_SET: "Setting IDL authority",
    DeployState.ARTIFACTS_COPIED: "Copying artifacts",
}


class DeploymentWorkflow:
    """Sequences the external commands of a first deployment."""

    def __init__(
        self,
        workspace: Workspace,
        runner: CommandRunner,
        logger: Optional[DeployLogger] = None,
        console: Optional[Console] = None,
        archiver: Optional[ArtifactArchiver] = None,
        echo: bool = True,
    ):
        self.workspace = workspace
        self.logger = logger
        self.console = console or Console()
        self.solana = SolanaCli(runner, workspace.network, cwd=workspace.root)
        self.anchor = AnchorCli(
            runner, workspace.network, wallet=workspace.deployer_path, cwd=workspace.root
        )
        self.probe = ProgramStateProbe(self.solana, self.console, logger=logger, echo=echo)
        self.archiver = archiver or ArtifactArchiver(logger)
        self.state = DeployState.START
        self.history: list[DeployState] = [DeployState.START]

    def _enter(self, state: DeployState) -> None:
        self.state = state
        self.history.append(state)
        if self.logger and state in STEP_TITLES:
            self.logger.step(STEP_TITLES[state])

    def _finish(self, state: DeployState, notice: Optional[str] = None) -> WorkflowResult:
        self._enter(state)
        return WorkflowResult(state=state, history=list(self.history), notice=notice)

    def run(self) -> WorkflowResult:
        """
        Run the workflow to a terminal state.

        Returns:
            WorkflowResult in Done or AlreadyDeployed

        Raises:
            FleetError: The failing step's error; the workflow ends in Failed
        """
        try:
            return self._run()
        except FleetError:
            self._enter(DeployState.FAILED)
            raise

    def _run(self) -> WorkflowResult:
        ws = self.workspace
        key = ws.program_key

        self._enter(DeployState.ALREADY_DEPLOYED_CHECK)
        if self.probe.show_program(key):
            if self.logger:
                self.logger.log(MESSAGE_ALREADY_DEPLOYED, "WARNING")
            return self._finish(DeployState.ALREADY_DEPLOYED, notice=MESSAGE_ALREADY_DEPLOYED)

        self._enter(DeployState.DEPLOYING)
        self.solana.deploy(ws.program_paths.bin, ws.deployer_path, ws.program_paths.id)
        self._success(f"Program {key} deployed")

        self._enter(DeployState.AUTHORITY_SET)
        self.solana.set_upgrade_authority(
            key,
            ws.deployer_path,
            ws.network.upgrade_authority,
            context=(
                f"Program {key} is deployed but still owned by the deployer key. Run: "
                f"solana program set-upgrade-authority {key} "
                f"--new-upgrade-authority {ws.network.upgrade_authority} --url {ws.network.url}"
            ),
        )
        self._success(f"Upgrade authority set to {ws.network.upgrade_authority}")
        self._show_live_program(key, "deployed")

        if ws.has_idl_tool:
            self._enter(DeployState.IDL_INITIALIZED)
            self.anchor.idl_init(
                key,
                ws.program_paths.idl,
                context=f"Program {key} is deployed; the IDL was not published",
            )
            self._success("IDL initialized")

            self._enter(DeployState.IDL_AUTHORITY_SET)
            self.anchor.idl_set_authority(
                key,
                ws.network.upgrade_authority,
                context=(
                    f"IDL for {key} is still owned by the deployer key. Run: anchor idl "
                    f"set-authority --program-id {key} --new-authority {ws.network.upgrade_authority}"
                ),
            )
            self._success("IDL authority set")

        self._enter(DeployState.ARTIFACTS_COPIED)
        try:
            self.archiver.copy(ws.program_paths, ws.artifact_paths)
        except IoError as e:
            raise IoError(
                e.message,
                context=f"Program {key} is live on {ws.network.name}; only local archiving failed",
            ) from e
        self._success(f"Artifacts copied to {ws.artifact_paths.root}")

        return self._finish(DeployState.DONE)

    def _success(self, message: str) -> None:
        if self.logger:
            self.logger.success(message)

    def _warn(self, message: str) -> None:
        if self.logger:
            self.logger.warning(message)
        else:
            self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def _show_live_program(self, key: str, change: str) -> None:
        try:
            self.probe.show_program(key)
        except ProbeError as e:
            self._warn(f"Program {key} was {change} but its status could not be shown: {e.message}")
