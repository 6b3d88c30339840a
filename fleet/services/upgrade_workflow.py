"""
Upgrade workflow

Start → PreconditionsChecked → BufferWritten → BufferAuthoritySet
      → Switched → IdlUpdated → ArtifactsCopied → Done

The new binary is staged in a fresh buffer account whose authority is
handed to the network's upgrade authority, which then signs the switch.
Everything before the switch can be abandoned safely; the old binary keeps
running. The switch is the only step that changes live code and it is
never rolled back.
"""

from pathlib import Path
from typing import Callable, ContextManager, Optional

from rich.console import Console
from rich.markup import escape

from fleet.constants import MESSAGE_IDL_FINALIZE, UPGRADE_AUTHORITY_ENV
from fleet.core.artifact_layout import ArtifactArchiver
from fleet.core.keypair import Keypair, staging_keypair
from fleet.exceptions import (
    DuplicateVersionError,
    ExternalCommandFailure,
    FleetError,
    IoError,
    MissingCredentialError,
    ProgramNotDeployedError,
    ProbeError,
)
from fleet.logger import DeployLogger
from fleet.models.workflow import UpgradeState, WorkflowResult
from fleet.models.workspace import Workspace
from fleet.services.command_runner import CommandRunner
from fleet.services.program_probe import ProgramStateProbe
from fleet.services.toolchain import AnchorCli, SolanaCli

STEP_TITLES = {
    UpgradeState.PRECONDITIONS_CHECKED: "Checking preconditions",
    UpgradeState.BUFFER_WRITTEN: "Writing buffer",
    UpgradeState.BUFFER_AUTHORITY_SET: "Setting buffer authority",
    UpgradeState.SWITCHED: "Switching to new buffer (please connect your wallet)",
    UpgradeState.IDL_UPDATED: "Uploading new IDL",
    UpgradeState.ARTIFACTS_COPIED: "Copying artifacts",
}

KeypairFactory = Callable[[], ContextManager[tuple[Keypair, Path]]]


class UpgradeWorkflow:
    """Sequences the external commands of an in-place upgrade."""

    def __init__(
        self,
        workspace: Workspace,
        runner: CommandRunner,
        upgrade_authority_keypair: Optional[str],
        logger: Optional[DeployLogger] = None,
        console: Optional[Console] = None,
        archiver: Optional[ArtifactArchiver] = None,
        keypair_factory: KeypairFactory = staging_keypair,
        echo: bool = True,
    ):
        self.workspace = workspace
        self.upgrade_authority_keypair = upgrade_authority_keypair
        self.logger = logger
        self.console = console or Console()
        self.solana = SolanaCli(runner, workspace.network, cwd=workspace.root)
        self.anchor = AnchorCli(
            runner, workspace.network, wallet=workspace.deployer_path, cwd=workspace.root
        )
        self.probe = ProgramStateProbe(self.solana, self.console, logger=logger, echo=echo)
        self.archiver = archiver or ArtifactArchiver(logger)
        self.keypair_factory = keypair_factory
        self.state = UpgradeState.START
        self.history: list[UpgradeState] = [UpgradeState.START]
        self.buffer_address: Optional[str] = None

    def _enter(self, state: UpgradeState) -> None:
        self.state = state
        self.history.append(state)
        if self.logger and state in STEP_TITLES:
            self.logger.step(STEP_TITLES[state])

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

    def run(self) -> WorkflowResult:
        """
        Run the workflow to a terminal state.

        Raises:
            FleetError: The failing step's error; the workflow ends in Failed
        """
        try:
            self.check_preconditions()
            with self.keypair_factory() as (buffer_keypair, buffer_path):
                self._stage_and_switch(buffer_keypair, buffer_path)
            self._finalize()
        except FleetError:
            self._enter(UpgradeState.FAILED)
            raise

        self._enter(UpgradeState.DONE)
        return WorkflowResult(
            state=self.state,
            history=list(self.history),
            buffer_address=self.buffer_address,
        )

    def check_preconditions(self) -> None:
        """
        Verify the upgrade may start. Runs no mutating command.

        Raises:
            MissingCredentialError: No upgrade-authority keypair supplied
            DuplicateVersionError: This version was already archived
            ProgramNotDeployedError: The program does not exist on chain
        """
        ws = self.workspace

        if not (self.upgrade_authority_keypair or "").strip():
            raise MissingCredentialError(UPGRADE_AUTHORITY_ENV)

        if ws.artifact_paths.exists():
            raise DuplicateVersionError(ws.program, ws.version, str(ws.artifact_paths.root))

        if not self.probe.show_program(ws.program_key):
            raise ProgramNotDeployedError(ws.program, ws.program_key, ws.network.name)

        self._enter(UpgradeState.PRECONDITIONS_CHECKED)
        self._success("Upgrade authority, version and program verified")

    def _stage_and_switch(self, buffer_keypair: Keypair, buffer_path: Path) -> None:
        ws = self.workspace
        key = ws.program_key

        self._enter(UpgradeState.BUFFER_WRITTEN)
        self.buffer_address = buffer_keypair.address
        if self.logger:
            self.logger.log(f"Buffer Pubkey: {self.buffer_address}")
        reported = self.solana.write_buffer(ws.program_paths.bin, ws.deployer_path, buffer_path)
        if reported:
            self.buffer_address = reported
        self._success(f"Buffer {self.buffer_address} written")

        self._enter(UpgradeState.BUFFER_AUTHORITY_SET)
        self.solana.set_buffer_authority(
            self.buffer_address, ws.deployer_path, ws.network.upgrade_authority
        )
        self._success(f"Buffer authority set to {ws.network.upgrade_authority}")

        self._enter(UpgradeState.SWITCHED)
        self.solana.deploy_from_buffer(
            self.buffer_address,
            str(self.upgrade_authority_keypair),
            key,
            context=(
                f"The switch of {key} may or may not have been applied. Verify manually: "
                f"solana program show {key} --url {ws.network.url}"
            ),
        )
        self._success(f"Program {key} now runs buffer {self.buffer_address}")
        self._show_live_program(key, "switched")

    def _finalize(self) -> None:
        ws = self.workspace
        key = ws.program_key

        if ws.has_idl_tool:
            self._enter(UpgradeState.IDL_UPDATED)
            try:
                idl_buffer = self.anchor.idl_write_buffer(key, ws.program_paths.idl)
            except ExternalCommandFailure as e:
                self._warn(f"IDL upload failed, the program upgrade is unaffected: {e.message}")
            else:
                if idl_buffer:
                    self._success(f"IDL buffer {idl_buffer} written")
                self._warn(
                    MESSAGE_IDL_FINALIZE.format(program_key=key, buffer=idl_buffer or "<BUFFER>")
                )

        self._enter(UpgradeState.ARTIFACTS_COPIED)
        try:
            self.archiver.copy(ws.program_paths, ws.artifact_paths)
        except IoError as e:
            raise IoError(
                e.message,
                context=f"Upgrade of {key} is live on {ws.network.name}; only local archiving failed",
            ) from e
        self._success(f"Artifacts copied to {ws.artifact_paths.root}")
