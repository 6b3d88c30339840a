"""Upgrade command - replace a deployed program through a staging buffer"""

import click

from fleet.base import WorkspaceCommand
from fleet.commands.options import program_options
from fleet.constants import UPGRADE_AUTHORITY_ENV
from fleet.core.workspace import init_workspace
from fleet.exceptions import MissingCredentialError
from fleet.services.upgrade_workflow import UpgradeWorkflow


class UpgradeCommand(WorkspaceCommand):
    """Upgrades a deployed program, signed by the upgrade authority."""

    def __init__(self, program: str, version, network: str, upgrade_authority_keypair, **kwargs):
        super().__init__(**kwargs)
        self.program = program
        self.version = version
        self.network = network
        self.upgrade_authority_keypair = upgrade_authority_keypair

    def run(self, **kwargs) -> None:
        """Refuse to start without an upgrade authority, before reading the workspace."""
        if not (self.upgrade_authority_keypair or "").strip():
            self.fail(MissingCredentialError(UPGRADE_AUTHORITY_ENV))
        super().run(**kwargs)

    def execute(self) -> None:
        workspace = init_workspace(
            self.program, self.version, self.network, config=self.config, root=self.root
        )

        self.show_header(
            title="Upgrade",
            details={
                "Program": workspace.program,
                "Version": workspace.version,
                "Network": workspace.network.name,
                "Address": workspace.program_key,
            },
        )

        logger = self.init_logger(self.root, self.program, "upgrade")
        logger.log(f"Upgrading program {self.program} with version {workspace.version}")

        workflow = UpgradeWorkflow(
            workspace,
            self.runner,
            self.upgrade_authority_keypair,
            logger=logger,
            console=self.console,
            echo=not self.verbose,
        )
        result = workflow.run()

        self.console.print()
        self.print_success(f"Upgrade success! (buffer {result.buffer_address})")


@click.command(name="upgrade")
@program_options
@click.option(
    "--upgrade-authority-keypair",
    envvar=UPGRADE_AUTHORITY_ENV,
    default=None,
    help=f"Keypair that signs the switch to the new buffer [env: {UPGRADE_AUTHORITY_ENV}]",
)
@click.option("--verbose", is_flag=True, help="Verbose output")
def upgrade(program, version, network, upgrade_authority_keypair, verbose):
    """
    Upgrade a deployed program

    \b
    Steps:
    1. Refuse if this version was already archived or the program is missing
    2. Write the new binary to a fresh buffer
    3. Hand buffer authority to the network's upgrade authority
    4. Switch the program to the buffer (signed by the upgrade authority)
    5. Stage the new IDL (Anchor workspaces, finalize manually)
    6. Archive artifacts

    Examples:
        UPGRADE_AUTHORITY_KEYPAIR=usb://ledger fleet upgrade -p escrow
        fleet upgrade -p escrow -n mainnet --upgrade-authority-keypair ~/authority.json
    """
    UpgradeCommand(
        program,
        version,
        network,
        upgrade_authority_keypair,
        verbose=verbose,
    ).run()
