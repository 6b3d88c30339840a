"""Deploy command - first-time deployment of a program"""

import click

from fleet.base import WorkspaceCommand
from fleet.commands.options import program_options
from fleet.core.workspace import init_workspace
from fleet.models.workflow import DeployState
from fleet.services.deploy_workflow import DeploymentWorkflow


class DeployCommand(WorkspaceCommand):
    """Deploys a program that does not exist on the network yet."""

    def __init__(self, program: str, version, network: str, **kwargs):
        super().__init__(**kwargs)
        self.program = program
        self.version = version
        self.network = network

    def execute(self) -> None:
        workspace = init_workspace(
            self.program, self.version, self.network, config=self.config, root=self.root
        )

        self.show_header(
            title="Deploy",
            details={
                "Program": workspace.program,
                "Version": workspace.version,
                "Network": workspace.network.name,
                "Address": workspace.program_key,
            },
        )

        logger = self.init_logger(self.root, self.program, "deploy")
        logger.log(f"Deploying program {self.program} with version {workspace.version}")

        workflow = DeploymentWorkflow(
            workspace,
            self.runner,
            logger=logger,
            console=self.console,
            echo=not self.verbose,
        )
        result = workflow.run()

        if result.state is DeployState.ALREADY_DEPLOYED:
            self.print_warning(result.notice)
            return

        self.console.print()
        self.print_success("Deployment success!")


@click.command(name="deploy")
@program_options
@click.option("--verbose", is_flag=True, help="Verbose output")
def deploy(program, version, network, verbose):
    """
    Deploy a program for the first time

    \b
    Steps:
    1. Check the program does not exist yet
    2. solana program deploy
    3. Hand upgrade authority to the network's upgrade authority
    4. Publish the IDL (Anchor workspaces)
    5. Archive artifacts under artifacts/<network>/<program>/<version>

    Examples:
        fleet deploy -p escrow
        fleet deploy -p escrow -n mainnet -v 1.0.0
    """
    DeployCommand(program, version, network, verbose=verbose).run()
