"""Build command - build all programs"""

import click

from fleet.base import WorkspaceCommand
from fleet.core.workspace import has_anchor
from fleet.services.toolchain import AnchorCli, CargoCli


class BuildCommand(WorkspaceCommand):
    """Builds every program with anchor, or cargo build-bpf without it."""

    def execute(self) -> None:
        logger = self.init_logger(self.root, "workspace", "build")

        if has_anchor(self.root):
            logger.step("Anchor found! Running `anchor build -v`")
            AnchorCli(self.runner, cwd=self.root).build()
        else:
            logger.step("Anchor.toml not found in workspace root. Running `cargo build-bpf`")
            CargoCli(self.runner, cwd=self.root).build_bpf()

        logger.success("Build complete")


@click.command(name="build")
@click.option("--verbose", is_flag=True, help="Verbose output")
def build(verbose):
    """
    Build all programs (uses Anchor when Anchor.toml is present)

    Examples:
        fleet build
    """
    BuildCommand(verbose=verbose).run()
