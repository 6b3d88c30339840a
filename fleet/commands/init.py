"""Init command - create Fleet.yml at the Cargo workspace root"""

import click

from fleet.base import BaseCommand
from fleet.constants import CARGO_MANIFEST, CONFIG_FILE_NAME
from fleet.core.config_loader import FleetConfig, save_config


class InitCommand(BaseCommand):
    """Writes a default Fleet.yml."""

    def __init__(self, force: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.force = force

    def execute(self) -> None:
        if not (self.cwd / CARGO_MANIFEST).exists():
            self.exit_with_error(
                f"{CARGO_MANIFEST} does not exist in the current working directory. "
                "Ensure that you are at the Cargo workspace root."
            )

        config_path = self.cwd / CONFIG_FILE_NAME
        if config_path.exists() and not self.force:
            self.exit_with_error(
                f"{CONFIG_FILE_NAME} already exists. Use --force to overwrite it."
            )

        save_config(FleetConfig.default(), config_path)
        self.print_success(f"Initialized {config_path}")
        self.print_dim("Set networks.<name>.upgrade_authority before deploying")


@click.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing Fleet.yml")
def init(force):
    """
    Initialize a new Fleet workspace

    Examples:
        fleet init
        fleet init --force
    """
    InitCommand(force=force).run()
