"""
Workspace Command Base Class

Base class for commands that operate inside a Fleet workspace.
"""

from pathlib import Path
from typing import Optional

from .base_command import BaseCommand
from fleet.core.config_loader import FleetConfig, discover
from fleet.exceptions import ConfigurationError
from fleet.services.command_runner import CommandRunner, SubprocessRunner


class WorkspaceCommand(BaseCommand):
    """
    Base class for workspace commands.

    Provides:
    - Fleet.yml discovery before execution
    - A command runner wired to the command's logger
    """

    def __init__(
        self,
        verbose: bool = False,
        cwd: Optional[Path] = None,
        runner: Optional[CommandRunner] = None,
    ):
        super().__init__(verbose=verbose, cwd=cwd)
        self.config: Optional[FleetConfig] = None
        self.config_path: Optional[Path] = None
        self.root: Optional[Path] = None
        self._runner = runner

    def load_workspace(self) -> None:
        """
        Discover Fleet.yml from the working directory.

        Raises:
            SystemExit: If no valid workspace configuration is found
        """
        try:
            self.config, self.config_path, self.root = discover(self.cwd)
        except ConfigurationError as e:
            self.exit_with_error(str(e))

    @property
    def runner(self) -> CommandRunner:
        """Injected runner, or a subprocess runner logging to this command's log."""
        if self._runner is None:
            self._runner = SubprocessRunner(self.logger, verbose=self.verbose)
        return self._runner

    def run(self, **kwargs) -> None:
        """
        Run command with workspace discovery.

        Args:
            **kwargs: Command arguments
        """
        self.load_workspace()
        super().run(**kwargs)
