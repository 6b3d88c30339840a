"""
Base Command Class

Abstract base for all Fleet CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from fleet.exceptions import FleetError
from fleet.logger import DeployLogger
from fleet.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling and exit codes
    """

    def __init__(self, verbose: bool = False, cwd: Optional[Path] = None):
        self.verbose = verbose
        self.console = Console()
        self.cwd = Path(cwd or Path.cwd())
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, root: Path, program: str, command_name: str) -> DeployLogger:
        """
        Initialize command logger.

        Args:
            root: Workspace root the logs directory lives under
            program: Program name (use "workspace" for workspace-wide commands)
            command_name: Command name
        """
        self.logger = DeployLogger(root, program, command_name, verbose=self.verbose)
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(
                title=title,
                subtitle=subtitle,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def exit_with_error(self, message: str, code: int = 1) -> None:
        """
        Print error and exit.

        Args:
            message: Error message
            code: Exit code
        """
        self.print_error(message)
        raise SystemExit(code)

    def fail(self, error: FleetError) -> None:
        """Report a Fleet error with its context and exit with status 1."""
        if self.logger:
            self.logger.log_error(error.message, context=error.context)
        else:
            self.print_error(error.message)
            if error.context:
                self.print_dim(f"Context: {error.context}")
        self._show_log_path()
        raise SystemExit(1)

    def _show_log_path(self) -> None:
        if self.logger and self.logger.log_path:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Every failure is printed, recorded in the log file and turned into
        a non-zero exit status.
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.log_error("Operation cancelled by user")
            self._show_log_path()
            raise SystemExit(130)
        except SystemExit:
            raise
        except FleetError as e:
            self.fail(e)
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self._show_log_path()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
