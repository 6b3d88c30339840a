"""Command runner for external tool invocations."""

import shlex
import subprocess
from pathlib import Path
from typing import Optional, Protocol, Sequence

from rich.live import Live
from rich.markup import escape
from rich.padding import Padding
from rich.spinner import Spinner
from rich.text import Text

from fleet.logger import DeployLogger, console
from fleet.models.results import ExecutionResult


class CommandRunner(Protocol):
    """Runs one external program to completion."""

    def run(
        self,
        program: str,
        args: Sequence[str],
        cwd: Optional[Path] = None,
        interactive: bool = False,
    ) -> ExecutionResult:
        ...


class SubprocessRunner:
    """
    Runs commands with subprocess, blocking until they exit.

    Non-interactive commands have stdout/stderr captured and written to the
    log file; a spinner is shown unless verbose. Interactive commands (a
    hardware wallet prompting for approval) inherit the terminal.

    OSError from a program that cannot be started propagates to the caller.
    """

    def __init__(self, logger: Optional[DeployLogger] = None, verbose: bool = False):
        self.logger = logger
        self.verbose = verbose

    def run(
        self,
        program: str,
        args: Sequence[str],
        cwd: Optional[Path] = None,
        interactive: bool = False,
    ) -> ExecutionResult:
        cmd = [program, *[str(a) for a in args]]
        cmd_string = shlex.join(cmd)

        if self.logger:
            self.logger.log_command(cmd_string)

        if interactive:
            result = subprocess.run(cmd, cwd=cwd)
            return ExecutionResult(returncode=result.returncode, command=cmd_string)

        if self.verbose:
            result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
        else:
            spinner = Spinner("dots", text=f"[cyan]{escape(cmd_string)}[/cyan]")
            with Live(Padding(spinner, (0, 0, 0, 2)), console=console, refresh_per_second=10) as live:
                result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)

                if result.returncode == 0:
                    mark = Text("  ✓ ", style="dim")
                else:
                    mark = Text("  ✗ ", style="red")
                mark.append(cmd_string, style="dim")
                live.update(mark)

        if self.logger:
            self.logger.log_output(result.stdout, "stdout")
            self.logger.log_output(result.stderr, "stderr")
            if result.returncode != 0:
                self.logger.log(f"Exit code: {result.returncode}", "ERROR")

        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            command=cmd_string,
        )
