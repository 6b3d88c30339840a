"""On-chain program state probe."""

from typing import Optional

from rich.console import Console

from fleet.exceptions import ProbeError
from fleet.logger import DeployLogger
from fleet.services.toolchain import SolanaCli


class ProgramStateProbe:
    """Asks the network whether a program account exists."""

    def __init__(
        self,
        solana: SolanaCli,
        console: Optional[Console] = None,
        logger: Optional[DeployLogger] = None,
        echo: bool = True,
    ):
        self.solana = solana
        self.console = console or Console()
        self.logger = logger
        self.echo = echo

    def show_program(self, program_key: str) -> bool:
        """
        Print the program's on-chain status and report whether it exists.

        A program that is not found is a valid False, not an error.

        Raises:
            ProbeError: If the query command could not be started
        """
        try:
            result = self.solana.show(program_key)
        except OSError as e:
            raise ProbeError(
                f"Could not query program {program_key} on {self.solana.network.name}: {e}",
                context="Ensure the solana CLI is installed and on PATH",
            )

        exists = result.is_success
        if self.echo:
            output = result.stdout if exists else result.output
            if output:
                self.console.print(output, markup=False, highlight=False)

        if self.logger:
            state = "found" if exists else "not found"
            self.logger.log(f"Program {program_key} {state} on {self.solana.network.name}")

        return exists
