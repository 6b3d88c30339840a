"""
Toolchain wrappers

Argument lists for every external command the workflows invoke. Each
wrapper runs through a CommandRunner and raises ExternalCommandFailure on
a non-zero exit.
"""

import json
import re
from pathlib import Path
from typing import Optional, Sequence

from fleet.constants import ANCHOR_BIN, CARGO_BIN, SOLANA_BIN
from fleet.exceptions import ExternalCommandFailure
from fleet.models.results import ExecutionResult
from fleet.models.workspace import NetworkConfig
from fleet.services.command_runner import CommandRunner

IDL_BUFFER_PATTERN = re.compile(r"Idl buffer created:\s*(\w+)")


class Tool:
    """Base wrapper around one external binary."""

    binary = ""

    def __init__(self, runner: CommandRunner, cwd: Optional[Path] = None):
        self.runner = runner
        self.cwd = cwd

    def run(self, args: Sequence[str], interactive: bool = False) -> ExecutionResult:
        """Run without checking the exit code. OSError propagates."""
        return self.runner.run(self.binary, list(args), cwd=self.cwd, interactive=interactive)

    def exec(
        self,
        args: Sequence[str],
        context: Optional[str] = None,
        interactive: bool = False,
    ) -> ExecutionResult:
        """
        Run and require a zero exit code.

        Raises:
            ExternalCommandFailure: Non-zero exit or binary could not start
        """
        args = [str(a) for a in args]
        try:
            result = self.run(args, interactive=interactive)
        except OSError as e:
            raise ExternalCommandFailure(self.binary, args, None, str(e), context=context)

        if result.is_failure:
            raise ExternalCommandFailure(
                self.binary, args, result.returncode, result.stderr, context=context
            )
        return result


class SolanaCli(Tool):
    """`solana program ...` against one network."""

    binary = SOLANA_BIN

    def __init__(self, runner: CommandRunner, network: NetworkConfig, cwd: Optional[Path] = None):
        super().__init__(runner, cwd)
        self.network = network

    def _program(self, *args) -> list[str]:
        return ["program", *[str(a) for a in args], "--url", self.network.url]

    def show(self, program_id: str) -> ExecutionResult:
        return self.run(self._program("show", program_id))

    def deploy(self, binary: Path, deployer: Path, program_id: Path) -> ExecutionResult:
        return self.exec(
            self._program("deploy", binary, "--keypair", deployer, "--program-id", program_id)
        )

    def set_upgrade_authority(
        self,
        program_id: str,
        deployer: Path,
        new_authority: str,
        context: Optional[str] = None,
    ) -> ExecutionResult:
        return self.exec(
            self._program(
                "set-upgrade-authority",
                program_id,
                "--keypair",
                deployer,
                "--new-upgrade-authority",
                new_authority,
                "--skip-new-upgrade-authority-signer-check",
            ),
            context=context,
        )

    def write_buffer(self, binary: Path, deployer: Path, buffer_keypair: Path) -> Optional[str]:
        """Stage program bytes; returns the buffer address reported by the CLI."""
        result = self.exec(
            self._program(
                "write-buffer",
                binary,
                "--keypair",
                deployer,
                "--output",
                "json",
                "--buffer",
                buffer_keypair,
            )
        )
        try:
            return json.loads(result.stdout).get("buffer")
        except (ValueError, AttributeError):
            return None

    def set_buffer_authority(
        self, buffer: str, deployer: Path, new_authority: str
    ) -> ExecutionResult:
        return self.exec(
            self._program(
                "set-buffer-authority",
                buffer,
                "--keypair",
                deployer,
                "--new-buffer-authority",
                new_authority,
            )
        )

    def deploy_from_buffer(
        self,
        buffer: str,
        upgrade_authority: str,
        program_id: str,
        context: Optional[str] = None,
    ) -> ExecutionResult:
        return self.exec(
            self._program(
                "deploy",
                "--buffer",
                buffer,
                "--keypair",
                upgrade_authority,
                "--program-id",
                program_id,
            ),
            context=context,
            interactive=True,
        )


class AnchorCli(Tool):
    """`anchor ...` commands."""

    binary = ANCHOR_BIN

    def __init__(
        self,
        runner: CommandRunner,
        network: Optional[NetworkConfig] = None,
        wallet: Optional[Path] = None,
        cwd: Optional[Path] = None,
    ):
        super().__init__(runner, cwd)
        self.network = network
        self.wallet = wallet

    def _provider(self) -> list[str]:
        return [
            "--provider.cluster",
            self.network.cluster,
            "--provider.wallet",
            str(self.wallet),
        ]

    def build(self) -> ExecutionResult:
        return self.exec(["build", "-v"])

    def idl_init(self, program_id: str, idl_path: Path, context: Optional[str] = None) -> ExecutionResult:
        return self.exec(
            ["idl", "init", program_id, "--filepath", idl_path, *self._provider()],
            context=context,
        )

    def idl_set_authority(
        self, program_id: str, new_authority: str, context: Optional[str] = None
    ) -> ExecutionResult:
        return self.exec(
            [
                "idl",
                "set-authority",
                "--program-id",
                program_id,
                "--new-authority",
                new_authority,
                *self._provider(),
            ],
            context=context,
        )

    def idl_write_buffer(self, program_id: str, idl_path: Path) -> Optional[str]:
        """Stage an IDL; returns the IDL buffer address when anchor reports one."""
        result = self.exec(
            ["idl", "write-buffer", program_id, "--filepath", idl_path, *self._provider()]
        )
        match = IDL_BUFFER_PATTERN.search(result.output)
        return match.group(1) if match else None


class CargoCli(Tool):
    """`cargo ...` commands."""

    binary = CARGO_BIN

    def build_bpf(self) -> ExecutionResult:
        return self.exec(["build-bpf"])
