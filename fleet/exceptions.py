"""
Fleet Exception Hierarchy

Every error raised by the deployment core derives from FleetError.
The optional context carries operator guidance (what to run next, what
was left half-done on chain).
"""

from typing import Optional, Sequence


class FleetError(Exception):
    """Base exception for all Fleet errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(FleetError):
    """Raised when workspace configuration is invalid or missing."""

    pass


class ManifestReadError(FleetError):
    """Raised when a program manifest cannot be read for its version."""

    pass


class UnknownNetworkError(ConfigurationError):
    """Raised when a network name is neither built-in nor configured."""

    def __init__(self, network: str, available: Sequence[str]):
        self.network = network
        self.available = list(available)
        message = f"Unknown network '{network}'"
        context = f"Available networks: {', '.join(self.available)}"
        super().__init__(message, context)


class KeypairError(FleetError):
    """Raised when a keypair file is missing or malformed."""

    pass


class IoError(FleetError):
    """Raised when a filesystem operation fails."""

    pass


class ProbeError(FleetError):
    """Raised when the program query command cannot be invoked at all."""

    pass


class ExternalCommandFailure(FleetError):
    """Raised when an external command exits non-zero or cannot start."""

    def __init__(
        self,
        program: str,
        args: Sequence[str],
        returncode: Optional[int],
        stderr: str = "",
        context: Optional[str] = None,
    ):
        self.program = program
        self.command_args = list(args)
        self.returncode = returncode
        self.stderr = stderr
        command = " ".join([program, *self.command_args])
        if returncode is None:
            message = f"Could not run `{command}`"
        else:
            message = f"`{command}` failed with exit code {returncode}"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message, context)


class DuplicateVersionError(FleetError):
    """Raised when artifacts for the requested version already exist."""

    def __init__(self, program: str, version: str, path: str):
        self.program = program
        self.version = version
        self.path = path
        message = f"Artifacts for {program} v{version} already exist at {path}"
        context = "Bump the version in the program's Cargo.toml or pass --version"
        super().__init__(message, context)


class MissingCredentialError(FleetError):
    """Raised when the upgrade-authority credential is not supplied."""

    def __init__(self, setting: str = "UPGRADE_AUTHORITY_KEYPAIR"):
        self.setting = setting
        message = "Upgrade authority keypair is required for upgrades"
        context = f"Set {setting} or pass --upgrade-authority-keypair"
        super().__init__(message, context)


class ProgramNotDeployedError(FleetError):
    """Raised when an upgrade targets a program that does not exist on chain."""

    def __init__(self, program: str, address: str, network: str):
        self.program = program
        self.address = address
        self.network = network
        message = f"Program '{program}' ({address}) does not exist on {network}"
        context = f"Run: fleet deploy -p {program} -n {network}"
        super().__init__(message, context)
