"""
Workspace Models

Dataclass models describing one deploy/upgrade invocation: the target
network, where the build outputs live and where a version is archived.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class NetworkConfig:
    """Resolved target network."""

    name: str
    url: str
    upgrade_authority: str
    builtin: bool = True
    cluster_override: Optional[str] = None

    @property
    def cluster(self) -> str:
        """Value passed to anchor as --provider.cluster."""
        if self.cluster_override:
            return self.cluster_override
        return self.name if self.builtin else self.url

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ProgramPaths:
    """Latest local build output of a program."""

    bin: Path
    id: Path
    idl: Path


@dataclass(frozen=True)
class ArtifactPaths:
    """Version-addressed archive of a program's build output."""

    root: Path
    bin: Path
    id: Path
    idl: Optional[Path] = None

    def files(self) -> list[Path]:
        """Archived files tracked for this version."""
        return [p for p in (self.bin, self.id, self.idl) if p is not None]

    def exists(self) -> bool:
        """True when every tracked archive file is present."""
        return all(p.is_file() for p in self.files())


@dataclass(frozen=True)
class Workspace:
    """Execution context for a single deploy or upgrade."""

    root: Path
    program: str
    version: str
    network: NetworkConfig
    program_key: str
    program_paths: ProgramPaths
    artifact_paths: ArtifactPaths
    deployer_path: Path
    has_idl_tool: bool = False

    def __repr__(self) -> str:
        return (
            f"Workspace(program={self.program}, version={self.version}, "
            f"network={self.network.name})"
        )
