"""Workspace construction for a single deploy or upgrade"""

from pathlib import Path
from typing import Optional

from fleet.constants import ANCHOR_MANIFEST
from fleet.core import version_resolver
from fleet.core.artifact_layout import ArtifactLayout
from fleet.core.config_loader import FleetConfig, discover
from fleet.core.keypair import read_address
from fleet.core.network_registry import NetworkRegistry
from fleet.models.workspace import Workspace


def has_anchor(root: Path) -> bool:
    """Anchor projects publish an IDL next to the binary."""
    return (Path(root) / ANCHOR_MANIFEST).is_file()


def init_workspace(
    program: str,
    version: Optional[str],
    network: str,
    config: Optional[FleetConfig] = None,
    root: Optional[Path] = None,
) -> Workspace:
    """
    Resolve everything a workflow needs before any command runs.

    Args:
        program: Program name as built into target/deploy/<program>.so
        version: Explicit version, or None to read the program's Cargo.toml
        network: Network name
        config: Parsed Fleet.yml (discovered from cwd if omitted)
        root: Workspace root (required together with config)

    Returns:
        Read-only Workspace
    """
    if config is None or root is None:
        config, _, root = discover(root)
    root = Path(root)

    network_config = NetworkRegistry(config.networks).resolve(network)
    idl_tool = has_anchor(root)

    layout = ArtifactLayout(
        workspace_root=root,
        artifacts_root=config.artifacts_root(root) / network_config.name,
        track_idl=idl_tool,
    )
    program_paths = layout.program_paths(program)
    deploy_version = version_resolver.resolve(version, layout.manifest_path(program))

    return Workspace(
        root=root,
        program=program,
        version=deploy_version,
        network=network_config,
        program_key=read_address(program_paths.id),
        program_paths=program_paths,
        artifact_paths=layout.artifact_paths(program, deploy_version),
        deployer_path=config.deployer_path(root),
        has_idl_tool=idl_tool,
    )
