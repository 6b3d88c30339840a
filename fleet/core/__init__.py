"""
Fleet Core

Workspace resolution: configuration, networks, versions, artifact paths
and keypairs.
"""

from .config_loader import FleetConfig, NetworkEntry, discover, load_config, save_config
from .network_registry import NetworkRegistry
from .artifact_layout import ArtifactLayout, ArtifactArchiver
from .keypair import Keypair, read_address, staging_keypair
from .workspace import init_workspace, has_anchor

__all__ = [
    "FleetConfig",
    "NetworkEntry",
    "discover",
    "load_config",
    "save_config",
    "NetworkRegistry",
    "ArtifactLayout",
    "ArtifactArchiver",
    "Keypair",
    "read_address",
    "staging_keypair",
    "init_workspace",
    "has_anchor",
]
