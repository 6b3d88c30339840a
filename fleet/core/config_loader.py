"""Configuration management for Fleet workspaces"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from fleet.constants import (
    BUILTIN_NETWORKS,
    CONFIG_FILE_NAME,
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_DEPLOYER_KEYPAIR,
)
from fleet.exceptions import ConfigurationError


@dataclass
class NetworkEntry:
    """Network section as written in Fleet.yml"""

    upgrade_authority: str = ""
    url: Optional[str] = None
    cluster: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"upgrade_authority": self.upgrade_authority}
        if self.url:
            data["url"] = self.url
        if self.cluster:
            data["cluster"] = self.cluster
        return data

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "NetworkEntry":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid network entry '{name}': expected a mapping",
                context=f"networks:\n  {name}:\n    upgrade_authority: <pubkey>",
            )
        authority = data.get("upgrade_authority") or ""
        return cls(
            upgrade_authority=str(authority),
            url=data.get("url"),
            cluster=data.get("cluster"),
        )


@dataclass
class FleetConfig:
    """Represents a loaded and validated Fleet.yml"""

    deployer_keypair: str = DEFAULT_DEPLOYER_KEYPAIR
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR
    networks: Dict[str, NetworkEntry] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "FleetConfig":
        """Configuration written by `fleet init`."""
        return cls(networks={name: NetworkEntry() for name in BUILTIN_NETWORKS})

    @classmethod
    def from_dict(cls, raw: Any) -> "FleetConfig":
        """
        Build configuration from a parsed YAML document.

        Raises:
            ConfigurationError: If the document has the wrong shape
        """
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{CONFIG_FILE_NAME} must contain a mapping")

        networks_raw = raw.get("networks") or {}
        if not isinstance(networks_raw, dict):
            raise ConfigurationError("Invalid 'networks' field: expected a mapping")

        networks = {
            str(name).lower(): NetworkEntry.from_dict(str(name), entry)
            for name, entry in networks_raw.items()
        }

        for name, entry in networks.items():
            if name not in BUILTIN_NETWORKS and not entry.url:
                raise ConfigurationError(
                    f"Custom network '{name}' has no 'url'",
                    context=f"networks:\n  {name}:\n    url: https://...",
                )

        return cls(
            deployer_keypair=str(raw.get("deployer_keypair") or DEFAULT_DEPLOYER_KEYPAIR),
            artifacts_dir=str(raw.get("artifacts_dir") or DEFAULT_ARTIFACTS_DIR),
            networks=networks,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "deployer_keypair": self.deployer_keypair,
            "artifacts_dir": self.artifacts_dir,
            "networks": {name: entry.to_dict() for name, entry in self.networks.items()},
        }

    def deployer_path(self, root: Path) -> Path:
        """Deployer keypair path, relative entries resolved against the workspace root."""
        path = Path(self.deployer_keypair).expanduser()
        if not path.is_absolute():
            path = root / path
        return path

    def artifacts_root(self, root: Path) -> Path:
        path = Path(self.artifacts_dir).expanduser()
        if not path.is_absolute():
            path = root / path
        return path


def load_config(path: Path) -> FleetConfig:
    """
    Load Fleet.yml from disk.

    Raises:
        ConfigurationError: If the file is unreadable or invalid
    """
    try:
        raw = yaml.safe_load(Path(path).read_text())
    except FileNotFoundError:
        raise ConfigurationError(
            f"{CONFIG_FILE_NAME} not found at {path}", context="Run: fleet init"
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")
    return FleetConfig.from_dict(raw)


def save_config(config: FleetConfig, path: Path) -> None:
    """Write configuration as YAML."""
    with open(path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def discover(start: Optional[Path] = None) -> Tuple[FleetConfig, Path, Path]:
    """
    Find Fleet.yml in the start directory or any parent.

    Returns:
        Tuple of (config, config_path, workspace_root)

    Raises:
        ConfigurationError: If no Fleet.yml is found
    """
    current = Path(start or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return load_config(candidate), candidate, directory

    raise ConfigurationError(
        f"{CONFIG_FILE_NAME} not found in {current} or any parent directory",
        context="Run: fleet init",
    )
