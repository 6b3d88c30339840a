"""
Network Registry

Maps a network name to its RPC endpoint and upgrade authority.
Built-in networks carry fixed endpoints; Fleet.yml may override an
endpoint or declare custom networks of its own.
"""

from typing import Dict, Mapping, Optional

from fleet.constants import BUILTIN_NETWORKS, CONFIG_FILE_NAME
from fleet.core.config_loader import NetworkEntry
from fleet.exceptions import ConfigurationError, UnknownNetworkError
from fleet.models.workspace import NetworkConfig


class NetworkRegistry:
    """Data-driven table of known networks."""

    def __init__(
        self,
        entries: Optional[Mapping[str, NetworkEntry]] = None,
        builtins: Optional[Mapping[str, str]] = None,
    ):
        self.builtins: Dict[str, str] = dict(BUILTIN_NETWORKS if builtins is None else builtins)
        self.entries: Dict[str, NetworkEntry] = {
            name.lower(): entry for name, entry in (entries or {}).items()
        }

    def names(self) -> list[str]:
        """All resolvable network names, built-ins first."""
        custom = [name for name in self.entries if name not in self.builtins]
        return [*self.builtins, *sorted(custom)]

    def resolve(self, network_name: str) -> NetworkConfig:
        """
        Resolve a network name to its configuration.

        Raises:
            UnknownNetworkError: Name is neither built-in nor configured
            ConfigurationError: Network has no upgrade authority configured
        """
        name = network_name.strip().lower()
        entry = self.entries.get(name)
        builtin = name in self.builtins

        if not builtin and entry is None:
            raise UnknownNetworkError(network_name, self.names())

        url = (entry.url if entry else None) or self.builtins.get(name)
        if not url:
            raise UnknownNetworkError(network_name, self.names())

        if entry is None or not entry.upgrade_authority:
            raise ConfigurationError(
                f"No upgrade authority configured for network '{name}'",
                context=f"Set networks.{name}.upgrade_authority in {CONFIG_FILE_NAME}",
            )

        return NetworkConfig(
            name=name,
            url=url,
            upgrade_authority=entry.upgrade_authority,
            builtin=builtin,
            cluster_override=entry.cluster,
        )
