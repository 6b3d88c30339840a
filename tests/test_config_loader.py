"""Tests for Fleet.yml loading and discovery."""

from pathlib import Path

import pytest
import yaml

from fleet.constants import BUILTIN_NETWORKS
from fleet.core.config_loader import FleetConfig, discover, load_config, save_config
from fleet.exceptions import ConfigurationError


def test_default_config_lists_builtin_networks():
    config = FleetConfig.default()
    assert list(config.networks) == list(BUILTIN_NETWORKS)
    assert config.deployer_keypair == "~/.config/solana/id.json"
    assert config.artifacts_dir == "artifacts"


def test_save_then_load(tmp_path):
    path = tmp_path / "Fleet.yml"
    config = FleetConfig.default()
    config.networks["devnet"].upgrade_authority = "Auth111"

    save_config(config, path)
    loaded = load_config(path)

    assert loaded.networks["devnet"].upgrade_authority == "Auth111"
    assert yaml.safe_load(path.read_text())["networks"]["mainnet"] == {"upgrade_authority": ""}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(tmp_path / "Fleet.yml")
    assert exc_info.value.context == "Run: fleet init"


def test_invalid_yaml(tmp_path):
    path = tmp_path / "Fleet.yml"
    path.write_text("networks: [unclosed")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_custom_network_requires_url():
    with pytest.raises(ConfigurationError) as exc_info:
        FleetConfig.from_dict({"networks": {"staging": {"upgrade_authority": "Auth111"}}})
    assert "staging" in exc_info.value.message


def test_network_entry_must_be_mapping():
    with pytest.raises(ConfigurationError):
        FleetConfig.from_dict({"networks": {"devnet": "Auth111"}})


def test_network_names_are_lowercased():
    config = FleetConfig.from_dict({"networks": {"Devnet": {"upgrade_authority": "Auth111"}}})
    assert "devnet" in config.networks


def test_empty_document_uses_defaults():
    config = FleetConfig.from_dict(None)
    assert config.networks == {}
    assert config.artifacts_dir == "artifacts"


def test_relative_paths_resolve_against_root(tmp_path):
    config = FleetConfig(deployer_keypair="keys/deployer.json", artifacts_dir="out")
    assert config.deployer_path(tmp_path) == tmp_path / "keys" / "deployer.json"
    assert config.artifacts_root(tmp_path) == tmp_path / "out"


def test_home_is_expanded(tmp_path):
    config = FleetConfig()
    assert config.deployer_path(tmp_path) == Path.home() / ".config" / "solana" / "id.json"


def test_discover_from_nested_directory(workspace_root):
    nested = workspace_root / "programs" / "escrow"
    config, path, root = discover(nested)
    assert root == workspace_root.resolve()
    assert path == workspace_root.resolve() / "Fleet.yml"
    assert config.networks["devnet"].upgrade_authority


def test_discover_without_config(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        discover(tmp_path)
    assert exc_info.value.context == "Run: fleet init"
