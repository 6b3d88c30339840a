"""Tests for external command wrappers and the error hierarchy."""

import pytest

from fleet.exceptions import ExternalCommandFailure, FleetError
from fleet.models.workspace import NetworkConfig
from fleet.services.toolchain import AnchorCli, SolanaCli

CUSTOM = NetworkConfig(
    name="staging",
    url="https://staging.example.com",
    upgrade_authority="Auth111",
    builtin=False,
)


def test_solana_commands_target_network_url(runner):
    SolanaCli(runner, CUSTOM).set_buffer_authority("Buf111", "/keys/deployer.json", "Auth111")

    args = runner.calls[0]["args"]
    assert args[-2:] == ["--url", "https://staging.example.com"]


def test_non_zero_exit_raises(runner):
    runner.on("solana program set-buffer-authority", returncode=2, stderr="RPC timeout")

    with pytest.raises(ExternalCommandFailure) as exc_info:
        SolanaCli(runner, CUSTOM).set_buffer_authority("Buf111", "/keys/deployer.json", "Auth111")

    error = exc_info.value
    assert error.program == "solana"
    assert error.returncode == 2
    assert "RPC timeout" in error.message
    assert isinstance(error, FleetError)


def test_missing_binary_raises_command_failure(runner):
    runner.on("anchor idl init", raises=FileNotFoundError("anchor"))

    with pytest.raises(ExternalCommandFailure) as exc_info:
        AnchorCli(runner, CUSTOM, wallet="/keys/deployer.json").idl_init("Prog111", "idl.json")

    assert exc_info.value.returncode is None
    assert exc_info.value.message.startswith("Could not run `anchor idl init")


def test_anchor_uses_custom_network_url_as_cluster(runner):
    AnchorCli(runner, CUSTOM, wallet="/keys/deployer.json").idl_write_buffer("Prog111", "idl.json")

    args = runner.calls[0]["args"]
    assert args[args.index("--provider.cluster") + 1] == "https://staging.example.com"


def test_idl_buffer_address_parsed(runner):
    runner.on("anchor idl write-buffer", stdout="Idl buffer created: IdlBuf111\n")

    buffer = AnchorCli(runner, CUSTOM, wallet="/keys/deployer.json").idl_write_buffer(
        "Prog111", "idl.json"
    )

    assert buffer == "IdlBuf111"


def test_error_context_is_appended():
    error = FleetError("Switch failed", context="Verify manually")
    assert str(error) == "Switch failed\nContext: Verify manually"
    assert str(FleetError("plain")) == "plain"
