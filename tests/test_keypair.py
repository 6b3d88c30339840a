"""Tests for Solana keypair files and staging keypairs."""

import json
import stat

import base58
import pytest

from fleet.core.keypair import Keypair, read_address, staging_keypair
from fleet.exceptions import KeypairError


def test_generated_keypair_layout():
    keypair = Keypair.generate()
    raw = json.loads(keypair.to_json())
    assert len(raw) == 64
    assert bytes(raw[32:]) == keypair.public
    assert base58.b58decode(keypair.address) == keypair.public


def test_read_address(tmp_path):
    keypair = Keypair.generate()
    path = tmp_path / "escrow-keypair.json"
    path.write_text(keypair.to_json())
    assert read_address(path) == keypair.address


def test_read_address_missing_file(tmp_path):
    with pytest.raises(KeypairError) as exc_info:
        read_address(tmp_path / "escrow-keypair.json")
    assert exc_info.value.context == "Run: fleet build"


@pytest.mark.parametrize("content", ["not json", "[1, 2, 3]", json.dumps([300] * 64), "{}"])
def test_read_address_malformed(tmp_path, content):
    path = tmp_path / "escrow-keypair.json"
    path.write_text(content)
    with pytest.raises(KeypairError):
        read_address(path)


class TestStagingKeypair:
    def test_file_holds_keypair_and_is_private(self):
        with staging_keypair() as (keypair, path):
            assert read_address(path) == keypair.address
            assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_file_removed_on_exit(self):
        with staging_keypair() as (_, path):
            assert path.exists()
        assert not path.exists()

    def test_file_removed_on_error(self):
        with pytest.raises(RuntimeError):
            with staging_keypair() as (_, path):
                raise RuntimeError("boom")
        assert not path.exists()

    def test_each_keypair_is_fresh(self):
        with staging_keypair() as (first, first_path):
            pass
        with staging_keypair() as (second, second_path):
            pass
        assert first.address != second.address
