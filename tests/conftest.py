import io

import pytest
import yaml
from rich.console import Console

from fleet.core.keypair import Keypair
from fleet.core.workspace import init_workspace
from fleet.core.config_loader import load_config
from fleet.models.results import ExecutionResult

UPGRADE_AUTHORITY = "AuthXk5yHXbJ5qNY8hgqwGXJG6JvWBM1bM1tL9fP7YxQ"


class FakeRunner:
    """Scripted stand-in for SubprocessRunner that records every call."""

    def __init__(self):
        self.calls = []
        self.responses = {}

    @staticmethod
    def name_of(program, args):
        if args and args[0] in ("program", "idl") and len(args) > 1:
            return f"{program} {args[0]} {args[1]}"
        return f"{program} {args[0]}" if args else program

    def on(self, name, returncode=0, stdout="", stderr="", raises=None):
        self.responses.setdefault(name, []).append((returncode, stdout, stderr, raises))
        return self

    def run(self, program, args, cwd=None, interactive=False):
        args = [str(a) for a in args]
        name = self.name_of(program, args)
        self.calls.append(
            {"name": name, "program": program, "args": args, "cwd": cwd, "interactive": interactive}
        )
        queue = self.responses.get(name)
        if not queue:
            return ExecutionResult(returncode=0, command=" ".join([program, *args]))
        returncode, stdout, stderr, raises = queue.pop(0) if len(queue) > 1 else queue[0]
        if raises is not None:
            raise raises
        return ExecutionResult(
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
            command=" ".join([program, *args]),
        )

    @property
    def names(self):
        return [call["name"] for call in self.calls]

    def find(self, name):
        return [call for call in self.calls if call["name"] == name]


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200)


def write_workspace(root, version="1.2.0", anchor=False, program="escrow"):
    (root / "Cargo.toml").write_text('[workspace]\nmembers = ["programs/*"]\n')
    config = {
        "deployer_keypair": "deployer.json",
        "artifacts_dir": "artifacts",
        "networks": {
            "localnet": {"upgrade_authority": UPGRADE_AUTHORITY},
            "devnet": {"upgrade_authority": UPGRADE_AUTHORITY},
            "mainnet": {"upgrade_authority": UPGRADE_AUTHORITY},
        },
    }
    (root / "Fleet.yml").write_text(yaml.safe_dump(config))
    (root / "deployer.json").write_text(Keypair.generate().to_json())

    manifest_dir = root / "programs" / program
    manifest_dir.mkdir(parents=True)
    (manifest_dir / "Cargo.toml").write_text(
        f'[package]\nname = "{program}"\nversion = "{version}"\n'
    )

    deploy_dir = root / "target" / "deploy"
    deploy_dir.mkdir(parents=True)
    (deploy_dir / f"{program}.so").write_bytes(b"\x7fELF program bytes")
    (deploy_dir / f"{program}-keypair.json").write_text(Keypair.generate().to_json())

    idl_dir = root / "target" / "idl"
    idl_dir.mkdir(parents=True)
    (idl_dir / f"{program}.json").write_text('{"name": "%s"}' % program)

    if anchor:
        (root / "Anchor.toml").write_text("[programs.devnet]\n")
    return root


@pytest.fixture
def workspace_root(tmp_path):
    return write_workspace(tmp_path)


@pytest.fixture
def anchor_root(tmp_path):
    return write_workspace(tmp_path, anchor=True)


@pytest.fixture
def make_workspace():
    def _make(root, version=None, network="devnet", program="escrow"):
        config = load_config(root / "Fleet.yml")
        return init_workspace(program, version, network, config=config, root=root)

    return _make
