"""
Fleet Services Layer

External command execution and the deploy/upgrade workflows built on it.
"""

from .command_runner import CommandRunner, SubprocessRunner
from .toolchain import SolanaCli, AnchorCli, CargoCli
from .program_probe import ProgramStateProbe
from .deploy_workflow import DeploymentWorkflow
from .upgrade_workflow import UpgradeWorkflow

__all__ = [
    "CommandRunner",
    "SubprocessRunner",
    "SolanaCli",
    "AnchorCli",
    "CargoCli",
    "ProgramStateProbe",
    "DeploymentWorkflow",
    "UpgradeWorkflow",
]
