"""
Fleet Domain Models

Dataclass-based models for workspaces, command results and workflow state.
"""

from .results import ExecutionResult
from .workspace import (
    NetworkConfig,
    ProgramPaths,
    ArtifactPaths,
    Workspace,
)
from .workflow import (
    DeployState,
    UpgradeState,
    WorkflowResult,
)

__all__ = [
    # Results
    "ExecutionResult",
    # Workspace
    "NetworkConfig",
    "ProgramPaths",
    "ArtifactPaths",
    "Workspace",
    # Workflow
    "DeployState",
    "UpgradeState",
    "WorkflowResult",
]
