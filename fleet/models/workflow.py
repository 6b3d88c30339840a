"""
Workflow State Models

States of the deploy and upgrade state machines and the result record
returned once a workflow reaches a terminal state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class DeployState(Enum):
    """States of a first-time deployment."""

    START = "start"
    ALREADY_DEPLOYED_CHECK = "already_deployed_check"
    DEPLOYING = "deploying"
    AUTHORITY_SET = "authority_set"
    IDL_INITIALIZED = "idl_initialized"
    IDL_AUTHORITY_SET = "idl_authority_set"
    ARTIFACTS_COPIED = "artifacts_copied"
    DONE = "done"
    FAILED = "failed"
    ALREADY_DEPLOYED = "already_deployed"


class UpgradeState(Enum):
    """States of an in-place upgrade through a staging buffer."""

    START = "start"
    PRECONDITIONS_CHECKED = "preconditions_checked"
    BUFFER_WRITTEN = "buffer_written"
    BUFFER_AUTHORITY_SET = "buffer_authority_set"
    SWITCHED = "switched"
    IDL_UPDATED = "idl_updated"
    ARTIFACTS_COPIED = "artifacts_copied"
    DONE = "done"
    FAILED = "failed"


@dataclass
class WorkflowResult:
    """Outcome of a workflow run."""

    state: Enum
    history: list[Enum] = field(default_factory=list)
    buffer_address: Optional[str] = None
    notice: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Done and AlreadyDeployed both count as success."""
        return self.state in (DeployState.DONE, DeployState.ALREADY_DEPLOYED, UpgradeState.DONE)

    def __repr__(self) -> str:
        return f"WorkflowResult(state={self.state.value}, steps={len(self.history)})"
