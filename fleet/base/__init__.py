"""
Fleet CLI Base Command Classes

Abstract base classes for consistent command structure.
"""

from .base_command import BaseCommand
from .workspace_command import WorkspaceCommand

__all__ = [
    "BaseCommand",
    "WorkspaceCommand",
]
