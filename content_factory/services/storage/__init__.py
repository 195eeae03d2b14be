"""
Storage Infrastructure - Workflow persistence
"""

from .repository import WorkflowRepository, FileBasedWorkflowRepository

__all__ = [
    "WorkflowRepository",
    "FileBasedWorkflowRepository",
]
