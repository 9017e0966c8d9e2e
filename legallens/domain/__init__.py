"""Domain layer definitions."""

from .workflow import IDLE, Failed, Idle, StateChange, Succeeded, Uploading, WorkflowState

__all__ = [
    "IDLE",
    "Failed",
    "Idle",
    "StateChange",
    "Succeeded",
    "Uploading",
    "WorkflowState",
]
