"""Workflow states for the document upload and analysis process."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from legallens.core.schema import AnalysisResult


@dataclass(frozen=True, slots=True)
class Idle:
    """No document chosen yet."""

    status: ClassVar[str] = "idle"


@dataclass(frozen=True, slots=True)
class Uploading:
    """A document is being transmitted to the analysis service."""

    file_name: str
    status: ClassVar[str] = "uploading"


@dataclass(frozen=True, slots=True)
class Succeeded:
    """The service answered with a well-formed analysis."""

    result: AnalysisResult
    status: ClassVar[str] = "succeeded"


@dataclass(frozen=True, slots=True)
class Failed:
    """The request failed; ``message`` is safe to show to the user."""

    message: str
    status: ClassVar[str] = "failed"


WorkflowState = Union[Idle, Uploading, Succeeded, Failed]

IDLE = Idle()


@dataclass(frozen=True, slots=True)
class StateChange:
    """Emitted by the controller after every transition."""

    previous: WorkflowState
    current: WorkflowState

    def entered(self, state_type: type) -> bool:
        return isinstance(self.current, state_type) and not isinstance(self.previous, state_type)
