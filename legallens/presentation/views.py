"""Pure projection of the workflow state onto user-facing views.

Every call to :func:`present` builds a fresh view from the state it is given;
nothing is cached between renders.
"""
from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel

from legallens.core.files import ACCEPTED_SUFFIXES
from legallens.domain import Failed, Succeeded, Uploading, WorkflowState

UPLOAD_TITLE = "Upload your document and I'll make it crystal clear"
UPLOAD_HINT = "Supports PDF, DOCX, and TXT files"


class Control(BaseModel):
    action: Literal["select_file", "reset"]
    label: str
    enabled: bool = True


class NumberedItem(BaseModel):
    number: int
    text: str


class UploadPromptView(BaseModel):
    kind: Literal["upload_prompt"] = "upload_prompt"
    title: str = UPLOAD_TITLE
    hint: str = UPLOAD_HINT
    accept: list[str] = list(ACCEPTED_SUFFIXES)
    control: Control
    busy: bool = False
    file_name: str | None = None
    status_text: str | None = None


class ResultView(BaseModel):
    kind: Literal["result"] = "result"
    summary: str
    key_points: list[NumberedItem]
    references: list[str]
    control: Control


class ErrorView(BaseModel):
    kind: Literal["error"] = "error"
    message: str
    control: Control


View = Union[UploadPromptView, ResultView, ErrorView]


def present(state: WorkflowState) -> View:
    if isinstance(state, Uploading):
        return UploadPromptView(
            control=Control(action="select_file", label="Analyzing…", enabled=False),
            busy=True,
            file_name=state.file_name,
            status_text=f"Analyzing {state.file_name}…",
        )
    if isinstance(state, Succeeded):
        result = state.result
        return ResultView(
            summary=result.summary,
            key_points=[NumberedItem(number=index, text=text) for index, text in enumerate(result.key_points, start=1)],
            references=list(result.references),
            control=Control(action="reset", label="Analyze another document"),
        )
    if isinstance(state, Failed):
        return ErrorView(message=state.message, control=Control(action="reset", label="Try again"))
    return UploadPromptView(control=Control(action="select_file", label="Upload Document"))
