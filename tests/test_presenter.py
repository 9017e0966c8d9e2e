from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from legallens.core.schema import AnalysisResult
from legallens.domain import IDLE, Failed, StateChange, Succeeded, Uploading
from legallens.presentation import ErrorView, ResultRevealSignal, ResultView, UploadPromptView, present


def _result() -> AnalysisResult:
    return AnalysisResult(summary="S", key_points=["A", "B"], references=["R1"])


def test_idle_renders_enabled_upload_prompt():
    view = present(IDLE)

    assert isinstance(view, UploadPromptView)
    assert view.busy is False
    assert view.file_name is None
    assert view.control.action == "select_file"
    assert view.control.enabled is True
    assert view.accept == [".pdf", ".docx", ".txt"]


def test_uploading_renders_disabled_prompt_with_file_name():
    view = present(Uploading(file_name="lease.pdf"))

    assert isinstance(view, UploadPromptView)
    assert view.busy is True
    assert view.control.enabled is False
    assert view.file_name == "lease.pdf"
    assert "lease.pdf" in (view.status_text or "")


def test_success_renders_three_sections_in_order():
    view = present(Succeeded(result=_result()))

    assert isinstance(view, ResultView)
    assert view.summary == "S"
    assert [(item.number, item.text) for item in view.key_points] == [(1, "A"), (2, "B")]
    assert view.references == ["R1"]
    assert view.control.action == "reset"


def test_success_with_empty_lists():
    view = present(Succeeded(result=AnalysisResult(summary="Nothing notable.", key_points=[], references=[])))

    assert isinstance(view, ResultView)
    assert view.key_points == []
    assert view.references == []


def test_failure_renders_message_and_reset_control():
    view = present(Failed(message="The analysis service responded with status 500. Please try again."))

    assert isinstance(view, ErrorView)
    assert "500" in view.message
    assert view.control.action == "reset"
    assert view.control.label == "Try again"


def test_each_render_reflects_state_exactly():
    first = present(Succeeded(result=_result()))
    second = present(Succeeded(result=AnalysisResult(summary="T", key_points=["C"], references=[])))

    assert first.summary == "S"
    assert second.summary == "T"
    assert [item.text for item in second.key_points] == ["C"]


def test_result_reveal_signal_fires_once_on_success():
    signal = ResultRevealSignal()
    uploading = Uploading(file_name="lease.pdf")
    succeeded = Succeeded(result=_result())

    signal(StateChange(previous=IDLE, current=uploading))
    assert signal.pending is False

    signal(StateChange(previous=uploading, current=succeeded))
    assert signal.consume() is True
    assert signal.consume() is False


def test_result_reveal_signal_lowered_by_reset():
    signal = ResultRevealSignal()
    succeeded = Succeeded(result=_result())

    signal(StateChange(previous=Uploading(file_name="lease.pdf"), current=succeeded))
    signal(StateChange(previous=succeeded, current=IDLE))

    assert signal.consume() is False
