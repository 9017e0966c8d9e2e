"""Presentation layer: views derived from the workflow state."""

from .events import ResultRevealSignal
from .views import Control, ErrorView, NumberedItem, ResultView, UploadPromptView, View, present

__all__ = [
    "Control",
    "ErrorView",
    "NumberedItem",
    "ResultRevealSignal",
    "ResultView",
    "UploadPromptView",
    "View",
    "present",
]
