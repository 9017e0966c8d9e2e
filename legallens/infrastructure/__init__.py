"""Infrastructure layer exports."""

from .analysis import (
    AnalysisClient,
    AnalysisServiceClient,
    AnalysisServiceError,
    AnalysisShapeError,
    AnalysisStatusError,
    AnalysisTransportError,
)

__all__ = [
    "AnalysisClient",
    "AnalysisServiceClient",
    "AnalysisServiceError",
    "AnalysisShapeError",
    "AnalysisStatusError",
    "AnalysisTransportError",
]
