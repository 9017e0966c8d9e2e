from __future__ import annotations

import asyncio
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from legallens.core.files import SelectedFile
from legallens.core.schema import AnalysisResult


class GatedClient:
    """Fake analysis client that holds each request until released."""

    def __init__(self, outcome: AnalysisResult | Exception) -> None:
        self.outcome = outcome
        self.calls: list[str] = []
        self.release = asyncio.Event()
        self.active = 0
        self.max_in_flight = 0
        self.cancelled = False
        self.closed = False

    async def analyze(self, file: SelectedFile) -> AnalysisResult:
        self.calls.append(file.name)
        self.active += 1
        self.max_in_flight = max(self.max_in_flight, self.active)
        try:
            await self.release.wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        finally:
            self.active -= 1
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def make_gated_client() -> type[GatedClient]:
    """Constructor for gated fakes; call it with the outcome each request yields."""

    return GatedClient
