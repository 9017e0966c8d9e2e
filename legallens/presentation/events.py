from __future__ import annotations

from legallens.domain import StateChange, Succeeded


class ResultRevealSignal:
    """One-shot flag raised when the workflow enters ``Succeeded``.

    The front end uses it to bring the freshly rendered results into view.
    Any later transition lowers the flag again.
    """

    def __init__(self) -> None:
        self._pending = False

    def __call__(self, change: StateChange) -> None:
        self._pending = change.entered(Succeeded)

    @property
    def pending(self) -> bool:
        return self._pending

    def consume(self) -> bool:
        pending, self._pending = self._pending, False
        return pending
