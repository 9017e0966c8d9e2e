"""Upload controller driving the document to analysis workflow."""
from __future__ import annotations

import asyncio
from typing import Callable

from loguru import logger

from legallens.core.files import SelectedFile
from legallens.core.schema import AnalysisResult
from legallens.domain import IDLE, Failed, StateChange, Succeeded, Uploading, WorkflowState
from legallens.infrastructure import (
    AnalysisClient,
    AnalysisShapeError,
    AnalysisStatusError,
    AnalysisTransportError,
)

TRANSPORT_FAILURE_MESSAGE = "Could not reach the analysis service. Check your connection and try again."
UNEXPECTED_FAILURE_MESSAGE = "An unexpected error occurred while analyzing the document. Please try again."

StateListener = Callable[[StateChange], None]


def describe_failure(error: BaseException) -> str:
    """Turn a request failure into a message that is safe to show to the user."""

    if isinstance(error, AnalysisStatusError):
        return f"The analysis service responded with status {error.status_code}. Please try again."
    if isinstance(error, AnalysisTransportError):
        return TRANSPORT_FAILURE_MESSAGE
    return UNEXPECTED_FAILURE_MESSAGE


class UploadController:
    """Owns the workflow state and the single in-flight analysis request.

    All methods must be called from the event loop thread. ``select_file``
    schedules the request as a task on the running loop and returns
    immediately; the outcome is observed through :attr:`state` or through
    listeners registered with :meth:`subscribe`.
    """

    def __init__(self, client: AnalysisClient) -> None:
        self._client = client
        self._state: WorkflowState = IDLE
        self._listeners: list[StateListener] = []
        self._task: asyncio.Task[None] | None = None
        # Bumped on every new request and on reset so that an outcome
        # arriving for a superseded request is dropped.
        self._generation = 0

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def is_uploading(self) -> bool:
        return isinstance(self._state, Uploading)

    @property
    def has_pending_request(self) -> bool:
        """True while a request task is running, including one superseded by :meth:`reset`."""

        return self._task is not None and not self._task.done()

    @property
    def is_busy(self) -> bool:
        return self.is_uploading or self.has_pending_request

    @property
    def client(self) -> AnalysisClient:
        return self._client

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------
    def _transition(self, new_state: WorkflowState) -> None:
        change = StateChange(previous=self._state, current=new_state)
        self._state = new_state
        logger.debug("Workflow transition {} -> {}", change.previous.status, change.current.status)
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("State listener {!r} failed", listener)

    def select_file(self, file: SelectedFile) -> None:
        if isinstance(self._state, Uploading):
            logger.debug("Ignoring selection of {} while {} is uploading", file.name, self._state.file_name)
            return
        if self.has_pending_request:
            logger.debug("Ignoring selection of {} until the superseded request settles", file.name)
            return

        loop = asyncio.get_running_loop()
        self._generation += 1
        self._transition(Uploading(file_name=file.name))
        self._task = loop.create_task(self._submit(file, self._generation))

    async def _submit(self, file: SelectedFile, generation: int) -> None:
        logger.info("Submitting {} ({}, {} bytes) for analysis", file.name, file.declared_type, len(file.content))
        outcome: AnalysisResult | BaseException
        try:
            outcome = await self._client.analyze(file)
        except (AnalysisStatusError, AnalysisTransportError, AnalysisShapeError) as exc:
            logger.warning("Analysis of {} failed: {}", file.name, exc)
            outcome = exc
        except Exception as exc:
            logger.exception("Unexpected error while analyzing {}", file.name)
            outcome = exc
        self.on_request_settled(outcome, generation=generation)

    def on_request_settled(self, outcome: AnalysisResult | BaseException, *, generation: int | None = None) -> None:
        """Apply the outcome of the in-flight request.

        Outcomes for a request that was superseded by :meth:`reset` are
        discarded, as are outcomes arriving when nothing is uploading.
        """

        if generation is not None and generation != self._generation:
            logger.debug("Discarding outcome of superseded request #{}", generation)
            return
        if not isinstance(self._state, Uploading):
            logger.debug("Discarding outcome received in state {}", self._state.status)
            return

        if isinstance(outcome, AnalysisResult):
            logger.info("Analysis of {} completed", self._state.file_name)
            self._transition(Succeeded(result=outcome))
        else:
            self._transition(Failed(message=describe_failure(outcome)))

    def reset(self) -> None:
        self._generation += 1
        self._transition(IDLE)

    async def wait_until_settled(self) -> None:
        """Wait for the most recent request task, if any, to finish."""

        task = self._task
        if task is not None and not task.done():
            await task

    async def aclose(self) -> None:
        """Shut down: cancel any outstanding request, then close the client."""

        task = self._task
        if task is not None and not task.done():
            logger.info("Cancelling outstanding analysis request on shutdown")
            task.cancel()
            await asyncio.wait({task})
        await self._client.aclose()


_controller: UploadController | None = None


def configure_upload_controller(controller: UploadController) -> None:
    """Install the controller used by the web shell."""

    global _controller
    _controller = controller


def get_upload_controller() -> UploadController:
    if _controller is None:
        raise RuntimeError("upload controller has not been configured")
    return _controller


def reset_upload_controller() -> None:
    """Utility used in tests to clear global state."""

    global _controller
    _controller = None
