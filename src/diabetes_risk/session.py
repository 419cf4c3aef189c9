from __future__ import annotations

import asyncio

from loguru import logger

from diabetes_risk.config import Settings
from diabetes_risk.scoring import assess
from diabetes_risk.state import (
    Action,
    AssessmentCompleted,
    FieldEdited,
    FormReset,
    FormState,
    SubmitRequested,
    reduce,
)


class AssessmentSession:
    """Owns the form state of one interactive session.

    Accepted submissions reveal their result after a simulated processing
    delay. The delay runs as an asyncio task that is cancelled on edit,
    resubmission, reset and close, so no callback outlives the session.

    Args:
        settings: Delay, threshold and range policy to use.
        state: Initial state, empty by default.
    """

    def __init__(self, settings: Settings | None = None, state: FormState | None = None) -> None:
        self.settings = settings or Settings()
        self.state = state or FormState()
        self._pending: asyncio.Task[None] | None = None

    def dispatch(self, action: Action) -> FormState:
        """Apply ``action`` to the current state and return the new state."""
        self.state = reduce(self.state, action, self.settings)
        return self.state

    def edit(self, field: str, value: str) -> FormState:
        """Change one input, dropping any displayed or pending result."""
        self._cancel_pending()
        return self.dispatch(FieldEdited(field, value))

    def reset(self) -> FormState:
        self._cancel_pending()
        return self.dispatch(FormReset())

    def submit(self) -> FormState:
        """Request an assessment of the current inputs.

        Must be called from a running event loop. When the inputs pass
        validation, a task is scheduled that publishes the result after the
        configured delay; otherwise the returned state carries the notice.
        """
        if self.state.is_loading:
            return self.state
        state = self.dispatch(SubmitRequested())
        if state.is_loading and state.profile is not None:
            self._pending = asyncio.get_running_loop().create_task(self._complete_after_delay(state.submission))
            logger.debug(f"Scheduled submission {state.submission} in {self.settings.processing_delay_seconds}s")
        return state

    async def wait(self) -> FormState:
        """Wait for the pending assessment, if any, and return the state."""
        task = self._pending
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
        return self.state

    async def aclose(self) -> None:
        """Cancel any pending assessment."""
        task = self._cancel_pending()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _complete_after_delay(self, submission: int) -> None:
        await asyncio.sleep(self.settings.processing_delay_seconds)
        profile = self.state.profile
        if profile is None or submission != self.state.submission:
            return
        assessment = assess(profile, self.settings.risk_threshold)
        self.dispatch(AssessmentCompleted(submission, assessment))

    def _cancel_pending(self) -> asyncio.Task[None] | None:
        task, self._pending = self._pending, None
        if task is not None and not task.done():
            task.cancel()
            logger.debug("Cancelled pending assessment")
            return task
        return None
