"""Optimistic toggling of problem completion with rollback on failure."""

import asyncio
import logging
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional

from . import config
from .errors import OperationInProgress, UnknownProblem, UpdateFailed
from .events import ProgressEvents
from .store import ProgressStore

logger = logging.getLogger(__name__)


class ToggleState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class ReconciliationController:
    """Drives the toggle protocol for one session.

    Each problem id is either Idle or Pending. A toggle applies the new flag
    to the store right away, posts it to the backend and either keeps it
    (publishing a progress change) or reverts it. Only one toggle per
    problem may be pending; toggles on different problems run
    independently and share the store lock for their record writes.
    """

    def __init__(self, store: ProgressStore, api, events: Optional[ProgressEvents] = None,
                 known_problems: Optional[Iterable[str]] = None,
                 timeout: Optional[float] = config.TOGGLE_TIMEOUT):
        self.store = store
        self.api = api
        self.events = events or ProgressEvents()
        self.timeout = timeout
        self._known: FrozenSet[str] = frozenset(known_problems or ())
        self._states: Dict[str, ToggleState] = {}
        self._lock = asyncio.Lock()

    @property
    def known_problems(self) -> FrozenSet[str]:
        return self._known

    def set_known_problems(self, problem_ids: Iterable[str]) -> None:
        self._known = frozenset(problem_ids)

    def state(self, problem_id: str) -> ToggleState:
        return self._states.get(problem_id, ToggleState.IDLE)

    def is_updating(self, problem_id: str) -> bool:
        return self.state(problem_id) is ToggleState.PENDING

    def in_flight(self) -> FrozenSet[str]:
        return frozenset(self._states)

    async def toggle(self, problem_id: str) -> bool:
        """Flip the completion flag of a problem and return the new value.

        Raises UnknownProblem or OperationInProgress without touching the
        store, and UpdateFailed after rolling back a rejected update.
        """
        if problem_id not in self._known:
            raise UnknownProblem(problem_id)
        if self.is_updating(problem_id):
            raise OperationInProgress(problem_id)

        self._states[problem_id] = ToggleState.PENDING
        try:
            async with self._lock:
                previous = self.store.is_completed(problem_id)
                was_temporary = not self.store.has_record(problem_id)
                completed = not previous
                self.store.apply_optimistic(problem_id, completed)

            try:
                await asyncio.wait_for(self.api.post_progress(problem_id, completed), self.timeout)
            except Exception as e:
                async with self._lock:
                    self.store.rollback(problem_id, previous, was_temporary)
                reason = str(e) or type(e).__name__
                logger.warning("Reverted problem %s after failed update: %s", problem_id, reason)
                raise UpdateFailed(problem_id, reason) from e
            except asyncio.CancelledError:
                async with self._lock:
                    self.store.rollback(problem_id, previous, was_temporary)
                raise

            self.events.notify_progress_changed()
            return completed
        finally:
            self._states.pop(problem_id, None)
