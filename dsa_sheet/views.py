"""Topic and dashboard view models built on the store and controller."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .controller import ReconciliationController
from .errors import SheetError
from .events import ProgressEvents
from .models import Difficulty, Problem, ProgressRecord, ProgressStats, Topic
from .stats import compute_global_stats, compute_topic_stats, count_by_difficulty, resolve_global_stats
from .store import ProgressStore

logger = logging.getLogger(__name__)


@dataclass
class ProblemRow:
    """One line of the topic detail view."""
    position: int
    problem: Problem
    completed: bool
    updating: bool = False


@dataclass
class TopicSummary:
    topic: Topic
    stats: ProgressStats


@dataclass
class DashboardSummary:
    """Everything the dashboard displays after a refresh."""
    topics: List[TopicSummary] = field(default_factory=list)
    stats: ProgressStats = field(default_factory=ProgressStats.empty)
    by_difficulty: Dict[Difficulty, ProgressStats] = field(default_factory=dict)


# =============================================================================
# TOPIC DETAIL
# =============================================================================

class TopicView:
    """A single topic with the user's progress and optimistic toggling."""

    def __init__(self, api, topic_id: str, events: Optional[ProgressEvents] = None):
        self.api = api
        self.topic_id = topic_id
        self.events = events or ProgressEvents()
        self.store = ProgressStore()
        self.controller = ReconciliationController(self.store, api, self.events)
        self.topic: Optional[Topic] = None

    async def load(self) -> Optional[Topic]:
        """Fetch the topic and progress. Returns None when the topic is unavailable."""
        results = await asyncio.gather(
            self.api.fetch_topic(self.topic_id),
            self.api.fetch_progress(),
            return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, SheetError):
                raise result

        failure = next((result for result in results if isinstance(result, SheetError)), None)
        if failure is not None:
            logger.warning("Could not load topic %s: %s", self.topic_id, failure)
            self.topic = None
            self.store.clear()
            self.controller.set_known_problems(())
            return None

        topic, records = results
        self.topic = topic
        self.store.load(records)
        self.controller.set_known_problems(topic.problem_ids())
        return topic

    def is_completed(self, problem_id: str) -> bool:
        return self.store.is_completed(problem_id)

    def rows(self) -> List[ProblemRow]:
        if self.topic is None:
            return []
        return [
            ProblemRow(
                position=index,
                problem=problem,
                completed=self.store.is_completed(problem.id),
                updating=self.controller.is_updating(problem.id)
            )
            for index, problem in enumerate(self.topic.problems, start=1)
        ]

    def stats(self) -> ProgressStats:
        if self.topic is None:
            return ProgressStats.empty()
        return compute_topic_stats(self.topic, self.store)

    async def toggle(self, problem_id: str) -> bool:
        return await self.controller.toggle(problem_id)

    def close(self) -> None:
        """Drop session state when the view goes away."""
        self.store.clear()
        self.controller.set_known_problems(())
        self.topic = None


# =============================================================================
# DASHBOARD
# =============================================================================

class DashboardView:
    """Sheet-wide progress, refreshed on demand or on progress events."""

    def __init__(self, api, events: Optional[ProgressEvents] = None):
        self.api = api
        self.events = events or ProgressEvents()
        self.summary = DashboardSummary()
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def refresh(self) -> DashboardSummary:
        try:
            topics, remote, records = await asyncio.gather(
                self.api.fetch_all_topics(),
                self._remote_stats(),
                self._progress()
            )
        except SheetError as e:
            logger.warning("Could not load dashboard: %s", e)
            self.summary = DashboardSummary()
            return self.summary

        store = ProgressStore(records)
        local = compute_global_stats(topics, store)
        self.summary = DashboardSummary(
            topics=[TopicSummary(topic, compute_topic_stats(topic, store)) for topic in topics],
            stats=resolve_global_stats(remote, local),
            by_difficulty=count_by_difficulty(topics, store)
        )
        return self.summary

    def watch(self) -> None:
        """Refresh automatically whenever progress changes."""
        if self._unsubscribe is None:
            self._unsubscribe = self.events.subscribe(self.refresh)

    def unwatch(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _remote_stats(self) -> Optional[ProgressStats]:
        try:
            return await self.api.fetch_progress_stats()
        except SheetError as e:
            logger.info("Progress stats unavailable, computing locally: %s", e)
            return None

    async def _progress(self) -> List[ProgressRecord]:
        try:
            return await self.api.fetch_progress()
        except SheetError as e:
            logger.warning("Could not load progress: %s", e)
            return []
