"""Derived completion statistics."""

import logging
from typing import Dict, Iterable, Optional

from .models import Difficulty, ProgressStats, Topic, percentage
from .store import ProgressStore

logger = logging.getLogger(__name__)


def make_stats(total: int, completed: int) -> ProgressStats:
    return ProgressStats(
        total=total,
        completed=completed,
        remaining=total - completed,
        percentage=percentage(completed, total)
    )


def compute_topic_stats(topic: Topic, store: ProgressStore) -> ProgressStats:
    """Count completed problems of a single topic."""
    completed = sum(1 for problem in topic.problems if store.is_completed(problem.id))
    return make_stats(len(topic.problems), completed)


def compute_global_stats(topics: Iterable[Topic], store: ProgressStore) -> ProgressStats:
    """Sum topic totals and completed counts across the sheet."""
    total = 0
    completed = 0
    for topic in topics:
        topic_stats = compute_topic_stats(topic, store)
        total += topic_stats.total
        completed += topic_stats.completed
    return make_stats(total, completed)


def resolve_global_stats(remote: Optional[ProgressStats], local: ProgressStats) -> ProgressStats:
    """Pick the backend's precomputed figures unless they are missing or empty."""
    if remote is None or remote.total <= 0:
        return local
    if (remote.total, remote.completed) != (local.total, local.completed):
        logger.debug(
            "Remote stats %s/%s differ from local %s/%s; using remote",
            remote.completed, remote.total, local.completed, local.total
        )
    return remote


def count_by_difficulty(topics: Iterable[Topic], store: ProgressStore) -> Dict[Difficulty, ProgressStats]:
    """Completion counts per difficulty across all topics."""
    totals = {diff: 0 for diff in Difficulty}
    completed = {diff: 0 for diff in Difficulty}
    for topic in topics:
        for problem in topic.problems:
            totals[problem.difficulty] += 1
            if store.is_completed(problem.id):
                completed[problem.difficulty] += 1
    return {diff: make_stats(totals[diff], completed[diff]) for diff in Difficulty}
