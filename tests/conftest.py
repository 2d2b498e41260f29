import asyncio
from typing import Dict, List, Optional, Tuple

import pytest

from dsa_sheet.errors import NetworkError, NotFound
from dsa_sheet.models import (
    Difficulty,
    PersistedId,
    Problem,
    ProblemLinks,
    ProgressRecord,
    ProgressStats,
    Topic,
)


def make_problem(pid: str, difficulty: Difficulty = Difficulty.EASY, **kwargs) -> Problem:
    return Problem(id=pid, title=kwargs.pop("title", f"Problem {pid}"), difficulty=difficulty, **kwargs)


def make_topic(tid: str, *problem_ids: str, title: Optional[str] = None) -> Topic:
    return Topic(
        id=tid,
        title=title or f"Topic {tid}",
        description="",
        problems=tuple(make_problem(pid) for pid in problem_ids)
    )


def record(pid: str, completed: bool, rid: Optional[str] = None) -> ProgressRecord:
    return ProgressRecord(pid, completed, PersistedId(rid or f"rec-{pid}"))


class FakeSheetAPI:
    """In-memory stand-in for SheetAPI."""

    def __init__(self, topics: List[Topic], records: Optional[List[ProgressRecord]] = None,
                 stats: Optional[ProgressStats] = None):
        self.topics: Dict[str, Topic] = {topic.id: topic for topic in topics}
        self.records = list(records or [])
        self.stats = stats
        self.fail_topics: Optional[Exception] = None
        self.fail_progress: Optional[Exception] = None
        self.fail_stats: Optional[Exception] = None
        self.fail_post: Optional[Exception] = None
        self.post_gate: Optional[asyncio.Event] = None
        self.post_delay = 0.0
        self.posts: List[Tuple[str, bool]] = []

    async def fetch_topic(self, topic_id: str) -> Topic:
        if self.fail_topics:
            raise self.fail_topics
        if topic_id not in self.topics:
            raise NotFound(f"GET /topics/{topic_id} returned 404")
        return self.topics[topic_id]

    async def fetch_all_topics(self) -> List[Topic]:
        if self.fail_topics:
            raise self.fail_topics
        return list(self.topics.values())

    async def fetch_progress(self) -> List[ProgressRecord]:
        if self.fail_progress:
            raise self.fail_progress
        return list(self.records)

    async def fetch_progress_stats(self) -> ProgressStats:
        if self.fail_stats:
            raise self.fail_stats
        if self.stats is None:
            raise NetworkError("stats endpoint unavailable")
        return self.stats

    async def post_progress(self, problem_id: str, completed: bool) -> dict:
        self.posts.append((problem_id, completed))
        if self.post_gate is not None:
            await self.post_gate.wait()
        if self.post_delay:
            await asyncio.sleep(self.post_delay)
        if self.fail_post:
            raise self.fail_post
        self.records = [r for r in self.records if r.problem_id != problem_id]
        self.records.append(record(problem_id, completed))
        return {"_id": f"rec-{problem_id}", "problemId": problem_id, "completed": completed}


@pytest.fixture
def arrays_topic() -> Topic:
    return Topic(
        id="t-arrays",
        title="Arrays",
        description="Contiguous memory problems",
        problems=(
            make_problem("p1", Difficulty.EASY, tags=("array", "hashing"),
                         links=ProblemLinks(leetcode="https://leetcode.com/problems/two-sum/")),
            make_problem("p2", Difficulty.MEDIUM),
            make_problem("p3", Difficulty.MEDIUM),
            make_problem("p4", Difficulty.HARD),
        )
    )


@pytest.fixture
def fake_api(arrays_topic: Topic) -> FakeSheetAPI:
    return FakeSheetAPI([arrays_topic, make_topic("t-graphs", "g1", "g2")], [record("p1", True)])
