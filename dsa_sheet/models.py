"""Data models for topics, problems and progress records."""

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


def percentage(completed: int, total: int) -> int:
    """Whole-number percentage rounded half up, 0 for an empty total."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


# =============================================================================
# SHEET CONTENT
# =============================================================================

@dataclass(frozen=True)
class ProblemLinks:
    """External references for a problem. Every link is optional."""
    youtube: Optional[str] = None
    leetcode: Optional[str] = None
    codeforces: Optional[str] = None
    article: Optional[str] = None

    LABELS = (
        ("youtube", "YouTube"),
        ("leetcode", "LeetCode"),
        ("codeforces", "Codeforces"),
        ("article", "Article"),
    )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ProblemLinks':
        data = data or {}
        return cls(**{name: data.get(name) or None for name, _ in cls.LABELS})

    def available(self) -> Iterator[Tuple[str, str]]:
        """Yield (label, url) for each link that is set."""
        for name, label in self.LABELS:
            url = getattr(self, name)
            if url:
                yield label, url


@dataclass(frozen=True)
class Problem:
    """A single exercise on the sheet."""
    id: str
    title: str
    difficulty: Difficulty
    description: str = ""
    tags: Tuple[str, ...] = ()
    links: ProblemLinks = field(default_factory=ProblemLinks)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Problem':
        return cls(
            id=str(data["_id"]),
            title=data["title"],
            difficulty=Difficulty(data["difficulty"]),
            description=data.get("description") or "",
            tags=tuple(data.get("tags") or ()),
            links=ProblemLinks.from_dict(data.get("links"))
        )


@dataclass(frozen=True)
class Topic:
    """A named group of problems, in sheet order."""
    id: str
    title: str
    description: str = ""
    problems: Tuple[Problem, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Topic':
        return cls(
            id=str(data["_id"]),
            title=data["title"],
            description=data.get("description") or "",
            problems=tuple(Problem.from_dict(item) for item in data.get("problems") or ())
        )

    def problem_ids(self) -> List[str]:
        return [problem.id for problem in self.problems]


# =============================================================================
# PROGRESS
# =============================================================================

@dataclass(frozen=True)
class PersistedId:
    """Record identifier assigned by the backend."""
    value: str


@dataclass(frozen=True)
class TemporaryId:
    """Record identifier assigned locally before the backend confirms."""
    value: str


RecordId = Union[PersistedId, TemporaryId]


def new_temporary_id() -> TemporaryId:
    return TemporaryId(uuid.uuid4().hex)


@dataclass(frozen=True)
class ProgressRecord:
    """Completion state of one problem for the current user."""
    problem_id: str
    completed: bool
    record_id: RecordId

    @property
    def is_temporary(self) -> bool:
        return isinstance(self.record_id, TemporaryId)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProgressRecord':
        problem = data["problemId"]
        problem_id = problem["_id"] if isinstance(problem, dict) else problem
        return cls(
            problem_id=str(problem_id),
            completed=bool(data.get("completed", False)),
            record_id=PersistedId(str(data["_id"]))
        )


@dataclass(frozen=True)
class ProgressStats:
    """Completion counts for a topic or the whole sheet."""
    total: int = 0
    completed: int = 0
    remaining: int = 0
    percentage: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProgressStats':
        total = int(data.get("total") or 0)
        completed = int(data.get("completed") or 0)
        remaining = data.get("remaining")
        pct = data.get("percentage")
        return cls(
            total=total,
            completed=completed,
            remaining=int(remaining) if remaining is not None else total - completed,
            percentage=math.floor(float(pct) + 0.5) if pct is not None else percentage(completed, total)
        )

    @classmethod
    def empty(cls) -> 'ProgressStats':
        return cls()
