"""In-memory progress store for the current session."""

from typing import Dict, Iterable, List, Optional, Set

from .models import ProgressRecord, new_temporary_id


class ProgressStore:
    """Maps problem ids to the user's completion records.

    Holds at most one record per problem. Contents are replaced wholesale by
    ``load`` and mutated one record at a time by the reconciliation layer.
    """

    def __init__(self, records: Optional[Iterable[ProgressRecord]] = None):
        self._records: Dict[str, ProgressRecord] = {}
        if records is not None:
            self.load(records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, problem_id: object) -> bool:
        return problem_id in self._records

    def load(self, records: Iterable[ProgressRecord]) -> None:
        """Replace all contents. Later records win for repeated problem ids."""
        self._records = {record.problem_id: record for record in records}

    def clear(self) -> None:
        self._records = {}

    def get(self, problem_id: str) -> Optional[ProgressRecord]:
        return self._records.get(problem_id)

    def has_record(self, problem_id: str) -> bool:
        return problem_id in self._records

    def records(self) -> List[ProgressRecord]:
        return list(self._records.values())

    def is_completed(self, problem_id: str) -> bool:
        """Return the completion flag, False for problems never acted upon."""
        record = self._records.get(problem_id)
        return record.completed if record else False

    def completed_ids(self) -> Set[str]:
        return {pid for pid, record in self._records.items() if record.completed}

    def apply_optimistic(self, problem_id: str, completed: bool) -> None:
        """Set the flag locally, inserting a temporary record if none exists."""
        record = self._records.get(problem_id)
        if record is not None:
            self._records[problem_id] = ProgressRecord(problem_id, completed, record.record_id)
        else:
            self._records[problem_id] = ProgressRecord(problem_id, completed, new_temporary_id())

    def rollback(self, problem_id: str, previous_completed: bool, was_temporary: bool) -> None:
        """Undo an optimistic change using the state captured before it."""
        record = self._records.get(problem_id)
        if record is None:
            return
        if was_temporary and record.is_temporary:
            del self._records[problem_id]
            return
        # A refresh may have swapped in a persisted record while the update was pending.
        self._records[problem_id] = ProgressRecord(problem_id, previous_completed, record.record_id)
