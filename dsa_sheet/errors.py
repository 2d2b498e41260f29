"""Error taxonomy shared by the backend client and the reconciliation layer."""

from typing import Optional


class SheetError(Exception):
    """Base class for every tracker error."""


class NetworkError(SheetError):
    """The backend could not be reached or did not answer in time."""


class ServerError(SheetError):
    """The backend answered with a non-success status or an unreadable body."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class NotFound(SheetError):
    """The requested topic or problem does not exist on the backend."""


class OperationInProgress(SheetError):
    """A toggle for this problem is still waiting on the backend."""

    def __init__(self, problem_id: str):
        super().__init__(f"Problem {problem_id} is already being updated")
        self.problem_id = problem_id


class UnknownProblem(SheetError):
    """The problem is not part of the currently loaded topic."""

    def __init__(self, problem_id: str):
        super().__init__(f"Problem {problem_id} is not in the loaded topic")
        self.problem_id = problem_id


class UpdateFailed(SheetError):
    """The backend rejected a toggle and the optimistic change was reverted."""

    def __init__(self, problem_id: str, reason: str = ""):
        message = f"Could not update problem {problem_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.problem_id = problem_id
