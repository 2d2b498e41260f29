"""Progress tracking for data structures and algorithms problem sheets."""

from .controller import ReconciliationController, ToggleState
from .errors import (
    NetworkError,
    NotFound,
    OperationInProgress,
    ServerError,
    SheetError,
    UnknownProblem,
    UpdateFailed,
)
from .events import ProgressEvents
from .models import (
    Difficulty,
    PersistedId,
    Problem,
    ProblemLinks,
    ProgressRecord,
    ProgressStats,
    TemporaryId,
    Topic,
)
from .stats import compute_global_stats, compute_topic_stats, resolve_global_stats
from .store import ProgressStore

__version__ = "0.1.0"
