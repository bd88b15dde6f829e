from .config import (
    DEFAULT_PENALTY_PER_REJECTED_MS,
    DriverConfig,
    ScoringConfig,
)
from .ranking import assign_ranks, check_ranking, fold_submission, rank_teams, team_sort_key
from .reveal import RevealEngine, reveal_all
from .session import RevealSession
from .snapshot import build_final_state, build_initial_state, total_frozen
from .types import (
    ContestDescriptor,
    ContestState,
    Cursor,
    HighlightItem,
    ProblemDescriptor,
    ProblemState,
    ProblemStateKind,
    StepResult,
    SubmissionRecord,
    TeamDescriptor,
    TeamState,
)
from .validation import InputSanitizer, MalformedInputError, check_contest, parse_contest
from .views import board_rows, state_to_dict

__all__ = [
    "DEFAULT_PENALTY_PER_REJECTED_MS",
    "DriverConfig",
    "ScoringConfig",
    "assign_ranks",
    "check_ranking",
    "fold_submission",
    "rank_teams",
    "team_sort_key",
    "RevealEngine",
    "reveal_all",
    "RevealSession",
    "build_final_state",
    "build_initial_state",
    "total_frozen",
    "ContestDescriptor",
    "ContestState",
    "Cursor",
    "HighlightItem",
    "ProblemDescriptor",
    "ProblemState",
    "ProblemStateKind",
    "StepResult",
    "SubmissionRecord",
    "TeamDescriptor",
    "TeamState",
    "InputSanitizer",
    "MalformedInputError",
    "check_contest",
    "parse_contest",
    "board_rows",
    "state_to_dict",
]
