"""Type definitions for contest descriptors, board state and reveal steps."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

from .config import ScoringConfig

ProblemStateKind = Literal["untouched", "pending", "failed", "passed"]


@dataclass(frozen=True)
class ProblemDescriptor:
    id: str
    tag: str
    color: Optional[str] = None


@dataclass(frozen=True)
class TeamDescriptor:
    id: str
    name: str


@dataclass(frozen=True)
class SubmissionRecord:
    id: str
    team_id: str
    problem_id: str
    submit_time_ms: int
    accepted: bool


@dataclass(frozen=True)
class ContestDescriptor:
    """
    Immutable contest input.

    Submissions with ``submit_time_ms >= duration_ms - freeze_time_ms`` are
    frozen: hidden from the board until revealed.
    """
    problems: Tuple[ProblemDescriptor, ...]
    teams: Tuple[TeamDescriptor, ...]
    submissions: Tuple[SubmissionRecord, ...]
    duration_ms: int
    penalty_per_rejected_ms: int
    freeze_time_ms: int
    name: str = ""

    @property
    def freeze_threshold_ms(self) -> int:
        return self.duration_ms - self.freeze_time_ms


@dataclass
class ProblemState:
    problem: ProblemDescriptor
    state: ProblemStateKind = "untouched"
    # Counted attempts so far (visible + revealed), the accepting one included.
    try_count: int = 0
    accept_time_ms: Optional[int] = None


@dataclass
class TeamState:
    team: TeamDescriptor
    problem_states: List[ProblemState]
    rank: int = 0
    solved_count: int = 0
    penalty_ms: int = 0
    # Frozen, not yet revealed submissions ordered by submit time.
    pending_queue: List[SubmissionRecord] = field(default_factory=list)

    def problem_state(self, problem_id: str) -> ProblemState:
        for ps in self.problem_states:
            if ps.problem.id == problem_id:
                return ps
        raise KeyError(problem_id)


@dataclass
class Cursor:
    """
    Reveal progress.

    - team_index: teams fully resolved, counted from the bottom of the board;
      never decreases, reveal is complete once it equals the team count
    - sub_step: steps taken on the focused team, reset when focus changes
    - position: row of the focused team in ``team_states`` (None when complete)
    """
    team_index: int = 0
    sub_step: int = 0
    position: Optional[int] = None


@dataclass
class ContestState:
    contest: ContestDescriptor
    # Ordering is the rank order: index 0 holds rank 1.
    team_states: List[TeamState]
    cursor: Cursor
    # Policy the board was built with; the reveal engine folds under the same one.
    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    @property
    def is_complete(self) -> bool:
        return self.cursor.team_index >= len(self.team_states)

    @property
    def focused_team(self) -> Optional[TeamState]:
        if self.cursor.position is None:
            return None
        return self.team_states[self.cursor.position]

    def team_state(self, team_id: str) -> TeamState:
        for ts in self.team_states:
            if ts.team.id == team_id:
                return ts
        raise KeyError(team_id)


@dataclass(frozen=True)
class HighlightItem:
    team_id: str
    problem_id: str
    accepted: bool


@dataclass(frozen=True)
class StepResult:
    done: bool
    highlight: Optional[HighlightItem] = None
