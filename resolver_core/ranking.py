"""Solved-count/penalty ranking shared by the snapshot builder and the reveal engine.

Single source of truth for scoring:
- Comparator: more solved problems first; then lower penalty; then team id.
- Fold: one submission at a time, identical for visible and revealed records.
- A rejection only costs penalty once the problem is solved, so folding a
  submission can never move a team down the board.
"""
from __future__ import annotations

from typing import List, Sequence

from .config import DEFAULT_SCORING, ScoringConfig
from .types import ProblemState, SubmissionRecord, TeamState


def team_sort_key(team: TeamState) -> tuple[int, int, str]:
    return (-team.solved_count, team.penalty_ms, team.team.id)


def _score_key(team: TeamState) -> tuple[int, int]:
    return (team.solved_count, team.penalty_ms)


def assign_ranks(team_states: Sequence[TeamState], *, share_tied_ranks: bool = False) -> None:
    """Write 1-based ranks for an already sorted team list."""
    for pos, team in enumerate(team_states):
        if (
            share_tied_ranks
            and pos > 0
            and _score_key(team_states[pos - 1]) == _score_key(team)
        ):
            team.rank = team_states[pos - 1].rank
        else:
            team.rank = pos + 1


def rank_teams(team_states: List[TeamState], scoring: ScoringConfig = DEFAULT_SCORING) -> None:
    """Sort ``team_states`` in place by the comparator and refresh every rank."""
    team_states.sort(key=team_sort_key)
    assign_ranks(team_states, share_tied_ranks=scoring.share_tied_ranks)


def fold_submission(
    team: TeamState,
    problem_state: ProblemState,
    submission: SubmissionRecord,
    penalty_per_rejected_ms: int,
    scoring: ScoringConfig = DEFAULT_SCORING,
) -> bool:
    """
    Apply one submission to a team's score.

    Returns False when the submission is discarded because the problem is
    already solved; the state is left untouched in that case.

    The problem kind is not decided here for rejections: whether an unsolved
    problem reads as pending or failed depends on what is still frozen, which
    only the caller knows.
    """
    if problem_state.state == "passed":
        return False

    problem_state.try_count += 1
    if submission.accepted:
        rejected_before = problem_state.try_count - 1
        problem_state.state = "passed"
        problem_state.accept_time_ms = submission.submit_time_ms
        team.solved_count += 1
        team.penalty_ms += rejected_before * penalty_per_rejected_ms
        if scoring.count_accept_time:
            team.penalty_ms += submission.submit_time_ms
    return True


def check_ranking(team_states: Sequence[TeamState], scoring: ScoringConfig = DEFAULT_SCORING) -> None:
    """Raise AssertionError when order, ranks or scores are inconsistent."""
    for pos, team in enumerate(team_states):
        if team.penalty_ms < 0:
            raise AssertionError(f"negative penalty for team {team.team.id}")
        if pos == 0:
            if team.rank != 1:
                raise AssertionError(f"top team {team.team.id} has rank {team.rank}")
            continue
        prev = team_states[pos - 1]
        if team_sort_key(prev) >= team_sort_key(team):
            raise AssertionError(
                f"teams out of order at position {pos}: {prev.team.id} / {team.team.id}"
            )
        tied = _score_key(prev) == _score_key(team)
        expected = prev.rank if (tied and scoring.share_tied_ranks) else pos + 1
        if team.rank != expected:
            raise AssertionError(
                f"team {team.team.id} at position {pos} has rank {team.rank}, expected {expected}"
            )
