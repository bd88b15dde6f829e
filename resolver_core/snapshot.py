"""Initial board snapshot (pure, no I/O).

build_initial_state() folds every submission made before the freeze into the
score, parks the frozen ones in each team's pending queue and ranks the
teams once. The engine in ``reveal.py`` takes over from there.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .config import DEFAULT_SCORING, ScoringConfig
from .ranking import check_ranking, fold_submission, rank_teams
from .types import ContestDescriptor, ContestState, Cursor, ProblemState, TeamState
from .validation import check_contest

logger = logging.getLogger(__name__)


def _fresh_team_states(contest: ContestDescriptor) -> Dict[str, TeamState]:
    return {
        team.id: TeamState(
            team=team,
            problem_states=[ProblemState(problem=p) for p in contest.problems],
        )
        for team in contest.teams
    }


def _fold_contest(
    contest: ContestDescriptor,
    freeze_threshold_ms: Optional[int],
    scoring: ScoringConfig,
) -> List[TeamState]:
    """Fold visible submissions, queue frozen ones; ``None`` threshold means nothing is frozen."""
    check_contest(contest)
    problem_index = {p.id: i for i, p in enumerate(contest.problems)}
    teams = _fresh_team_states(contest)

    # sorted() is stable: equal submit times keep their input order.
    for sub in sorted(contest.submissions, key=lambda s: s.submit_time_ms):
        team = teams[sub.team_id]
        if freeze_threshold_ms is not None and sub.submit_time_ms >= freeze_threshold_ms:
            team.pending_queue.append(sub)
            continue
        problem_state = team.problem_states[problem_index[sub.problem_id]]
        fold_submission(team, problem_state, sub, contest.penalty_per_rejected_ms, scoring)

    for team in teams.values():
        frozen_problems = {sub.problem_id for sub in team.pending_queue}
        for ps in team.problem_states:
            if ps.state == "passed":
                continue
            if ps.problem.id in frozen_problems:
                ps.state = "pending"
            elif ps.try_count > 0:
                ps.state = "failed"

    team_states = list(teams.values())
    rank_teams(team_states, scoring)
    check_ranking(team_states, scoring)
    return team_states


def build_initial_state(
    contest: ContestDescriptor, scoring: ScoringConfig | None = None
) -> ContestState:
    """Derive the ranked, partially frozen board the ceremony starts from.

    Args:
        contest: immutable contest input
        scoring: ranking policy; defaults to solved count then rejection penalty

    Returns:
        ContestState with the cursor on the lowest-ranked team, or already
        complete when no submission is frozen.

    Raises:
        MalformedInputError: dangling team/problem ids or contradictory time bounds
    """
    scoring = scoring or DEFAULT_SCORING
    team_states = _fold_contest(contest, contest.freeze_threshold_ms, scoring)

    frozen_total = sum(len(ts.pending_queue) for ts in team_states)
    if frozen_total == 0:
        cursor = Cursor(team_index=len(team_states), sub_step=0, position=None)
    else:
        cursor = Cursor(team_index=0, sub_step=0, position=len(team_states) - 1)

    logger.debug(
        f"Built snapshot for '{contest.name}': {len(team_states)} teams, "
        f"{frozen_total} frozen submissions"
    )
    return ContestState(
        contest=contest, team_states=team_states, cursor=cursor, scoring=scoring
    )


def build_final_state(
    contest: ContestDescriptor, scoring: ScoringConfig | None = None
) -> ContestState:
    """Board with every submission visible, i.e. what a completed reveal must end on."""
    scoring = scoring or DEFAULT_SCORING
    team_states = _fold_contest(contest, None, scoring)
    cursor = Cursor(team_index=len(team_states), sub_step=0, position=None)
    return ContestState(
        contest=contest, team_states=team_states, cursor=cursor, scoring=scoring
    )


def total_frozen(state: ContestState) -> int:
    return sum(len(ts.pending_queue) for ts in state.team_states)
