"""Stepwise reveal engine for the frozen part of the board.

The engine owns a ContestState and mutates it in place, one atomic action per
advance() call, walking the board from the lowest-ranked team up to rank 1:

- the focused team still has frozen submissions: reveal the earliest one,
  re-rank, and follow the team if it moved up
- a moved-up team with nothing left hands focus back to the bottom-most
  unresolved row in the same call
- the focused team has nothing left: it is resolved, focus moves one row up
- every team resolved: done; further calls are harmless no-ops

A reveal can only improve the revealed team, so teams below the bottom-most
unresolved row never change again.
"""
from __future__ import annotations

import logging

from .ranking import check_ranking, fold_submission, rank_teams
from .types import ContestState, HighlightItem, StepResult, TeamState

logger = logging.getLogger(__name__)


class RevealEngine:
    """Reveal state machine (Resolving -> Complete).

    Submissions are folded under the scoring policy recorded on the state,
    the one the board was built with.

    Callers must serialize advance(); there is no internal locking.
    """

    def __init__(self, state: ContestState) -> None:
        self._state = state
        self._scoring = state.scoring
        self._complete = state.is_complete
        if self._complete:
            state.cursor.position = None

    @property
    def done(self) -> bool:
        return self._complete

    def get_state(self) -> ContestState:
        """Live state; read it between advance() calls, do not mutate it."""
        return self._state

    def advance(self) -> StepResult:
        if self._complete:
            return StepResult(done=True, highlight=None)

        team = self._state.focused_team
        if team is None:
            return self._finish()
        if team.pending_queue:
            return self._reveal_next(team)
        return self._resolve_focused()

    def _bottom_position(self) -> int:
        return len(self._state.team_states) - 1 - self._state.cursor.team_index

    def _position_of(self, team: TeamState) -> int:
        for pos, candidate in enumerate(self._state.team_states):
            if candidate is team:
                return pos
        raise AssertionError(f"team {team.team.id} vanished from the board")

    def _reveal_next(self, team: TeamState) -> StepResult:
        state = self._state
        cursor = state.cursor
        sub = team.pending_queue.pop(0)
        problem_state = team.problem_state(sub.problem_id)
        old_position = cursor.position
        old_rank = team.rank

        counted = fold_submission(
            team, problem_state, sub, state.contest.penalty_per_rejected_ms, self._scoring
        )
        if counted and problem_state.state != "passed":
            still_frozen = any(q.problem_id == sub.problem_id for q in team.pending_queue)
            problem_state.state = "pending" if still_frozen else "failed"

        rank_teams(state.team_states, self._scoring)
        check_ranking(state.team_states, self._scoring)

        new_position = self._position_of(team)
        assert old_position is not None and new_position <= old_position
        assert team.rank <= old_rank

        cursor.sub_step += 1
        if not team.pending_queue and new_position != self._bottom_position():
            # Moved-up team is done; resume at the lowest unresolved row.
            cursor.position = self._bottom_position()
            cursor.sub_step = 0
        else:
            cursor.position = new_position

        if not counted:
            logger.debug(
                f"Discarded submission {sub.id} of team {team.team.id}: "
                f"problem {sub.problem_id} already solved"
            )
            return StepResult(done=False, highlight=None)

        logger.debug(
            f"Revealed submission {sub.id}: team {team.team.id} problem {sub.problem_id} "
            f"{'accepted' if sub.accepted else 'rejected'}, rank {old_rank} -> {team.rank}"
        )
        return StepResult(
            done=False,
            highlight=HighlightItem(
                team_id=team.team.id, problem_id=sub.problem_id, accepted=sub.accepted
            ),
        )

    def _resolve_focused(self) -> StepResult:
        cursor = self._state.cursor
        assert cursor.position == self._bottom_position()
        cursor.team_index += 1
        cursor.sub_step = 0
        if cursor.team_index >= len(self._state.team_states):
            return self._finish()
        cursor.position = self._bottom_position()
        return StepResult(done=False, highlight=None)

    def _finish(self) -> StepResult:
        cursor = self._state.cursor
        cursor.team_index = len(self._state.team_states)
        cursor.position = None
        cursor.sub_step = 0
        self._complete = True
        logger.info(f"Reveal complete for '{self._state.contest.name}'")
        return StepResult(done=True, highlight=None)


def reveal_all(engine: RevealEngine, max_steps: int | None = None) -> list[StepResult]:
    """Drive an engine to completion and return every step result, final one included."""
    steps: list[StepResult] = []
    while max_steps is None or len(steps) < max_steps:
        result = engine.advance()
        steps.append(result)
        if result.done:
            break
    return steps
