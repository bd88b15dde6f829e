"""Read-only projections of the board for renderers (no mutation, plain dicts)."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .types import ContestState, HighlightItem, ProblemState, ProblemStateKind, TeamState

MS_PER_MINUTE = 60_000

STATE_COLORS: Dict[ProblemStateKind, Optional[str]] = {
    "passed": "green",
    "failed": "red",
    "pending": "orange",
    "untouched": None,
}


def format_score(team: TeamState) -> str:
    return f"{team.solved_count} - {team.penalty_ms // MS_PER_MINUTE}"


def format_cell(problem_state: ProblemState) -> str:
    if problem_state.state == "passed" and problem_state.accept_time_ms is not None:
        return f"{problem_state.try_count} - {problem_state.accept_time_ms // MS_PER_MINUTE}"
    return f"{problem_state.try_count}"


def board_rows(state: ContestState, highlight: HighlightItem | None = None) -> List[Dict[str, Any]]:
    """One row per team in rank order, flagged with focus and highlight."""
    rows: List[Dict[str, Any]] = []
    for pos, team in enumerate(state.team_states):
        cells = []
        for ps in team.problem_states:
            cells.append(
                {
                    "problemId": ps.problem.id,
                    "state": ps.state,
                    "color": STATE_COLORS[ps.state],
                    "text": format_cell(ps),
                    "highlighted": bool(
                        highlight
                        and highlight.team_id == team.team.id
                        and highlight.problem_id == ps.problem.id
                    ),
                }
            )
        rows.append(
            {
                "rank": team.rank,
                "teamId": team.team.id,
                "teamName": team.team.name,
                "score": format_score(team),
                "focused": pos == state.cursor.position,
                "cells": cells,
            }
        )
    return rows


def state_to_dict(state: ContestState) -> Dict[str, Any]:
    """JSON-friendly snapshot of the board; pending queues are reported by size only."""
    contest = state.contest
    return {
        "name": contest.name,
        "problems": [
            {"id": p.id, "tag": p.tag, "color": p.color} for p in contest.problems
        ],
        "cursor": {
            "teamIndex": state.cursor.team_index,
            "subStep": state.cursor.sub_step,
            "position": state.cursor.position,
        },
        "complete": state.is_complete,
        "teamStates": [
            {
                "teamId": ts.team.id,
                "teamName": ts.team.name,
                "rank": ts.rank,
                "solvedCount": ts.solved_count,
                "penaltyMs": ts.penalty_ms,
                "pendingCount": len(ts.pending_queue),
                "problemStates": [
                    {
                        "problemId": ps.problem.id,
                        "state": ps.state,
                        "tryCount": ps.try_count,
                        "acceptTimeMs": ps.accept_time_ms,
                    }
                    for ps in ts.problem_states
                ],
            }
            for ts in state.team_states
        ],
    }
