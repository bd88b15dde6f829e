import pytest

from resolver_core import (
    ContestDescriptor,
    MalformedInputError,
    ProblemDescriptor,
    RevealEngine,
    ScoringConfig,
    SubmissionRecord,
    TeamDescriptor,
    build_initial_state,
    total_frozen,
)

PROBLEMS = (ProblemDescriptor(id="P1", tag="A"), ProblemDescriptor(id="P2", tag="B"))
TEAMS = (
    TeamDescriptor(id="D", name="Delta"),
    TeamDescriptor(id="A", name="Alpha"),
    TeamDescriptor(id="C", name="Charlie"),
    TeamDescriptor(id="B", name="Bravo"),
)


def _sub(sid, team, problem, t, accepted):
    return SubmissionRecord(
        id=sid, team_id=team, problem_id=problem, submit_time_ms=t, accepted=accepted
    )


def _contest(submissions, *, teams=TEAMS, problems=PROBLEMS, duration=100, freeze=20, penalty=10):
    return ContestDescriptor(
        name="Test Cup",
        problems=problems,
        teams=teams,
        submissions=tuple(submissions),
        duration_ms=duration,
        penalty_per_rejected_ms=penalty,
        freeze_time_ms=freeze,
    )


SUBMISSIONS = [
    _sub("a4", "A", "P2", 85, True),
    _sub("a1", "A", "P1", 10, False),
    _sub("a2", "A", "P1", 20, True),
    _sub("a3", "A", "P1", 30, False),
    _sub("b1", "B", "P2", 50, False),
    _sub("b2", "B", "P2", 90, False),
    _sub("d1", "D", "P1", 40, False),
]


def _by_id(state):
    return {ts.team.id: ts for ts in state.team_states}


def test_visible_submissions_are_folded_and_frozen_ones_queued():
    state = build_initial_state(_contest(SUBMISSIONS))
    teams = _by_id(state)

    alpha = teams["A"]
    p1 = alpha.problem_state("P1")
    assert p1.state == "passed"
    assert p1.try_count == 2  # the rejection after acceptance is ignored
    assert p1.accept_time_ms == 20
    assert alpha.solved_count == 1
    assert alpha.penalty_ms == 10
    assert alpha.problem_state("P2").state == "pending"
    assert alpha.problem_state("P2").try_count == 0
    assert [s.id for s in alpha.pending_queue] == ["a4"]

    bravo = teams["B"]
    assert bravo.problem_state("P2").state == "pending"
    assert bravo.problem_state("P2").try_count == 1
    assert bravo.penalty_ms == 0

    assert teams["C"].problem_state("P1").state == "untouched"
    assert teams["D"].problem_state("P1").state == "failed"
    assert teams["D"].problem_state("P1").try_count == 1


def test_initial_order_and_ranks_break_ties_by_team_id():
    state = build_initial_state(_contest(SUBMISSIONS))
    assert [ts.team.id for ts in state.team_states] == ["A", "B", "C", "D"]
    assert [ts.rank for ts in state.team_states] == [1, 2, 3, 4]


def test_cursor_starts_on_lowest_ranked_team():
    state = build_initial_state(_contest(SUBMISSIONS))
    assert state.cursor.team_index == 0
    assert state.cursor.sub_step == 0
    assert state.cursor.position == 3
    assert state.focused_team.team.id == "D"
    assert total_frozen(state) == 2


def test_without_frozen_submissions_state_is_already_complete():
    subs = [_sub("x", "A", "P1", 10, True)]
    state = build_initial_state(_contest(subs))
    assert state.cursor.team_index == len(state.team_states)
    assert state.cursor.position is None
    assert state.is_complete
    assert RevealEngine(state).advance().done is True


def test_empty_contest_is_complete():
    state = build_initial_state(_contest([], teams=(), problems=()))
    assert state.team_states == []
    assert state.is_complete


def test_pending_queue_is_chronological_across_problems():
    subs = [
        _sub("late", "A", "P1", 99, True),
        _sub("early", "A", "P2", 81, False),
        _sub("mid", "A", "P2", 90, True),
    ]
    state = build_initial_state(_contest(subs))
    assert [s.id for s in _by_id(state)["A"].pending_queue] == ["early", "mid", "late"]


def test_freeze_threshold_is_inclusive():
    subs = [_sub("edge", "A", "P1", 80, True), _sub("before", "B", "P1", 79, True)]
    state = build_initial_state(_contest(subs))
    teams = _by_id(state)
    assert teams["A"].problem_state("P1").state == "pending"
    assert teams["B"].problem_state("P1").state == "passed"


def test_build_is_deterministic():
    contest = _contest(SUBMISSIONS)
    assert build_initial_state(contest) == build_initial_state(contest)


def test_count_accept_time_adds_solve_time_to_penalty():
    state = build_initial_state(
        _contest(SUBMISSIONS), ScoringConfig(count_accept_time=True)
    )
    assert _by_id(state)["A"].penalty_ms == 10 + 20


def test_share_tied_ranks():
    state = build_initial_state(_contest(SUBMISSIONS), ScoringConfig(share_tied_ranks=True))
    assert [ts.rank for ts in state.team_states] == [1, 2, 2, 2]


@pytest.mark.parametrize(
    "submissions,kwargs",
    [
        ([_sub("x", "Z", "P1", 10, True)], {}),
        ([_sub("x", "A", "P9", 10, True)], {}),
        ([], {"freeze": 101}),
        ([], {"duration": -1, "freeze": 0}),
        ([], {"penalty": -5}),
        ([_sub("x", "A", "P1", -3, True)], {}),
        ([], {"teams": (TeamDescriptor(id="A", name="x"), TeamDescriptor(id="A", name="y"))}),
    ],
)
def test_malformed_contest_raises(submissions, kwargs):
    with pytest.raises(MalformedInputError):
        build_initial_state(_contest(submissions, **kwargs))
