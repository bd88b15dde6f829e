from resolver_core import (
    ContestDescriptor,
    HighlightItem,
    ProblemDescriptor,
    RevealEngine,
    SubmissionRecord,
    TeamDescriptor,
    board_rows,
    build_initial_state,
    state_to_dict,
)

MINUTE = 60_000


def _state():
    contest = ContestDescriptor(
        name="Finals",
        problems=(
            ProblemDescriptor(id="P1", tag="A", color="red"),
            ProblemDescriptor(id="P2", tag="B"),
            ProblemDescriptor(id="P3", tag="C"),
        ),
        teams=(TeamDescriptor(id="A", name="Alpha"), TeamDescriptor(id="B", name="Bravo")),
        submissions=(
            SubmissionRecord("1", "A", "P1", 5 * MINUTE, False),
            SubmissionRecord("2", "A", "P1", 42 * MINUTE, True),
            SubmissionRecord("3", "A", "P2", 50 * MINUTE, False),
            SubmissionRecord("4", "B", "P3", 290 * MINUTE, True),
        ),
        duration_ms=300 * MINUTE,
        penalty_per_rejected_ms=20 * MINUTE,
        freeze_time_ms=60 * MINUTE,
    )
    return build_initial_state(contest)


def test_board_rows_render_scores_and_cells():
    rows = board_rows(_state())
    alpha, bravo = rows
    assert alpha["rank"] == 1
    assert alpha["teamName"] == "Alpha"
    assert alpha["score"] == "1 - 20"
    assert alpha["focused"] is False
    assert [c["color"] for c in alpha["cells"]] == ["green", "red", None]
    assert [c["text"] for c in alpha["cells"]] == ["2 - 42", "1", "0"]

    assert bravo["focused"] is True
    assert bravo["cells"][2]["state"] == "pending"
    assert bravo["cells"][2]["color"] == "orange"
    assert not any(c["highlighted"] for row in rows for c in row["cells"])


def test_board_rows_mark_highlighted_cell():
    state = _state()
    step = RevealEngine(state).advance()
    assert step.highlight == HighlightItem(team_id="B", problem_id="P3", accepted=True)
    rows = board_rows(state, step.highlight)
    highlighted = [
        (row["teamId"], c["problemId"]) for row in rows for c in row["cells"] if c["highlighted"]
    ]
    assert highlighted == [("B", "P3")]


def test_state_to_dict_snapshot():
    data = state_to_dict(_state())
    assert data["name"] == "Finals"
    assert data["cursor"] == {"teamIndex": 0, "subStep": 0, "position": 1}
    assert data["complete"] is False
    assert data["problems"][0] == {"id": "P1", "tag": "A", "color": "red"}
    bravo = data["teamStates"][1]
    assert bravo["teamId"] == "B"
    assert bravo["pendingCount"] == 1
    assert bravo["problemStates"][2] == {
        "problemId": "P3",
        "state": "pending",
        "tryCount": 0,
        "acceptTimeMs": None,
    }
