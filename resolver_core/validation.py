"""
Input validation for contest payloads using Pydantic v2
Validates the contest DTO and cross-checks the resulting descriptor
"""

import logging
from typing import Any, Dict, List, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .config import DEFAULT_PENALTY_PER_REJECTED_MS
from .types import ContestDescriptor, ProblemDescriptor, SubmissionRecord, TeamDescriptor

logger = logging.getLogger(__name__)


class MalformedInputError(ValueError):
    """The contest descriptor is internally inconsistent; fatal to the session."""


# ==================== SANITIZER ====================


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_string(value: str, max_length: int = 255) -> str:
        """Sanitize string input"""
        if not isinstance(value, str):
            return str(value)[:max_length]

        value = value.strip()
        value = value[:max_length]
        value = value.replace("\0", "")
        return value

    @staticmethod
    def sanitize_team_name(name: str) -> str:
        return InputSanitizer.sanitize_string(name, 255)

    @staticmethod
    def sanitize_tag(tag: str) -> str:
        return InputSanitizer.sanitize_string(tag, 16)


# ==================== PAYLOAD MODELS ====================


class ProblemModel(BaseModel):
    id: str = Field(..., min_length=1, max_length=64, description="Problem id")
    tag: str = Field(..., min_length=1, max_length=16, description="Column label, e.g. 'A'")
    color: Optional[str] = Field(None, max_length=32, description="Balloon color")

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator("tag")
    @classmethod
    def validate_tag(cls, v: str) -> str:
        v = InputSanitizer.sanitize_tag(v)
        if len(v) == 0:
            raise ValueError("tag cannot be empty")
        return v


class TeamModel(BaseModel):
    id: str = Field(..., min_length=1, max_length=64, description="Team id")
    name: str = Field(..., max_length=255, description="Display name")

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = InputSanitizer.sanitize_team_name(v)
        if len(v) == 0:
            raise ValueError("team name cannot be empty")
        return v


class SubmissionModel(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    teamId: str = Field(..., min_length=1, max_length=64)
    problemId: str = Field(..., min_length=1, max_length=64)
    submitTime: int = Field(..., ge=0, description="Milliseconds since contest start")
    accepted: bool

    model_config = ConfigDict(coerce_numbers_to_str=True)


class ContestModel(BaseModel):
    """Contest DTO as handed over by the data-loading collaborator"""

    name: str = Field("", max_length=255)
    problems: List[ProblemModel] = Field(default_factory=list)
    teams: List[TeamModel] = Field(default_factory=list)
    submissions: List[SubmissionModel] = Field(default_factory=list)
    duration: int = Field(..., ge=0, description="Contest length in ms")
    penaltyTime: int = Field(
        DEFAULT_PENALTY_PER_REJECTED_MS, ge=0, description="Penalty per rejected attempt in ms"
    )
    freezeTime: int = Field(..., ge=0, description="Length of the frozen window in ms")

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return InputSanitizer.sanitize_string(v, 255)

    @model_validator(mode="after")
    def validate_time_bounds(self) -> Self:
        if self.freezeTime > self.duration:
            raise ValueError("freezeTime cannot exceed duration")
        return self

    def to_descriptor(self) -> ContestDescriptor:
        return ContestDescriptor(
            name=self.name,
            problems=tuple(
                ProblemDescriptor(id=p.id, tag=p.tag, color=p.color) for p in self.problems
            ),
            teams=tuple(TeamDescriptor(id=t.id, name=t.name) for t in self.teams),
            submissions=tuple(
                SubmissionRecord(
                    id=s.id,
                    team_id=s.teamId,
                    problem_id=s.problemId,
                    submit_time_ms=s.submitTime,
                    accepted=s.accepted,
                )
                for s in self.submissions
            ),
            duration_ms=self.duration,
            penalty_per_rejected_ms=self.penaltyTime,
            freeze_time_ms=self.freezeTime,
        )


# ==================== DESCRIPTOR CHECKS ====================


def check_contest(contest: ContestDescriptor) -> None:
    """
    Cross-check a descriptor before any state is derived from it.

    Raises:
        MalformedInputError: on negative or contradictory time bounds,
        duplicate team/problem ids, or submissions referencing unknown ids.
    """
    if contest.duration_ms < 0 or contest.freeze_time_ms < 0:
        raise MalformedInputError("contest time bounds must be non-negative")
    if contest.penalty_per_rejected_ms < 0:
        raise MalformedInputError("penalty per rejected attempt must be non-negative")
    if contest.freeze_time_ms > contest.duration_ms:
        raise MalformedInputError(
            f"freeze time {contest.freeze_time_ms} exceeds duration {contest.duration_ms}"
        )

    team_ids = [t.id for t in contest.teams]
    if len(set(team_ids)) != len(team_ids):
        raise MalformedInputError("duplicate team id")
    problem_ids = [p.id for p in contest.problems]
    if len(set(problem_ids)) != len(problem_ids):
        raise MalformedInputError("duplicate problem id")

    known_teams = set(team_ids)
    known_problems = set(problem_ids)
    for sub in contest.submissions:
        if sub.team_id not in known_teams:
            raise MalformedInputError(f"submission {sub.id} references unknown team {sub.team_id}")
        if sub.problem_id not in known_problems:
            raise MalformedInputError(
                f"submission {sub.id} references unknown problem {sub.problem_id}"
            )
        if sub.submit_time_ms < 0:
            raise MalformedInputError(f"submission {sub.id} has a negative submit time")


def parse_contest(payload: Dict[str, Any]) -> ContestDescriptor:
    """
    Validate a contest DTO and convert it to a descriptor

    Returns:
        ContestDescriptor: immutable contest input for the snapshot builder

    Raises:
        MalformedInputError: If validation fails
    """
    try:
        model = ContestModel(**payload)
    except ValidationError as e:
        logger.warning(f"Contest payload validation failed: {e}")
        raise MalformedInputError(f"Invalid contest payload: {str(e)}") from e
    except TypeError as e:
        logger.warning(f"Contest payload is not a mapping: {e}")
        raise MalformedInputError("Invalid contest payload: expected an object") from e

    contest = model.to_descriptor()
    check_contest(contest)
    return contest


# ==================== EXPORT ====================

__all__ = [
    "ContestModel",
    "InputSanitizer",
    "MalformedInputError",
    "ProblemModel",
    "SubmissionModel",
    "TeamModel",
    "check_contest",
    "parse_contest",
]
