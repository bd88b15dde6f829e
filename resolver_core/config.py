"""
Configuration for the resolver core and for the driver that paces it.

ScoringConfig tunes ranking policy and is read by the core.
DriverConfig is the driver-side surface (auto reveal, pacing, cosmetic
shining); the core never reads it, so it cannot change reveal semantics.
"""
from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

# Classic 20 minutes per rejected attempt.
DEFAULT_PENALTY_PER_REJECTED_MS = 20 * 60 * 1000

# Driver pacing: auto reveal tick and highlight blink.
DEFAULT_REVEAL_INTERVAL_SEC = 2.5
DEFAULT_SHINE_INTERVAL_SEC = 0.4


@dataclass(frozen=True)
class ScoringConfig:
    """Ranking policy. Rejected attempts cost penalty only once their problem is solved."""

    # Add the acceptance time of each solved problem to the team penalty.
    count_accept_time: bool = False
    # Teams tied on (solved, penalty) share a rank instead of 1..N by team id.
    share_tied_ranks: bool = False


DEFAULT_SCORING = ScoringConfig()


class DriverConfig(BaseModel):
    """Settings consumed by the ceremony driver, never by the engine."""

    autoReveal: bool = Field(False, description="Advance on a timer instead of manually")
    speedFactor: float = Field(
        1.0, gt=0.0, le=100.0, description="Scales every driver-side delay"
    )
    shiningBeforeReveal: bool = Field(
        True, description="Blink the highlighted cell before showing its result"
    )
    revealIntervalSec: float = Field(DEFAULT_REVEAL_INTERVAL_SEC, gt=0.0, le=600.0)
    shineIntervalSec: float = Field(DEFAULT_SHINE_INTERVAL_SEC, gt=0.0, le=60.0)

    model_config = ConfigDict(extra="ignore", frozen=True)
