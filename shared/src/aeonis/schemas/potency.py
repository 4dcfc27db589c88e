"""Pydantic schemas for potency scoring."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from aeonis.schemas.chart import Planet


class PotencyStrategy(str, Enum):
    """Scoring formula selector."""

    ADDITIVE = "additive"
    WEIGHTED = "weighted"
    INTENT = "intent"


class PowerBreakdown(BaseModel):
    """Result of the additive or weighted-composite strategy.

    For the weighted strategy ``transit_score``, ``dignity_score`` and
    ``rune_modifier`` are the clamped 0-100 sub-scores. For the additive
    strategy they are the signed point contributions added to the base.
    """

    model_config = {"frozen": True}

    strategy: PotencyStrategy
    total_score: int = Field(ge=0, le=100)
    transit_score: int
    dignity_score: int
    rune_modifier: int
    moon_phase_bonus: int = 0
    planetary_hour_bonus: int = 0
    stasis_multiplier: float = 1.0
    details: list[str] = Field(default_factory=list, max_length=6)


class IntentPotencyReport(BaseModel):
    """Intent-based potency report for the current planetary hour."""

    model_config = {"frozen": True}

    strategy: PotencyStrategy = PotencyStrategy.INTENT
    priority: int = Field(ge=1, le=3)
    headline: str
    message: str
    recommendation: str
    suggested_ritual_id: str | None = None
    intent: str | None = None
    hour_planet: Planet
    day_ruler: Planet
    planet_color: str
    potency_score: int = Field(ge=60, le=100)
    collective_boost: float = 1.0
    details: list[str] = Field(default_factory=list, max_length=6)


class PowerLabel(BaseModel):
    """Display label for a potency score."""

    label: str
    color: str
