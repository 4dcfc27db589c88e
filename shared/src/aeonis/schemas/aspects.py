"""Pydantic schemas for aspect data."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from aeonis.schemas.chart import Planet


class AspectType(str, Enum):
    """Ptolemaic aspects."""

    CONJUNCTION = "Conjunction"
    SEXTILE = "Sextile"
    SQUARE = "Square"
    TRINE = "Trine"
    OPPOSITION = "Opposition"


class Aspect(BaseModel):
    """An aspect between two planets of one position set."""

    model_config = {"frozen": True}

    planet1: Planet
    planet2: Planet
    type: AspectType
    exact_angle: float
    actual_angle: float = Field(ge=0.0, le=180.0)
    orb: float = Field(ge=0.0)
    is_exact: bool
    symbol: str
    interpretation: str
