"""Pydantic schemas for astronomical events and CMS event records."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from aeonis.schemas.chart import Planet


class AstroEventType(str, Enum):
    """Kinds of events found by the event horizon search."""

    SOLAR_ECLIPSE = "solar_eclipse"
    LUNAR_ECLIPSE = "lunar_eclipse"
    RETROGRADE_START = "retrograde_start"
    RETROGRADE_END = "retrograde_end"
    CONJUNCTION = "conjunction"
    OPPOSITION = "opposition"


class AstroEvent(BaseModel):
    """An upcoming astronomical event."""

    model_config = {"frozen": True}

    id: str
    type: AstroEventType
    title: str
    description: str = ""
    date: datetime
    planet: Planet | None = None
    planet2: Planet | None = None
    magnitude: float | None = None


class CosmicEvent(BaseModel):
    """CMS write-up of an astronomical event (read-only)."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str = Field(default="", alias="_id")
    title: str
    aspect_key: str | None = Field(default=None, alias="aspectKey")
    magickal_directive: str | None = Field(default=None, alias="magickalDirective")
    warning: str | None = None
    supported_intents: list[str] = Field(default_factory=list, alias="supportedIntents")
    is_active: bool = True


class GlobalEvent(BaseModel):
    """CMS community event carrying an XP multiplier (read-only)."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str = Field(default="", alias="_id")
    title: str
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    event_type: str | None = None
    xp_multiplier: float | None = None
    is_active: bool = False
