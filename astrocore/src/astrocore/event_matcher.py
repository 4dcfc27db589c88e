"""Keyword matching between event horizon entries and CMS cosmic events.

CMS titles carry flavor text ("Total Lunar Eclipse (Shadow Purge)"), so
matching never relies on exact strings: it scores event-type keywords,
planet names (with synonyms) and shared title words.
"""

from __future__ import annotations

import logging
import re

from aeonis.schemas.events import AstroEvent, AstroEventType, CosmicEvent

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 25

# Any one keyword set, all words present, signals the event type
EVENT_TYPE_KEYWORDS: dict[AstroEventType, list[list[str]]] = {
    AstroEventType.CONJUNCTION: [["conjunction"], ["conjunct"]],
    AstroEventType.OPPOSITION: [["opposition"], ["oppose"]],
    AstroEventType.RETROGRADE_START: [["retrograde"]],
    AstroEventType.RETROGRADE_END: [["direct"], ["retrograde", "end"], ["stations direct"]],
    AstroEventType.SOLAR_ECLIPSE: [["solar", "eclipse"], ["eclipse", "sun"]],
    AstroEventType.LUNAR_ECLIPSE: [["lunar", "eclipse"], ["eclipse", "moon"]],
}

PLANET_SYNONYMS: dict[str, list[str]] = {
    "moon": ["moon", "lunar"],
    "sun": ["sun", "solar"],
}

ECLIPSE_TYPES = frozenset({AstroEventType.SOLAR_ECLIPSE, AstroEventType.LUNAR_ECLIPSE})

# (type and planets, type only without planets, eclipse type only, planets only)
TITLE_POINTS = (100, 50, 80, 30)
ASPECT_KEY_POINTS = (80, 40, 60, 25)
SHARED_TOKEN_POINTS = 5

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lowercase, drop parenthetical flavor text and punctuation, collapse spaces."""
    text = _PARENTHETICAL.sub("", text.lower())
    text = _NON_ALNUM.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def implied_planets(event: AstroEvent) -> list[str]:
    planets = [p.value.lower() for p in (event.planet, event.planet2) if p is not None]
    if event.type == AstroEventType.SOLAR_ECLIPSE and "sun" not in planets:
        planets.append("sun")
    if event.type == AstroEventType.LUNAR_ECLIPSE and "moon" not in planets:
        planets.append("moon")
    return planets


def _has_planet(text: str, planet: str) -> bool:
    return any(syn in text for syn in PLANET_SYNONYMS.get(planet, [planet]))


def _field_score(
    text: str,
    event_type: AstroEventType,
    planets: list[str],
    points: tuple[int, int, int, int],
) -> int:
    both, type_only, eclipse_only, planets_only = points
    has_type = any(all(kw in text for kw in kw_set) for kw_set in EVENT_TYPE_KEYWORDS.get(event_type, []))
    has_planets = bool(planets) and all(_has_planet(text, p) for p in planets)

    if has_type and has_planets:
        return both
    if has_type and not planets:
        return type_only
    if has_type:
        # Wrong planets only pass for eclipses, whose keywords encode the body
        return eclipse_only if event_type in ECLIPSE_TYPES else 0
    if has_planets:
        return planets_only
    return 0


def score_match(event: AstroEvent, cosmic_event: CosmicEvent) -> int:
    """Match score of a CMS record against an event; 0 means unrelated."""
    planets = implied_planets(event)
    cms_title = normalize(cosmic_event.title)

    score = _field_score(cms_title, event.type, planets, TITLE_POINTS)
    if cosmic_event.aspect_key:
        score += _field_score(normalize(cosmic_event.aspect_key), event.type, planets, ASPECT_KEY_POINTS)

    event_tokens = [t for t in normalize(event.title).split(" ") if len(t) > 2]
    cms_tokens = [t for t in cms_title.split(" ") if len(t) > 2]
    shared = [t for t in event_tokens if t in cms_tokens]
    if len(shared) >= 2:
        score += len(shared) * SHARED_TOKEN_POINTS
    return score


def match_event_with_cms(event: AstroEvent, cosmic_events: list[CosmicEvent]) -> CosmicEvent | None:
    """Best-scoring CMS record for ``event``, or None below the threshold."""
    best: CosmicEvent | None = None
    best_score = 0
    for cosmic_event in cosmic_events:
        score = score_match(event, cosmic_event)
        if score > best_score:
            best, best_score = cosmic_event, score
    if best is None or best_score < MATCH_THRESHOLD:
        return None
    logger.debug("Matched %s to CMS %r (score %d)", event.id, best.title, best_score)
    return best


def build_cosmic_event_map(
    events: list[AstroEvent],
    cosmic_events: list[CosmicEvent],
) -> dict[str, CosmicEvent]:
    """Map event ids to their matched CMS records."""
    matched: dict[str, CosmicEvent] = {}
    if not events or not cosmic_events:
        return matched
    for event in events:
        cosmic_event = match_event_with_cms(event, cosmic_events)
        if cosmic_event is not None:
            matched[event.id] = cosmic_event
    return matched
