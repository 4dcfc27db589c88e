"""Essential dignities: domicile, exaltation, triplicity, term, face."""

from __future__ import annotations

from aeonis.schemas.chart import EssentialDignity, Planet, Sect, ZodiacSign

from astrocore.bodies import POINTS, sign_index

S = ZodiacSign
P = Planet

# One ruler per sign
DOMICILE: dict[ZodiacSign, Planet] = {
    S.ARIES: P.MARS,
    S.TAURUS: P.VENUS,
    S.GEMINI: P.MERCURY,
    S.CANCER: P.MOON,
    S.LEO: P.SUN,
    S.VIRGO: P.MERCURY,
    S.LIBRA: P.VENUS,
    S.SCORPIO: P.MARS,
    S.SAGITTARIUS: P.JUPITER,
    S.CAPRICORN: P.SATURN,
    S.AQUARIUS: P.SATURN,
    S.PISCES: P.JUPITER,
}

EXALTATION: dict[ZodiacSign, Planet | None] = {
    S.ARIES: P.SUN,
    S.TAURUS: P.MOON,
    S.GEMINI: None,
    S.CANCER: P.JUPITER,
    S.LEO: None,
    S.VIRGO: P.MERCURY,
    S.LIBRA: P.SATURN,
    S.SCORPIO: None,
    S.SAGITTARIUS: None,
    S.CAPRICORN: P.MARS,
    S.AQUARIUS: None,
    S.PISCES: P.VENUS,
}

DETRIMENT: dict[ZodiacSign, Planet] = {
    S.ARIES: P.VENUS,
    S.TAURUS: P.MARS,
    S.GEMINI: P.JUPITER,
    S.CANCER: P.SATURN,
    S.LEO: P.SATURN,
    S.VIRGO: P.JUPITER,
    S.LIBRA: P.MARS,
    S.SCORPIO: P.VENUS,
    S.SAGITTARIUS: P.MERCURY,
    S.CAPRICORN: P.MOON,
    S.AQUARIUS: P.SUN,
    S.PISCES: P.MERCURY,
}

FALL: dict[ZodiacSign, Planet | None] = {
    S.ARIES: P.SATURN,
    S.TAURUS: None,
    S.GEMINI: None,
    S.CANCER: P.MARS,
    S.LEO: None,
    S.VIRGO: P.VENUS,
    S.LIBRA: P.SUN,
    S.SCORPIO: P.MOON,
    S.SAGITTARIUS: None,
    S.CAPRICORN: P.JUPITER,
    S.AQUARIUS: None,
    S.PISCES: P.MERCURY,
}

ELEMENTS = ("Fire", "Earth", "Air", "Water")

# Element -> (day ruler, night ruler)
TRIPLICITY: dict[str, tuple[Planet, Planet]] = {
    "Fire": (P.SUN, P.JUPITER),
    "Earth": (P.VENUS, P.MOON),
    "Air": (P.SATURN, P.MERCURY),
    "Water": (P.VENUS, P.MARS),
}

# Egyptian terms: (ruler, start degree, end degree)
TERMS: dict[ZodiacSign, list[tuple[Planet, int, int]]] = {
    S.ARIES: [(P.JUPITER, 0, 6), (P.VENUS, 6, 12), (P.MERCURY, 12, 20), (P.MARS, 20, 25), (P.SATURN, 25, 30)],
    S.TAURUS: [(P.VENUS, 0, 8), (P.MERCURY, 8, 14), (P.JUPITER, 14, 22), (P.SATURN, 22, 27), (P.MARS, 27, 30)],
    S.GEMINI: [(P.MERCURY, 0, 6), (P.JUPITER, 6, 12), (P.VENUS, 12, 17), (P.MARS, 17, 24), (P.SATURN, 24, 30)],
    S.CANCER: [(P.MARS, 0, 7), (P.VENUS, 7, 13), (P.MERCURY, 13, 19), (P.JUPITER, 19, 26), (P.SATURN, 26, 30)],
    S.LEO: [(P.JUPITER, 0, 6), (P.VENUS, 6, 11), (P.SATURN, 11, 18), (P.MERCURY, 18, 24), (P.MARS, 24, 30)],
    S.VIRGO: [(P.MERCURY, 0, 7), (P.VENUS, 7, 17), (P.JUPITER, 17, 21), (P.MARS, 21, 28), (P.SATURN, 28, 30)],
    S.LIBRA: [(P.SATURN, 0, 6), (P.MERCURY, 6, 14), (P.JUPITER, 14, 21), (P.VENUS, 21, 28), (P.MARS, 28, 30)],
    S.SCORPIO: [(P.MARS, 0, 7), (P.VENUS, 7, 11), (P.MERCURY, 11, 19), (P.JUPITER, 19, 24), (P.SATURN, 24, 30)],
    S.SAGITTARIUS: [
        (P.JUPITER, 0, 12),
        (P.VENUS, 12, 17),
        (P.MERCURY, 17, 21),
        (P.SATURN, 21, 26),
        (P.MARS, 26, 30),
    ],
    S.CAPRICORN: [(P.MERCURY, 0, 7), (P.JUPITER, 7, 14), (P.VENUS, 14, 22), (P.SATURN, 22, 26), (P.MARS, 26, 30)],
    S.AQUARIUS: [(P.MERCURY, 0, 7), (P.VENUS, 7, 13), (P.JUPITER, 13, 20), (P.MARS, 20, 25), (P.SATURN, 25, 30)],
    S.PISCES: [(P.VENUS, 0, 12), (P.JUPITER, 12, 16), (P.MERCURY, 16, 19), (P.MARS, 19, 28), (P.SATURN, 28, 30)],
}

# Decan rulers, cycled from 0 Aries
FACE_ORDER: list[Planet] = [P.MARS, P.SUN, P.VENUS, P.MERCURY, P.MOON, P.SATURN, P.JUPITER]

DIGNITY_POINTS = {
    "domicile": 5,
    "exaltation": 4,
    "triplicity": 3,
    "term": 2,
    "face": 1,
    "detriment": -5,
    "fall": -4,
}


def sign_element(sign: ZodiacSign) -> str:
    return ELEMENTS[sign_index(sign) % 4]


def term_ruler(sign: ZodiacSign, degree: float) -> Planet | None:
    for ruler, start, end in TERMS[sign]:
        if start <= degree < end:
            return ruler
    return None


def face_ruler(sign: ZodiacSign, degree: float) -> Planet:
    decan = min(int(degree // 10), 2)
    return FACE_ORDER[(sign_index(sign) * 3 + decan) % 7]


def calculate_dignities(
    planet: Planet,
    sign: ZodiacSign,
    degree: float,
    sect: Sect,
) -> EssentialDignity:
    """Score a planet's essential dignity at a zodiacal position.

    Args:
        planet: Body to evaluate
        sign: Sign the body occupies
        degree: Degree within the sign, 0 <= degree < 30
        sect: Day or night chart, selects the triplicity ruler

    Returns:
        EssentialDignity with the seven flags, peregrine and summed score.
        Nodes and Lilith are always peregrine with score 0.
    """
    if planet in POINTS:
        return EssentialDignity()

    day_ruler, night_ruler = TRIPLICITY[sign_element(sign)]
    flags = {
        "domicile": DOMICILE[sign] == planet,
        "exaltation": EXALTATION[sign] == planet,
        "triplicity": (day_ruler if sect == Sect.DAY else night_ruler) == planet,
        "term": term_ruler(sign, degree) == planet,
        "face": face_ruler(sign, degree) == planet,
        "detriment": DETRIMENT[sign] == planet,
        "fall": FALL[sign] == planet,
    }
    score = sum(DIGNITY_POINTS[name] for name, present in flags.items() if present)
    return EssentialDignity(**flags, peregrine=not any(flags.values()), score=score)


def dignity_verdict(score: int) -> str:
    """Short dashboard label for a dignity score."""
    if score >= 5:
        return "Dignified"
    if score > 0:
        return "Strengthened"
    if score == 0:
        return "Peregrine"
    if score > -5:
        return "Weakened"
    return "Debilitated"
