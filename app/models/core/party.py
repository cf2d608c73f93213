"""Canonical party enumeration.

Party names arrive in many spellings: full names from the API tallies
("Liberal Party of Canada"), short names ("NDP", "Bloc"), French forms and
legacy abbreviations stored on legislator rows. Every comparison between
parties goes through ``normalize_party`` so that all call sites agree.
"""

from enum import StrEnum


class Party(StrEnum):
    """Major federal parties."""

    LIBERAL = "Liberal"
    CONSERVATIVE = "Conservative"
    NDP = "NDP"
    BLOC = "Bloc Québécois"
    GREEN = "Green"


_ABBREVIATIONS = {
    "lib": Party.LIBERAL,
    "lpc": Party.LIBERAL,
    "plc": Party.LIBERAL,
    "con": Party.CONSERVATIVE,
    "cpc": Party.CONSERVATIVE,
    "pcc": Party.CONSERVATIVE,
    "pc": Party.CONSERVATIVE,
    "ndp": Party.NDP,
    "npd": Party.NDP,
    "bq": Party.BLOC,
    "gp": Party.GREEN,
    "gpc": Party.GREEN,
}

# Checked in order, first substring hit wins
_KEYWORDS = [
    ("liberal", Party.LIBERAL),
    ("conservative", Party.CONSERVATIVE),
    ("new democratic", Party.NDP),
    ("ndp", Party.NDP),
    ("bloc", Party.BLOC),
    ("québécois", Party.BLOC),
    ("quebecois", Party.BLOC),
    ("green", Party.GREEN),
]


def normalize_party(name: str | None) -> Party | None:
    """Map any party spelling to a canonical Party, None for independents/unknown."""
    if not name:
        return None
    text = name.strip().lower()
    if text.rstrip(".") in _ABBREVIATIONS:
        return _ABBREVIATIONS[text.rstrip(".")]
    for keyword, party in _KEYWORDS:
        if keyword in text:
            return party
    return None


def same_party(a: str | None, b: str | None) -> bool:
    """True when both names normalize to the same major party."""
    pa = normalize_party(a)
    return pa is not None and pa == normalize_party(b)
