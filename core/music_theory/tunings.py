"""
core/music_theory/tunings.py — Bundled instrument tuning catalog.

Uses importlib.resources (stdlib) to read YAML files bundled in the
core/music_theory/tuning_presets/ package. Results are cached in a
module-level dict so each YAML file is parsed only once per process.

The catalog sits outside the search engine. fretboard, voicing and
voice_leading never import this module or read _CACHE; every search takes
its Tuning as an explicit argument. The cache only holds frozen Tuning
values, so sharing it across callers cannot change a search result.

YAML layout:
    name: standard guitar
    max_fret: 24
    strings: [E2, A2, D3, G3, B3, E4]   # thickest string first
"""

from __future__ import annotations

import importlib.resources
import logging
from typing import Any

import yaml  # PyYAML

from core.music_theory.errors import InvalidInstrument, UnknownTuning
from core.music_theory.types import Pitch, Tuning

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Tuning name → YAML filename mapping
# ---------------------------------------------------------------------------

_TUNING_FILE_MAP: dict[str, str] = {
    "standard guitar": "standard_guitar.yaml",
    "drop d guitar": "drop_d_guitar.yaml",
    "dadgad guitar": "dadgad_guitar.yaml",
    "seven string guitar": "seven_string_guitar.yaml",
    "standard bass": "standard_bass.yaml",
    "standard ukulele": "standard_ukulele.yaml",
}

_CACHE: dict[str, Tuning] = {}

STANDARD_GUITAR = Tuning(
    open_strings=tuple(Pitch.parse(p) for p in ("E2", "A2", "D3", "G3", "B3", "E4")),
    max_fret=24,
    name="standard guitar",
)
"""Six-string guitar, E2 A2 D3 G3 B3 E4, 24 frets."""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def tuning_from_dict(data: dict[str, Any]) -> Tuning:
    """Build a Tuning from a parsed preset mapping.

    Raises:
        InvalidInstrument: If required keys are missing or malformed.
        InvalidPitch:      If a string pitch cannot be parsed.
    """
    try:
        strings = data["strings"]
        max_fret = data["max_fret"]
    except (KeyError, TypeError) as exc:
        raise InvalidInstrument(f"Tuning preset is missing a required key: {exc}") from exc
    if not isinstance(strings, list) or not isinstance(max_fret, int):
        raise InvalidInstrument("Tuning preset needs a list of strings and an integer max_fret")
    return Tuning(
        open_strings=tuple(Pitch.parse(str(p)) for p in strings),
        max_fret=max_fret,
        name=str(data.get("name", "")),
    )


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_tuning(name: str) -> Tuning:
    """Return the bundled tuning with the given name.

    Names are case-insensitive and normalised (lower + strip).

    Args:
        name: Tuning name, e.g. 'standard guitar', 'Drop D Guitar'.

    Raises:
        UnknownTuning: If the name is not in the catalog.

    Examples:
        >>> load_tuning("standard guitar") == STANDARD_GUITAR
        True
    """
    key = name.lower().strip()
    if key in _CACHE:
        return _CACHE[key]

    filename = _TUNING_FILE_MAP.get(key)
    if filename is None:
        raise UnknownTuning(name, available_tunings())

    pkg = importlib.resources.files("core.music_theory.tuning_presets")
    text = (pkg / filename).read_text(encoding="utf-8")
    tuning = tuning_from_dict(yaml.safe_load(text))
    logger.debug("Loaded tuning %r from %s", key, filename)
    _CACHE[key] = tuning
    return tuning


def available_tunings() -> list[str]:
    """Return sorted list of all bundled tuning names."""
    return sorted(_TUNING_FILE_MAP.keys())
