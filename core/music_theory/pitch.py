"""
core/music_theory/pitch.py — Pitch algebra over the twelve pitch classes.

All arithmetic is modulo 12 and every result is normalized back into
[0, 11]. The only failing operation is ``pitch_class()``, which rejects
out-of-range integers with InvalidPitchClass.

Exports:
    NOTE_NAMES              12-element tuple of chromatic note names (sharps)
    FLAT_TO_SHARP           flat spelling → sharp spelling

    pitch_class(value) → int
    transpose(pc, interval) → int
    invert(pc, axis) → int
    invert_about_index(pc, index) → int
    interval_class(a, b) → int
    shortest_displacement(a, b) → int
    semitone_distance(p, q) → int
    note_to_pitch_class(note) → int
    pitch_class_to_note(pc) → str
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.music_theory.errors import InvalidPitchClass

if TYPE_CHECKING:
    from core.music_theory.types import Pitch

SEMITONES_PER_OCTAVE: int = 12

# ---------------------------------------------------------------------------
# Chromatic note names
# ---------------------------------------------------------------------------

NOTE_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

# Input normalisation: flat → sharp
FLAT_TO_SHARP: dict[str, str] = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
    "Cb": "B",
    "Fb": "E",
}

# Enharmonic sharps that fall on a natural
_SHARP_NATURALS: dict[str, str] = {"E#": "F", "B#": "C"}


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def pitch_class(value: int) -> int:
    """Validate an integer as a pitch class.

    Args:
        value: Candidate pitch class.

    Returns:
        The same integer, guaranteed to be in [0, 11].

    Raises:
        InvalidPitchClass: If value is not an int or lies outside [0, 11].
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPitchClass(value)
    if not (0 <= value < SEMITONES_PER_OCTAVE):
        raise InvalidPitchClass(value)
    return value


# ---------------------------------------------------------------------------
# Mod-12 operations
# ---------------------------------------------------------------------------


def transpose(pc: int, interval: int) -> int:
    """Tₙ: move a pitch class up by ``interval`` semitones (mod 12)."""
    return (pc + interval) % SEMITONES_PER_OCTAVE


def invert(pc: int, axis: int) -> int:
    """Reflect a pitch class about ``axis``: 2·axis − pc (mod 12)."""
    return (2 * axis - pc) % SEMITONES_PER_OCTAVE


def invert_about_index(pc: int, index: int) -> int:
    """Iₙ in index-number form: n − pc (mod 12).

    Odd indices reflect about a half-step axis, which ``invert`` cannot
    express with an integer axis.
    """
    return (index - pc) % SEMITONES_PER_OCTAVE


def interval_class(a: int, b: int) -> int:
    """Unordered interval class between two pitch classes, in [0, 6]."""
    d = (b - a) % SEMITONES_PER_OCTAVE
    return min(d, SEMITONES_PER_OCTAVE - d)


def shortest_displacement(a: int, b: int) -> int:
    """Signed shortest motion from pitch class a to b, in [-6, 5].

    The tritone resolves to -6 so that the result is unique.

    Examples:
        >>> shortest_displacement(7, 9)
        2
        >>> shortest_displacement(0, 11)
        -1
    """
    return ((b - a + 6) % SEMITONES_PER_OCTAVE) - 6


def semitone_distance(p: Pitch, q: Pitch) -> int:
    """Signed distance in semitones from pitch p up to pitch q."""
    return q.height - p.height


# ---------------------------------------------------------------------------
# Note names
# ---------------------------------------------------------------------------


def normalize_note(note: str) -> str:
    """Return the canonical sharp spelling of a note name.

    Raises:
        ValueError: If the note name is not recognized.
    """
    stripped = note.strip()
    if not stripped:
        raise ValueError("Unknown note ''")
    name = stripped[0].upper() + stripped[1:]
    name = FLAT_TO_SHARP.get(name, name)
    name = _SHARP_NATURALS.get(name, name)
    if name not in NOTE_NAMES:
        raise ValueError(f"Unknown note {note!r}. Valid: {list(NOTE_NAMES)}")
    return name


def note_to_pitch_class(note: str) -> int:
    """Convert a note name like 'Bb' or 'F#' to its pitch class."""
    return NOTE_NAMES.index(normalize_note(note))


def pitch_class_to_note(pc: int) -> str:
    """Convert a pitch class to its sharp-spelled note name."""
    return NOTE_NAMES[pitch_class(pc)]
