"""
core/music_theory/scales.py — Named scale and chord catalog.

Convenience constructors that turn a root plus a catalog name into the
engine's value objects. Nothing here infers names from sets; lookups only go
from name to set.

Exports:
    SCALE_FORMULAS          semitone intervals for each mode
    CHORD_INTERVALS         semitone intervals for each chord quality
    TERTIAN_SIZES           chord size (stacked scale thirds) per voicing style
    DIATONIC_MODES          seven-note modes that have diatonic chords

    scale_set(root, mode) → PitchClassSet
    scale_notes(root, mode) → tuple[str, ...]
    chord_set(root, quality) → PitchClassSet
    build_chord(root, quality, bass=None) → Chord
    get_diatonic_chords(root, mode, voicing) → tuple[Chord, ...]
"""

from __future__ import annotations

from core.music_theory.pitch import (
    SEMITONES_PER_OCTAVE,
    note_to_pitch_class,
    pitch_class,
    pitch_class_to_note,
)
from core.music_theory.types import Chord, PitchClassSet

# ---------------------------------------------------------------------------
# Scale formulas (semitone intervals from root)
# ---------------------------------------------------------------------------

SCALE_FORMULAS: dict[str, tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11),
    "natural minor": (0, 2, 3, 5, 7, 8, 10),
    "harmonic minor": (0, 2, 3, 5, 7, 8, 11),
    "melodic minor": (0, 2, 3, 5, 7, 9, 11),
    "dorian": (0, 2, 3, 5, 7, 9, 10),
    "phrygian": (0, 1, 3, 5, 7, 8, 10),
    "lydian": (0, 2, 4, 6, 7, 9, 11),
    "mixolydian": (0, 2, 4, 5, 7, 9, 10),
    "locrian": (0, 1, 3, 5, 6, 8, 10),
    "pentatonic minor": (0, 3, 5, 7, 10),
    "pentatonic major": (0, 2, 4, 7, 9),
    "whole tone": (0, 2, 4, 6, 8, 10),
    "octatonic": (0, 1, 3, 4, 6, 7, 9, 10),
    "chromatic": tuple(range(SEMITONES_PER_OCTAVE)),
}

# ---------------------------------------------------------------------------
# Chord interval formulas (semitones from root)
# ---------------------------------------------------------------------------

CHORD_INTERVALS: dict[str, tuple[int, ...]] = {
    # Triads
    "major": (0, 4, 7),
    "minor": (0, 3, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
    "sus2": (0, 2, 7),
    "sus4": (0, 5, 7),
    # Sevenths
    "maj7": (0, 4, 7, 11),
    "min7": (0, 3, 7, 10),
    "dom7": (0, 4, 7, 10),
    "dim7": (0, 3, 6, 9),
    "halfdim7": (0, 3, 6, 10),
    "minmaj7": (0, 3, 7, 11),
    # Extended (ninths fold into the octave as pitch classes)
    "maj9": (0, 4, 7, 11, 14),
    "min9": (0, 3, 7, 10, 14),
    "dom9": (0, 4, 7, 10, 14),
    "add9": (0, 4, 7, 14),
    "minadd9": (0, 3, 7, 14),
}

# ---------------------------------------------------------------------------
# Diatonic chord sizes per voicing style (scale thirds stacked from each degree)
# ---------------------------------------------------------------------------

TERTIAN_SIZES: dict[str, int] = {
    "triads": 3,
    "seventh": 4,
    "extended": 5,
}

#: Modes get_diatonic_chords() accepts: the seven-note entries of SCALE_FORMULAS
DIATONIC_MODES: tuple[str, ...] = tuple(
    mode for mode, formula in SCALE_FORMULAS.items() if len(formula) == 7
)


# ---------------------------------------------------------------------------
# Low-level helpers
# ---------------------------------------------------------------------------


def _root_pc(root: str | int) -> int:
    if isinstance(root, str):
        return note_to_pitch_class(root)
    return pitch_class(root)


def _formula_set(root: int, formula: tuple[int, ...]) -> PitchClassSet:
    return PitchClassSet(tuple((root + interval) % SEMITONES_PER_OCTAVE for interval in formula))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def scale_set(root: str | int, mode: str = "major") -> PitchClassSet:
    """Return the pitch-class set of a scale.

    Args:
        root: Root note name ("A", "C#", "Bb") or pitch class.
        mode: Mode name, a key of SCALE_FORMULAS.

    Raises:
        ValueError: If root or mode is unrecognized.

    Examples:
        >>> scale_set("C", "major").pitch_classes
        (0, 2, 4, 5, 7, 9, 11)
    """
    if mode not in SCALE_FORMULAS:
        raise ValueError(f"Unknown mode {mode!r}. Valid: {sorted(SCALE_FORMULAS)}")
    return _formula_set(_root_pc(root), SCALE_FORMULAS[mode])


def scale_notes(root: str | int, mode: str = "major") -> tuple[str, ...]:
    """Note names of a scale in scale-degree order, starting from the root.

    Examples:
        >>> scale_notes("A", "natural minor")
        ('A', 'B', 'C', 'D', 'E', 'F', 'G')
    """
    if mode not in SCALE_FORMULAS:
        raise ValueError(f"Unknown mode {mode!r}. Valid: {sorted(SCALE_FORMULAS)}")
    root_pc = _root_pc(root)
    return tuple(pitch_class_to_note((root_pc + i) % SEMITONES_PER_OCTAVE) for i in SCALE_FORMULAS[mode])


def chord_set(root: str | int, quality: str = "major") -> PitchClassSet:
    """Return the pitch-class set of a chord quality built on ``root``.

    Raises:
        ValueError: If root or quality is unrecognized.
    """
    if quality not in CHORD_INTERVALS:
        raise ValueError(f"Unknown chord quality {quality!r}. Valid: {sorted(CHORD_INTERVALS)}")
    return _formula_set(_root_pc(root), CHORD_INTERVALS[quality])


def build_chord(root: str | int, quality: str = "major", bass: str | int | None = None) -> Chord:
    """Build a Chord with its root set and an optional bass note.

    Raises:
        ValueError:   If root or quality is unrecognized.
        BassNotInSet: If ``bass`` is not a chord tone.

    Examples:
        >>> build_chord("C", "major", bass="E").tones
        (0, 4, 7)
    """
    root_pc = _root_pc(root)
    return Chord(
        chord_set(root_pc, quality),
        root=root_pc,
        bass=None if bass is None else _root_pc(bass),
    )


def get_diatonic_chords(
    root: str | int,
    mode: str = "major",
    voicing: str = "triads",
) -> tuple[Chord, ...]:
    """Return the 7 diatonic chords of a key, one per scale degree.

    Each chord stacks scale thirds on its degree (degrees i, i+2, i+4, ...),
    so every chord tone belongs to the key: in C major the V seventh is G7
    and the vii seventh is Bø7. "extended" adds the ninth.

    Args:
        root:    Root note of the key.
        mode:    One of DIATONIC_MODES.
        voicing: "triads", "seventh", or "extended".

    Raises:
        ValueError: If root, mode, or voicing is unrecognized.

    Examples:
        >>> [c.root for c in get_diatonic_chords("C", "major")]
        [0, 2, 4, 5, 7, 9, 11]
        >>> get_diatonic_chords("C", "major", "seventh")[4].tones
        (7, 11, 2, 5)
    """
    if voicing not in TERTIAN_SIZES:
        raise ValueError(f"Unknown voicing {voicing!r}. Valid: {sorted(TERTIAN_SIZES)}")
    if mode not in DIATONIC_MODES:
        raise ValueError(f"Unknown mode for diatonic chords {mode!r}. Valid: {sorted(DIATONIC_MODES)}")

    size = TERTIAN_SIZES[voicing]
    root_pc = _root_pc(root)
    degrees = [(root_pc + i) % SEMITONES_PER_OCTAVE for i in SCALE_FORMULAS[mode]]
    return tuple(
        Chord(
            PitchClassSet(tuple(degrees[(step + 2 * third) % 7] for third in range(size))),
            root=degrees[step],
        )
        for step in range(7)
    )
