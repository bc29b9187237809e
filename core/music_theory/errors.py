"""
core/music_theory/errors.py — Error taxonomy for the pitch-class engine.

Every error derives from MusicTheoryError, which is itself a ValueError, so
callers that already guard value-object construction with ``except
ValueError`` keep working.

Construction errors (fail fast, never silently corrected):
    InvalidPitchClass   integer outside [0, 11]
    InvalidPitch        non-integer octave / height
    DuplicateEntry      repeated pitch class in a set
    RootNotInSet        chord root is not a member of the chord's set
    BassNotInSet        chord bass is not a member of the chord's set
    InvalidInstrument   tuning with no strings or a negative max fret
    FretOutOfRange      fret outside [0, max_fret] for a tuning
    InvalidStepPattern  octave partition whose steps do not sum to 12
    UnknownTuning       tuning name missing from the bundled catalog

Arity errors (no partial result is ever returned):
    InvalidArity        requested subset/superset size out of bounds
    ArityMismatch       two collections that must be the same size are not

Empty search results are NOT errors; they are returned as empty collections.
"""

from __future__ import annotations

from collections.abc import Sequence


class MusicTheoryError(ValueError):
    """Base class for every error raised by core/music_theory."""


# ---------------------------------------------------------------------------
# Construction errors
# ---------------------------------------------------------------------------


class InvalidPitchClass(MusicTheoryError):
    """Raised when an integer outside [0, 11] is used as a pitch class."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Pitch class must be an integer in [0, 11], got {value!r}")


class InvalidPitch(MusicTheoryError):
    """Raised when a pitch cannot be built from the given octave or height."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DuplicateEntry(MusicTheoryError):
    """Raised when a pitch-class set is built from a sequence with repeats."""

    def __init__(self, duplicates: Sequence[int]) -> None:
        self.duplicates = tuple(sorted(set(duplicates)))
        super().__init__(f"Pitch-class set has duplicate entries: {list(self.duplicates)}")


class RootNotInSet(MusicTheoryError):
    """Raised when a chord root is not one of the chord's pitch classes."""

    def __init__(self, root: int, members: Sequence[int]) -> None:
        self.root = root
        self.members = tuple(members)
        super().__init__(f"Root {root} is not a member of {list(self.members)}")


class BassNotInSet(MusicTheoryError):
    """Raised when a chord bass note is not one of the chord's pitch classes."""

    def __init__(self, bass: int, members: Sequence[int]) -> None:
        self.bass = bass
        self.members = tuple(members)
        super().__init__(f"Bass {bass} is not a member of {list(self.members)}")


class InvalidInstrument(MusicTheoryError):
    """Raised when a tuning has no strings or a negative max fret."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FretOutOfRange(MusicTheoryError):
    """Raised when a fret lies outside [0, max_fret] for a tuning."""

    def __init__(self, fret: int, max_fret: int) -> None:
        self.fret = fret
        self.max_fret = max_fret
        super().__init__(f"Fret {fret} is outside [0, {max_fret}]")


class UnknownTuning(MusicTheoryError):
    """Raised when a tuning name is not in the bundled catalog."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        self.name = name
        self.available = tuple(available)
        super().__init__(f"Unknown tuning {name!r}. Available: {list(self.available)}")


class InvalidStepPattern(MusicTheoryError):
    """Raised when an octave partition does not add up to 12 semitones."""

    def __init__(self, steps: Sequence[int]) -> None:
        self.steps = tuple(steps)
        super().__init__(
            f"Step pattern {list(self.steps)} must be positive steps summing to 12, "
            f"got sum {sum(self.steps)}"
        )


# ---------------------------------------------------------------------------
# Arity errors
# ---------------------------------------------------------------------------


class InvalidArity(MusicTheoryError):
    """Raised when a requested collection size is outside its valid bounds."""

    def __init__(self, k: int, low: int, high: int) -> None:
        self.k = k
        self.low = low
        self.high = high
        super().__init__(f"Size {k} is out of bounds, expected {low} <= k <= {high}")


class ArityMismatch(MusicTheoryError):
    """Raised when two collections that must be the same size differ."""

    def __init__(self, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(f"Collections must be the same size, got {left} and {right}")
