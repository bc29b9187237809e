"""
core/music_theory/types.py — Frozen value objects for the pitch-class engine.

All types are immutable frozen dataclasses — safe to hash, cache, share
between worker processes, and use as dict keys. Every invariant is checked
once in ``__post_init__``; search functions never mutate their inputs.

Types:
    Pitch             pitch class + octave, ordered by absolute height
    PitchClassSet     1–12 distinct pitch classes, stored ascending
    IntervalVector    interval-class counts 1–6 within a set
    Chord             a set plus optional root and bass
    Voicing           octave-qualified pitches, sorted low to high
    Tuning            open strings (thickest first) plus a max fret
    FretAssignment    one fretted string and the pitch it sounds
    ShapeCategory     Regular / WideInterval / NonTransposable
    GtrShape          one fretting of a chord, one note per selected string
    VoiceMotion       one voice moving between two pitch classes
    VoiceLeadingPath  a bijection of VoiceMotions between two sets
    PitchMotion       one voice moving between two pitches
    VoicingLeadingPath a bijection of PitchMotions between two voicings
"""

from __future__ import annotations

import functools
import re
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from core.music_theory.errors import (
    BassNotInSet,
    DuplicateEntry,
    FretOutOfRange,
    InvalidArity,
    InvalidInstrument,
    InvalidPitch,
    MusicTheoryError,
    RootNotInSet,
)
from core.music_theory.pitch import (
    NOTE_NAMES,
    SEMITONES_PER_OCTAVE,
    note_to_pitch_class,
    pitch_class,
)

#: Adjacent pitches further apart than this are a "wide interval"
WIDE_INTERVAL_SEMITONES: int = 12

_PITCH_PATTERN = re.compile(r"^([A-Ga-g][#b]?)(-?\d+)$")

# ---------------------------------------------------------------------------
# Pitch
# ---------------------------------------------------------------------------


@functools.total_ordering
@dataclass(frozen=True)
class Pitch:
    """A pitch class in a specific octave.

    Absolute height is ``pitch_class + 12 * octave``, so C0 has height 0.
    Octave numbers follow scientific pitch notation (middle C = C4 =
    MIDI 60), which puts MIDI at ``height + 12``.

    Attributes:
        pitch_class: 0=C, 1=C#, ..., 11=B
        octave:      Octave number, may be negative for sub-audio heights
    """

    pitch_class: int
    octave: int

    def __post_init__(self) -> None:
        pitch_class(self.pitch_class)
        if isinstance(self.octave, bool) or not isinstance(self.octave, int):
            raise InvalidPitch(f"Pitch.octave must be an integer, got {self.octave!r}")

    @classmethod
    def from_height(cls, height: int) -> Pitch:
        """Build a Pitch from its absolute height (C0 = 0)."""
        if isinstance(height, bool) or not isinstance(height, int):
            raise InvalidPitch(f"Pitch height must be an integer, got {height!r}")
        octave, pc = divmod(height, SEMITONES_PER_OCTAVE)
        return cls(pitch_class=pc, octave=octave)

    @classmethod
    def from_midi(cls, midi: int) -> Pitch:
        """Build a Pitch from a MIDI note number (60 = C4)."""
        return cls.from_height(midi - SEMITONES_PER_OCTAVE)

    @classmethod
    def parse(cls, text: str) -> Pitch:
        """Parse scientific pitch notation such as 'E2', 'Bb3' or 'C#-1'.

        Raises:
            InvalidPitch: If the text is not a note name followed by an octave.
        """
        match = _PITCH_PATTERN.match(text.strip())
        if match is None:
            raise InvalidPitch(f"Cannot parse pitch {text!r}, expected e.g. 'E2' or 'Bb3'")
        note, octave = match.groups()
        return cls(pitch_class=note_to_pitch_class(note), octave=int(octave))

    @property
    def height(self) -> int:
        return self.pitch_class + SEMITONES_PER_OCTAVE * self.octave

    @property
    def midi(self) -> int:
        return self.height + SEMITONES_PER_OCTAVE

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self.height < other.height

    def transpose(self, semitones: int) -> Pitch:
        """Return the pitch ``semitones`` above (or below, if negative)."""
        return Pitch.from_height(self.height + semitones)

    def raise_octaves(self, n: int) -> Pitch:
        """Shift by whole octaves, keeping the pitch class."""
        return Pitch(self.pitch_class, self.octave + n)

    def up_to(self, pc: int) -> Pitch:
        """Nearest pitch at or above self with pitch class ``pc``."""
        return self.transpose((pitch_class(pc) - self.pitch_class) % SEMITONES_PER_OCTAVE)

    def down_to(self, pc: int) -> Pitch:
        """Nearest pitch at or below self with pitch class ``pc``."""
        return self.transpose(-((self.pitch_class - pitch_class(pc)) % SEMITONES_PER_OCTAVE))

    def __str__(self) -> str:
        return f"{NOTE_NAMES[self.pitch_class]}{self.octave}"


# ---------------------------------------------------------------------------
# PitchClassSet
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PitchClassSet:
    """A set of 1–12 distinct pitch classes.

    Identity is set equality: the members are stored sorted ascending, so
    ``PitchClassSet((7, 0, 4)) == PitchClassSet((0, 4, 7))``.

    Raises:
        InvalidPitchClass: If any member is outside [0, 11].
        DuplicateEntry:    If a pitch class appears more than once.
        InvalidArity:      If the set would be empty.
    """

    pitch_classes: tuple[int, ...]

    def __post_init__(self) -> None:
        values = tuple(self.pitch_classes)
        if not values:
            raise InvalidArity(0, 1, SEMITONES_PER_OCTAVE)
        for value in values:
            pitch_class(value)
        if len(set(values)) != len(values):
            counts = Counter(values)
            raise DuplicateEntry([v for v, n in counts.items() if n > 1])
        object.__setattr__(self, "pitch_classes", tuple(sorted(values)))

    @classmethod
    def of(cls, *pcs: int) -> PitchClassSet:
        """Shorthand constructor: ``PitchClassSet.of(0, 4, 7)``."""
        return cls(pcs)

    def __len__(self) -> int:
        return len(self.pitch_classes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.pitch_classes)

    def __contains__(self, pc: object) -> bool:
        return pc in self.pitch_classes

    def as_frozenset(self) -> frozenset[int]:
        return frozenset(self.pitch_classes)

    def issubset(self, other: PitchClassSet) -> bool:
        return self.as_frozenset() <= other.as_frozenset()

    def __str__(self) -> str:
        return "{" + ",".join(str(pc) for pc in self.pitch_classes) + "}"


# ---------------------------------------------------------------------------
# IntervalVector
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IntervalVector:
    """Counts of interval classes 1–6 among all pairs of a set.

    ``counts[0]`` is the number of semitone pairs, ``counts[5]`` the number
    of tritones. For a set of n members the counts sum to n·(n−1)/2.
    """

    counts: tuple[int, ...]

    def __post_init__(self) -> None:
        counts = tuple(self.counts)
        if len(counts) != 6:
            raise MusicTheoryError(f"IntervalVector needs 6 entries, got {len(counts)}")
        if any(c < 0 for c in counts):
            raise MusicTheoryError(f"IntervalVector entries must be >= 0, got {counts}")
        object.__setattr__(self, "counts", counts)

    @property
    def total(self) -> int:
        return sum(self.counts)

    def __iter__(self) -> Iterator[int]:
        return iter(self.counts)

    def __getitem__(self, interval_class: int) -> int:
        """Count for interval class 1–6 (not a 0-based index)."""
        if not (1 <= interval_class <= 6):
            raise IndexError(f"Interval class must be in [1, 6], got {interval_class}")
        return self.counts[interval_class - 1]

    def __str__(self) -> str:
        return "<" + "".join(str(c) for c in self.counts) + ">"


# ---------------------------------------------------------------------------
# Chord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Chord:
    """A pitch-class set with an optional designated root and bass.

    Attributes:
        pitch_class_set: The chord's members
        root:            Optional root, must be a member
        bass:            Optional lowest note, must be a member
    """

    pitch_class_set: PitchClassSet
    root: int | None = None
    bass: int | None = None

    def __post_init__(self) -> None:
        members = self.pitch_class_set.pitch_classes
        if self.root is not None and pitch_class(self.root) not in members:
            raise RootNotInSet(self.root, members)
        if self.bass is not None and pitch_class(self.bass) not in members:
            raise BassNotInSet(self.bass, members)

    @property
    def pitch_classes(self) -> tuple[int, ...]:
        return self.pitch_class_set.pitch_classes

    @property
    def tones(self) -> tuple[int, ...]:
        """Members in ascending order starting from the root (if any)."""
        pcs = self.pitch_classes
        if self.root is None:
            return pcs
        start = pcs.index(self.root)
        return pcs[start:] + pcs[:start]

    def __len__(self) -> int:
        return len(self.pitch_class_set)


# ---------------------------------------------------------------------------
# Voicing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Voicing:
    """Octave-qualified pitches realizing a pitch-class collection.

    Pitches are stored sorted low to high. Doublings (the same pitch class
    in several octaves) are allowed; the projection onto pitch classes keeps
    multiplicity in ``pitch_classes``.
    """

    pitches: tuple[Pitch, ...]

    def __post_init__(self) -> None:
        pitches = tuple(self.pitches)
        if not pitches:
            raise MusicTheoryError("Voicing must contain at least one pitch")
        object.__setattr__(self, "pitches", tuple(sorted(pitches, key=lambda p: p.height)))

    @classmethod
    def from_heights(cls, *heights: int) -> Voicing:
        return cls(tuple(Pitch.from_height(h) for h in heights))

    def __len__(self) -> int:
        return len(self.pitches)

    def __iter__(self) -> Iterator[Pitch]:
        return iter(self.pitches)

    @property
    def heights(self) -> tuple[int, ...]:
        return tuple(p.height for p in self.pitches)

    @property
    def pitch_classes(self) -> tuple[int, ...]:
        """Pitch classes low to high, with multiplicity."""
        return tuple(p.pitch_class for p in self.pitches)

    @property
    def pitch_class_set(self) -> PitchClassSet:
        return PitchClassSet(tuple(dict.fromkeys(self.pitch_classes)))

    @property
    def stacked_intervals(self) -> tuple[int, ...]:
        """Semitones between each pair of adjacent pitches."""
        h = self.heights
        return tuple(b - a for a, b in zip(h, h[1:]))

    @property
    def span(self) -> int:
        return self.pitches[-1].height - self.pitches[0].height

    @property
    def has_wide_intervals(self) -> bool:
        return any(i > WIDE_INTERVAL_SEMITONES for i in self.stacked_intervals)

    def realizes(self, pcs: PitchClassSet) -> bool:
        """True if every member of pcs sounds and nothing outside pcs does."""
        return set(self.pitch_classes) == pcs.as_frozenset()

    def transpose(self, semitones: int) -> Voicing:
        return Voicing(tuple(p.transpose(semitones) for p in self.pitches))

    def move_by_octaves(self, n: int) -> Voicing:
        return self.transpose(n * SEMITONES_PER_OCTAVE)

    def normalized_register(self, octave: int = 4) -> Voicing:
        """Shift by whole octaves so the lowest pitch sits in ``octave``."""
        return self.move_by_octaves(octave - self.pitches[0].octave)

    def __str__(self) -> str:
        return " ".join(str(p) for p in self.pitches)


# ---------------------------------------------------------------------------
# Fretboard types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FretAssignment:
    """One fretted (or open) string and the pitch it sounds.

    Attributes:
        string: 0-based string index, 0 = thickest string
        fret:   0 = open string
        pitch:  Sounding pitch (open pitch + fret semitones)
    """

    string: int
    fret: int
    pitch: Pitch

    def __post_init__(self) -> None:
        if self.string < 0:
            raise MusicTheoryError(f"FretAssignment.string must be >= 0, got {self.string}")
        if self.fret < 0:
            raise FretOutOfRange(self.fret, 0)

    @property
    def is_open(self) -> bool:
        return self.fret == 0


@dataclass(frozen=True)
class Tuning:
    """A fretted instrument: open-string pitches plus the highest fret.

    ``open_strings[0]`` is the thickest string. Tunings are fixed for the
    lifetime of a search and passed explicitly into it.

    Raises:
        InvalidInstrument: If there are no strings or max_fret < 0.
    """

    open_strings: tuple[Pitch, ...]
    max_fret: int
    name: str = ""

    def __post_init__(self) -> None:
        strings = tuple(self.open_strings)
        if len(strings) < 1:
            raise InvalidInstrument("Tuning must have at least one string")
        if not all(isinstance(p, Pitch) for p in strings):
            raise InvalidInstrument("Tuning.open_strings must all be Pitch values")
        if self.max_fret < 0:
            raise InvalidInstrument(f"Tuning.max_fret must be >= 0, got {self.max_fret}")
        object.__setattr__(self, "open_strings", strings)

    @property
    def string_count(self) -> int:
        return len(self.open_strings)

    def _open(self, string: int) -> Pitch:
        if not (0 <= string < self.string_count):
            raise InvalidInstrument(
                f"String {string} out of range for a {self.string_count}-string tuning"
            )
        return self.open_strings[string]

    def fret_for(self, pc: int, string: int) -> int | None:
        """Lowest fret on ``string`` sounding pitch class ``pc``.

        Returns None when that fret would exceed max_fret.
        """
        fret = (pitch_class(pc) - self._open(string).pitch_class) % SEMITONES_PER_OCTAVE
        return fret if fret <= self.max_fret else None

    def sounding_pitch(self, string: int, fret: int) -> Pitch:
        if not (0 <= fret <= self.max_fret):
            raise FretOutOfRange(fret, self.max_fret)
        return self._open(string).transpose(fret)

    def assign(self, string: int, fret: int) -> FretAssignment:
        return FretAssignment(string=string, fret=fret, pitch=self.sounding_pitch(string, fret))


class ShapeCategory(Enum):
    """Playability category of a GtrShape."""

    REGULAR = "regular"
    WIDE_INTERVAL = "wide_interval"
    NON_TRANSPOSABLE = "non_transposable"


@dataclass(frozen=True)
class GtrShape:
    """A concrete fretting of a chord: one note on each selected string.

    Attributes:
        assignments:  Fret assignments in ascending string order
        category:     Playability category
        string_count: Strings on the instrument (for muted-string display)
    """

    assignments: tuple[FretAssignment, ...]
    category: ShapeCategory
    string_count: int

    def __post_init__(self) -> None:
        assignments = tuple(sorted(self.assignments, key=lambda a: a.string))
        if not assignments:
            raise MusicTheoryError("GtrShape must sound at least one string")
        strings = [a.string for a in assignments]
        if len(set(strings)) != len(strings):
            raise MusicTheoryError(f"GtrShape uses a string twice: {strings}")
        if strings[-1] >= self.string_count:
            raise MusicTheoryError(
                f"GtrShape string {strings[-1]} exceeds string count {self.string_count}"
            )
        object.__setattr__(self, "assignments", assignments)

    @property
    def strings(self) -> tuple[int, ...]:
        return tuple(a.string for a in self.assignments)

    @property
    def frets(self) -> tuple[int, ...]:
        return tuple(a.fret for a in self.assignments)

    @property
    def pitches(self) -> tuple[Pitch, ...]:
        """Sounding pitches in string order (not necessarily ascending)."""
        return tuple(a.pitch for a in self.assignments)

    @property
    def voicing(self) -> Voicing:
        return Voicing(self.pitches)

    @property
    def has_open_strings(self) -> bool:
        return any(a.is_open for a in self.assignments)

    @property
    def octave_displaced(self) -> bool:
        """True if some string plays its note an octave above the lowest fret for it."""
        return any(a.fret >= SEMITONES_PER_OCTAVE for a in self.assignments)

    def octave_signature(self) -> tuple[tuple[int, int], ...]:
        """(string, fret mod 12) pairs; equal for shapes that differ only by octave moves."""
        return tuple((a.string, a.fret % SEMITONES_PER_OCTAVE) for a in self.assignments)

    @property
    def fretted_span(self) -> int:
        """Distance between the lowest and highest non-open fret."""
        fretted = [a.fret for a in self.assignments if not a.is_open]
        return max(fretted) - min(fretted) if fretted else 0

    def frets_by_string(self) -> tuple[int | None, ...]:
        """One entry per instrument string, None for muted strings."""
        by_string: dict[int, int] = {a.string: a.fret for a in self.assignments}
        return tuple(by_string.get(s) for s in range(self.string_count))

    @property
    def diagram(self) -> str:
        """Chord-chart string, thickest string first, e.g. 'x-3-2-0-x-x'."""
        return "-".join("x" if f is None else str(f) for f in self.frets_by_string())

    def __str__(self) -> str:
        return f"{self.diagram} ({self.category.value})"


# ---------------------------------------------------------------------------
# Voice leading
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoiceMotion:
    """One voice moving from one pitch class to another.

    ``displacement`` is the signed shortest motion in semitones, so
    ``(source + displacement) % 12 == target`` and |displacement| <= 6.
    """

    source: int
    target: int
    displacement: int

    def __post_init__(self) -> None:
        pitch_class(self.source)
        pitch_class(self.target)
        if abs(self.displacement) > 6:
            raise MusicTheoryError(
                f"VoiceMotion.displacement must be in [-6, 6], got {self.displacement}"
            )
        if (self.source + self.displacement) % SEMITONES_PER_OCTAVE != self.target:
            raise MusicTheoryError(
                f"Displacement {self.displacement} does not move {self.source} to {self.target}"
            )


@dataclass(frozen=True)
class VoiceLeadingPath:
    """A bijection between two equal-size pitch-class sets.

    Motions are stored in ascending order of source pitch class.
    """

    motions: tuple[VoiceMotion, ...]

    def __post_init__(self) -> None:
        motions = tuple(sorted(self.motions, key=lambda m: m.source))
        if not motions:
            raise MusicTheoryError("VoiceLeadingPath must contain at least one motion")
        sources = [m.source for m in motions]
        targets = [m.target for m in motions]
        if len(set(sources)) != len(sources) or len(set(targets)) != len(targets):
            raise MusicTheoryError("VoiceLeadingPath must be a bijection")
        object.__setattr__(self, "motions", motions)

    @property
    def source(self) -> PitchClassSet:
        return PitchClassSet(tuple(m.source for m in self.motions))

    @property
    def target(self) -> PitchClassSet:
        return PitchClassSet(tuple(m.target for m in self.motions))

    @property
    def deltas(self) -> tuple[int, ...]:
        """Signed displacement per voice, ordered by source pitch class."""
        return tuple(m.displacement for m in self.motions)

    @property
    def total_displacement(self) -> int:
        return sum(abs(d) for d in self.deltas)

    @property
    def max_displacement(self) -> int:
        return max(abs(d) for d in self.deltas)

    @property
    def common_tones(self) -> tuple[int, ...]:
        return tuple(m.source for m in self.motions if m.displacement == 0)

    def as_mapping(self) -> dict[int, int]:
        return {m.source: m.target for m in self.motions}


@dataclass(frozen=True)
class PitchMotion:
    """One voice moving from one pitch to another."""

    source: Pitch
    target: Pitch

    @property
    def displacement(self) -> int:
        return self.target.height - self.source.height


@dataclass(frozen=True)
class VoicingLeadingPath:
    """A bijection between the pitches of two equal-size voicings.

    Motions are ordered by ascending source pitch; targets keep the order
    the assignment produced, so voice crossings remain visible.
    """

    motions: tuple[PitchMotion, ...]

    @property
    def deltas(self) -> tuple[int, ...]:
        return tuple(m.displacement for m in self.motions)

    @property
    def total_displacement(self) -> int:
        return sum(abs(d) for d in self.deltas)

    @property
    def max_displacement(self) -> int:
        return max((abs(d) for d in self.deltas), default=0)

    @property
    def targets(self) -> tuple[Pitch, ...]:
        return tuple(m.target for m in self.motions)
