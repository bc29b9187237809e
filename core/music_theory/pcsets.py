"""
core/music_theory/pcsets.py — Pitch-class set engine.

Canonical forms, interval content, symmetry detection, and exhaustive
subset/superset search over pitch-class sets. Every function is pure and
every search is a generator over ``itertools.combinations`` wrapped by a
collecting function, so callers can either stream or materialize results.

Equivalence is an explicit parameter (``Equivalence``) rather than a
property of the set type:

    LITERAL                   identical members
    TRANSPOSITION             equal under some Tₖ
    TRANSPOSITION_INVERSION   equal under some Tₖ or Tₖ·I

Exports:
    pitch_class_set(pcs) → PitchClassSet
    chord(pcs, root, bass) → Chord
    transpose_set, invert_set, invert_set_about_index, complement
    normal_order(s) → tuple[int, ...]
    normal_form(s) → PitchClassSet
    prime_form(s) → PitchClassSet
    interval_vector(s) → IntervalVector
    symmetries(s) → Symmetries
    step_pattern(s), from_step_pattern(steps, start), modes(s)
    set_class_key, are_equivalent, is_transposed_version_of, dedupe
    contains_set_class(superset, subset, mode)
    iter_subsets, subsets_of_size
    iter_supersets, supersets_within
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from itertools import combinations

from core.music_theory.errors import InvalidArity, InvalidStepPattern
from core.music_theory.pitch import (
    SEMITONES_PER_OCTAVE,
    interval_class,
    invert,
    invert_about_index,
    pitch_class,
    transpose,
)
from core.music_theory.types import Chord, IntervalVector, PitchClassSet

#: The full twelve-tone aggregate, default universe for superset search
AGGREGATE: PitchClassSet = PitchClassSet(tuple(range(SEMITONES_PER_OCTAVE)))


class Equivalence(Enum):
    """Which transformations count as "the same set class"."""

    LITERAL = "literal"
    TRANSPOSITION = "transposition"
    TRANSPOSITION_INVERSION = "transposition_inversion"


@dataclass(frozen=True)
class Symmetries:
    """Transformations that map a set onto itself.

    Attributes:
        transpositional:   Every k with Tₖ(s) == s (always contains 0)
        inversional:       Every integer axis a with Iₐ(s) == s,
                           where Iₐ(x) = 2a − x
        inversion_indices: Every index n with n − x mapping s onto itself;
                           odd n are half-step axes ``inversional`` cannot hold
    """

    transpositional: frozenset[int]
    inversional: frozenset[int]
    inversion_indices: frozenset[int]

    @property
    def is_asymmetric(self) -> bool:
        """True when only the identity transposition maps the set to itself."""
        return self.transpositional == frozenset({0})

    @property
    def degree(self) -> int:
        """Number of Tₖ and Iₙ operations that leave the set unchanged."""
        return len(self.transpositional) + len(self.inversion_indices)


# ---------------------------------------------------------------------------
# Construction and basic transforms
# ---------------------------------------------------------------------------


def pitch_class_set(pcs: Iterable[int]) -> PitchClassSet:
    """Build a PitchClassSet, rejecting duplicates and out-of-range members."""
    return PitchClassSet(tuple(pcs))


def chord(pcs: Iterable[int] | PitchClassSet, root: int | None = None, bass: int | None = None) -> Chord:
    """Build a Chord; root and bass must be members of the set."""
    members = pcs if isinstance(pcs, PitchClassSet) else pitch_class_set(pcs)
    return Chord(members, root=root, bass=bass)


def transpose_set(s: PitchClassSet, k: int) -> PitchClassSet:
    """Tₖ(s)."""
    return PitchClassSet(tuple(transpose(pc, k) for pc in s))


def invert_set(s: PitchClassSet, axis: int = 0) -> PitchClassSet:
    """Iₐ(s): reflect every member about ``axis``."""
    return PitchClassSet(tuple(invert(pc, axis) for pc in s))


def invert_set_about_index(s: PitchClassSet, index: int) -> PitchClassSet:
    """Iₙ(s) in index form: n − x for every member x."""
    return PitchClassSet(tuple(invert_about_index(pc, index) for pc in s))


def complement(s: PitchClassSet) -> PitchClassSet:
    """Pitch classes not in s.

    Raises:
        InvalidArity: For the aggregate, whose complement would be empty.
    """
    return PitchClassSet(tuple(pc for pc in range(SEMITONES_PER_OCTAVE) if pc not in s))


# ---------------------------------------------------------------------------
# Canonical forms
# ---------------------------------------------------------------------------


def _rotations(pcs: tuple[int, ...]) -> Iterator[tuple[int, ...]]:
    for i in range(len(pcs)):
        yield pcs[i:] + pcs[:i]


def _gaps(rotation: tuple[int, ...]) -> tuple[int, ...]:
    return tuple((b - a) % SEMITONES_PER_OCTAVE for a, b in zip(rotation, rotation[1:]))


def _zeroed(rotation: tuple[int, ...]) -> tuple[int, ...]:
    return tuple((pc - rotation[0]) % SEMITONES_PER_OCTAVE for pc in rotation)


def normal_order(s: PitchClassSet) -> tuple[int, ...]:
    """The canonical rotation of s, keeping its actual pitch classes.

    The rotation whose successive gaps are lexicographically smallest wins;
    rotations with identical gaps (symmetric sets) are ordered by their
    leading pitch class.

    Examples:
        >>> normal_order(PitchClassSet.of(7, 0, 4))
        (4, 7, 0)
    """
    return min(_rotations(s.pitch_classes), key=lambda r: (_gaps(r), r[0]))


def normal_form(s: PitchClassSet) -> PitchClassSet:
    """Normal order transposed to start on 0.

    Idempotent and transposition-invariant:
    ``normal_form(transpose_set(s, k)) == normal_form(s)`` for every k.
    """
    return PitchClassSet(_zeroed(normal_order(s)))


def prime_form(s: PitchClassSet) -> PitchClassSet:
    """Canonical representative of s under transposition and inversion."""
    candidates = (normal_order(s), normal_order(invert_set(s)))
    best = min(candidates, key=lambda r: (_gaps(r), _zeroed(r)))
    return PitchClassSet(_zeroed(best))


def interval_vector(s: PitchClassSet) -> IntervalVector:
    """Count interval classes 1–6 over every unordered pair in s."""
    counts = [0] * 6
    for a, b in combinations(s.pitch_classes, 2):
        counts[interval_class(a, b) - 1] += 1
    return IntervalVector(tuple(counts))


def symmetries(s: PitchClassSet) -> Symmetries:
    """Find every transposition and inversion that maps s onto itself.

    Examples:
        >>> symmetries(PitchClassSet.of(0, 4, 8)).transpositional
        frozenset({0, 4, 8})
    """
    members = s.as_frozenset()
    t_levels = frozenset(
        k for k in range(SEMITONES_PER_OCTAVE)
        if frozenset(transpose(pc, k) for pc in members) == members
    )
    indices = frozenset(
        n for n in range(SEMITONES_PER_OCTAVE)
        if frozenset(invert_about_index(pc, n) for pc in members) == members
    )
    axes = frozenset(
        a for a in range(SEMITONES_PER_OCTAVE)
        if (2 * a) % SEMITONES_PER_OCTAVE in indices
    )
    return Symmetries(transpositional=t_levels, inversional=axes, inversion_indices=indices)


# ---------------------------------------------------------------------------
# Step patterns and modes
# ---------------------------------------------------------------------------


def step_pattern(s: PitchClassSet) -> tuple[int, ...]:
    """Cyclic gaps between ascending members, wrapping back to the first.

    The steps always sum to 12, e.g. the major scale is (2, 2, 1, 2, 2, 2, 1).
    A single pitch class partitions the octave as (12,).
    """
    pcs = s.pitch_classes
    gaps = _gaps(pcs)
    wrap = (pcs[0] - pcs[-1]) % SEMITONES_PER_OCTAVE or SEMITONES_PER_OCTAVE
    return gaps + (wrap,)


def from_step_pattern(steps: Iterable[int], start: int = 0) -> PitchClassSet:
    """Rebuild a set from its octave partition.

    Raises:
        InvalidStepPattern: If any step is not positive or they do not sum to 12.
    """
    steps = tuple(steps)
    if not steps or any(step <= 0 for step in steps) or sum(steps) != SEMITONES_PER_OCTAVE:
        raise InvalidStepPattern(steps)
    pcs = [pitch_class(start)]
    for step in steps[:-1]:
        pcs.append(transpose(pcs[-1], step))
    return PitchClassSet(tuple(pcs))


def modes(s: PitchClassSet) -> tuple[PitchClassSet, ...]:
    """Every rotation of s re-zeroed to start on 0.

    For a scale these are its modes; for a chord, its inversions as
    interval structures. The first entry is s itself, zeroed on its lowest
    member.
    """
    return tuple(PitchClassSet(_zeroed(r)) for r in _rotations(s.pitch_classes))


# ---------------------------------------------------------------------------
# Equivalence
# ---------------------------------------------------------------------------


def set_class_key(s: PitchClassSet, mode: Equivalence) -> tuple[int, ...]:
    """Hashable key that is equal for exactly the sets equivalent under mode."""
    if mode is Equivalence.LITERAL:
        return s.pitch_classes
    if mode is Equivalence.TRANSPOSITION:
        return normal_form(s).pitch_classes
    return prime_form(s).pitch_classes


def are_equivalent(a: PitchClassSet, b: PitchClassSet, mode: Equivalence) -> bool:
    if len(a) != len(b):
        return False
    return set_class_key(a, mode) == set_class_key(b, mode)


def is_transposed_version_of(a: PitchClassSet, b: PitchClassSet) -> bool:
    """Whether some Tₖ maps a onto b."""
    return are_equivalent(a, b, Equivalence.TRANSPOSITION)


def dedupe(sets: Iterable[PitchClassSet], mode: Equivalence) -> tuple[PitchClassSet, ...]:
    """Keep the first-seen representative of every equivalence class."""
    seen: set[tuple[int, ...]] = set()
    kept: list[PitchClassSet] = []
    for s in sets:
        key = set_class_key(s, mode)
        if key not in seen:
            seen.add(key)
            kept.append(s)
    return tuple(kept)


def contains_set_class(superset: PitchClassSet, subset: PitchClassSet, mode: Equivalence) -> bool:
    """Whether some member of subset's class (under mode) lies inside superset."""
    members = superset.as_frozenset()
    images: list[frozenset[int]] = [subset.as_frozenset()]
    if mode is not Equivalence.LITERAL:
        images = [transpose_set(subset, k).as_frozenset() for k in range(SEMITONES_PER_OCTAVE)]
    if mode is Equivalence.TRANSPOSITION_INVERSION:
        images += [
            invert_set_about_index(subset, n).as_frozenset() for n in range(SEMITONES_PER_OCTAVE)
        ]
    return any(image <= members for image in images)


# ---------------------------------------------------------------------------
# Subset / superset search
# ---------------------------------------------------------------------------


def iter_subsets(s: PitchClassSet, k: int) -> Iterator[PitchClassSet]:
    """Lazily yield every literal k-member subset of s, in combination order.

    Raises:
        InvalidArity: If k is outside [1, |s| − 1].
    """
    if not (1 <= k <= len(s) - 1):
        raise InvalidArity(k, 1, len(s) - 1)
    return (PitchClassSet(combo) for combo in combinations(s.pitch_classes, k))


def subsets_of_size(
    s: PitchClassSet,
    k: int,
    *,
    distinct: Equivalence | None = None,
) -> frozenset[PitchClassSet]:
    """All k-member subsets of s.

    Args:
        s:        Source set.
        k:        Subset size, 1 <= k <= |s| − 1.
        distinct: When given, keep one representative per equivalence class
                  (the first in combination order); otherwise return every
                  literal subset.

    Raises:
        InvalidArity: If k is out of bounds.

    Examples:
        >>> len(subsets_of_size(PitchClassSet.of(0, 4, 7), 2))
        3
    """
    found = iter_subsets(s, k)
    if distinct is None:
        return frozenset(found)
    return frozenset(dedupe(found, distinct))


def iter_supersets(
    s: PitchClassSet,
    k: int,
    universe: PitchClassSet | None = None,
) -> Iterator[PitchClassSet]:
    """Lazily yield every k-member superset of s drawn from universe.

    When s is not contained in universe there is nothing to yield.

    Raises:
        InvalidArity: If k is outside [|s| + 1, |universe|].
    """
    pool = universe if universe is not None else AGGREGATE
    if not (len(s) + 1 <= k <= len(pool)):
        raise InvalidArity(k, len(s) + 1, len(pool))
    if not s.issubset(pool):
        return iter(())
    remaining = tuple(pc for pc in pool if pc not in s)
    base = s.pitch_classes
    return (PitchClassSet(base + extra) for extra in combinations(remaining, k - len(s)))


def supersets_within(
    s: PitchClassSet,
    k: int,
    universe: PitchClassSet | None = None,
    *,
    distinct: Equivalence | None = None,
) -> frozenset[PitchClassSet]:
    """All k-member supersets of s whose members all come from universe.

    Args:
        s:        Set every result must contain.
        k:        Superset size, |s| + 1 <= k <= |universe|.
        universe: Pool of available pitch classes (default: all twelve).
        distinct: Optional equivalence to collapse results by.

    Raises:
        InvalidArity: If k is out of bounds.

    Examples:
        >>> major_triad = PitchClassSet.of(0, 4, 7)
        >>> len(supersets_within(major_triad, 4))
        9
    """
    found = iter_supersets(s, k, universe)
    if distinct is None:
        return frozenset(found)
    return frozenset(dedupe(found, distinct))
