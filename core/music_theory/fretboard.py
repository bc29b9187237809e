"""
core/music_theory/fretboard.py — Exhaustive chord-shape search on a fretboard.

find_gtr_shapes() lists every way to fret a chord on a tuned instrument with
one chord tone per string, grouped by the voicing each shape sounds and then
by playability category.

Algorithm:
    1. Choose len(chord) of the instrument's strings, keeping string order
       (combinations, not permutations — C(m, n) string groups).
    2. Assign the chord tones to those strings in every order (n! orderings).
    3. For each string, find the lowest fret sounding its assigned pitch
       class. If that fret is past max_fret the ordering is dropped. Frets
       below ``octave_doubling_below_fret`` also try the note 12 frets higher
       when that still fits on the neck.
    4. Take the Cartesian product of the per-string fret candidates.
    5. Reject shapes whose non-open frets span more than ``max_hand_span``.
    6. Categorize what is left:
           NON_TRANSPOSABLE  uses an open string
           WIDE_INTERVAL     adjacent strings sound more than an octave apart
           REGULAR           everything else
    7. Group by the voicing sounded (register-normalized, so the grouping
       does not depend on the instrument), then by category.
    8. Unless ``separate_octaves`` is set, shapes that differ only by moving
       notes an octave along their strings collapse to the lowest-fret one.

The search space is bounded by C(m, n) · n! · 2ⁿ, so it always terminates.
Every string group is an independent task; passing a
``concurrent.futures.Executor`` fans the groups out and merges the results,
which are identical to a serial run.
"""

from __future__ import annotations

import logging
from functools import reduce
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping
from concurrent.futures import Executor
from dataclasses import dataclass, field
from itertools import chain, combinations, permutations, product, repeat

from core.config import ShapeSearchConfig
from core.music_theory.pitch import SEMITONES_PER_OCTAVE
from core.music_theory.types import (
    WIDE_INTERVAL_SEMITONES,
    Chord,
    FretAssignment,
    GtrShape,
    ShapeCategory,
    Tuning,
    Voicing,
)

logger = logging.getLogger(__name__)

#: Octave that group keys are normalized to (lowest note of the voicing)
GROUP_OCTAVE: int = 4

ShapeGroups = Mapping[Voicing, Mapping[ShapeCategory, frozenset[GtrShape]]]


# ---------------------------------------------------------------------------
# ShapeSearchResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShapeSearchResult:
    """Shapes found by find_gtr_shapes(), grouped by voicing then category.

    An empty result is a valid answer ("no shapes exist"), not an error.

    Attributes:
        groups: voicing → category → shapes. Only non-empty buckets appear.
    """

    groups: ShapeGroups = field(default_factory=dict)

    def __len__(self) -> int:
        return sum(len(shapes) for buckets in self.groups.values() for shapes in buckets.values())

    @property
    def voicings(self) -> tuple[Voicing, ...]:
        """Group keys, ordered by their heights."""
        return tuple(sorted(self.groups, key=lambda v: v.heights))

    def by_category(self, category: ShapeCategory) -> frozenset[GtrShape]:
        return frozenset(
            chain.from_iterable(buckets.get(category, ()) for buckets in self.groups.values())
        )

    def shapes_for(self, voicing: Voicing, category: ShapeCategory | None = None) -> frozenset[GtrShape]:
        """Shapes sounding ``voicing`` (any register), optionally one category only."""
        buckets = self.groups.get(voicing.normalized_register(GROUP_OCTAVE), {})
        if category is not None:
            return buckets.get(category, frozenset())
        return frozenset(chain.from_iterable(buckets.values()))

    def all_shapes(self) -> frozenset[GtrShape]:
        return frozenset(
            chain.from_iterable(
                shapes for buckets in self.groups.values() for shapes in buckets.values()
            )
        )

    def category_counts(self) -> dict[ShapeCategory, int]:
        return {category: len(self.by_category(category)) for category in ShapeCategory}

    def merge(self, other: ShapeSearchResult) -> ShapeSearchResult:
        """Union of two results, bucket by bucket. Associative and commutative."""
        merged: dict[Voicing, dict[ShapeCategory, frozenset[GtrShape]]] = {
            voicing: dict(buckets) for voicing, buckets in self.groups.items()
        }
        for voicing, buckets in other.groups.items():
            target = merged.setdefault(voicing, {})
            for category, shapes in buckets.items():
                target[category] = target.get(category, frozenset()) | shapes
        return ShapeSearchResult(groups=merged)


# ---------------------------------------------------------------------------
# Per-string candidates and categorization
# ---------------------------------------------------------------------------


def _candidate_frets(
    tuning: Tuning,
    string: int,
    pc: int,
    config: ShapeSearchConfig,
) -> tuple[int, ...]:
    """Frets on ``string`` that sound ``pc``; empty if none fits on the neck."""
    fret = tuning.fret_for(pc, string)
    if fret is None:
        return ()
    upper = fret + SEMITONES_PER_OCTAVE
    if fret < config.octave_doubling_below_fret and upper <= tuning.max_fret:
        return (fret, upper)
    return (fret,)


def categorize(assignments: tuple[FretAssignment, ...]) -> ShapeCategory:
    """Playability category of a set of fret assignments (in string order)."""
    if any(a.is_open for a in assignments):
        return ShapeCategory.NON_TRANSPOSABLE
    heights = [a.pitch.height for a in assignments]
    if any(abs(b - a) > WIDE_INTERVAL_SEMITONES for a, b in zip(heights, heights[1:])):
        return ShapeCategory.WIDE_INTERVAL
    return ShapeCategory.REGULAR


def _within_hand_span(frets: tuple[int, ...], max_hand_span: int) -> bool:
    fretted = [f for f in frets if f != 0]
    return not fretted or max(fretted) - min(fretted) <= max_hand_span


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def _shapes_for_ordering(
    ordering: tuple[int, ...],
    strings: tuple[int, ...],
    tuning: Tuning,
    config: ShapeSearchConfig,
    bass: int | None,
) -> Iterator[GtrShape]:
    candidates = []
    for string, pc in zip(strings, ordering):
        frets = _candidate_frets(tuning, string, pc, config)
        if not frets:
            logger.debug("No fret for pc %d on string %d within %d frets", pc, string, tuning.max_fret)
            return
        candidates.append(frets)

    for frets in product(*candidates):
        if not _within_hand_span(frets, config.max_hand_span):
            continue
        assignments = tuple(tuning.assign(s, f) for s, f in zip(strings, frets))
        if bass is not None and min(assignments, key=lambda a: a.pitch.height).pitch.pitch_class != bass:
            continue
        yield GtrShape(
            assignments=assignments,
            category=categorize(assignments),
            string_count=tuning.string_count,
        )


def _shapes_on_strings(
    tones: tuple[int, ...],
    strings: tuple[int, ...],
    tuning: Tuning,
    config: ShapeSearchConfig,
    bass: int | None = None,
) -> tuple[GtrShape, ...]:
    """Every accepted shape on one string group — one independent task."""
    return tuple(
        chain.from_iterable(
            _shapes_for_ordering(ordering, strings, tuning, config, bass)
            for ordering in permutations(tones)
        )
    )


def iter_gtr_shapes(
    chord: Chord,
    tuning: Tuning,
    config: ShapeSearchConfig,
) -> Iterator[GtrShape]:
    """Lazily yield every accepted shape, before grouping or octave collapsing.

    Stops cleanly when abandoned; yields nothing if the chord has more tones
    than the instrument has strings.
    """
    n = len(chord)
    tones = chord.pitch_classes
    for strings in combinations(range(tuning.string_count), n):
        for ordering in permutations(tones):
            yield from _shapes_for_ordering(ordering, strings, tuning, config, chord.bass)


def _collapse_octave_variants(shapes: Iterable[GtrShape]) -> Iterator[GtrShape]:
    """Keep the lowest-fret shape of every octave-displacement family."""
    best: dict[tuple[tuple[int, int], ...], GtrShape] = {}
    for shape in shapes:
        key = shape.octave_signature()
        current = best.get(key)
        if current is None or shape.frets < current.frets:
            best[key] = shape
    return iter(best.values())


def group_shapes(shapes: Iterable[GtrShape], *, separate_octaves: bool = True) -> ShapeSearchResult:
    """Group shapes by register-normalized voicing, then by category."""
    if not separate_octaves:
        shapes = _collapse_octave_variants(shapes)
    buckets: defaultdict[Voicing, defaultdict[ShapeCategory, set[GtrShape]]] = defaultdict(
        lambda: defaultdict(set)
    )
    for shape in shapes:
        key = shape.voicing.normalized_register(GROUP_OCTAVE)
        buckets[key][shape.category].add(shape)
    return ShapeSearchResult(
        groups={
            voicing: {category: frozenset(found) for category, found in by_category.items()}
            for voicing, by_category in buckets.items()
        }
    )


def find_gtr_shapes(
    chord: Chord,
    tuning: Tuning,
    config: ShapeSearchConfig,
    *,
    executor: Executor | None = None,
) -> ShapeSearchResult:
    """Find every valid fretting of a chord on an instrument.

    Args:
        chord:    Chord to fret; one tone per string. When ``chord.bass`` is
                  set the lowest sounding note must carry it.
        tuning:   Instrument tuning and fret ceiling.
        config:   Hand span, octave-variant handling, octave-doubling cutoff.
        executor: Optional executor to evaluate string groups in parallel.

    Returns:
        ShapeSearchResult. Empty (never an error) when the chord has more
        tones than the instrument has strings or no fretting fits.

    Example:
        >>> c_major = Chord(PitchClassSet.of(0, 4, 7), root=0)
        >>> result = find_gtr_shapes(c_major, STANDARD_GUITAR, STANDARD_SHAPE_SEARCH)
        >>> any(s.diagram == "x-3-2-0-x-x" for s in result.all_shapes())
        True
    """
    n = len(chord)
    logger.debug(
        "Shape search: chord=%s strings=%d max_fret=%d span=%d separate_octaves=%s",
        chord.pitch_class_set,
        tuning.string_count,
        tuning.max_fret,
        config.max_hand_span,
        config.separate_octaves,
    )
    if n > tuning.string_count:
        logger.debug("Chord of %d tones cannot fit on %d strings", n, tuning.string_count)
        return ShapeSearchResult()

    tones = chord.pitch_classes
    groupings = list(combinations(range(tuning.string_count), n))
    if executor is None:
        batches: Iterable[tuple[GtrShape, ...]] = (
            _shapes_on_strings(tones, strings, tuning, config, chord.bass) for strings in groupings
        )
    else:
        batches = executor.map(
            _shapes_on_strings,
            repeat(tones),
            groupings,
            repeat(tuning),
            repeat(config),
            repeat(chord.bass),
        )

    # Octave families never span string groups, so each batch collapses on its own.
    partials = (group_shapes(batch, separate_octaves=config.separate_octaves) for batch in batches)
    result = reduce(ShapeSearchResult.merge, partials, ShapeSearchResult())
    logger.debug("Shape search found %d shapes in %d voicing groups", len(result), len(result.groups))
    return result
