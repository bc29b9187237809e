"""
core/music_theory/voice_leading.py — Minimal-displacement voice leading.

minimal_voice_leading() finds the bijection between two equal-size
pitch-class sets that moves the voices the least, measuring each voice by
its shortest signed distance around the octave ((b − a + 6) mod 12 − 6).

Algorithm:
    1. Build the n×n cost matrix |shortest_displacement(a_i, b_j)| with rows
       ordered by ascending source pitch class and columns by ascending
       target pitch class.
    2. Solve the assignment problem (scipy linear_sum_assignment, Hungarian
       method) for the minimum total displacement T.
    3. Tie-break on the largest single-voice move: the smallest threshold t
       such that a perfect matching using only entries <= t still costs T.
    4. Tie-break lexicographically: walk sources in ascending order and fix
       each to the smallest target that still admits an optimal completion
       (each check is one more assignment solve on the reduced matrix).

Every tie-break step keeps the total fixed, so the result is always a
minimum-cost matching; the extra solves cost O(n²) assignment problems on
n <= 12, which is negligible.

voice_leading_between_voicings() applies the same solver to concrete
pitches (absolute semitone distances), and optimize_voice_leading() chains
it across a chord progression, choosing for each chord the voicing that
moves least from the previous one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np
from scipy.optimize import linear_sum_assignment

from core.config import PROGRESSION_VOICING_CONFIG, VoicingConfig
from core.music_theory.errors import ArityMismatch
from core.music_theory.pitch import SEMITONES_PER_OCTAVE
from core.music_theory.types import (
    Chord,
    Pitch,
    PitchClassSet,
    PitchMotion,
    VoiceLeadingPath,
    VoiceMotion,
    Voicing,
    VoicingLeadingPath,
)
from core.music_theory.voicing import canonical_voicings, enumerate_voicings

logger = logging.getLogger(__name__)

_HALF_OCTAVE: int = SEMITONES_PER_OCTAVE // 2


# ---------------------------------------------------------------------------
# Cost matrices
# ---------------------------------------------------------------------------


def displacement_matrix(a: PitchClassSet, b: PitchClassSet) -> np.ndarray:
    """Signed shortest displacement from every tone of ``a`` to every tone of ``b``.

    Rows follow ascending pitch classes of ``a``, columns those of ``b``;
    every entry lies in [-6, 5].

    Examples:
        >>> displacement_matrix(PitchClassSet.of(0, 7), PitchClassSet.of(9,))
        array([[-3],
               [ 2]])
    """
    sources = np.asarray(a.pitch_classes, dtype=np.int64)
    targets = np.asarray(b.pitch_classes, dtype=np.int64)
    return (
        (targets[np.newaxis, :] - sources[:, np.newaxis] + _HALF_OCTAVE) % SEMITONES_PER_OCTAVE
    ) - _HALF_OCTAVE


def _height_matrix(a: Voicing, b: Voicing) -> np.ndarray:
    sources = np.asarray(a.heights, dtype=np.int64)
    targets = np.asarray(b.heights, dtype=np.int64)
    return targets[np.newaxis, :] - sources[:, np.newaxis]


# ---------------------------------------------------------------------------
# Assignment solver with deterministic tie-breaking
# ---------------------------------------------------------------------------


def _restricted_total(cost: np.ndarray, allowed: np.ndarray) -> int | None:
    """Minimum perfect-matching cost using only allowed entries, or None."""
    if cost.size == 0:
        return 0
    penalty = int(cost.sum()) + 1
    masked = np.where(allowed, cost, penalty)
    rows, cols = linear_sum_assignment(masked)
    if not allowed[rows, cols].all():
        return None
    return int(cost[rows, cols].sum())


def _solve_assignment(cost: np.ndarray) -> tuple[int, ...]:
    """Column chosen for each row: min total, then min max, then lexicographic."""
    n = cost.shape[0]
    everything = np.ones_like(cost, dtype=bool)
    total = _restricted_total(cost, everything)

    allowed = everything
    for threshold in np.unique(cost):
        candidate = cost <= threshold
        if _restricted_total(cost, candidate) == total:
            allowed = candidate
            break

    chosen: list[int] = []
    free = list(range(n))
    spent = 0
    for row in range(n):
        for col in free:
            if not allowed[row, col]:
                continue
            rest_rows = list(range(row + 1, n))
            rest_cols = [c for c in free if c != col]
            grid = np.ix_(rest_rows, rest_cols)
            rest = _restricted_total(cost[grid], allowed[grid])
            if rest is not None and spent + int(cost[row, col]) + rest == total:
                chosen.append(col)
                free.remove(col)
                spent += int(cost[row, col])
                break
    return tuple(chosen)


# ---------------------------------------------------------------------------
# Pitch-class voice leading
# ---------------------------------------------------------------------------


def minimal_voice_leading(a: PitchClassSet, b: PitchClassSet) -> VoiceLeadingPath:
    """Find the smoothest bijection between two equal-size pitch-class sets.

    Ties are broken by the smallest largest single-voice move, then by the
    lexicographically smallest sequence of targets when voices are ordered
    by ascending source pitch class.

    Args:
        a: Source set.
        b: Target set, same size as ``a``.

    Returns:
        VoiceLeadingPath with per-voice signed deltas and total displacement.

    Raises:
        ArityMismatch: If the sets differ in size.

    Examples:
        >>> path = minimal_voice_leading(PitchClassSet.of(0, 4, 7), PitchClassSet.of(9, 0, 4))
        >>> path.total_displacement, path.deltas
        (2, (0, 0, 2))
    """
    if len(a) != len(b):
        raise ArityMismatch(len(a), len(b))

    signed = displacement_matrix(a, b)
    assignment = _solve_assignment(np.abs(signed))
    motions = tuple(
        VoiceMotion(source=src, target=b.pitch_classes[col], displacement=int(signed[row, col]))
        for row, (src, col) in enumerate(zip(a.pitch_classes, assignment))
    )
    path = VoiceLeadingPath(motions)
    logger.debug("Voice leading %s -> %s: deltas=%s total=%d", a, b, path.deltas, path.total_displacement)
    return path


# ---------------------------------------------------------------------------
# Octave-aware voice leading
# ---------------------------------------------------------------------------


def voice_leading_between_voicings(a: Voicing, b: Voicing) -> VoicingLeadingPath:
    """Pair the pitches of two equal-size voicings with the least total motion.

    Distances are absolute semitones (no octave wrapping). Tie-breaks match
    minimal_voice_leading(), with targets compared by height.

    Raises:
        ArityMismatch: If the voicings have a different number of voices.
    """
    if len(a) != len(b):
        raise ArityMismatch(len(a), len(b))

    assignment = _solve_assignment(np.abs(_height_matrix(a, b)))
    return VoicingLeadingPath(
        tuple(PitchMotion(source=src, target=b.pitches[col]) for src, col in zip(a.pitches, assignment))
    )


def apply_displacements(voicing: Voicing, deltas: Sequence[int]) -> tuple[Pitch, ...]:
    """Move each voice (lowest first) by its delta.

    Order is preserved rather than re-sorted, so voice crossings stay visible.

    Raises:
        ArityMismatch: If there is not exactly one delta per voice.
    """
    if len(deltas) != len(voicing):
        raise ArityMismatch(len(voicing), len(deltas))
    return tuple(p.transpose(d) for p, d in zip(voicing.pitches, deltas))


# ---------------------------------------------------------------------------
# Two-voice motion classification
# ---------------------------------------------------------------------------


class MotionType(Enum):
    """Relative motion of two voices."""

    STATIC = "static"
    OBLIQUE = "oblique"
    PARALLEL = "parallel"
    SIMILAR = "similar"
    CONTRARY = "contrary"


def classify_motion(path: VoiceLeadingPath | VoicingLeadingPath) -> MotionType:
    """Classify the motion of a two-voice path.

    Raises:
        ArityMismatch: If the path does not have exactly two voices.

    Examples:
        >>> classify_motion(minimal_voice_leading(PitchClassSet.of(0, 7), PitchClassSet.of(2, 9)))
        <MotionType.PARALLEL: 'parallel'>
    """
    deltas = path.deltas
    if len(deltas) != 2:
        raise ArityMismatch(len(deltas), 2)
    first, second = deltas
    if first == 0 and second == 0:
        return MotionType.STATIC
    if first == 0 or second == 0:
        return MotionType.OBLIQUE
    if (first > 0) != (second > 0):
        return MotionType.CONTRARY
    if first == second:
        return MotionType.PARALLEL
    return MotionType.SIMILAR


# ---------------------------------------------------------------------------
# Progressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoicedChord:
    """A chord of a progression with the voicing chosen for it.

    Attributes:
        chord:    Original Chord (unchanged)
        voicing:  Chosen voicing
        movement: Total semitone movement from the preceding voicing (0 for first)
    """

    chord: Chord
    voicing: Voicing
    movement: int = 0


def _closest_voicing(previous: Voicing, candidates: Sequence[Voicing]) -> tuple[Voicing, int]:
    """Candidate reached with the least motion; ``candidates`` must be non-empty."""

    def motion_key(candidate: Voicing) -> tuple[int, int, tuple[int, ...]]:
        path = voice_leading_between_voicings(previous, candidate)
        return (path.total_displacement, path.max_displacement, candidate.heights)

    keyed = [(motion_key(candidate), candidate) for candidate in candidates]
    key, voicing = min(keyed, key=lambda pair: pair[0])
    return voicing, key[0]


def optimize_voice_leading(
    chords: Sequence[Chord],
    *,
    start_octave: int = 4,
    config: VoicingConfig = PROGRESSION_VOICING_CONFIG,
) -> tuple[VoicedChord, ...]:
    """Voice a progression so each chord moves as little as possible.

    The first chord takes its root-position close voicing at ``start_octave``.
    Each later chord takes, among its voicings allowed by ``config``, the one
    whose minimal voice leading from the previous voicing is smallest (ties:
    smaller largest move, then lower heights). Doublings are never used, so
    every chord must have the same size.

    Args:
        chords:       Progression to voice.
        start_octave: Octave of the first chord's lowest note.
        config:       Octave range and span limit for later chords.

    Returns:
        One VoicedChord per input chord; empty for an empty progression.
        A chord with no voicing inside ``config`` keeps its root-position
        close voicing at ``start_octave``.

    Raises:
        ArityMismatch: If two chords of the progression differ in size.

    Examples:
        >>> c, am = Chord(PitchClassSet.of(0, 4, 7), root=0), Chord(PitchClassSet.of(9, 0, 4), root=9)
        >>> [str(v.voicing) for v in optimize_voice_leading([c, am])]
        ['C4 E4 G4', 'C4 E4 A4']
    """
    if not chords:
        return ()

    sizes = {len(chord) for chord in chords}
    if len(sizes) > 1:
        raise ArityMismatch(min(sizes), max(sizes))

    logger.debug("Optimizing voice leading over %d chords", len(chords))
    first = canonical_voicings(chords[0], start_octave)[0][0]
    result = [VoicedChord(chord=chords[0], voicing=first)]
    for chord in chords[1:]:
        previous = result[-1].voicing
        candidates = tuple(
            enumerate_voicings(chord, config.octave_range, allow_doublings=False, config=config)
        )
        if candidates:
            voicing, movement = _closest_voicing(previous, candidates)
        else:
            logger.debug("No voicing of %s inside %s; using close position", chord.pitch_class_set, config.octave_range)
            voicing = canonical_voicings(chord, start_octave)[0][0]
            movement = voice_leading_between_voicings(previous, voicing).total_displacement
        result.append(VoicedChord(chord=chord, voicing=voicing, movement=movement))
    return tuple(result)


def total_voice_leading_cost(voiced: Sequence[VoicedChord]) -> int:
    """Sum of the movement costs of an optimized progression."""
    return sum(v.movement for v in voiced)
