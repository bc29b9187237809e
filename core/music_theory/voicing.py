"""
core/music_theory/voicing.py — Octave-aware voicing enumeration.

enumerate_voicings() realizes a chord in every combination of octaves inside
an octave range. The result is a finite, restartable, lazily-evaluated
sequence: iterating it twice yields the same voicings in the same order, and
abandoning an iteration early leaves nothing to clean up.

Enumeration (no doublings):
    For each chord tone, list every pitch of that pitch class whose octave lies
    inside the range. The Cartesian product over chord tones yields one voicing
    per combination — exactly one pitch per chord tone.

Enumeration (with doublings):
    For each chord tone, choose a non-empty subset of its in-range pitches.
    The product over chord tones gives voicings where any tone may appear in
    several octaves, bounded by ``max_voices``. A tone never doubles at the
    unison.

Filters applied to both:
    - max_span: lowest-to-highest distance in semitones
    - chord.bass: when set, the lowest voice must carry that pitch class

canonical_voicings() builds the close-position families: every chord tone
exactly once, stacked upward in a fixed cyclic order, so no adjacent interval
reaches an octave.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import chain, combinations, permutations, product

from core.config import DEFAULT_VOICING_CONFIG, VoicingConfig
from core.music_theory.errors import InvalidArity
from core.music_theory.types import Chord, Pitch, Voicing

# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------


def _pitches_in_range(pc: int, low_octave: int, high_octave: int) -> tuple[Pitch, ...]:
    """Every realization of ``pc`` from ``low_octave`` to ``high_octave``."""
    return tuple(Pitch(pc, octave) for octave in range(low_octave, high_octave + 1))


def _nonempty_subsets(options: tuple[Pitch, ...], limit: int) -> tuple[tuple[Pitch, ...], ...]:
    """Non-empty subsets of ``options`` with at most ``limit`` members."""
    return tuple(
        chain.from_iterable(
            combinations(options, size) for size in range(1, min(limit, len(options)) + 1)
        )
    )


def _accept(voicing: Voicing, chord: Chord, max_span: int | None) -> bool:
    if max_span is not None and voicing.span > max_span:
        return False
    if chord.bass is not None and voicing.pitches[0].pitch_class != chord.bass:
        return False
    return True


# ---------------------------------------------------------------------------
# VoicingSequence: restartable lazy sequence
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoicingSequence:
    """Lazy, restartable sequence of voicings for one chord.

    Each ``iter()`` starts a fresh enumeration; nothing is cached, so the
    sequence is safe to share and to abandon part-way through.

    Attributes:
        chord:           Chord being realized
        octave_range:    Inclusive (low, high) octave bounds
        allow_doublings: Whether chord tones may repeat at other octaves
        max_voices:      Voice-count ceiling when doublings are allowed
        max_span:        Optional lowest-to-highest limit in semitones
    """

    chord: Chord
    octave_range: tuple[int, int]
    allow_doublings: bool
    max_voices: int
    max_span: int | None = None

    def __iter__(self) -> Iterator[Voicing]:
        low, high = self.octave_range
        tones = self.chord.tones
        options = [_pitches_in_range(pc, low, high) for pc in tones]

        if not self.allow_doublings:
            for combo in product(*options):
                voicing = Voicing(combo)
                if _accept(voicing, self.chord, self.max_span):
                    yield voicing
            return

        per_tone_limit = self.max_voices - (len(tones) - 1)
        choices = [_nonempty_subsets(opts, per_tone_limit) for opts in options]
        for combo in product(*choices):
            pitches = tuple(chain.from_iterable(combo))
            if len(pitches) > self.max_voices:
                continue
            voicing = Voicing(pitches)
            if _accept(voicing, self.chord, self.max_span):
                yield voicing

    def count(self) -> int:
        """Exhaust a fresh iteration and return its length."""
        return sum(1 for _ in self)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def enumerate_voicings(
    chord: Chord,
    octave_range: tuple[int, int] | None = None,
    allow_doublings: bool | None = None,
    *,
    max_voices: int | None = None,
    config: VoicingConfig = DEFAULT_VOICING_CONFIG,
) -> VoicingSequence:
    """Enumerate every octave realization of a chord.

    Explicit arguments override the matching fields of ``config``.

    Args:
        chord:           Chord to realize.
        octave_range:    Inclusive (low_octave, high_octave).
        allow_doublings: Let chord tones repeat at additional octaves.
        max_voices:      Voice ceiling for doubled voicings; defaults to
                         one more than the chord size.
        config:          Defaults for anything not passed explicitly.

    Returns:
        A VoicingSequence. Without doublings every voicing has exactly
        len(chord) pitches; with doublings, between len(chord) and max_voices.
        An empty range (low > high) yields nothing.

    Raises:
        InvalidArity: If max_voices is smaller than the chord.

    Examples:
        >>> c_major = Chord(PitchClassSet.of(0, 4, 7))
        >>> enumerate_voicings(c_major, (4, 4)).count()
        1
        >>> enumerate_voicings(c_major, (3, 4)).count()
        8
    """
    low, high = octave_range if octave_range is not None else config.octave_range
    doublings = config.allow_doublings if allow_doublings is None else allow_doublings
    n = len(chord)

    voices = max_voices if max_voices is not None else config.max_voices
    if voices is None:
        voices = n + 1 if doublings else n
    if voices < n:
        raise InvalidArity(voices, n, n * max(high - low + 1, 1))

    return VoicingSequence(
        chord=chord,
        octave_range=(low, high),
        allow_doublings=doublings,
        max_voices=voices,
        max_span=config.max_span,
    )


def canonical_voicings(chord: Chord, octave: int = 4) -> tuple[tuple[Voicing, ...], ...]:
    """Close-position voicing families of a chord.

    A family is one cyclic ordering of the chord tones stacked upward; its
    members are the len(chord) inversions of that stacking. Each voicing uses
    every chord tone exactly once and no adjacent interval reaches an octave.
    There are (n − 1)! families of n voicings each.

    Args:
        chord:  Chord to voice; its ``tones`` order (root first when set)
                fixes the first family.
        octave: Octave of the lowest note of every voicing.

    Examples:
        >>> families = canonical_voicings(Chord(PitchClassSet.of(0, 4, 7), root=0))
        >>> [str(v) for v in families[0]]
        ['C4 E4 G4', 'E4 G4 C5', 'G4 C5 E5']
    """
    tones = chord.tones
    n = len(tones)
    families: list[tuple[Voicing, ...]] = []
    for tail in permutations(range(1, n)):
        family_order = (0,) + tail
        family: list[Voicing] = []
        for inversion in range(n):
            pitches = [Pitch(tones[inversion], octave)]
            for idx in family_order[1:]:
                nxt = tones[(idx + inversion) % n]
                pitches.append(pitches[-1].transpose(1).up_to(nxt))
            family.append(Voicing(tuple(pitches)))
        families.append(tuple(family))
    return tuple(families)
