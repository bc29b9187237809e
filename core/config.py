"""
Configuration dataclasses for the voicing and fretboard searches.

These immutable config objects decouple search parameters from function
signatures, making it easier to define standard configurations and reuse
them across searches (and ship them to worker processes).
"""

from dataclasses import dataclass

# Frets below this get an extra candidate one octave higher on the same string.
DEFAULT_OCTAVE_DOUBLING_BELOW_FRET = 6


@dataclass(frozen=True)
class ShapeSearchConfig:
    """
    Configuration for fretboard chord-shape searches.

    There is deliberately no default hand span: what counts as a reachable
    stretch depends on the player and the instrument, so every search states it.

    Attributes:
        max_hand_span: Largest allowed distance (in frets) between the lowest
            and highest non-open fret of a shape.
        separate_octaves: Keep shapes that differ only by moving a note an
            octave along its string as distinct results. When False, only the
            lowest-fret representative of each such family is kept.
        octave_doubling_below_fret: A string whose lowest matching fret is
            below this also tries the same note 12 frets higher.

    Example:
        >>> config = ShapeSearchConfig(max_hand_span=4, separate_octaves=False)
        >>> result = find_gtr_shapes(chord, STANDARD_GUITAR, config)
    """

    max_hand_span: int
    separate_octaves: bool = True
    octave_doubling_below_fret: int = DEFAULT_OCTAVE_DOUBLING_BELOW_FRET

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_hand_span < 0:
            raise ValueError(f"max_hand_span must be non-negative, got {self.max_hand_span}")
        if not (0 <= self.octave_doubling_below_fret <= 12):
            raise ValueError(
                "octave_doubling_below_fret must be in [0, 12], "
                f"got {self.octave_doubling_below_fret}"
            )


@dataclass(frozen=True)
class VoicingConfig:
    """
    Configuration for octave-aware voicing enumeration.

    Attributes:
        low_octave: Lowest octave a voice may sound in (inclusive).
        high_octave: Highest octave a voice may sound in (inclusive).
        allow_doublings: Let chord tones repeat at additional octaves.
        max_voices: Upper bound on voices when doublings are allowed.
            None means one voice per chord tone plus one doubling.
        max_span: Optional limit on the semitone distance between the
            lowest and highest voice.
    """

    low_octave: int = 3
    high_octave: int = 5
    allow_doublings: bool = False
    max_voices: int | None = None
    max_span: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.low_octave > self.high_octave:
            raise ValueError(
                f"low_octave ({self.low_octave}) must not exceed high_octave ({self.high_octave})"
            )
        if self.max_voices is not None and self.max_voices < 1:
            raise ValueError(f"max_voices must be positive, got {self.max_voices}")
        if self.max_span is not None and self.max_span < 0:
            raise ValueError(f"max_span must be non-negative, got {self.max_span}")

    @property
    def octave_range(self) -> tuple[int, int]:
        return (self.low_octave, self.high_octave)


# Pre-defined configurations for common use cases

STANDARD_SHAPE_SEARCH = ShapeSearchConfig(max_hand_span=4)
"""Four-fret span, octave variants kept distinct."""

COMPACT_SHAPE_SEARCH = ShapeSearchConfig(max_hand_span=3)
"""Three-fret span for dense four-note shapes."""

STRETCH_SHAPE_SEARCH = ShapeSearchConfig(max_hand_span=5)
"""Five-fret span for players comfortable with wide stretches."""

DEDUPED_SHAPE_SEARCH = ShapeSearchConfig(max_hand_span=4, separate_octaves=False)
"""Four-fret span, one representative per octave-displacement family."""

DEFAULT_VOICING_CONFIG = VoicingConfig()
"""Octaves 3–5, one voice per chord tone."""

DOUBLED_VOICING_CONFIG = VoicingConfig(allow_doublings=True)
"""Octaves 3–5, chord tones may double at other octaves."""

PROGRESSION_VOICING_CONFIG = VoicingConfig(max_span=14)
"""Octaves 3–5, closed voicings (span at most 14 semitones) for progressions."""
