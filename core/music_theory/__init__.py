"""
core/music_theory/ — Pitch-class algebra and exhaustive realization search.

Exports:
    Types:        Pitch, PitchClassSet, IntervalVector, Chord, Voicing,
                  Tuning, FretAssignment, ShapeCategory, GtrShape,
                  VoiceMotion, VoiceLeadingPath, PitchMotion, VoicingLeadingPath
    Pitch:        pitch_class, transpose, invert, interval_class,
                  shortest_displacement, note_to_pitch_class, pitch_class_to_note
    Sets:         pitch_class_set, chord, normal_form, prime_form,
                  interval_vector, symmetries, subsets_of_size, supersets_within,
                  Equivalence, are_equivalent, dedupe
    Voicing:      enumerate_voicings, canonical_voicings
    Fretboard:    find_gtr_shapes, ShapeSearchResult
    Voice lead:   minimal_voice_leading, voice_leading_between_voicings,
                  optimize_voice_leading, total_voice_leading_cost
    Catalogs:     scale_set, chord_set, build_chord, load_tuning, STANDARD_GUITAR
"""

from core.music_theory.errors import (
    ArityMismatch,
    BassNotInSet,
    DuplicateEntry,
    FretOutOfRange,
    InvalidArity,
    InvalidInstrument,
    InvalidPitch,
    InvalidPitchClass,
    InvalidStepPattern,
    MusicTheoryError,
    RootNotInSet,
    UnknownTuning,
)
from core.music_theory.fretboard import ShapeSearchResult, find_gtr_shapes, iter_gtr_shapes
from core.music_theory.pcsets import (
    Equivalence,
    Symmetries,
    are_equivalent,
    chord,
    complement,
    dedupe,
    interval_vector,
    normal_form,
    prime_form,
    pitch_class_set,
    subsets_of_size,
    supersets_within,
    symmetries,
)
from core.music_theory.pitch import (
    interval_class,
    invert,
    note_to_pitch_class,
    pitch_class,
    pitch_class_to_note,
    shortest_displacement,
    transpose,
)
from core.music_theory.scales import build_chord, chord_set, get_diatonic_chords, scale_set
from core.music_theory.tunings import STANDARD_GUITAR, available_tunings, load_tuning
from core.music_theory.types import (
    Chord,
    FretAssignment,
    GtrShape,
    IntervalVector,
    Pitch,
    PitchClassSet,
    PitchMotion,
    ShapeCategory,
    Tuning,
    VoiceLeadingPath,
    VoiceMotion,
    Voicing,
    VoicingLeadingPath,
)
from core.music_theory.voice_leading import (
    MotionType,
    VoicedChord,
    apply_displacements,
    classify_motion,
    minimal_voice_leading,
    optimize_voice_leading,
    total_voice_leading_cost,
    voice_leading_between_voicings,
)
from core.music_theory.voicing import canonical_voicings, enumerate_voicings

__all__ = [
    # Types
    "Pitch",
    "PitchClassSet",
    "IntervalVector",
    "Chord",
    "Voicing",
    "Tuning",
    "FretAssignment",
    "ShapeCategory",
    "GtrShape",
    "VoiceMotion",
    "VoiceLeadingPath",
    "PitchMotion",
    "VoicingLeadingPath",
    # Errors
    "MusicTheoryError",
    "InvalidPitchClass",
    "InvalidPitch",
    "DuplicateEntry",
    "RootNotInSet",
    "BassNotInSet",
    "InvalidInstrument",
    "FretOutOfRange",
    "InvalidStepPattern",
    "UnknownTuning",
    "InvalidArity",
    "ArityMismatch",
    # Pitch algebra
    "pitch_class",
    "transpose",
    "invert",
    "interval_class",
    "shortest_displacement",
    "note_to_pitch_class",
    "pitch_class_to_note",
    # Set engine
    "pitch_class_set",
    "chord",
    "complement",
    "normal_form",
    "prime_form",
    "interval_vector",
    "symmetries",
    "Symmetries",
    "subsets_of_size",
    "supersets_within",
    "Equivalence",
    "are_equivalent",
    "dedupe",
    # Voicing
    "enumerate_voicings",
    "canonical_voicings",
    # Fretboard
    "find_gtr_shapes",
    "iter_gtr_shapes",
    "ShapeSearchResult",
    # Voice leading
    "minimal_voice_leading",
    "voice_leading_between_voicings",
    "apply_displacements",
    "classify_motion",
    "MotionType",
    "optimize_voice_leading",
    "total_voice_leading_cost",
    "VoicedChord",
    # Catalogs
    "scale_set",
    "chord_set",
    "build_chord",
    "get_diatonic_chords",
    "load_tuning",
    "available_tunings",
    "STANDARD_GUITAR",
]
