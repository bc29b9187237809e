"""
Tests for core/music_theory/types.py — frozen value objects.

Validates:
    - Pitch: height/MIDI conversions, ordering, parsing, octave helpers
    - PitchClassSet: sorting, duplicate and range rejection, set identity
    - IntervalVector: shape and 1-based lookup
    - Chord: root/bass membership, tone rotation
    - Voicing: sorting, intervals, register normalization
    - Tuning / FretAssignment / GtrShape: construction and derived views
    - VoiceMotion / VoiceLeadingPath: displacement and bijection checks
"""

import dataclasses

import pytest

from core.music_theory.errors import (
    BassNotInSet,
    DuplicateEntry,
    FretOutOfRange,
    InvalidArity,
    InvalidInstrument,
    InvalidPitch,
    InvalidPitchClass,
    MusicTheoryError,
    RootNotInSet,
)
from core.music_theory.types import (
    Chord,
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

# ---------------------------------------------------------------------------
# Pitch
# ---------------------------------------------------------------------------


class TestPitch:
    def test_height(self) -> None:
        assert Pitch(0, 4).height == 48

    def test_middle_c_is_midi_60(self) -> None:
        assert Pitch(0, 4).midi == 60

    def test_from_midi(self) -> None:
        assert Pitch.from_midi(69) == Pitch(9, 4)

    def test_from_height_negative(self) -> None:
        assert Pitch.from_height(-1) == Pitch(11, -1)

    def test_invalid_pitch_class(self) -> None:
        with pytest.raises(InvalidPitchClass):
            Pitch(12, 4)

    def test_invalid_octave(self) -> None:
        with pytest.raises(InvalidPitch):
            Pitch(0, 4.0)  # type: ignore[arg-type]

    def test_ordering_by_height(self) -> None:
        assert Pitch(11, 3) < Pitch(0, 4)
        assert max(Pitch(4, 2), Pitch(7, 1)) == Pitch(4, 2)

    def test_transpose(self) -> None:
        assert Pitch(11, 3).transpose(1) == Pitch(0, 4)
        assert Pitch(0, 4).transpose(-1) == Pitch(11, 3)

    def test_raise_octaves(self) -> None:
        assert Pitch(4, 2).raise_octaves(2) == Pitch(4, 4)

    def test_up_to(self) -> None:
        assert Pitch(7, 3).up_to(0) == Pitch(0, 4)
        assert Pitch(7, 3).up_to(7) == Pitch(7, 3)

    def test_down_to(self) -> None:
        assert Pitch(0, 4).down_to(9) == Pitch(9, 3)

    def test_str(self) -> None:
        assert str(Pitch(1, 5)) == "C#5"

    @pytest.mark.parametrize(
        "text, expected",
        [("E2", Pitch(4, 2)), ("Bb3", Pitch(10, 3)), ("c#-1", Pitch(1, -1)), (" G4 ", Pitch(7, 4))],
    )
    def test_parse(self, text: str, expected: Pitch) -> None:
        assert Pitch.parse(text) == expected

    @pytest.mark.parametrize("text", ["", "E", "H2", "4E"])
    def test_parse_rejects_malformed(self, text: str) -> None:
        with pytest.raises(InvalidPitch, match="Cannot parse pitch"):
            Pitch.parse(text)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Pitch(0, 4).octave = 5  # type: ignore[misc]


# ---------------------------------------------------------------------------
# PitchClassSet
# ---------------------------------------------------------------------------


class TestPitchClassSet:
    def test_members_sorted(self) -> None:
        assert PitchClassSet((7, 0, 4)).pitch_classes == (0, 4, 7)

    def test_identity_is_set_equality(self) -> None:
        assert PitchClassSet.of(7, 0, 4) == PitchClassSet.of(0, 4, 7)
        assert hash(PitchClassSet.of(7, 0, 4)) == hash(PitchClassSet.of(0, 4, 7))

    def test_duplicates_rejected(self) -> None:
        with pytest.raises(DuplicateEntry) as exc_info:
            PitchClassSet.of(0, 4, 4, 7, 0)
        assert exc_info.value.duplicates == (0, 4)

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(InvalidPitchClass):
            PitchClassSet.of(0, 12)

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidArity):
            PitchClassSet(())

    def test_aggregate_allowed(self) -> None:
        assert len(PitchClassSet(tuple(range(12)))) == 12

    def test_membership_and_iteration(self) -> None:
        s = PitchClassSet.of(2, 9)
        assert 9 in s
        assert 3 not in s
        assert list(s) == [2, 9]

    def test_issubset(self) -> None:
        assert PitchClassSet.of(0, 4).issubset(PitchClassSet.of(0, 4, 7))
        assert not PitchClassSet.of(0, 5).issubset(PitchClassSet.of(0, 4, 7))

    def test_str(self) -> None:
        assert str(PitchClassSet.of(7, 0, 4)) == "{0,4,7}"


# ---------------------------------------------------------------------------
# IntervalVector
# ---------------------------------------------------------------------------


class TestIntervalVector:
    def test_one_based_lookup(self) -> None:
        iv = IntervalVector((0, 0, 1, 1, 1, 0))
        assert iv[3] == 1
        assert iv[6] == 0

    def test_lookup_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            IntervalVector((0,) * 6)[0]

    def test_wrong_length_rejected(self) -> None:
        with pytest.raises(MusicTheoryError, match="6 entries"):
            IntervalVector((1, 2, 3))

    def test_total_and_str(self) -> None:
        iv = IntervalVector((2, 5, 4, 3, 6, 1))
        assert iv.total == 21
        assert str(iv) == "<254361>"


# ---------------------------------------------------------------------------
# Chord
# ---------------------------------------------------------------------------


class TestChord:
    def test_root_must_be_member(self) -> None:
        with pytest.raises(RootNotInSet):
            Chord(PitchClassSet.of(0, 4, 7), root=2)

    def test_bass_must_be_member(self) -> None:
        with pytest.raises(BassNotInSet):
            Chord(PitchClassSet.of(0, 4, 7), bass=11)

    def test_tones_start_at_root(self, a_minor: Chord) -> None:
        assert a_minor.tones == (9, 0, 4)

    def test_tones_without_root(self) -> None:
        assert Chord(PitchClassSet.of(4, 0, 7)).tones == (0, 4, 7)

    def test_len(self, g_dom7: Chord) -> None:
        assert len(g_dom7) == 4


# ---------------------------------------------------------------------------
# Voicing
# ---------------------------------------------------------------------------


class TestVoicing:
    def test_sorted_low_to_high(self) -> None:
        v = Voicing((Pitch(7, 4), Pitch(0, 4), Pitch(4, 3)))
        assert str(v) == "E3 C4 G4"

    def test_empty_rejected(self) -> None:
        with pytest.raises(MusicTheoryError):
            Voicing(())

    def test_stacked_intervals_and_span(self) -> None:
        v = Voicing.from_heights(36, 40, 55)
        assert v.stacked_intervals == (4, 15)
        assert v.span == 19
        assert v.has_wide_intervals

    def test_pitch_classes_keep_multiplicity(self) -> None:
        v = Voicing.from_heights(36, 43, 48)
        assert v.pitch_classes == (0, 7, 0)
        assert v.pitch_class_set == PitchClassSet.of(0, 7)

    def test_realizes(self) -> None:
        v = Voicing.from_heights(36, 43, 52)
        assert v.realizes(PitchClassSet.of(0, 4, 7))
        assert not v.realizes(PitchClassSet.of(0, 4, 7, 11))

    def test_normalized_register(self) -> None:
        v = Voicing((Pitch(4, 2), Pitch(0, 3)))
        assert v.normalized_register(4) == Voicing((Pitch(4, 4), Pitch(0, 5)))

    def test_transpose(self) -> None:
        assert Voicing.from_heights(48, 52).transpose(2).heights == (50, 54)


# ---------------------------------------------------------------------------
# Fretboard types
# ---------------------------------------------------------------------------


class TestTuning:
    def test_no_strings_rejected(self) -> None:
        with pytest.raises(InvalidInstrument, match="at least one string"):
            Tuning(open_strings=(), max_fret=12)

    def test_negative_max_fret_rejected(self) -> None:
        with pytest.raises(InvalidInstrument, match="max_fret"):
            Tuning(open_strings=(Pitch(4, 2),), max_fret=-1)

    def test_fret_for(self, guitar: Tuning) -> None:
        # C on the A string is fret 3, on the G string fret 5
        assert guitar.fret_for(0, 1) == 3
        assert guitar.fret_for(0, 3) == 5

    def test_fret_for_beyond_max_fret(self, two_string: Tuning) -> None:
        short = Tuning(open_strings=two_string.open_strings, max_fret=2)
        assert short.fret_for(7, 0) is None

    def test_sounding_pitch(self, guitar: Tuning) -> None:
        assert guitar.sounding_pitch(1, 3) == Pitch(0, 3)
        assert guitar.sounding_pitch(5, 0) == Pitch(4, 4)

    def test_sounding_pitch_out_of_range(self, guitar: Tuning) -> None:
        with pytest.raises(FretOutOfRange):
            guitar.sounding_pitch(0, 25)

    def test_unknown_string(self, guitar: Tuning) -> None:
        with pytest.raises(InvalidInstrument, match="out of range"):
            guitar.sounding_pitch(6, 0)


class TestGtrShape:
    def _open_c(self, guitar: Tuning) -> GtrShape:
        assignments = tuple(guitar.assign(s, f) for s, f in [(1, 3), (2, 2), (3, 0), (4, 1), (5, 0)])
        return GtrShape(assignments, ShapeCategory.NON_TRANSPOSABLE, guitar.string_count)

    def test_diagram(self, guitar: Tuning) -> None:
        assert self._open_c(guitar).diagram == "x-3-2-0-1-0"

    def test_frets_by_string(self, guitar: Tuning) -> None:
        assert self._open_c(guitar).frets_by_string() == (None, 3, 2, 0, 1, 0)

    def test_voicing(self, guitar: Tuning) -> None:
        assert str(self._open_c(guitar).voicing) == "C3 E3 G3 C4 E4"

    def test_fretted_span_ignores_open_strings(self, guitar: Tuning) -> None:
        assert self._open_c(guitar).fretted_span == 2

    def test_assignments_sorted_by_string(self, guitar: Tuning) -> None:
        shape = GtrShape(
            (guitar.assign(3, 5), guitar.assign(1, 7)), ShapeCategory.REGULAR, guitar.string_count
        )
        assert shape.strings == (1, 3)
        assert shape.frets == (7, 5)

    def test_string_used_twice_rejected(self, guitar: Tuning) -> None:
        with pytest.raises(MusicTheoryError, match="twice"):
            GtrShape(
                (guitar.assign(1, 3), guitar.assign(1, 5)), ShapeCategory.REGULAR, guitar.string_count
            )

    def test_octave_signature(self, guitar: Tuning) -> None:
        low = GtrShape((guitar.assign(1, 3), guitar.assign(2, 2)), ShapeCategory.REGULAR, 6)
        high = GtrShape((guitar.assign(1, 15), guitar.assign(2, 2)), ShapeCategory.REGULAR, 6)
        assert low.octave_signature() == high.octave_signature()
        assert high.octave_displaced
        assert not low.octave_displaced


# ---------------------------------------------------------------------------
# Voice leading types
# ---------------------------------------------------------------------------


class TestVoiceMotion:
    def test_valid(self) -> None:
        assert VoiceMotion(7, 9, 2).displacement == 2

    def test_inconsistent_displacement(self) -> None:
        with pytest.raises(MusicTheoryError, match="does not move"):
            VoiceMotion(7, 9, 3)

    def test_too_large(self) -> None:
        with pytest.raises(MusicTheoryError, match=r"\[-6, 6\]"):
            VoiceMotion(0, 7, 7)


class TestVoiceLeadingPath:
    def test_sorted_by_source_and_totals(self) -> None:
        path = VoiceLeadingPath((VoiceMotion(7, 9, 2), VoiceMotion(0, 0, 0), VoiceMotion(4, 4, 0)))
        assert path.deltas == (0, 0, 2)
        assert path.total_displacement == 2
        assert path.max_displacement == 2
        assert path.common_tones == (0, 4)
        assert path.target == PitchClassSet.of(0, 4, 9)
        assert path.as_mapping() == {0: 0, 4: 4, 7: 9}

    def test_not_a_bijection(self) -> None:
        with pytest.raises(MusicTheoryError, match="bijection"):
            VoiceLeadingPath((VoiceMotion(0, 2, 2), VoiceMotion(4, 2, -2)))


class TestVoicingLeadingPath:
    def test_deltas(self) -> None:
        path = VoicingLeadingPath(
            (PitchMotion(Pitch(0, 4), Pitch(11, 3)), PitchMotion(Pitch(7, 4), Pitch(9, 4)))
        )
        assert path.deltas == (-1, 2)
        assert path.total_displacement == 3
        assert path.targets == (Pitch(11, 3), Pitch(9, 4))
