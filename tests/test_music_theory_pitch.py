"""
Tests for core/music_theory/pitch.py — pitch-class algebra.

Validates:
    - pitch_class: accepts [0, 11], rejects everything else
    - transpose / invert / invert_about_index: mod-12 wrap-around
    - interval_class and shortest_displacement ranges
    - note-name conversion (sharps, flats, enharmonic naturals)
"""

import pytest

from core.music_theory.errors import InvalidPitchClass, MusicTheoryError
from core.music_theory.pitch import (
    interval_class,
    invert,
    invert_about_index,
    normalize_note,
    note_to_pitch_class,
    pitch_class,
    pitch_class_to_note,
    semitone_distance,
    shortest_displacement,
    transpose,
)
from core.music_theory.types import Pitch

# ---------------------------------------------------------------------------
# pitch_class
# ---------------------------------------------------------------------------


class TestPitchClass:
    @pytest.mark.parametrize("value", range(12))
    def test_valid_values_pass_through(self, value: int) -> None:
        assert pitch_class(value) == value

    @pytest.mark.parametrize("value", [-1, 12, 100])
    def test_out_of_range_raises(self, value: int) -> None:
        with pytest.raises(InvalidPitchClass, match="must be an integer in"):
            pitch_class(value)

    def test_non_integer_raises(self) -> None:
        with pytest.raises(InvalidPitchClass):
            pitch_class(1.5)  # type: ignore[arg-type]

    def test_bool_rejected(self) -> None:
        with pytest.raises(InvalidPitchClass):
            pitch_class(True)

    def test_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            pitch_class(12)
        assert issubclass(InvalidPitchClass, MusicTheoryError)

    def test_error_carries_value(self) -> None:
        with pytest.raises(InvalidPitchClass) as exc_info:
            pitch_class(13)
        assert exc_info.value.value == 13


# ---------------------------------------------------------------------------
# Mod-12 operations
# ---------------------------------------------------------------------------


class TestTranspose:
    def test_simple(self) -> None:
        assert transpose(0, 4) == 4

    def test_wraps_around(self) -> None:
        assert transpose(10, 5) == 3

    def test_negative_interval(self) -> None:
        assert transpose(2, -5) == 9

    def test_octave_is_identity(self) -> None:
        for pc in range(12):
            assert transpose(pc, 12) == pc


class TestInvert:
    def test_about_zero(self) -> None:
        assert invert(4, 0) == 8

    def test_axis_is_fixed_point(self) -> None:
        assert invert(3, 3) == 3

    def test_involution(self) -> None:
        for pc in range(12):
            assert invert(invert(pc, 5), 5) == pc

    def test_index_form(self) -> None:
        assert invert_about_index(0, 1) == 1
        assert invert_about_index(1, 1) == 0

    def test_index_form_even_matches_axis(self) -> None:
        for pc in range(12):
            assert invert_about_index(pc, 10) == invert(pc, 5)


class TestIntervalClass:
    def test_unison(self) -> None:
        assert interval_class(5, 5) == 0

    def test_fifth_is_ic5(self) -> None:
        assert interval_class(0, 7) == 5

    def test_symmetric(self) -> None:
        assert interval_class(2, 11) == interval_class(11, 2) == 3

    def test_tritone(self) -> None:
        assert interval_class(0, 6) == 6


class TestShortestDisplacement:
    def test_up_a_step(self) -> None:
        assert shortest_displacement(7, 9) == 2

    def test_down_across_octave(self) -> None:
        assert shortest_displacement(0, 11) == -1

    def test_tritone_is_negative_six(self) -> None:
        assert shortest_displacement(0, 6) == -6

    def test_range(self) -> None:
        for a in range(12):
            for b in range(12):
                d = shortest_displacement(a, b)
                assert -6 <= d <= 5
                assert (a + d) % 12 == b


class TestSemitoneDistance:
    def test_up_an_octave(self) -> None:
        assert semitone_distance(Pitch(0, 4), Pitch(0, 5)) == 12

    def test_downward_is_negative(self) -> None:
        assert semitone_distance(Pitch(4, 3), Pitch(0, 3)) == -4


# ---------------------------------------------------------------------------
# Note names
# ---------------------------------------------------------------------------


class TestNoteNames:
    @pytest.mark.parametrize(
        "note, pc",
        [("C", 0), ("C#", 1), ("Db", 1), ("Bb", 10), ("b", 11), ("E#", 5), ("Cb", 11)],
    )
    def test_note_to_pitch_class(self, note: str, pc: int) -> None:
        assert note_to_pitch_class(note) == pc

    def test_normalize_flat_to_sharp(self) -> None:
        assert normalize_note("Eb") == "D#"

    def test_unknown_note_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown note"):
            note_to_pitch_class("H")

    def test_empty_note_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown note"):
            note_to_pitch_class("  ")

    def test_pitch_class_to_note_uses_sharps(self) -> None:
        assert pitch_class_to_note(6) == "F#"

    def test_pitch_class_to_note_validates(self) -> None:
        with pytest.raises(InvalidPitchClass):
            pitch_class_to_note(12)
