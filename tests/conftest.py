"""
Shared fixtures for the test suite.

Centralizes the chords and instruments that several test modules search
over, so each test file states only what it checks.
"""

import pytest

from core.music_theory.tunings import STANDARD_GUITAR
from core.music_theory.types import Chord, Pitch, PitchClassSet, Tuning

# ---------------------------------------------------------------------------
# Chords
# ---------------------------------------------------------------------------


@pytest.fixture()
def c_major() -> Chord:
    """C major triad {C, E, G} with root C."""
    return Chord(PitchClassSet.of(0, 4, 7), root=0)


@pytest.fixture()
def a_minor() -> Chord:
    """A minor triad {A, C, E} with root A."""
    return Chord(PitchClassSet.of(9, 0, 4), root=9)


@pytest.fixture()
def g_dom7() -> Chord:
    """G dominant seventh {G, B, D, F} with root G."""
    return Chord(PitchClassSet.of(7, 11, 2, 5), root=7)


# ---------------------------------------------------------------------------
# Instruments
# ---------------------------------------------------------------------------


@pytest.fixture()
def guitar() -> Tuning:
    """Standard six-string guitar, E2 A2 D3 G3 B3 E4, 24 frets."""
    return STANDARD_GUITAR


@pytest.fixture()
def short_guitar() -> Tuning:
    """Standard tuning cut off at the 5th fret, to keep searches small."""
    return Tuning(open_strings=STANDARD_GUITAR.open_strings, max_fret=5, name="short guitar")


@pytest.fixture()
def two_string() -> Tuning:
    """Two strings a fourth apart, E3 and A3, 12 frets."""
    return Tuning(open_strings=(Pitch(4, 3), Pitch(9, 3)), max_fret=12)
