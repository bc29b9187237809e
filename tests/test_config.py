"""
Tests for core.config module.

These tests verify ShapeSearchConfig / VoicingConfig validation and the
predefined configurations.
"""

import dataclasses

import pytest

from core.config import (
    COMPACT_SHAPE_SEARCH,
    DEDUPED_SHAPE_SEARCH,
    DEFAULT_OCTAVE_DOUBLING_BELOW_FRET,
    DEFAULT_VOICING_CONFIG,
    DOUBLED_VOICING_CONFIG,
    PROGRESSION_VOICING_CONFIG,
    STANDARD_SHAPE_SEARCH,
    STRETCH_SHAPE_SEARCH,
    ShapeSearchConfig,
    VoicingConfig,
)


class TestShapeSearchConfigValidation:
    """Test ShapeSearchConfig parameter validation."""

    def test_hand_span_is_required(self) -> None:
        with pytest.raises(TypeError):
            ShapeSearchConfig()  # type: ignore[call-arg]

    def test_default_values(self) -> None:
        config = ShapeSearchConfig(max_hand_span=4)
        assert config.separate_octaves is True
        assert config.octave_doubling_below_fret == DEFAULT_OCTAVE_DOUBLING_BELOW_FRET == 6

    def test_zero_span_is_valid(self) -> None:
        assert ShapeSearchConfig(max_hand_span=0).max_hand_span == 0

    def test_negative_span_raises(self) -> None:
        with pytest.raises(ValueError, match="max_hand_span must be non-negative"):
            ShapeSearchConfig(max_hand_span=-1)

    @pytest.mark.parametrize("cutoff", [-1, 13])
    def test_doubling_cutoff_bounds(self, cutoff: int) -> None:
        with pytest.raises(ValueError, match="octave_doubling_below_fret"):
            ShapeSearchConfig(max_hand_span=4, octave_doubling_below_fret=cutoff)


class TestVoicingConfigValidation:
    """Test VoicingConfig parameter validation."""

    def test_default_values(self) -> None:
        config = VoicingConfig()
        assert config.octave_range == (3, 5)
        assert config.allow_doublings is False
        assert config.max_voices is None
        assert config.max_span is None

    def test_inverted_range_raises(self) -> None:
        with pytest.raises(ValueError, match="must not exceed high_octave"):
            VoicingConfig(low_octave=5, high_octave=3)

    def test_non_positive_max_voices_raises(self) -> None:
        with pytest.raises(ValueError, match="max_voices must be positive"):
            VoicingConfig(max_voices=0)

    def test_negative_span_raises(self) -> None:
        with pytest.raises(ValueError, match="max_span must be non-negative"):
            VoicingConfig(max_span=-2)


class TestConfigImmutability:
    """Test that configs are frozen."""

    def test_shape_search_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            STANDARD_SHAPE_SEARCH.max_hand_span = 10  # type: ignore[misc]

    def test_voicing_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_VOICING_CONFIG.low_octave = 1  # type: ignore[misc]

    def test_hashable(self) -> None:
        assert len({STANDARD_SHAPE_SEARCH, ShapeSearchConfig(max_hand_span=4)}) == 1


class TestPredefinedConfigs:
    """Test the predefined configuration constants."""

    def test_spans(self) -> None:
        assert COMPACT_SHAPE_SEARCH.max_hand_span == 3
        assert STANDARD_SHAPE_SEARCH.max_hand_span == 4
        assert STRETCH_SHAPE_SEARCH.max_hand_span == 5

    def test_deduped(self) -> None:
        assert DEDUPED_SHAPE_SEARCH.separate_octaves is False
        assert DEDUPED_SHAPE_SEARCH.max_hand_span == STANDARD_SHAPE_SEARCH.max_hand_span

    def test_voicing_presets(self) -> None:
        assert DOUBLED_VOICING_CONFIG.allow_doublings is True
        assert PROGRESSION_VOICING_CONFIG.max_span == 14
