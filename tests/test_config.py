# -*- coding: utf-8 -*-
"""
Tests for PatchConfig.

Covers the default thresholds, validation and the strict/lenient factories.
"""

import pytest

from rewrite_patcher.config import DEFAULT_CONFIG, PatchConfig


class TestPatchConfig:
    """Tests for PatchConfig dataclass."""

    def test_default_config(self):
        """Test default threshold values."""
        config = PatchConfig()
        assert config.exact_confidence == 1.0
        assert config.whitespace_confidence == 0.95
        assert config.heading_floor == 0.8
        assert config.block_floor == 0.6
        assert config.containment_score == 0.9
        assert config.leading_words_score == 0.85
        assert config.min_shared_share == 0.5
        assert config.retention_floor == 0.7
        assert config.duplicate_sentence_tokens == 5
        assert config.duplicate_window_tokens == 8
        assert config.duplicate_proximity_chars == 50
        assert config.enable_fallbacks is True
        assert config.scrub_enabled is True

    def test_module_default(self):
        """Test the shared default instance."""
        assert DEFAULT_CONFIG == PatchConfig()

    def test_strict_factory(self):
        """Test strict mode disables fallbacks."""
        config = PatchConfig.strict()
        assert config.enable_fallbacks is False
        assert config.block_floor == 0.7

    def test_lenient_factory(self):
        """Test lenient mode lowers floors."""
        config = PatchConfig.lenient()
        assert config.heading_floor == 0.7
        assert config.block_floor == 0.5
        assert config.block_max_length_ratio == 3.0

    def test_factory_overrides(self):
        """Test overrides win over factory defaults."""
        config = PatchConfig.strict(block_floor=0.9, scrub_enabled=False)
        assert config.block_floor == 0.9
        assert config.scrub_enabled is False
        assert config.enable_fallbacks is False


class TestPatchConfigValidation:
    """Tests for PatchConfig validation."""

    @pytest.mark.parametrize("field_name", [
        "heading_floor",
        "block_floor",
        "retention_floor",
        "min_shared_share",
        "chunk_confidence",
    ])
    def test_fraction_out_of_range(self, field_name):
        """Test fractions outside [0, 1] are rejected."""
        with pytest.raises(ValueError, match=field_name):
            PatchConfig(**{field_name: 1.5})

    def test_overlap_weights_exceed_one(self):
        """Test overlap scores above 1 are rejected."""
        with pytest.raises(ValueError, match="overlap_base"):
            PatchConfig(overlap_base=0.9, overlap_weight=0.2)

    def test_inverted_length_band(self):
        """Test min length ratio above max is rejected."""
        with pytest.raises(ValueError, match="block_min_length_ratio"):
            PatchConfig(block_min_length_ratio=2.5)

    def test_window_too_small(self):
        """Test one-token windows are rejected."""
        with pytest.raises(ValueError, match="duplicate_window_tokens"):
            PatchConfig(duplicate_window_tokens=1)

    def test_edge_tokens_positive(self):
        """Test chunk edge must take at least one token."""
        with pytest.raises(ValueError, match="chunk_edge_tokens"):
            PatchConfig(chunk_edge_tokens=0)
