"""
Tests for the similarity module.
"""

import pytest

from rewrite_patcher.config import PatchConfig
from rewrite_patcher.similarity import overlap_ratio, score, skeleton


class TestScore:
    """Tests for the score function."""

    def test_containment(self):
        """One text inside the other scores 0.9."""
        assert score("The cat sat", "The cat sat on the mat") == pytest.approx(0.9)

    def test_containment_is_case_sensitive(self):
        """Containment uses an exact, case-sensitive check."""
        assert score("tips", "Top Tips") == 0.0

    def test_leading_words(self):
        """Matching first three words (any case) scores 0.85."""
        assert score("Top ten tips here", "top ten TIPS now") == pytest.approx(0.85)

    def test_meaningful_word_overlap(self):
        """Paraphrases score 0.7 plus 0.2 times the overlap ratio."""
        a = "Regular publishing schedules build reader trust"
        b = "Publishing schedules build lasting trust with readers"
        assert score(a, b) == pytest.approx(0.7 + 0.2 * 4 / 6)

    def test_overlap_below_gate_scores_zero(self):
        """An overlap of half or less does not count."""
        assert score("Marketing teams love spreadsheets", "Marketing budgets shrink quickly") == 0.0

    def test_skeleton(self):
        """Same punctuation skeleton scores 0.6."""
        assert score("abc-123.", "xyz-789.") == pytest.approx(0.6)

    def test_empty_input(self):
        """Empty text never matches."""
        assert score("", "anything") == 0.0
        assert score("anything", "") == 0.0

    def test_custom_weights(self):
        """Weights come from the config."""
        config = PatchConfig(containment_score=0.95)
        assert score("cat", "cat sat", config) == pytest.approx(0.95)

    def test_exact_evidence_outranks_structure(self):
        """The maximum signal wins."""
        assert score("Hello there.", "Hello there.") == pytest.approx(0.9)

    @pytest.mark.parametrize("a, b", [
        ("Completely unrelated", "Nothing in common here"),
        ("Same words here", "Same words here"),
        ("Publishing schedules build trust", "Publishing schedules build trust slowly"),
    ])
    def test_score_in_unit_range(self, a, b):
        """Scores stay in [0, 1]."""
        assert 0.0 <= score(a, b) <= 1.0


class TestHelpers:
    """Tests for skeleton and overlap_ratio."""

    def test_skeleton_keeps_punctuation(self):
        """Alphanumerics become placeholders."""
        assert skeleton("Q1: 50% off!") == "xx: xx% xxx!"

    def test_overlap_ratio_uses_distinct_words(self):
        """Repeated words are counted once."""
        assert overlap_ratio("brand brand brand", "brand voice") == pytest.approx(1.0)

    def test_overlap_ratio_without_meaningful_words(self):
        """Short words only gives zero."""
        assert overlap_ratio("a b c", "the cat sat") == 0.0
