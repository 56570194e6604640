"""Unit tests for the tokenizer."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from services.tokenizer import tokenize


class TestTokenize:
    """Test suite for tokenize()."""

    def test_lowercases_and_splits(self):
        assert tokenize("Alpha BETA gamma") == ["alpha", "beta", "gamma"]

    def test_punctuation_becomes_separator(self):
        assert tokenize("FCFS, SJF... round-robin!") == ["fcfs", "sjf", "round", "robin"]

    def test_keeps_digits(self):
        assert tokenize("Top 10 tips for 2024") == ["top", "10", "tips", "for", "2024"]

    def test_collapses_whitespace_runs(self):
        assert tokenize("  one\t\ttwo\n\nthree  ") == ["one", "two", "three"]

    def test_non_ascii_letters_are_dropped(self):
        assert tokenize("café naïve") == ["caf", "na", "ve"]

    def test_repeated_terms_are_kept_in_order(self):
        assert tokenize("alpha beta alpha") == ["alpha", "beta", "alpha"]

    @pytest.mark.parametrize("value", ["", "   ", "!!! ??? ...", None, 42, ["alpha"]])
    def test_degenerate_input_yields_no_terms(self, value):
        assert tokenize(value) == []

    def test_is_deterministic(self):
        text = "Arrays store elements contiguously; strings are arrays."
        assert tokenize(text) == tokenize(text)
