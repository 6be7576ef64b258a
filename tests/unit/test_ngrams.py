"""
Tests for the impossible bigram filter.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from strictstrings.quality import IMPOSSIBLE_BIGRAMS, NgramFilter


@pytest.fixture
def ngrams():
    return NgramFilter()


@pytest.mark.unit
class TestNgramFilter:
    def test_denylisted_pair_removes_string(self, ngrams):
        result = ngrams.apply({"thejk", "the quick brown"})
        assert result.rejected == {"thejk"}
        assert result.kept == {"the quick brown"}

    def test_dot_exempts_string(self, ngrams):
        assert ngrams.accepts("www.jk.com")

    def test_pair_at_end_of_string(self, ngrams):
        assert ngrams.find_bigram("halfq") == "fq"
        assert not ngrams.accepts("halfq")

    def test_matching_is_case_sensitive(self, ngrams):
        assert ngrams.accepts("theJK")

    def test_pairs_across_spaces_do_not_match(self, ngrams):
        assert ngrams.accepts("the j k")

    def test_single_character_string(self, ngrams):
        assert ngrams.accepts("q")

    def test_custom_denylist(self):
        custom = NgramFilter({"ab"})
        assert not custom.accepts("cabin")
        assert custom.accepts("thejk")

    def test_denylist_only_holds_bigrams(self):
        assert all(len(pair) == 2 for pair in IMPOSSIBLE_BIGRAMS)
        assert "jk" in IMPOSSIBLE_BIGRAMS

    @given(st.text(max_size=40), st.text(max_size=40))
    def test_any_string_with_dot_is_kept(self, head, tail):
        text = head + "." + tail
        assert NgramFilter().accepts(text)
        assert NgramFilter().apply({text}).kept == {text}
