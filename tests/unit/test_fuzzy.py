"""Tests for fuzzy filename scoring."""

import pytest

from quickfind.search.fuzzy import (
    SUBSEQUENCE_CAP,
    fuzzy_score,
    requires_literal_match,
    subsequence_score,
    token_match_score,
    tokenize,
)


class TestFuzzyScore:
    """Tests for the rule precedence in fuzzy_score."""

    def test_exact_match(self) -> None:
        """Test that identical strings score 1.0."""
        assert fuzzy_score("synapse.txt", "synapse.txt") == 1.0

    def test_prefix_match(self) -> None:
        """Test prefix scoring."""
        assert fuzzy_score("syn", "synapse.txt") == pytest.approx(0.98)

    def test_substring_match(self) -> None:
        """Test substring scoring."""
        assert fuzzy_score("aps", "synapse.txt") == pytest.approx(0.95)

    def test_prefix_beats_subsequence(self) -> None:
        """Test that a prefix outranks a scattered subsequence."""
        assert fuzzy_score("syn", "synapse.txt") > fuzzy_score("snp", "synapse.txt")

    def test_subsequence_value(self) -> None:
        """Test the subsequence formula for a scattered match."""
        # s(0) n(2) p(4): no adjacent pairs, starts at position 0
        expected = 3 / 11 * 0.6 + 0.1
        assert fuzzy_score("snp", "synapse.txt") == pytest.approx(expected)

    def test_no_match(self) -> None:
        """Test that unrelated strings score 0."""
        assert fuzzy_score("xyz", "synapse.txt") == 0.0

    def test_empty_inputs(self) -> None:
        """Test that empty query or target score 0."""
        assert fuzzy_score("", "synapse.txt") == 0.0
        assert fuzzy_score("syn", "") == 0.0

    def test_token_match(self) -> None:
        """Test that reordered words match through tokens."""
        score = fuzzy_score("budget report", "report_budget_2024.xlsx")

        assert score == pytest.approx(0.85)

    def test_partial_token_match(self) -> None:
        """Test that half the query tokens give half the token weight."""
        score = fuzzy_score("budget summary", "report_budget.xlsx")

        assert score == pytest.approx(0.425)

    def test_single_token_query_skips_token_score(self) -> None:
        """Test that a one-word query relies on the subsequence score only."""
        assert fuzzy_score("tgb", "report_budget.xlsx") == pytest.approx(
            subsequence_score("tgb", "report_budget.xlsx")
        )

    def test_scores_in_range(self) -> None:
        """Test that every score lies in [0, 1]."""
        for query in ["a", "syn", "snp", "synapse.txt", "s y n", "zzz"]:
            assert 0.0 <= fuzzy_score(query, "synapse.txt") <= 1.0

    def test_better_matches_rank_higher(self) -> None:
        """Test exact > prefix > substring > subsequence for one target."""
        target = "synapse.txt"
        scores = [
            fuzzy_score("synapse.txt", target),
            fuzzy_score("syn", target),
            fuzzy_score("aps", target),
            fuzzy_score("snp", target),
        ]

        assert scores == sorted(scores, reverse=True)
        assert len(set(scores)) == 4


class TestSubsequenceScore:
    """Tests for subsequence scoring."""

    def test_out_of_order_fails(self) -> None:
        """Test that characters must appear in order."""
        assert subsequence_score("ba", "ab") == 0.0

    def test_capped(self) -> None:
        """Test that long contiguous runs stay below the substring tiers."""
        assert subsequence_score("abcdefghij", "abcdefghijk") == SUBSEQUENCE_CAP

    def test_no_start_bonus(self) -> None:
        """Test a match that does not start at position 0."""
        # y(1) a(3): one gap, no start bonus
        assert subsequence_score("ya", "synapse") == pytest.approx(2 / 7 * 0.6)


class TestTokenize:
    """Tests for tokenization."""

    def test_separators_and_camel_case(self) -> None:
        """Test splitting on separators and camelCase boundaries."""
        assert tokenize("myFileName_v2.txt") == ["my", "file", "name", "v2", "txt"]

    def test_leading_uppercase(self) -> None:
        """Test that an uppercase first letter does not split."""
        assert tokenize("Hello") == ["hello"]

    def test_repeated_separators(self) -> None:
        """Test that empty tokens are dropped."""
        assert tokenize("a--b  c") == ["a", "b", "c"]

    def test_empty(self) -> None:
        """Test tokenizing empty text."""
        assert tokenize("") == []


class TestTokenMatchScore:
    """Tests for token overlap scoring."""

    def test_all_tokens_match(self) -> None:
        """Test that tokens are matched by containment."""
        score = token_match_score(["bud", "rep"], ["report", "budget"])

        assert score == pytest.approx(0.85)

    def test_empty_query(self) -> None:
        """Test empty query tokens."""
        assert token_match_score([], ["report"]) == 0.0


class TestRequiresLiteralMatch:
    """Tests for the literal-match heuristic."""

    @pytest.mark.parametrize(
        "query",
        ["me2.jpg", "docs/notes", "2024", "track-22663608", "12ab34"],
    )
    def test_literal(self, query: str) -> None:
        """Test paths, extensions and long digit runs."""
        assert requires_literal_match(query)

    @pytest.mark.parametrize("query", ["photo", "img123", "me2", "report 24"])
    def test_fuzzy(self, query: str) -> None:
        """Test queries that still use fuzzy scoring."""
        assert not requires_literal_match(query)
