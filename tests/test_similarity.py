"""similarity モジュールのユニットテスト."""

import pytest

from snackdb.similarity import (
    compare_strings,
    contains_ignore_case,
    find_best_match,
    rate_candidates,
)

MENU = [
    (1, "Hamburguer Simples"),
    (2, "Hamburguer Duplo"),
    (3, "Hamburguer Triplo"),
    (4, "X-Salada"),
]


class TestCompareStrings:
    """compare_strings のテスト."""

    def test_identical(self):
        assert compare_strings("X-Salada", "X-Salada") == 1.0

    def test_case_insensitive(self):
        assert compare_strings("X-tudo", "X-Tudo") == 1.0

    def test_whitespace_ignored(self):
        assert compare_strings("Hamburguer Duplo", "hamburguerduplo") == 1.0

    def test_disjoint(self):
        assert compare_strings("abc", "xyz") == 0.0

    def test_known_value(self):
        # ni ig gh ht / na ac ch ht → 共通 1
        assert compare_strings("night", "nacht") == pytest.approx(0.25)

    def test_repeated_bigrams_counted_as_multiset(self):
        # aa×3 と aa×1 → 共通 1
        assert compare_strings("aaaa", "aa") == pytest.approx(0.5)

    @pytest.mark.parametrize("a, b, expected", [
        ("a", "a", 1.0),
        ("a", "b", 0.0),
        ("a", "ab", 0.0),
        ("", "", 1.0),
    ])
    def test_short_strings(self, a, b, expected):
        assert compare_strings(a, b) == expected

    @pytest.mark.parametrize("a, b", [
        ("Hamburguer Simples", "Hamburguer Duplo"),
        ("X-Bacon", "X-Tudo"),
        ("Porção de Fritas Média", "fritas"),
    ])
    def test_symmetric(self, a, b):
        assert compare_strings(a, b) == compare_strings(b, a)

    def test_range(self):
        for _, name in MENU:
            assert 0.0 <= compare_strings("Hamburguer", name) <= 1.0


class TestFindBestMatch:
    """find_best_match のテスト."""

    def test_exact_match(self):
        match = find_best_match("Hamburguer Duplo", MENU)
        assert match.id == 2
        assert match.name == "Hamburguer Duplo"
        assert match.score == 1.0

    def test_case_mismatch(self):
        candidates = MENU + [(5, "X-Bacon"), (6, "X-Tudo")]
        match = find_best_match("X-tudo", candidates)
        assert match.id == 6
        assert match.score == 1.0

    def test_unrelated_query_scores_low(self):
        match = find_best_match("pizza", MENU)
        assert match.score < 0.2

    def test_empty_candidates(self):
        assert find_best_match("pizza", []) is None

    def test_result_is_a_candidate(self):
        match = find_best_match("Triplo", MENU)
        assert match.id in {cid for cid, _ in MENU}
        assert match.id == 3

    def test_tie_keeps_first(self):
        match = find_best_match("abc", [("b", "abc"), ("a", "abc")])
        assert match.id == "b"

    def test_all_zero_keeps_first(self):
        match = find_best_match("zz", [(10, "abc"), (11, "def")])
        assert match.id == 10
        assert match.score == 0.0

    def test_deterministic(self):
        results = {find_best_match("Hamburguer", MENU) for _ in range(5)}
        assert len(results) == 1


class TestRateCandidates:
    """rate_candidates のテスト."""

    def test_keeps_input_order(self):
        ratings = rate_candidates("Hamburguer Duplo", MENU)
        assert [r.id for r in ratings] == [1, 2, 3, 4]
        assert ratings[1].score == 1.0


class TestContainsIgnoreCase:
    """contains_ignore_case のテスト."""

    def test_case_folded(self):
        assert contains_ignore_case("X-Tudo", "x-tu")
        assert contains_ignore_case("hamburguer duplo", "DUPLO")

    def test_not_contained(self):
        assert not contains_ignore_case("X-Salada", "pizza")

    def test_pattern_is_literal(self):
        assert contains_ignore_case("a.b", ".")
        assert not contains_ignore_case("ab", ".")
        assert contains_ignore_case("X+", "x+")
        assert not contains_ignore_case("Hamburguer", "Ham.*")

    def test_empty_pattern_matches_all(self):
        assert contains_ignore_case("X-Bacon", "")
