"""文字列類似度による最良候補の選択.

類似度は bigram（隣接2文字）の Dice 係数:
    2 × 共通 bigram 数（多重集合の積） / 両文字列の bigram 総数

比較前に casefold し、空白を除去する。
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Hashable, Sequence

from snackdb.models import MatchResult

_WHITESPACE = re.compile(r"\s+")


def _normalize(text: str) -> str:
    return _WHITESPACE.sub("", text.casefold())


def _bigrams(text: str) -> Counter[str]:
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def compare_strings(a: str, b: str) -> float:
    """2つの文字列の類似度 (0.0〜1.0) を返す.

    正規化後に2文字未満の場合は、一致なら 1.0、不一致なら 0.0。
    """
    a = _normalize(a)
    b = _normalize(b)
    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    a_bigrams = _bigrams(a)
    b_bigrams = _bigrams(b)
    shared = sum((a_bigrams & b_bigrams).values())
    return 2.0 * shared / (sum(a_bigrams.values()) + sum(b_bigrams.values()))


def rate_candidates(
    query: str, candidates: Sequence[tuple[Hashable, str]]
) -> list[MatchResult]:
    """全候補の類似度を入力順で返す."""
    return [
        MatchResult(id=candidate_id, name=name, score=compare_strings(query, name))
        for candidate_id, name in candidates
    ]


def find_best_match(
    query: str, candidates: Sequence[tuple[Hashable, str]]
) -> MatchResult | None:
    """query に最も近い候補を返す.

    Args:
        query: 検索文字列
        candidates: [(id, name), ...]。順序は上流クエリの返却順

    Returns:
        最高スコアの候補。同点なら入力順で先のもの。候補が空なら None。
    """
    best: MatchResult | None = None
    for rating in rate_candidates(query, candidates):
        if best is None or rating.score > best.score:
            best = rating
    return best


def contains_ignore_case(text: str, pattern: str) -> bool:
    """text が pattern を大文字小文字を無視して含むか.

    pattern はリテラル文字列として扱う（正規表現ではない）。
    """
    return pattern.casefold() in (text or "").casefold()
