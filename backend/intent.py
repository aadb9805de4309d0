"""Topic categorization for incoming questions.

Depends only on categories and text_utils. Every function here is pure.
"""

from typing import Dict, Iterable, Mapping, Optional

from categories import CATEGORY_ORDER, PHRASE_PATTERNS, TERM_SETS, CategoryHint
from text_utils import split_words


def tokenize(text: str) -> list[str]:
    return split_words((text or "").lower())


def score_terms(tokens: Iterable[str], terms: Iterable[str]) -> int:
    """Score tokens against one term set.

    An exact hit is worth +1, and every term that contains the token or is
    contained by it adds another +1, so exact hits count twice.
    """
    terms = tuple(terms)
    score = 0
    for token in tokens:
        for term in terms:
            if token == term:
                score += 1
            if term in token or token in term:
                score += 1
    return score


def score_categories(
    tokens: list[str],
    term_sets: Optional[Mapping[CategoryHint, Iterable[str]]] = None,
) -> Dict[CategoryHint, int]:
    term_sets = TERM_SETS if term_sets is None else term_sets
    return {
        category: score_terms(tokens, term_sets.get(category, ()))
        for category in CATEGORY_ORDER
    }


def resolve_category(scores: Mapping[CategoryHint, int]) -> Optional[CategoryHint]:
    """Highest score wins; ties go to the earliest category in CATEGORY_ORDER."""
    best = max((scores.get(c, 0) for c in CATEGORY_ORDER), default=0)
    if best <= 0:
        return None
    for category in CATEGORY_ORDER:
        if scores.get(category, 0) == best:
            return category
    return None


def match_phrase_category(text: str) -> CategoryHint:
    low = (text or "").lower()
    for category, pattern in PHRASE_PATTERNS:
        if pattern.search(low):
            return category
    return CategoryHint.GENERIC


def categorize(text: str) -> CategoryHint:
    tokens = tokenize(text)
    winner = resolve_category(score_categories(tokens))
    if winner is not None:
        return winner
    return match_phrase_category(text)
