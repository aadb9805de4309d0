"""
Topic categories, keyword term sets and phrase fallbacks for the categorizer.
"""

import re
from enum import Enum
from typing import Dict, FrozenSet, List, Pattern, Tuple


class CategoryHint(str, Enum):
    DEAL = "deal"
    MEDIA = "media"
    WINNING = "winning"
    MONEY = "money"
    LEADERSHIP = "leadership"
    OPPONENT = "opponent"
    TRUTH = "truth"
    PEOPLE = "people"
    ADVICE = "advice"
    GENERIC = "generic"


# Tie-break and phrase-check order. GENERIC is never scored.
CATEGORY_ORDER: List[CategoryHint] = [
    CategoryHint.DEAL,
    CategoryHint.MEDIA,
    CategoryHint.WINNING,
    CategoryHint.MONEY,
    CategoryHint.LEADERSHIP,
    CategoryHint.OPPONENT,
    CategoryHint.TRUTH,
    CategoryHint.PEOPLE,
    CategoryHint.ADVICE,
]


TERM_SETS: Dict[CategoryHint, FrozenSet[str]] = {
    CategoryHint.DEAL: frozenset({
        "deal", "negotiat", "contract", "bargain", "trade",
        "agreement", "close", "offer", "leverage", "partner",
        "sign", "buy", "sell", "handshake", "terms",
    }),
    CategoryHint.MEDIA: frozenset({
        "media", "news", "press", "fake", "report",
        "journalist", "tv", "paper", "interview", "rating",
        "coverage", "headline", "camera", "network", "story",
    }),
    CategoryHint.WINNING: frozenset({
        "win", "victor", "champion", "success", "best",
        "great", "beat", "triumph", "record", "top",
        "greatest", "tremendous", "big", "trophy", "undefeated",
    }),
    CategoryHint.MONEY: frozenset({
        "money", "cash", "dollar", "rich", "wealth",
        "billion", "million", "tax", "price", "cost",
        "budget", "profit", "invest", "bank", "economy",
    }),
    CategoryHint.LEADERSHIP: frozenset({
        "leader", "boss", "strong", "power", "command",
        "president", "govern", "decision", "respect", "control",
        "manage", "charge", "lead", "order", "run",
    }),
    CategoryHint.OPPONENT: frozenset({
        "opponent", "enemy", "rival", "loser", "critic",
        "hater", "attack", "against", "competitor", "fight",
        "weak", "sad", "failing", "dishonest", "them",
    }),
    CategoryHint.TRUTH: frozenset({
        "truth", "true", "lie", "fact", "honest",
        "real", "believe", "trust", "proof", "evidence",
        "rigged", "false", "myth", "verify", "claim",
    }),
    CategoryHint.PEOPLE: frozenset({
        "people", "voter", "crowd", "fan", "friend",
        "family", "supporter", "public", "country", "worker",
        "citizen", "nation", "folks", "everybody", "community",
    }),
    CategoryHint.ADVICE: frozenset({
        "advice", "advise", "should", "help", "tip",
        "suggest", "recommend", "guide", "how", "plan",
        "strategy", "idea", "secret", "lesson", "learn",
    }),
}


# Whole-phrase fallbacks, consulted only when no term scored.
PHRASE_PATTERNS: List[Tuple[CategoryHint, Pattern[str]]] = [
    (CategoryHint.DEAL, re.compile(r"\b(art of the|shake on it|sign here|make it happen)\b")),
    (CategoryHint.MEDIA, re.compile(r"\b(on air|front page|breaking|press conference)\b|@\w+")),
    (CategoryHint.WINNING, re.compile(r"#\s?1\b|\bnumber one\b|\bno\.\s?1\b")),
    (CategoryHint.MONEY, re.compile(r"[$€£]\s?\d|\b\d+\s?(k|m|bn)\b")),
    (CategoryHint.LEADERSHIP, re.compile(r"\b(in charge|take over|who decides|top job)\b")),
    (CategoryHint.OPPONENT, re.compile(r"\b(the other side|those guys|bad guys)\b")),
    (CategoryHint.TRUTH, re.compile(r"\b100\s?%|\bfor real\b|\bno joke\b")),
    (CategoryHint.PEOPLE, re.compile(r"\b(we the|you guys|everyone)\b")),
    (CategoryHint.ADVICE, re.compile(r"\?{2,}|\bwhat now\b|\bwhat next\b")),
]
