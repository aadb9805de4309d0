"""
Canned reply pools and the selector that draws from them.
"""

import logging
import random
import threading
from typing import Dict, Optional, Sequence, Tuple

from categories import CategoryHint
from intent import categorize
from settings import ServerSettings, get_settings
from text_utils import cap_length, sanitize_input

logger = logging.getLogger("xenon.replies")

SHORT_INPUT_MAX_CHARS = 3


GENERIC_OPENERS: Tuple[str, ...] = (
    "Go ahead, ask me anything. People say I have the best answers, and they're right.",
    "I'm listening. Nobody listens better than me, believe me.",
    "You came to the right place. Ask the question, we'll make it tremendous.",
    "Big day, big questions. What's on your mind?",
    "Let's hear it. I've got a lot of answers and they're all very good.",
)

SHORT_INPUT_POOL: Tuple[str, ...] = (
    "That's it? Give me more than that. I like big questions.",
    "Short. Very short. Try a real sentence, you'll be amazed.",
    "Three letters won't get you a deal. Tell me more.",
    "I need more words. The best words. Try again.",
)

DEFAULT_POOL: Tuple[str, ...] = (
    "Great question. Many people are asking it, and the answer is simple: we do it better.",
    "I've thought about this a lot, more than anybody. It's going to work out beautifully.",
    "Look, nobody knows this stuff like I do. Keep going, keep winning.",
    "That's a very interesting one. My instinct says go big and never apologize.",
    "People don't talk about this enough. Frankly, we're going to fix it.",
    "Ask ten experts, get ten answers. Ask me, you get the right one.",
)

CATEGORY_POOLS: Dict[CategoryHint, Tuple[str, ...]] = {
    CategoryHint.DEAL: (
        "Every deal starts with walking away. If you can't walk, you can't win.",
        "Never take the first offer. The first offer is an insult, and we don't take insults.",
        "A great deal is when both sides think they won, but you actually won.",
        "Leverage is everything. Get it, keep it, and never tell them you have it.",
        "I've closed bigger contracts before breakfast. Think bigger, then close.",
        "Read every line of the contract. The tiny print is where they hide the losers.",
    ),
    CategoryHint.MEDIA: (
        "The press will write what they write. Make the headline before they do.",
        "Ratings don't lie. When you're good, the cameras follow you everywhere.",
        "Half the stories are fake, the other half are about me. Both sell papers.",
        "Never fight the news on their terms. Change the story, they'll chase it.",
        "Every interview is a negotiation. You decide what the story is.",
        "Bad coverage is still coverage. Just make sure they spell your name right.",
    ),
    CategoryHint.WINNING: (
        "We win so much people get tired of winning. Then we win some more.",
        "Winners don't make excuses. They make history, and then they make more.",
        "Second place is the first loser. Aim for the top, always.",
        "I only know one way to play: to win, and to win big.",
        "Success is a habit. Start winning small and the big wins come running.",
        "Records are made to be broken, preferably by us.",
    ),
    CategoryHint.MONEY: (
        "Money is a scorecard. Keep score and keep scoring.",
        "Never invest in something you can't explain in one sentence.",
        "Cash is king, but leverage is the whole kingdom.",
        "Watch the costs, the profits take care of themselves.",
        "Rich people read the numbers. Everybody else reads the headlines.",
        "A budget is a promise you make to your future billions.",
    ),
    CategoryHint.LEADERSHIP: (
        "A leader decides fast and fixes later. Hesitation is for followers.",
        "Respect is earned, then it's demanded. In that order.",
        "Strong leaders hire people smarter than them and then take the credit.",
        "You run the room or the room runs you. Choose.",
        "Command the table, not the conversation. The conversation follows.",
        "Power is perception. Look in charge and you are in charge.",
    ),
    CategoryHint.OPPONENT: (
        "My opponents are very sad people. They spend all day thinking about me.",
        "Never attack a rival who is busy failing. Let them finish.",
        "Critics are free advertising. Thank them, then beat them.",
        "The haters are always loudest right before they lose.",
        "Know your enemy, then out-hustle your enemy. That's the whole strategy.",
        "Weak competitors complain. Strong ones copy. The best are copied.",
    ),
    CategoryHint.TRUTH: (
        "The truth is whatever survives the fact check, and mine always survives.",
        "Believe me, I say it like it is. People love that.",
        "Real facts, not fake facts. You can tell because they're mine.",
        "Trust is built slowly and lost instantly. Don't be careless with it.",
        "Proof is nice. Results are better. Show results.",
        "Everybody claims to be honest. Check the record, that's where honesty lives.",
    ),
    CategoryHint.PEOPLE: (
        "The people are smart, much smarter than the experts give them credit for.",
        "I love the crowds. Bigger every time, everybody says so.",
        "Take care of your workers and they'll take care of the business.",
        "Friends come and go. Loyal supporters stay. Know the difference.",
        "Every citizen deserves a winner. Be that winner.",
        "Family first, then the deal. Usually in that order.",
    ),
    CategoryHint.ADVICE: (
        "My advice: think big, act fast, and never let them see you sweat.",
        "Learn from every loss, then make sure there's no next loss.",
        "Here's a secret: confidence closes more deals than talent.",
        "Plan like a builder, negotiate like a trader, celebrate like a champion.",
        "Don't ask permission. Ask forgiveness, and only if you have to.",
        "Surround yourself with the best people and fire the rest, nicely.",
    ),
    CategoryHint.GENERIC: DEFAULT_POOL,
}


def _check_pools() -> None:
    for category in CategoryHint:
        if not CATEGORY_POOLS.get(category):
            raise RuntimeError(f"Reply pool for '{category.value}' is empty")
    if not GENERIC_OPENERS or not SHORT_INPUT_POOL:
        raise RuntimeError("Fallback reply pools must not be empty")


_check_pools()


def get_pool(category: CategoryHint) -> Tuple[str, ...]:
    return CATEGORY_POOLS.get(category) or DEFAULT_POOL


class ReplySelector:
    """Seeded pseudo-random picker shared by every connection.

    Draws are serialized by a lock, so a given call sequence is reproducible
    for a given seed. Interleaving across concurrent requests is not.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def pick(self, pool: Sequence[str]) -> str:
        if not pool:
            raise ValueError("Cannot pick from an empty pool")
        with self._lock:
            index = self._random.randrange(len(pool))
        return pool[index]


class AdvisorEngine:
    """Sanitize, categorize and pick a capped reply."""

    def __init__(
        self,
        settings: Optional[ServerSettings] = None,
        selector: Optional[ReplySelector] = None,
    ):
        self.settings = settings or get_settings()
        self.selector = selector or ReplySelector(self.settings.selector_seed)

    def reply_with_category(self, text: Optional[str]) -> Tuple[str, CategoryHint, str]:
        """Return (reply, category, source pool name)."""
        cleaned = sanitize_input(text, self.settings.max_input_chars)
        if not cleaned:
            reply, category, source = self.selector.pick(GENERIC_OPENERS), CategoryHint.GENERIC, "opener"
        elif len(cleaned) <= SHORT_INPUT_MAX_CHARS:
            reply, category, source = self.selector.pick(SHORT_INPUT_POOL), CategoryHint.GENERIC, "short"
        else:
            category = categorize(cleaned.lower())
            reply, source = self.selector.pick(get_pool(category)), category.value
        logger.debug("reply source=%s input_len=%s", source, len(cleaned))
        return cap_length(reply, self.settings.max_reply_chars), category, source

    def respond(self, text: Optional[str]) -> str:
        return self.reply_with_category(text)[0]


advisor_engine = AdvisorEngine()

_engines: Dict[ServerSettings, AdvisorEngine] = {}
_engines_lock = threading.Lock()


def engine_for(settings: Optional[ServerSettings] = None) -> AdvisorEngine:
    """Return the shared engine for *settings*, creating it on first use."""
    if settings is None or settings == advisor_engine.settings:
        return advisor_engine
    with _engines_lock:
        engine = _engines.get(settings)
        if engine is None:
            engine = AdvisorEngine(settings=settings)
            _engines[settings] = engine
        return engine


def respond(text: Optional[str]) -> str:
    return advisor_engine.respond(text)
