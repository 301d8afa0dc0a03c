# services/content.py
from __future__ import annotations
import logging
import random
from typing import List, Optional, Sequence, TypeVar

from typedash.utils.corpus import code_pool, word_pool

log = logging.getLogger(__name__)

PLAN_LIMIT = 50
CODE_PREFIX = "code-"

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Fisher-Yates on a copy; `items` is left untouched."""
    rng = rng or random.Random()
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out


def is_code_mode(word_mode: str) -> bool:
    return bool(word_mode) and word_mode.startswith(CODE_PREFIX)


def leading_whitespace(token: str) -> str:
    return token[: indentation(token)]


def indentation(token: str) -> int:
    n = 0
    for ch in token:
        if not ch.isspace():
            break
        n += 1
    return n


class ContentProvider:
    def __init__(self, rng: Optional[random.Random] = None, limit: int = PLAN_LIMIT):
        self.rng = rng or random.Random()
        self.limit = limit

    def pool(self, word_mode: str, word_length: str, language: str) -> List[str]:
        if is_code_mode(word_mode):
            lang = word_mode[len(CODE_PREFIX):]
            lines = code_pool(lang)
            if not lines:
                log.warning("No code corpus for %r", lang)
            return lines
        return word_pool(language, word_length)

    def generate(self, word_mode: str, word_length: str, language: str) -> List[str]:
        plan = shuffle(self.pool(word_mode, word_length, language), self.rng)[: self.limit]
        log.debug("Generated %d tokens (%s/%s/%s)", len(plan), word_mode, word_length, language)
        return plan
