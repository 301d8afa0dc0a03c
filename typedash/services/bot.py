# services/bot.py
from __future__ import annotations
import logging
import random
import string
from dataclasses import dataclass
from typing import Optional

from typedash.services.typing_engine import TypingEngine

log = logging.getLogger(__name__)

MIN_WORD_DELAY = 0.05


@dataclass(frozen=True)
class BotConfig:
    speed: float = 60.0        # target WPM
    accuracy: float = 95.0     # % of characters typed correctly
    consistency: float = 80.0  # % pacing uniformity


class BotTypist:
    """
    Simulated opponent for 'bot' mode. Drives its own TypingEngine:
    each word is typed in one buffer update and committed once its delay elapses.
    """

    def __init__(self, engine: TypingEngine, config: Optional[BotConfig] = None,
                 rng: Optional[random.Random] = None):
        self.engine = engine
        self.config = config or BotConfig()
        self.rng = rng or random.Random()
        self._next_at: Optional[float] = None

    def type_word(self, word: str) -> str:
        p = max(0.0, min(1.0, self.config.accuracy / 100.0))
        out = []
        for ch in word:
            if ch.isspace() or self.rng.random() < p:
                out.append(ch)
            else:
                out.append(self.rng.choice([c for c in string.ascii_lowercase if c != ch]))
        return "".join(out)

    def word_delay(self) -> float:
        base = 60.0 / max(1.0, self.config.speed)
        spread = base * (1.0 - max(0.0, min(100.0, self.config.consistency)) / 100.0)
        if spread <= 0:
            return base
        return max(MIN_WORD_DELAY, self.rng.gauss(base, spread))

    def start(self) -> bool:
        if not self.engine.start():
            return False
        self._next_at = self.word_delay()
        return True

    def advance(self, elapsed_seconds: float) -> int:
        """Commit every word due by `elapsed_seconds`; returns how many were committed."""
        committed = 0
        while self.engine.state.is_running and self._next_at is not None \
                and elapsed_seconds >= self._next_at:
            word = self.engine.state.current_word
            self.engine.update_input(self.type_word(word))
            self.engine.commit_current_token()
            committed += 1
            self._next_at += self.word_delay()
        if committed:
            log.debug("Bot committed %d word(s) at %.1fs", committed, elapsed_seconds)
        return committed

    def bind(self, clock):
        clock.ticked.connect(self.advance)
        clock.expired.connect(self.engine.on_timer_expire)
        return self
