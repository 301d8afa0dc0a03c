# services/typing_engine.py
from __future__ import annotations
import logging
import time
from typing import Callable, Iterable, List, Optional

from typedash.app.calculation import accuracy_pct, compute_stats, instant_wpm
from typedash.app.config import SessionConfig
from typedash.app.state import (
    CurrentState,
    PerformanceSnapshot,
    SessionPhase,
    SessionState,
    TypingStats,
    WordHistoryEntry,
)
from typedash.app.validation import (
    CharClass,
    classify,
    count_errors,
    is_commit_ready,
    is_token_correct,
    sanitize_buffer,
)
from typedash.services.content import ContentProvider, leading_whitespace

log = logging.getLogger(__name__)

_KEY_CHARS = {"space": " ", "enter": "\n", "return": "\n"}


class TypingEngine:
    """
    Session state machine: IDLE -> RUNNING -> TERMINAL, back to IDLE only via restart().

    The presentation layer hands over the whole input buffer on every change
    (controlled input), commits tokens with the separator, and forwards timer
    ticks/expiry. Out-of-order events are ignored rather than raised.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        provider: Optional[ContentProvider] = None,
        clock: Callable[[], float] = time.monotonic,
        autostart: bool = False,
        plan: Optional[List[str]] = None,
    ):
        self.config = config or SessionConfig()
        self.provider = provider or ContentProvider()
        self.autostart = autostart
        self._clock = clock
        # a given plan only seeds the first round; restarts always draw a fresh one
        self.state = SessionState(plan=list(plan) if plan is not None else self._new_plan())

    # ---------- helpers ----------
    @property
    def code_mode(self) -> bool:
        return self.config.is_code

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    def _new_plan(self) -> List[str]:
        c = self.config
        return self.provider.generate(c.word_mode, c.word_length, c.language)

    def _seed(self, index: int) -> str:
        # code lines start pre-filled with their indentation
        if self.code_mode and index < len(self.state.plan):
            return leading_whitespace(self.state.plan[index])
        return ""

    def _finish(self, at: Optional[float] = None):
        s = self.state
        s.ended_at = self._clock() if at is None else at
        s.phase = SessionPhase.TERMINAL
        log.info(
            "Session finished: %d/%d tokens committed in %.1fs",
            s.current_index, len(s.plan), s.duration(s.ended_at),
        )

    def elapsed_seconds(self) -> float:
        return self.state.duration(self._clock())

    # ---------- transitions ----------
    def start(self) -> bool:
        s = self.state
        if s.phase is not SessionPhase.IDLE:
            log.debug("start() ignored in %s", s.phase.value)
            return False
        s.started_at = self._clock()
        s.phase = SessionPhase.RUNNING
        s.current_input = self._seed(0)
        if s.plan_exhausted:
            self._finish(s.started_at)
        return True

    def update_input(self, buffer: str) -> bool:
        if self.state.phase is SessionPhase.IDLE and self.autostart:
            self.start()
        if not self.state.is_running:
            log.debug("update_input() ignored in %s", self.state.phase.value)
            return False
        self.state.current_input = buffer if buffer is not None else ""
        return True

    replace_buffer = update_input

    def commit_current_token(self) -> Optional[WordHistoryEntry]:
        s = self.state
        if not s.is_running or s.plan_exhausted:
            log.debug("commit ignored in %s", s.phase.value)
            return None

        now = self._clock()
        elapsed_ms = (now - s.started_at) * 1000.0
        word = s.current_word
        typed = sanitize_buffer(s.current_input, self.code_mode)
        correct = is_token_correct(word, typed)
        correct_words = s.correct_words + (1 if correct else 0)
        prev_ms = s.history[-1].time if s.history else 0.0
        # pace of this word alone
        wpm = instant_wpm(1, elapsed_ms - prev_ms)

        entry = WordHistoryEntry(word=word, typed=typed, correct=correct, time=elapsed_ms, wpm=wpm)
        s.history.append(entry)
        s.performance.append(
            PerformanceSnapshot(elapsed_ms, wpm, accuracy_pct(correct_words, len(s.history)))
        )
        s.current_index += 1
        s.current_input = self._seed(s.current_index)

        if s.plan_exhausted:
            self._finish(now)
        return entry

    def expire(self) -> bool:
        """Timer ran out: the partial token is dropped, not committed."""
        if self.state.is_terminal:
            return False
        self._finish()
        return True

    def tick(self, elapsed_seconds: float) -> None:
        s = self.state
        if not s.is_running:
            return
        s.last_tick = elapsed_seconds
        if elapsed_seconds >= self.config.duration:
            self._finish(s.started_at + elapsed_seconds)

    def restart(self) -> SessionState:
        self.state = SessionState(plan=self._new_plan())
        log.info("Session restarted (%s)", self.config.word_mode)
        return self.state

    def handle_key(self, key: str, modifiers: Iterable[str] = ()) -> bool:
        """
        Keyboard shortcuts: tab+enter restarts from any state,
        the active separator (space, or enter for code) commits.
        Returns True when the key was consumed.
        """
        name = (key or "").lower()
        mods = {m.lower() for m in modifiers}
        if name in ("enter", "return") and "tab" in mods:
            self.restart()
            return True
        ch = _KEY_CHARS.get(name, key)
        word = self.state.current_word or ""
        if is_commit_ready(word, self.state.current_input, ch, self.code_mode):
            return self.commit_current_token() is not None
        return False

    # ---------- inbound events ----------
    def on_input_change(self, buffer: str) -> bool:
        return self.update_input(buffer)

    def on_commit(self) -> Optional[WordHistoryEntry]:
        return self.commit_current_token()

    def on_timer_tick(self, elapsed_seconds: float) -> None:
        self.tick(elapsed_seconds)

    def on_timer_expire(self) -> bool:
        return self.expire()

    def on_restart(self) -> SessionState:
        return self.restart()

    # ---------- outbound queries ----------
    def get_current_state(self) -> CurrentState:
        s = self.state
        return CurrentState(s.current_index, s.current_input, s.is_running)

    def get_stats(self) -> TypingStats:
        return compute_stats(self.state.history, self.elapsed_seconds(), self.state.performance)

    def get_plan(self) -> List[str]:
        return list(self.state.plan)

    def current_errors(self) -> int:
        """Wrong and extra characters in the active token, for live display."""
        word = self.state.current_word
        if word is None:
            return 0
        return count_errors(word, self.state.current_input)

    def char_classes(self) -> List[CharClass]:
        """Live highlighting for the active token."""
        word = self.state.current_word
        if word is None:
            return []
        return classify(word, self.state.current_input)
