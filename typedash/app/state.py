from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SessionPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class WordHistoryEntry:
    word: str
    typed: str
    correct: bool
    time: float  # ms since session start
    wpm: float


@dataclass(frozen=True)
class PerformanceSnapshot:
    timestamp: float  # ms since session start
    wpm: float
    accuracy: float


@dataclass(frozen=True)
class TypingStats:
    wpm: float = 0.0
    raw_wpm: float = 0.0
    accuracy: float = 0.0
    correct_chars: int = 0
    incorrect_chars: int = 0
    elapsed_seconds: float = 0.0
    consistency: float = 100.0
    history: tuple = ()
    performance_data: tuple = ()


@dataclass(frozen=True)
class CurrentState:
    current_index: int
    current_input: str
    is_running: bool


@dataclass
class SessionState:
    plan: List[str] = field(default_factory=list)
    current_index: int = 0
    current_input: str = ""
    history: List[WordHistoryEntry] = field(default_factory=list)
    performance: List[PerformanceSnapshot] = field(default_factory=list)
    started_at: Optional[float] = None
    ended_at: Optional[float] = None
    last_tick: float = 0.0
    phase: SessionPhase = SessionPhase.IDLE

    @property
    def is_running(self) -> bool:
        return self.phase is SessionPhase.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self.phase is SessionPhase.TERMINAL

    @property
    def plan_exhausted(self) -> bool:
        return self.current_index >= len(self.plan)

    @property
    def current_word(self) -> Optional[str]:
        if self.plan_exhausted:
            return None
        return self.plan[self.current_index]

    @property
    def correct_words(self) -> int:
        return sum(1 for h in self.history if h.correct)

    def duration(self, now: float) -> float:
        """Elapsed seconds, frozen once the session has ended."""
        if self.started_at is None:
            return 0.0
        end = self.ended_at if self.ended_at is not None else now
        return max(0.0, end - self.started_at)
