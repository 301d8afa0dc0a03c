from typing import List, Optional, Sequence
import math

from typedash.app.state import PerformanceSnapshot, TypingStats, WordHistoryEntry


def rate_per_minute(count: int, elapsed_seconds: float) -> float:
    if elapsed_seconds <= 0:
        return 0.0
    return count / (elapsed_seconds / 60.0)


def instant_wpm(words: int, elapsed_ms: float) -> float:
    return rate_per_minute(words, elapsed_ms / 1000.0)


def accuracy_pct(correct_words: int, total_words: int) -> float:
    if total_words <= 0:
        return 0.0
    return 100.0 * correct_words / total_words


def consistency(wpm_series: Sequence[float]) -> float:
    """
    Pacing uniformity in [0, 100]: 100 * (1 - cv), where cv is the
    coefficient of variation (population std-dev / mean) of the WPM series.
    Each sample is the pace of a single word (time since the previous commit),
    so the score reflects per-word evenness rather than a settling average.
    Fewer than two samples count as perfectly consistent.
    """
    n = len(wpm_series)
    if n < 2:
        return 100.0
    mean = sum(wpm_series) / n
    var = sum((v - mean) ** 2 for v in wpm_series) / n
    if var == 0:
        return 100.0
    if mean <= 0:
        return 0.0
    cv = math.sqrt(var) / mean
    return max(0.0, min(100.0, 100.0 * (1.0 - cv)))


def snapshots_from_history(history: Sequence[WordHistoryEntry]) -> List[PerformanceSnapshot]:
    out: List[PerformanceSnapshot] = []
    correct = 0
    for i, h in enumerate(history):
        if h.correct:
            correct += 1
        out.append(PerformanceSnapshot(h.time, h.wpm, accuracy_pct(correct, i + 1)))
    return out


def compute_stats(
    history: Sequence[WordHistoryEntry],
    elapsed_seconds: float,
    performance: Optional[Sequence[PerformanceSnapshot]] = None,
) -> TypingStats:
    """
    Derive session stats from committed words only. Pure: never mutates its inputs.
    Correct words count their typed length as correct characters,
    incorrect words count their whole typed length as errors.
    """
    total = len(history)
    correct_words = 0
    correct_chars = 0
    incorrect_chars = 0
    for h in history:
        if h.correct:
            correct_words += 1
            correct_chars += len(h.typed)
        else:
            # no partial credit inside a wrong word
            incorrect_chars += len(h.typed)

    if performance is None:
        performance = snapshots_from_history(history)

    return TypingStats(
        wpm=rate_per_minute(correct_words, elapsed_seconds),
        raw_wpm=rate_per_minute(total, elapsed_seconds),
        accuracy=accuracy_pct(correct_words, total),
        correct_chars=correct_chars,
        incorrect_chars=incorrect_chars,
        elapsed_seconds=max(0.0, elapsed_seconds),
        consistency=consistency([p.wpm for p in performance]),
        history=tuple(history),
        performance_data=tuple(performance),
    )

