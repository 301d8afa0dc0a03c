# main.py
from __future__ import annotations
import sys
import random
import logging
import argparse
import time
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QCoreApplication

from typedash.app.config import LANGUAGES, MODES, WORD_LENGTHS, WORD_MODES, load_config, normalize
from typedash.core.chrono import SessionClock
from typedash.services.bot import BotTypist
from typedash.services.content import ContentProvider
from typedash.services.typing_engine import TypingEngine

PREVIEW_TOKENS = 8


def setup_logging(level: int = logging.INFO, log_file: str | None = "typedash.log") -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.exception("Unhandled exception", exc_info=(exctype, value, tb))
        sys.exit(1)

    sys.excepthook = excepthook


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="typedash", description="Console typing-speed test")
    p.add_argument("--config", type=Path, default=None, help="JSON config file")
    p.add_argument("--mode", choices=MODES)
    p.add_argument("--word-mode", choices=WORD_MODES)
    p.add_argument("--word-length", choices=WORD_LENGTHS)
    p.add_argument("--language", choices=LANGUAGES)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def build_engine(args: argparse.Namespace) -> TypingEngine:
    base = load_config(args.config)
    config = normalize(
        mode=args.mode or base.mode,
        word_mode=args.word_mode or base.word_mode,
        word_length=args.word_length or base.word_length,
        language=args.language or base.language,
    )
    return TypingEngine(config, ContentProvider(random.Random(args.seed)))


def feed_line(engine: TypingEngine, line: str) -> None:
    if engine.code_mode:
        # indentation is already seeded into the buffer
        engine.update_input(engine.state.current_input + line.lstrip())
        engine.commit_current_token()
        return
    for word in line.split():
        if not engine.state.is_running:
            break
        engine.update_input(word)
        engine.commit_current_token()


def build_bot(engine: TypingEngine, clock: SessionClock, seed: Optional[int] = None,
              time_source=time.monotonic) -> Optional[BotTypist]:
    """In bot mode, an opponent types the same plan on the same clock."""
    if engine.config.mode != "bot":
        return None
    rival = TypingEngine(engine.config, engine.provider, clock=time_source, plan=engine.get_plan())
    return BotTypist(rival, rng=random.Random(seed)).bind(clock)


def print_stats(engine: TypingEngine, label: str = "you") -> None:
    st = engine.get_stats()
    print(f"\n[{label}] {st.wpm:0.1f} WPM | raw {st.raw_wpm:0.1f} | acc {st.accuracy:0.1f} % "
          f"| consistency {st.consistency:0.1f} % | {st.elapsed_seconds:0.1f} s")
    print(f"chars: {st.correct_chars} correct / {st.incorrect_chars} incorrect")


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("Typedash")

    engine = build_engine(args)
    clock = SessionClock(engine.config.duration).bind(engine)
    if not engine.get_plan():
        logging.error("Nothing to type for %s", engine.config.word_mode)
        return 1

    sep = "Enter after each line" if engine.code_mode else "space between words, Enter to submit"
    print(f"{engine.config.duration}s test, {sep}. Ctrl+D ends early.")

    bot = build_bot(engine, clock, args.seed)

    engine.start()
    if bot:
        bot.start()
    clock.start()
    while engine.state.is_running:
        s = engine.state
        print("  ".join(s.plan[s.current_index:s.current_index + PREVIEW_TOKENS]))
        try:
            line = input("> ")
        except EOFError:
            engine.on_timer_expire()
            break
        clock.poll()
        if engine.state.is_running:
            feed_line(engine, line)
    clock.stop()

    print_stats(engine)
    if bot:
        # catch the bot up to the moment the user finished
        bot.advance(engine.elapsed_seconds())
        bot.engine.on_timer_expire()
        print_stats(bot.engine, label="bot")
    return 0


if __name__ == "__main__":
    sys.exit(main())
