import random

import pytest

from typedash.app.config import SessionConfig
from typedash.services.content import ContentProvider
from typedash.services.typing_engine import TypingEngine


class FakeClock:
    """Manually advanced time source, in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_engine(clock):
    def _make(word_mode="normal", word_length="mixed", language="english", mode="60",
              seed=1, autostart=False):
        config = SessionConfig(mode=mode, word_mode=word_mode, word_length=word_length,
                               language=language)
        provider = ContentProvider(random.Random(seed))
        return TypingEngine(config, provider, clock=clock, autostart=autostart)

    return _make


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication

    return QCoreApplication.instance() or QCoreApplication([])
