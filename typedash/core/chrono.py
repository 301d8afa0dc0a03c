# core/chrono.py
from PySide6.QtCore import QObject, QElapsedTimer, QTimer, Signal


class SessionClock(QObject):
    """Countdown source for a session: ticks once per second, expires at `duration`."""

    ticked = Signal(float)  # elapsed seconds
    expired = Signal()
    started = Signal()
    stopped = Signal()

    def __init__(self, duration: float, tick_ms: int = 1000, parent=None):
        super().__init__(parent)
        self.duration = float(duration)
        self._elapsed = 0.0
        self._running = False
        self._t = QElapsedTimer()

        self._tick = QTimer(self)
        self._tick.setInterval(tick_ms)
        self._tick.timeout.connect(self.poll)

    @property
    def running(self) -> bool:
        return self._running

    def bind(self, engine):
        """Route ticks and expiry into a TypingEngine."""
        self.ticked.connect(engine.on_timer_tick)
        self.expired.connect(engine.on_timer_expire)
        return self

    def start(self):
        self._elapsed = 0.0
        self._running = True
        self._t.start()
        self._tick.start()
        self.started.emit()

    def stop(self):
        if self._running:
            self._elapsed = self._t.elapsed() / 1000.0
            self._running = False
            self._tick.stop()
            self.stopped.emit()

    def seconds(self) -> float:
        if self._running:
            return self._t.elapsed() / 1000.0
        return self._elapsed

    def remaining(self) -> float:
        return max(0.0, self.duration - self.seconds())

    def poll(self, now: float = None):
        """Emit a tick for the current time; drivers without an event loop call this directly."""
        if not self._running:
            return
        secs = self.seconds() if now is None else now
        self.ticked.emit(secs)
        if secs >= self.duration:
            self.stop()
            self._elapsed = secs
            self.expired.emit()
