from enum import Enum
from cdt.common.logger import log


class ClockState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


# This object handles the actual countdown. It never reads a clock itself: the caller measures elapsed monotonic
# time between frames and feeds it through tick(), which keeps the countdown honest under uneven frame rates.
class CountdownClock:

    def __init__(self, duration):
        if duration < 0:
            raise ValueError(f"Countdown duration cannot be negative, got {duration}")
        self.duration = int(duration)
        self._remaining = float(self.duration)
        self.state = ClockState.RUNNING if self.duration > 0 else ClockState.EXPIRED

        log.debug(f"Initialized countdown of {self.duration} seconds in state '{self.state.value}'")

    @property
    def running(self):
        return self.state is ClockState.RUNNING
    @property
    def paused(self):
        return self.state is ClockState.PAUSED
    @property
    def expired(self):
        return self.state is ClockState.EXPIRED

    # Advances the countdown by `elapsed` seconds. Returns True only on the tick that runs the clock out.
    def tick(self, elapsed):
        if elapsed < 0:
            raise ValueError(f"Elapsed time cannot be negative, got {elapsed}")
        if self.state is not ClockState.RUNNING:
            return False

        self._remaining = max(0.0, self._remaining - elapsed)
        if self._remaining == 0.0:
            self.state = ClockState.EXPIRED
            log.info(f"Countdown of {self.duration} seconds expired")
            return True
        return False

    # Flips between running and paused. Expired is terminal, so this does nothing there.
    def toggle_pause(self):
        if self.state is ClockState.RUNNING:
            self.state = ClockState.PAUSED
            log.debug(f"Paused countdown with {self._remaining:.2f} seconds remaining")
        elif self.state is ClockState.PAUSED:
            self.state = ClockState.RUNNING
            log.debug(f"Resumed countdown with {self._remaining:.2f} seconds remaining")
        return self.state

    def remaining(self):
        return self._remaining

    # Fraction of the countdown already used up, 0.0 -> 1.0.
    def progress(self):
        if self.duration == 0:
            return 1.0
        return 1.0 - self._remaining / self.duration
