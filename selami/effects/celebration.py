"""
Celebration sequence (decorative).

Runs a fixed window of confetti bursts: every tick emits a left and a right
burst whose size decays linearly with the time left, plus a small burst from
the centre. The wizard only calls `celebrate()`; timing is owned here.
"""
import random
from typing import Any, Callable, Dict, List, Optional

from selami.core.scheduler import Timer
from selami.settings import settings

BURST_DEFAULTS = {"startVelocity": 45, "spread": 360, "ticks": 100, "zIndex": 0, "scalar": 1.2}
SIDE_PARTICLES = 150
CENTER_PARTICLES = 40


class CelebrationSequence:
    def __init__(
        self,
        emit: Callable[[Dict[str, Any]], None],
        scheduler,
        duration_ms: Optional[int] = None,
        interval_ms: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self._emit = emit
        self.duration_ms = int(duration_ms or settings.CELEBRATION_DURATION_MS)
        self.interval_ms = int(interval_ms or settings.CELEBRATION_INTERVAL_MS)
        self._rng = rng or random.Random()
        self._elapsed_ms = 0
        self._timer = Timer(scheduler, self.interval_ms, self._tick, name="celebration")

    @property
    def running(self) -> bool:
        return self._timer.pending

    def celebrate(self) -> None:
        # A new celebration restarts the window
        self._elapsed_ms = 0
        self._timer.start()

    def stop(self) -> None:
        self._timer.cancel()

    def bursts_for(self, time_left_ms: int) -> List[Dict[str, Any]]:
        rng = self._rng
        count = SIDE_PARTICLES * (time_left_ms / self.duration_ms)
        return [
            {**BURST_DEFAULTS, "particleCount": count,
             "origin": {"x": rng.uniform(0.1, 0.3), "y": rng.random() - 0.2}},
            {**BURST_DEFAULTS, "particleCount": count,
             "origin": {"x": rng.uniform(0.7, 0.9), "y": rng.random() - 0.2}},
            {**BURST_DEFAULTS, "particleCount": CENTER_PARTICLES, "origin": {"x": 0.5, "y": 0.5}},
        ]

    def _tick(self) -> None:
        self._elapsed_ms += self.interval_ms
        time_left = self.duration_ms - self._elapsed_ms
        if time_left <= 0:
            return
        for burst in self.bursts_for(time_left):
            self._emit(burst)
        self._timer.start()
