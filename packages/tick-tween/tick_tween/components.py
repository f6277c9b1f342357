"""Tween bookkeeping."""
from __future__ import annotations

from dataclasses import dataclass

from tick_tween.easing import TweenStepFn, linear_step


@dataclass
class TweenState:
    """Start value and start time of a time-based tween.

    Tweens carry no velocity: the value is recomputed from (x0, target, u)
    each step, where u = (now - t0_s) / duration_s.
    """

    x0: float
    t0_s: float
    duration_s: float
    step_fn: TweenStepFn = linear_step

    def progress(self, now_s: float) -> float:
        """Normalized time, clamped to [0, 1]. Zero duration is already done."""
        if self.duration_s <= 0:
            return 1.0
        u = (now_s - self.t0_s) / self.duration_s
        return min(max(u, 0.0), 1.0)

    def elapsed(self, now_s: float) -> float:
        return now_s - self.t0_s

    def is_done(self, now_s: float) -> bool:
        return self.elapsed(now_s) >= self.duration_s

    def value_at(self, target: float, now_s: float) -> float:
        return self.step_fn(self.x0, target, self.progress(now_s))
