"""Analytic integration of a single damped harmonic oscillator.

Solves x'' + b x' + k (x - target) = 0 exactly over `dt_s`, so the step is
unconditionally stable for any time step. The three regimes follow the
closed forms at
https://mathworld.wolfram.com/UnderdampedSimpleHarmonicMotion.html,
https://mathworld.wolfram.com/OverdampedSimpleHarmonicMotion.html and
https://mathworld.wolfram.com/CriticallyDampedSimpleHarmonicMotion.html.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from tick_spring.params import PhysicsParameters


@dataclass(slots=True)
class SpringState:
    """Scratch record stepped in place by step_spring."""

    x: float
    target_x: float
    v: float = 0.0


def step_spring(
    dt_s: float, state: SpringState, params: PhysicsParameters
) -> float:
    """Advance `state` by `dt_s` seconds. Returns potential energy 0.5*k*dx^2.

    Non-finite coefficients or state snap to the target with zero velocity.
    """
    k = params.strength
    b = params.damping
    t = dt_s
    v0 = state.v
    dx0 = state.x - state.target_x

    # Nothing will change.
    if (dx0 == 0.0 and v0 == 0.0) or t == 0.0:
        return 0.5 * k * dx0 * dx0 if dx0 else 0.0

    if not (
        math.isfinite(k)
        and math.isfinite(b)
        and math.isfinite(v0)
        and math.isfinite(dx0)
    ):
        state.x = state.target_x
        state.v = 0.0
        return 0.0

    critical = 4.0 * k - b * b

    if critical > 0.0:
        # Underdamped: decaying oscillation.
        q = 0.5 * math.sqrt(critical)
        a_coef = dx0
        b_coef = (0.5 * b * dx0 + v0) / q

        m = math.exp(-0.5 * b * t)
        c = math.cos(q * t)
        s = math.sin(q * t)

        dx1 = m * (a_coef * c + b_coef * s)
        v1 = m * (
            (b_coef * q - 0.5 * a_coef * b) * c
            + (-a_coef * q - 0.5 * b * b_coef) * s
        )
    elif critical < 0.0:
        # Overdamped: sum of two decaying exponentials.
        u = 0.5 * math.sqrt(-critical)
        p = -0.5 * b + u
        n = -0.5 * b - u
        b_coef = -(n * dx0 - v0) / (2.0 * u)
        a_coef = dx0 - b_coef

        ep = math.exp(p * t)
        en = math.exp(n * t)

        dx1 = a_coef * en + b_coef * ep
        v1 = a_coef * n * en + b_coef * p * ep
    else:
        # Critically damped.
        w = math.sqrt(k)
        a_coef = dx0
        b_coef = v0 + w * dx0
        e = math.exp(-w * t)

        dx1 = (a_coef + b_coef * t) * e
        v1 = (b_coef - w * (a_coef + b_coef * t)) * e

    state.x = state.target_x + dx1
    state.v = v1
    return 0.5 * k * dx1 * dx1
