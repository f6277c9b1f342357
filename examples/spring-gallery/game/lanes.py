"""Lane definitions: which animation each comparison lane runs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from tick_animator import Animator
from tick_spring import SpringState, get_physics_parameters, step_spring
from tick_tween import EASINGS


@dataclass(frozen=True)
class Lane:
    name: str
    easing: str | None = None  # tween lanes
    bounce: float | None = None  # spring lanes


LANES = [
    Lane("linear", easing="linear"),
    Lane("ease_in", easing="ease_in"),
    Lane("ease_out", easing="ease_out"),
    Lane("ease_in_out", easing="ease_in_out"),
    Lane("spring", bounce=0.0),
    Lane("bouncy", bounce=1.5),
]

_TWEEN_STARTERS: dict[str, Callable[..., None]] = {
    "linear": Animator.linear_to,
    "ease_in": Animator.ease_in_to,
    "ease_out": Animator.ease_out_to,
    "ease_in_out": Animator.ease_in_out_to,
}


def spring_params(lane: Lane, duration_s: float) -> dict[str, float]:
    if lane.bounce:
        return {"duration_s": duration_s, "bounce": lane.bounce}
    return {"duration_s": duration_s}


def send_orbs(
    animator: Animator, handles: list[int], target: float, duration_s: float
) -> None:
    """Start every lane's orb toward `target` (0 or 1).

    Spring lanes retarget in flight and keep their momentum; tween lanes
    restart from wherever the orb currently is.
    """
    for lane, handle in zip(LANES, handles, strict=True):
        shape = {"progress": target}
        if lane.easing is not None:
            _TWEEN_STARTERS[lane.easing](animator, handle, shape, duration_s)
        else:
            animator.spring_to(handle, shape, spring_params(lane, duration_s))


def response_curve(lane: Lane, duration_s: float, samples: int) -> list[float]:
    """Sample the lane's 0 -> 1 response over one duration."""
    if lane.easing is not None:
        easing = EASINGS[lane.easing]
        return [easing(i / samples) for i in range(samples + 1)]

    params = get_physics_parameters(spring_params(lane, duration_s))
    state = SpringState(x=0.0, target_x=1.0)
    dt = duration_s / samples
    values = [state.x]
    for _ in range(samples):
        step_spring(dt, state, params)
        values.append(state.x)
    return values
