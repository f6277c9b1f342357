"""Animator - per-object, per-field spring and tween scheduling."""
from __future__ import annotations

import logging
import math
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Union

from tick_signal import Listener, Signal, Subscription
from tick_spring import (
    SpringParameters,
    SpringState,
    get_physics_parameters,
    is_finite,
    step_spring,
)
from tick_tween import (
    TweenState,
    TweenStepFn,
    ease_in_out_step,
    ease_in_step,
    ease_out_step,
    linear_step,
)

from tick_animator.components import FieldAnimation
from tick_animator.config import AnimatorConfig
from tick_animator.shape import as_path, read_path, resolve_leaves, write_path
from tick_animator.types import (
    AnimationKind,
    FieldKey,
    FieldPath,
    ObjectHandle,
    StepResult,
    UntrackedObjectError,
)

logger = logging.getLogger(__name__)

# Marks "use AnimatorConfig.default_spring"; None means "jump to target".
_DEFAULT_SPRING: Any = object()

FieldArg = Union[FieldKey, FieldPath]


@dataclass(slots=True)
class _StepContext:
    """Per-step scratch shared by the step functions of one Animator.step call."""

    now_s: float
    epsilon: float
    scratch: SpringState


def _step_spring_field(
    host: Any, path: FieldPath, anim: FieldAnimation, dt_s: float, ctx: _StepContext
) -> StepResult:
    state = ctx.scratch
    state.x = read_path(host, path)
    state.target_x = anim.target
    state.v = anim.velocity

    if is_finite(anim.spring_params):
        step_spring(dt_s, state, anim.spring_params)  # type: ignore[arg-type]
    else:
        # Instant transition.
        state.x = state.target_x
        state.v = 0.0

    write_path(host, path, state.x)
    anim.velocity = state.v

    if abs(state.x - state.target_x) < ctx.epsilon and abs(state.v) < ctx.epsilon:
        write_path(host, path, anim.target)
        return StepResult.COMPLETE
    return StepResult.CONTINUE


def _step_tween_field(
    host: Any, path: FieldPath, anim: FieldAnimation, dt_s: float, ctx: _StepContext
) -> StepResult:
    tween = anim.tween
    assert tween is not None
    x = read_path(host, path)
    x_new = tween.value_at(anim.target, ctx.now_s)
    write_path(host, path, x_new)
    anim.velocity = (x_new - x) / dt_s if dt_s > 0 else 0.0

    if tween.is_done(ctx.now_s):
        write_path(host, path, anim.target)
        return StepResult.COMPLETE
    return StepResult.CONTINUE


_StepFn = Callable[[Any, FieldPath, FieldAnimation, float, _StepContext], StepResult]

_STEPPERS: dict[AnimationKind, _StepFn] = {
    AnimationKind.SPRING: _step_spring_field,
    AnimationKind.TWEEN: _step_tween_field,
}


def _under(path: FieldPath, prefix: FieldPath) -> bool:
    return path[: len(prefix)] == prefix


class AnimatorEvents:
    """Signals fired by an Animator.

    before_step(dt_s), after_step(dt_s), complete_field(handle, path),
    complete_object(handle).
    """

    __slots__ = ("before_step", "after_step", "complete_field", "complete_object")

    def __init__(self) -> None:
        self.before_step = Signal()
        self.after_step = Signal()
        self.complete_field = Signal()
        self.complete_object = Signal()


class Animator:
    """Physically based animation of numeric fields of tracked objects.

    Host objects are registered once with track() and addressed by the
    returned handle afterwards. Springs keep their velocity when retargeted,
    so redirecting an animation mid-flight never produces a velocity jump.
    Nothing advances until step() or tick() is called.
    """

    def __init__(
        self,
        config: AnimatorConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_before_step: Callable[[float], None] | None = None,
        on_after_step: Callable[[float], None] | None = None,
    ) -> None:
        self.config = config if config is not None else AnimatorConfig()
        self.events = AnimatorEvents()
        self._clock = clock
        self._hosts: dict[ObjectHandle, Any] = {}
        self._next_handle: ObjectHandle = 0
        self._animations: dict[ObjectHandle, dict[FieldPath, FieldAnimation]] = {}
        self._change_object: dict[ObjectHandle, Signal] = {}
        self._change_field: dict[ObjectHandle, dict[FieldPath, Signal]] = {}
        self._changed: dict[ObjectHandle, set[FieldPath]] = {}
        self._batch_depth = 0
        self._t_last: float | None = None

        if on_before_step is not None:
            self.events.before_step.add_listener(on_before_step)
        if on_after_step is not None:
            self.events.after_step.add_listener(on_after_step)

    # -- Host objects --

    def track(self, obj: Any) -> ObjectHandle:
        """Register a host object and return the handle used to animate it."""
        handle = self._next_handle
        self._next_handle += 1
        self._hosts[handle] = obj
        return handle

    def untrack(self, handle: ObjectHandle) -> None:
        """Drop a host object, its animations and its change listeners silently."""
        self._require(handle)
        self._animations.pop(handle, None)
        self._changed.pop(handle, None)
        signal = self._change_object.pop(handle, None)
        if signal is not None:
            signal.clear()
        for field_signal in self._change_field.pop(handle, {}).values():
            field_signal.clear()
        del self._hosts[handle]
        logger.debug("untracked object %d", handle)

    def host(self, handle: ObjectHandle) -> Any:
        return self._require(handle)

    def tracked(self, handle: ObjectHandle) -> bool:
        return handle in self._hosts

    def _require(self, handle: ObjectHandle) -> Any:
        try:
            return self._hosts[handle]
        except KeyError:
            raise UntrackedObjectError(
                handle, f"Object handle {handle} is not tracked"
            ) from None

    def _object_animations(self, handle: ObjectHandle) -> dict[FieldPath, FieldAnimation]:
        anims = self._animations.get(handle)
        if anims is None:
            anims = {}
            self._animations[handle] = anims
        return anims

    # -- Starting animations --

    def spring_to(
        self,
        handle: ObjectHandle,
        target: Any,
        params: SpringParameters | None = _DEFAULT_SPRING,
    ) -> None:
        """Spring every numeric leaf of `target` toward its value.

        Leaves that already have a spring are retargeted in place: position
        and velocity carry over. `params=None` jumps straight to the target.
        """
        host = self._require(handle)
        leaves = resolve_leaves(host, target)
        if params is None:
            self._set_leaves(handle, host, leaves)
            return
        if params is _DEFAULT_SPRING:
            params = self.config.default_spring
        physics = get_physics_parameters(params)
        if not leaves:
            return

        anims = self._object_animations(handle)
        for path, value in leaves:
            anim = anims.get(path)
            if anim is None or anim.kind is not AnimationKind.SPRING:
                anims[path] = FieldAnimation(
                    target=value, kind=AnimationKind.SPRING, spring_params=physics
                )
            else:
                anim.target = value
                anim.spring_params = physics
                anim.elapsed_s = 0.0

    def custom_tween_to(
        self,
        handle: ObjectHandle,
        target: Any,
        duration_s: float,
        step_fn: TweenStepFn,
    ) -> None:
        """Tween every numeric leaf of `target`, restarting from the current value."""
        if not math.isfinite(duration_s) or duration_s < 0:
            raise ValueError(f"duration_s must be finite and >= 0, got {duration_s}")
        host = self._require(handle)
        leaves = resolve_leaves(host, target)
        if not leaves:
            return

        now = self._clock()
        anims = self._object_animations(handle)
        for path, value in leaves:
            anims[path] = FieldAnimation(
                target=value,
                kind=AnimationKind.TWEEN,
                tween=TweenState(
                    x0=float(read_path(host, path)),
                    t0_s=now,
                    duration_s=duration_s,
                    step_fn=step_fn,
                ),
            )

    def linear_to(self, handle: ObjectHandle, target: Any, duration_s: float | None = None) -> None:
        self.custom_tween_to(handle, target, self._tween_duration(duration_s), linear_step)

    def ease_in_to(self, handle: ObjectHandle, target: Any, duration_s: float | None = None) -> None:
        self.custom_tween_to(handle, target, self._tween_duration(duration_s), ease_in_step)

    def ease_out_to(self, handle: ObjectHandle, target: Any, duration_s: float | None = None) -> None:
        self.custom_tween_to(handle, target, self._tween_duration(duration_s), ease_out_step)

    def ease_in_out_to(
        self, handle: ObjectHandle, target: Any, duration_s: float | None = None
    ) -> None:
        self.custom_tween_to(
            handle, target, self._tween_duration(duration_s), ease_in_out_step
        )

    def _tween_duration(self, duration_s: float | None) -> float:
        if duration_s is None:
            return self.config.default_tween_duration_s
        return duration_s

    def set_to(self, handle: ObjectHandle, target: Any) -> None:
        """Write `target` immediately, completing any animation on those fields."""
        host = self._require(handle)
        self._set_leaves(handle, host, resolve_leaves(host, target))

    def _set_leaves(
        self, handle: ObjectHandle, host: Any, leaves: list[tuple[FieldPath, float]]
    ) -> None:
        with self._change_batch():
            for path, value in leaves:
                self._remove_paths(handle, path, dispatch_complete=True)
                write_path(host, path, value)
                self._mark_changed(handle, path)

    # -- Stepping --

    def step(self, dt_s: float) -> None:
        """Advance every live animation by `dt_s` seconds.

        Listener exceptions propagate; fields not yet visited in this step
        are picked up again by the next call.
        """
        if not math.isfinite(dt_s) or dt_s < 0:
            raise ValueError(f"dt_s must be finite and >= 0, got {dt_s}")

        with self._change_batch():
            self.events.before_step.dispatch(dt_s)
            ctx = _StepContext(
                now_s=self._clock(),
                epsilon=self.config.completion_epsilon,
                scratch=SpringState(x=0.0, target_x=0.0),
            )
            # Entries added by listeners wait for the next call.
            pending = [
                (handle, anims, list(anims.items()))
                for handle, anims in self._animations.items()
            ]
            for handle, anims, entries in pending:
                self._step_object(handle, anims, entries, dt_s, ctx)
        self.events.after_step.dispatch(dt_s)

    def _step_object(
        self,
        handle: ObjectHandle,
        anims: dict[FieldPath, FieldAnimation],
        entries: list[tuple[FieldPath, FieldAnimation]],
        dt_s: float,
        ctx: _StepContext,
    ) -> None:
        host = self._hosts.get(handle)
        max_duration = self.config.max_duration_s

        for path, anim in entries:
            # Listeners may drop the object or replace fields mid-step.
            if self._animations.get(handle) is not anims:
                return
            if anims.get(path) is not anim:
                continue

            anim.elapsed_s += dt_s
            result = _STEPPERS[anim.kind](host, path, anim, dt_s, ctx)

            if (
                result is StepResult.CONTINUE
                and max_duration is not None
                and anim.elapsed_s >= max_duration
            ):
                logger.warning(
                    "animation of object %d field %s exceeded %.3fs, snapping to target",
                    handle,
                    path,
                    max_duration,
                )
                write_path(host, path, anim.target)
                anim.velocity = 0.0
                result = StepResult.COMPLETE

            self._mark_changed(handle, path)

            if result is StepResult.COMPLETE:
                del anims[path]
                self.events.complete_field.dispatch(handle, path)

        if not anims and self._animations.get(handle) is anims:
            del self._animations[handle]
            self.events.complete_object.dispatch(handle)

    def tick(self) -> float:
        """Step by the wall time elapsed since the previous tick()."""
        now = self._clock()
        if self._t_last is None:
            dt_s = self.config.first_tick_dt_s
        else:
            dt_s = max(now - self._t_last, 0.0)
        self._t_last = now
        self.step(dt_s)
        return dt_s

    # -- Removal --

    def remove(
        self, handle: ObjectHandle, field: FieldArg, dispatch_complete: bool = False
    ) -> None:
        """Stop animating a field (and any nested leaves under it).

        The field keeps its current value.
        """
        self._require(handle)
        self._remove_paths(handle, as_path(field), dispatch_complete)

    def remove_object(self, handle: ObjectHandle, dispatch_complete: bool = False) -> None:
        self._require(handle)
        self._remove_paths(handle, (), dispatch_complete)

    def remove_all(self, dispatch_complete: bool = False) -> None:
        for handle in list(self._animations):
            self._remove_paths(handle, (), dispatch_complete)

    def _remove_paths(
        self, handle: ObjectHandle, prefix: FieldPath, dispatch_complete: bool
    ) -> None:
        anims = self._animations.get(handle)
        if anims is None:
            return
        for path in [p for p in anims if _under(p, prefix)]:
            # Removed one at a time so prefix listeners see the last leaf finish.
            if anims.pop(path, None) is None:
                continue
            if dispatch_complete:
                self.events.complete_field.dispatch(handle, path)
        if not anims and self._animations.get(handle) is anims:
            del self._animations[handle]
            if dispatch_complete:
                self.events.complete_object.dispatch(handle)

    # -- Queries --

    def get_velocity(self, handle: ObjectHandle, field: FieldArg) -> float:
        anim = self._animations.get(handle, {}).get(as_path(field))
        if anim is None:
            return 0.0
        return anim.velocity

    def get_target(self, handle: ObjectHandle, field: FieldArg) -> float | None:
        anim = self._animations.get(handle, {}).get(as_path(field))
        if anim is None:
            return None
        return anim.target

    def is_animating(self, handle: ObjectHandle, field: FieldArg | None = None) -> bool:
        anims = self._animations.get(handle)
        if not anims:
            return False
        if field is None:
            return True
        prefix = as_path(field)
        return any(_under(path, prefix) for path in anims)

    def animated_fields(self, handle: ObjectHandle) -> frozenset[FieldPath]:
        return frozenset(self._animations.get(handle, ()))

    def active_objects(self) -> frozenset[ObjectHandle]:
        return frozenset(self._animations)

    # -- Subscriptions --

    def on_complete_field(
        self,
        handle: ObjectHandle,
        field: FieldArg,
        callback: Callable[[ObjectHandle, FieldArg], None],
        once: bool = False,
    ) -> Listener:
        """Call back once no animation remains on `field` or any leaf below it."""
        self._require(handle)
        prefix = as_path(field)

        def _on_complete_field(h: ObjectHandle, path: FieldPath) -> None:
            if h != handle or not _under(path, prefix):
                return
            if self.is_animating(handle, prefix):
                return
            if once:
                listener.remove()
            callback(handle, field)

        listener = self.events.complete_field.add_listener(_on_complete_field)
        return listener

    def on_complete(
        self,
        handle: ObjectHandle,
        callback: Callable[[ObjectHandle], None],
        once: bool = False,
    ) -> Listener:
        self._require(handle)

        def _on_complete(h: ObjectHandle) -> None:
            if h != handle:
                return
            if once:
                listener.remove()
            callback(handle)

        listener = self.events.complete_object.add_listener(_on_complete)
        return listener

    def on_change_field(
        self,
        handle: ObjectHandle,
        field: FieldArg,
        callback: Callable[[ObjectHandle, FieldArg], None],
    ) -> Subscription:
        """Call back at most once per step when `field` or a leaf below it changes."""
        self._require(handle)
        prefix = as_path(field)
        signals = self._change_field.setdefault(handle, {})
        signal = signals.get(prefix)
        if signal is None:
            signal = Signal()
            signals[prefix] = signal
        listener = signal.add_listener(lambda h, _path: callback(h, field))

        def _cleanup() -> None:
            current = self._change_field.get(handle)
            if current is None or current.get(prefix) is not signal:
                return
            if not signal.has_listeners():
                del current[prefix]
                if not current:
                    del self._change_field[handle]

        return Subscription(listener, _cleanup)

    def on_change(
        self, handle: ObjectHandle, callback: Callable[[ObjectHandle], None]
    ) -> Subscription:
        """Call back at most once per step when any field of the object changes.

        Nested sub-objects reached through target shapes count as part of
        the object.
        """
        self._require(handle)
        signal = self._change_object.get(handle)
        if signal is None:
            signal = Signal()
            self._change_object[handle] = signal
        listener = signal.add_listener(callback)

        def _cleanup() -> None:
            if self._change_object.get(handle) is signal and not signal.has_listeners():
                del self._change_object[handle]

        return Subscription(listener, _cleanup)

    def notify_changed(self, handle: ObjectHandle, field: FieldArg) -> None:
        """Report an external write so change listeners fire with this step's batch."""
        with self._change_batch():
            self._mark_changed(handle, as_path(field))

    # -- Change coalescing --

    @contextmanager
    def _change_batch(self) -> Iterator[None]:
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
        if self._batch_depth == 0:
            self._flush_changes()

    def _mark_changed(self, handle: ObjectHandle, path: FieldPath) -> None:
        if handle not in self._change_object and handle not in self._change_field:
            return
        self._changed.setdefault(handle, set()).add(path)

    def _flush_changes(self) -> None:
        pending = self._changed
        self._changed = {}
        for handle, paths in pending.items():
            field_signals = self._change_field.get(handle)
            if field_signals:
                for prefix, signal in list(field_signals.items()):
                    if not signal.has_listeners():
                        continue
                    if any(_under(path, prefix) for path in paths):
                        signal.dispatch(handle, prefix)
            object_signal = self._change_object.get(handle)
            if object_signal is not None and object_signal.has_listeners():
                object_signal.dispatch(handle)
