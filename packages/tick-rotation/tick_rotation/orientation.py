"""Orientation springs - quaternion fields animated on top of an Animator.

Quaternion fields are not sprung component-wise. The viewing direction and
the roll about it are sprung separately, so the object turns the way a
camera or a head would and stays unit length throughout.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, NamedTuple

from tick_animator import Animator, FieldPath, ObjectHandle, as_path, read_path, write_path
from tick_animator.shape import is_number
from tick_animator.types import NonNumericLeafError
from tick_signal import Signal, Subscription
from tick_spring import (
    PhysicsParameters,
    SpringParameters,
    SpringState,
    get_physics_parameters,
    is_finite,
    step_spring,
)
from tick_tween import TweenStepFn

from tick_rotation import angles, quat, vec
from tick_rotation.quat import Quat
from tick_rotation.vec import Vec3

logger = logging.getLogger(__name__)

_DEFAULT_SPRING: Any = object()


class RotationMode(Enum):
    CARTESIAN = "cartesian"
    SPHERICAL = "spherical"


@dataclass(frozen=True)
class RotationConfig:
    """Completion thresholds for orientation springs.

    Attributes:
        alignment_threshold: |dot(q, target)| above which q counts as aligned.
        velocity_epsilon: Squared direction speed and absolute roll speed
            below which the spring counts as at rest.
    """

    alignment_threshold: float = 0.999
    velocity_epsilon: float = 1e-4

    def __post_init__(self) -> None:
        if not 0.0 < self.alignment_threshold < 1.0:
            raise ValueError("alignment_threshold must be in (0, 1)")
        if self.velocity_epsilon <= 0:
            raise ValueError("velocity_epsilon must be positive")


class OrientationVelocity(NamedTuple):
    direction_velocity: tuple[float, ...]
    roll_velocity: float


def _zero_velocity(mode: RotationMode) -> tuple[float, ...]:
    if mode is RotationMode.SPHERICAL:
        return (0.0, 0.0)  # azimuth, elevation
    return vec.ZERO


@dataclass
class OrientationSpringState:
    """Live orientation spring of one quaternion field."""

    q: Quat
    target: Quat
    direction: Vec3
    direction_velocity: tuple[float, ...]
    roll_velocity: float = 0.0
    mode: RotationMode = RotationMode.CARTESIAN
    params: PhysicsParameters | None = None


def _spring_scalar(
    scratch: SpringState, dt_s: float, x: float, v: float, target: float, params: PhysicsParameters
) -> tuple[float, float]:
    scratch.x = x
    scratch.v = v
    scratch.target_x = target
    step_spring(dt_s, scratch, params)
    return scratch.x, scratch.v


def step_cartesian(
    dt_s: float, state: OrientationSpringState, params: PhysicsParameters, scratch: SpringState
) -> None:
    """Spring the view direction component-wise, then spring roll toward the target."""
    _, target_up, target_dir = quat.basis(state.target)
    direction_before = state.direction

    step_target = target_dir
    if vec.dot(direction_before, target_dir) < 0 and vec.magnitude_sq(
        vec.cross(direction_before, target_dir)
    ) < 1e-12:
        # Exactly opposite: pull toward the current up axis to pick a side.
        _, step_target, _ = quat.basis(state.q)

    components = []
    velocity = []
    for i in range(3):
        x, v = _spring_scalar(
            scratch, dt_s, direction_before[i], state.direction_velocity[i], step_target[i], params
        )
        components.append(x)
        velocity.append(v)

    direction: Vec3 = (components[0], components[1], components[2])
    if vec.magnitude_sq(direction) == 0.0:
        direction = direction_before
    direction = vec.normalize(direction)
    state.direction = direction
    state.direction_velocity = vec.project_on_plane(
        (velocity[0], velocity[1], velocity[2]), direction
    )

    q = quat.multiply(quat.from_unit_vectors(direction_before, direction), state.q)
    q = quat.align_to_direction(q, direction)

    # Roll error: the up vector carried onto the target direction vs. the target up.
    to_target = quat.from_unit_vectors(direction, target_dir)
    _, up, _ = quat.basis(q)
    carried_up = quat.rotate(to_target, up)
    roll_q = quat.from_unit_vectors(carried_up, target_up)
    roll_angle = 2 * math.acos(min(1.0, max(-1.0, roll_q.w)))
    if vec.dot(vec.cross(carried_up, target_up), target_dir) >= 0:
        roll_angle = -roll_angle

    roll_after, state.roll_velocity = _spring_scalar(
        scratch, dt_s, roll_angle, state.roll_velocity, 0.0, params
    )
    q = quat.multiply(quat.from_axis_angle(direction, roll_after - roll_angle), q)
    state.q = quat.normalize(q)


def step_spherical(
    dt_s: float, state: OrientationSpringState, params: PhysicsParameters, scratch: SpringState
) -> None:
    """Spring elevation, azimuth and roll as continuous angles."""
    azimuth_v, elevation_v = state.direction_velocity
    elevation, azimuth, roll = angles.elevation_azimuth_roll(state.q)
    t_elevation, t_azimuth, t_roll = angles.elevation_azimuth_roll(state.target)

    elevation, elevation_v = _spring_scalar(
        scratch, dt_s, elevation, elevation_v,
        angles.angle_continuous(t_elevation, elevation), params,
    )
    azimuth, azimuth_v = _spring_scalar(
        scratch, dt_s, azimuth, azimuth_v,
        angles.angle_continuous(t_azimuth, azimuth), params,
    )
    roll, state.roll_velocity = _spring_scalar(
        scratch, dt_s, roll, state.roll_velocity,
        angles.angle_continuous(t_roll, roll), params,
    )
    state.direction_velocity = (azimuth_v, elevation_v)

    direction = angles.direction_from_angles(elevation, azimuth)
    state.direction = direction
    q = quat.align_to_direction(state.q, direction)
    state.q = quat.normalize(angles.set_roll(q, roll))


_STEPPERS: dict[RotationMode, Callable[..., None]] = {
    RotationMode.CARTESIAN: step_cartesian,
    RotationMode.SPHERICAL: step_spherical,
}


def _shape_for(path: FieldPath, value: Any) -> Any:
    shape = value
    for key in reversed(path):
        shape = {key: shape}
    return shape


def _under(path: FieldPath, prefix: FieldPath) -> bool:
    return path[: len(prefix)] == prefix


class OrientationAnimator:
    """Adds quaternion orientation springs to an Animator.

    Fields whose target is a Quat get an orientation spring; any other
    target is handed to the wrapped Animator unchanged. Orientation springs
    advance from the animator's before_step signal, so stepping either
    object drives both.
    """

    def __init__(
        self, animator: Animator | None = None, config: RotationConfig | None = None
    ) -> None:
        self.animator = animator if animator is not None else Animator()
        self.config = config if config is not None else RotationConfig()
        # complete(handle, path)
        self.complete = Signal()
        self._springs: dict[tuple[ObjectHandle, FieldPath], OrientationSpringState] = {}
        self._scratch = SpringState(x=0.0, target_x=0.0)
        self._step_listener = self.animator.events.before_step.add_listener(
            self._step_orientations
        )

    # -- Delegation --

    def track(self, obj: Any) -> ObjectHandle:
        return self.animator.track(obj)

    def step(self, dt_s: float) -> None:
        self.animator.step(dt_s)

    def tick(self) -> float:
        return self.animator.tick()

    def custom_tween_to(
        self,
        handle: ObjectHandle,
        field: Any,
        target: Any,
        duration_s: float,
        step_fn: TweenStepFn,
    ) -> None:
        path = as_path(field)
        if self._orientation_target(handle, path, target) is not None:
            raise TypeError("Quaternion fields can only be sprung, not tweened")
        self.animator.custom_tween_to(
            handle, _shape_for(path, target), duration_s, step_fn
        )

    # -- Orientation springs --

    def spring_to(
        self,
        handle: ObjectHandle,
        field: Any,
        target: Any,
        params: SpringParameters | None = _DEFAULT_SPRING,
        mode: RotationMode = RotationMode.CARTESIAN,
    ) -> None:
        """Spring a field toward `target`.

        A Quat target, or any 4-sequence aimed at a field holding a Quat,
        starts or retargets an orientation spring; direction and roll
        velocities carry over on retarget. Other targets go to
        Animator.spring_to. `params=None` jumps to the target.
        """
        path = as_path(field)
        if params is _DEFAULT_SPRING:
            params = self.animator.config.default_spring
        orientation = self._orientation_target(handle, path, target)
        if orientation is None:
            self.animator.spring_to(handle, _shape_for(path, target), params)
            return
        target = orientation
        if params is None:
            self.set_to(handle, field, target)
            return
        physics = get_physics_parameters(params)
        target = self._normalized_target(path, target)
        current = self._read_quat(handle, path)

        key = (handle, path)
        state = self._springs.get(key)
        if state is None:
            _, _, direction = quat.basis(current)
            state = OrientationSpringState(
                q=current,
                target=target,
                direction=direction,
                direction_velocity=_zero_velocity(mode),
                mode=mode,
            )
            self._springs[key] = state
            logger.debug("orientation spring on object %d field %s", handle, path)
        elif state.mode is not mode:
            _, _, state.direction = quat.basis(current)
            state.direction_velocity = _zero_velocity(mode)
            state.mode = mode

        state.target = target
        state.params = physics

    def set_to(self, handle: ObjectHandle, field: Any, target: Any) -> None:
        path = as_path(field)
        orientation = self._orientation_target(handle, path, target)
        if orientation is None:
            self.animator.set_to(handle, _shape_for(path, target))
            return
        target = self._normalized_target(path, orientation)
        self._read_quat(handle, path)
        state = self._springs.pop((handle, path), None)
        write_path(self.animator.host(handle), path, target)
        self.animator.notify_changed(handle, path)
        if state is not None:
            self.complete.dispatch(handle, path)

    def remove(self, handle: ObjectHandle, field: Any) -> None:
        """Stop any animation under `field`, leaving the current value in place."""
        prefix = as_path(field)
        for key in [k for k in self._springs if k[0] == handle and _under(k[1], prefix)]:
            del self._springs[key]
        self.animator.remove(handle, prefix)

    def remove_all(self) -> None:
        self.animator.remove_all()
        self._springs.clear()

    def get_velocity(self, handle: ObjectHandle, field: Any) -> OrientationVelocity | float | tuple[float, ...]:
        """Velocity of a field.

        Quaternion fields report an OrientationVelocity, numeric fields a
        float, and sequence fields a tuple of per-component velocities.
        """
        path = as_path(field)
        state = self._springs.get((handle, path))
        if state is not None:
            return OrientationVelocity(state.direction_velocity, state.roll_velocity)
        if not self.animator.tracked(handle):
            return 0.0
        value = read_path(self.animator.host(handle), path)
        if isinstance(value, Quat):
            return OrientationVelocity(vec.ZERO, 0.0)
        if is_number(value):
            return self.animator.get_velocity(handle, path)
        return tuple(
            self.animator.get_velocity(handle, path + (i,)) for i in range(len(value))
        )

    def is_animating(self, handle: ObjectHandle, field: Any = None) -> bool:
        if field is None:
            prefix: FieldPath = ()
        else:
            prefix = as_path(field)
        if any(k[0] == handle and _under(k[1], prefix) for k in self._springs):
            return True
        return self.animator.is_animating(handle, field)

    def on_complete(
        self,
        handle: ObjectHandle,
        field: Any,
        callback: Callable[[ObjectHandle, Any], None],
        once: bool = False,
    ) -> Subscription:
        """Call back when nothing is animating under `field` any more.

        Covers orientation springs and scalar animations alike.
        """
        self.animator.host(handle)
        prefix = as_path(field)

        def _on_complete(h: ObjectHandle, path: FieldPath) -> None:
            if h != handle or not _under(path, prefix):
                return
            if self.is_animating(handle, prefix):
                return
            if once:
                subscription.remove()
            callback(handle, field)

        subscription = Subscription(
            self.complete.add_listener(_on_complete),
            self.animator.events.complete_field.add_listener(_on_complete),
        )
        return subscription

    def dispose(self) -> None:
        """Detach from the animator and drop every orientation spring."""
        self._step_listener.remove()
        self._springs.clear()
        self.complete.clear()

    # -- Internals --

    def _normalized_target(self, path: FieldPath, target: Quat) -> Quat:
        if quat.length(target) == 0.0 or not all(math.isfinite(c) for c in target):
            raise ValueError(f"Quaternion target for {path} must be finite and non-zero")
        return quat.normalize(target)

    def _orientation_target(
        self, handle: ObjectHandle, path: FieldPath, target: Any
    ) -> Quat | None:
        """`target` as a Quat when it addresses a quaternion field, else None."""
        if isinstance(target, Quat):
            return target
        if not isinstance(target, (tuple, list)) or len(target) != 4:
            return None
        if (handle, path) not in self._springs:
            if not isinstance(read_path(self.animator.host(handle), path), Quat):
                return None
        return quat.as_quat(target)

    def _read_quat(self, handle: ObjectHandle, path: FieldPath) -> Quat:
        value = read_path(self.animator.host(handle), path)
        try:
            return quat.normalize(quat.as_quat(value))
        except (TypeError, ValueError) as exc:
            raise NonNumericLeafError(
                path, f"Field {path} does not hold an (x, y, z, w) quaternion"
            ) from exc

    def _step_orientations(self, dt_s: float) -> None:
        threshold = self.config.alignment_threshold
        epsilon = self.config.velocity_epsilon

        for key, state in list(self._springs.items()):
            if self._springs.get(key) is not state:
                continue
            handle, path = key
            if not self.animator.tracked(handle):
                del self._springs[key]
                continue

            host = self.animator.host(handle)
            state.q = quat.normalize(quat.as_quat(read_path(host, path)))

            if is_finite(state.params):
                _STEPPERS[state.mode](dt_s, state, state.params, self._scratch)
            else:
                state.q = state.target
                state.direction_velocity = _zero_velocity(state.mode)
                state.roll_velocity = 0.0

            done = (
                abs(quat.dot(state.q, state.target)) > threshold
                and sum(c * c for c in state.direction_velocity) < epsilon
                and abs(state.roll_velocity) < epsilon
            )
            if done:
                state.q = state.target

            write_path(host, path, state.q)
            self.animator.notify_changed(handle, path)

            if done:
                del self._springs[key]
                logger.debug("orientation spring on object %d field %s settled", handle, path)
                self.complete.dispatch(handle, path)
