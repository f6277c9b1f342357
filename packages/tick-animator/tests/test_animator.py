"""Tests for Animator scheduling, stepping and removal."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from tick_animator import (
    Animator,
    AnimatorConfig,
    MissingFieldError,
    NonNumericLeafError,
    UntrackedObjectError,
)
from tick_spring import PhysicsParameters, exponential

DT = 1 / 60


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@dataclass
class Sprite:
    x: float = 0.0
    y: float = 0.0
    color: tuple = (0.0, 0.0, 0.0)


def _run_until_idle(animator: Animator, handle: int, max_steps: int = 10_000) -> int:
    for n in range(1, max_steps + 1):
        animator.step(DT)
        if not animator.is_animating(handle):
            return n
    raise AssertionError("animation never completed")


class TestTracking:
    """Handles issued by track and released by untrack."""

    def test_handles_are_distinct(self):
        """Tracking the same object twice yields two handles."""
        a = Animator()
        s = Sprite()
        assert a.track(s) != a.track(s)

    def test_host_lookup(self):
        """host() returns the tracked object itself."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        assert a.host(h) is s
        assert a.tracked(h)

    def test_untracked_handle_raises(self):
        """Operations on an unknown handle raise UntrackedObjectError."""
        a = Animator()
        with pytest.raises(UntrackedObjectError):
            a.spring_to(42, {"x": 1.0})
        with pytest.raises(KeyError):
            a.host(42)

    def test_untrack_drops_animations(self):
        """Untracking stops every animation on the object."""
        a = Animator()
        h = a.track(Sprite())
        a.spring_to(h, {"x": 1.0})
        a.untrack(h)
        assert not a.tracked(h)
        assert not a.is_animating(h)
        a.step(DT)

    def test_velocity_of_untracked_is_zero(self):
        """Velocity of a field with no animation is 0.0."""
        assert Animator().get_velocity(7, "x") == 0.0


class TestSpringTo:
    """Spring animations started through spring_to."""

    def test_reaches_target_exactly(self):
        """A settled spring snaps exactly onto its target."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0, "y": -2.0})
        _run_until_idle(a, h)
        assert s.x == 1.0
        assert s.y == -2.0

    def test_exponential_settles_near_duration(self):
        """A 0.5s spring is within 0.1% at 0.5s and completes before 1s."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0}, exponential(0.5))
        for _ in range(30):
            a.step(DT)
        assert s.x == pytest.approx(1.0, abs=1.5e-3)
        assert a.is_animating(h)

        steps = 30 + _run_until_idle(a, h)
        assert 0.5 <= steps * DT <= 1.0

    def test_retarget_preserves_velocity_and_position(self):
        """Retarget preserves velocity and position."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0}, {"duration_s": 0.5})
        for _ in range(5):
            a.step(DT)
        x, v = s.x, a.get_velocity(h, "x")
        assert v > 0

        a.spring_to(h, {"x": -1.0}, {"duration_s": 0.5})
        assert s.x == x
        assert a.get_velocity(h, "x") == v
        assert a.get_target(h, "x") == -1.0

        a.step(DT)
        # Momentum still carries it forward for at least one frame.
        assert s.x > x

    def test_retarget_resets_nothing_else(self):
        """Retarget resets nothing else."""
        a = Animator()
        h = a.track(Sprite())
        a.spring_to(h, {"x": 1.0})
        a.spring_to(h, {"y": 1.0})
        assert a.animated_fields(h) == {("x",), ("y",)}

    def test_none_params_jump(self):
        """params=None writes the target immediately."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 3.0}, None)
        assert s.x == 3.0
        assert not a.is_animating(h)

    def test_infinite_params_complete_on_first_step(self):
        """Non-finite coefficients snap on the next step."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 3.0}, PhysicsParameters(strength=float("inf"), damping=0.0))
        assert s.x == 0.0
        a.step(DT)
        assert s.x == 3.0
        assert not a.is_animating(h)

    def test_zero_duration_snaps_on_first_step(self):
        """A zero-length spring reaches its target on the next step."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0}, {"duration_s": 0.0})
        a.step(DT)
        assert s.x == 1.0
        assert not a.is_animating(h)

    def test_negative_spring_duration_rejected(self):
        """Negative spring durations raise before anything is scheduled."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        with pytest.raises(ValueError):
            a.spring_to(h, {"x": 1.0}, {"duration_s": -1.0, "bounce": 1.0})
        assert not a.is_animating(h)

    def test_bounce_descriptor_overshoots(self):
        """Bounce descriptor overshoots."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0}, {"duration_s": 0.5, "bounce": 2})
        peak = 0.0
        for _ in range(120):
            a.step(DT)
            peak = max(peak, s.x)
        assert peak > 1.0

    def test_nested_tuple_field(self):
        """Tuple leaves spring independently and the tuple is rebuilt."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"color": (1.0, 0.5, 0.25)})
        a.step(DT)
        assert isinstance(s.color, tuple)
        _run_until_idle(a, h)
        assert s.color == (1.0, 0.5, 0.25)

    def test_mapping_host(self):
        """Plain dicts can be tracked and animated."""
        a = Animator()
        host = {"pos": {"x": 0.0}, "weights": [0.0, 0.0]}
        h = a.track(host)
        a.spring_to(h, {"pos": {"x": 2.0}, "weights": [1.0, 1.0]})
        _run_until_idle(a, h)
        assert host == {"pos": {"x": 2.0}, "weights": [1.0, 1.0]}

    def test_bad_shape_applies_nothing(self):
        """A target with one bad leaf leaves every field untouched."""
        a = Animator()
        h = a.track(Sprite())
        with pytest.raises(MissingFieldError):
            a.spring_to(h, {"x": 1.0, "nope": 2.0})
        assert not a.is_animating(h)

    def test_non_numeric_target(self):
        """String targets raise NonNumericLeafError."""
        a = Animator()
        h = a.track(Sprite())
        with pytest.raises(NonNumericLeafError):
            a.spring_to(h, {"x": "far"})

    def test_invalid_params(self):
        """Unrecognised spring descriptors raise ValueError."""
        a = Animator()
        h = a.track(Sprite())
        with pytest.raises(ValueError):
            a.spring_to(h, {"x": 1.0}, {"speed": 3.0})
        assert not a.is_animating(h)

    def test_empty_shape_is_noop(self):
        """An empty target starts nothing."""
        a = Animator()
        h = a.track(Sprite())
        a.spring_to(h, {})
        assert not a.is_animating(h)
        assert a.active_objects() == frozenset()


class TestTweens:
    """Fixed-duration tweens driven by an injected clock."""

    def test_linear_progress_follows_clock(self):
        """A linear tween tracks the injected clock."""
        clock = FakeClock()
        a = Animator(clock=clock)
        s = Sprite()
        h = a.track(s)
        a.linear_to(h, {"x": 10.0}, 1.0)

        clock.now = 0.25
        a.step(0.25)
        assert s.x == pytest.approx(2.5)
        assert a.get_velocity(h, "x") == pytest.approx(10.0)

        clock.now = 1.0
        a.step(0.75)
        assert s.x == 10.0
        assert not a.is_animating(h)

    def test_ease_helpers_shape(self):
        """ease_in lags and ease_out leads the linear midpoint."""
        clock = FakeClock()
        a = Animator(clock=clock)
        hosts = [Sprite() for _ in range(3)]
        handles = [a.track(s) for s in hosts]
        a.ease_in_to(handles[0], {"x": 1.0}, 1.0)
        a.ease_out_to(handles[1], {"x": 1.0}, 1.0)
        a.ease_in_out_to(handles[2], {"x": 1.0}, 1.0)
        clock.now = 0.5
        a.step(0.5)
        assert hosts[0].x == pytest.approx(0.125)
        assert hosts[1].x == pytest.approx(0.875)
        assert hosts[2].x == pytest.approx(0.5)

    def test_default_duration_from_config(self):
        """Default duration from config."""
        clock = FakeClock()
        a = Animator(AnimatorConfig(default_tween_duration_s=2.0), clock=clock)
        s = Sprite()
        h = a.track(s)
        a.linear_to(h, {"x": 4.0})
        clock.now = 1.0
        a.step(1.0)
        assert s.x == pytest.approx(2.0)

    def test_zero_duration_completes_on_first_step(self):
        """Zero duration completes on first step."""
        a = Animator(clock=FakeClock())
        s = Sprite()
        h = a.track(s)
        a.linear_to(h, {"x": 5.0}, 0.0)
        a.step(DT)
        assert s.x == 5.0
        assert not a.is_animating(h)

    def test_tween_restarts_from_current_value(self):
        """Tween restarts from current value."""
        clock = FakeClock()
        a = Animator(clock=clock)
        s = Sprite()
        h = a.track(s)
        a.linear_to(h, {"x": 10.0}, 1.0)
        clock.now = 0.5
        a.step(0.5)
        a.linear_to(h, {"x": 0.0}, 1.0)
        clock.now = 1.0
        a.step(0.5)
        assert s.x == pytest.approx(2.5)

    def test_switch_from_spring_resets_velocity(self):
        """Switch from spring resets velocity."""
        a = Animator(clock=FakeClock())
        h = a.track(Sprite())
        a.spring_to(h, {"x": 1.0})
        a.step(DT)
        assert a.get_velocity(h, "x") != 0.0
        a.linear_to(h, {"x": 0.0}, 1.0)
        assert a.get_velocity(h, "x") == 0.0

    def test_negative_duration_rejected(self):
        """Negative duration rejected."""
        a = Animator()
        h = a.track(Sprite())
        with pytest.raises(ValueError):
            a.linear_to(h, {"x": 1.0}, -1.0)


class TestSetTo:
    """Immediate writes that cancel running animations."""

    def test_writes_immediately(self):
        """set_to writes without stepping."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.set_to(h, {"x": 4.0, "color": (1.0, 1.0, 1.0)})
        assert s.x == 4.0
        assert s.color == (1.0, 1.0, 1.0)

    def test_cancels_running_animation(self):
        """Cancels running animation."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0, "y": 1.0})
        a.set_to(h, {"x": -1.0})
        assert a.animated_fields(h) == {("y",)}
        _run_until_idle(a, h)
        assert s.x == -1.0


class TestStep:
    """Input checks and completion behaviour of step."""

    def test_zero_dt_leaves_springs_in_place(self):
        """Zero dt leaves springs in place."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0})
        a.step(0.0)
        assert s.x == 0.0
        assert a.is_animating(h)

    def test_negative_dt_rejected(self):
        """Negative dt rejected."""
        with pytest.raises(ValueError):
            Animator().step(-0.1)

    def test_step_hooks_receive_dt(self):
        """Step hooks receive dt."""
        seen: list[tuple[str, float]] = []
        a = Animator(
            on_before_step=lambda dt: seen.append(("before", dt)),
            on_after_step=lambda dt: seen.append(("after", dt)),
        )
        a.step(0.25)
        assert seen == [("before", 0.25), ("after", 0.25)]

    def test_larger_epsilon_completes_sooner(self):
        """Larger epsilon completes sooner."""
        coarse = Animator(AnimatorConfig(completion_epsilon=1e-2))
        fine = Animator()
        hc = coarse.track(Sprite())
        hf = fine.track(Sprite())
        coarse.spring_to(hc, {"x": 1.0})
        fine.spring_to(hf, {"x": 1.0})
        assert _run_until_idle(coarse, hc) < _run_until_idle(fine, hf)

    def test_max_duration_snaps(self, caplog: pytest.LogCaptureFixture):
        """Animations past max_duration_s snap and log a warning."""
        a = Animator(AnimatorConfig(max_duration_s=0.1))
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0}, {"duration_s": 10.0})
        with caplog.at_level(logging.WARNING, logger="tick_animator.animator"):
            steps = _run_until_idle(a, h)
        assert steps == pytest.approx(0.1 / DT, abs=1)
        assert s.x == 1.0
        assert "exceeded" in caplog.text

    def test_retarget_restarts_max_duration(self):
        """Retarget restarts max duration."""
        a = Animator(AnimatorConfig(max_duration_s=0.1))
        h = a.track(Sprite())
        a.spring_to(h, {"x": 1.0}, {"duration_s": 10.0})
        for _ in range(4):
            a.step(DT)
        a.spring_to(h, {"x": 2.0}, {"duration_s": 10.0})
        for _ in range(4):
            a.step(DT)
        assert a.is_animating(h)


class TestTick:
    """Wall-clock stepping through tick."""

    def test_first_tick_uses_configured_dt(self):
        """First tick uses configured dt."""
        a = Animator(AnimatorConfig(first_tick_dt_s=0.02), clock=FakeClock(5.0))
        assert a.tick() == 0.02

    def test_later_ticks_use_clock_delta(self):
        """Later ticks use clock delta."""
        clock = FakeClock()
        a = Animator(clock=clock)
        a.tick()
        clock.now = 0.05
        assert a.tick() == pytest.approx(0.05)
        clock.now = 0.05
        assert a.tick() == 0.0

    def test_tick_advances_springs(self):
        """Tick advances springs."""
        clock = FakeClock()
        a = Animator(clock=clock)
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0})
        a.tick()
        assert 0.0 < s.x < 1.0


class TestRemove:
    """Stopping animations without reaching their targets."""

    def test_keeps_current_value(self):
        """Removing a field leaves its value where it was."""
        a = Animator()
        s = Sprite()
        h = a.track(s)
        a.spring_to(h, {"x": 1.0})
        a.step(DT)
        x = s.x
        a.remove(h, "x")
        a.step(DT)
        assert s.x == x
        assert not a.is_animating(h)

    def test_prefix_removes_nested_leaves(self):
        """Prefix removes nested leaves."""
        a = Animator()
        h = a.track(Sprite())
        a.spring_to(h, {"x": 1.0, "color": (1.0, 1.0, 1.0)})
        a.remove(h, "color")
        assert a.animated_fields(h) == {("x",)}

    def test_remove_single_leaf_by_path(self):
        """Remove single leaf by path."""
        a = Animator()
        h = a.track(Sprite())
        a.spring_to(h, {"color": (1.0, 1.0, 1.0)})
        a.remove(h, ("color", 1))
        assert a.animated_fields(h) == {("color", 0), ("color", 2)}
        assert a.is_animating(h, "color")
        assert not a.is_animating(h, ("color", 1))

    def test_remove_object(self):
        """remove_object stops every field of one object."""
        a = Animator()
        h1 = a.track(Sprite())
        h2 = a.track(Sprite())
        a.spring_to(h1, {"x": 1.0})
        a.spring_to(h2, {"x": 1.0})
        a.remove_object(h1)
        assert a.active_objects() == {h2}

    def test_remove_all(self):
        """remove_all clears every object."""
        a = Animator()
        handles = [a.track(Sprite()) for _ in range(3)]
        for h in handles:
            a.spring_to(h, {"x": 1.0})
        a.remove_all()
        assert a.active_objects() == frozenset()

    def test_remove_unknown_field_is_noop(self):
        """Remove unknown field is noop."""
        a = Animator()
        h = a.track(Sprite())
        a.remove(h, "x", dispatch_complete=True)
        assert not a.is_animating(h)
