"""Tests for easing functions and tween step functions."""

from tick_tween import (
    EASINGS,
    ease_in_out_step,
    ease_in_step,
    ease_out_step,
    linear_step,
    make_step,
)


class TestLinearEasing:
    """Test linear easing function."""

    def test_linear_at_zero(self):
        """Linear easing should return 0 at t=0."""
        linear = EASINGS["linear"]
        assert linear(0.0) == 0.0

    def test_linear_at_half(self):
        """Linear easing should return 0.5 at t=0.5."""
        linear = EASINGS["linear"]
        assert linear(0.5) == 0.5

    def test_linear_at_one(self):
        """Linear easing should return 1 at t=1."""
        linear = EASINGS["linear"]
        assert linear(1.0) == 1.0


class TestEaseInEasing:
    """Test cubic ease_in easing function."""

    def test_ease_in_at_zero(self):
        """Ease in at zero."""
        ease_in = EASINGS["ease_in"]
        assert ease_in(0.0) == 0.0

    def test_ease_in_at_half(self):
        """Ease-in easing should return 0.125 at t=0.5 (t^3)."""
        ease_in = EASINGS["ease_in"]
        assert ease_in(0.5) == 0.125

    def test_ease_in_at_one(self):
        """Ease in at one."""
        ease_in = EASINGS["ease_in"]
        assert ease_in(1.0) == 1.0


class TestEaseOutEasing:
    """Test cubic ease_out easing function."""

    def test_ease_out_at_zero(self):
        """Ease out at zero."""
        ease_out = EASINGS["ease_out"]
        assert ease_out(0.0) == 0.0

    def test_ease_out_at_half(self):
        """Ease-out easing should return 0.875 at t=0.5 (1-(1-t)^3)."""
        ease_out = EASINGS["ease_out"]
        assert ease_out(0.5) == 0.875

    def test_ease_out_at_one(self):
        """Ease out at one."""
        ease_out = EASINGS["ease_out"]
        assert ease_out(1.0) == 1.0


class TestEaseInOutEasing:
    """Test smoothstep ease_in_out easing function."""

    def test_ease_in_out_at_zero(self):
        """Ease in out at zero."""
        ease_in_out = EASINGS["ease_in_out"]
        assert ease_in_out(0.0) == 0.0

    def test_ease_in_out_at_quarter(self):
        """Ease-in-out easing should return 0.15625 at t=0.25 (t^2 (3-2t))."""
        ease_in_out = EASINGS["ease_in_out"]
        assert ease_in_out(0.25) == 0.15625

    def test_ease_in_out_at_half(self):
        """Ease in out at half."""
        ease_in_out = EASINGS["ease_in_out"]
        assert ease_in_out(0.5) == 0.5

    def test_ease_in_out_at_three_quarters(self):
        """Ease in out at three quarters."""
        ease_in_out = EASINGS["ease_in_out"]
        result = ease_in_out(0.75)
        assert abs(result - 0.84375) < 1e-9

    def test_ease_in_out_at_one(self):
        """Ease in out at one."""
        ease_in_out = EASINGS["ease_in_out"]
        assert ease_in_out(1.0) == 1.0


class TestEasingsDict:
    """Test EASINGS dictionary completeness."""

    def test_easings_contains_all_functions(self):
        """Easings contains all functions."""
        expected_keys = {"linear", "ease_in", "ease_out", "ease_in_out"}
        assert set(EASINGS.keys()) == expected_keys

    def test_easings_map_zero_to_zero(self):
        """Easings map zero to zero."""
        for name, func in EASINGS.items():
            assert func(0.0) == 0.0, f"{name}(0) != 0"

    def test_easings_map_one_to_one(self):
        """Easings map one to one."""
        for name, func in EASINGS.items():
            result = func(1.0)
            assert abs(result - 1.0) < 1e-9, f"{name}(1) != 1"

    def test_easings_are_monotonic(self):
        """All easing functions should be non-decreasing on [0,1]."""
        samples = [i / 50 for i in range(51)]
        for name, func in EASINGS.items():
            values = [func(t) for t in samples]
            assert values == sorted(values), f"{name} is not monotonic"


class TestStepFunctions:
    """Test closed-form (x0, target, u) step functions."""

    def test_linear_step_midpoint(self):
        """Linear step midpoint."""
        assert linear_step(10.0, 20.0, 0.5) == 15.0

    def test_steps_hit_endpoints(self):
        """Steps hit endpoints."""
        for step in (linear_step, ease_in_step, ease_out_step, ease_in_out_step):
            assert step(-3.0, 5.0, 0.0) == -3.0
            assert abs(step(-3.0, 5.0, 1.0) - 5.0) < 1e-12

    def test_ease_in_step_scales_by_distance(self):
        """Ease in step scales by distance."""
        assert ease_in_step(0.0, 8.0, 0.5) == 1.0

    def test_decreasing_target(self):
        """Decreasing target."""
        assert ease_out_step(1.0, 0.0, 0.5) == 0.125

    def test_make_step_custom_curve(self):
        """Make step custom curve."""
        step = make_step(lambda t: t**0.5)
        assert step(0.0, 2.0, 0.25) == 1.0

    def test_make_step_names_function(self):
        """Make step names function."""
        assert linear_step.__name__ == "linear_step"
