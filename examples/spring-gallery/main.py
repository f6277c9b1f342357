"""Spring Gallery - springs vs. tweens, side by side.

Exercises tick-animator, tick-spring, tick-tween, tick-rotation and tick-signal.

Controls:
  Space   Send every lane's orb to the other end (comparison)
  Tab     Toggle comparison / sandbox mode
  Click   Chase the cursor with the follower and the pointer (sandbox)
  M       Toggle pointer rotation mode (cartesian / spherical)
  R       Reset the sandbox
  +/-     Adjust animation duration
  Esc     Quit
"""
from __future__ import annotations

import math
import random
import sys
import time

import pygame

from tick_animator import Animator, AnimatorConfig
from tick_rotation import IDENTITY, OrientationAnimator, RotationMode, quat, vec

from game.components import Follower, Orb, Pointer
from game.lanes import LANES, send_orbs
from ui.constants import (
    BG_COLOR,
    FPS,
    POINTER_DEPTH,
    SCREEN_H,
    SCREEN_W,
    SIDEBAR_W,
    STATUS_H,
)
from ui.lanes import draw_lanes
from ui.sandbox import draw_sandbox, play_center
from ui.status import draw_sidebar, draw_status_bar


class GameState:
    """Holds the animator, the animated objects and UI state."""

    def __init__(self) -> None:
        self.animator = Animator(AnimatorConfig(max_duration_s=10.0))
        self.rotator = OrientationAnimator(self.animator)

        self.mode = "comparison"
        self.duration_s = 1.0
        self.wave_count = 0
        self.arrivals = 0
        self.wave_t0: float | None = None
        self.toward = 1.0
        self.rotation_mode = RotationMode.CARTESIAN

        self.orbs = [Orb(lane=i) for i in range(len(LANES))]
        self.orb_handles = [self.animator.track(orb) for orb in self.orbs]
        for handle in self.orb_handles:
            self.animator.on_complete_field(handle, "progress", self._on_arrival)

        self.follower = Follower(pos=play_center())
        self.follower_handle = self.animator.track(self.follower)
        self.pointer = Pointer()
        self.pointer_handle = self.animator.track(self.pointer)

    def _on_arrival(self, handle: int, field: object) -> None:
        self.arrivals += 1
        self.animator.set_to(handle, {"glow": 1.0})
        self.animator.linear_to(handle, {"glow": 0.0}, 0.4)

    def send_wave(self) -> None:
        send_orbs(self.animator, self.orb_handles, self.toward, self.duration_s)
        self.toward = 1.0 - self.toward
        self.wave_count += 1
        self.wave_t0 = time.monotonic()

    def current_u(self) -> float:
        """Normalized time since the last wave, for the curve dots."""
        if self.wave_t0 is None:
            return -1.0
        return (time.monotonic() - self.wave_t0) / self.duration_s

    def chase(self, mx: float, my: float) -> None:
        color = [random.uniform(80.0, 255.0) for _ in range(3)]
        self.animator.spring_to(
            self.follower_handle,
            {"pos": (mx, my), "color": color},
            {"duration_s": self.duration_s, "bounce": 0.8},
        )

        cx, cy = play_center()
        direction = vec.normalize((mx - cx, cy - my, POINTER_DEPTH))
        self.rotator.spring_to(
            self.pointer_handle,
            "rotation",
            quat.align_to_direction(IDENTITY, direction),
            {"duration_s": self.duration_s},
            mode=self.rotation_mode,
        )

    def toggle_rotation_mode(self) -> None:
        if self.rotation_mode is RotationMode.CARTESIAN:
            self.rotation_mode = RotationMode.SPHERICAL
        else:
            self.rotation_mode = RotationMode.CARTESIAN

    def reset_sandbox(self) -> None:
        self.animator.set_to(self.follower_handle, {"pos": play_center()})
        self.rotator.set_to(self.pointer_handle, "rotation", IDENTITY)

    def follower_speed(self) -> float:
        vx, vy = self.rotator.get_velocity(self.follower_handle, "pos")
        return math.hypot(vx, vy)


def main() -> None:
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Spring Gallery - tick-animator demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 13)

    state = GameState()
    running = True

    while running:
        clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False

                elif event.key == pygame.K_TAB:
                    state.mode = (
                        "sandbox" if state.mode == "comparison" else "comparison"
                    )

                elif event.key == pygame.K_SPACE and state.mode == "comparison":
                    state.send_wave()

                elif event.key == pygame.K_m:
                    state.toggle_rotation_mode()

                elif event.key == pygame.K_r:
                    state.reset_sandbox()

                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    state.duration_s = min(state.duration_s + 0.25, 3.0)

                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    state.duration_s = max(state.duration_s - 0.25, 0.25)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if state.mode == "sandbox":
                    mx, my = event.pos
                    if mx < SCREEN_W - SIDEBAR_W and my < SCREEN_H - STATUS_H:
                        state.chase(mx, my)

        # --- Animate ---
        state.rotator.tick()

        # --- Render ---
        screen.fill(BG_COLOR)

        if state.mode == "comparison":
            draw_lanes(screen, state.orbs, font, state.duration_s, state.current_u())
        else:
            draw_sandbox(screen, state.follower, state.pointer, font)

        draw_sidebar(
            screen,
            font,
            mode=state.mode,
            wave_count=state.wave_count,
            arrivals=state.arrivals,
            duration_s=state.duration_s,
            rotation_mode=state.rotation_mode.value,
            speed=state.follower_speed(),
        )
        draw_status_bar(screen, font, state.mode)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
