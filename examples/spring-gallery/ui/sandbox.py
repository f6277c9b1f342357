"""Sandbox mode renderer: a follower orb and a 3D pointer seen from the front."""
from __future__ import annotations

import pygame

from tick_rotation import quat

from game.components import Follower, Pointer
from ui.constants import (
    ORB_RADIUS,
    POINTER_LEN,
    SCREEN_H,
    SCREEN_W,
    SIDEBAR_W,
    STATUS_H,
    TEXT_DIM,
)


def play_center() -> tuple[float, float]:
    return (SCREEN_W - SIDEBAR_W) / 2, (SCREEN_H - STATUS_H) / 2


def draw_sandbox(
    surface: pygame.Surface,
    follower: Follower,
    pointer: Pointer,
    font: pygame.font.Font,
) -> None:
    play_w = SCREEN_W - SIDEBAR_W
    play_h = SCREEN_H - STATUS_H

    pygame.draw.rect(surface, (18, 18, 28), (0, 0, play_w, play_h))
    for gx in range(40, play_w, 40):
        for gy in range(40, play_h, 40):
            surface.set_at((gx, gy), (40, 40, 55))

    # Pointer: z axis is the arrow, y axis the small "up" tick.
    cx, cy = play_center()
    _, up, forward = quat.basis(quat.as_quat(pointer.rotation))
    tip = (cx + forward[0] * POINTER_LEN, cy - forward[1] * POINTER_LEN)
    up_tip = (tip[0] + up[0] * 16, tip[1] - up[1] * 16)
    shade = int(120 + 100 * max(forward[2], 0.0))
    pygame.draw.line(surface, (shade, shade, 255), (cx, cy), tip, 3)
    pygame.draw.line(surface, (255, 200, 80), tip, up_tip, 2)
    pygame.draw.circle(surface, (80, 80, 110), (int(cx), int(cy)), 6)

    color = tuple(int(min(max(c, 0.0), 255.0)) for c in follower.color)
    fx, fy = follower.pos
    pygame.draw.circle(surface, color, (int(fx), int(fy)), ORB_RADIUS + 2)

    label = font.render("SANDBOX", True, TEXT_DIM)
    surface.blit(label, (play_w // 2 - label.get_width() // 2, 8))
