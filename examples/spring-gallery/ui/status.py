"""Info panel (sidebar) and bottom status bar."""
from __future__ import annotations

import pygame

from ui.constants import (
    DIVIDER,
    PANEL_BG,
    SCREEN_H,
    SCREEN_W,
    SIDEBAR_W,
    STATUS_H,
    TEXT_COLOR,
    TEXT_DIM,
)


def draw_sidebar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    mode: str,
    wave_count: int,
    arrivals: int,
    duration_s: float,
    rotation_mode: str,
    speed: float,
) -> None:
    """Draw right-side info panel."""
    x = SCREEN_W - SIDEBAR_W
    h = SCREEN_H - STATUS_H

    pygame.draw.rect(surface, PANEL_BG, (x, 0, SIDEBAR_W, h))
    pygame.draw.line(surface, DIVIDER, (x, 0), (x, h))

    pad = 10
    line_h = 22
    cx = x + pad
    cy = 8

    surface.blit(font.render("INFO", True, TEXT_COLOR), (cx, cy))
    cy += line_h + 4

    mode_label = "Comparison" if mode == "comparison" else "Sandbox"
    rows = [
        f"Mode: {mode_label}",
        f"Wave: {wave_count}",
        f"Arrived: {arrivals}",
        f"Dur: {duration_s:.2f}s",
    ]
    if mode == "sandbox":
        rows += [f"Rot: {rotation_mode}", f"Speed: {speed:6.0f}"]
    for row in rows:
        surface.blit(font.render(row, True, TEXT_COLOR), (cx, cy))
        cy += line_h


def draw_status_bar(surface: pygame.Surface, font: pygame.font.Font, mode: str) -> None:
    """Draw bottom key-bindings bar."""
    y = SCREEN_H - STATUS_H
    pygame.draw.rect(surface, PANEL_BG, (0, y, SCREEN_W, STATUS_H))
    pygame.draw.line(surface, DIVIDER, (0, y), (SCREEN_W, y))

    if mode == "comparison":
        text = "[Space] Send  [+/-] Duration  [Tab] Sandbox  [Esc] Quit"
    else:
        text = "[Click] Chase  [M] Rotation mode  [R] Reset  [+/-] Duration  [Tab] Compare  [Esc] Quit"

    label = font.render(text, True, TEXT_DIM)
    surface.blit(label, (8, y + STATUS_H // 2 - label.get_height() // 2))
