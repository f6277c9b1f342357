"""Comparison mode: lane-based rendering."""
from __future__ import annotations

import pygame

from game.components import Orb
from game.lanes import LANES
from ui.constants import (
    CURVE_W,
    DIVIDER,
    GLOW_COLOR,
    INSET_BG,
    LABEL_W,
    LANE_COLORS,
    LANE_H,
    ORB_RADIUS,
    PANEL_BG,
    RAIL_COLOR,
    TEXT_COLOR,
    TRACK_PAD,
    TRACK_W,
)
from ui.curves import draw_curve_plot


def _blend(a: tuple[int, ...], b: tuple[int, ...], t: float) -> tuple[int, ...]:
    t = min(max(t, 0.0), 1.0)
    return tuple(int(ai + (bi - ai) * t) for ai, bi in zip(a, b, strict=True))


def draw_lanes(
    surface: pygame.Surface,
    orbs: list[Orb],
    font: pygame.font.Font,
    duration_s: float,
    current_u: float,
) -> None:
    """Draw one lane per animation: label, response curve and orb track."""
    track_x = LABEL_W + CURVE_W
    full_w = LABEL_W + CURVE_W + TRACK_W

    for i, (lane, orb) in enumerate(zip(LANES, orbs, strict=True)):
        lane_y = i * LANE_H

        pygame.draw.rect(surface, PANEL_BG, (0, lane_y, full_w, LANE_H))
        pygame.draw.line(
            surface, DIVIDER, (0, lane_y + LANE_H - 1), (full_w, lane_y + LANE_H - 1)
        )

        label = font.render(lane.name, True, TEXT_COLOR)
        surface.blit(label, (10, lane_y + LANE_H // 2 - label.get_height() // 2))

        draw_curve_plot(
            surface, lane, duration_s, LABEL_W, lane_y + 6, CURVE_W, LANE_H - 12, current_u
        )

        pygame.draw.rect(surface, INSET_BG, (track_x, lane_y, TRACK_W, LANE_H))
        rail_y = lane_y + LANE_H // 2
        rail_left = track_x + TRACK_PAD
        rail_right = track_x + TRACK_W - TRACK_PAD
        pygame.draw.line(surface, RAIL_COLOR, (rail_left, rail_y), (rail_right, rail_y), 2)

        color = LANE_COLORS.get(lane.name, (200, 200, 200))
        dim_color = tuple(c // 3 for c in color)
        pygame.draw.circle(surface, dim_color, (rail_left, rail_y), 4)
        pygame.draw.circle(surface, dim_color, (rail_right, rail_y), 4)

        ox = int(rail_left + (rail_right - rail_left) * orb.progress)
        fill = _blend(color, GLOW_COLOR, orb.glow)
        pygame.draw.circle(surface, fill, (ox, rail_y), ORB_RADIUS)
        outline = tuple(min(c + 40, 255) for c in fill)
        pygame.draw.circle(surface, outline, (ox, rail_y), ORB_RADIUS, 1)
