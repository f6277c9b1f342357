"""Response curve plot renderer."""
from __future__ import annotations

import pygame

from game.lanes import Lane, response_curve
from ui.constants import INSET_BG, LANE_COLORS, TEXT_DIM

# Vertical range of the plot; springs overshoot above 1.
_V_MIN = -0.1
_V_MAX = 1.4


def draw_curve_plot(
    surface: pygame.Surface,
    lane: Lane,
    duration_s: float,
    x: int,
    y: int,
    w: int,
    h: int,
    current_u: float,
) -> None:
    """Draw the lane's response over one duration with a tracking dot."""
    pad = 8
    plot_x = x + pad
    plot_y = y + pad
    plot_w = w - 2 * pad
    plot_h = h - 2 * pad

    def to_screen(u: float, v: float) -> tuple[float, float]:
        fy = (v - _V_MIN) / (_V_MAX - _V_MIN)
        return plot_x + u * plot_w, plot_y + plot_h - fy * plot_h

    pygame.draw.rect(surface, INSET_BG, (x, y, w, h))

    # Baseline and target line
    pygame.draw.line(surface, TEXT_DIM, to_screen(0.0, 0.0), to_screen(1.0, 0.0))
    pygame.draw.line(surface, (45, 45, 60), to_screen(0.0, 1.0), to_screen(1.0, 1.0))

    color = LANE_COLORS.get(lane.name, (200, 200, 200))
    samples = 80
    values = response_curve(lane, duration_s, samples)
    points = [to_screen(i / samples, v) for i, v in enumerate(values)]
    pygame.draw.lines(surface, color, False, points, 2)

    if 0.0 <= current_u <= 1.0:
        dot_x, dot_y = to_screen(current_u, values[round(current_u * samples)])
        pygame.draw.circle(surface, (255, 255, 255), (int(dot_x), int(dot_y)), 4)
        pygame.draw.circle(surface, color, (int(dot_x), int(dot_y)), 3)
