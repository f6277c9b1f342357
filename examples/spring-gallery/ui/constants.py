"""Window layout and palette for the spring gallery."""

FPS = 60

# Lane row: label | response curve | track, with the sidebar to the right.
LANE_H = 90
LABEL_W = 100
CURVE_W = 140
TRACK_W = 440
SIDEBAR_W = 160
STATUS_H = 36
ORB_RADIUS = 10
TRACK_PAD = 20

# Sandbox pointer; depth is the eye distance to the screen plane.
POINTER_LEN = 90
POINTER_DEPTH = 120.0

# Lane name -> orb color
LANE_COLORS: dict[str, tuple[int, int, int]] = {
    "linear": (70, 200, 210),
    "ease_in": (240, 150, 60),
    "ease_out": (110, 210, 100),
    "ease_in_out": (200, 100, 220),
    "spring": (100, 150, 250),
    "bouncy": (245, 95, 120),
}

SCREEN_W = LABEL_W + CURVE_W + TRACK_W + SIDEBAR_W
SCREEN_H = LANE_H * len(LANE_COLORS) + STATUS_H

BG_COLOR = (16, 18, 26)
PANEL_BG = (28, 31, 44)
INSET_BG = (20, 22, 33)
DIVIDER = (54, 58, 80)
RAIL_COLOR = (70, 76, 100)
TEXT_COLOR = (210, 212, 224)
TEXT_DIM = (118, 124, 148)
GLOW_COLOR = (255, 255, 255)
