from __future__ import annotations

import random
from typing import List, Sequence

TERRITORY_COLORS = (
    "#e63946",  # red
    "#457b9d",  # steel blue
    "#2a9d8f",  # teal
    "#e9c46a",  # gold
    "#8338ec",  # purple
    "#f77f00",  # orange
    "#06d6a0",  # mint
    "#ef476f",  # pink
    "#118ab2",  # blue
    "#84a98c",  # sage
    "#9d4edd",  # violet
    "#fb8500",  # amber
    "#3d5a80",  # navy
    "#90be6d",  # light green
    "#f4a261",  # peach
    "#577590",  # slate
)

EXTENDED_COLORS = TERRITORY_COLORS + (
    "#bc6c25",  # brown
    "#dda15e",  # tan
    "#606c38",  # olive
    "#283618",  # dark green
)

BLOCKED_COLOR = "#4a4e57"


def territory_color(index: int, palette: Sequence[str] = TERRITORY_COLORS) -> str:
    return palette[index % len(palette)]


def shuffle_colors(rng: random.Random, palette: Sequence[str] = TERRITORY_COLORS) -> List[str]:
    colors = list(palette)
    rng.shuffle(colors)
    return colors


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    color = color.lstrip("#")
    return tuple(int(color[i : i + 2], 16) for i in (0, 2, 4))


def contrast_color(color: str) -> str:
    """Black or white, whichever reads better on ``color``."""
    r, g, b = _hex_to_rgb(color)
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#ffffff"
