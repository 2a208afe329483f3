"""PNG preview of a generated map."""

from __future__ import annotations

import io
import os
from typing import Dict, List, Mapping, Tuple

# Ensure matplotlib uses a writable config dir
os.environ.setdefault("MPLCONFIGDIR", "/tmp/mpl")

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection
from matplotlib.patches import Polygon

from .colors import BLOCKED_COLOR, contrast_color
from .generator import GeneratedMap
from .hex import (
    HEX_DIRECTIONS,
    HEX_SIZE,
    edge_corner_indices,
    hex_bounds,
    hex_corners,
    hex_key,
    hex_to_pixel,
    parse_hex_key,
)
from .territory import Territory

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


def territory_border_segments(
    territory: Territory,
    size: float = HEX_SIZE,
    owners: Mapping[str, int] | None = None,
) -> List[Segment]:
    """Hex edges of ``territory`` that leave it.

    With ``owners`` (hex key to territory id), an edge shared with a
    lower-id territory is left to that territory so it is drawn once.
    """
    segments: List[Segment] = []
    for h in territory.hex_list():
        corners = hex_corners(hex_to_pixel(h, size), size)
        for direction, step in enumerate(HEX_DIRECTIONS):
            neighbor = hex_key((h.q + step.q, h.r + step.r))
            if neighbor in territory.hexes:
                continue
            if owners is not None and owners.get(neighbor, territory.id) < territory.id:
                continue
            a, b = edge_corner_indices(direction)
            segments.append((tuple(corners[a]), tuple(corners[b])))
    return segments


def render_map_png(
    game_map: GeneratedMap,
    *,
    hex_size: float = HEX_SIZE,
    padding: float = 20.0,
    show_labels: bool = True,
    dpi: int = 100,
) -> bytes:
    bounds = hex_bounds(game_map.all_hexes, hex_size)
    width_px = max(bounds.width + padding * 2, 1.0)
    height_px = max(bounds.height + padding * 2, 1.0)

    fig, ax = plt.subplots(figsize=(width_px / dpi, height_px / dpi), dpi=dpi)
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
    ax.set_aspect("equal")
    owners: Dict[str, int] = {key: t.id for t in game_map.territories for key in t.hexes}

    for key in sorted(game_map.empty_hexes):
        corners = np.array(hex_corners(hex_to_pixel(parse_hex_key(key), hex_size), hex_size))
        ax.add_patch(Polygon(corners, closed=True, facecolor=BLOCKED_COLOR, edgecolor="#2b2d33", linewidth=0.6))

    for territory in game_map.territories:
        hexes = territory.hex_list()
        centers = np.array([hex_to_pixel(h, hex_size) for h in hexes])
        for center in centers:
            corners = np.array(hex_corners(tuple(center), hex_size))
            ax.add_patch(
                Polygon(
                    corners,
                    closed=True,
                    facecolor=territory.color,
                    edgecolor=territory.color,
                    linewidth=0.4,
                )
            )
        ax.add_collection(
            LineCollection(territory_border_segments(territory, hex_size, owners), colors="#1d1d1f", linewidths=1.6)
        )
        if show_labels and len(centers):
            cx, cy = centers.mean(axis=0)
            ax.text(
                cx,
                cy,
                str(territory.id + 1),
                ha="center",
                va="center",
                fontsize=max(6, int(hex_size / 3)),
                color=contrast_color(territory.color),
            )

    ax.set_xlim(bounds.min_x - padding, bounds.max_x + padding)
    # Pixel space grows downwards.
    ax.set_ylim(bounds.max_y + padding, bounds.min_y - padding)
    ax.axis("off")

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, facecolor="white")
    plt.close(fig)
    return buf.getvalue()
