"""Hex territory map generation."""

from .config import DEFAULT_CONFIG, MAP_SIZES, MapGeneratorConfig, resolve_config
from .export import map_to_dict, write_map_json
from .generator import GeneratedMap, generate_map
from .hex import (
    HEX_SIZE,
    Hex,
    Point,
    generate_hex_grid,
    hex_corners,
    hex_distance,
    hex_key,
    hex_neighbors,
    hex_round,
    hex_to_pixel,
    parse_hex_key,
    pixel_to_hex,
)
from .territory import Territory, calculate_territory_neighbors, territory_stats

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "GeneratedMap",
    "HEX_SIZE",
    "Hex",
    "MAP_SIZES",
    "MapGeneratorConfig",
    "Point",
    "Territory",
    "calculate_territory_neighbors",
    "generate_hex_grid",
    "generate_map",
    "hex_corners",
    "hex_distance",
    "hex_key",
    "hex_neighbors",
    "hex_round",
    "hex_to_pixel",
    "map_to_dict",
    "parse_hex_key",
    "pixel_to_hex",
    "render_map_png",
    "resolve_config",
    "territory_stats",
    "write_map_json",
]


def __getattr__(name: str):
    if name == "render_map_png":
        from .render import render_map_png

        return render_map_png
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
