"""Generator configuration and size presets."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Final, Mapping

MAX_EMPTY_TILE_PERCENT = 50


def clamp_empty_percent(percent: float) -> float:
    if math.isnan(percent):
        return 0
    return max(0, min(MAX_EMPTY_TILE_PERCENT, percent))


@dataclass(frozen=True)
class MapGeneratorConfig:
    grid_width: int = 18
    grid_height: int = 12
    territory_count: int = 15
    min_territory_size: int = 3
    max_territory_size: int = 7
    empty_tile_percent: float = 10

    @property
    def clamped_empty_percent(self) -> float:
        return clamp_empty_percent(self.empty_tile_percent)

    @property
    def tile_count(self) -> int:
        return max(0, self.grid_width) * max(0, self.grid_height)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        base: "MapGeneratorConfig | None" = None,
    ) -> "MapGeneratorConfig":
        """Overlay ``data`` on ``base`` (the defaults when omitted)."""
        return resolve_config(base, **dict(data))


DEFAULT_CONFIG: Final[MapGeneratorConfig] = MapGeneratorConfig()

MAP_SIZES: Final[Dict[str, MapGeneratorConfig]] = {
    "small": MapGeneratorConfig(
        grid_width=10,
        grid_height=8,
        territory_count=8,
        min_territory_size=3,
        empty_tile_percent=10,
    ),
    "medium": MapGeneratorConfig(
        grid_width=18,
        grid_height=12,
        territory_count=15,
        min_territory_size=4,
        empty_tile_percent=10,
    ),
    "large": MapGeneratorConfig(
        grid_width=26,
        grid_height=16,
        territory_count=24,
        min_territory_size=5,
        empty_tile_percent=10,
    ),
}

_FIELD_NAMES = tuple(f.name for f in fields(MapGeneratorConfig))


def _coerce(name: str, value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    if name == "empty_tile_percent":
        return value
    return int(value)


def resolve_config(config: MapGeneratorConfig | None = None, **overrides: Any) -> MapGeneratorConfig:
    """Merge partial overrides over ``config`` (or the defaults)."""
    base = config if config is not None else DEFAULT_CONFIG
    unknown = sorted(set(overrides) - set(_FIELD_NAMES))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    values = {name: _coerce(name, value) for name, value in overrides.items() if value is not None}
    return replace(base, **values)


__all__ = [
    "DEFAULT_CONFIG",
    "MAP_SIZES",
    "MAX_EMPTY_TILE_PERCENT",
    "MapGeneratorConfig",
    "clamp_empty_percent",
    "resolve_config",
]
