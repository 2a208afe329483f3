from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .generator import GeneratedMap
from .hex import parse_hex_key


def _sorted_keys(keys: Iterable[str]) -> List[str]:
    return sorted(keys, key=lambda key: tuple(reversed(parse_hex_key(key))))


def map_to_dict(game_map: GeneratedMap) -> Dict[str, Any]:
    """JSON-ready view of a map with every collection in a stable order."""
    return {
        "config": game_map.config.to_dict(),
        "all_hexes": [[h.q, h.r] for h in game_map.all_hexes],
        "empty_hexes": _sorted_keys(game_map.empty_hexes),
        "territories": [
            {
                "id": t.id,
                "name": t.name,
                "color": t.color,
                "hexes": _sorted_keys(t.hexes),
                "neighbors": sorted(t.neighbors),
                "owner": t.owner,
                "armies": t.armies,
                "size_class": t.size_class,
            }
            for t in game_map.territories
        ],
    }


def map_to_json(game_map: GeneratedMap) -> str:
    return json.dumps(map_to_dict(game_map), indent=2) + "\n"


def write_map_json(game_map: GeneratedMap, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(map_to_json(game_map), encoding="utf-8")
