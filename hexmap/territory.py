from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .hex import Hex, hex_key, hex_neighbors, parse_hex_key


def territory_name(territory_id: int) -> str:
    return f"Territory {territory_id + 1}"


@dataclass
class Territory:
    """A contiguous region of hexes.

    ``neighbors`` is derived by ``calculate_territory_neighbors`` and never
    edited by hand. ``owner``, ``armies`` and ``size_class`` belong to the
    game layer; generation never reads them.
    """

    id: int
    name: str
    color: str
    hexes: Set[str] = field(default_factory=set)
    neighbors: Set[int] = field(default_factory=set)
    owner: Optional[int] = None
    armies: int = 1
    size_class: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.hexes)

    def add_hex(self, h: Hex) -> None:
        self.hexes.add(hex_key(h))

    def contains(self, h: Hex) -> bool:
        return hex_key(h) in self.hexes

    def hex_list(self) -> List[Hex]:
        return sorted((parse_hex_key(key) for key in self.hexes), key=lambda h: (h.r, h.q))


@dataclass(frozen=True)
class TerritoryStats:
    count: int
    total_hexes: int
    avg_size: float
    min_size: int
    max_size: int


def create_territory(territory_id: int, color: str, name: str | None = None) -> Territory:
    return Territory(id=territory_id, name=name or territory_name(territory_id), color=color)


def calculate_territory_neighbors(territories: Iterable[Territory]) -> None:
    """Recompute every territory's neighbour set from hex ownership."""
    territories = list(territories)
    owner_by_hex: Dict[str, int] = {}
    for territory in territories:
        for key in territory.hexes:
            owner_by_hex[key] = territory.id

    for territory in territories:
        territory.neighbors.clear()

    for territory in territories:
        for key in territory.hexes:
            for neighbor in hex_neighbors(parse_hex_key(key)):
                other = owner_by_hex.get(hex_key(neighbor))
                if other is not None and other != territory.id:
                    territory.neighbors.add(other)


def find_territory_by_hex(territories: Iterable[Territory], h: Hex) -> Territory | None:
    key = hex_key(h)
    for territory in territories:
        if key in territory.hexes:
            return territory
    return None


def get_territory_by_id(territories: Iterable[Territory], territory_id: int) -> Territory | None:
    for territory in territories:
        if territory.id == territory_id:
            return territory
    return None


def are_all_territories_connected(territories: List[Territory]) -> bool:
    """True when the territory neighbour graph has a single component."""
    if len(territories) <= 1:
        return True
    by_id = {t.id: t for t in territories}
    start = territories[0].id
    seen = {start}
    queue = deque([start])
    while queue:
        current = by_id.get(queue.popleft())
        if current is None:
            continue
        for neighbor_id in current.neighbors:
            if neighbor_id not in seen:
                seen.add(neighbor_id)
                queue.append(neighbor_id)
    return len(seen) == len(territories)


def is_edge_connected(keys: Iterable[str]) -> bool:
    """True when the hexes form one region under hex adjacency."""
    remaining = set(keys)
    if not remaining:
        return True
    start = next(iter(remaining))
    seen = {start}
    queue = deque([start])
    while queue:
        for neighbor in hex_neighbors(parse_hex_key(queue.popleft())):
            key = hex_key(neighbor)
            if key in remaining and key not in seen:
                seen.add(key)
                queue.append(key)
    return len(seen) == len(remaining)


def territory_stats(territories: List[Territory]) -> TerritoryStats:
    if not territories:
        return TerritoryStats(count=0, total_hexes=0, avg_size=0.0, min_size=0, max_size=0)
    sizes = [t.size for t in territories]
    total = sum(sizes)
    return TerritoryStats(
        count=len(territories),
        total_hexes=total,
        avg_size=total / len(territories),
        min_size=min(sizes),
        max_size=max(sizes),
    )


def format_stats(stats: TerritoryStats) -> str:
    return (
        f"{stats.count} territories | "
        f"{stats.total_hexes} total hexes | "
        f"Size range: {stats.min_size}-{stats.max_size} hexes"
    )
