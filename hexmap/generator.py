"""Organic territory generation on a rectangular hex grid.

A run blocks a random share of tiles, scatters one seed per territory,
grows territories one hex per round from randomized frontiers, and then
repairs the partition: leftover tiles go to the smallest adjacent
territory (or become blocked), undersized territories merge into a
neighbour, and every region cut off from the main landmass is blocked.

During a run territories are plain hex lists held in slots; a slot index
never changes. Empty slots are dropped and public ids ``0..N-1`` are
assigned once, when the final ``Territory`` objects are built.
"""

from __future__ import annotations

import math
import random
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Sequence, Set, Tuple

from .colors import TERRITORY_COLORS, shuffle_colors
from .config import MapGeneratorConfig
from .hex import Hex, generate_hex_grid, hex_key, hex_neighbors, offset_distance
from .territory import (
    Territory,
    TerritoryStats,
    calculate_territory_neighbors,
    create_territory,
    find_territory_by_hex,
    territory_stats,
)

LogFn = Callable[[str], None]

SEED_MIN_SPACING = 2


@dataclass(frozen=True)
class GeneratedMap:
    territories: List[Territory]
    all_hexes: List[Hex]
    empty_hexes: FrozenSet[str]
    config: MapGeneratorConfig

    def territory_at(self, h: Hex) -> Territory | None:
        return find_territory_by_hex(self.territories, h)

    def is_blocked(self, h: Hex) -> bool:
        return hex_key(h) in self.empty_hexes

    def stats(self) -> TerritoryStats:
        return territory_stats(self.territories)


def select_blocked_hexes(hexes: Sequence[Hex], percent: float, rng: random.Random) -> List[Hex]:
    """Pick exactly ``floor(len(hexes) * percent / 100)`` hexes at random."""
    count = math.floor(len(hexes) * percent / 100)
    if count <= 0:
        return []
    shuffled = list(hexes)
    rng.shuffle(shuffled)
    return shuffled[:count]


def place_seed_points(
    hexes: Sequence[Hex],
    count: int,
    rng: random.Random,
    *,
    min_spacing: int = SEED_MIN_SPACING,
) -> List[Hex]:
    """Choose up to ``count`` distinct, preferably well-spaced seed hexes.

    A candidate is spaced when its offset distance to every accepted seed is
    at least ``2 * min_spacing``. Slots the spaced pass cannot fill are
    topped up from the same shuffled order, ignoring spacing.
    """
    shuffled = list(hexes)
    rng.shuffle(shuffled)
    seeds: List[Hex] = []
    used: Set[Hex] = set()
    threshold = min_spacing * 2

    for candidate in shuffled:
        if len(seeds) >= count:
            break
        if all(offset_distance(candidate, seed) >= threshold for seed in seeds):
            seeds.append(candidate)
            used.add(candidate)

    for candidate in shuffled:
        if len(seeds) >= count:
            break
        if candidate not in used:
            seeds.append(candidate)
            used.add(candidate)

    return seeds


def _ownership(regions: Sequence[Sequence[Hex]]) -> Dict[Hex, int]:
    owner: Dict[Hex, int] = {}
    for index, region in enumerate(regions):
        for h in region:
            owner[h] = index
    return owner


def region_neighbors(regions: Sequence[Sequence[Hex]]) -> List[Set[int]]:
    """Slot-level adjacency: indices of the regions touching each region."""
    owner = _ownership(regions)
    neighbors: List[Set[int]] = [set() for _ in regions]
    for index, region in enumerate(regions):
        for h in region:
            for neighbor in hex_neighbors(h):
                other = owner.get(neighbor)
                if other is not None and other != index:
                    neighbors[index].add(other)
    return neighbors


def _initial_frontier(region: Sequence[Hex], unclaimed: Mapping[Hex, None]) -> Dict[Hex, None]:
    frontier: Dict[Hex, None] = {}
    for h in region:
        for neighbor in hex_neighbors(h):
            if neighbor in unclaimed:
                frontier[neighbor] = None
    return frontier


def grow_territories(
    regions: List[List[Hex]],
    unclaimed: Dict[Hex, None],
    *,
    max_size: int,
    max_rounds: int,
    rng: random.Random,
) -> Tuple[int, str]:
    """Grow every region by at most one frontier hex per round.

    ``unclaimed`` holds the passable hexes no region owns yet and is
    consumed in place. Returns the number of rounds played and why growth
    stopped.
    """
    frontiers = [_initial_frontier(region, unclaimed) for region in regions]
    rounds = 0

    while unclaimed:
        if rounds >= max_rounds:
            return rounds, "round budget exhausted"
        if all(len(region) >= max_size for region in regions):
            return rounds, "all territories at max size"
        if not any(frontiers[i] and len(regions[i]) < max_size for i in range(len(regions))):
            return rounds, "no territory can grow"

        rounds += 1
        order = list(range(len(regions)))
        rng.shuffle(order)

        for index in order:
            region = regions[index]
            frontier = frontiers[index]
            if len(region) >= max_size or not frontier:
                continue

            chosen = rng.choice(list(frontier))
            del frontier[chosen]
            # Claimed by another region earlier this round.
            if chosen not in unclaimed:
                continue

            region.append(chosen)
            del unclaimed[chosen]

            for neighbor in hex_neighbors(chosen):
                if neighbor in unclaimed:
                    frontier[neighbor] = None
            for stale in [h for h in frontier if h not in unclaimed]:
                del frontier[stale]

    return rounds, "all hexes claimed"


def assign_unclaimed_hexes(
    regions: List[List[Hex]],
    unclaimed: Sequence[Hex],
    *,
    max_size: int,
) -> List[Hex]:
    """Hand leftover hexes to the smallest adjacent region below ``max_size``.

    Returns the hexes no region could take; the caller blocks them.
    """
    owner = _ownership(regions)
    blocked: List[Hex] = []
    for h in unclaimed:
        candidates = []
        for neighbor in hex_neighbors(h):
            index = owner.get(neighbor)
            if index is not None and len(regions[index]) < max_size:
                candidates.append(index)
        if not candidates:
            blocked.append(h)
            continue
        # min() keeps the first of equally small candidates.
        smallest = min(candidates, key=lambda i: len(regions[i]))
        regions[smallest].append(h)
        owner[h] = smallest
    return blocked


def merge_small_territories(
    regions: List[List[Hex]],
    *,
    min_size: int,
    max_size: int,
) -> int:
    """Fold each undersized region into its smallest neighbour that stays within ``max_size``.

    Single pass over the adjacency computed before the first merge. A region
    absorbed earlier in the pass is empty and never a merge target. Returns
    the number of merges.
    """
    neighbors = region_neighbors(regions)
    merges = 0
    for index, region in enumerate(regions):
        size = len(region)
        if not 0 < size < min_size:
            continue
        eligible = [
            other
            for other in sorted(neighbors[index])
            if regions[other] and len(regions[other]) + size <= max_size
        ]
        if not eligible:
            continue
        target = min(eligible, key=lambda other: len(regions[other]))
        regions[target].extend(region)
        region.clear()
        merges += 1
    return merges


def connected_components(hexes: Sequence[Hex] | Mapping[Hex, Any]) -> List[List[Hex]]:
    """Components of ``hexes`` under hex adjacency, in discovery order."""
    members = hexes if isinstance(hexes, Mapping) else dict.fromkeys(hexes)
    seen: Set[Hex] = set()
    components: List[List[Hex]] = []
    for start in members:
        if start in seen:
            continue
        seen.add(start)
        component = [start]
        queue = deque([start])
        while queue:
            for neighbor in hex_neighbors(queue.popleft()):
                if neighbor in members and neighbor not in seen:
                    seen.add(neighbor)
                    component.append(neighbor)
                    queue.append(neighbor)
        components.append(component)
    return components


def remove_isolated_regions(regions: List[List[Hex]]) -> Tuple[List[Hex], int]:
    """Keep only the largest landmass; return the removed hexes and component count.

    Ties between equally large components go to the one discovered first
    (slot order, then hex order within a slot).
    """
    components = connected_components(_ownership(regions))
    if len(components) <= 1:
        return [], len(components)
    keep = set(max(components, key=len))
    removed: List[Hex] = []
    for region in regions:
        dropped = [h for h in region if h not in keep]
        if dropped:
            region[:] = [h for h in region if h in keep]
            removed.extend(dropped)
    return removed, len(components)


def _build_territories(regions: Sequence[Sequence[Hex]], colors: Sequence[str]) -> List[Territory]:
    territories: List[Territory] = []
    for index, region in enumerate(regions):
        if not region:
            continue
        territory = create_territory(len(territories), colors[index % len(colors)])
        territory.hexes.update(hex_key(h) for h in region)
        territories.append(territory)
    calculate_territory_neighbors(territories)
    return territories


def generate_map(
    config: MapGeneratorConfig | Mapping[str, Any] | None = None,
    *,
    seed: int | None = None,
    rng: random.Random | None = None,
    log_fn: LogFn | None = None,
) -> GeneratedMap:
    """Generate a partition of the configured grid into territories.

    ``rng`` wins over ``seed``; with neither, a fresh unseeded generator is
    used. Never raises for well-formed configuration: impossible requests
    simply yield fewer territories.
    """
    if isinstance(config, MapGeneratorConfig):
        cfg = config
    else:
        cfg = MapGeneratorConfig.from_mapping(config or {})
    rng = rng or random.Random(seed)

    all_hexes = generate_hex_grid(cfg.grid_width, cfg.grid_height)

    blocked = select_blocked_hexes(all_hexes, cfg.clamped_empty_percent, rng)
    empty_hexes = {hex_key(h) for h in blocked}
    if log_fn is not None:
        log_fn(f"Blocked {len(blocked)} of {len(all_hexes)} hexes")

    blocked_set = set(blocked)
    passable = [h for h in all_hexes if h not in blocked_set]
    unclaimed: Dict[Hex, None] = dict.fromkeys(passable)

    colors = shuffle_colors(rng, TERRITORY_COLORS)
    seeds = place_seed_points(passable, cfg.territory_count, rng)
    regions: List[List[Hex]] = []
    for seed_hex in seeds:
        regions.append([seed_hex])
        del unclaimed[seed_hex]
    if log_fn is not None:
        log_fn(f"Placed {len(seeds)} seeds ({max(cfg.territory_count, 0)} requested)")

    rounds, reason = grow_territories(
        regions,
        unclaimed,
        max_size=cfg.max_territory_size,
        max_rounds=2 * cfg.tile_count,
        rng=rng,
    )
    if log_fn is not None:
        log_fn(f"Growth stopped after {rounds} rounds: {reason}; {len(unclaimed)} hexes unclaimed")

    leftover = list(unclaimed)
    newly_blocked = assign_unclaimed_hexes(regions, leftover, max_size=cfg.max_territory_size)
    empty_hexes.update(hex_key(h) for h in newly_blocked)
    if log_fn is not None and leftover:
        log_fn(
            f"Resolved {len(leftover) - len(newly_blocked)} leftover hexes, "
            f"blocked {len(newly_blocked)}"
        )

    merges = merge_small_territories(
        regions,
        min_size=cfg.min_territory_size,
        max_size=cfg.max_territory_size,
    )
    if log_fn is not None and merges:
        log_fn(f"Merged {merges} undersized territories")

    removed, component_count = remove_isolated_regions(regions)
    empty_hexes.update(hex_key(h) for h in removed)
    if log_fn is not None and removed:
        log_fn(f"Blocked {len(removed)} hexes outside the main landmass ({component_count} components)")

    territories = _build_territories(regions, colors)
    if log_fn is not None:
        log_fn(f"Generated {len(territories)} territories")

    return GeneratedMap(
        territories=territories,
        all_hexes=all_hexes,
        empty_hexes=frozenset(empty_hexes),
        config=cfg,
    )


__all__ = [
    "GeneratedMap",
    "SEED_MIN_SPACING",
    "assign_unclaimed_hexes",
    "connected_components",
    "generate_map",
    "grow_territories",
    "merge_small_territories",
    "place_seed_points",
    "region_neighbors",
    "remove_isolated_regions",
    "select_blocked_hexes",
]
