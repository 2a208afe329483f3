import unittest

from hexmap.colors import EXTENDED_COLORS, TERRITORY_COLORS, contrast_color, shuffle_colors, territory_color
from hexmap.hex import Hex, hex_key
from hexmap.territory import (
    Territory,
    are_all_territories_connected,
    calculate_territory_neighbors,
    create_territory,
    find_territory_by_hex,
    format_stats,
    get_territory_by_id,
    is_edge_connected,
    territory_stats,
)


def _territory(territory_id: int, *hexes: tuple[int, int]) -> Territory:
    territory = create_territory(territory_id, "#ffffff")
    for q, r in hexes:
        territory.add_hex(Hex(q, r))
    return territory


class TerritoryTests(unittest.TestCase):
    def test_create_defaults(self) -> None:
        territory = create_territory(4, "#123456")
        self.assertEqual(territory.name, "Territory 5")
        self.assertEqual(territory.armies, 1)
        self.assertIsNone(territory.owner)
        self.assertIsNone(territory.size_class)
        self.assertEqual(territory.size, 0)
        self.assertEqual(create_territory(0, "#000000", name="Home").name, "Home")

    def test_hex_membership(self) -> None:
        territory = _territory(0, (0, 0), (1, 0))
        self.assertTrue(territory.contains(Hex(1, 0)))
        self.assertFalse(territory.contains(Hex(2, 0)))
        self.assertEqual(territory.hex_list(), [Hex(0, 0), Hex(1, 0)])

    def test_neighbors_are_symmetric_and_recomputed(self) -> None:
        a = _territory(0, (0, 0), (1, 0))
        b = _territory(1, (2, 0))
        c = _territory(2, (5, 5))
        a.neighbors.add(2)

        calculate_territory_neighbors([a, b, c])

        self.assertEqual(a.neighbors, {1})
        self.assertEqual(b.neighbors, {0})
        self.assertEqual(c.neighbors, set())

    def test_lookup(self) -> None:
        territories = [_territory(0, (0, 0)), _territory(1, (1, 0))]
        self.assertIs(find_territory_by_hex(territories, Hex(1, 0)), territories[1])
        self.assertIsNone(find_territory_by_hex(territories, Hex(9, 9)))
        self.assertIs(get_territory_by_id(territories, 0), territories[0])
        self.assertIsNone(get_territory_by_id(territories, 7))

    def test_territory_graph_connectivity(self) -> None:
        a = _territory(0, (0, 0))
        b = _territory(1, (1, 0))
        c = _territory(2, (4, 4))
        calculate_territory_neighbors([a, b, c])
        self.assertFalse(are_all_territories_connected([a, b, c]))
        self.assertTrue(are_all_territories_connected([a, b]))
        self.assertTrue(are_all_territories_connected([c]))
        self.assertTrue(are_all_territories_connected([]))

    def test_edge_connected(self) -> None:
        self.assertTrue(is_edge_connected([]))
        self.assertTrue(is_edge_connected([hex_key(Hex(0, 0)), hex_key(Hex(1, -1)), hex_key(Hex(1, 0))]))
        self.assertFalse(is_edge_connected([hex_key(Hex(0, 0)), hex_key(Hex(2, 0))]))

    def test_stats(self) -> None:
        empty = territory_stats([])
        self.assertEqual((empty.count, empty.total_hexes, empty.min_size, empty.max_size), (0, 0, 0, 0))

        stats = territory_stats([_territory(0, (0, 0)), _territory(1, (1, 0), (2, 0), (3, 0))])
        self.assertEqual(stats.count, 2)
        self.assertEqual(stats.total_hexes, 4)
        self.assertAlmostEqual(stats.avg_size, 2.0)
        self.assertEqual((stats.min_size, stats.max_size), (1, 3))
        self.assertEqual(format_stats(stats), "2 territories | 4 total hexes | Size range: 1-3 hexes")


class ColorTests(unittest.TestCase):
    def test_palettes(self) -> None:
        self.assertEqual(len(TERRITORY_COLORS), 16)
        self.assertEqual(len(EXTENDED_COLORS), 20)
        self.assertEqual(len(set(EXTENDED_COLORS)), 20)
        self.assertEqual(territory_color(16), TERRITORY_COLORS[0])

    def test_shuffle_is_seeded_permutation(self) -> None:
        import random

        first = shuffle_colors(random.Random(3))
        second = shuffle_colors(random.Random(3))
        self.assertEqual(first, second)
        self.assertEqual(sorted(first), sorted(TERRITORY_COLORS))

    def test_contrast(self) -> None:
        self.assertEqual(contrast_color("#ffffff"), "#000000")
        self.assertEqual(contrast_color("#000000"), "#ffffff")
        self.assertEqual(contrast_color("e9c46a"), "#000000")
        self.assertEqual(contrast_color("#3d5a80"), "#ffffff")


if __name__ == "__main__":
    unittest.main()
