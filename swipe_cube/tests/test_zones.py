import itertools
import unittest

from swipe_cube.logic.zones import PickHit, zone_face, zone_for, zone_for_hit, zone_row_col

NORMALS = [(1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)]


def exposed_normals(position):
    for n in NORMALS:
        i = [abs(v) for v in n].index(1)
        if position[i] == n[i]:
            yield n


class TestZones(unittest.TestCase):
    def test_54_distinct_zones(self):
        zones = []
        for position in itertools.product((-1, 0, 1), repeat=3):
            for n in exposed_normals(position):
                zones.append(zone_for(position, n))
        self.assertEqual(len(zones), 54)
        self.assertEqual(sorted(zones), list(range(1, 55)))

    def test_face_blocks(self):
        self.assertEqual(zone_for((-1, 1, 1), (0, 0, 1)), 1)
        self.assertEqual(zone_for((1, -1, 1), (0, 0, 1)), 9)
        self.assertEqual(zone_for((1, 1, 1), (1, 0, 0)), 10)
        self.assertEqual(zone_for((1, 1, -1), (0, 0, -1)), 19)
        self.assertEqual(zone_for((-1, 1, -1), (-1, 0, 0)), 28)
        self.assertEqual(zone_for((-1, 1, 1), (0, 1, 0)), 37)
        self.assertEqual(zone_for((-1, -1, -1), (0, -1, 0)), 46)

    def test_rows_grow_downward_on_side_faces(self):
        top = zone_for((0, 1, 1), (0, 0, 1))
        bottom = zone_for((0, -1, 1), (0, 0, 1))
        self.assertEqual(zone_row_col(top), (0, 1))
        self.assertEqual(zone_row_col(bottom), (2, 1))

    def test_non_axis_normal_has_no_zone(self):
        self.assertIsNone(zone_for((1, 1, 1), (0, 0, 0)))
        self.assertIsNone(zone_for((1, 1, 1), (0.3, 0.3, 0.3)))

    def test_zone_for_hit_rounds_inputs(self):
        hit = PickHit((0.98, 1.02, 0.99), (0.0, 0.9999, 0.0))
        self.assertEqual(zone_for_hit(hit), 39)
        self.assertIsNone(zone_for_hit(None))

    def test_face_and_row_col(self):
        self.assertEqual(zone_face(1), 1)
        self.assertEqual(zone_face(9), 1)
        self.assertEqual(zone_face(10), 2)
        self.assertEqual(zone_face(54), 6)
        self.assertEqual(zone_row_col(5), (1, 1))
        self.assertEqual(zone_row_col(27), (2, 2))


if __name__ == "__main__":
    unittest.main()
