import unittest

from swipe_cube.core import CubeletGrid, Move
from swipe_cube.engine.rotation import SliceRotationEngine
from swipe_cube.logic.gestures import SwipeGesture, interpret_swipe
from swipe_cube.logic.zones import PickHit

FRONT = (0.0, 0.0, 1.0)


def front_hit(x, y):
    return PickHit((float(x), float(y), 1.0), FRONT)


class TestInterpretSwipe(unittest.TestCase):
    def test_same_row_is_horizontal(self):
        self.assertEqual(interpret_swipe(1, 2), Move("y", 1, 1, 300.0))

    def test_same_column_is_vertical(self):
        self.assertEqual(interpret_swipe(1, 4), Move("x", -1, 1, 300.0))

    def test_diagonal_is_rejected(self):
        self.assertIsNone(interpret_swipe(1, 5))

    def test_row_boundary_is_rejected(self):
        self.assertIsNone(interpret_swipe(3, 4))
        self.assertIsNone(interpret_swipe(4, 3))

    def test_invalid_zones_are_rejected(self):
        self.assertIsNone(interpret_swipe(5, 5))
        self.assertIsNone(interpret_swipe(0, 1))
        self.assertIsNone(interpret_swipe(54, 55))

    def test_duration_is_passed_through(self):
        self.assertEqual(interpret_swipe(2, 1, duration_ms=120.0).duration_ms, 120.0)

    def test_front(self):
        self.assertEqual(interpret_swipe(5, 4), Move("y", 0, -1))
        self.assertEqual(interpret_swipe(3, 6), Move("x", 1, 1))

    def test_right(self):
        self.assertEqual(interpret_swipe(14, 15), Move("y", 0, 1))
        self.assertEqual(interpret_swipe(14, 11), Move("z", 0, 1))
        self.assertEqual(interpret_swipe(10, 13), Move("z", 1, -1))

    def test_back(self):
        self.assertEqual(interpret_swipe(19, 20), Move("y", 1, 1))
        self.assertEqual(interpret_swipe(19, 22), Move("x", 1, -1))

    def test_left(self):
        self.assertEqual(interpret_swipe(28, 29), Move("y", 1, 1))
        self.assertEqual(interpret_swipe(28, 31), Move("z", -1, 1))

    def test_top(self):
        self.assertEqual(interpret_swipe(37, 38), Move("z", 1, -1))
        self.assertEqual(interpret_swipe(37, 40), Move("x", -1, -1))

    def test_bottom(self):
        self.assertEqual(interpret_swipe(46, 47), Move("z", -1, 1))
        self.assertEqual(interpret_swipe(54, 53), Move("z", 1, -1))
        self.assertEqual(interpret_swipe(46, 49), Move("x", -1, -1))

    def test_front_swipes_drag_the_touched_piece(self):
        grid = CubeletGrid()
        engine = SliceRotationEngine(grid)

        # Fila del medio, de izquierda a derecha
        piece = grid.at((-1, 0, 1))
        engine.run(interpret_swipe(4, 5))
        self.assertEqual(piece.position, (1, 0, 1))

        # Columna izquierda, hacia abajo
        grid.reset()
        piece = grid.at((-1, 1, 1))
        engine.run(interpret_swipe(1, 4))
        self.assertEqual(piece.position, (-1, -1, 1))


class TestSwipeGesture(unittest.TestCase):
    def test_no_pick_captures_nothing(self):
        g = SwipeGesture()
        self.assertFalse(g.begin(None))
        self.assertFalse(g.active)
        self.assertIsNone(g.update(front_hit(0, 1)))

    def test_one_move_per_drag(self):
        g = SwipeGesture()
        self.assertTrue(g.begin(front_hit(-1, 1)))  # zona 1
        self.assertIsNone(g.update(front_hit(-1, 1)))
        self.assertIsNone(g.update(front_hit(0, 0)))  # diagonal: se sigue esperando
        self.assertTrue(g.active)

        move = g.update(front_hit(0, 1))  # zona 2
        self.assertEqual(move, Move("y", 1, 1))
        self.assertFalse(g.active)
        self.assertIsNone(g.update(front_hit(1, 1)))

    def test_update_without_hit(self):
        g = SwipeGesture()
        g.begin(front_hit(0, 0))
        self.assertIsNone(g.update(None))
        self.assertTrue(g.active)

    def test_cancel(self):
        g = SwipeGesture(duration_ms=50.0)
        g.begin(front_hit(0, 0))
        g.cancel()
        self.assertFalse(g.active)
        self.assertIsNone(g.update(front_hit(1, 0)))


if __name__ == "__main__":
    unittest.main()
