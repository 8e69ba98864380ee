import random
import unittest

from blockfall.game.pieces import BASE_CELLS, PLAYABLE_VARIANTS, Piece, Variant, spawn_random


class ScriptedChoice:
    def __init__(self, picks):
        self.picks = list(picks)
        self.calls = 0

    def choice(self, seq):
        pick = self.picks[self.calls % len(self.picks)]
        assert pick in seq
        self.calls += 1
        return pick


class TestPieces(unittest.TestCase):

    def test_canonical_layouts(self):
        expected = {
            Variant.Z: ((0, -1), (0, 0), (-1, 0), (-1, 1)),
            Variant.S: ((0, -1), (0, 0), (1, 0), (1, 1)),
            Variant.I: ((0, -1), (0, 0), (0, 1), (0, 2)),
            Variant.T: ((-1, 0), (0, 0), (1, 0), (0, 1)),
            Variant.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
            Variant.L: ((-1, -1), (0, -1), (0, 0), (0, 1)),
            Variant.J: ((1, -1), (0, -1), (0, 0), (0, 1)),
        }
        for variant, cells in expected.items():
            piece = Piece.of(variant)
            self.assertEqual(piece.variant, variant)
            self.assertEqual(piece.cells, cells)

    def test_empty_piece(self):
        piece = Piece()
        self.assertTrue(piece.is_empty)
        self.assertEqual(piece.variant, Variant.NONE)
        self.assertEqual(piece.cells, ((0, 0),) * 4)
        self.assertEqual(Piece.of(Variant.NONE), piece)

    def test_piece_always_has_four_cells(self):
        with self.assertRaises(ValueError):
            Piece(Variant.T, ((0, 0), (1, 0), (2, 0)))
        for variant in Variant:
            self.assertEqual(len(BASE_CELLS[variant]), 4)

    def test_rotate_left_transform(self):
        t = Piece.of(Variant.T)
        rotated = t.rotate_left()
        self.assertEqual(rotated.variant, Variant.T)
        self.assertEqual(rotated.cells, ((0, 1), (0, 0), (0, -1), (1, 0)))
        # Rotation builds a new value, the original is untouched
        self.assertEqual(t.cells, BASE_CELLS[Variant.T])

    def test_rotate_right_transform(self):
        t = Piece.of(Variant.T)
        self.assertEqual(t.rotate_right().cells, ((0, -1), (0, 0), (0, 1), (-1, 0)))

    def test_rotation_round_trip(self):
        for variant in PLAYABLE_VARIANTS:
            piece = Piece.of(variant)
            self.assertEqual(piece.rotate_left().rotate_right(), piece)
            self.assertEqual(piece.rotate_right().rotate_left(), piece)

    def test_four_turns_return_to_start(self):
        for variant in PLAYABLE_VARIANTS:
            piece = Piece.of(variant)
            turned = piece
            for _ in range(4):
                turned = turned.rotate_right()
            self.assertEqual(turned, piece)

    def test_square_never_rotates(self):
        o = Piece.of(Variant.O)
        self.assertIs(o.rotate_left(), o)
        self.assertIs(o.rotate_right(), o)
        self.assertIs(o.rotate_left().rotate_left().rotate_right(), o)

    def test_min_offsets(self):
        self.assertEqual(Piece.of(Variant.I).min_y(), -1)
        self.assertEqual(Piece.of(Variant.I).min_x(), 0)
        self.assertEqual(Piece.of(Variant.L).min_x(), -1)
        self.assertEqual(Piece.of(Variant.L).min_y(), -1)
        self.assertEqual(Piece.of(Variant.O).min_y(), 0)
        self.assertEqual(Piece.of(Variant.T).min_x(), -1)

    def test_cells_at_subtracts_vertical_offset(self):
        cells = Piece.of(Variant.I).cells_at(5, 10)
        self.assertEqual(cells, [(5, 11), (5, 10), (5, 9), (5, 8)])

    def test_spawn_random_uses_source(self):
        source = ScriptedChoice([Variant.J, Variant.S])
        self.assertEqual(spawn_random(source), Piece.of(Variant.J))
        self.assertEqual(spawn_random(source), Piece.of(Variant.S))
        self.assertEqual(source.calls, 2)

    def test_spawn_random_covers_playable_variants(self):
        rng = random.Random(1234)
        seen = {spawn_random(rng).variant for _ in range(500)}
        self.assertEqual(seen, set(PLAYABLE_VARIANTS))
        self.assertNotIn(Variant.NONE, seen)


if __name__ == '__main__':
    unittest.main()
