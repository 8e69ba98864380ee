import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame

from blockfall.game import Action, Variant
from blockfall.visualization.human_play import KEY_TO_ACTION, PygameListener
from blockfall.visualization.renderer import PALETTE, Renderer, color_for_value, rgb_array, to_screen_rows


class TestRenderer(unittest.TestCase):

    def test_every_variant_has_a_colour(self):
        self.assertEqual(set(PALETTE), set(Variant))
        self.assertEqual(len(set(PALETTE.values())), len(Variant))

    def test_falling_piece_uses_locked_colour(self):
        for variant in Variant:
            self.assertEqual(color_for_value(-int(variant)), color_for_value(int(variant)))

    def test_rows_are_flipped_for_screen(self):
        state = np.zeros((4, 3), dtype=np.int8)
        state[0, 1] = int(Variant.T)
        rows = to_screen_rows(state)
        self.assertEqual(rows[3, 1], int(Variant.T))
        self.assertEqual(rows[0, 1], 0)

    def test_rgb_array_draws_floor_at_bottom(self):
        state = np.zeros((22, 10), dtype=np.int8)
        state[0, 0] = int(Variant.S)
        img = rgb_array(state, cell=2)
        self.assertEqual(tuple(img[-1, 0]), PALETTE[Variant.S])
        self.assertEqual(tuple(img[0, 0]), (0, 0, 0))

    def test_window_size(self):
        renderer = Renderer(cell_size=20, status_height=30, button_height=40)
        self.assertEqual(renderer.window_size(10, 22), (200, 30 + 440 + 40))

    def test_draw_board_inverts_rows(self):
        renderer = Renderer(cell_size=10, status_height=0, button_height=0)
        surface = pygame.Surface(renderer.window_size(10, 22))
        state = np.zeros((22, 10), dtype=np.int8)
        state[0, 2] = -int(Variant.L)
        renderer.draw_board(surface, state)
        center = renderer.cell_rect(2, 21).center
        self.assertEqual(tuple(surface.get_at(center))[:3], PALETTE[Variant.L])
        empty = renderer.cell_rect(2, 0).center
        self.assertEqual(tuple(surface.get_at(empty))[:3], (0, 0, 0))

    def test_button_layout(self):
        renderer = Renderer()
        renderer.layout_buttons(10, 22)
        self.assertFalse(renderer.pause_button.colliderect(renderer.quit_button))
        _, height = renderer.window_size(10, 22)
        self.assertLessEqual(renderer.pause_button.bottom, height)


class TestHumanPlayWiring(unittest.TestCase):

    def test_key_bindings(self):
        self.assertEqual(KEY_TO_ACTION[pygame.K_LEFT], Action.LEFT)
        self.assertEqual(KEY_TO_ACTION[pygame.K_RIGHT], Action.RIGHT)
        self.assertEqual(KEY_TO_ACTION[pygame.K_DOWN], Action.ROTATE_RIGHT)
        self.assertEqual(KEY_TO_ACTION[pygame.K_UP], Action.ROTATE_LEFT)
        self.assertEqual(KEY_TO_ACTION[pygame.K_SPACE], Action.HARD_DROP)
        self.assertEqual(KEY_TO_ACTION[pygame.K_d], Action.SOFT_DROP)
        self.assertEqual(KEY_TO_ACTION[pygame.K_p], Action.PAUSE)

    def test_listener_tracks_status(self):
        listener = PygameListener()
        listener.dirty = False
        listener.on_status("paused")
        self.assertTrue(listener.dirty)
        self.assertEqual(listener.status_text, "paused")
        listener.dirty = False
        listener.on_repaint()
        self.assertTrue(listener.dirty)


if __name__ == '__main__':
    unittest.main()
