import unittest

import numpy as np

from connectfour.game.board import Board
from connectfour.game.win import check_win, find_winning_line, line_from, winners
from connectfour.utils import Direction


def board_with(cells, player_id=1, height=6, width=7):
    board = Board(height, width)
    for row, col in cells:
        board.grid[row, col] = player_id
    return board


class TestWinDetection(unittest.TestCase):
    def test_horizontal_bottom_row_win(self):
        board = board_with([(5, 0), (5, 1), (5, 2), (5, 3)])
        self.assertTrue(check_win(board, 1))
        self.assertFalse(check_win(board, 2))
        self.assertEqual(find_winning_line(board, 1), [(5, 0), (5, 1), (5, 2), (5, 3)])

    def test_vertical_win(self):
        board = board_with([(5, 0), (4, 0), (3, 0), (2, 0)], player_id=2)
        self.assertTrue(check_win(board, 2))
        self.assertEqual(find_winning_line(board, 2), [(2, 0), (3, 0), (4, 0), (5, 0)])

    def test_diagonal_down_right_win(self):
        board = board_with([(0, 0), (1, 1), (2, 2), (3, 3)])
        self.assertTrue(check_win(board, 1))

    def test_diagonal_down_left_win(self):
        board = board_with([(2, 6), (3, 5), (4, 4), (5, 3)])
        self.assertTrue(check_win(board, 1))
        self.assertEqual(find_winning_line(board, 1), [(2, 6), (3, 5), (4, 4), (5, 3)])

    def test_three_in_a_row_is_not_a_win(self):
        for cells in ([(5, 0), (5, 1), (5, 2)],
                      [(5, 6), (4, 6), (3, 6)],
                      [(5, 0), (4, 1), (3, 2)]):
            with self.subTest(cells=cells):
                self.assertFalse(check_win(board_with(cells), 1))

    def test_broken_line_is_not_a_win(self):
        board = board_with([(5, 0), (5, 1), (5, 3), (5, 4)])
        board.grid[5, 2] = 2
        self.assertFalse(check_win(board, 1))
        self.assertFalse(check_win(board, 2))

    def test_lines_do_not_wrap_around_edges(self):
        board = board_with([(4, 4), (4, 5), (4, 6), (5, 0)])
        self.assertFalse(check_win(board, 1))
        board = board_with([(2, 2), (3, 1), (4, 0), (5, 6)])
        self.assertFalse(check_win(board, 1))

    def test_last_move_only_checks_lines_through_that_cell(self):
        board = board_with([(5, 0), (5, 1), (5, 2), (5, 3), (0, 6)])
        self.assertFalse(check_win(board, 1, last_move=(0, 6)))
        for col in range(4):
            self.assertTrue(check_win(board, 1, last_move=(5, col)))

    def test_last_move_in_middle_of_line(self):
        board = board_with([(3, 1), (3, 2), (3, 3), (3, 4), (3, 5)])
        self.assertIsNotNone(find_winning_line(board, 1, last_move=(3, 3)))
        self.assertTrue(check_win(board, 1, last_move=(3, 5)))

    def test_detection_does_not_mutate_board(self):
        board = board_with([(5, 0), (5, 1), (5, 2), (5, 3)])
        before = board.get_state()
        check_win(board, 1)
        check_win(board, 2, last_move=(5, 0))
        np.testing.assert_array_equal(board.grid, before)

    def test_works_on_non_standard_board_sizes(self):
        board = board_with([(0, 0), (0, 1), (0, 2), (0, 3)], height=1, width=4)
        self.assertTrue(check_win(board, 1))
        self.assertFalse(check_win(board_with([(0, 0), (1, 0), (2, 0)], height=3, width=1), 1))

    def test_winners_reports_every_player_with_a_line(self):
        board = board_with([(5, 0), (5, 1), (5, 2), (5, 3)])
        for row in range(4):
            board.grid[row, 6] = 2
        self.assertEqual(winners(board), [1, 2])
        self.assertEqual(winners(Board(6, 7)), [])

    def test_line_from_follows_direction(self):
        self.assertEqual(line_from((0, 3), Direction.DIAGONAL_DOWN_LEFT),
                         [(0, 3), (1, 2), (2, 1), (3, 0)])
        self.assertEqual(line_from((2, 2), Direction.VERTICAL, length=2), [(2, 2), (3, 2)])


class TestWinSymmetry(unittest.TestCase):
    def test_detection_is_symmetric_under_mirroring_and_row_reversal(self):
        rng = np.random.default_rng(1234)
        for _ in range(200):
            grid = rng.integers(0, 3, size=(6, 7))
            board = Board.from_grid(grid)
            mirrored = Board.from_grid(np.fliplr(grid))
            flipped = Board.from_grid(np.flipud(grid))
            for player_id in (1, 2):
                expected = check_win(board, player_id)
                self.assertEqual(check_win(mirrored, player_id), expected)
                self.assertEqual(check_win(flipped, player_id), expected)

    def test_local_and_full_scan_agree_for_every_cell_of_a_line(self):
        rng = np.random.default_rng(99)
        for _ in range(200):
            grid = rng.integers(0, 3, size=(6, 7))
            board = Board.from_grid(grid)
            for player_id in (1, 2):
                local_any = any(check_win(board, player_id, last_move=cell)
                                for cell in board.occupied_cells(player_id))
                self.assertEqual(local_any, check_win(board, player_id))


if __name__ == '__main__':
    unittest.main()
