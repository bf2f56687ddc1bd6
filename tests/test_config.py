import unittest

from connectfour.config import DEFAULT_COLS, DEFAULT_ROWS, GameConfig
from connectfour.debug import DebugLevel
from connectfour.errors import InvalidDimensionsError
from connectfour.game.player import Player, make_player, make_players


class TestGameConfig(unittest.TestCase):
    def test_defaults(self):
        config = GameConfig()
        self.assertEqual((config.rows, config.cols), (DEFAULT_ROWS, DEFAULT_COLS))
        self.assertEqual((config.player1_color, config.player2_color), ("red", "yellow"))
        self.assertIs(config.validate(), config)

    def test_from_env_reads_prefixed_variables(self):
        config = GameConfig.from_env({
            "CONNECTFOUR_ROWS": "5",
            "CONNECTFOUR_COLS": "8",
            "CONNECTFOUR_COLOR1": "blue",
            "CONNECTFOUR_DEBUG_LEVEL": "Debug",
            "CONNECTFOUR_LOG_FILE": "/tmp/c4.log",
        })
        self.assertEqual((config.rows, config.cols), (5, 8))
        self.assertEqual(config.player1_color, "blue")
        self.assertEqual(config.player2_color, "yellow")
        self.assertEqual(config.debug_level, DebugLevel.DEBUG)
        self.assertEqual(config.log_file, "/tmp/c4.log")

    def test_from_env_with_nothing_set_gives_defaults(self):
        self.assertEqual(GameConfig.from_env({}), GameConfig())

    def test_from_env_rejects_bad_values(self):
        with self.assertRaises(ValueError):
            GameConfig.from_env({"CONNECTFOUR_ROWS": "six"})
        with self.assertRaises(ValueError):
            GameConfig.from_env({"CONNECTFOUR_DEBUG_LEVEL": "loud"})

    def test_validate_rejects_non_positive_dimensions(self):
        for rows, cols in [(0, 7), (6, -1), (True, 7)]:
            with self.subTest(rows=rows, cols=cols):
                with self.assertRaises(InvalidDimensionsError):
                    GameConfig(rows=rows, cols=cols).validate()

    def test_with_overrides_ignores_none(self):
        config = GameConfig().with_overrides(rows=4, cols=None, player2_color="green")
        self.assertEqual((config.rows, config.cols, config.player2_color), (4, 7, "green"))


class TestPlayers(unittest.TestCase):
    def test_player_is_immutable_value(self):
        player = Player(1, "red")
        self.assertEqual(player, Player(1, "red"))
        with self.assertRaises(Exception):
            player.color = "blue"
        self.assertEqual(str(player), "Player 1 (red)")
        self.assertEqual(str(Player(2)), "Player 2")

    def test_player_id_must_be_one_or_two(self):
        for player_id in (0, 3, "1", True, False):
            with self.assertRaises(ValueError):
                Player(player_id)

    def test_make_player_accepts_several_attribute_forms(self):
        self.assertEqual(make_player(1, "blue"), Player(1, "blue"))
        self.assertEqual(make_player(2, {"color": "green"}), Player(2, "green"))
        self.assertEqual(make_player(2, None, "yellow"), Player(2, "yellow"))
        self.assertEqual(make_player(1, "  ", "red"), Player(1, "red"))
        with self.assertRaises(ValueError):
            make_player(1, 42)

    def test_make_players_allows_missing_colors(self):
        self.assertEqual(make_players(), (Player(1), Player(2)))


if __name__ == '__main__':
    unittest.main()
