import logging
import os
import tempfile
import unittest

from connectfour.debug import TRACE, DebugLevel, DebugManager, parse_level


class TestDebugManager(unittest.TestCase):
    def setUp(self):
        self.manager = DebugManager(name="connectfour.tests", level=DebugLevel.DEBUG)

    def test_parse_level(self):
        self.assertEqual(parse_level("trace"), DebugLevel.TRACE)
        self.assertEqual(parse_level(" Warning "), DebugLevel.WARNING)
        with self.assertRaises(ValueError):
            parse_level("verbose")

    def test_messages_below_level_are_dropped(self):
        self.manager.configure(level=DebugLevel.INFO)
        with self.assertLogs("connectfour.tests", level=TRACE) as captured:
            self.manager.debug("hidden")
            self.manager.info("shown")
        self.assertEqual(len(captured.records), 1)
        self.assertEqual(captured.records[0].getMessage(), "shown")

    def test_trace_level_includes_debug(self):
        self.manager.configure(level=DebugLevel.TRACE)
        with self.assertLogs("connectfour.tests", level=TRACE) as captured:
            self.manager.debug("d")
            self.manager.trace("t")
        self.assertEqual([r.levelname for r in captured.records], ["DEBUG", "TRACE"])

    def test_component_filter(self):
        self.manager.configure(components=["engine"])
        with self.assertLogs("connectfour.tests", level=logging.DEBUG) as captured:
            self.manager.debug("kept", "engine")
            self.manager.debug("dropped", "board")
        self.assertEqual([r.getMessage() for r in captured.records], ["[engine] kept"])

    def test_none_level_silences_everything(self):
        self.manager.configure(level=DebugLevel.NONE)
        self.manager.error("nothing")
        self.manager.configure(enabled=False, level=DebugLevel.DEBUG)
        self.manager.error("still nothing")
        self.manager.configure(enabled=True)
        with self.assertLogs("connectfour.tests", level=logging.ERROR):
            self.manager.error("back")

    def test_file_logging(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "game.log")
            self.manager.configure(log_file=path)
            self.manager.info("written to file")
            self.manager.configure(log_file="")
            with open(path) as handle:
                self.assertIn("written to file", handle.read())

    def test_timers(self):
        self.manager.start_timer("op")
        self.assertGreaterEqual(self.manager.end_timer("op"), 0.0)
        self.assertIsNone(self.manager.end_timer("op"))


if __name__ == '__main__':
    unittest.main()
