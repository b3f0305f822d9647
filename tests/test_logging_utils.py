from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from linuxbasix import logging_utils


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level

    def tearDown(self) -> None:
        for handler in list(self.root.handlers):
            if handler not in self.saved_handlers:
                self.root.removeHandler(handler)
                handler.close()
        self.root.setLevel(self.saved_level)
        for attr in ("_linuxbasix_configured", "_linuxbasix_log_path"):
            if hasattr(self.root, attr):
                delattr(self.root, attr)

    def test_writes_to_requested_path_once(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            log_path = str(Path(td) / "nested" / "basix.log")
            self.assertEqual(logging_utils.configure_logging(log_path=log_path), log_path)
            handler_count = len(self.root.handlers)
            self.assertEqual(logging_utils.configure_logging(log_path=log_path), log_path)
            self.assertEqual(len(self.root.handlers), handler_count)

            logging.getLogger("linuxbasix.test").info("hello")
            for handler in self.root.handlers:
                handler.flush()
            self.assertIn("hello", Path(log_path).read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
