from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyrebase import cli
from lazyrebase.todo import TodoListError


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)
        self.todo_path = self.tmp / "git-rebase-todo"
        self.todo_path.write_text("pick aaa one\n", encoding="utf-8")

    def test_parser_options(self) -> None:
        args = cli.build_parser().parse_args(["todo", "--theme", "ocean", "--verbose"])
        self.assertEqual((args.todo_file, args.theme, args.verbose, args.log_file), ("todo", "ocean", True, None))

    def test_main_exits_with_the_session_code(self) -> None:
        stdin = mock.Mock()
        stdin.isatty.return_value = True
        with mock.patch("lazyrebase.cli.sys.stdin", stdin), mock.patch(
            "lazyrebase.cli.run_app", return_value=1
        ) as run_mock, mock.patch("lazyrebase.cli.load_app_config", return_value="config") as config_mock:
            with self.assertRaises(SystemExit) as raised:
                cli.main([str(self.todo_path), "--theme", "ocean", "--no-color"])

        self.assertEqual(raised.exception.code, 1)
        config_mock.assert_called_once_with("ocean")
        run_mock.assert_called_once_with(self.todo_path, "config", no_color=True)

    def test_main_requires_a_terminal(self) -> None:
        stdin = mock.Mock()
        stdin.isatty.return_value = False
        with mock.patch("lazyrebase.cli.sys.stdin", stdin):
            with self.assertRaises(SystemExit) as raised:
                cli.main([str(self.todo_path)])
        self.assertIn("terminal", str(raised.exception.code))

    def test_directory_is_rejected(self) -> None:
        with self.assertRaises(SystemExit) as raised:
            cli.main([str(self.tmp)])
        self.assertIn("Not a file", str(raised.exception.code))

    def test_bad_todo_file_is_reported(self) -> None:
        stdin = mock.Mock()
        stdin.isatty.return_value = True
        with mock.patch("lazyrebase.cli.sys.stdin", stdin), mock.patch(
            "lazyrebase.cli.run_app", side_effect=TodoListError("line 1: unknown action: 'frob'")
        ), mock.patch("lazyrebase.cli.load_app_config"):
            with self.assertRaises(SystemExit) as raised:
                cli.main([str(self.todo_path)])
        self.assertIn("unknown action", str(raised.exception.code))

    def test_log_file_handler(self) -> None:
        package_logger = logging.getLogger("lazyrebase")
        before = list(package_logger.handlers)
        level = package_logger.level
        log_path = self.tmp / "lazyrebase.log"

        cli.configure_logging(str(log_path), verbose=True)
        added = [handler for handler in package_logger.handlers if handler not in before]
        try:
            self.assertEqual(len(added), 1)
            self.assertEqual(package_logger.level, logging.DEBUG)
            logging.getLogger("lazyrebase.todo").debug("hello log")
            added[0].flush()
            self.assertIn("hello log", log_path.read_text(encoding="utf-8"))
        finally:
            for handler in added:
                package_logger.removeHandler(handler)
                handler.close()
            package_logger.setLevel(level)

    def test_no_log_file_adds_nothing(self) -> None:
        package_logger = logging.getLogger("lazyrebase")
        before = list(package_logger.handlers)
        cli.configure_logging(None, verbose=True)
        self.assertEqual(package_logger.handlers, before)


if __name__ == "__main__":
    unittest.main()
