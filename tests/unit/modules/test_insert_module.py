"""Insert wizard: pick a line type, type the content, add it below the cursor."""

from __future__ import annotations

import unittest
from unittest import mock

from lazyrebase.input import Event, KeyBindings, KeyEvent, filter_event
from lazyrebase.modules import Insert, InsertState, ProcessResult, RenderContext, State
from lazyrebase.modules.choice import INVALID_SELECTION
from lazyrebase.todo import TodoLine, TodoList, TodoListError
from lazyrebase.view import ViewSender, ViewState

CONTEXT = RenderContext(80, 24)


class InsertModuleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bindings = KeyBindings.default()
        self.sender = ViewSender(ViewState())
        self.todo = TodoList([TodoLine("pick", "aaa one"), TodoLine("pick", "bbb two")])
        self.module = Insert()
        self.module.activate(self.todo, State.LIST)

    def _feed(self, event: Event) -> ProcessResult:
        event = filter_event(event, self.module.input_options(), self.bindings)
        event = self.module.read_event(event, self.bindings)
        return self.module.handle_event(event, self.sender, self.todo)

    def _type(self, text: str) -> None:
        for char in text:
            self._feed(KeyEvent(char))

    def test_prompt_lists_line_types(self) -> None:
        snapshot = self.module.build_view_data(CONTEXT, self.todo).snapshot()
        texts = [line.text() for line in snapshot.lines]

        self.assertIn("e) exec <command>", texts)
        self.assertIn("q) Cancel add line", texts)
        self.assertEqual(snapshot.leading_lines[0].text(), "Select the type of line to insert:")

    def test_exec_line_is_added_below_the_selection(self) -> None:
        self._feed(KeyEvent("e"))
        self.assertIs(self.module._state, InsertState.EDIT)
        self._type("make test")
        snapshot = self.module.build_view_data(CONTEXT, self.todo).snapshot()
        self.assertEqual(snapshot.lines[0].text(), "exec make test ")

        result = self._feed(KeyEvent("Enter"))

        self.assertEqual(result.state, State.LIST)
        self.assertEqual(self.todo.lines()[1], TodoLine("exec", "make test"))
        self.assertEqual(self.todo.selected_index(), 1)

    def test_backspace_edits_content(self) -> None:
        self._feed(KeyEvent("l"))
        self._type("mainx")
        self._feed(KeyEvent("Backspace"))
        self._feed(KeyEvent("Enter"))

        self.assertEqual(self.todo.lines()[1], TodoLine("label", "main"))

    def test_empty_content_cancels(self) -> None:
        self._feed(KeyEvent("p"))
        self._type("   ")
        result = self._feed(KeyEvent("Enter"))

        self.assertEqual(result.state, State.LIST)
        self.assertEqual(len(self.todo), 2)

    def test_cancel_choice(self) -> None:
        result = self._feed(KeyEvent("q"))
        self.assertEqual(result.state, State.LIST)
        self.assertEqual(len(self.todo), 2)

    def test_invalid_choice_shows_error_and_stays(self) -> None:
        result = self._feed(KeyEvent("z"))
        snapshot = self.module.build_view_data(CONTEXT, self.todo).snapshot()

        self.assertIsNone(result.state)
        self.assertEqual(snapshot.trailing_lines[-1].text(), INVALID_SELECTION)

    def test_insert_into_empty_list(self) -> None:
        self.todo = TodoList()
        self.module.activate(self.todo, State.LIST)
        self._feed(KeyEvent("e"))
        self._type("ls")
        self._feed(KeyEvent("Enter"))

        self.assertEqual(self.todo.lines(), (TodoLine("exec", "ls"),))

    def test_rejected_line_is_reported_in_the_view(self) -> None:
        self._feed(KeyEvent("e"))
        self._type("ls")
        with mock.patch.object(self.todo, "add_line", side_effect=TodoListError("no room")):
            result = self._feed(KeyEvent("Enter"))
        snapshot = self.module.build_view_data(CONTEXT, self.todo).snapshot()

        self.assertIsNone(result.state)
        self.assertEqual(snapshot.trailing_lines[-1].text(), "no room")

    def test_activation_resets_the_wizard(self) -> None:
        self._feed(KeyEvent("e"))
        self._type("partial")
        self.module.activate(self.todo, State.LIST)

        snapshot = self.module.build_view_data(CONTEXT, self.todo).snapshot()
        self.assertEqual(snapshot.name, "insert")


if __name__ == "__main__":
    unittest.main()
