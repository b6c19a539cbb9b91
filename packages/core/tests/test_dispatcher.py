"""Tests for CommandDispatcher: lookup, aliases, argument splitting and history expansion."""

from unittest.mock import MagicMock

import pytest

from ghr_core.dispatcher import CommandDispatcher


@pytest.fixture
def dispatcher():
    d = CommandDispatcher()
    d.register("pr", MagicMock(), "Select PR", "pr <#>", "Pull Requests")
    d.register("q", MagicMock(), "Quit", section="Session")
    d.register_alias("quit", "q")
    d.register_alias("exit", "q")
    return d


def _handler(d, name):
    return d._commands[name].handler


class TestExecute:
    def test_dispatches_args_and_context(self, dispatcher):
        ctx = object()
        assert dispatcher.execute("pr 42", ctx) is True
        _handler(dispatcher, "pr").assert_called_once_with("42", ctx)

    def test_command_name_is_case_insensitive(self, dispatcher):
        dispatcher.execute("PR 7")
        _handler(dispatcher, "pr").assert_called_once_with("7", None)

    def test_alias_resolves_to_target(self, dispatcher):
        assert dispatcher.execute("exit") is True
        _handler(dispatcher, "q").assert_called_once_with("", None)

    def test_inner_whitespace_in_args_is_preserved(self, dispatcher):
        dispatcher.execute("  pr   foo  bar  ")
        _handler(dispatcher, "pr").assert_called_once_with("foo  bar", None)

    def test_unknown_command_returns_false(self, dispatcher, capsys):
        assert dispatcher.execute("bogus 1") is False
        assert "Unknown command: 'bogus'" in capsys.readouterr().out

    def test_blank_line_is_a_no_op(self, dispatcher):
        assert dispatcher.execute("   ") is True
        _handler(dispatcher, "pr").assert_not_called()

    def test_handler_exceptions_propagate(self, dispatcher):
        _handler(dispatcher, "pr").side_effect = RuntimeError("boom")
        with pytest.raises(RuntimeError):
            dispatcher.execute("pr 1")


class TestExpandHistory:
    def test_bang_bang_returns_last_entry(self, dispatcher):
        assert dispatcher.expand_history("!!", ["lf", "pr 3"]) == "pr 3"

    def test_bang_n_is_one_based(self, dispatcher):
        assert dispatcher.expand_history("!1", ["lf", "pr 3"]) == "lf"
        assert dispatcher.expand_history("!2", ["lf", "pr 3"]) == "pr 3"

    def test_bang_bang_with_empty_history(self, dispatcher, capsys):
        assert dispatcher.expand_history("!!", []) is None
        assert "No commands in history" in capsys.readouterr().out

    def test_out_of_range_index(self, dispatcher, capsys):
        assert dispatcher.expand_history("!5", ["lf"]) is None
        assert "No command at index 5" in capsys.readouterr().out

    def test_index_zero_is_out_of_range(self, dispatcher):
        assert dispatcher.expand_history("!0", ["lf"]) is None

    def test_ordinary_line_is_returned_unchanged(self, dispatcher):
        assert dispatcher.expand_history("g foo!", ["lf"]) == "g foo!"


class TestIntrospection:
    @pytest.mark.parametrize("line", ["h", "history", "!!", "!3", " HISTORY "])
    def test_history_lookups(self, line):
        assert CommandDispatcher.is_history_lookup(line)

    @pytest.mark.parametrize("line", ["lf", "pr 1", "h 2", "!x"])
    def test_not_history_lookups(self, line):
        assert not CommandDispatcher.is_history_lookup(line)

    def test_has_command_includes_aliases(self, dispatcher):
        assert dispatcher.has_command("pr")
        assert dispatcher.has_command("QUIT")
        assert not dispatcher.has_command("nope")

    def test_commands_lists_registered_names_only(self, dispatcher):
        assert dispatcher.commands() == ["pr", "q"]

    def test_aliases_for(self, dispatcher):
        assert dispatcher.aliases_for("q") == ["exit", "quit"]
        assert dispatcher.aliases_for("pr") == []

    def test_sections_keep_registration_order(self, dispatcher):
        sections = dispatcher.sections()
        assert list(sections) == ["Pull Requests", "Session"]
        assert sections["Pull Requests"][0].usage == "pr <#>"

    def test_reregistering_replaces_handler(self, dispatcher):
        new = MagicMock()
        dispatcher.register("pr", new)
        dispatcher.execute("pr 1")
        new.assert_called_once_with("1", None)
