"""Tests for the runtime command console."""

from fabula.commands.types import ContinueSignal, RetrySignal, ShutdownSignal
from fabula.repl import handle_line, present_current_prompt, repl, shutdown
from fabula.session import HistoryEntry, Session


def scripted(*lines):
    """Build a read_line stub that ends with EOF."""
    remaining = list(lines)

    def read_line(_prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read_line


class TestHandleLine:
    """Test single-line command handling."""

    def test_not_a_command(self, runtime):
        """Test that story input is left to the caller."""
        assert handle_line("1", runtime) is None
        assert handle_line("dance", runtime) is None

    def test_output_is_displayed_and_retries(self, runtime):
        """Test that output results are shown without a redraw."""
        signal = handle_line("save", runtime)

        assert signal == RetrySignal(redraw=False)
        assert runtime.interaction.notified == ["Saving... "]
        assert runtime.saves.exists()

    def test_back_continues(self, runtime):
        """Test that back moves the story and continues."""
        signal = handle_line("  back  ", runtime)

        assert signal == ContinueSignal()
        assert len(runtime.session.history) == 1

    def test_quit_shuts_down(self, runtime):
        """Test that quit requests a non-silent shutdown."""
        assert handle_line("quit", runtime) == ShutdownSignal(silent=False)


class TestPresentCurrentPrompt:
    """Test story prompt display."""

    def test_shows_available_choices(self, runtime, capsys):
        """Test that only available choices are listed."""
        runtime.session.back()

        present_current_prompt(runtime)

        out = capsys.readouterr().out
        assert "The lamp is dark, Ada." in out
        assert "  1. Climb the stairs" in out
        assert "Leave" not in out

    def test_no_position(self, runtime, capsys):
        """Test that an empty history is reported."""
        runtime.session = Session()

        present_current_prompt(runtime)

        assert "(no story position)" in capsys.readouterr().out


class TestRepl:
    """Test the console loop."""

    def test_quit_returns_not_silent(self, runtime, capsys):
        """Test that quit ends the loop with a normal shutdown."""
        assert repl(runtime, scripted("quit")) is False
        assert "The stairs creak." in capsys.readouterr().out

    def test_eof_exits(self, runtime):
        """Test that Ctrl-D ends the loop."""
        assert repl(runtime, scripted()) is False

    def test_help(self, runtime, capsys):
        """Test that help lists normal commands only."""
        repl(runtime, scripted("help", "quit"))

        out = capsys.readouterr().out
        assert "Available commands:" in out
        assert "quit" in out
        assert "(debug)" not in out

    def test_help_in_debug_mode(self, runtime, debug_manifest, capsys):
        """Test that debug mode lists debug commands."""
        runtime.manifest = debug_manifest

        repl(runtime, scripted("help", "quit"))

        assert "(debug)" in capsys.readouterr().out

    def test_unknown_command(self, runtime, capsys):
        """Test that unknown input is reported."""
        repl(runtime, scripted("dance", "quit"))

        assert "Unknown command: dance (type 'help')" in capsys.readouterr().out

    def test_permission_error_reported(self, runtime, capsys):
        """Test that debug commands outside debug mode print an error and re-prompt."""
        assert repl(runtime, scripted("notes", "quit")) is False

        assert "ERROR: Unable to access debug commands" in capsys.readouterr().out

    def test_command_failure_reported(self, runtime, capsys):
        """Test that command failures print an error and keep the loop alive."""
        runtime.session.back()

        repl(runtime, scripted("back", "quit"))

        assert "ERROR: Can't go back right now!" in capsys.readouterr().out
        assert len(runtime.session.history) == 1

    def test_debug_command_in_debug_mode(self, runtime, debug_manifest):
        """Test that debug commands run when debug mode is on."""
        runtime.manifest = debug_manifest

        repl(runtime, scripted("notes", "quit"))

        assert runtime.interaction.notified == ["omen"]

    def test_missing_story_prompt_reported_once(self, runtime, capsys):
        """Test that an unknown prompt at the history head still lets the player type."""
        runtime.session = Session(history=[HistoryEntry("main", "gone")])

        assert repl(runtime, scripted("help", "quit")) is False

        out = capsys.readouterr().out
        assert out.count("ERROR: Invalid prompt 'gone' in 'main'") == 1
        assert "Available commands:" in out

    def test_blank_lines_ignored(self, runtime):
        """Test that empty input re-prompts."""
        assert repl(runtime, scripted("", "   ", "quit")) is False


class TestShutdown:
    """Test shutdown handling."""

    def test_saves_and_says_goodbye(self, runtime, capsys):
        """Test that a normal shutdown writes the default slot."""
        shutdown(runtime, silent=False)

        assert runtime.saves.read() == runtime.session
        assert "Saved. Goodbye!" in capsys.readouterr().out

    def test_silent(self, runtime, capsys):
        """Test that a silent shutdown writes nothing."""
        shutdown(runtime, silent=True)

        assert not runtime.saves.exists()
        assert capsys.readouterr().out == ""
