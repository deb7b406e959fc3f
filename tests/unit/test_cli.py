"""
Unit Tests for CLI

Tests the HexChat CLI commands against a per-test storage directory.
"""

import json

import pytest
from click.testing import CliRunner

from hexchat.cli import _should_exit_chat, cli


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


def _stored(data_dir) -> list[dict]:
    return json.loads((data_dir / "hexgpt_chats.json").read_text(encoding="utf-8"))


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Conversation manager" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_chat_command_exists(self, runner):
        result = runner.invoke(cli, ["chat", "--help"])
        assert result.exit_code == 0
        assert "Interactive REPL mode" in result.output

    @pytest.mark.parametrize("text", ["exit", "QUIT", " /quit ", "q"])
    def test_exit_phrases(self, text):
        assert _should_exit_chat(text)

    def test_regular_text_does_not_exit(self):
        assert not _should_exit_chat("quite right")


class TestOneShotCommands:
    """ask / list / show / clear."""

    def test_ask_prints_reply_and_persists(self, runner, isolated_settings):
        result = runner.invoke(cli, ["ask", "Hello there"])

        assert result.exit_code == 0, result.output
        assert "This is a demo response from HexGpt" in result.output
        [conversation] = _stored(isolated_settings)
        assert conversation["title"] == "Hello there"
        assert [m["role"] for m in conversation["messages"]] == ["user", "assistant"]

    def test_ask_twice_uses_separate_conversations(self, runner, isolated_settings):
        runner.invoke(cli, ["ask", "First"])
        runner.invoke(cli, ["ask", "Second"])

        titles = [c["title"] for c in _stored(isolated_settings)]
        assert titles == ["Second", "First"]

    def test_ask_blank_message_fails(self, runner):
        result = runner.invoke(cli, ["ask", "   "])

        assert result.exit_code != 0
        assert "Message is empty" in result.output

    def test_list_shows_titles(self, runner):
        runner.invoke(cli, ["ask", "Weather today"])

        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 0
        assert "Weather today" in result.output

    def test_list_on_empty_storage_saves_new_chat(self, runner, isolated_settings):
        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 0
        [conversation] = _stored(isolated_settings)
        assert conversation["title"] == "New Chat"
        assert conversation["messages"] == []

    def test_list_help_mentions_new_chat(self, runner):
        result = runner.invoke(cli, ["list", "--help"])

        assert 'saves a fresh "New Chat"' in " ".join(result.output.split())

    def test_show_current_conversation(self, runner):
        runner.invoke(cli, ["ask", "Show me"])

        result = runner.invoke(cli, ["show"])

        assert result.exit_code == 0
        assert "You: Show me" in result.output
        assert "Assistant:" in result.output

    def test_show_unknown_number_fails(self, runner):
        result = runner.invoke(cli, ["show", "7"])

        assert result.exit_code != 0
        assert "No conversation #7" in result.output

    def test_clear_with_yes(self, runner, isolated_settings):
        runner.invoke(cli, ["ask", "Forget me"])

        result = runner.invoke(cli, ["clear", "--yes"])

        assert result.exit_code == 0
        [conversation] = _stored(isolated_settings)
        assert conversation["title"] == "New Chat"
        assert conversation["messages"] == []

    def test_clear_cancelled(self, runner, isolated_settings):
        runner.invoke(cli, ["ask", "Keep me"])

        result = runner.invoke(cli, ["clear"], input="n\n")

        assert "Clear cancelled" in result.output
        assert _stored(isolated_settings)[0]["title"] == "Keep me"


class TestChatRepl:
    """Interactive mode."""

    def test_chat_send_and_exit(self, runner, isolated_settings):
        result = runner.invoke(cli, ["chat"], input="hi\nexit\n")

        assert result.exit_code == 0, result.output
        assert "This is a demo response from HexGpt" in result.output
        assert "Goodbye!" in result.output
        assert _stored(isolated_settings)[0]["title"] == "hi"

    def test_chat_ends_on_eof(self, runner):
        result = runner.invoke(cli, ["chat"], input="")

        assert result.exit_code == 0
        assert "Goodbye!" in result.output

    def test_chat_new_switch_delete(self, runner, isolated_settings):
        script = "hi\n/new\n/list\n/switch 2\n/delete 1\nexit\n"

        result = runner.invoke(cli, ["chat"], input=script)

        assert result.exit_code == 0, result.output
        assert "Started a new conversation" in result.output
        assert "Switched to: hi" in result.output
        assert "Conversation deleted" in result.output
        [remaining] = _stored(isolated_settings)
        assert remaining["messages"] == []

    def test_chat_reports_bad_index(self, runner):
        result = runner.invoke(cli, ["chat"], input="/switch 9\n/delete x\nexit\n")

        assert result.exit_code == 0
        assert "No conversation #9" in result.output
        assert "'x' is not a conversation number" in result.output

    def test_chat_clear_with_confirmation(self, runner, isolated_settings):
        result = runner.invoke(cli, ["chat"], input="hello\n/clear\ny\nexit\n")

        assert result.exit_code == 0, result.output
        assert "All conversations cleared" in result.output
        assert _stored(isolated_settings)[0]["messages"] == []

    def test_chat_unknown_command(self, runner):
        result = runner.invoke(cli, ["chat"], input="/bogus\nexit\n")

        assert "Unknown command /bogus" in result.output
