"""
HexChat CLI

Terminal front end for the conversation store.

Usage:
    hexchat chat                 # Interactive REPL mode
    hexchat ask "Hello there"    # Single message in a new conversation
    hexchat list                 # List conversations
    hexchat show 2               # Show messages of conversation #2
    hexchat clear                # Delete every conversation
"""

import asyncio
import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from hexchat.config import get_settings
from hexchat.conversations import ConversationError, ConversationStore
from hexchat.models import ConversationSummary, Message
from hexchat.replies import ReplySimulator
from hexchat.storage import ConversationRepository, FileSlot

console = Console()

CHAT_HELP = (
    "[bold]/new[/bold]           start a new conversation\n"
    "[bold]/list[/bold]          list conversations\n"
    "[bold]/switch N[/bold]      switch to conversation N\n"
    "[bold]/delete N[/bold]      delete conversation N\n"
    "[bold]/clear[/bold]         delete every conversation\n"
    "[bold]/help[/bold]          show this help\n"
    "[bold]/quit[/bold]          leave"
)


def configure_cli_logging() -> None:
    """Keep store/storage chatter off the interactive terminal."""
    logging.getLogger("hexchat").setLevel(logging.ERROR)


def open_store() -> ConversationStore:
    """Build the session's store from settings."""
    settings = get_settings()
    repository = ConversationRepository(
        FileSlot(settings.storage.data_dir),
        key=settings.storage.key,
    )
    return ConversationStore.open(repository, ReplySimulator.from_settings(settings.reply))


# ============================================================================
# Rendering helpers
# ============================================================================


def _print_conversations(summaries: list[ConversationSummary]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Messages", justify="right")
    table.add_column("Created")
    for index, summary in enumerate(summaries, start=1):
        marker = "[green]*[/green] " if summary.is_current else ""
        table.add_row(
            str(index),
            f"{marker}{escape(summary.title)}",
            str(summary.message_count),
            summary.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


def _print_message(message: Message) -> None:
    if message.role == "user":
        console.print(f"[bold cyan]You:[/bold cyan] {escape(message.content)}")
    else:
        console.print(f"[bold magenta]Assistant:[/bold magenta] {escape(message.content)}")


def _print_messages(messages: list[Message]) -> None:
    if not messages:
        console.print("[dim]No messages yet. Say hello![/dim]")
        return
    for message in messages:
        _print_message(message)


def _resolve_index(store: ConversationStore, raw: str) -> str:
    """Map a 1-based display index to a conversation id."""
    summaries = store.list_for_display()
    try:
        index = int(raw)
    except ValueError as exc:
        raise click.BadParameter(f"'{raw}' is not a conversation number") from exc
    if not 1 <= index <= len(summaries):
        raise click.BadParameter(f"No conversation #{index}; run /list to see them")
    return summaries[index - 1].id


def _should_exit_chat(text: str) -> bool:
    return text.strip().lower() in {"/quit", "/exit", "exit", "quit", "q"}


async def _send(store: ConversationStore, text: str) -> None:
    store.append_user_message(text)
    with console.status("[cyan]Assistant is typing...[/cyan]", spinner="dots"):
        await store.wait_for_replies()
    messages = store.get_messages()
    if messages and messages[-1].role == "assistant":
        _print_message(messages[-1])


async def _handle_command(store: ConversationStore, line: str) -> None:
    command, _, argument = line.partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command == "/help":
        console.print(Panel.fit(CHAT_HELP, title="Commands", border_style="blue"))
    elif command == "/new":
        store.create_conversation()
        console.print("[green]Started a new conversation.[/green]")
    elif command == "/list":
        _print_conversations(store.list_for_display())
    elif command == "/switch":
        store.switch_to(_resolve_index(store, argument))
        current = store.current_conversation
        console.print(f"[green]Switched to:[/green] {escape(current.title)}")
        _print_messages(store.get_messages())
    elif command == "/delete":
        store.delete_conversation(_resolve_index(store, argument))
        console.print("[green]Conversation deleted.[/green]")
    elif command == "/clear":
        if click.confirm("Clear all conversations? This cannot be undone.", default=False):
            store.clear_all()
            console.print("[green]All conversations cleared.[/green]")
    else:
        console.print(f"[yellow]Unknown command {command}. Type /help.[/yellow]")


# ============================================================================
# Commands
# ============================================================================


@click.group()
@click.version_option(version="0.1.0", prog_name="HexChat")
def cli():
    """HexChat - Conversation manager for chat sessions."""
    configure_cli_logging()


@cli.command()
def chat():
    """Interactive REPL mode for conversations."""
    console.print(
        Panel.fit(
            "[bold green]HexChat Interactive Mode[/bold green]\n"
            "Type a message to chat, /help for commands, 'exit' to leave.",
            border_style="green",
        )
    )

    async def run_chat() -> None:
        store = open_store()
        _print_messages(store.get_messages())
        while True:
            try:
                line = console.input("[bold cyan]You:[/bold cyan] ")
            except (EOFError, KeyboardInterrupt):
                break
            if not line.strip():
                continue
            if _should_exit_chat(line):
                break
            try:
                if line.startswith("/"):
                    await _handle_command(store, line.strip())
                else:
                    await _send(store, line)
            except (ConversationError, click.BadParameter) as e:
                console.print(f"[red]{e}[/red]")
            except KeyboardInterrupt:
                console.print("\n[yellow]Interrupted. Type 'exit' to quit.[/yellow]")
        console.print("\n[yellow]Goodbye![/yellow]")

    asyncio.run(run_chat())


@cli.command()
@click.argument("message")
def ask(message: str):
    """Send one message in a new conversation and print the reply."""

    async def run_ask() -> None:
        store = open_store()
        current = store.current_conversation
        if current is None or not current.is_empty:
            store.create_conversation()
        try:
            await _send(store, message)
        except ConversationError as e:
            raise click.ClickException(str(e)) from e

    asyncio.run(run_ask())


@cli.command(name="list")
def list_conversations():
    """List conversations, newest first.

    Like any session start, this saves a fresh "New Chat" when storage is
    empty.
    """
    store = open_store()
    _print_conversations(store.list_for_display())


@cli.command()
@click.argument("number", required=False)
def show(number: str | None):
    """Show the messages of conversation NUMBER (default: current).

    Like any session start, this saves a fresh "New Chat" when storage is
    empty.
    """
    store = open_store()
    conversation_id = _resolve_index(store, number) if number else None
    conversation = (
        store.get_conversation(conversation_id) if conversation_id else store.current_conversation
    )
    console.print(f"[bold]{escape(conversation.title)}[/bold]")
    _print_messages(store.get_messages(conversation_id))


@cli.command()
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
def clear(yes: bool):
    """Delete every conversation."""
    if not yes and not click.confirm(
        "Clear all conversations? This cannot be undone.", default=False
    ):
        console.print("[yellow]Clear cancelled.[/yellow]")
        return
    store = open_store()
    store.clear_all()
    console.print("[green]All conversations cleared.[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
