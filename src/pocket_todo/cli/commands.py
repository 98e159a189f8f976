# src/pocket_todo/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..connectors.render import Renderer
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def lookup(self, line: str) -> CommandHandler | None:
        """Return the handler a "/command ..." line would run, if any."""
        if not line.startswith("/"):
            return None
        name = line[1:].strip().partition(" ")[0].lower()
        return self._handlers.get(name)

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command rest of line".
        Returns a reply string or None if not a command.

        The handler receives everything after the command name verbatim
        (stripped), so titles keep their inner spacing.
        """
        if not line.startswith("/"):
            return None

        body = line[1:].strip()
        if not body:
            return "Empty command. Use /help to list available commands."

        name, _, rest = body.partition(" ")
        name = name.lower()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, rest.strip(), emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, rest.strip())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Plain text (no leading /) is added as a task: title | description")
        return "\n".join(lines)


registry = CommandRegistry()


def split_title_description(text: str) -> tuple[str, str]:
    """'Buy milk | 2%' -> ('Buy milk', '2%'). The first '|' separates."""
    title, _, description = text.partition("|")
    return title.strip(), description.strip()


def renderer_for(state: AppState) -> Renderer:
    return Renderer(state.theme.palette)


def render_list(state: AppState) -> str:
    store = state.store
    return renderer_for(state).task_list(store.view, term=store.search_term, total=store.count)


def cmd_help(state: AppState, args: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: str) -> str:
    title, description = split_title_description(args)
    task = state.store.create(title, description)
    if task is None:
        return ""
    return render_list(state)


def cmd_list(state: AppState, args: str) -> str:
    return render_list(state)


def cmd_search(state: AppState, args: str) -> str:
    """
    /search <term>  -> filter by title/description
    /search         -> clear the search
    """
    state.store.search(args)
    return render_list(state)


def cmd_delete(state: AppState, args: str) -> str:
    if not args:
        return "Usage: /delete <number|id>."
    task_id = state.store.resolve(args)
    if task_id is None:
        # Unknown ids are a silent no-op for the store; only tell the user.
        return f"No task matches {args!r}."
    state.store.delete(task_id)
    return render_list(state)


def cmd_clear(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    """
    /clear          -> open the confirmation dialog
    /clear check    -> tick/untick "I understand"
    /clear confirm  -> clear all tasks (only when ticked)
    /clear cancel   -> close the dialog
    """
    gate = state.clear_gate
    renderer = renderer_for(state)
    sub = args.lower()

    if not sub:
        state.request_clear_all()
        return renderer.clear_dialog(gate.acknowledged)

    if sub in ("cancel", "close", "no"):
        gate.dismiss()
        return "Clear all cancelled."

    if not gate.is_open:
        return "Nothing to confirm. Use /clear to open the confirmation dialog."

    if sub in ("check", "tick", "understand"):
        gate.toggle()
        return renderer.clear_dialog(gate.acknowledged)

    if sub in ("confirm", "yes"):
        if gate.acknowledged and emit is not None:
            emit(f"Clearing {state.store.count} tasks...")
        if state.confirm_clear_all():
            return render_list(state)
        return "Tick the confirmation first: /clear check."

    return "Usage: /clear | /clear check | /clear confirm | /clear cancel."


def cmd_theme(state: AppState, args: str) -> str:
    state.theme.toggle()
    return f"Theme: {state.theme.name}."


def cmd_export(state: AppState, args: str) -> str:
    return state.store.export_json()


def cmd_status(state: AppState, args: str) -> str:
    store = state.store
    term = store.search_term or "(none)"
    db_path = getattr(state.settings, "kv_db_path", "?")
    return (
        "Status:\n"
        f"  Tasks: {store.count} (showing {len(store.view)})\n"
        f"  Search: {term}\n"
        f"  Theme: {state.theme.name}\n"
        f"  Storage: {db_path}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [| <description>].")
registry.register("list", cmd_list, help_text="Show tasks (filtered by the active search).", aliases=["ls"])
registry.register("search", cmd_search, help_text="Filter tasks: /search <term>; /search alone clears.")
registry.register("delete", cmd_delete, help_text="Delete a task by list number or id.", aliases=["del", "rm"])
registry.register("clear", cmd_clear, help_text="Clear all tasks (asks for confirmation).")
registry.register("theme", cmd_theme, help_text="Toggle light/dark theme.")
registry.register("export", cmd_export, help_text="Print all tasks as JSON.")
registry.register("status", cmd_status, help_text="Show counts, search term, theme and storage path.")
