# src/pocket_todo/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import CommandRegistry, cmd_add, cmd_clear
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from .render import Renderer

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def handle_line(
    state: AppState,
    user_input: str,
    *,
    registry: CommandRegistry = command_registry,
    emit: Callable[[str], None] | None = None,
) -> str:
    """
    Turn one console line into the text to print.

    Slash commands go through the registry; anything else is a quick add.
    A notification raised by this line is prepended so the user sees the outcome;
    one still lingering from an earlier line is not repeated.

    The clear-all dialog only survives /clear lines: any other input closes it
    and drops its acknowledgment.
    """
    before = state.notifications.current
    if state.clear_gate.is_open and registry.lookup(user_input) is not cmd_clear:
        logger.debug("Closing clear-all dialog on other input.")
        state.clear_gate.dismiss()

    try:
        reply = registry.handle(state, user_input, emit=emit)
        if reply is None:
            reply = cmd_add(state, user_input)
    except Exception:
        logger.exception("Command handler crashed.")
        reply = "Internal error while handling a command."

    current = state.notifications.current
    fresh = current is not None and (before is None or current.seq != before.seq)
    note = Renderer(state.theme.palette).notification(current) if fresh else ""
    parts = [p for p in (note, reply) if p]
    return "\n".join(parts)


def run_console_loop(
    state: AppState,
    *,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[..., None] = print,
) -> None:
    logger.info("Console started (tasks=%s theme=%s).", state.store.count, state.theme.name)
    app_name = str(getattr(state.settings, "app_name", "TODO App"))

    def emit(text: str) -> None:
        print_fn(text, flush=True)

    renderer = Renderer(state.theme.palette)
    print_fn(renderer.style(app_name, "\033[1m"))
    startup_note = renderer.notification(state.notifications.current)
    if startup_note:
        print_fn(startup_note)
    print_fn(command_registry.handle(state, "/list"))
    print_fn("Type a task title to add it. Use /help for commands, /exit to quit.\n")

    while True:
        try:
            user_input = input_fn("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print_fn()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        out = handle_line(state, user_input, emit=emit)
        if out:
            print_fn(out)
        print_fn()

    logger.info("Console finished.")
