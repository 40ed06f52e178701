"""Command registry (single source of truth for help + wiring)."""

from __future__ import annotations

from .models.command_spec import CommandSpec, Group


_FUNCTION_COMMANDS = (
    CommandSpec(
        "lambdas",
        "Functions",
        "/lambdas [filter]",
        "list Lambda functions (cached, refreshed when stale)",
        "cmd_lambdas",
        aliases=("functions",),
    ),
)

_INFO_COMMANDS = (
    CommandSpec("start", "Info", "/start", "show help", "cmd_start"),
    CommandSpec("help", "Info", "/help", "this menu", "cmd_help"),
    CommandSpec("whoami", "Info", "/whoami", "show chat and user info", "cmd_whoami"),
    CommandSpec(
        "metrics",
        "Info",
        "/metrics",
        "command metrics summary",
        "cmd_metrics",
    ),
)


COMMANDS: tuple[CommandSpec, ...] = (
    *_FUNCTION_COMMANDS,
    *_INFO_COMMANDS,
)


GROUP_ORDER: tuple[Group, ...] = (
    "Functions",
    "Info",
)
