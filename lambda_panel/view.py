"""View layer for formatting Telegram messages (HTML)."""

from __future__ import annotations

import html
import time

from .models.function_record import PanelItem
from .models.panel import PanelView, TerminalState

_CONFIG_DOCS_URL = (
    "https://docs.aws.amazon.com/cli/latest/userguide/cli-configure-files.html"
)
_DESCRIPTION_MAX = 120


def bold(text: str) -> str:
    return f"<b>{html.escape(str(text))}</b>"


def code(text: str) -> str:
    return f"<code>{html.escape(str(text))}</code>"


def link(text: str, url: str) -> str:
    return f'<a href="{html.escape(url, quote=True)}">{html.escape(str(text))}</a>'


def chunk(msg: str, size: int = 4000) -> list[str]:
    """Split message into chunks ensuring no chunk exceeds size limit."""
    if len(msg) <= size:
        return [msg]

    lines = msg.splitlines()
    chunks: list[str] = []
    current = ""
    for line in lines:
        if len(line) > size:
            if current:
                chunks.append(current)
                current = ""
            start = 0
            while start < len(line):
                chunks.append(line[start : start + size])
                start += size
            continue
        added_length = len(line) + (1 if current else 0)
        if len(current) + added_length > size and current:
            chunks.append(current)
            current = line
        else:
            current = f"{current}\n{line}" if current else line
    if current:
        chunks.append(current)
    return chunks


def _format_timestamp(ts: float | None) -> str:
    if not ts:
        return "never"
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(ts))


def render_command_metrics(metrics: dict) -> str:
    if not metrics:
        return "<i>No command metrics recorded yet.</i>"

    lines = [bold("Command Metrics:")]
    for name in sorted(metrics.keys()):
        entry = metrics[name]
        last_run = _format_timestamp(entry.last_run_ts)
        line = (
            f"{code(name)} runs {entry.count} ok {entry.success} err {entry.error} "
            f"rl {entry.rate_limited} avg {entry.avg_latency_s * 1000:.1f}ms "
            f"p95 {entry.p95_latency_s * 1000:.1f}ms max {entry.max_latency_s * 1000:.1f}ms "
            f"last {html.escape(last_run)}"
        )
        lines.append(line)
    return "\n".join(lines)


def render_terminal(terminal: TerminalState) -> str:
    if terminal == TerminalState.CREDENTIALS_EXPIRED:
        return (
            "🔒 Your AWS session has expired. Refresh your credentials "
            "(for example <code>aws sso login</code>) and try again."
        )
    return (
        f"⛔ No valid {link('configuration and credential file', _CONFIG_DOCS_URL)} "
        "found on this machine."
    )


def _shorten(text: str, limit: int = _DESCRIPTION_MAX) -> str:
    if len(text) <= limit:
        return text
    return f"{text[: limit - 3]}..."


def render_function_item(item: PanelItem) -> str:
    parts = [f"• {code(item.identifier)} {link('open', item.url)}"]
    if item.description:
        parts.append(f"  <i>{html.escape(_shorten(item.description))}</i>")
    if item.last_modified:
        parts.append(f"  modified {html.escape(item.last_modified)}")
    return "\n".join(parts)


def render_function_panel(
    panel: PanelView,
    query: str | None = None,
    max_items: int = 50,
    profile: str | None = None,
) -> str:
    if panel.terminal is not None:
        return render_terminal(panel.terminal)

    items = panel.filtered(query)
    title = "Lambda functions"
    if profile:
        title = f"{title} ({profile})"
    header = bold(title)
    if query:
        header += f" matching {code(query)}"

    if not items:
        if panel.is_loading:
            return f"{header}\n<i>Loading...</i>"
        return f"{header}\n<i>No functions found.</i>"

    lines = [f"{header} <i>{len(items)} of {len(panel.items)}</i>"]
    lines.extend(render_function_item(item) for item in items[: max(0, max_items)])
    hidden = len(items) - max(0, max_items)
    if hidden > 0:
        lines.append(f"<i>...and {hidden} more; add a filter to narrow the list.</i>")
    if panel.is_loading:
        lines.append("<i>Refreshing...</i>")
    return "\n".join(lines)
