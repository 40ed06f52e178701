"""/lambdas: the function list panel."""

from __future__ import annotations

import logging

from telegram import LinkPreviewOptions
from telegram.constants import ParseMode

from .. import config, view
from ..models.panel import PanelView
from .common import get_state, guard, record_error, safe_edit_text

logger = logging.getLogger(__name__)

_NO_PREVIEW = LinkPreviewOptions(is_disabled=True)
_MAX_QUERY = 64


def _render(panel: PanelView, query: str | None, profile: str) -> str:
    text = view.render_function_panel(
        panel, query=query, max_items=config.PANEL_MAX_ITEMS, profile=profile
    )
    # Edits cannot be split across messages; keep the first chunk only.
    return view.chunk(text)[0]


async def cmd_lambdas(update, context) -> None:
    if not await guard(update, context):
        return
    query = " ".join(context.args).strip()[:_MAX_QUERY] or None
    state = get_state(context.application)
    try:
        reconciler = state.get_reconciler()
    except Exception as e:
        await record_error(
            "lambdas", "Failed to set up function listing", e, update.message.reply_text
        )
        return

    profile = reconciler.profile
    if reconciler.in_progress:
        await update.message.reply_text(
            _render(reconciler.view(), query, profile),
            parse_mode=ParseMode.HTML,
            link_preview_options=_NO_PREVIEW,
        )
        return

    last_text = _render(PanelView(), query, profile)
    sent = await update.message.reply_text(
        last_text, parse_mode=ParseMode.HTML, link_preview_options=_NO_PREVIEW
    )

    async def _on_change(panel: PanelView) -> None:
        nonlocal last_text
        text = _render(panel, query, profile)
        if text == last_text:
            return
        last_text = text
        await safe_edit_text(
            sent, text, parse_mode=ParseMode.HTML, link_preview_options=_NO_PREVIEW
        )

    unsubscribe = reconciler.subscribe(_on_change)
    try:
        started = await reconciler.activate()
    finally:
        unsubscribe()
    if not started:
        logger.debug("lambdas: a refresh was already running")
        await _on_change(reconciler.view())
