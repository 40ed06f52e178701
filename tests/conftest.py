"""Shared test fixtures and dummy classes."""

from __future__ import annotations

from typing import Any

from lambda_panel.errors import ErrorKind, FunctionListError
from lambda_panel.models.function_record import FunctionPage, FunctionRecord


class DummyChat:
    """Dummy Telegram chat for testing."""

    def __init__(self, chat_id: int) -> None:
        self.id = chat_id
        self.type = "private"
        self.sent: list[str] = []

    async def send_message(self, text: str) -> None:
        self.sent.append(text)


class DummyUser:
    """Dummy Telegram user for testing."""

    def __init__(self, user_id: int, username: str | None = None) -> None:
        self.id = user_id
        self.username = username


class DummySentMessage:
    """A message the bot sent; records later edits."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.edits: list[str] = []

    async def edit_text(self, text: str, **_: Any) -> None:
        self.edits.append(text)
        self.text = text


class DummyMessage:
    """Dummy Telegram message for testing."""

    def __init__(self) -> None:
        self.replies: list[str] = []
        self.sent: list[DummySentMessage] = []

    async def reply_text(self, text: str, **_: Any) -> DummySentMessage:
        self.replies.append(text)
        sent = DummySentMessage(text)
        self.sent.append(sent)
        return sent


class DummyUpdate:
    """Dummy Telegram update for testing."""

    def __init__(self, chat_id: int, user_id: int) -> None:
        self.effective_chat = DummyChat(chat_id)
        self.effective_user = DummyUser(user_id)
        self.message = DummyMessage()
        self.effective_message = self.message


class DummyApplication:
    """Dummy Telegram application for testing."""

    def __init__(self) -> None:
        self.bot_data: dict[str, object] = {}


class DummyContext:
    """Dummy Telegram context for testing."""

    def __init__(self, args: list[str] | None = None) -> None:
        self.args = args or []
        self.application = DummyApplication()


def make_records(count: int, prefix: str = "fn") -> list[FunctionRecord]:
    return [
        FunctionRecord(
            name=f"{prefix}-{i}",
            description=f"{prefix} number {i}",
            last_modified="2024-01-01T00:00:00.000+0000",
        )
        for i in range(count)
    ]


class FakeListingClient:
    """Listing client serving scripted pages in call order."""

    def __init__(
        self,
        pages: list[tuple[list[FunctionRecord], str | None]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.pages = list(pages or [])
        self.error = error
        self.markers: list[str | None] = []

    @property
    def calls(self) -> int:
        return len(self.markers)

    def list_page(self, marker: str | None = None) -> FunctionPage:
        self.markers.append(marker)
        if self.error is not None:
            raise self.error
        idx = len(self.markers) - 1
        if idx >= len(self.pages):
            raise FunctionListError(ErrorKind.TRANSIENT, "no more scripted pages")
        records, next_marker = self.pages[idx]
        return FunctionPage(records=list(records), next_marker=next_marker)
