import pytest

from lambda_panel.handlers.common import record_error


@pytest.mark.asyncio
async def test_record_error_replies_escaped_message() -> None:
    replies: list[str] = []

    async def reply(text: str, **_) -> None:
        replies.append(text)

    await record_error("demo", "failed", RuntimeError("<boom>"), reply)

    assert replies
    assert "&lt;boom&gt;" in replies[0]
