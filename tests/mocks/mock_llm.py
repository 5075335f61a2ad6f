"""Fake Anthropic client that replays queued responses."""

from __future__ import annotations

import types
from typing import Any


def make_text_response(text: str, input_tokens: int = 100, output_tokens: int = 50) -> object:
    """Build an object shaped like an Anthropic Message with one text block."""
    return types.SimpleNamespace(
        content=[types.SimpleNamespace(type="text", text=text)],
        usage=types.SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


class _FakeMessages:
    def __init__(self, responses: list[object]) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> object:
        self.calls.append(kwargs)
        if not self._responses:
            msg = "FakeAnthropicClient ran out of queued responses"
            raise AssertionError(msg)
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, str):
            return make_text_response(response)
        return response


class FakeAnthropicClient:
    """Stand-in for AsyncAnthropic exposing messages.create.

    Queue strings (returned as text), prebuilt responses, or exceptions
    (raised) in call order.
    """

    def __init__(self, responses: list[object]) -> None:
        """Initialize with the responses to replay."""
        self.messages = _FakeMessages(responses)

    @property
    def calls(self) -> list[dict[str, Any]]:
        """Keyword arguments of every messages.create call so far."""
        return self.messages.calls
