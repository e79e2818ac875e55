"""Shared fixtures for the chat client tests."""

import io

import pytest
from rich.console import Console

from cotchat.client.chat_client import ChatClient
from cotchat.client.config import ChatConfig
from cotchat.client.settings import ChatSettings
from cotchat.client.transport import CompletionResult


class FakeTransport:
    """Stands in for OpenAITransport: canned replies, records what was sent."""

    def __init__(self, replies=None, snapshots=None, error=None, total_tokens=5):
        self.replies = list(replies or [])
        self.snapshots = list(snapshots or [])
        self.error = error
        self.total_tokens = total_tokens
        self.sent = []

    def send_once(self, messages):
        self.sent.append(messages)
        if self.error is not None:
            raise self.error
        return CompletionResult(self.replies.pop(0), self.total_tokens)

    def send_streaming(self, messages):
        self.sent.append(messages)
        for snapshot in self.snapshots:
            yield snapshot
        if self.error is not None:
            raise self.error


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    return Console(file=output, width=100, force_terminal=False, color_system=None)


@pytest.fixture
def make_client(console):
    """Build a ChatClient around a FakeTransport without touching the network."""
    def _make(transport, **settings):
        config = ChatConfig(model="test-model", api_key="test-key", settings=ChatSettings(**settings))
        return ChatClient(config, transport=transport, console=console, check_connection=False)
    return _make
