"""Tests for the OpenAI-client transport."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from cotchat.client.config import ChatConfig
from cotchat.client.transport import CompletionResult, OpenAITransport, StreamSnapshot


MESSAGES = [{"role": "user", "content": "hi"}]


def delta_chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))], usage=None)


def make_transport(create_return):
    client = MagicMock()
    client.chat.completions.create.return_value = create_return
    config = ChatConfig(model="test-model", api_key="k", temperature=0.3, max_tokens=64)
    return OpenAITransport(config, client=client), client


def test_send_once():
    response = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="Thinking: a\nAnswer: b"))],
        usage=SimpleNamespace(total_tokens=12),
    )
    transport, client = make_transport(response)

    assert transport.send_once(MESSAGES) == CompletionResult("Thinking: a\nAnswer: b", 12)
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["messages"] == MESSAGES
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 64


def test_send_once_handles_missing_content_and_usage():
    response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))], usage=None)
    transport, _ = make_transport(response)
    assert transport.send_once(MESSAGES) == CompletionResult("", None)


def test_send_streaming_yields_accumulated_snapshots():
    chunks = [
        delta_chunk("Thinking:"),
        delta_chunk(" a"),
        delta_chunk(None),
        delta_chunk("\nAnswer: b"),
        SimpleNamespace(choices=[], usage=SimpleNamespace(total_tokens=30)),
    ]
    transport, client = make_transport(iter(chunks))

    events = list(transport.send_streaming(MESSAGES))

    assert events == [
        StreamSnapshot("Thinking:"),
        StreamSnapshot("Thinking: a"),
        StreamSnapshot("Thinking: a\nAnswer: b"),
        StreamSnapshot("Thinking: a\nAnswer: b", is_final=True, total_tokens=30),
    ]
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["stream"] is True
    assert kwargs["stream_options"] == {"include_usage": True}


def test_send_streaming_is_lazy():
    """Nothing is sent until the first event is requested."""
    transport, client = make_transport(iter([delta_chunk("x")]))
    events = transport.send_streaming(MESSAGES)
    client.chat.completions.create.assert_not_called()
    assert next(events) == StreamSnapshot("x")


def test_send_streaming_empty_reply():
    transport, _ = make_transport(iter([]))
    assert list(transport.send_streaming(MESSAGES)) == [StreamSnapshot("", is_final=True)]
