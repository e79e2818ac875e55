"""
Transport for chat completions over the OpenAI client library.

Two modes, matching what the response handler consumes:
- send_once(): a single complete text result
- send_streaming(): a generator of StreamSnapshot events, each carrying the
  full text accumulated so far, ending with an event marked is_final

Learning Points:
- vLLM, Ollama and OpenAI all speak the same /v1/chat/completions API,
  so the official openai client works against any of them
- Generators give a lazy, finite, non-restartable stream for free
- stream_options.include_usage makes the server send token usage in the
  last chunk, which has no choices
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import openai

from .config import ChatConfig

logger = logging.getLogger('llm_debug')


@dataclass(frozen=True)
class CompletionResult:
    """A complete, non-streaming reply."""
    text: str
    total_tokens: Optional[int] = None


@dataclass(frozen=True)
class StreamSnapshot:
    """The accumulated text of a stream at one point in time (not a delta)."""
    text: str
    is_final: bool = False
    total_tokens: Optional[int] = None


def _truncate(text: str, limit: int = 500) -> str:
    return f"{text[:limit]}{'...' if len(text) > limit else ''}"


class OpenAITransport:
    """Sends chat messages to an OpenAI-compatible server."""

    def __init__(self, config: ChatConfig, client: Optional[openai.OpenAI] = None):
        self.config = config
        self.client = client or openai.OpenAI(
            base_url=f"{config.base_url}/v1",
            api_key=config.api_key,
            timeout=120.0  # long replies with reasoning take a while
        )

    def _log_prompt(self, messages: List[Dict[str, str]], label: str) -> None:
        logger.debug(f"=== {label} PROMPT ===")
        for msg in messages:
            logger.debug(f"{msg['role'].upper()}: {_truncate(msg['content'])}")

    def send_once(self, messages: List[Dict[str, str]]) -> CompletionResult:
        """Send messages and wait for the complete reply.

        Raises:
            openai.OpenAIError: On connection or API errors
        """
        self._log_prompt(messages, "CHAT")
        response = self.client.chat.completions.create(
            model=self.config.model,
            messages=messages,
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )
        text = response.choices[0].message.content or ""
        usage = getattr(response, 'usage', None)
        total_tokens = usage.total_tokens if usage is not None else None

        logger.debug(f"Response: {_truncate(text)}")
        return CompletionResult(text=text, total_tokens=total_tokens)

    def send_streaming(self, messages: List[Dict[str, str]]) -> Iterator[StreamSnapshot]:
        """Send messages and yield a snapshot for every received content delta.

        The last event has is_final=True and carries the complete text.

        Raises:
            openai.OpenAIError: On connection or API errors (while iterating)
        """
        self._log_prompt(messages, "STREAMING CHAT")
        stream = self.client.chat.completions.create(
            model=self.config.model,
            messages=messages,
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
            stream=True,
            stream_options={"include_usage": True},
        )

        full_content = ""
        total_tokens = None
        for chunk in stream:
            usage = getattr(chunk, 'usage', None)
            if usage is not None:
                total_tokens = usage.total_tokens
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta.content
            if delta:
                full_content += delta
                yield StreamSnapshot(text=full_content)

        logger.debug(f"Streaming response: {_truncate(full_content)}")
        yield StreamSnapshot(text=full_content, is_final=True, total_tokens=total_tokens)
