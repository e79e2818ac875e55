"""
Structured response parsing for chain-of-thought replies.

Models asked to "think step by step" reply in a lightweight text protocol:

    Thinking: <reasoning, possibly many lines>
    Answer: <final answer>

This module splits such text into a reasoning segment and an answer segment.
It works on complete replies and on streaming snapshots (the full text
received so far, not a delta).

Learning Points:
- Pure functions over strings: no I/O, nothing raised, easy to test
- Explicit per-request state instead of module-level globals
- Literal substring scans (str.find) instead of regex greedy/lazy rules
- Re-evaluating the whole snapshot each time keeps partial states simple
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple


THINKING_MARKER = "Thinking:"
ANSWER_MARKER = "Answer:"

COT_INSTRUCTIONS = (
    "I'd like you to use Chain of Thought reasoning. Please think step-by-step "
    "before providing your final answer. Format your response like this:\n"
    "Thinking: [detailed reasoning process, exploring different angles and considerations]\n"
    "Answer: [your final, concise answer based on the reasoning above]"
)


class Stage(str, Enum):
    """How far a reply has progressed through the marker protocol."""
    NONE = "none"
    REASONING = "reasoning"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Classification:
    """Result of classifying a reply (or a snapshot of one)."""
    reasoning: str = ""
    answer: str = ""
    is_structured: bool = False
    is_partial: bool = False
    stage: Stage = Stage.NONE

    @classmethod
    def plain(cls, text: str) -> 'Classification':
        """Unstructured classification that shows the text as-is."""
        return cls(answer=text)


class ParserStateInUseError(RuntimeError):
    """Raised when a ParserState is claimed by a second in-flight stream."""


@dataclass
class ParserState:
    """Carry-forward values for one request.

    A later snapshot may momentarily fail to match the protocol; the last
    non-empty segments let the display avoid regressing. One instance belongs
    to exactly one request, see reset_state().
    """
    last_reasoning: str = ""
    last_answer: str = ""
    is_awaiting_answer: bool = False
    _claimed: bool = field(default=False, init=False, repr=False, compare=False)

    @contextmanager
    def claim(self) -> Iterator['ParserState']:
        """Bind this state to a single in-flight stream."""
        if self._claimed:
            raise ParserStateInUseError("ParserState is already bound to an in-flight stream")
        self._claimed = True
        try:
            yield self
        finally:
            self._claimed = False

    def remember(self, result: Classification) -> None:
        if result.reasoning:
            self.last_reasoning = result.reasoning
        if result.answer and result.is_structured:
            self.last_answer = result.answer
        self.is_awaiting_answer = result.stage == Stage.REASONING


def reset_state() -> ParserState:
    """Create a fresh ParserState for a new user-initiated request."""
    return ParserState()


def enhance_with_cot(message: str) -> str:
    """Append the chain-of-thought format instructions to a user message."""
    return f"{message}\n\n{COT_INSTRUCTIONS}"


def _extract_segments(text: str) -> Tuple[str, str]:
    """Split text that contains both markers into (reasoning, answer).

    Reasoning runs from the first "Thinking:" to the first "Answer:" after it
    (or to the end). Answer runs from the first "Answer:" anywhere to the end.
    """
    reasoning_start = text.find(THINKING_MARKER) + len(THINKING_MARKER)
    reasoning_end = text.find(ANSWER_MARKER, reasoning_start)
    if reasoning_end == -1:
        reasoning_end = len(text)
    answer_start = text.find(ANSWER_MARKER) + len(ANSWER_MARKER)
    return text[reasoning_start:reasoning_end].strip(), text[answer_start:].strip()


def _after_thinking(text: str) -> str:
    return text[text.find(THINKING_MARKER) + len(THINKING_MARKER):].strip()


def _resolved(reasoning: str, answer: str, state: ParserState) -> Classification:
    """Classification for text containing both markers."""
    reasoning = reasoning or state.last_reasoning
    if not answer:
        # "Answer:" has arrived but nothing after it yet
        return Classification(
            reasoning=reasoning,
            answer="",
            is_structured=True,
            is_partial=True,
            stage=Stage.REASONING,
        )
    return Classification(
        reasoning=reasoning,
        answer=answer,
        is_structured=True,
        is_partial=False,
        stage=Stage.COMPLETE,
    )


def classify_complete(text: str, state: Optional[ParserState] = None) -> Classification:
    """Classify a finished (non-streaming) reply.

    Args:
        text: Complete response body
        state: Request state to read carry-forward values from and update.
            A throwaway state is used when omitted.

    Returns:
        Classification: Never raises, including for the empty string

    Extraction Rules (first match wins):
        1. Both markers present -> COMPLETE
        2. Starts with "Thinking:", no "Answer:" -> REASONING (partial)
        3. "Thinking:" somewhere else -> unstructured partial reasoning
        4. No markers -> the whole text is the answer
    """
    if state is None:
        state = reset_state()

    has_thinking = THINKING_MARKER in text
    has_answer = ANSWER_MARKER in text

    if has_thinking and has_answer:
        result = _resolved(*_extract_segments(text), state)
    elif text.startswith(THINKING_MARKER):
        result = Classification(
            reasoning=_after_thinking(text) or state.last_reasoning,
            answer=state.last_answer,
            is_structured=True,
            is_partial=True,
            stage=Stage.REASONING,
        )
    elif has_thinking:
        # Marker appears mid-text: keep what follows it as reasoning only
        result = Classification(
            reasoning=_after_thinking(text),
            answer="",
            is_structured=False,
            is_partial=True,
            stage=Stage.NONE,
        )
    else:
        result = Classification.plain(text)

    state.remember(result)
    return result


def classify_partial(text: str, state: ParserState) -> Classification:
    """Classify one streaming snapshot (the full text accumulated so far).

    Called for every event while a stream is in flight. The entire snapshot
    is re-evaluated each time, which is quadratic over a stream but bounded
    by the model's output token limit.
    """
    has_thinking = THINKING_MARKER in text
    has_answer = ANSWER_MARKER in text

    if has_thinking and not has_answer:
        result = Classification(
            reasoning=_after_thinking(text) or state.last_reasoning,
            answer=state.last_answer,
            is_structured=True,
            is_partial=True,
            stage=Stage.REASONING,
        )
    elif has_thinking and has_answer:
        result = _resolved(*_extract_segments(text), state)
    else:
        result = Classification(answer=text, is_partial=bool(text))

    state.remember(result)
    return result
