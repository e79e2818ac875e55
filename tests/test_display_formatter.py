"""Tests for display formatting of classified replies."""

import pytest

from cotchat.client.display_formatter import (
    THINKING_PLACEHOLDER,
    DisplayConfig,
    format_for_display,
    is_placeholder,
)
from cotchat.client.response_parser import Classification, Stage, classify_complete


CLASSIFICATIONS = [
    Classification(),
    Classification.plain("plain text"),
    Classification(reasoning="r", answer="a", is_structured=True, stage=Stage.COMPLETE),
    Classification(reasoning="r", is_structured=True, is_partial=True, stage=Stage.REASONING),
    Classification(reasoning="r", is_partial=True),
]


@pytest.mark.parametrize("classification", CLASSIFICATIONS)
@pytest.mark.parametrize("show_reasoning", [True, False])
def test_cot_disabled_returns_answer(classification, show_reasoning):
    """With chain of thought off the answer is shown verbatim."""
    config = DisplayConfig(chain_of_thought_enabled=False, show_reasoning=show_reasoning)
    assert format_for_display(classification, config) == classification.answer


def test_unstructured_returns_answer():
    config = DisplayConfig(chain_of_thought_enabled=True, show_reasoning=True)
    classification = classify_complete("Sure. Thinking: hmm")
    assert format_for_display(classification, config) == ""


def test_show_reasoning_while_reasoning():
    config = DisplayConfig(chain_of_thought_enabled=True, show_reasoning=True)
    classification = classify_complete("Thinking: working on it")
    assert format_for_display(classification, config) == "Thinking: working on it"


def test_show_reasoning_partial_outside_reasoning_stage():
    config = DisplayConfig(chain_of_thought_enabled=True, show_reasoning=True)
    classification = Classification(reasoning="half done", is_structured=True, is_partial=True, stage=Stage.NONE)
    assert format_for_display(classification, config) == "half done"


def test_show_reasoning_complete():
    config = DisplayConfig(chain_of_thought_enabled=True, show_reasoning=True)
    classification = classify_complete("Thinking: because\nAnswer: yes")
    assert format_for_display(classification, config) == "Thinking: because\n\nAnswer: yes"


def test_hidden_reasoning_shows_placeholder_until_answer():
    """Hidden reasoning never leaves the display empty."""
    config = DisplayConfig(chain_of_thought_enabled=True, show_reasoning=False)
    waiting = classify_complete("Thinking: secret")
    done = classify_complete("Thinking: secret\nAnswer: public")

    assert format_for_display(waiting, config) == THINKING_PLACEHOLDER
    assert format_for_display(done, config) == "public"


def test_is_placeholder():
    assert is_placeholder(THINKING_PLACEHOLDER)
    assert not is_placeholder("Thinking...")
    assert not is_placeholder("")
