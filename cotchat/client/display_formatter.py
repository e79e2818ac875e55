"""
Display formatting for classified chain-of-thought replies.

format_for_display() turns a Classification into the exact string the user
sees. The decision depends on two switches (chain of thought on/off, reasoning
shown/hidden) and on the stage the reply has reached:

    CoT off or unstructured    -> the answer text as-is
    reasoning shown:
        REASONING              -> "Thinking: <reasoning>"
        partial                -> <reasoning>
        COMPLETE               -> "Thinking: ...\n\nAnswer: ..."
    reasoning hidden           -> the answer, or the placeholder

Learning Points:
- Pure function over frozen dataclasses, trivially testable
- The placeholder is a sentinel string; is_placeholder() lets the renderer
  swap it for a spinner
"""

from dataclasses import dataclass

from .response_parser import Classification, Stage


THINKING_PLACEHOLDER = "🤔 Thinking..."


@dataclass(frozen=True)
class DisplayConfig:
    """Visibility settings for a single render call."""
    chain_of_thought_enabled: bool = False
    show_reasoning: bool = True


def is_placeholder(text: str) -> bool:
    """Return True if text is the waiting placeholder rather than content."""
    return text == THINKING_PLACEHOLDER


def format_for_display(classification: Classification, config: DisplayConfig) -> str:
    """Return the exact string to show for a classification.

    Hidden reasoning never leaves the display empty: the placeholder fills
    the gap until an answer arrives.

    Args:
        classification: Output of classify_complete() or classify_partial()
        config: Visibility settings for this render

    Returns:
        str: Display text, possibly THINKING_PLACEHOLDER
    """
    if not config.chain_of_thought_enabled or not classification.is_structured:
        return classification.answer

    if config.show_reasoning:
        if classification.stage == Stage.REASONING:
            return f"Thinking: {classification.reasoning}"
        if classification.is_partial:
            return classification.reasoning
        return f"Thinking: {classification.reasoning}\n\nAnswer: {classification.answer}"

    return classification.answer or THINKING_PLACEHOLDER
