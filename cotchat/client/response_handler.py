"""
Response handling: classify replies, format them and paint them with Rich.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.markdown import Markdown
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text

from .config import ChatConfig
from .display_formatter import THINKING_PLACEHOLDER, DisplayConfig, format_for_display, is_placeholder
from .response_parser import (
    Classification,
    ParserState,
    Stage,
    classify_complete,
    classify_partial,
)
from .settings import ChatSettings
from .transport import CompletionResult, StreamSnapshot

logger = logging.getLogger('llm_debug')

MARKDOWN_HINTS = ['**', '`', '#', '- ', '1.']


@dataclass(frozen=True)
class ResponseOutcome:
    """What a handled reply leaves behind for history and token accounting."""
    text: str
    classification: Classification
    total_tokens: Optional[int] = None


class ResponseHandler:
    """Turns raw replies into what the user sees."""

    def __init__(self, config: ChatConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()

    def _classify(self, text: str, settings: ChatSettings, state: ParserState, final: bool) -> Classification:
        if not settings.enable_cot:
            return Classification.plain(text)
        if final:
            classification = classify_complete(text, state)
            if classification.reasoning:
                logger.debug(f"AI Thinking: {classification.reasoning}")
            return classification
        return classify_partial(text, state)

    @staticmethod
    def _body(text: str) -> RenderableType:
        if any(hint in text for hint in MARKDOWN_HINTS):
            return Markdown(text)
        return Text(text)

    def build_renderable(self, display_text: str, classification: Optional[Classification] = None,
                         display_config: Optional[DisplayConfig] = None) -> RenderableType:
        """Render a display string produced by format_for_display.

        The reasoning/answer split is only drawn when the formatter emitted
        the full composite: chain of thought on, reasoning shown, and a
        COMPLETE classification. The sections then come straight from the
        classification; display_text is never parsed again.

        Args:
            display_text: Output of format_for_display
            classification: The classification display_text was built from
            display_config: The config display_text was built with

        Returns:
            A spinner for the placeholder, a reasoning panel plus answer for
            the composite, otherwise Markdown or plain Text
        """
        if is_placeholder(display_text):
            return Spinner("dots", text=Text("Thinking...", style="yellow"))

        if (display_config is not None and classification is not None
                and display_config.chain_of_thought_enabled and display_config.show_reasoning
                and classification.is_structured and classification.stage == Stage.COMPLETE):
            return Group(
                Panel(Text(classification.reasoning, style="dim italic"), title="Thinking", border_style="dim"),
                Text("Answer:", style="bold"),
                self._body(classification.answer),
            )

        return self._body(display_text)

    def _panel(self, display_text: str, title: str = "🤖 Assistant", border_style: str = "blue",
               classification: Optional[Classification] = None,
               display_config: Optional[DisplayConfig] = None) -> Panel:
        return Panel(
            self.build_renderable(display_text, classification, display_config),
            title=f"[bold {border_style}]{title}[/bold {border_style}]",
            border_style=border_style,
        )

    def _formatted_panel(self, classification: Classification, display_config: DisplayConfig,
                         title: str = "🤖 Assistant") -> Panel:
        display_text = format_for_display(classification, display_config)
        return self._panel(display_text, title, classification=classification, display_config=display_config)

    def display_response(self, display_text: str, title: str = "🤖 Assistant"):
        """Display a finished response as-is."""
        self.console.print(self._panel(display_text, title))

    def handle_regular_response(self, result: CompletionResult, settings: ChatSettings,
                                state: ParserState) -> ResponseOutcome:
        """Classify and display a non-streaming reply."""
        with state.claim():
            classification = self._classify(result.text, settings, state, final=True)
        self.console.print(self._formatted_panel(classification, settings.display_config()))
        return ResponseOutcome(result.text, classification, result.total_tokens)

    def handle_streaming_response(self, events: Iterable[StreamSnapshot], settings: ChatSettings,
                                  state: ParserState) -> ResponseOutcome:
        """Consume stream snapshots, repainting a live panel for each one.

        Every snapshot is classified as a whole; the final event is
        classified once more as a complete reply. Transport errors are shown
        in the panel and re-raised.
        """
        display_config = settings.display_config()
        title = "🤖 Assistant (streaming)"
        full_content = ""
        total_tokens = None

        with state.claim(), Live(console=self.console, refresh_per_second=10) as live:
            initial = THINKING_PLACEHOLDER if settings.enable_cot else ""
            live.update(self._panel(initial, title))
            try:
                for event in events:
                    full_content = event.text
                    if event.total_tokens is not None:
                        total_tokens = event.total_tokens
                    if event.is_final:
                        break
                    classification = self._classify(full_content, settings, state, final=False)
                    live.update(self._formatted_panel(classification, display_config, title))
            except Exception as e:
                logger.debug(f"Streaming error: {e}")
                live.update(self._panel(f"Error: {e}", "🤖 Assistant", border_style="red"))
                raise

            classification = self._classify(full_content, settings, state, final=True)
            live.update(self._formatted_panel(classification, display_config))

        return ResponseOutcome(full_content, classification, total_tokens)
