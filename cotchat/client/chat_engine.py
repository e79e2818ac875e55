"""
Core chat flow: one user message in, one displayed reply out.

Each call to chat() is one request with its own lifecycle:

    reset_state()                  fresh ParserState, never shared
        ↓
    history + CoT instructions     build the outgoing messages
        ↓
    transport.send_once()          or transport.send_streaming()
        ↓
    response_handler               classify → format → paint
        ↓
    history + token counter        persist the reply

Learning Points:
- Strategy selection at runtime: streaming vs non-streaming per settings
- Per-request parser state instead of shared globals, so an abandoned or
  failed request can never leak reasoning into the next turn
- Transport errors are reported and returned, the REPL keeps running
"""

import logging
from typing import Dict, List

import openai
import requests

from .config import ChatConfig
from .history_manager import HistoryManager
from .response_handler import ResponseHandler, ResponseOutcome
from .response_parser import enhance_with_cot, reset_state
from .settings import SettingsManager
from .ui_manager import UIManager

logger = logging.getLogger('llm_debug')


class ChatEngine:
    """Runs a single chat turn against the transport."""

    def __init__(self, config: ChatConfig, transport, response_handler: ResponseHandler,
                 history_manager: HistoryManager, settings_manager: SettingsManager,
                 ui_manager: UIManager):
        """Initialize the chat engine with its collaborators.

        Args:
            config: Configuration object with all settings
            transport: Anything with send_once() and send_streaming()
            response_handler: Classifies and displays replies
            history_manager: Conversation context and token count
            settings_manager: Current runtime settings
            ui_manager: Error display
        """
        self.config = config
        self.transport = transport
        self.response_handler = response_handler
        self.history_manager = history_manager
        self.settings_manager = settings_manager
        self.ui_manager = ui_manager

    def build_messages(self, message: str, enable_cot: bool) -> List[Dict[str, str]]:
        """Conversation history plus the current message, CoT-enhanced if enabled.

        History keeps the plain message; only the outgoing copy carries the
        format instructions.
        """
        messages = self.history_manager.get_history()
        outgoing = enhance_with_cot(message) if enable_cot else message
        messages.append({"role": "user", "content": outgoing})
        return messages

    def chat(self, message: str) -> str:
        """Send a chat message, display the reply and return its raw text.

        On transport failure the error is shown and "Error: ..." returned.
        """
        state = reset_state()
        settings = self.settings_manager.get_settings()

        messages = self.build_messages(message, settings.enable_cot)
        self.history_manager.add_message("user", message)

        try:
            if settings.streaming:
                events = self.transport.send_streaming(messages)
                outcome = self.response_handler.handle_streaming_response(events, settings, state)
            else:
                result = self.transport.send_once(messages)
                outcome = self.response_handler.handle_regular_response(result, settings, state)
        except (openai.OpenAIError, requests.exceptions.RequestException) as e:
            logger.debug(f"Chat request failed: {e}")
            error_msg = f"Error: {e}"
            self.ui_manager.show_error(error_msg)
            return error_msg

        self._record(outcome)
        return outcome.text

    def _record(self, outcome: ResponseOutcome) -> None:
        self.history_manager.add_message("assistant", outcome.text)
        total = self.history_manager.update_token_count(outcome.total_tokens)
        logger.debug(f"Stage: {outcome.classification.stage.value}, tokens so far: {total}")
