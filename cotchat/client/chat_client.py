"""
Main chat client that orchestrates all components.
"""

from typing import Optional

from rich.console import Console

from .config import ChatConfig, setup_debug_logging
from .connection_manager import ConnectionManager
from .history_manager import HistoryManager
from .response_handler import ResponseHandler
from .chat_engine import ChatEngine
from .settings import ChatSettings, SettingsManager
from .transport import OpenAITransport
from .ui_manager import UIManager


class ChatClient:
    """Chat client for OpenAI-compatible servers with chain-of-thought display."""

    def __init__(self, config: ChatConfig, transport=None, console: Optional[Console] = None,
                 check_connection: bool = True):
        self.config = config
        setup_debug_logging(config)
        console = console or Console()

        # Initialize components
        self.connection_manager = ConnectionManager(config, console)
        self.transport = transport or OpenAITransport(config)
        self.settings_manager = SettingsManager(config.settings)
        self.response_handler = ResponseHandler(config, console)
        self.history_manager = HistoryManager(config, console)
        self.ui_manager = UIManager(config, console)
        self.chat_engine = ChatEngine(config, self.transport, self.response_handler,
                                      self.history_manager, self.settings_manager, self.ui_manager)

        if check_connection and not self.connection_manager.test_connection():
            raise ConnectionError(f"Failed to connect to server at {config.base_url}")

    def chat(self, message: str) -> str:
        """Send a chat message and get response."""
        return self.chat_engine.chat(message)

    def clear_history(self) -> None:
        """Clear conversation history."""
        self.history_manager.clear_history()

    def show_history(self) -> None:
        """Show conversation history."""
        self.history_manager.show_history()

    @property
    def settings(self) -> ChatSettings:
        return self.settings_manager.get_settings()

    def update_settings(self, **changes) -> ChatSettings:
        """Apply validated settings changes."""
        return self.settings_manager.update_settings(**changes)

    def toggle_setting(self, name: str) -> bool:
        """Flip a boolean setting and return its new value."""
        return self.settings_manager.toggle(name)

    def get_available_models(self):
        """Get available models from the server."""
        return self.connection_manager.get_available_models()

    def set_model(self, model: str):
        """Set the model to use."""
        self.config.model = model
