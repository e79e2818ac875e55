"""
Chat client package.

The response parser and display formatter are pure and importable on their
own; the remaining modules wire them to a transport, a Rich renderer and a
REPL.
"""

from .chat_client import ChatClient
from .config import ChatConfig
from .display_formatter import DisplayConfig, THINKING_PLACEHOLDER, format_for_display
from .response_parser import (
    Classification,
    ParserState,
    ParserStateInUseError,
    Stage,
    classify_complete,
    classify_partial,
    reset_state,
)
from .settings import ChatSettings
from .cli import main

__all__ = [
    'ChatClient', 'ChatConfig', 'ChatSettings', 'main',
    'Classification', 'ParserState', 'ParserStateInUseError', 'Stage',
    'classify_complete', 'classify_partial', 'reset_state',
    'DisplayConfig', 'THINKING_PLACEHOLDER', 'format_for_display',
]
