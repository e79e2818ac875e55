"""
CLI interface for the chat client.

Implements a REPL (Read-Eval-Print Loop) for chatting with an
OpenAI-compatible server, with slash commands for runtime settings.

Learning Points:
- argparse for flags, with None defaults so YAML values are not clobbered
- prompt_toolkit for history and styling, input() as the fallback
- Command dispatch table for slash commands
- Graceful handling of Ctrl+C / Ctrl+D and validation errors
"""

import argparse
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style
from pydantic import ValidationError

from .config import ChatConfig
from .chat_client import ChatClient


# Slash command -> boolean setting it toggles
TOGGLE_COMMANDS = {
    'stream': ('streaming', "Streaming"),
    'cot': ('enable_cot', "Chain of thought"),
    'thinking': ('show_thinking', "Show thinking"),
}

QUIT_COMMANDS = ('quit', 'exit', 'q')


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the chat CLI."""
    parser = argparse.ArgumentParser(
        description="CLI chat client with chain-of-thought reasoning display",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument('--config', help='Path to YAML configuration file')

    # Server connection
    parser.add_argument('--base-url', help='Server base URL (default: http://localhost:8000)')
    parser.add_argument('--model', help='Model name (if not specified, will try to detect from server)')
    parser.add_argument('--api-key', help='API key (default: $OPENAI_API_KEY)')

    # Generation parameters
    parser.add_argument('--temperature', type=float, help='Sampling temperature')
    parser.add_argument('--max-tokens', type=int, help='Maximum tokens to generate')

    # Feature flags; None means "not given" so YAML values survive
    parser.add_argument('--stream', action='store_true', default=None,
                        help='Enable streaming responses')
    parser.add_argument('--cot', action='store_true', default=None,
                        help='Ask the model for Thinking:/Answer: replies')
    parser.add_argument('--hide-thinking', dest='show_thinking', action='store_false', default=None,
                        help='Show only the answer segment of chain-of-thought replies')
    parser.add_argument('--debug', action='store_true', default=None,
                        help='Log prompts and responses to llm_debug.log')
    return parser


def create_prompt_session():
    """Create a prompt session with history and styling.

    Returns None when stdin is not a terminal (piped input), in which case
    the caller falls back to input().
    """
    if not sys.stdin.isatty():
        return None
    return PromptSession(
        history=InMemoryHistory(),
        style=Style.from_dict({'prompt': 'bold cyan'}),
        message="You: "
    )


def handle_command(client: ChatClient, user_input: str) -> bool:
    """Run a slash command.

    Returns:
        bool: False when the REPL should exit
    """
    cmd = user_input[1:].lower()
    ui = client.ui_manager

    if cmd in QUIT_COMMANDS:
        ui.console.print("[yellow]👋 Goodbye![/yellow]")
        return False
    if cmd == 'help':
        ui.show_help()
    elif cmd == 'clear':
        client.clear_history()
    elif cmd == 'history':
        client.show_history()
    elif cmd == 'settings':
        ui.show_settings(client.settings)
    elif cmd == 'tokens':
        ui.show_tokens(client.history_manager.total_tokens)
    elif cmd in TOGGLE_COMMANDS:
        name, label = TOGGLE_COMMANDS[cmd]
        enabled = client.toggle_setting(name)
        ui.show_success(f"{label}: {'on' if enabled else 'off'}")
    else:
        ui.show_error(f"Unknown command: {user_input}")
    return True


def run_repl(client: ChatClient, session=None) -> None:
    """Read messages until the user quits."""
    while True:
        try:
            if session:
                user_input = session.prompt().strip()
            else:
                user_input = input("You: ").strip()

            if not user_input:
                continue

            if user_input.startswith('/'):
                if not handle_command(client, user_input):
                    break
                continue

            client.chat(user_input)

        except KeyboardInterrupt:
            client.ui_manager.console.print("\n[yellow]👋 Goodbye![/yellow]")
            break
        except EOFError:
            break


def main(argv=None):
    """Parse arguments, connect, pick a model and run the REPL.

    Exit Codes:
        0: Normal exit (user quit)
        1: Error (bad config, connection failed, no models)
    """
    args = build_parser().parse_args(argv)

    try:
        config = ChatConfig.from_args(args)
    except (FileNotFoundError, ValueError, ValidationError, TypeError) as e:
        print(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    try:
        client = ChatClient(config)
    except ConnectionError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    if not client.config.model:
        models = client.get_available_models()
        if not models:
            client.ui_manager.show_error("No models available on server")
            sys.exit(1)
        client.set_model(models[0])
        client.ui_manager.show_success(f"Auto-selected model: {client.config.model}")

    client.ui_manager.show_welcome(client.config.model, client.settings)

    try:
        run_repl(client, create_prompt_session())
    except Exception as e:
        client.ui_manager.show_error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
