"""
UI management for displaying messages and status.

Everything the REPL prints outside of model replies goes through here:
welcome banner, help and settings tables, token count, error and success
lines. Replies themselves are painted by ResponseHandler.

Learning Points:
- Settings table rows come from the pydantic model fields and descriptions,
  so new settings show up without touching this module
- One shared rich Console, injected so tests can capture output
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import ChatConfig
from .settings import ChatSettings


def _on_off(value: bool) -> str:
    return "Enabled" if value else "Disabled"


class UIManager:
    """Manages user interface elements."""

    def __init__(self, config: ChatConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()

    def show_welcome(self, model: str, settings: ChatSettings):
        """Show welcome message with the active configuration.

        Args:
            model: Model name in use (auto-selected or from config)
            settings: Current runtime settings
        """
        welcome_text = Text()
        welcome_text.append("🤖 Chain-of-Thought Chat Client", style="bold blue")
        welcome_text.append("\n\n", style="")
        welcome_text.append("Configuration:\n", style="bold")
        welcome_text.append(f"• Server: {self.config.base_url}\n", style="")
        welcome_text.append(f"• Model: {model}\n", style="")
        welcome_text.append(f"• Temperature: {self.config.temperature}\n", style="")
        welcome_text.append(f"• Max Tokens: {self.config.max_tokens}\n", style="")
        welcome_text.append(f"• Streaming: {_on_off(settings.streaming)}\n", style="")
        welcome_text.append(f"• Chain of Thought: {_on_off(settings.enable_cot)}\n",
                            style="green" if settings.enable_cot else "")
        welcome_text.append("\nCommands: /help, /settings, /cot, /thinking, /stream, /quit\n", style="dim")
        welcome_text.append("Type your message and press Enter to chat!", style="italic")

        self.console.print(Panel(welcome_text, title=":rocket: Welcome", border_style="blue"))

    def show_settings(self, settings: ChatSettings):
        """Show the current runtime settings."""
        table = Table(title="⚙ Chat Settings")
        table.add_column("Setting", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")
        table.add_column("Description", style="white", overflow="fold")
        for name, info in ChatSettings.model_fields.items():
            table.add_row(name, _on_off(getattr(settings, name)), info.description or "")
        self.console.print(table)

    def show_tokens(self, total_tokens: int):
        """Show the running token count."""
        self.console.print(f"[cyan]🔢 Tokens used this session: {total_tokens}[/cyan]")

    def show_help(self):
        """Show help message."""
        help_table = Table(title="Available Commands")
        help_table.add_column("Command", style="cyan", no_wrap=True)
        help_table.add_column("Description", style="white")
        help_table.add_row("/help", "Show this help message")
        help_table.add_row("/clear", "Clear conversation history")
        help_table.add_row("/history", "Show conversation history")
        help_table.add_row("/settings", "Show current settings")
        help_table.add_row("/stream", "Toggle streaming responses")
        help_table.add_row("/cot", "Toggle chain-of-thought prompting")
        help_table.add_row("/thinking", "Toggle showing the reasoning segment")
        help_table.add_row("/tokens", "Show tokens used this session")
        help_table.add_row("/quit", "Exit the chat")
        self.console.print(help_table)

    def show_error(self, message: str):
        """Show error message."""
        self.console.print(f"[red]❌ {message}[/red]")

    def show_success(self, message: str):
        """Show success message."""
        self.console.print(f"[green]✓ {message}[/green]")
