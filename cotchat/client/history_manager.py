"""
Conversation history and token usage tracking.

The history is the context sent with every request: user messages are
stored without the chain-of-thought instructions, assistant messages as the
full raw reply so the model keeps seeing its own format.

Learning Points:
- get_history() hands out a copy; callers append the outgoing turn to it
- Token usage is best-effort: servers that omit usage leave the total alone
- rich Table with overflow="fold" for long messages
"""

from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table

from .config import ChatConfig


class HistoryManager:
    """Manages conversation history and the running token count."""

    def __init__(self, config: ChatConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()
        self.conversation_history: List[Dict[str, str]] = []
        self.total_tokens = 0

    def add_message(self, role: str, content: str):
        """Add a message to the conversation history."""
        self.conversation_history.append({"role": role, "content": content})

    def get_history(self) -> List[Dict[str, str]]:
        """Get a copy of the current conversation history."""
        return self.conversation_history.copy()

    def update_token_count(self, new_tokens) -> int:
        """Add a usage figure to the running total.

        Args:
            new_tokens: Token count reported by the server, or None when the
                reply carried no usage. Anything that is not an int (bools
                included) is ignored.

        Returns:
            int: The running total after the update
        """
        if isinstance(new_tokens, int) and not isinstance(new_tokens, bool):
            self.total_tokens += new_tokens
        return self.total_tokens

    def clear_history(self) -> None:
        """Clear conversation history."""
        self.conversation_history = []
        self.console.print("[green]🧹 Conversation history cleared[/green]")

    def show_history(self) -> None:
        """Show conversation history."""
        if not self.conversation_history:
            self.console.print("[dim]📝 No conversation history[/dim]")
            return

        table = Table(title="📝 Conversation History", show_header=True, header_style="bold magenta")
        table.add_column("Turn", style="cyan", no_wrap=True, width=4)
        table.add_column("Role", style="bold", width=10)
        table.add_column("Content", style="white", overflow="fold")

        for i, msg in enumerate(self.conversation_history, 1):
            content = msg['content']
            if len(content) > 100:
                content = content[:97] + "..."
            table.add_row(str(i), msg['role'].title(), content)

        self.console.print(table)
