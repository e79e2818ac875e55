"""Runtime chat settings.

These are the toggles a user can flip during a session (streaming,
chain-of-thought prompting, reasoning visibility). They are validated with
Pydantic so a typo in a YAML file or a slash command fails loudly.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .display_formatter import DisplayConfig


class ChatSettings(BaseModel):
    """User-facing settings for the chat session."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    streaming: bool = Field(
        default=False,
        description="Stream tokens as they are generated"
    )
    enable_cot: bool = Field(
        default=False,
        description="Ask the model for Thinking:/Answer: structured replies"
    )
    show_thinking: bool = Field(
        default=True,
        description="Show the reasoning segment alongside the answer"
    )

    def display_config(self) -> DisplayConfig:
        """Visibility settings handed to the display formatter."""
        return DisplayConfig(
            chain_of_thought_enabled=self.enable_cot,
            show_reasoning=self.show_thinking,
        )


class SettingsManager:
    """Holds the current settings and applies validated updates."""

    def __init__(self, settings: Optional[ChatSettings] = None):
        self._settings = settings if settings is not None else ChatSettings()

    def get_settings(self) -> ChatSettings:
        """Get the current settings."""
        return self._settings

    def update_settings(self, **changes: Any) -> ChatSettings:
        """Merge changes into the current settings.

        Raises:
            pydantic.ValidationError: On unknown keys or wrong types
        """
        merged = {**self._settings.model_dump(), **changes}
        self._settings = ChatSettings(**merged)
        return self._settings

    def toggle(self, name: str) -> bool:
        """Flip a boolean setting and return its new value."""
        current = getattr(self._settings, name)
        self.update_settings(**{name: not current})
        return not current
