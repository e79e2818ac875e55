"""
Configuration management for the chat client.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .settings import ChatSettings


DEFAULT_BASE_URL = "http://localhost:8000"

# CLI argument name -> (section, key) in the merged config dict
ARG_MAPPING = {
    'base_url': ('client', 'base_url'),
    'model': ('client', 'model'),
    'api_key': ('client', 'api_key'),
    'temperature': ('client', 'temperature'),
    'max_tokens': ('client', 'max_tokens'),
    'debug': ('client', 'debug'),
    'stream': ('settings', 'streaming'),
    'cot': ('settings', 'enable_cot'),
    'show_thinking': ('settings', 'show_thinking'),
}


@dataclass
class ChatConfig:
    """Configuration for the chat client."""
    base_url: str = DEFAULT_BASE_URL
    model: Optional[str] = None
    api_key: Optional[str] = None
    debug: bool = False
    temperature: float = 0.7
    max_tokens: int = 4096
    settings: ChatSettings = field(default_factory=ChatSettings)

    def __post_init__(self):
        """Validate and normalize configuration."""
        self.base_url = self.base_url.rstrip('/')
        if not self.api_key:
            # Local servers accept any key; the client library requires one
            self.api_key = os.environ.get("OPENAI_API_KEY") or "dummy"

    @classmethod
    def from_args(cls, args) -> 'ChatConfig':
        """Create config from parsed command line arguments.

        Values from the optional --config YAML file are applied first and
        explicit CLI values override them.
        """
        config_path = getattr(args, 'config', None)
        data = load_yaml_config(config_path) if config_path else {}
        cli_args = {name: getattr(args, name, None) for name in ARG_MAPPING}
        return cls.from_dict(merge_config(data, cli_args))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChatConfig':
        """Create config from a {'client': {...}, 'settings': {...}} dict.

        Keys set to null (an empty YAML value) fall back to their defaults.
        """
        client = {k: v for k, v in (data.get('client') or {}).items() if v is not None}
        settings = ChatSettings(**{k: v for k, v in (data.get('settings') or {}).items() if v is not None})
        return cls(settings=settings, **client)


def load_yaml_config(yaml_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        yaml_path: Path to the YAML configuration file

    Returns:
        Dictionary containing the configuration data

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the YAML is empty or invalid
    """
    path = Path(yaml_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

    return data


def merge_config(base: Dict[str, Any], cli_args: Dict[str, Any]) -> Dict[str, Any]:
    """Merge CLI arguments into a config dict.

    Only arguments that were actually given (not None) override the base.
    """
    merged = {
        'client': dict(base.get('client') or {}),
        'settings': dict(base.get('settings') or {}),
    }
    for arg_name, value in cli_args.items():
        if value is not None and arg_name in ARG_MAPPING:
            section, key = ARG_MAPPING[arg_name]
            merged[section][key] = value
    return merged


def setup_debug_logging(config: ChatConfig) -> None:
    """Log prompts and responses to llm_debug.log when debug is enabled."""
    if config.debug:
        logging.basicConfig(
            filename='llm_debug.log',
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s',
            filemode='w'
        )
