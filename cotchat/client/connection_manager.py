"""
Connection management for OpenAI-compatible chat servers.

This module handles the plain HTTP side of talking to a server:
- Health checks before the first chat request
- Model discovery via the /v1/models endpoint

Chat completions themselves go through the openai client (see transport.py).

Learning Points:
- requests.Session() reuses TCP connections across calls
- Servers differ: vLLM has /health, Ollama and OpenAI only expose /v1/models
- Errors here are reported to the user and turned into False / [] results
"""

import logging
from typing import List, Optional

import requests
from rich.console import Console

from .config import ChatConfig

logger = logging.getLogger('llm_debug')


class ConnectionManager:
    """Checks connectivity and lists models on the chat server."""

    def __init__(self, config: ChatConfig, console: Optional[Console] = None):
        """Initialize the connection manager.

        Args:
            config: ChatConfig object with server connection settings
            console: Rich console for status output
        """
        self.config = config
        self.session = requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {config.api_key}"})
        self.console = console or Console()

    def test_connection(self) -> bool:
        """Test connection using the health endpoint, then the models endpoint.

        Returns:
            bool: True if server is reachable and healthy, False otherwise
        """
        url = self.config.base_url
        try:
            response = self.session.get(f"{url}/health", timeout=10)
            if response.status_code == 200:
                self.console.print(f"[green]✓[/green] Connected to server at {url}")
                return True
            if response.status_code == 503:
                # Server still loading the model
                self.console.print(f"[yellow]⚠[/yellow] Server is starting up at {url} (status 503)")
                return True

            # No /health (or it is protected): an OpenAI-compatible models listing is enough
            models_response = self.session.get(f"{url}/v1/models", timeout=10)
            if models_response.status_code == 200:
                self.console.print(f"[green]✓[/green] Connected to OpenAI-compatible server at {url}")
                return True
            self.console.print(f"[yellow]⚠[/yellow] Server responded with status {models_response.status_code}")
            return False

        except requests.exceptions.RequestException as e:
            logger.debug(f"Connection test failed: {e}")
            self.console.print(f"[red]❌[/red] Cannot connect to server: {e}")
            self.console.print(f"Make sure the server is running at {url}")
            return False

    def get_available_models(self) -> List[str]:
        """Query the server for available model IDs.

        API Response Format (OpenAI-compatible):
        {
            "object": "list",
            "data": [{"id": "Qwen/Qwen2.5-7B-Instruct", "object": "model", ...}]
        }

        Returns:
            List[str]: Model IDs, or an empty list if the query failed
        """
        try:
            response = self.session.get(f"{self.config.base_url}/v1/models", timeout=10)
            if response.status_code != 200:
                self.console.print(f"[yellow]⚠[/yellow] Could not fetch models: HTTP {response.status_code}")
                return []
            data = response.json()
            return [model['id'] for model in data.get('data', [])]

        except (requests.exceptions.RequestException, ValueError, KeyError) as e:
            self.console.print(f"[yellow]⚠[/yellow] Could not fetch models: {e}")
            return []
