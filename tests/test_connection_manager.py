"""Tests for server health checks and model discovery."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import requests

from cotchat.client.config import ChatConfig
from cotchat.client.connection_manager import ConnectionManager


def response(status_code, payload=None):
    return SimpleNamespace(status_code=status_code, json=lambda: payload)


def make_manager(console, *responses):
    manager = ConnectionManager(ChatConfig(base_url="http://server:8000", api_key="k"), console)
    manager.session = MagicMock()
    manager.session.get.side_effect = list(responses)
    return manager


def test_health_endpoint_ok(console, output):
    manager = make_manager(console, response(200))
    assert manager.test_connection()
    manager.session.get.assert_called_once_with("http://server:8000/health", timeout=10)
    assert "Connected" in output.getvalue()


def test_server_starting_up(console):
    assert make_manager(console, response(503)).test_connection()


def test_falls_back_to_models_endpoint(console):
    manager = make_manager(console, response(404), response(200, {"data": []}))
    assert manager.test_connection()
    assert manager.session.get.call_args.args[0] == "http://server:8000/v1/models"


def test_both_endpoints_fail(console, output):
    assert not make_manager(console, response(404), response(401)).test_connection()
    assert "status 401" in output.getvalue()


def test_connection_error(console, output):
    manager = make_manager(console, requests.exceptions.ConnectionError("refused"))
    assert not manager.test_connection()
    assert "Cannot connect" in output.getvalue()


def test_get_available_models(console):
    payload = {"object": "list", "data": [{"id": "model-a"}, {"id": "model-b"}]}
    manager = make_manager(console, response(200, payload))
    assert manager.get_available_models() == ["model-a", "model-b"]


def test_get_available_models_http_error(console, output):
    assert make_manager(console, response(500)).get_available_models() == []
    assert "HTTP 500" in output.getvalue()


def test_get_available_models_network_error(console):
    manager = make_manager(console, requests.exceptions.Timeout("slow"))
    assert manager.get_available_models() == []


def test_session_sends_api_key(console):
    manager = ConnectionManager(ChatConfig(api_key="sk-test"), console)
    assert manager.session.headers["Authorization"] == "Bearer sk-test"
