"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pytest

from llmforge.core.exceptions import GatewayError
from llmforge.models.settings import Settings
from llmforge.models.transformer_config import Input, InputType, TransformerConfig


class FakeGateway:
    """Gateway double recording every prompt it receives.

    ``response`` may be a string or a callable taking the prompt. ``fail_on``
    makes the call raise GatewayError for prompts containing that text.
    ``on_call`` runs after each recorded call, before the response is returned.
    """

    def __init__(self, response="generated output"):
        self.response = response
        self.fail_on = None
        self.on_call = None
        self.prompts = []
        self.options = []

    async def send_request(self, prompt_or_messages, options=None):
        self.prompts.append(prompt_or_messages)
        self.options.append(options)
        if self.on_call:
            self.on_call(len(self.prompts))
        if self.fail_on and self.fail_on in prompt_or_messages:
            raise GatewayError("HTTP error! status: 500")
        if callable(self.response):
            return self.response(prompt_or_messages)
        return self.response


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def gateway_factory():
    """Factory for additional independent fake gateways."""
    return FakeGateway


@pytest.fixture
def settings(temp_dir):
    """Settings that allow execution, rooted at temp_dir."""
    return Settings(accept_terms=True, workspace_root=str(temp_dir))


@pytest.fixture
def make_config():
    """Factory for transformer configurations with sensible defaults."""

    def _make(prompt="Summarize {{doc::file}}", inputs=None, **kwargs):
        data = {
            "id": "t-1",
            "name": "summarize",
            "description": "Summarize a document",
            "prompt": prompt,
            "input": inputs
            if inputs is not None
            else [Input(name="doc", type=InputType.FILE, value="doc.txt")],
            "output_folder": "out",
        }
        data.update(kwargs)
        return TransformerConfig(**data)

    return _make


@pytest.fixture
def env_vars(monkeypatch):
    """Fixture to set environment variables for testing."""
    test_vars = {
        "TEST_API_KEY": "sk-test",
        "TEST_MODEL": "gpt-4o-mini",
    }
    for key, value in test_vars.items():
        monkeypatch.setenv(key, value)
    return test_vars


@pytest.fixture
def cli_vars():
    """Fixture providing CLI variables for testing."""
    return {
        "CLI_VAR_1": "cli_value_1",
        "CLI_VAR_2": "cli_value_2",
    }
