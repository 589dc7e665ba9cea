"""Tests for template rendering."""

import pytest

from llmforge.core.exceptions import SettingsError
from llmforge.models.templates import render_templates


class TestTemplateRendering:
    """Tests for template rendering functionality."""

    def test_env_var_template(self, env_vars):
        """Test {{ env_var('KEY') }} template."""
        result = render_templates({"api_key": "{{ env_var('TEST_API_KEY') }}"})
        assert result["api_key"] == "sk-test"

    def test_env_var_missing(self):
        """Test that missing env_var raises error."""
        with pytest.raises(SettingsError) as exc_info:
            render_templates({"api_key": "{{ env_var('MISSING_VAR') }}"})
        assert "MISSING_VAR" in str(exc_info.value)

    def test_var_template(self, cli_vars):
        """Test {{ var('KEY') }} template with CLI vars."""
        result = render_templates({"model_name": "{{ var('CLI_VAR_1') }}"}, cli_vars)
        assert result["model_name"] == "cli_value_1"

    def test_var_missing(self):
        """Test that missing var raises error."""
        with pytest.raises(SettingsError) as exc_info:
            render_templates({"model_name": "{{ var('MISSING_VAR') }}"}, {})
        assert "MISSING_VAR" in str(exc_info.value)

    def test_nested_and_embedded(self, env_vars, cli_vars):
        """Test templates in nested structures and inside longer strings."""
        data = {
            "workspace_root": "/data/{{ var('CLI_VAR_2') }}/work",
            "extra": {"models": ["{{ env_var('TEST_MODEL') }}", 3]},
        }
        result = render_templates(data, cli_vars)
        assert result["workspace_root"] == "/data/cli_value_2/work"
        assert result["extra"]["models"] == ["gpt-4o-mini", 3]

    def test_non_string_values_untouched(self):
        assert render_templates({"token_limit": 100, "accept_terms": True}) == {
            "token_limit": 100,
            "accept_terms": True,
        }

    def test_unsupported_expression(self):
        with pytest.raises(SettingsError) as exc_info:
            render_templates({"x": "{{ settings.name }}"})
        assert "Unsupported template expression" in str(exc_info.value)

    def test_unknown_function(self):
        with pytest.raises(SettingsError) as exc_info:
            render_templates({"x": "{{ secret('KEY') }}"})
        assert "Unknown function: secret" in str(exc_info.value)
