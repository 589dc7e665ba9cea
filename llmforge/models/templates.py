"""Template rendering for settings values with Jinja2-style syntax."""

import os
import re
from typing import Any, Dict

from llmforge.core.exceptions import SettingsError


def render_templates(
    settings_dict: Dict[str, Any], cli_vars: Dict[str, str] | None = None
) -> Dict[str, Any]:
    """
    Render Jinja2-style templates in a settings dictionary.

    Supports:
    - {{ env_var('VAR_NAME') }} - environment variable lookup
    - {{ var('VAR_NAME') }} - CLI variable lookup

    Args:
        settings_dict: Settings dictionary (may contain template expressions)
        cli_vars: Variables passed via CLI (e.g., --vars key=value)

    Returns:
        Settings dictionary with templates rendered
    """
    context = {
        "env_var": lambda key: _get_env_var(key),
        "var": lambda key: _get_cli_var(key, cli_vars or {}),
    }

    return _render_dict(settings_dict, context)


def _get_env_var(key: str) -> str:
    """Get environment variable or raise error if not found."""
    value = os.environ.get(key)
    if value is None:
        raise SettingsError(
            f"Environment variable '{key}' not found",
            context={"key": key},
        )
    return value


def _get_cli_var(key: str, cli_vars: Dict[str, str]) -> str:
    """Get CLI variable or raise error if not found."""
    if key not in cli_vars:
        raise SettingsError(
            f"CLI variable '{key}' not provided",
            context={"key": key, "available": list(cli_vars.keys())},
        )
    return cli_vars[key]


def _render_dict(data: Dict[str, Any], context: Dict[str, Any]) -> Dict[str, Any]:
    return {key: _render_value(value, context) for key, value in data.items()}


def _render_value(value: Any, context: Dict[str, Any]) -> Any:
    if isinstance(value, dict):
        return _render_dict(value, context)
    elif isinstance(value, list):
        return [_render_value(item, context) for item in value]
    elif isinstance(value, str):
        return _render_string(value, context)
    else:
        return value


def _render_string(text: str, context: Dict[str, Any]) -> str:
    """Render ``{{ func('KEY') }}`` expressions in a string."""
    pattern = r"\{\{\s*([^}]+?)\s*\}\}"
    func_pattern = r"(\w+)\(['\"]([^'\"]+)['\"]\)$"

    def replace(match):
        expr = match.group(1).strip()
        func_match = re.match(func_pattern, expr)
        if not func_match:
            raise SettingsError(
                f"Unsupported template expression: {expr}",
                context={"expression": expr},
            )
        func_name, arg = func_match.group(1), func_match.group(2)
        if func_name not in context:
            raise SettingsError(
                f"Unknown function: {func_name}",
                context={"expression": expr, "available": list(context.keys())},
            )
        return str(context[func_name](arg))

    return re.sub(pattern, replace, text)
