"""CLI command for initializing settings and an example transformer."""

import sys
from pathlib import Path

import click

from llmforge.models.settings import DEFAULT_SETTINGS_PATH


@click.command()
@click.option(
    "--name",
    default="summarize",
    help="Name for the example transformer file (default: summarize)",
)
@click.option(
    "--output-dir",
    default=".",
    type=click.Path(file_okay=False),
    help="Directory to create the transformer file in (default: current directory)",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False),
    help="Settings file to create (default: ~/.llmforge/settings.yaml)",
)
def init(name: str, output_dir: str, settings_path: str | None):
    """Initialize settings and an example transformer.

    Creates:
    - Settings YAML file (skipped if it already exists)
    - Example transformer YAML file
    - Input and output folders used by the example

    Examples:

        llmforge init
        llmforge init --name release_notes
        llmforge init --settings ./settings.yaml --output-dir transformers/
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    settings_file = Path(settings_path) if settings_path else DEFAULT_SETTINGS_PATH
    transformer_file = output_path / f"{name}.yaml"

    if transformer_file.exists():
        click.echo(f"Transformer file already exists: {transformer_file}", err=True)
        click.echo("Use --name to specify a different name", err=True)
        sys.exit(1)

    if settings_file.exists():
        click.echo(f"Settings file already exists: {settings_file}")
    else:
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings_file.write_text(SETTINGS_TEMPLATE)
        click.echo(f"Created settings file: {settings_file}")

    transformer_content = f"""name: {name}
description: Summarize each document of a folder
prompt: |
  Summarize the following document in five bullet points.

  {{{{document::folder}}}}
input:
  - name: document
    type: folder
    value: {name}_input
outputFolder: {name}_output
outputFileName: "*.md"
temperature: 0.3
processFormat: eachFile
"""
    transformer_file.write_text(transformer_content)
    click.echo(f"Created transformer file: {transformer_file}")

    input_dir = output_path / f"{name}_input"
    input_dir.mkdir(parents=True, exist_ok=True)
    click.echo(f"Created input folder: {input_dir}")

    click.echo("")
    click.echo("Next steps:")
    click.echo(f"  1. Set your provider and api_key in {settings_file}, and accept_terms: true")
    click.echo(f"  2. Put the documents to summarize in {input_dir}")
    click.echo(f"  3. Run: llmforge create {transformer_file}")
    click.echo(f"  4. Run: llmforge run {name}")


SETTINGS_TEMPLATE = """# llmforge settings
# Values support {{ env_var('NAME') }} and {{ var('NAME') }} templates.

# One of: OpenAI, Azure OpenAI, Google Gemini, DeepSeek, Custom
ai_provider: OpenAI
# api_key: "{{ env_var('OPENAI_API_KEY') }}"
model_name: gpt-4o
# model_endpoint: https://my-resource.openai.azure.com
# api_version: 2024-06-01

# Transformers only run once the provider's terms of service are accepted.
accept_terms: false
token_limit: 4000
request_timeout: 300
max_retries: 3

# workspace_root: ~/work
# library_path: ~/.llmforge/library.json
# git_library_name: owner/repo
# github_token: "{{ env_var('GITHUB_TOKEN') }}"
"""
