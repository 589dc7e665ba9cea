"""CLI command for running transformers."""

import asyncio
import logging
import signal
import sys

import click

from llmforge.cli.common import (
    apply_overrides,
    json_logs_option,
    library_option,
    load_cli_settings,
    load_transformer,
    log_level_option,
    parse_pairs,
    set_option,
    settings_option,
    vars_option,
)
from llmforge.core.engine import ExecutionEngine, ExecutionRun, RunStatus, run_async
from llmforge.core.exceptions import EngineError, GatewayError, LLMForgeError, ValidationError
from llmforge.core.logging import configure_logging
from llmforge.models.transformer_config import TransformerConfig

logger = logging.getLogger(__name__)


def _request_stop(run: ExecutionRun) -> None:
    click.echo("Stopping after the current item...", err=True)
    run.stop()


async def _execute(engine: ExecutionEngine, config: TransformerConfig) -> ExecutionRun:
    run = engine.start(config)
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, _request_stop, run)
        handler_installed = True
    except NotImplementedError:
        logger.debug("Signal handlers are not supported on this event loop")
        handler_installed = False

    try:
        return await run.wait()
    finally:
        if handler_installed:
            loop.remove_signal_handler(signal.SIGINT)


@click.command()
@click.argument("transformer")
@set_option
@click.option("--output-folder", help="Override the transformer's output folder")
@click.option("--open", "open_outputs", is_flag=True, help="Open each output file when written")
@vars_option
@settings_option
@library_option
@log_level_option
@json_logs_option
def run(
    transformer: str,
    overrides: tuple,
    output_folder: str | None,
    open_outputs: bool,
    vars: tuple,
    settings_path: str | None,
    library_path: str | None,
    log_level: str,
    json_logs: bool,
):
    """Run a stored transformer or a definition file.

    Press Ctrl+C to stop: the file in progress finishes and no further file
    is started.

    Examples:

        llmforge run summarize
        llmforge run summarize --set document=docs/ --output-folder out/
        llmforge run summarize.yaml --open
        llmforge run summarize --log-level DEBUG --json-logs
    """
    try:
        settings = load_cli_settings(settings_path, vars)
        config = apply_overrides(
            load_transformer(transformer, settings, library_path),
            parse_pairs(overrides, "input"),
        )
        if output_folder:
            config = config.model_copy(update={"output_folder": output_folder})

        configure_logging(level=log_level, json_format=json_logs, transformer_name=config.name)

        engine = ExecutionEngine(settings, open_output=click.launch if open_outputs else None)
        click.echo(f"Running transformer: {config.name}")
        result = run_async(_execute(engine, config))

    except ValidationError as e:
        click.echo(f"Validation error: {e}", err=True)
        sys.exit(1)
    except (EngineError, GatewayError) as e:
        click.echo(f"Execution error: {e}", err=True)
        sys.exit(1)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for output in result.outputs:
        click.echo(f"  {output}")
    if result.status == RunStatus.STOPPED:
        click.echo(f"Execution stopped: {len(result.outputs)} output(s) written")
    else:
        click.echo(f"Transformer execution completed: {result.metrics.get_summary()}")
    if result.metrics.errors:
        click.echo(f"{result.metrics.errors} file(s) failed, see the log for details", err=True)
