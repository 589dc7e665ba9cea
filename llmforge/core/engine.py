"""Execution engine: validates a transformer and runs it as a cancellable task."""

import asyncio
import logging
import os
from enum import Enum
from typing import Callable, List, Optional

from llmforge.core.exceptions import EngineError, ValidationError
from llmforge.core.files import (
    get_absolute_path,
    has_files,
    has_read_write_access,
    is_valid_file_path,
    is_valid_folder_path,
)
from llmforge.core.metrics import RunMetrics
from llmforge.core.walker import BatchWalker, CancellationToken, ProgressHandler
from llmforge.llm.base import Gateway
from llmforge.models.progress import ProgressEvent
from llmforge.models.settings import Settings
from llmforge.models.transformer_config import InputType, TransformerConfig

logger = logging.getLogger(__name__)

OutputOpener = Callable[[str], None]


def validate_execution(
    config: TransformerConfig, settings: Settings, workspace_root: Optional[str] = None
) -> None:
    """Check every precondition of a run before any LLM call is made.

    Raises:
        ValidationError: On the first failed precondition
    """
    context = {"transformer": config.name}

    if not settings.accept_terms:
        raise ValidationError(
            "Please accept the terms of service before executing a transformer",
            context=context,
        )

    if not config.input:
        raise ValidationError("Transformer has no inputs", context=context)

    for config_input in config.input:
        input_context = {**context, "input": config_input.name}
        if config_input.value is None or not config_input.value.strip():
            raise ValidationError(
                f"Input value cannot be empty: {config_input.name}", context=input_context
            )

        if config_input.type == InputType.FILE:
            if not is_valid_file_path(config_input.value, workspace_root):
                raise ValidationError(
                    f"Input file does not exist: {config_input.value}",
                    context=input_context,
                )
            if not has_read_write_access(config_input.value, workspace_root):
                raise ValidationError(
                    f"No read/write access to input file: {config_input.value}",
                    context=input_context,
                )

        if config_input.type == InputType.FOLDER:
            location = get_absolute_path(config_input.value, workspace_root)
            if not location or not os.path.exists(location):
                raise ValidationError(
                    f"Input folder does not exist: {config_input.value}",
                    context=input_context,
                )
            if not has_read_write_access(location):
                raise ValidationError(
                    f"No read/write access to input folder: {config_input.value}",
                    context=input_context,
                )
            if is_valid_folder_path(location) and not has_files(location):
                raise ValidationError(
                    f"Input folder is empty: {config_input.value}", context=input_context
                )

    if not config.output_folder or not config.output_folder.strip():
        raise ValidationError("Output folder must be specified", context=context)

    output_path = get_absolute_path(config.output_folder, workspace_root)
    if not output_path:
        raise ValidationError(
            "Output folder must either be an absolute path or be relative to the workspace root",
            context=context,
        )
    if os.path.exists(output_path):
        if not os.path.isdir(output_path):
            raise ValidationError(
                f"Output folder is not a directory: {config.output_folder}", context=context
            )
        if not has_read_write_access(output_path):
            raise ValidationError(
                f"No read/write access to output folder: {config.output_folder}",
                context=context,
            )


class RunStatus(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"
    FAILED = "failed"


class ExecutionRun:
    """Handle on one transformer run.

    Each run owns its cancellation token, so stopping one run never affects
    another.
    """

    def __init__(self, config: TransformerConfig):
        self.config = config
        self.token = CancellationToken()
        self.status = RunStatus.IDLE
        self.outputs: List[str] = []
        self.error: Optional[Exception] = None
        self.metrics = RunMetrics(config.name)
        self._handlers: List[ProgressHandler] = []
        self._task: Optional[asyncio.Task] = None

    def on_progress(self, handler: ProgressHandler) -> None:
        """Register a progress event handler for this run."""
        self._handlers.append(handler)

    def stop(self) -> None:
        """Request a stop. The item in flight finishes; no further item starts."""
        self.token.stop()

    @property
    def done(self) -> bool:
        return self.status in (RunStatus.COMPLETED, RunStatus.STOPPED, RunStatus.FAILED)

    async def wait(self) -> "ExecutionRun":
        """Wait for the run to finish.

        Raises:
            EngineError: If the run failed
        """
        if self._task is not None:
            await self._task
        if self.error is not None:
            raise self.error
        return self

    def _emit(self, event: ProgressEvent) -> None:
        for handler in self._handlers:
            handler(event)


class ExecutionEngine:
    """Runs transformer configurations against an LLM gateway."""

    def __init__(
        self,
        settings: Settings,
        gateway: Optional[Gateway] = None,
        workspace_root: Optional[str] = None,
        open_output: Optional[OutputOpener] = None,
    ):
        self.settings = settings
        self.workspace_root = workspace_root or settings.resolved_workspace_root()
        self.open_output = open_output
        if gateway is None:
            from llmforge.llm.client import LLMClient

            gateway = LLMClient(settings)
        self.gateway = gateway

    def start(self, config: TransformerConfig) -> ExecutionRun:
        """Validate ``config`` and schedule its run on the running event loop.

        Raises:
            ValidationError: If a precondition fails; nothing is scheduled
        """
        run = ExecutionRun(config)
        run.status = RunStatus.VALIDATING
        try:
            validate_execution(config, self.settings, self.workspace_root)
        except ValidationError as e:
            run.status = RunStatus.FAILED
            run.error = e
            logger.error(str(e), extra={"transformer_name": config.name})
            raise

        run._task = asyncio.get_running_loop().create_task(self._run(run))
        return run

    async def execute(self, config: TransformerConfig) -> ExecutionRun:
        """Validate, run and wait for ``config``.

        Raises:
            ValidationError: If a precondition fails
            EngineError: If the run fails
        """
        run = self.start(config)
        return await run.wait()

    async def _run(self, run: ExecutionRun) -> None:
        config = run.config
        run.status = RunStatus.RUNNING
        logger.info("Starting execution", extra={"transformer_name": config.name})

        walker = BatchWalker(
            self.gateway,
            workspace_root=self.workspace_root,
            token=run.token,
            metrics=run.metrics,
        )
        walker.on_progress(lambda event: self._handle_event(run, event))

        try:
            run.outputs = await walker.execute(config)
        except Exception as e:
            run.metrics.record_error(e)
            run.metrics.finish()
            run.status = RunStatus.FAILED
            run.error = EngineError(
                f'Failed to execute transformer "{config.name}": {e}',
                context={"transformer_name": config.name},
            )
            run.error.__cause__ = e
            logger.error(
                str(run.error), extra={"transformer_name": config.name}, exc_info=True
            )
            return

        run.metrics.finish()
        run.status = RunStatus.STOPPED if walker.stopped_early else RunStatus.COMPLETED
        if not run.outputs:
            logger.warning(
                "Execution finished without creating any output",
                extra={"transformer_name": config.name},
            )
        logger.info(
            f"Completed execution: {run.metrics.get_summary()}",
            extra={"transformer_name": config.name},
        )

    def _handle_event(self, run: ExecutionRun, event: ProgressEvent) -> None:
        extra = {"transformer_name": run.config.name}
        if event.sub_type == "progress":
            logger.warning(event.message, extra=extra)
        else:
            logger.info(event.message, extra=extra)

        run._emit(event)

        if event.sub_type == "outputCreated" and self.open_output and event.output_uri:
            try:
                self.open_output(event.output_uri)
            except Exception as e:
                logger.warning(f"Could not open output {event.output_uri}: {e}", extra=extra)


def run_async(coro):
    """Run a coroutine from synchronous code."""
    return asyncio.run(coro)
