"""Batch walker: turns one transformer configuration into LLM calls and output files."""

import asyncio
import logging
import os
import time
from pathlib import Path
from typing import Callable, List, Optional

from llmforge.core.exceptions import InvalidPathError
from llmforge.core.files import get_absolute_path, walk_folder_files
from llmforge.core.metrics import RunMetrics
from llmforge.core.output import ensure_output_folder, get_output_file_name, write_output
from llmforge.core.resolver import resolve_prompt
from llmforge.llm.base import Gateway, LLMOptions
from llmforge.models.progress import ProgressEvent
from llmforge.models.transformer_config import (
    InputType,
    ProcessFormat,
    TransformerConfig,
)

logger = logging.getLogger(__name__)

ProgressHandler = Callable[[ProgressEvent], None]


class CancellationToken:
    """Cooperative stop signal checked between batch items."""

    def __init__(self) -> None:
        self._stopped = False

    def stop(self) -> None:
        self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped


def retype_folder_input(config: TransformerConfig, file_path: str) -> TransformerConfig:
    """Return a copy of ``config`` whose folder input is a file input pointing at ``file_path``."""
    inputs = [
        i.model_copy(update={"type": InputType.FILE, "value": file_path})
        if i.type == InputType.FOLDER
        else i
        for i in config.input
    ]
    return config.with_inputs(inputs)


class BatchWalker:
    """Executes the batch items of one run sequentially.

    A configuration without a folder input, a folder input pointing at a
    single file, and a folder in ``joinFiles`` mode each produce one item
    whose failure propagates. A folder in ``eachFile`` mode is walked
    recursively with one item per file; item failures are logged and
    recorded and the walk continues.
    """

    def __init__(
        self,
        gateway: Gateway,
        workspace_root: Optional[str] = None,
        token: Optional[CancellationToken] = None,
        metrics: Optional[RunMetrics] = None,
    ):
        self.gateway = gateway
        self.workspace_root = workspace_root
        self.token = token or CancellationToken()
        self.metrics = metrics
        self.outputs: List[str] = []
        self.stopped_early = False
        self._handlers: List[ProgressHandler] = []

    def on_progress(self, handler: ProgressHandler) -> None:
        """Register a progress event handler."""
        self._handlers.append(handler)

    def _emit(self, event: ProgressEvent) -> None:
        for handler in self._handlers:
            handler(event)

    async def execute(self, config: TransformerConfig) -> List[str]:
        """Run every batch item of ``config``.

        Returns:
            Paths of the output files written, in order

        Raises:
            PathError: If the output folder or a single-item input is unusable
            GatewayError: If the LLM call of a single-item run fails
        """
        self.outputs = []
        self.stopped_early = False

        output_path = get_absolute_path(config.output_folder, self.workspace_root)
        if not output_path:
            raise InvalidPathError(
                "Output folder must either be an absolute path or be relative to the workspace root",
                context={"output_folder": config.output_folder},
            )
        output_folder = await self._run_blocking(ensure_output_folder, output_path)

        folder_input = config.folder_input()
        if folder_input is None:
            await self._process_item(config, output_folder)
            return self.outputs

        location = get_absolute_path(folder_input.value, self.workspace_root)
        if not location or not os.path.exists(location):
            raise InvalidPathError(
                f"Input folder does not exist: {folder_input.value}",
                context={"input": folder_input.name},
            )

        if not os.path.isdir(location):
            await self._process_item(retype_folder_input(config, location), output_folder)
        elif config.process_format == ProcessFormat.JOIN_FILES:
            await self._process_item(config, output_folder)
        else:
            await self._walk(config, Path(location), output_folder)
        return self.outputs

    async def _walk(self, config: TransformerConfig, folder: Path, output_folder: Path) -> None:
        files = await self._run_blocking(list, walk_folder_files(folder))
        for index, file_path in enumerate(files, start=1):
            if self.token.stopped:
                self.stopped_early = True
                logger.info("Execution stopped", extra={"transformer_name": config.name})
                return

            item_config = retype_folder_input(config, str(file_path))
            try:
                await self._process_item(item_config, output_folder, item=index)
            except Exception as e:
                if self.metrics:
                    self.metrics.record_error(e, {"input": str(file_path)})
                logger.error(
                    f"Error processing file {file_path}: {e}",
                    extra={"transformer_name": config.name, "item": index},
                )
                self._emit(
                    ProgressEvent(
                        sub_type="progress",
                        file_path=str(file_path),
                        message=f"Error processing file {file_path}: {e}",
                    )
                )

    async def _process_item(
        self, config: TransformerConfig, output_folder: Path, item: int = 1
    ) -> None:
        start = time.time()
        current = self._describe_input(config) or str(output_folder)
        self._emit(
            ProgressEvent(
                sub_type="currentInput",
                file_path=current,
                message=f"Processing file: {current}",
            )
        )

        prompt = await self._run_blocking(resolve_prompt, config, self.workspace_root)
        response = await self.gateway.send_request(
            prompt, LLMOptions(temperature=config.temperature)
        )

        output_file = output_folder / get_output_file_name(config)
        await self._run_blocking(write_output, response, output_file)
        self.outputs.append(str(output_file))

        if self.metrics:
            self.metrics.record_item(time.time() - start)
        logger.debug(
            f"Wrote {output_file}", extra={"transformer_name": config.name, "item": item}
        )
        self._emit(
            ProgressEvent(
                sub_type="outputCreated",
                output_uri=str(output_file),
                message=f"Created output file: {output_file.name}",
            )
        )

    @staticmethod
    def _describe_input(config: TransformerConfig) -> Optional[str]:
        file_input = next((i for i in config.input if i.type == InputType.FILE), None)
        return file_input.value if file_input else None

    @staticmethod
    async def _run_blocking(func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)
