"""
Runs external pipeline stages through the shared transfer file
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from primacy.core.config import AppConfig
from primacy.core.exceptions import MalformedArgumentError, StageFailedError
from primacy.core.state import PipelineState

logger = logging.getLogger(__name__)


class StageRunner:
    """
    Executes one pipeline stage per call.

    The argument is written to the transfer file, the stage script is run with
    that file's path as its only argument, and the file is read back as the
    stage result. Only one execution may use the transfer file at a time.
    """

    def __init__(self, state: PipelineState, config: AppConfig):
        self.state = state
        self.config = config

    def resolve_stage(self, stage_name: str) -> Path:
        stage_root = self.config.stage_path.resolve()
        script = (stage_root / stage_name).resolve()
        if stage_root not in script.parents:
            raise StageFailedError(f"Invalid stage name: {stage_name}")
        if not script.is_file():
            raise StageFailedError(f"Stage not found: {script}")
        return script

    def execute(self, stage_name: str, argument_json: str) -> Any:
        """
        Run ``stage_name`` with ``argument_json`` and record its result.

        Args:
            stage_name: Script filename under the stage directory
            argument_json: Serialized JSON argument for the stage

        Returns:
            The parsed result the stage left in the transfer file

        Raises:
            MalformedArgumentError: if ``argument_json`` is not valid JSON
            StageFailedError: if the stage could not run or reported a failure
        """
        try:
            argument = json.loads(argument_json)
        except (TypeError, ValueError) as e:
            raise MalformedArgumentError(f"Malformed stage argument: {e}") from e

        index = self.state.get_current_index()
        self.state.set_argument(index, argument)

        transfer_path = self.config.transfer_path
        try:
            transfer_path.write_text(argument_json, encoding="utf-8")
        except OSError as e:
            raise StageFailedError(f"Could not write transfer file {transfer_path}: {e}") from e

        script = self.resolve_stage(stage_name)
        command = [self.config.interpreter_command, str(script), str(transfer_path)]
        logger.info(f"Executing stage {stage_name} for module {index} with args: {argument_json}")

        try:
            completed = subprocess.run(
                command,
                cwd=str(self.config.app_dir),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.config.stage_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise StageFailedError(
                f"Stage {stage_name} timed out after {self.config.stage_timeout} seconds"
            ) from e
        except OSError as e:
            raise StageFailedError(f"Could not start stage {stage_name}: {e}") from e

        output = (completed.stdout or "") + (completed.stderr or "")
        self._check_outcome(stage_name, completed.returncode, output)

        try:
            result = json.loads(transfer_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StageFailedError(f"Could not read transfer file {transfer_path}: {e}") from e
        except ValueError as e:
            raise StageFailedError(f"Stage {stage_name} left malformed JSON in {transfer_path}: {e}") from e

        self.state.set_result(index, result)
        logger.info(f"Stage {stage_name} results: {result}")
        return result

    def _check_outcome(self, stage_name: str, returncode: int, output: str) -> None:
        if self.config.failure_mode == "strict":
            if output:
                logger.error(f"Stage {stage_name} encountered error: {output}")
                raise StageFailedError(output)
            return

        if returncode != 0:
            message = output or f"Stage exited with status {returncode}"
            logger.error(f"Stage {stage_name} encountered error: {message}")
            raise StageFailedError(message)
        if output:
            logger.warning(f"Stage {stage_name} output: {output}")
