"""
Worker thread for running pipeline stages without blocking the UI
"""

import logging

from PySide6.QtCore import QThread, Signal

from primacy.core.exceptions import PrimacyError
from primacy.core.stage_runner import StageRunner

logger = logging.getLogger(__name__)


class StageWorker(QThread):
    """Background worker for a single stage execution"""

    # Signals
    finished = Signal(object)  # stage result
    error = Signal(str)  # error message

    def __init__(self, runner: StageRunner, stage_name: str, argument_json: str, parent=None):
        super().__init__(parent)

        self.runner = runner
        self.stage_name = stage_name
        self.argument_json = argument_json

    def run(self):
        """Execute the stage"""
        try:
            result = self.runner.execute(self.stage_name, self.argument_json)
        except PrimacyError as e:
            self.error.emit(str(e))
            return
        except Exception as e:
            logger.exception(f"Stage {self.stage_name} failed")
            self.error.emit(str(e))
            return

        self.finished.emit(result)
