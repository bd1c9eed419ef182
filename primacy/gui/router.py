"""
Message router between module views and the pipeline
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot

from primacy.core.exceptions import NotReachableError
from primacy.core.navigator import ModuleNavigator
from primacy.core.stage_runner import StageRunner
from primacy.workers.stage_worker import StageWorker

logger = logging.getLogger(__name__)

DENIED = "DENIED"
BUSY_MESSAGE = "A stage is already running."


class MessageRouter(QObject):
    """
    Object registered on the web channel as ``router``.

    Views call ``loadModule`` (LOADMODULE) and ``execute`` (EXECUTE), and call
    ``viewReady`` once their channel is connected. Replies travel back on
    ``loadModuleReply``, ``executeReply`` and ``moduleData`` (NEW).
    """

    # Channel signals
    loadModuleReply = Signal(str)  # DENIED
    executeReply = Signal("QVariant")  # None on success, error message on failure
    moduleData = Signal("QVariant")  # [argument, previous result]

    # Window signals
    loadRequested = Signal(str)  # view path
    stageStarted = Signal(str)  # stage name
    stageFinished = Signal(str)  # stage name

    def __init__(self, navigator: ModuleNavigator, runner: StageRunner, parent=None):
        super().__init__(parent)

        self.navigator = navigator
        self.runner = runner
        self._worker: Optional[StageWorker] = None

    def start(self):
        """Open the first module"""
        self.loadModule(0)

    def is_busy(self) -> bool:
        return self._worker is not None

    @Slot(int)
    def loadModule(self, module_index):
        try:
            path = self.navigator.request_go_to(module_index)
        except NotReachableError:
            self.loadModuleReply.emit(DENIED)
            return

        self.loadRequested.emit(str(path))

    @Slot()
    def viewReady(self):
        payload = self.navigator.mark_ready()
        if payload is None:
            return
        argument, previous_result = payload
        logger.debug(f"Sending module data: {payload}")
        self.moduleData.emit([argument, previous_result])

    @Slot(str, str)
    def execute(self, stage_name, argument_json):
        logger.info(f"Execute {stage_name} with args: {argument_json}")
        if self.is_busy():
            logger.warning(f"Rejected {stage_name}: another stage is running")
            self.executeReply.emit(BUSY_MESSAGE)
            return

        worker = StageWorker(self.runner, stage_name, argument_json, parent=self)
        worker.finished.connect(self._on_stage_finished)
        worker.error.connect(self._on_stage_error)
        self._worker = worker
        self.stageStarted.emit(stage_name)
        worker.start()

    @Slot(object)
    def _on_stage_finished(self, result):
        stage_name = self._release_worker()
        self.stageFinished.emit(stage_name)
        self.executeReply.emit(None)

    @Slot(str)
    def _on_stage_error(self, message):
        stage_name = self._release_worker()
        self.stageFinished.emit(stage_name)
        self.executeReply.emit(message)

    def _release_worker(self) -> str:
        worker = self._worker
        self._worker = None
        if worker is None:
            return ""
        # run() returns right after emitting
        worker.wait()
        worker.deleteLater()
        return worker.stage_name
