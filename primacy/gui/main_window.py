"""
Main window hosting the module views
"""

import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QStatusBar
from PySide6.QtCore import QSettings, QUrl, Slot
from PySide6.QtGui import QColor
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWebChannel import QWebChannel

from primacy.core.config import AppConfig
from primacy.gui.router import MessageRouter

logger = logging.getLogger(__name__)

SETTINGS_ORG = "PathLabs"
SETTINGS_APP = "PRIMACY"


class MainWindow(QMainWindow):
    """Single window showing the active module view"""

    def __init__(self, config: AppConfig, router: MessageRouter, settings: Optional[QSettings] = None):
        super().__init__()

        self.config = config
        self.router = router
        self.settings = settings if settings is not None else QSettings(SETTINGS_ORG, SETTINGS_APP)

        self.setup_ui()

        self.router.loadRequested.connect(self.load_view)
        self.router.stageStarted.connect(self._on_stage_started)
        self.router.stageFinished.connect(self._on_stage_finished)

        self.setWindowTitle(config.window.title)
        geometry = self.settings.value("window/geometry")
        if geometry is None or not self.restoreGeometry(geometry):
            self.resize(config.window.width, config.window.height)

    def setup_ui(self):
        """Set up the web view and its channel"""
        self.view = QWebEngineView()
        self.view.page().setBackgroundColor(QColor(self.config.window.background))
        self.setCentralWidget(self.view)

        # Views reach the router as channel.objects.router
        self.channel = QWebChannel(self)
        self.channel.registerObject("router", self.router)
        self.view.page().setWebChannel(self.channel)

        self.setStatusBar(QStatusBar())

    @Slot(str)
    def load_view(self, path: str):
        logger.info(f"Loading {path}")
        self.view.load(QUrl.fromLocalFile(path))

    @Slot(str)
    def _on_stage_started(self, stage_name: str):
        self.statusBar().showMessage(f"Running {stage_name}...")

    @Slot(str)
    def _on_stage_finished(self, stage_name: str):
        self.statusBar().showMessage(f"{stage_name} finished", 5000)

    def closeEvent(self, event):
        self.settings.setValue("window/geometry", self.saveGeometry())
        super().closeEvent(event)
