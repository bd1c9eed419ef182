"""
Application wiring and entry point for the PRIMACY shell
"""

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox

from primacy.core.config import load_config
from primacy.core.exceptions import ConfigError
from primacy.core.navigator import ModuleNavigator
from primacy.core.stage_runner import StageRunner
from primacy.core.state import PipelineState
from primacy.gui.main_window import MainWindow, SETTINGS_APP, SETTINGS_ORG
from primacy.gui.router import MessageRouter


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the PRIMACY pipeline shell.")
    parser.add_argument("--config", type=Path, help="Path to a YAML config file")
    parser.add_argument("--app-dir", type=Path, help="Directory holding the module views and stages")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args, qt_args = parser.parse_known_args(argv)
    return args, qt_args


def main(argv=None):
    """Main application entry point"""
    args, qt_args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName(SETTINGS_APP)
    app.setOrganizationName(SETTINGS_ORG)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logging.getLogger(__name__).error(str(e))
        QMessageBox.critical(None, "Configuration Error", str(e))
        return 1
    if args.app_dir is not None:
        config.app_dir = args.app_dir.expanduser().resolve()

    state = PipelineState()
    navigator = ModuleNavigator(state, config)
    runner = StageRunner(state, config)
    router = MessageRouter(navigator, runner)

    window = MainWindow(config, router)
    window.show()
    router.start()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
