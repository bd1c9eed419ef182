"""
Module navigation: reachability, view resolution and payload hand-off
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Tuple

from primacy.core.config import AppConfig
from primacy.core.exceptions import NotReachableError
from primacy.core.state import PipelineState

logger = logging.getLogger(__name__)


class NavigationPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class ModuleNavigator:
    """
    Moves the pipeline between module views.

    A transition goes IDLE -> LOADING when the view is requested, and
    LOADING -> READY once the view announces it is ready. The payload for the
    new view is handed out exactly once, on that second step.
    """

    def __init__(self, state: PipelineState, config: AppConfig):
        self.state = state
        self.config = config
        self.phase = NavigationPhase.IDLE
        self._target: Optional[int] = None

    def view_path(self, index: int) -> Path:
        return self.config.app_dir / f"{self.config.view_prefix}{index}.{self.config.view_extension}"

    def is_reachable(self, index: int) -> bool:
        """A module is reachable if it has recorded arguments or the previous stage has a result."""
        if index < 0:
            return False
        return self.state.has_argument(index) or self.state.has_result(index - 1)

    def request_go_to(self, target_index: int) -> Path:
        """
        Start a transition to ``target_index``.

        Returns:
            Path of the view to load

        Raises:
            NotReachableError: if the module cannot be reached yet
        """
        if not self.is_reachable(target_index):
            logger.info(f"Navigation to module {target_index} denied")
            raise NotReachableError(f"Module {target_index} is not reachable")

        path = self.view_path(target_index)
        if not path.exists():
            logger.warning(f"View for module {target_index} not found: {path}")

        self.state.set_current_index(target_index)
        self._target = target_index
        self.phase = NavigationPhase.LOADING
        logger.info(f"Loading module {target_index} from {path}")
        return path

    def mark_ready(self) -> Optional[Tuple[Any, Any]]:
        """
        Complete a pending transition.

        Returns:
            ``(argument[target], result[target - 1])`` for a loading transition,
            None when no transition is pending
        """
        if self.phase != NavigationPhase.LOADING or self._target is None:
            return None

        target = self._target
        self.phase = NavigationPhase.READY
        self._target = None
        return self.state.get_argument(target), self.state.get_result(target - 1)
