from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PipelineState:
    """Per-module stage arguments and results, plus the active module index.

    No validation happens here; reachability is the navigator's concern.
    """

    arguments: dict[int, Any] = field(default_factory=lambda: {0: {}})
    results: dict[int, Any] = field(default_factory=dict)
    current_index: int = 0

    def get_argument(self, index: int) -> Any:
        return self.arguments.get(index)

    def set_argument(self, index: int, value: Any) -> None:
        self.arguments[index] = value

    def has_argument(self, index: int) -> bool:
        return index in self.arguments

    def get_result(self, index: int) -> Any:
        return self.results.get(index)

    def set_result(self, index: int, value: Any) -> None:
        self.results[index] = value

    def has_result(self, index: int) -> bool:
        return index in self.results

    def get_current_index(self) -> int:
        return self.current_index

    def set_current_index(self, index: int) -> None:
        self.current_index = index
