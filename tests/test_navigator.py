from __future__ import annotations

from pathlib import Path

import pytest

from primacy.core.config import AppConfig
from primacy.core.exceptions import NotReachableError
from primacy.core.navigator import ModuleNavigator, NavigationPhase
from primacy.core.state import PipelineState


def _navigator(tmp_path: Path) -> ModuleNavigator:
    return ModuleNavigator(PipelineState(), AppConfig(app_dir=tmp_path))


def test_module_zero_always_reachable(tmp_path: Path):
    nav = _navigator(tmp_path)

    path = nav.request_go_to(0)

    assert path == tmp_path / "module0.html"
    assert nav.state.get_current_index() == 0
    assert nav.phase == NavigationPhase.LOADING


def test_next_module_denied_without_result(tmp_path: Path):
    nav = _navigator(tmp_path)

    with pytest.raises(NotReachableError):
        nav.request_go_to(1)

    assert nav.state.get_current_index() == 0
    assert nav.phase == NavigationPhase.IDLE


def test_negative_module_denied(tmp_path: Path):
    nav = _navigator(tmp_path)

    with pytest.raises(NotReachableError):
        nav.request_go_to(-1)


def test_previous_result_makes_module_reachable(tmp_path: Path):
    nav = _navigator(tmp_path)
    nav.state.set_result(0, {"a": 1, "b": 2})

    nav.request_go_to(1)

    assert nav.state.get_current_index() == 1
    with pytest.raises(NotReachableError):
        nav.request_go_to(2)


def test_recorded_argument_makes_module_reachable(tmp_path: Path):
    nav = _navigator(tmp_path)
    nav.state.set_argument(3, {"threshold": 0.5})

    nav.request_go_to(3)

    assert nav.state.get_current_index() == 3


def test_payload_delivered_once_after_ready(tmp_path: Path):
    nav = _navigator(tmp_path)
    nav.state.set_result(0, {"a": 1, "b": 2})

    assert nav.mark_ready() is None

    nav.request_go_to(1)
    assert nav.mark_ready() == (None, {"a": 1, "b": 2})
    assert nav.phase == NavigationPhase.READY
    assert nav.mark_ready() is None


def test_module_zero_payload(tmp_path: Path):
    nav = _navigator(tmp_path)

    nav.request_go_to(0)

    assert nav.mark_ready() == ({}, None)


def test_view_path_follows_config(tmp_path: Path):
    config = AppConfig(app_dir=tmp_path, view_prefix="step", view_extension="htm")
    nav = ModuleNavigator(PipelineState(), config)

    assert nav.view_path(4) == tmp_path / "step4.htm"
