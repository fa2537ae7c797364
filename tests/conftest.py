"""Shared fixtures: a Qt core application and sample settings objects."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import pytest
from PyQt6.QtCore import QCoreApplication

from propgrid import (
    CascaderEditor,
    CascaderNode,
    ListPickerEditor,
    grid_field,
    reset_grid_config,
)


class LogLevel(Enum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


class Theme(Enum):
    DEFAULT = "default"
    LIGHT = "light"
    DARK = "dark"


def build_forest() -> List[CascaderNode]:
    return [
        CascaderNode("一级 A", [
            CascaderNode("二级 A1", [
                CascaderNode("三级 A1-1"),
                CascaderNode("三级 A1-2"),
                CascaderNode("三级 A1-3"),
            ]),
            CascaderNode("二级 A2", [
                CascaderNode("三级 A2-1"),
                CascaderNode("三级 A2-2"),
            ]),
        ]),
        CascaderNode("一级 B", [
            CascaderNode("二级 B1", [
                CascaderNode("三级 B1-1"),
                CascaderNode("三级 B1-2"),
            ]),
            CascaderNode("二级 B2", [
                CascaderNode("三级 B2-1"),
            ]),
        ]),
        CascaderNode("一级 C", [
            CascaderNode("二级 C1", [
                CascaderNode("三级 C1-1"),
                CascaderNode("三级 C1-2"),
            ]),
        ]),
    ]


@dataclass
class Settings:
    user_name: Optional[str] = grid_field(
        "alice", category="General", display_name="User Name",
        description="The display name of the current user.",
    )
    enable_feature: bool = grid_field(True, category="General", display_name="Enable Feature")
    theme: Theme = grid_field(Theme.DEFAULT, category="General", display_name="Theme")
    auto_save_interval: int = grid_field(10, category="General", display_name="Auto Save Interval (min)")

    cascader_value: str = grid_field(
        "", category="Advanced", display_name="Cascader Value",
        editor=CascaderEditor("cascader_source"),
    )
    retry_count: int = grid_field(3, category="Advanced", display_name="Retry Count")
    log_level: LogLevel = grid_field(LogLevel.INFO, category="Advanced", display_name="Log Level")

    font_size: float = grid_field(12.0, category="Design", display_name="Font Size")

    language: str = grid_field(
        "en-US", category="Misc", display_name="Language",
        editor=ListPickerEditor("languages"),
    )
    notes: Optional[str] = grid_field(None, display_name="Notes")

    cascader_source: List[CascaderNode] = grid_field(default_factory=build_forest, browsable=False)
    languages: List[str] = grid_field(
        default_factory=lambda: ["en-US", "zh-CN", "de-DE"], browsable=False,
    )


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def fresh_grid_config(monkeypatch):
    """Each test starts from an environment-free grid configuration."""
    for name in (
        "PROPGRID_DEFAULT_CATEGORY",
        "PROPGRID_CASCADE_SEPARATOR",
        "PROPGRID_INCLUDE_PRIVATE",
        "PROPGRID_LOG_NOTIFICATIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_grid_config()
    yield
    reset_grid_config()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def forest() -> List[CascaderNode]:
    return build_forest()


@pytest.fixture
def recorder():
    """Collects accessor names emitted on an entry's property_changed signal."""

    class Recorder:
        def __init__(self):
            self.names = []

        def attach(self, entry):
            entry.property_changed.connect(lambda name: self.names.append(name))
            return entry

    return Recorder()
