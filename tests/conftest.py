# tests/conftest.py
"""项目全局共享的测试 Fixtures。"""

from collections.abc import Generator
from typing import Any

import pytest
from pytest_mock import MockerFixture
from rich.console import Console

from label_hub.core.types import LabelRecord
from label_hub.store import InMemoryLabelStore
from tests.helpers.factories import tea_room_records


@pytest.fixture(scope="session", autouse=True)
def disable_rich_colors_for_tests(
    session_mocker: MockerFixture,
) -> Generator[None, None, None]:
    """全局禁用 rich 库的颜色输出，以确保测试结果的确定性。"""
    original_init = Console.__init__

    def new_init(self: Console, *args: Any, **kwargs: Any) -> None:
        kwargs["force_terminal"] = False
        kwargs["color_system"] = None
        original_init(self, *args, **kwargs)

    session_mocker.patch("rich.console.Console.__init__", new=new_init)
    yield


@pytest.fixture
def tea_records() -> list[LabelRecord]:
    return tea_room_records()


@pytest.fixture
def memory_store(tea_records: list[LabelRecord]) -> InMemoryLabelStore:
    """预先装载茶室记录的内存存储。"""
    return InMemoryLabelStore(tea_records)
