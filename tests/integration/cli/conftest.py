# tests/integration/cli/conftest.py
"""CLI 集成测试共享的 Fixtures。"""

import json
from pathlib import Path

import pytest
from pytest_mock import MockerFixture
from typer.testing import CliRunner


@pytest.fixture(autouse=True)
def skip_logging_setup(mocker: MockerFixture) -> None:
    """CLI 回调会重新配置全局日志，测试中跳过以免影响其它测试。"""
    mocker.patch("label_hub.cli.main.setup_logging")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_env(db_url: str) -> dict[str, str]:
    return {"LH_DATABASE_URL": db_url, "LH_FALLBACK_LANG": "en"}


@pytest.fixture
def labels_file(tmp_path: Path) -> Path:
    """茶室界面的嵌套映射形式记录文件。"""
    path = tmp_path / "tea_room.json"
    payload = {
        "teaRoomView": {
            "en": {"pageTitle": "Tea Room", "greeting": "Welcome"},
            "zh": {"pageTitle": "茶室", "greeting": "欢迎"},
            "ja": {"pageTitle": "茶室"},
        },
        "teaRoomView.menu": {
            "en": {"title": "Menu"},
            "zh": {"title": "菜单"},
        },
    }
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path
