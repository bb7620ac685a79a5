# tests/integration/conftest.py
"""
集成测试共享的 Fixtures。
每个测试函数都使用一个全新的 SQLite 数据库，互不干扰。
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

from label_hub.config import LabelHubConfig
from label_hub.core.types import LabelRecord
from label_hub.store import SQLiteLabelStore, create_label_store


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'labels.db'}"


@pytest_asyncio.fixture
async def sqlite_store() -> AsyncGenerator[SQLiteLabelStore, None]:
    """一个已建表的内存 SQLite 存储。"""
    store = create_label_store(
        LabelHubConfig(database_url="sqlite+aiosqlite:///:memory:")
    )
    assert isinstance(store, SQLiteLabelStore)
    await store.connect()
    await store.create_schema()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def seeded_store(
    sqlite_store: SQLiteLabelStore, tea_records: list[LabelRecord]
) -> SQLiteLabelStore:
    await sqlite_store.put_many(tea_records)
    return sqlite_store
