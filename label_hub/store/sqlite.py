# label_hub/store/sqlite.py
from __future__ import annotations

from typing import Any, Callable

import structlog
from sqlalchemy import text
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from label_hub.core.exceptions import StoreIOError
from label_hub.store.base import BaseSQLLabelStore

logger = structlog.get_logger(__name__)


class SQLiteLabelStore(BaseSQLLabelStore):
    """`LabelRecordStore` 协议的 SQLite 实现（aiosqlite 驱动）。"""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession], db_path: str):
        super().__init__(sessionmaker)
        self.db_path = db_path

    @property
    def _insert(self) -> Callable[..., Any]:
        return sqlite_insert

    async def connect(self) -> None:
        """[覆盖] 检查连接，并为文件数据库开启 WAL。"""
        try:
            async with self._sessionmaker() as session:
                async with session.begin():
                    await session.execute(text("SELECT 1"))
                    if self.db_path != ":memory:":
                        await session.execute(text("PRAGMA journal_mode=WAL;"))
        except SQLAlchemyError as e:
            raise StoreIOError(f"无法连接 SQLite 数据库 '{self.db_path}': {e}") from e
        logger.info("SQLite 标签存储已连接", db_path=self.db_path)
