# label_hub/store/postgres.py
from __future__ import annotations

from typing import Any, Callable

import structlog
from sqlalchemy import text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from label_hub.core.exceptions import StoreIOError
from label_hub.store.base import BaseSQLLabelStore

logger = structlog.get_logger(__name__)


class PostgresLabelStore(BaseSQLLabelStore):
    """`LabelRecordStore` 协议的 PostgreSQL 实现（asyncpg 驱动）。"""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession], dsn: str):
        super().__init__(sessionmaker)
        self.dsn = dsn

    @property
    def _insert(self) -> Callable[..., Any]:
        return pg_insert

    async def connect(self) -> None:
        try:
            async with self._sessionmaker() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StoreIOError(f"无法连接 PostgreSQL 数据库: {e}") from e
        logger.info("PostgreSQL 标签存储已连接")
