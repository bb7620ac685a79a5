# label_hub/store/base.py
# SQL 标签存储的共享蓝图，SQLite 与 PostgreSQL 实现仅在方言相关的细节上不同。
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Callable, Optional

import structlog
from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import func

from label_hub.core.exceptions import StoreIOError
from label_hub.core.interfaces import LabelRecordStore
from label_hub.core.types import LabelRecord, ScopeFilter
from label_hub.store.schema import Base, LhUiLabel
from label_hub.utils import escape_like

logger = structlog.get_logger(__name__)

UPSERT_CHUNK_SIZE = 500


class BaseSQLLabelStore(LabelRecordStore, ABC):
    """基于 SQLAlchemy 异步 Session 的标签存储基类。"""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    @property
    @abstractmethod
    def _insert(self) -> Callable[..., Any]:
        """[子类实现] 返回支持 ON CONFLICT 的方言 insert 构造函数。"""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """[子类实现] 确保与数据库的连接是活跃的。"""
        ...

    async def close(self) -> None:
        """安全地关闭 SQLAlchemy 引擎及其底层连接池。"""
        engine = self._sessionmaker.kw.get("bind")
        if engine:
            await engine.dispose()
        logger.info("标签存储引擎已关闭。")

    async def create_schema(self) -> None:
        """创建标签表（已存在则跳过）。"""
        engine = self._sessionmaker.kw.get("bind")
        if engine is None:
            raise StoreIOError("sessionmaker 未绑定引擎，无法创建 schema。")
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StoreIOError(f"创建标签表失败: {e}") from e
        logger.info("标签表 schema 已就绪。")

    @staticmethod
    def _to_record(row: LhUiLabel) -> LabelRecord:
        return LabelRecord(
            scope_key=row.scope_key,
            label_key=row.label_key,
            language_code=row.language_code,
            translated_text=row.translated_text,
            label_path=tuple(row.label_path_json),
        )

    async def query(
        self, scope: ScopeFilter, language_code: str
    ) -> list[LabelRecord]:
        stmt = (
            select(LhUiLabel)
            .where(
                LhUiLabel.language_code == language_code,
                or_(
                    LhUiLabel.scope_key == scope.base_scope,
                    LhUiLabel.scope_key.like(
                        escape_like(scope.child_prefix) + "%", escape="\\"
                    ),
                ),
            )
            .order_by(LhUiLabel.id)
        )
        try:
            async with self._sessionmaker() as session:
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise StoreIOError(
                f"查询作用域 '{scope.base_scope}' ({language_code}) 失败: {e}"
            ) from e
        # 某些方言的 LIKE 大小写不敏感，这里按字面语义再过滤一次
        return [self._to_record(row) for row in rows if scope.matches(row.scope_key)]

    async def put_many(self, records: Iterable[LabelRecord]) -> int:
        rows = [
            dict(
                scope_key=r.scope_key,
                label_key=r.label_key,
                language_code=r.language_code,
                translated_text=r.translated_text,
                label_path_json=list(r.label_path),
            )
            for r in records
        ]
        if not rows:
            return 0
        try:
            async with self._sessionmaker.begin() as session:
                for i in range(0, len(rows), UPSERT_CHUNK_SIZE):
                    stmt = self._insert(LhUiLabel).values(
                        rows[i : i + UPSERT_CHUNK_SIZE]
                    )
                    stmt = stmt.on_conflict_do_update(
                        index_elements=["scope_key", "label_key", "language_code"],
                        set_=dict(
                            translated_text=stmt.excluded.translated_text,
                            label_path_json=stmt.excluded.label_path_json,
                            updated_at=func.now(),
                        ),
                    )
                    await session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreIOError(f"写入标签记录失败: {e}") from e
        logger.debug("标签记录已写入", count=len(rows))
        return len(rows)

    async def all_records(
        self, language_code: Optional[str] = None
    ) -> list[LabelRecord]:
        stmt = select(LhUiLabel).order_by(LhUiLabel.id)
        if language_code is not None:
            stmt = stmt.where(LhUiLabel.language_code == language_code)
        try:
            async with self._sessionmaker() as session:
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise StoreIOError(f"读取全部标签记录失败: {e}") from e
        return [self._to_record(row) for row in rows]

    async def list_languages(self) -> list[str]:
        stmt = (
            select(LhUiLabel.language_code)
            .distinct()
            .order_by(LhUiLabel.language_code)
        )
        try:
            async with self._sessionmaker() as session:
                return list((await session.execute(stmt)).scalars().all())
        except SQLAlchemyError as e:
            raise StoreIOError(f"列出语言失败: {e}") from e
