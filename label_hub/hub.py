# label_hub/hub.py
"""本模块包含 Label-Hub 的主协调器，负责组装并管理各组件的生命周期。"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional, Union

import structlog

from label_hub.cache import BundleCache
from label_hub.config import LabelHubConfig
from label_hub.core.interfaces import DataLoader, LabelRecordStore
from label_hub.core.types import LabelBundleModel, LabelRecord, ScopeFilter, ViewResult
from label_hub.resolution import (
    BundleBuilder,
    DefaultFallbackPolicy,
    ScopeResolver,
    ViewDefinition,
    ViewFetcher,
    ViewRegistry,
)
from label_hub.seeding import seed_store
from label_hub.store import BaseSQLLabelStore, create_label_store

logger = structlog.get_logger(__name__)


class LabelHub:
    """异步主协调器：持有存储、缓存、解析器与视图获取器。"""

    def __init__(
        self,
        config: LabelHubConfig,
        store: Optional[LabelRecordStore] = None,
    ):
        self.config = config
        self.store = store if store is not None else create_label_store(config)
        self.cache: Optional[BundleCache] = (
            BundleCache(config.cache_config) if config.cache_config.enabled else None
        )
        self.policy = DefaultFallbackPolicy(config.fallback_lang)
        self.resolver = ScopeResolver(self.store, self.policy, self.cache)
        self.builder = BundleBuilder()
        self.fetcher = ViewFetcher(
            self.resolver, self.builder, timeout=config.view_timeout
        )
        self.views = ViewRegistry()
        self.initialized = False

    async def initialize(self) -> None:
        """连接存储；SQL 存储在配置允许时会自动建表。"""
        if self.initialized:
            return
        logger.info("Label-Hub 初始化开始...")
        await self.store.connect()
        if self.config.auto_create_schema and isinstance(
            self.store, BaseSQLLabelStore
        ):
            await self.store.create_schema()
        self.initialized = True
        logger.info("Label-Hub 初始化完成。", fallback_lang=self.config.fallback_lang)

    async def close(self) -> None:
        if not self.initialized:
            return
        await self.store.close()
        self.initialized = False
        logger.info("Label-Hub 已关闭。")

    async def __aenter__(self) -> "LabelHub":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _ensure_initialized(self) -> None:
        if not self.initialized:
            raise RuntimeError("LabelHub is not initialized.")

    async def fetch_view(
        self,
        scope_key: str,
        language: str,
        *,
        schema: Optional[type[LabelBundleModel]] = None,
        data_loader: Optional[DataLoader[Any]] = None,
    ) -> ViewResult[Any, Any]:
        self._ensure_initialized()
        return await self.fetcher.fetch_view(
            scope_key, language, schema=schema, data_loader=data_loader
        )

    def register_view(
        self, definition: ViewDefinition[Any, Any]
    ) -> ViewDefinition[Any, Any]:
        return self.views.register(definition)

    async def fetch(
        self, view: Union[str, ViewDefinition[Any, Any]], language: str
    ) -> ViewResult[Any, Any]:
        """按名称（已注册）或直接按定义获取一个视图。"""
        self._ensure_initialized()
        definition = self.views.get(view) if isinstance(view, str) else view
        return await self.fetcher.fetch(definition, language)

    async def get_labels(
        self,
        scope_key: str,
        language: str,
        schema: Optional[type[LabelBundleModel]] = None,
    ) -> Any:
        """只要标签包；作用域缺失时返回 None。"""
        result = await self.fetch_view(scope_key, language, schema=schema)
        return result.labels

    async def get_label(
        self, scope_key: str, label_key: str, language: str
    ) -> Optional[str]:
        """按 (作用域, 标签键, 语言) 精确查找单条文本；不回退，找不到时返回 None。"""
        self._ensure_initialized()
        records = await self.store.query(ScopeFilter(scope_key), language)
        for record in records:
            if record.scope_key == scope_key and record.label_key == label_key:
                return record.translated_text
        return None

    async def seed(self, records: Iterable[LabelRecord]) -> int:
        self._ensure_initialized()
        return await seed_store(self.store, records, self.cache)
