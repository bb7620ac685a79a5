# label_hub/resolution/fetcher.py
"""
ViewFetcher：每个界面的统一入口，把标签包与可选的领域数据组合成 ViewResult。

一个泛型的 `fetch_view` 取代了逐页面复制的获取函数；界面以 `ViewDefinition`
声明自己的作用域、标签包 schema 与数据加载器。
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, Optional

import structlog

from label_hub.core.exceptions import DataPayloadError, ViewTimeoutError
from label_hub.core.interfaces import DataLoader
from label_hub.core.types import (
    DataT,
    LabelBundleModel,
    LabelsT,
    ResolvedRecords,
    ViewResult,
)
from label_hub.resolution.builder import BundleBuilder
from label_hub.resolution.resolver import ScopeResolver

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ViewDefinition(Generic[LabelsT, DataT]):
    """一个界面的声明：名称、基础作用域、标签包 schema 与数据加载器。"""

    name: str
    scope_key: str
    schema: Optional[type[LabelBundleModel]] = None
    data_loader: Optional[DataLoader[DataT]] = None


class ViewRegistry:
    """按名称登记的视图定义集合。"""

    def __init__(self) -> None:
        self._views: dict[str, ViewDefinition[Any, Any]] = {}

    def register(self, definition: ViewDefinition[Any, Any]) -> ViewDefinition[Any, Any]:
        if definition.name in self._views:
            raise ValueError(f"视图 '{definition.name}' 已注册。")
        self._views[definition.name] = definition
        return definition

    def get(self, name: str) -> ViewDefinition[Any, Any]:
        try:
            return self._views[name]
        except KeyError:
            raise KeyError(f"视图 '{name}' 未注册。") from None

    def __contains__(self, name: object) -> bool:
        return name in self._views

    def __iter__(self) -> Iterator[ViewDefinition[Any, Any]]:
        return iter(self._views.values())

    def __len__(self) -> int:
        return len(self._views)


class ViewFetcher:
    """
    编排一次视图获取：标签解析与数据加载并发进行。

    - 标签缺失 -> `labels=None`，数据照常返回。
    - 存储故障 -> 抛出 StoreIOError，另一项进行中的操作会被取消。
    - 数据加载失败 -> 包装为 DataPayloadError 放在 `data_error` 上。
    """

    def __init__(
        self,
        resolver: ScopeResolver,
        builder: Optional[BundleBuilder] = None,
        timeout: Optional[float] = None,
    ):
        self._resolver = resolver
        self._builder = builder or BundleBuilder()
        self._timeout = timeout

    async def fetch(
        self, definition: ViewDefinition[Any, Any], language: str
    ) -> ViewResult[Any, Any]:
        return await self.fetch_view(
            definition.scope_key,
            language,
            schema=definition.schema,
            data_loader=definition.data_loader,
            view_name=definition.name,
        )

    async def fetch_view(
        self,
        scope_key: str,
        language: str,
        *,
        schema: Optional[type[LabelBundleModel]] = None,
        data_loader: Optional[DataLoader[Any]] = None,
        view_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ViewResult[Any, Any]:
        timeout = timeout if timeout is not None else self._timeout
        coro = self._fetch(scope_key, language, schema, data_loader, view_name)
        if timeout is None:
            return await coro
        try:
            return await asyncio.wait_for(coro, timeout)
        except asyncio.TimeoutError as e:
            logger.warning(
                "视图获取超时", view=view_name or scope_key, lang=language, timeout=timeout
            )
            raise ViewTimeoutError(
                f"视图 '{view_name or scope_key}' 在 {timeout} 秒内未完成。"
            ) from e

    async def _fetch(
        self,
        scope_key: str,
        language: str,
        schema: Optional[type[LabelBundleModel]],
        data_loader: Optional[DataLoader[Any]],
        view_name: Optional[str],
    ) -> ViewResult[Any, Any]:
        if data_loader is None:
            resolved, labels = await self._resolve_labels(scope_key, language, schema)
            data, data_error = None, None
        else:
            tasks = (
                asyncio.ensure_future(
                    self._resolve_labels(scope_key, language, schema)
                ),
                asyncio.ensure_future(
                    self._load_data(data_loader, language, view_name or scope_key)
                ),
            )
            try:
                (resolved, labels), (data, data_error) = await asyncio.gather(*tasks)
            except BaseException:
                # 失败或被取消时不留下任何进行中的操作
                for task in tasks:
                    task.cancel()
                raise

        return ViewResult(
            labels=labels,
            data=data,
            requested_language=language,
            used_language=resolved.used_language,
            data_error=data_error,
        )

    async def _resolve_labels(
        self,
        scope_key: str,
        language: str,
        schema: Optional[type[LabelBundleModel]],
    ) -> tuple[ResolvedRecords, Any]:
        resolved = await self._resolver.resolve(scope_key, language)
        if not resolved.found:
            return resolved, None
        return resolved, self._builder.build(scope_key, resolved.records, schema)

    @staticmethod
    async def _load_data(
        data_loader: DataLoader[Any], language: str, view: str
    ) -> tuple[Any, Optional[DataPayloadError]]:
        try:
            return await data_loader(language), None
        except Exception as e:
            logger.warning("视图数据加载失败", view=view, lang=language, exc_info=True)
            error = DataPayloadError(f"视图 '{view}' 的数据加载失败: {e}", view=view)
            error.__cause__ = e
            return None, error
