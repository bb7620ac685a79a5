# label_hub/core/interfaces.py
"""
本模块使用 typing.Protocol 定义了核心组件的接口协议。
解析核心只依赖这些抽象，不依赖任何具体的存储引擎。
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterable
from typing import Optional, Protocol, TypeVar

from label_hub.core.types import LabelRecord, ScopeFilter

DataT_co = TypeVar("DataT_co", covariant=True)


class LabelRecordStore(Protocol):
    """定义了标签记录存储的纯异步接口协议。"""

    async def connect(self) -> None: ...
    async def close(self) -> None: ...

    async def query(
        self, scope: ScopeFilter, language_code: str
    ) -> list[LabelRecord]:
        """
        返回某语言下落在 `scope` 内的全部记录。

        存储故障应抛出 StoreIOError；其它异常会被解析器包装为 StoreIOError。
        """
        ...

    async def put_many(self, records: Iterable[LabelRecord]) -> int:
        """按 (作用域, 标签键, 语言) 三元组写入或覆盖记录，返回写入条数。"""
        ...

    async def all_records(
        self, language_code: Optional[str] = None
    ) -> list[LabelRecord]: ...

    async def list_languages(self) -> list[str]: ...


class DataLoader(Protocol[DataT_co]):
    """视图的领域数据加载器：接收请求语言，返回载荷或失败。"""

    def __call__(self, language: str) -> Awaitable[DataT_co]: ...


class FallbackPolicy(Protocol):
    """决定请求语言无记录时，是否以及使用哪种语言重试。"""

    def fallback_for(self, requested_language: str) -> Optional[str]: ...
