# label_hub/resolution/resolver.py
"""
包含作用域解析的核心逻辑：查询存储，并在请求语言完全没有记录时应用回退策略。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog

from label_hub.core.exceptions import StoreIOError
from label_hub.core.types import LabelRecord, ResolvedRecords, ScopeFilter
from label_hub.resolution.policies import DefaultFallbackPolicy

if TYPE_CHECKING:
    from label_hub.cache import BundleCache
    from label_hub.core.interfaces import FallbackPolicy, LabelRecordStore

logger = structlog.get_logger(__name__)


class ScopeResolver:
    """
    负责为一个基础作用域取得某种语言下的完整记录集合。

    每种语言的记录集合被视为一个封闭的整体：只有请求语言返回零条记录时
    才会回退，部分缺失的叶子绝不会从回退语言中补齐。
    """

    def __init__(
        self,
        store: "LabelRecordStore",
        policy: Optional["FallbackPolicy"] = None,
        cache: Optional["BundleCache"] = None,
    ):
        """
        初始化解析器。

        Args:
            store: 一个标签记录存储实例。
            policy: 回退策略，默认回退到 "en"。
            cache: 可选的记录缓存。
        """
        self._store = store
        self._policy = policy or DefaultFallbackPolicy()
        self._cache = cache

    async def _query(self, scope: ScopeFilter, language: str) -> list[LabelRecord]:
        try:
            return await self._store.query(scope, language)
        except StoreIOError:
            raise
        except Exception as e:
            # 注入的存储抛出的任何其它异常都归入存储故障通道
            raise StoreIOError(
                f"标签存储无响应 (scope={scope.base_scope}, lang={language}): {e}"
            ) from e

    async def resolve(self, base_scope: str, language: str) -> ResolvedRecords:
        """解析记录集合；作用域缺失时返回空结果而不是抛出异常。"""
        scope = ScopeFilter(base_scope)

        if self._cache is not None:
            cached = await self._cache.get(base_scope, language)
            if cached is not None:
                logger.debug("解析命中缓存", scope=base_scope, lang=language)
                return cached

        records = await self._query(scope, language)
        used_language = language

        if not records:
            fallback = self._policy.fallback_for(language)
            if fallback is not None and fallback != language:
                logger.warning(
                    "请求语言无任何标签，回退到默认语言",
                    scope=base_scope,
                    requested_lang=language,
                    fallback_lang=fallback,
                )
                records = await self._query(scope, fallback)
                used_language = fallback

        if not records:
            logger.error(
                "作用域在请求语言与回退语言下均无标签",
                scope=base_scope,
                lang=language,
            )
            return ResolvedRecords(base_scope=base_scope, requested_language=language)

        resolved = ResolvedRecords(
            base_scope=base_scope,
            requested_language=language,
            records=tuple(records),
            used_language=used_language,
        )
        if self._cache is not None:
            await self._cache.put(resolved)
        logger.debug(
            "解析成功",
            scope=base_scope,
            lang=language,
            used_lang=used_language,
            count=len(records),
        )
        return resolved
