# label_hub/cache.py
"""本模块提供内存缓存，用于减少对标签存储的重复查询。"""

import asyncio
from enum import Enum
from typing import Optional, Union

from cachetools import LRUCache, TTLCache
from pydantic import BaseModel, Field

from label_hub.core.types import ResolvedRecords


class CacheType(str, Enum):
    """定义了支持的缓存类型。"""

    TTL = "ttl"
    LRU = "lru"


class CacheConfig(BaseModel):
    """缓存配置模型。"""

    enabled: bool = True
    maxsize: int = Field(default=1000, gt=0)
    ttl: int = Field(default=3600, gt=0)
    cache_type: CacheType = CacheType.TTL
    lock_pool_size: int = Field(
        default=64, gt=0, description="用于并发读写的锁池大小"
    )


class BundleCache:
    """
    一个异步安全的内存缓存，按 (作用域, 请求语言) 缓存已解析的记录集合。

    缓存的是不可变的记录元组而不是标签包本身：每个调用者仍会拿到
    一个全新构建的、归其独占的标签包。
    """

    def __init__(self, config: Optional[CacheConfig] = None):
        self.config = config or CacheConfig()
        self.cache: Union[
            LRUCache[str, ResolvedRecords], TTLCache[str, ResolvedRecords]
        ]
        self._lock_pool_size = self.config.lock_pool_size
        self._key_locks: list[asyncio.Lock] = [
            asyncio.Lock() for _ in range(self._lock_pool_size)
        ]
        self._initialize_cache()
        self._global_lock = asyncio.Lock()

    def _initialize_cache(self) -> None:
        if self.config.cache_type is CacheType.TTL:
            self.cache = TTLCache(maxsize=self.config.maxsize, ttl=self.config.ttl)
        else:
            self.cache = LRUCache(maxsize=self.config.maxsize)

    @staticmethod
    def generate_cache_key(base_scope: str, language: str) -> str:
        return f"{base_scope}|{language}"

    def _lock_for(self, key: str) -> asyncio.Lock:
        return self._key_locks[hash(key) % self._lock_pool_size]

    async def get(self, base_scope: str, language: str) -> Optional[ResolvedRecords]:
        key = self.generate_cache_key(base_scope, language)
        async with self._lock_for(key):
            return self.cache.get(key)

    async def put(self, resolved: ResolvedRecords) -> None:
        """只缓存命中结果；作用域缺失不缓存，以便后续导入的记录立即可见。"""
        if not resolved.found:
            return
        key = self.generate_cache_key(resolved.base_scope, resolved.requested_language)
        async with self._lock_for(key):
            self.cache[key] = resolved

    async def clear(self) -> None:
        async with self._global_lock:
            self._key_locks = [asyncio.Lock() for _ in range(self._lock_pool_size)]
            self._initialize_cache()
