# tests/unit/test_cache.py
"""
针对 `label_hub.cache` 模块的单元测试。

验证缓存的基本读写、TTL 过期、LRU 淘汰，以及“只缓存命中结果”的规则。
"""

import pytest
from cachetools import TTLCache

from label_hub.cache import BundleCache, CacheConfig, CacheType
from label_hub.core.types import ResolvedRecords
from tests.helpers.factories import TEA_ROOM_SCOPE, make_record


@pytest.fixture
def resolved() -> ResolvedRecords:
    """提供一个可复用的、已命中的解析结果。"""
    return ResolvedRecords(
        base_scope=TEA_ROOM_SCOPE,
        requested_language="fr",
        records=(make_record("pageTitle", "Tea Room"),),
        used_language="en",
    )


@pytest.mark.asyncio
async def test_cache_put_and_get(resolved: ResolvedRecords) -> None:
    cache = BundleCache()
    assert await cache.get(TEA_ROOM_SCOPE, "fr") is None
    await cache.put(resolved)
    assert await cache.get(TEA_ROOM_SCOPE, "fr") == resolved
    assert await cache.get(TEA_ROOM_SCOPE, "en") is None


@pytest.mark.asyncio
async def test_cache_skips_misses() -> None:
    cache = BundleCache()
    await cache.put(ResolvedRecords(base_scope=TEA_ROOM_SCOPE, requested_language="fr"))
    assert await cache.get(TEA_ROOM_SCOPE, "fr") is None
    assert len(cache.cache) == 0


@pytest.mark.asyncio
async def test_ttl_expiration(resolved: ResolvedRecords) -> None:
    """测试 TTL 缓存是否会在指定时间后自动使条目失效（确定性测试）。"""
    current_time = 1000.0

    def timer() -> float:
        return current_time

    config = CacheConfig(maxsize=10, ttl=1, cache_type=CacheType.TTL)
    cache = BundleCache(config)
    cache.cache = TTLCache(maxsize=config.maxsize, ttl=config.ttl, timer=timer)

    await cache.put(resolved)
    assert await cache.get(TEA_ROOM_SCOPE, "fr") == resolved

    current_time += 1.1

    assert await cache.get(TEA_ROOM_SCOPE, "fr") is None


@pytest.mark.asyncio
async def test_lru_eviction() -> None:
    cache = BundleCache(CacheConfig(maxsize=1, cache_type=CacheType.LRU))
    record = make_record("pageTitle", "Tea Room")
    first = ResolvedRecords("viewA", "en", (record,), "en")
    second = ResolvedRecords("viewB", "en", (record,), "en")

    await cache.put(first)
    await cache.put(second)

    assert await cache.get("viewA", "en") is None
    assert await cache.get("viewB", "en") == second


@pytest.mark.asyncio
async def test_clear(resolved: ResolvedRecords) -> None:
    cache = BundleCache()
    await cache.put(resolved)
    await cache.clear()
    assert await cache.get(TEA_ROOM_SCOPE, "fr") is None


def test_generate_cache_key_is_stable_and_distinct() -> None:
    key = BundleCache.generate_cache_key(TEA_ROOM_SCOPE, "zh")
    assert key == BundleCache.generate_cache_key(TEA_ROOM_SCOPE, "zh")
    assert key != BundleCache.generate_cache_key(TEA_ROOM_SCOPE, "en")
    assert key != BundleCache.generate_cache_key("teaRoomView.menu", "zh")
