# label_hub/seeding.py
"""
标签记录的导入。

支持两种 JSON 形态：
1. 记录列表：`[{"scopeKey": ..., "labelKey": ..., "languageCode": ..., "translatedText": ...}]`
   （也接受 snake_case 字段名，或 `{"records": [...]}` 包装）；
2. 嵌套映射：`{scope: {lang: {labelKey: text | {子键: ...}}}}`，
   嵌套的字典会被展开为点号分隔的标签键。
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import structlog

from label_hub.core.types import LabelRecord

if TYPE_CHECKING:
    from label_hub.cache import BundleCache
    from label_hub.core.interfaces import LabelRecordStore

logger = structlog.get_logger(__name__)


def _flatten_labels(labels: Any, prefix: str = "") -> Iterator[tuple[str, str]]:
    if not isinstance(labels, dict):
        raise ValueError(f"标签 '{prefix or '<root>'}' 应为映射，实际为 {type(labels).__name__}。")
    for key, value in labels.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _flatten_labels(value, path)
        elif isinstance(value, str):
            yield path, value
        else:
            raise ValueError(f"标签 '{path}' 的文本必须是字符串。")


def parse_records(payload: Any) -> list[LabelRecord]:
    """把已解码的 JSON 载荷转换为标签记录列表；格式不符时抛出 ValueError。"""
    if isinstance(payload, dict) and isinstance(payload.get("records"), list):
        payload = payload["records"]

    if isinstance(payload, list):
        return [LabelRecord.model_validate(item) for item in payload]

    if isinstance(payload, dict):
        records: list[LabelRecord] = []
        for scope_key, by_language in payload.items():
            if not isinstance(by_language, dict):
                raise ValueError(f"作用域 '{scope_key}' 应映射到 {{语言: 标签}}。")
            for language_code, labels in by_language.items():
                for label_key, text in _flatten_labels(labels):
                    records.append(
                        LabelRecord(
                            scope_key=scope_key,
                            label_key=label_key,
                            language_code=language_code,
                            translated_text=text,
                        )
                    )
        return records

    raise ValueError(f"无法识别的记录文件结构: {type(payload).__name__}")


def load_records_file(path: Path | str) -> list[LabelRecord]:
    """读取并解析一个 JSON 记录文件。"""
    file_path = Path(path)
    payload = json.loads(file_path.read_text(encoding="utf-8"))
    records = parse_records(payload)
    logger.debug("记录文件已解析", path=str(file_path), count=len(records))
    return records


async def seed_store(
    store: "LabelRecordStore",
    records: Iterable[LabelRecord],
    cache: Optional["BundleCache"] = None,
) -> int:
    """
    批量写入记录并清空缓存。

    同一批次中重复的 (作用域, 标签键, 语言) 以最后一条为准。
    写入应在低读流量时批量进行，解析过程本身不加锁。
    """
    unique: dict[tuple[str, str, str], LabelRecord] = {}
    for record in records:
        if record.identity in unique:
            logger.warning("批次中存在重复记录，以后者为准", identity=record.identity)
        unique[record.identity] = record

    written = await store.put_many(unique.values())
    if cache is not None:
        await cache.clear()
    logger.info("标签记录导入完成", written=written)
    return written
