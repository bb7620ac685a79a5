# label_hub/store/memory.py
"""
内存标签存储，用于测试环境或由外部进程预加载全部记录的场景。
"""

from collections.abc import Iterable
from typing import Optional

from label_hub.core.interfaces import LabelRecordStore
from label_hub.core.types import LabelRecord, ScopeFilter


class InMemoryLabelStore(LabelRecordStore):
    """基于字典的标签存储；按写入顺序返回记录，覆盖写入保留原位置。"""

    def __init__(self, records: Optional[Iterable[LabelRecord]] = None):
        self._records: dict[tuple[str, str, str], LabelRecord] = {}
        if records is not None:
            for record in records:
                self._records[record.identity] = record

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def query(
        self, scope: ScopeFilter, language_code: str
    ) -> list[LabelRecord]:
        return [
            r
            for r in self._records.values()
            if r.language_code == language_code and scope.matches(r.scope_key)
        ]

    async def put_many(self, records: Iterable[LabelRecord]) -> int:
        count = 0
        for record in records:
            self._records[record.identity] = record
            count += 1
        return count

    async def all_records(
        self, language_code: Optional[str] = None
    ) -> list[LabelRecord]:
        return [
            r
            for r in self._records.values()
            if language_code is None or r.language_code == language_code
        ]

    async def list_languages(self) -> list[str]:
        return sorted({r.language_code for r in self._records.values()})

    def __len__(self) -> int:
        return len(self._records)
