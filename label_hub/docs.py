# label_hub/docs.py
"""
标签文档生成：按作用域列出每个标签键在各语言下的文本。

输出 Markdown 文档（供提交到仓库或评审），CLI 也用同一份分组结果渲染 Rich 表格。
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Optional

from label_hub.core.types import LabelRecord, ScopeFilter

if TYPE_CHECKING:
    from label_hub.core.interfaces import LabelRecordStore

# 作用域 -> 标签键 -> 语言 -> 文本
LabelTable = dict[str, dict[str, dict[str, str]]]


def group_labels(records: Iterable[LabelRecord]) -> LabelTable:
    """按作用域、标签键分组；保持记录的出现顺序。"""
    table: LabelTable = {}
    for record in records:
        by_key = table.setdefault(record.scope_key, {})
        by_key.setdefault(record.label_key, {})[record.language_code] = (
            record.translated_text
        )
    return table


def table_languages(
    table: LabelTable, preferred: Sequence[str] = ()
) -> list[str]:
    """表格中的语言列：先是 `preferred` 中的语言，其余按字母序。"""
    present = {
        lang
        for by_key in table.values()
        for texts in by_key.values()
        for lang in texts
    }
    head = [lang for lang in preferred if lang in present]
    return head + sorted(present - set(head))


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def render_label_docs(table: LabelTable, languages: Sequence[str]) -> str:
    """把分组结果渲染为 Markdown：每个作用域一节，一列标签键加每种语言一列。"""
    lines = ["# 标签文档", ""]
    if not table:
        lines.append("_存储中没有标签。_")
        return "\n".join(lines) + "\n"

    for scope_key, by_key in table.items():
        lines.extend([f"## {scope_key}", ""])
        lines.append("| 标签键 | " + " | ".join(languages) + " |")
        lines.append("|" + "---|" * (len(languages) + 1))
        for label_key, texts in by_key.items():
            cells = [_cell(texts.get(lang, "")) for lang in languages]
            lines.append(f"| {_cell(label_key)} | " + " | ".join(cells) + " |")
        lines.append("")
    return "\n".join(lines)


async def load_label_table(
    store: "LabelRecordStore",
    scope: Optional[str] = None,
    languages: Optional[Sequence[str]] = None,
) -> LabelTable:
    """从存储读取记录并分组；可按作用域前缀与语言过滤。"""
    scope_filter = ScopeFilter(scope) if scope is not None else None
    records = [
        r
        for r in await store.all_records()
        if (scope_filter is None or scope_filter.matches(r.scope_key))
        and (not languages or r.language_code in languages)
    ]
    return group_labels(records)
