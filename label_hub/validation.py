# label_hub/validation.py
"""
标签完整性校验。

回退策略是“整体回退”：某语言只要有一条记录就不会回退，缺失的叶子也不会从
默认语言补齐。这里的校验让这种缺失在导入阶段就可见。
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from label_hub.core.types import LabelRecord, ScopeFilter
from label_hub.resolution.builder import schema_leaf_paths

if TYPE_CHECKING:
    from label_hub.core.interfaces import LabelRecordStore
    from label_hub.core.types import LabelBundleModel

LABEL_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_]+(\.[A-Za-z0-9_]+)*$")


class ValidationReport(BaseModel):
    """一次校验的结果。有错误即视为无效，警告不影响有效性。"""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        return ValidationReport(
            errors=[*self.errors, *other.errors],
            warnings=[*self.warnings, *other.warnings],
        )

    def to_markdown(self) -> str:
        """把报告渲染为 Markdown 文档：校验状态，其后是错误与警告列表。"""
        lines = ["# 标签校验报告", "", "## 校验状态", ""]
        lines.append("✅ 校验通过" if self.is_valid else "❌ 校验失败")
        lines.append("")
        for title, items in (("错误", self.errors), ("警告", self.warnings)):
            if items:
                lines.extend([f"## {title}", ""])
                lines.extend(f"- {item}" for item in items)
                lines.append("")
        return "\n".join(lines)


def _relative_key(record: LabelRecord, base_depth: int) -> str:
    return ".".join(record.scope_path[base_depth:] + record.label_path)


def _check_record(record: LabelRecord, report: ValidationReport) -> None:
    if not LABEL_KEY_PATTERN.match(record.label_key):
        report.warnings.append(
            f"作用域 {record.scope_key} 中的标签键格式不规范: {record.label_key}"
        )
    if not record.translated_text.strip():
        report.warnings.append(
            f"{record.scope_key}.{record.label_key} ({record.language_code}) 的翻译为空"
        )


class LabelValidator:
    """针对某个标签存储执行各类完整性检查。"""

    def __init__(self, store: "LabelRecordStore"):
        self._store = store

    async def _present_keys(self, scope: str, language: str) -> dict[str, LabelRecord]:
        scope_filter = ScopeFilter(scope)
        depth = len(scope_filter.segments)
        records = await self._store.query(scope_filter, language)
        return {_relative_key(r, depth): r for r in records}

    async def validate_scope(
        self,
        scope: str,
        language: str,
        required_keys: Iterable[str],
        optional_keys: Iterable[str] = (),
    ) -> ValidationReport:
        """检查必需标签是否齐全，并报告格式问题、空翻译和未被使用的标签。"""
        report = ValidationReport()
        required = list(required_keys)
        optional = list(optional_keys)
        present = await self._present_keys(scope, language)

        missing = [key for key in required if key not in present]
        if missing:
            report.errors.append(
                f"作用域 {scope} ({language}) 缺少必需标签: {', '.join(missing)}"
            )
        missing_optional = [key for key in optional if key not in present]
        if missing_optional:
            report.warnings.append(
                f"作用域 {scope} ({language}) 缺少标签，将使用内置默认值: "
                f"{', '.join(missing_optional)}"
            )

        for record in present.values():
            _check_record(record, report)

        expected = set(required) | set(optional)
        if expected:
            unused = [key for key in present if key not in expected]
            if unused:
                report.warnings.append(
                    f"作用域 {scope} ({language}) 中存在未使用的标签: {', '.join(unused)}"
                )
        return report

    async def validate_schema(
        self, scope: str, language: str, schema: type["LabelBundleModel"]
    ) -> ValidationReport:
        """以类型化标签包 schema 声明的叶子作为期望的标签集合。"""
        paths = schema_leaf_paths(schema)
        return await self.validate_scope(
            scope,
            language,
            required_keys=[p for p, required in paths if required],
            optional_keys=[p for p, required in paths if not required],
        )

    async def compare_languages(
        self, scope: str, reference_lang: str, target_lang: str
    ) -> ValidationReport:
        """报告目标语言相对参考语言缺失或多出的标签。"""
        report = ValidationReport()
        reference = await self._present_keys(scope, reference_lang)
        target = await self._present_keys(scope, target_lang)

        if not reference:
            report.warnings.append(f"作用域 {scope} 在参考语言 {reference_lang} 下没有标签")
            return report
        if not target:
            report.warnings.append(
                f"作用域 {scope} 在 {target_lang} 下没有标签，将整体回退到 {reference_lang}"
            )
            return report

        missing = [key for key in reference if key not in target]
        if missing:
            report.warnings.append(
                f"作用域 {scope} 的 {target_lang} 翻译不完整（不会从 {reference_lang} 补齐）: "
                f"{', '.join(missing)}"
            )
        extra = [key for key in target if key not in reference]
        if extra:
            report.warnings.append(
                f"作用域 {scope} 的 {target_lang} 含有 {reference_lang} 中不存在的标签: "
                f"{', '.join(extra)}"
            )
        return report

    async def check_scope(
        self, scope: str, language: Optional[str] = None
    ) -> ValidationReport:
        """检查作用域内（可限定语言）每条记录的键格式与空翻译。"""
        report = ValidationReport()
        scope_filter = ScopeFilter(scope)
        languages = [language] if language else await self._store.list_languages()
        for code in languages:
            for record in await self._store.query(scope_filter, code):
                _check_record(record, report)
        return report

    async def validate_all(
        self, reference_lang: Optional[str] = None
    ) -> ValidationReport:
        """
        检查存储中的全部记录。

        给出 `reference_lang` 时，还会把存储中出现的每种其它语言与参考语言
        逐个作用域比较，包括在该作用域下完全没有记录的语言。
        """
        report = ValidationReport()
        records = await self._store.all_records()
        reference_scopes: set[str] = set()
        all_languages: set[str] = set()
        for record in records:
            _check_record(record, report)
            all_languages.add(record.language_code)
            if record.language_code == reference_lang:
                reference_scopes.add(record.scope_key)

        if reference_lang is None:
            return report

        for scope_key in sorted(reference_scopes):
            for language in sorted(all_languages - {reference_lang}):
                comparison = self._compare_exact_scope(
                    records, scope_key, reference_lang, language
                )
                report = report.merge(comparison)
        return report

    @staticmethod
    def _compare_exact_scope(
        records: list[LabelRecord], scope_key: str, reference_lang: str, language: str
    ) -> ValidationReport:
        report = ValidationReport()
        reference = {
            r.label_key
            for r in records
            if r.scope_key == scope_key and r.language_code == reference_lang
        }
        target = {
            r.label_key
            for r in records
            if r.scope_key == scope_key and r.language_code == language
        }
        missing = sorted(reference - target)
        if missing:
            report.warnings.append(
                f"作用域 {scope_key} 的 {language} 翻译缺少: {', '.join(missing)}"
            )
        return report
