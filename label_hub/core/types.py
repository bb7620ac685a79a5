# label_hub/core/types.py
"""
本模块定义了 Label-Hub 系统的核心数据类型。

标签记录在入库（构造）时即计算好结构化的键路径 (`scope_path` / `label_path`)，
之后的解析与构建过程不再重复做字符串切分。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from label_hub.core.exceptions import DataPayloadError

SCOPE_SEPARATOR = "."

# 标签包：内部节点是映射，叶子是翻译文本。
LabelBundle = dict[str, Any]

LabelsT = TypeVar("LabelsT")
DataT = TypeVar("DataT")


def split_key_path(key: str) -> tuple[str, ...]:
    """按点号切分键，丢弃空段。"""
    return tuple(part for part in key.split(SCOPE_SEPARATOR) if part)


class LabelRecord(BaseModel):
    """可翻译内容的原子单元：(作用域, 标签键, 语言) 唯一确定一条文本。"""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    scope_key: str = Field(min_length=1)
    label_key: str = Field(min_length=1)
    language_code: str = Field(min_length=1)
    translated_text: str
    scope_path: tuple[str, ...] = ()
    label_path: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _derive_key_paths(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        scope_key = data.get("scope_key", data.get("scopeKey"))
        label_key = data.get("label_key", data.get("labelKey"))
        if isinstance(scope_key, str) and not (
            data.get("scope_path") or data.get("scopePath")
        ):
            data["scope_path"] = split_key_path(scope_key)
        if isinstance(label_key, str) and not (
            data.get("label_path") or data.get("labelPath")
        ):
            data["label_path"] = split_key_path(label_key)
        return data

    @field_validator("scope_key")
    @classmethod
    def _check_scope_key(cls, v: str) -> str:
        if any(not part for part in v.split(SCOPE_SEPARATOR)):
            raise ValueError(f"作用域键 '{v}' 含有空的路径段。")
        return v

    @field_validator("label_path")
    @classmethod
    def _check_label_path(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v or any(not part for part in v):
            raise ValueError("标签路径不能为空，且不能含有空段。")
        return v

    @property
    def identity(self) -> tuple[str, str, str]:
        """存储层的唯一性三元组。"""
        return (self.scope_key, self.label_key, self.language_code)


@dataclass(frozen=True)
class ScopeFilter:
    """
    作用域前缀谓词：匹配恰好等于基础作用域、或以 `基础作用域 + "."` 开头的记录。
    `"teaRoomViewExtra"` 永远不会匹配基础作用域 `"teaRoomView"`。
    """

    base_scope: str

    def __post_init__(self) -> None:
        if not self.base_scope or any(
            not part for part in self.base_scope.split(SCOPE_SEPARATOR)
        ):
            raise ValueError(f"非法的基础作用域: '{self.base_scope}'")

    @property
    def child_prefix(self) -> str:
        return self.base_scope + SCOPE_SEPARATOR

    @property
    def segments(self) -> tuple[str, ...]:
        return split_key_path(self.base_scope)

    def matches(self, scope_key: str) -> bool:
        return scope_key == self.base_scope or scope_key.startswith(
            self.child_prefix
        )


class LabelBundleModel(BaseModel):
    """
    类型化标签包的基类。

    每个界面以子类的形式声明自己的标签包结构：分区用嵌套子模型表示，
    可以在没有翻译时直接渲染的叶子在 schema 中给出默认值。
    多余的叶子会在构造时被拒绝。字段名使用 snake_case，存储中的标签键
    （如 `pageTitle`）通过 camelCase 别名对应。
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True
    )


@dataclass(frozen=True)
class ResolvedRecords:
    """ScopeResolver 的结果：命中的记录集合以及实际使用的语言。"""

    base_scope: str
    requested_language: str
    records: tuple[LabelRecord, ...] = ()
    used_language: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.records)

    @property
    def is_fallback(self) -> bool:
        return self.found and self.used_language != self.requested_language


@dataclass(frozen=True)
class ViewResult(Generic[LabelsT, DataT]):
    """
    跨越到展示层的唯一数据形状。

    `labels` 仅在请求语言与回退语言均无任何记录时为 None；
    `data_error` 与标签解析相互独立。
    """

    labels: Optional[LabelsT]
    data: Optional[DataT]
    requested_language: str
    used_language: Optional[str] = None
    data_error: Optional[DataPayloadError] = field(default=None, compare=False)

    @property
    def is_fallback(self) -> bool:
        return (
            self.used_language is not None
            and self.used_language != self.requested_language
        )
