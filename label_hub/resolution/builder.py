# label_hub/resolution/builder.py
"""
把扁平的标签记录重建为嵌套的标签包。

记录的嵌套路径 = 作用域中位于基础作用域之后的段 + 记录的标签路径。
构建过程是纯同步的结构变换，不做任何插值、类型转换或复数处理。
"""

from __future__ import annotations

import typing
from collections.abc import Iterable
from typing import Any, Optional, TypeVar, Union, overload

import structlog
from pydantic import BaseModel, ValidationError

from label_hub.core.exceptions import BundleSchemaError
from label_hub.core.types import LabelBundle, LabelBundleModel, LabelRecord, ScopeFilter

logger = structlog.get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=LabelBundleModel)


class BundleBuilder:
    """标签包构建器；无状态，可在并发请求之间共享。"""

    @overload
    def build(
        self, base_scope: str, records: Iterable[LabelRecord], schema: None = None
    ) -> LabelBundle: ...

    @overload
    def build(
        self, base_scope: str, records: Iterable[LabelRecord], schema: type[SchemaT]
    ) -> SchemaT: ...

    def build(
        self,
        base_scope: str,
        records: Iterable[LabelRecord],
        schema: Optional[type[LabelBundleModel]] = None,
    ) -> Union[LabelBundle, LabelBundleModel]:
        """
        按给定顺序处理记录并构建标签包。

        同一路径上的后处理记录会覆盖先处理的记录，包括叶子文本与分区互相
        占位的情形（记一条警告）；构建从不因标签内容抛出异常。
        给出 `schema` 时，构建结果会在返回前按其校验。
        """
        scope = ScopeFilter(base_scope)
        base_depth = len(scope.segments)
        bundle: LabelBundle = {}

        for record in records:
            if not scope.matches(record.scope_key):
                logger.warning(
                    "记录不在基础作用域内，已跳过",
                    base_scope=base_scope,
                    scope_key=record.scope_key,
                    label_key=record.label_key,
                )
                continue
            path = record.scope_path[base_depth:] + record.label_path
            self._assign(bundle, path, record)

        if schema is None:
            return bundle
        return self.validate(base_scope, bundle, schema)

    @staticmethod
    def _assign(
        bundle: LabelBundle, path: tuple[str, ...], record: LabelRecord
    ) -> None:
        # 叶子与分区在同一路径上冲突时，后处理的记录胜出
        node = bundle
        for depth, segment in enumerate(path[:-1]):
            child = node.get(segment)
            if not isinstance(child, dict):
                if child is not None:
                    logger.warning(
                        "文本被分区覆盖",
                        path=".".join(path[: depth + 1]),
                        scope_key=record.scope_key,
                        label_key=record.label_key,
                    )
                child = node[segment] = {}
            node = child

        leaf = path[-1]
        if isinstance(node.get(leaf), dict):
            logger.warning(
                "分区被文本覆盖",
                path=".".join(path),
                scope_key=record.scope_key,
                label_key=record.label_key,
            )
        node[leaf] = record.translated_text

    @staticmethod
    def validate(
        base_scope: str, bundle: LabelBundle, schema: type[SchemaT]
    ) -> SchemaT:
        try:
            return schema.model_validate(bundle)
        except ValidationError as e:
            raise BundleSchemaError(
                f"作用域 '{base_scope}' 的标签包不符合 {schema.__name__}: "
                f"{e.error_count()} 处错误",
                scope=base_scope,
                errors=e.errors(),
            ) from e


def flatten_bundle(bundle: LabelBundle, prefix: str = "") -> dict[str, str]:
    """把嵌套标签包展开为 `点号路径 -> 文本` 的扁平映射。"""
    flat: dict[str, str] = {}
    for key, value in bundle.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_bundle(value, path))
        else:
            flat[path] = value
    return flat


def _nested_model(annotation: Any) -> Optional[type[BaseModel]]:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    # Optional[Section] 之类的注解
    for arg in typing.get_args(annotation):
        if isinstance(arg, type) and issubclass(arg, BaseModel):
            return arg
    return None


def schema_leaf_paths(
    schema: type[BaseModel], prefix: str = "", parent_required: bool = True
) -> list[tuple[str, bool]]:
    """
    列出 schema 声明的全部叶子路径（使用别名，即存储中的标签键）。

    返回 `(点号路径, 是否必需)`；只有当叶子及其所有祖先分区都没有默认值时
    才视为必需。
    """
    paths: list[tuple[str, bool]] = []
    for name, field in schema.model_fields.items():
        key = field.alias or name
        path = f"{prefix}.{key}" if prefix else key
        required = parent_required and field.is_required()
        nested = _nested_model(field.annotation)
        if nested is not None:
            paths.extend(schema_leaf_paths(nested, path, required))
        else:
            paths.append((path, required))
    return paths
