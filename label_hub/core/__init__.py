# label_hub/core/__init__.py
"""
本核心包定义了 Label-Hub 系统中最基础、最稳定的构建块。

这里包含了系统的核心数据类型、接口协议和自定义异常，它们共同构成了
整个库的“契约”。本包不依赖于项目中的任何其他模块。
"""

from .exceptions import (
    BundleSchemaError,
    ConfigurationError,
    DataPayloadError,
    LabelHubError,
    StoreIOError,
    ViewTimeoutError,
)
from .interfaces import DataLoader, FallbackPolicy, LabelRecordStore
from .types import (
    LabelBundle,
    LabelBundleModel,
    LabelRecord,
    ResolvedRecords,
    ScopeFilter,
    ViewResult,
    split_key_path,
)

__all__ = [
    # from exceptions.py
    "LabelHubError",
    "ConfigurationError",
    "StoreIOError",
    "DataPayloadError",
    "BundleSchemaError",
    "ViewTimeoutError",
    # from interfaces.py
    "LabelRecordStore",
    "DataLoader",
    "FallbackPolicy",
    # from types.py
    "LabelRecord",
    "LabelBundle",
    "LabelBundleModel",
    "ScopeFilter",
    "ResolvedRecords",
    "ViewResult",
    "split_key_path",
]
