# label_hub/__init__.py
"""Label-Hub: 一个可嵌入的、按作用域解析本地化界面标签的异步引擎。

该模块提供了主协调器、配置以及标签包/视图的核心类型。
"""

__version__ = "1.0.0"

from .config import LabelHubConfig
from .core.types import LabelBundleModel, LabelRecord, ViewResult
from .hub import LabelHub
from .resolution import ViewDefinition
from .store import create_label_store

__all__ = [
    "__version__",
    "LabelHub",
    "LabelHubConfig",
    "LabelRecord",
    "LabelBundleModel",
    "ViewResult",
    "ViewDefinition",
    "create_label_store",
]
