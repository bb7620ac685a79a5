# label_hub/resolution/__init__.py
"""作用域解析、标签包构建与视图组合。"""

from .builder import BundleBuilder, flatten_bundle, schema_leaf_paths
from .fetcher import ViewDefinition, ViewFetcher, ViewRegistry
from .policies import DefaultFallbackPolicy, NoFallbackPolicy
from .resolver import ScopeResolver

__all__ = [
    "BundleBuilder",
    "flatten_bundle",
    "schema_leaf_paths",
    "ViewDefinition",
    "ViewFetcher",
    "ViewRegistry",
    "DefaultFallbackPolicy",
    "NoFallbackPolicy",
    "ScopeResolver",
]
