# label_hub/cli/__init__.py
"""Label-Hub CLI 模块入口。"""

from label_hub.cli.main import app

__all__ = ["app"]
