# label_hub/resolution/policies.py
"""语言回退策略。回退目标是单一的默认语言，而不是完整的偏好链。"""

from typing import Optional

from label_hub.core.interfaces import FallbackPolicy


class DefaultFallbackPolicy(FallbackPolicy):
    """请求语言没有任何记录时，回退到配置的默认语言。"""

    def __init__(self, fallback_lang: str = "en"):
        self.fallback_lang = fallback_lang

    def fallback_for(self, requested_language: str) -> Optional[str]:
        if requested_language == self.fallback_lang:
            return None
        return self.fallback_lang


class NoFallbackPolicy(FallbackPolicy):
    """从不回退。"""

    def fallback_for(self, requested_language: str) -> Optional[str]:
        return None
