# label_hub/config.py

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from label_hub.cache import CacheConfig
from label_hub.utils import validate_lang_codes


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: Literal["json", "console"] = "console"


class LabelHubConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    database_url: str = "sqlite+aiosqlite:///labelhub.db"
    fallback_lang: str = "en"
    view_timeout: Optional[float] = Field(
        default=None, gt=0, description="单次视图获取的超时时间（秒）"
    )
    database_echo: bool = False
    auto_create_schema: bool = Field(
        default=True, description="初始化时自动创建 SQL 存储的标签表"
    )

    cache_config: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("fallback_lang")
    @classmethod
    def validate_fallback_lang_code(cls, v: str) -> str:
        validate_lang_codes([v])
        return v

    @property
    def db_path(self) -> str:
        """从 sqlite URL 中提取文件路径，仅适用于 sqlite 类 URL。"""
        scheme, sep, rest = self.database_url.partition("://")
        if not sep or not scheme.startswith("sqlite"):
            raise ValueError("db_path 属性仅在 database_url 为 sqlite 类型时可用。")
        # 'sqlite+aiosqlite:///path/to/db' -> '/path/to/db'
        path = rest[1:] if rest.startswith("/") else rest
        return path or ":memory:"
