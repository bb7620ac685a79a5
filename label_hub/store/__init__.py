# label_hub/store/__init__.py
"""本模块作为存储层的公共入口，导出核心组件。"""

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from label_hub.config import LabelHubConfig
from label_hub.core.exceptions import ConfigurationError
from label_hub.core.interfaces import LabelRecordStore

from .base import BaseSQLLabelStore
from .memory import InMemoryLabelStore
from .sqlite import SQLiteLabelStore

MEMORY_URL = "memory://"


def create_label_store(config: LabelHubConfig) -> LabelRecordStore:
    """
    根据配置创建并返回一个具体的标签存储实例。
    这是实例化存储层的唯一入口。
    """
    db_url = config.database_url

    if db_url == MEMORY_URL:
        return InMemoryLabelStore()

    if db_url.startswith("sqlite+aiosqlite://"):
        db_path = config.db_path
        engine_kwargs: dict = {"echo": config.database_echo}
        if db_path == ":memory:":
            # 内存库必须共享同一条连接，否则每个 Session 都会看到一个空库
            engine_kwargs.update(
                poolclass=StaticPool, connect_args={"check_same_thread": False}
            )
        engine = create_async_engine(db_url, **engine_kwargs)
        return SQLiteLabelStore(
            async_sessionmaker(engine, expire_on_commit=False), db_path=db_path
        )

    if db_url.startswith("postgresql+asyncpg://"):
        from .postgres import PostgresLabelStore

        try:
            engine = create_async_engine(db_url, echo=config.database_echo)
        except ImportError as e:
            raise ConfigurationError(
                "要使用 PostgreSQL, 请安装 'asyncpg' 驱动: "
                'pip install "label-hub[postgres]"'
            ) from e
        return PostgresLabelStore(
            async_sessionmaker(engine, expire_on_commit=False), dsn=db_url
        )

    raise ConfigurationError(f"不支持的数据库类型或驱动: '{db_url}'")


__all__ = [
    "create_label_store",
    "BaseSQLLabelStore",
    "InMemoryLabelStore",
    "SQLiteLabelStore",
    "LabelRecordStore",
    "MEMORY_URL",
]
