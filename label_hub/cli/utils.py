# label_hub/cli/utils.py
"""提供 CLI 命令使用的共享工具函数。"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from rich.console import Console

from label_hub.config import LabelHubConfig
from label_hub.hub import LabelHub

console = Console()
T = TypeVar("T")


def create_hub(config: LabelHubConfig) -> LabelHub:
    """
    根据配置创建并返回一个未初始化的 LabelHub 实例。
    CLI 中创建 LabelHub 的唯一入口，测试会替换它。
    """
    return LabelHub(config)


async def run_with_hub(
    config: LabelHubConfig, action: Callable[[LabelHub], Awaitable[T]]
) -> T:
    """初始化 LabelHub、执行动作，并保证最终关闭。"""
    hub = create_hub(config)
    await hub.initialize()
    try:
        return await action(hub)
    finally:
        await hub.close()
