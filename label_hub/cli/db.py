# label_hub/cli/db.py
"""处理数据库相关操作的 CLI 命令。"""

import asyncio

import structlog
import typer

from label_hub.cli.state import State
from label_hub.cli.utils import console, create_hub
from label_hub.core.exceptions import LabelHubError
from label_hub.store import BaseSQLLabelStore

logger = structlog.get_logger(__name__)
db_app = typer.Typer(help="数据库管理命令")


async def _init_schema(state: State) -> bool:
    hub = create_hub(state.config)
    if not isinstance(hub.store, BaseSQLLabelStore):
        return False
    await hub.store.connect()
    try:
        await hub.store.create_schema()
    finally:
        await hub.store.close()
    return True


@db_app.command("init")
def db_init(ctx: typer.Context) -> None:
    """创建标签表（已存在则跳过）。"""
    state: State = ctx.obj
    console.print(f"数据库: [cyan]{state.config.database_url}[/cyan]")
    try:
        created = asyncio.run(_init_schema(state))
    except LabelHubError as e:
        logger.error("初始化数据库失败。", exc_info=True)
        console.print(f"[bold red]❌ 初始化数据库失败: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    if not created:
        console.print("[yellow]当前存储不是 SQL 存储，无需初始化。[/yellow]")
        return
    console.print("[bold green]✅ 标签表已就绪！[/bold green]")
