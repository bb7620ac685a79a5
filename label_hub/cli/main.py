# label_hub/cli/main.py
"""Label-Hub CLI 的主入口点。"""

from typing import Annotated

import typer
from rich.console import Console

import label_hub
from label_hub.cli.db import db_app
from label_hub.cli.labels import docs, languages, resolve, seed, validate
from label_hub.cli.state import State
from label_hub.config import LabelHubConfig
from label_hub.logging_config import setup_logging

app = typer.Typer(
    name="label-hub",
    help="🏷️ Label-Hub: 按作用域解析本地化界面标签。",
    add_completion=False,
    no_args_is_help=True,
)

app.add_typer(db_app, name="db")
app.command("resolve")(resolve)
app.command("seed")(seed)
app.command("validate")(validate)
app.command("languages")(languages)
app.command("docs")(docs)

console = Console()


def version_callback(value: bool) -> None:
    """处理 --version 选项的回调函数。"""
    if value:
        console.print(f"Label-Hub [bold cyan]v{label_hub.__version__}[/bold cyan]")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="显示版本信息并退出。",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """主回调函数，在任何子命令执行前加载配置并配置日志。"""
    try:
        config = LabelHubConfig()
        setup_logging(log_level=config.logging.level, log_format=config.logging.format)
        ctx.obj = State(config=config)
    except Exception as e:
        console.print("[bold red]❌ 启动失败：无法加载配置或初始化日志。[/bold red]")
        console.print(f"[dim]{e}[/dim]")
        raise typer.Exit(code=1) from e
