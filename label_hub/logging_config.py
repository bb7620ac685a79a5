# label_hub/logging_config.py
"""
本模块负责集中配置项目的日志系统：structlog ⇄ 标准 logging，并与 Rich 集成。

提供两种输出：
- console：开发环境的面板式人类友好输出（本地时间）。
- json   ：生产环境的结构化日志（ISO-8601 且 UTC）。
"""

import logging
from collections.abc import MutableMapping
from typing import Any, Literal

import structlog
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from structlog.typing import Processor

APP_LOGGER_NAME = "label_hub"


class PanelRenderer:
    """
    structlog 处理器：将每条日志渲染为一个 Rich 面板。

    标题是等宽的级别标签加 logger 名称，正文是事件消息，
    附加的键值对以固定宽度的键列排成表格。
    """

    def __init__(
        self,
        kv_truncate_at: int = 256,
        show_timestamp: bool = True,
        show_logger_name: bool = True,
        kv_key_width: int = 15,
    ):
        self._console = Console()
        self._kv_truncate_at = kv_truncate_at
        self._show_timestamp = show_timestamp
        self._show_logger_name = show_logger_name
        self._kv_key_width = kv_key_width
        self._level_styles = {
            "debug": ("blue", "DEBUG   "),
            "info": ("green", "INFO    "),
            "warning": ("yellow", "WARNING "),
            "error": ("bold red", "ERROR   "),
            "critical": ("bold magenta", "CRITICAL"),
        }

    def __call__(
        self, logger: Any, name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        event = str(event_dict.pop("event", "")).strip()
        if not event:
            return ""

        timestamp = event_dict.pop("timestamp", "")
        level = event_dict.pop("level", "info").lower()
        logger_name = event_dict.pop("logger", "unknown")
        style, level_text = self._level_styles.get(level, ("default", level.upper()))

        title_parts = [f"[{style}]{level_text}[/]"]
        if self._show_logger_name:
            title_parts.append(f"[cyan dim]({logger_name})[/]")

        renderables: list[RenderableType] = [Text(event, justify="left")]
        if event_dict:
            renderables.append(self._kv_table(event_dict))

        subtitle = (
            Text(str(timestamp), style="dim")
            if self._show_timestamp and timestamp
            else None
        )
        with self._console.capture() as capture:
            self._console.print(
                Panel(
                    Group(*renderables),
                    title=Text.from_markup(" ".join(title_parts)),
                    title_align="left",
                    subtitle=subtitle,
                    subtitle_align="right",
                    border_style=style,
                    expand=False,
                )
            )
        return capture.get().rstrip()

    def _kv_table(self, kv: MutableMapping[str, Any]) -> Table:
        table = Table(show_header=False, show_edge=False, box=None, padding=(0, 1))
        table.add_column(style="dim", justify="right", width=self._kv_key_width)
        table.add_column(style="bright_white", overflow="fold")
        for key, value in sorted(kv.items()):
            value_repr = repr(value)
            # 长字符串去掉引号，折行效果更好
            if len(value_repr) > self._kv_truncate_at and value_repr[:1] in "'\"":
                value_repr = value_repr[1:-1]
            table.add_row(f"{key} :", Text(value_repr))
        return table


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "console",
    show_timestamp: bool = True,
    show_logger_name: bool = True,
    kv_truncate_at: int = 80,
) -> None:
    """
    配置全局的 structlog 日志系统。这是整个应用的日志配置入口。

    Args:
        log_level: 要显示的最低日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)。
        log_format: 'console' 用于开发环境的面板输出，'json' 用于生产环境。
        show_timestamp: 是否在日志中包含时间戳。
        show_logger_name: 是否在日志中包含记录器的名称。
        kv_truncate_at: 在 console 模式下，键值对中值的截断长度。
    """
    timestamper = (
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False)
        if log_format == "console"
        else structlog.processors.TimeStamper(fmt="iso", utc=True)
    )
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        timestamper,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_format == "console":
        processors.append(
            PanelRenderer(
                kv_truncate_at=kv_truncate_at,
                show_timestamp=show_timestamp,
                show_logger_name=show_logger_name,
            )
        )
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    # structlog 已经渲染好字符串，这里原样输出
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(log_level.upper())
    app_logger.propagate = True

    structlog.get_logger("label_hub.logging_config").debug(
        "日志系统已配置完成。", log_format=log_format, app_log_level=log_level.upper()
    )
