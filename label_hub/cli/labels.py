# label_hub/cli/labels.py
"""解析、导入与校验标签的 CLI 命令。"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any, Optional

import structlog
import typer
from rich.table import Table

from label_hub.cli.state import State
from label_hub.cli.utils import console, run_with_hub
from label_hub.core.exceptions import LabelHubError
from label_hub.core.types import LabelRecord, ViewResult
from label_hub.docs import LabelTable, load_label_table, render_label_docs, table_languages
from label_hub.hub import LabelHub
from label_hub.seeding import load_records_file
from label_hub.utils import validate_lang_codes
from label_hub.validation import LabelValidator, ValidationReport

logger = structlog.get_logger(__name__)


def _check_lang(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        validate_lang_codes([value])
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    return value


def resolve(
    ctx: typer.Context,
    scope: Annotated[str, typer.Argument(help="基础作用域，如 'teaRoomView'。")],
    lang: Annotated[
        str, typer.Option("--lang", "-l", help="请求语言。", callback=_check_lang)
    ] = "en",
) -> None:
    """解析一个作用域并以 JSON 输出标签包。"""
    state: State = ctx.obj

    async def _action(hub: LabelHub) -> ViewResult[Any, Any]:
        return await hub.fetch_view(scope, lang)

    try:
        result = asyncio.run(run_with_hub(state.config, _action))
    except (LabelHubError, ValueError) as e:
        console.print(f"[bold red]❌ 解析失败: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    if result.labels is None:
        console.print(
            f"[bold red]❌ 作用域 '{scope}' 在 {lang} 及回退语言下均无标签。[/bold red]"
        )
        raise typer.Exit(code=1)
    if result.is_fallback:
        console.print(
            f"[yellow]⚠ {lang} 无标签，已回退到 {result.used_language}。[/yellow]"
        )
    console.print_json(json.dumps(result.labels, ensure_ascii=False))


def seed(
    ctx: typer.Context,
    files: Annotated[
        list[Path],
        typer.Argument(help="一个或多个 JSON 记录文件。", exists=True, dir_okay=False),
    ],
) -> None:
    """把 JSON 记录文件导入标签存储。"""
    state: State = ctx.obj
    records: list[LabelRecord] = []
    for file_path in files:
        try:
            records.extend(load_records_file(file_path))
        except ValueError as e:
            console.print(f"[bold red]❌ 无法解析 {file_path}: {e}[/bold red]")
            raise typer.Exit(code=1) from e

    async def _action(hub: LabelHub) -> int:
        return await hub.seed(records)

    try:
        written = asyncio.run(run_with_hub(state.config, _action))
    except LabelHubError as e:
        logger.error("导入标签记录失败。", exc_info=True)
        console.print(f"[bold red]❌ 导入失败: {e}[/bold red]")
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✅ 已导入 {written} 条标签记录。[/bold green]")


def _print_report(report: ValidationReport) -> None:
    for error in report.errors:
        console.print(f"[red]✗ {error}[/red]")
    for warning in report.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")
    if report.is_valid:
        console.print(
            f"[bold green]✅ 校验通过（{len(report.warnings)} 条警告）。[/bold green]"
        )
    else:
        console.print(f"[bold red]❌ 校验失败：{len(report.errors)} 处错误。[/bold red]")


def validate(
    ctx: typer.Context,
    scope: Annotated[
        Optional[str], typer.Option("--scope", "-s", help="只校验该作用域。")
    ] = None,
    lang: Annotated[
        Optional[str],
        typer.Option("--lang", "-l", help="与参考语言比较的目标语言。", callback=_check_lang),
    ] = None,
    reference_lang: Annotated[
        Optional[str],
        typer.Option(
            "--reference-lang", "-r", help="参考语言，默认使用回退语言。", callback=_check_lang
        ),
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="把警告也视为失败。")
    ] = False,
    report_file: Annotated[
        Optional[Path],
        typer.Option("--report", help="同时把 Markdown 格式的校验报告写入该文件。", dir_okay=False),
    ] = None,
) -> None:
    """校验标签的格式与跨语言完整性。"""
    state: State = ctx.obj
    reference = reference_lang or state.config.fallback_lang

    async def _action(hub: LabelHub) -> ValidationReport:
        validator = LabelValidator(hub.store)
        if scope is None:
            return await validator.validate_all(reference_lang=reference)
        languages = [lang] if lang else await hub.store.list_languages()
        report = await validator.check_scope(scope, lang)
        for language in languages:
            if language != reference:
                report = report.merge(
                    await validator.compare_languages(scope, reference, language)
                )
        return report

    try:
        report = asyncio.run(run_with_hub(state.config, _action))
    except (LabelHubError, ValueError) as e:
        console.print(f"[bold red]❌ 校验过程出错: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    _print_report(report)
    if report_file is not None:
        report_file.write_text(report.to_markdown(), encoding="utf-8")
        console.print(f"报告已写入 [cyan]{report_file}[/cyan]")
    if not report.is_valid or (strict and report.warnings):
        raise typer.Exit(code=1)


def languages(ctx: typer.Context) -> None:
    """列出存储中出现的全部语言。"""
    state: State = ctx.obj

    async def _action(hub: LabelHub) -> list[str]:
        return await hub.store.list_languages()

    try:
        found = asyncio.run(run_with_hub(state.config, _action))
    except LabelHubError as e:
        console.print(f"[bold red]❌ 读取语言失败: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    table = Table(title="语言")
    table.add_column("代码", style="cyan")
    table.add_column("回退目标", justify="center")
    for code in found:
        table.add_row(code, "✓" if code == state.config.fallback_lang else "")
    console.print(table)


def docs(
    ctx: typer.Context,
    scope: Annotated[
        Optional[str], typer.Option("--scope", "-s", help="只列出该作用域及其子作用域。")
    ] = None,
    langs: Annotated[
        Optional[list[str]],
        typer.Option("--lang", "-l", help="只列出这些语言（可重复）。"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="把 Markdown 文档写入该文件。", dir_okay=False),
    ] = None,
) -> None:
    """按作用域列出标签键及其各语言文本。"""
    state: State = ctx.obj
    if langs:
        try:
            validate_lang_codes(langs)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--lang") from e

    async def _action(hub: LabelHub) -> LabelTable:
        return await load_label_table(hub.store, scope=scope, languages=langs)

    try:
        table = asyncio.run(run_with_hub(state.config, _action))
    except (LabelHubError, ValueError) as e:
        console.print(f"[bold red]❌ 生成文档失败: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    columns = langs or table_languages(table, preferred=[state.config.fallback_lang])
    if output is not None:
        output.write_text(render_label_docs(table, columns), encoding="utf-8")
        console.print(f"[bold green]✅ 标签文档已写入 {output}[/bold green]")
        return

    if not table:
        console.print("[yellow]存储中没有匹配的标签。[/yellow]")
        return
    for scope_key, by_key in table.items():
        rich_table = Table(title=scope_key, title_justify="left")
        rich_table.add_column("标签键", style="cyan")
        for lang in columns:
            rich_table.add_column(lang)
        for label_key, texts in by_key.items():
            rich_table.add_row(label_key, *(texts.get(lang, "") for lang in columns))
        console.print(rich_table)
