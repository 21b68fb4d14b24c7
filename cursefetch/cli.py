"""
CLI 模块

命令行接口实现。
"""

import asyncio
import json
from typing import Optional

import click
from loguru import logger

from cursefetch import __version__
from cursefetch.config import resolve_config
from cursefetch.exceptions import CurseFetchError
from cursefetch.logger import setup_logger
from cursefetch.models import ClientConfig, ModRecord
from cursefetch.services import CurseClient, ModResolver, resolve_slug_to_id


async def fetch_async(config: ClientConfig, reference: str) -> ModRecord:
    """异步解析并获取模组记录"""
    async with CurseClient(config) as client:
        return await ModResolver(client).resolve(reference)


def format_record(record: ModRecord, game_version: Optional[str] = None) -> str:
    lines = [f"{record.name} ({record.slug}) #{record.id}"]

    if game_version:
        entry = record.latest_for_game_version(game_version)
        if entry is None:
            lines.append(f"  {game_version}: 没有可用的文件")
        else:
            lines.append(
                f"  {entry.game_version}: {entry.file_display_name} "
                f"#{entry.file_id} [{entry.release_type.name.lower()}]"
            )
        return "\n".join(lines)

    for mod_file in record.latest_files:
        versions = ", ".join(sorted(mod_file.game_versions))
        lines.append(
            f"  {mod_file.display_file_name} #{mod_file.id} "
            f"[{mod_file.release_type.name.lower()}] {versions}"
        )
    return "\n".join(lines)


@click.group()
@click.option("-c", "--config", "config_path", type=click.Path(), help="配置文件路径")
@click.option("--user-agent", help="覆盖请求使用的 User-Agent")
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], user_agent: Optional[str], debug: bool):
    """cursefetch - CurseForge 模组元数据查询工具"""
    setup_logger(debug=debug)
    try:
        ctx.obj = resolve_config(config_path, user_agent)
    except CurseFetchError as e:
        logger.error(f"配置错误: {e}")
        raise click.ClickException(str(e))


@main.command()
@click.argument("slug")
@click.pass_obj
def resolve(config: ClientConfig, slug: str):
    """将 slug 解析为模组 ID"""
    try:
        mod_id = resolve_slug_to_id(slug, config)
    except CurseFetchError as e:
        logger.error(f"解析 {slug} 失败: {e}")
        raise click.ClickException(str(e))
    click.echo(mod_id)


@main.command()
@click.argument("reference")
@click.option("-g", "--game-version", help="只显示该游戏版本的最新文件")
@click.option("--json", "as_json", is_flag=True, help="以 JSON 格式输出")
@click.pass_obj
def info(config: ClientConfig, reference: str, game_version: Optional[str], as_json: bool):
    """获取模组元数据（REFERENCE 可以是 slug 或 ID）"""
    try:
        record = asyncio.run(fetch_async(config, reference))
    except CurseFetchError as e:
        logger.error(f"获取 {reference} 失败: {e}")
        raise click.ClickException(str(e))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="REFERENCE")

    if as_json:
        click.echo(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
    else:
        click.echo(format_record(record, game_version))


if __name__ == "__main__":
    main()
