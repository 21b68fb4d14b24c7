"""
日志模块

使用 loguru 输出到 stderr，stdout 只留给命令结果。
"""

import os
import sys
from typing import Mapping, Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"
DEBUG_ENV = "CURSEFETCH_DEBUG"


def resolve_level(
    debug: bool = False,
    level: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """显式级别 > --debug > CURSEFETCH_DEBUG=1 > INFO"""
    if level:
        return level.upper()
    environ = os.environ if environ is None else environ
    if debug or environ.get(DEBUG_ENV, "0") == "1":
        return "DEBUG"
    return "INFO"


def setup_logger(
    debug: bool = False,
    level: Optional[str] = None,
    sink=None,
    colorize: Optional[bool] = None,
) -> str:
    """
    重新配置全局 logger，返回生效的日志级别

    Args:
        debug: 命令行 --debug
        level: 显式日志级别，优先于 debug 与环境变量
        sink: 输出目标，默认为当前的 sys.stderr
        colorize: 是否启用颜色，None 时由 loguru 根据终端判断
    """
    level = resolve_level(debug, level)
    verbose = level == "DEBUG"

    logger.remove()
    logger.add(
        sink=sys.stderr if sink is None else sink,
        format=LOG_FORMAT,
        level=level,
        colorize=colorize,
        backtrace=verbose,
        diagnose=verbose,
    )

    if verbose:
        logger.debug("DEBUG 模式已启用")
    return level


__all__ = ["logger", "setup_logger", "resolve_level"]
