"""
配置文件加载

支持 TOML、JSON 和 YAML 格式。
"""

import json
from dataclasses import replace
from pathlib import Path
from typing import Optional

import toml
import yaml

from cursefetch.exceptions import ConfigError
from cursefetch.models import ClientConfig


def load_config(config_path: str) -> ClientConfig:
    """加载配置文件"""
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"配置文件不存在: {config_path}", context={"path": config_path})

    suffix = path.suffix.lower()

    try:
        if suffix == ".toml":
            data = toml.load(config_path)
        elif suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        else:
            raise ConfigError(
                f"不支持的配置文件格式: {suffix}", context={"path": config_path}
            )
    except OSError as e:
        raise ConfigError(
            f"无法读取配置文件: {e}", context={"path": config_path}
        ) from e
    except (
        toml.TomlDecodeError,
        json.JSONDecodeError,
        yaml.YAMLError,
        UnicodeDecodeError,
    ) as e:
        raise ConfigError(
            f"配置文件解析失败: {e}", context={"path": config_path}
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("配置文件顶层必须是一个表", context={"path": config_path})
    return ClientConfig.from_dict(data)


def resolve_config(
    config_path: Optional[str] = None, user_agent: Optional[str] = None
) -> ClientConfig:
    """按 文件 -> 环境变量 -> 命令行 的顺序合成配置"""
    config = load_config(config_path) if config_path else ClientConfig()
    config = ClientConfig.from_env(config)
    if user_agent:
        config = replace(config, user_agent=user_agent)
    return config
