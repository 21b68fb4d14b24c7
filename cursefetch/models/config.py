"""
配置模型

客户端标识与服务端点，由宿主程序传入两个请求操作。
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from cursefetch.exceptions import ConfigError


DEFAULT_USER_AGENT = "cursefetch client"
DEFAULT_GRAPHQL_URL = "https://curse.nikky.moe/graphql"
DEFAULT_ADDON_URL = "https://staging_cursemeta.dries007.net/api/v3/direct/addon"

ENV_PREFIX = "CURSEFETCH_"


@dataclass(frozen=True)
class ClientConfig:
    """客户端配置"""

    user_agent: str = DEFAULT_USER_AGENT
    graphql_url: str = DEFAULT_GRAPHQL_URL
    addon_url: str = DEFAULT_ADDON_URL

    def addon_endpoint(self, mod_id: int) -> str:
        return f"{self.addon_url.rstrip('/')}/{mod_id}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClientConfig":
        """
        从字典创建配置

        支持平铺的键，或嵌套在 ``client`` 表中的键。
        """
        if "client" in data:
            data = data["client"]
            if not isinstance(data, Mapping):
                raise ConfigError("client 配置必须是一个表")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"未知的配置项: {', '.join(unknown)}")

        for key, value in data.items():
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"配置项 {key} 必须是非空字符串")
        return cls(**dict(data))

    @classmethod
    def from_env(
        cls,
        base: Optional["ClientConfig"] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        """用 CURSEFETCH_* 环境变量覆盖配置"""
        base = base or cls()
        environ = os.environ if environ is None else environ
        overrides: Dict[str, str] = {}
        for f in fields(cls):
            value = environ.get(ENV_PREFIX + f.name.upper())
            if value:
                overrides[f.name] = value
        return replace(base, **overrides)
