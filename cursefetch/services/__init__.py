"""
cursefetch 服务层

包含 API 客户端和模组解析服务。
"""

from cursefetch.services.api_client import (
    CurseClient,
    fetch_mod_record,
    resolve_slug_to_id,
)
from cursefetch.services.mod_resolver import ModResolver

__all__ = [
    "CurseClient",
    "ModResolver",
    "fetch_mod_record",
    "resolve_slug_to_id",
]
