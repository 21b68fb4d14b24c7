"""
cursefetch 数据模型包

包含配置模型和 API 模型定义。
"""

from cursefetch.models.config import ClientConfig
from cursefetch.models.api import (
    FileType,
    DependencyKind,
    SlugQuery,
    SlugResult,
    Dependency,
    ModFile,
    GameVersionEntry,
    ModRecord,
    RemoteErrorEnvelope,
    MetadataResponse,
)

__all__ = [
    # 配置模型
    "ClientConfig",
    # API 模型
    "FileType",
    "DependencyKind",
    "SlugQuery",
    "SlugResult",
    "Dependency",
    "ModFile",
    "GameVersionEntry",
    "ModRecord",
    "RemoteErrorEnvelope",
    "MetadataResponse",
]
