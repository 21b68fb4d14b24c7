"""
cursefetch

通过 slug 解析 CurseForge 模组 ID，并获取模组元数据。
"""

from cursefetch.exceptions import (
    CurseFetchError,
    FetchError,
    ResolutionError,
    TransportError,
    DecodeError,
    RemoteApplicationError,
    NotFoundError,
    IntegrityError,
)
from cursefetch.models import ClientConfig, FileType, DependencyKind, ModRecord
from cursefetch.services import (
    CurseClient,
    ModResolver,
    fetch_mod_record,
    resolve_slug_to_id,
)

__version__ = "0.1.0"

__all__ = [
    "CurseFetchError",
    "FetchError",
    "ResolutionError",
    "TransportError",
    "DecodeError",
    "RemoteApplicationError",
    "NotFoundError",
    "IntegrityError",
    "ClientConfig",
    "FileType",
    "DependencyKind",
    "ModRecord",
    "CurseClient",
    "ModResolver",
    "fetch_mod_record",
    "resolve_slug_to_id",
]
