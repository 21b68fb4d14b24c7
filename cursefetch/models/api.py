"""
API 数据模型

定义 slug 查询、模组记录、文件记录等数据类，以及与 CurseMeta JSON 的相互转换。
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, FrozenSet, List, Optional

from cursefetch.exceptions import DecodeError


GRAPHQL_QUERY = """
query getIDFromSlug($slug: String) {
  addons(slug: $slug) {
    id
  }
}
"""

_MISSING = object()
_FRACTION = re.compile(r"\.(\d+)")


def _field(data: Dict[str, Any], key: str, kind: type, default: Any = _MISSING):
    """读取并校验字段类型，null 视为缺失"""
    value = data.get(key)
    if value is None:
        if default is _MISSING:
            raise DecodeError(f"响应缺少字段: {key}")
        return default
    if (kind is int and isinstance(value, bool)) or not isinstance(value, kind):
        raise DecodeError(
            f"字段 {key} 类型错误: 期望 {kind.__name__}，实际为 {type(value).__name__}"
        )
    return value


def _object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{where} 应为 JSON 对象")
    return value


def parse_timestamp(value: str) -> datetime:
    """解析 ISO 8601 时间戳，小数秒截断到微秒，无时区时按 UTC 处理"""
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(
        lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1
    )
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise DecodeError(f"无法解析时间戳: {value}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class _CodeEnum(IntEnum):
    """整数代码枚举，未知代码保留原值作为未识别成员"""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            member = int.__new__(cls, value)
            member._name_ = f"UNRECOGNIZED_{value}"
            member._value_ = value
            return member
        return None

    @property
    def is_recognized(self) -> bool:
        return self._name_ in type(self).__members__


class FileType(_CodeEnum):
    """文件发布渠道"""

    RELEASE = 1
    BETA = 2
    ALPHA = 3


class DependencyKind(_CodeEnum):
    """依赖类型"""

    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class SlugQuery:
    """slug 查询请求，slug 只作为 GraphQL 变量传递"""

    slug: str

    def to_payload(self) -> Dict[str, Any]:
        return {"query": GRAPHQL_QUERY, "variables": {"slug": self.slug}}


@dataclass
class SlugResult:
    """
    GraphQL slug 查询的结果。

    每个响应只对应一种结果：应用层错误、未找到（addon_ids 为空）或找到。
    """

    addon_ids: List[int] = field(default_factory=list)
    exception: Optional[str] = None
    message: Optional[str] = None
    stacktrace: List[str] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return bool(self.exception) or bool(self.message)

    @property
    def error_message(self) -> str:
        return self.message or self.exception or ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlugResult":
        result = cls(
            exception=_field(data, "exception", str, None),
            message=_field(data, "message", str, None),
            stacktrace=[str(line) for line in _field(data, "stacktrace", list, ())],
        )
        # 错误优先，此时不再解析 addons
        if result.is_error:
            return result

        body = data.get("data")
        if body is None:
            return result
        addons = _field(_object(body, "data"), "addons", list, ())
        result.addon_ids = [
            _field(_object(addon, "addons[]"), "id", int) for addon in addons
        ]
        return result


@dataclass
class Dependency:
    """依赖信息"""

    mod_id: int
    kind: DependencyKind

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dependency":
        return cls(
            mod_id=_field(data, "addonId", int),
            kind=DependencyKind(_field(data, "type", int)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"addonId": self.mod_id, "type": int(self.kind)}


@dataclass
class ModFile:
    """模组文件信息"""

    id: int
    disk_file_name: str
    display_file_name: str
    release_date: datetime
    length_bytes: int
    release_type: FileType
    game_versions: FrozenSet[str] = frozenset()
    dependencies: List[Dependency] = field(default_factory=list)
    # 服务端原始时间戳文本，可能带 7 位小数秒
    release_date_raw: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def release_date_text(self) -> str:
        """序列化用的时间戳，原始文本仍与 release_date 一致时原样返回"""
        raw = self.release_date_raw
        if raw is not None and parse_timestamp(raw) == self.release_date:
            return raw
        return format_timestamp(self.release_date)

    @property
    def required_dependencies(self) -> List[Dependency]:
        return [dep for dep in self.dependencies if dep.kind == DependencyKind.REQUIRED]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModFile":
        game_versions = _field(data, "gameVersion", list, ())
        if not all(isinstance(version, str) for version in game_versions):
            raise DecodeError("字段 gameVersion 应为字符串列表")
        file_date = _field(data, "fileDate", str)
        return cls(
            id=_field(data, "id", int),
            disk_file_name=_field(data, "fileNameOnDisk", str),
            display_file_name=_field(data, "fileName", str),
            release_date=parse_timestamp(file_date),
            release_date_raw=file_date,
            length_bytes=_field(data, "fileLength", int),
            release_type=FileType(_field(data, "releaseType", int)),
            game_versions=frozenset(game_versions),
            dependencies=[
                Dependency.from_dict(_object(dep, "dependencies[]"))
                for dep in _field(data, "dependencies", list, ())
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fileNameOnDisk": self.disk_file_name,
            "fileName": self.display_file_name,
            "fileDate": self.release_date_text,
            "fileLength": self.length_bytes,
            "releaseType": int(self.release_type),
            "gameVersion": sorted(self.game_versions),
            "dependencies": [dep.to_dict() for dep in self.dependencies],
        }


@dataclass
class GameVersionEntry:
    """某个游戏版本下服务端认为最新的文件"""

    game_version: str
    file_id: int
    file_display_name: str
    release_type: FileType

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameVersionEntry":
        return cls(
            game_version=_field(data, "gameVersion", str),
            file_id=_field(data, "projectFileId", int),
            file_display_name=_field(data, "projectFileName", str),
            release_type=FileType(_field(data, "fileType", int)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gameVersion": self.game_version,
            "projectFileId": self.file_id,
            "projectFileName": self.file_display_name,
            "fileType": int(self.release_type),
        }


@dataclass
class ModRecord:
    """
    模组记录。

    latest_files 与 game_version_latest_files 保持服务端返回的顺序。
    """

    id: int
    name: str
    slug: str
    latest_files: List[ModFile] = field(default_factory=list)
    game_version_latest_files: List[GameVersionEntry] = field(default_factory=list)

    def latest_for_game_version(self, game_version: str) -> Optional[GameVersionEntry]:
        """获取指定游戏版本的最新文件条目"""
        for entry in self.game_version_latest_files:
            if entry.game_version == game_version:
                return entry
        return None

    def find_file(self, file_id: int) -> Optional[ModFile]:
        for mod_file in self.latest_files:
            if mod_file.id == file_id:
                return mod_file
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModRecord":
        """
        将 CurseMeta API 返回的模组信息转换为 ModRecord 对象。
        """
        return cls(
            id=_field(data, "id", int),
            name=_field(data, "name", str),
            slug=_field(data, "slug", str),
            latest_files=[
                ModFile.from_dict(_object(item, "latestFiles[]"))
                for item in _field(data, "latestFiles", list, ())
            ],
            game_version_latest_files=[
                GameVersionEntry.from_dict(_object(item, "gameVersionLatestFiles[]"))
                for item in _field(data, "gameVersionLatestFiles", list, ())
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "latestFiles": [item.to_dict() for item in self.latest_files],
            "gameVersionLatestFiles": [
                item.to_dict() for item in self.game_version_latest_files
            ],
        }


@dataclass
class RemoteErrorEnvelope:
    """CurseMeta 错误信封，与成功响应共用同一个 JSON 对象"""

    description: Optional[str] = None
    error: Optional[bool] = None
    status: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteErrorEnvelope":
        return cls(
            description=_field(data, "description", str, None),
            error=_field(data, "error", bool, None),
            status=_field(data, "status", int, None),
        )


@dataclass
class MetadataResponse:
    """元数据响应：原始对象加上从中解出的错误信封"""

    payload: Dict[str, Any]
    envelope: RemoteErrorEnvelope

    @property
    def is_error(self) -> bool:
        return self.envelope.error is True

    @property
    def record_id(self) -> Optional[int]:
        return _field(self.payload, "id", int, None)

    def to_record(self) -> ModRecord:
        return ModRecord.from_dict(self.payload)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetadataResponse":
        return cls(payload=data, envelope=RemoteErrorEnvelope.from_dict(data))
