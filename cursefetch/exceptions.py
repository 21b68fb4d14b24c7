"""
cursefetch 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和字典序列化。
"""

from typing import Any, Dict, List, Optional


class CurseFetchError(Exception):
    """cursefetch 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(CurseFetchError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E100"


class FetchError(CurseFetchError):
    """远程请求相关错误"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message, code, context)
        self.url = url
        if url:
            self.context["url"] = url

    def _get_default_code(self) -> str:
        return "E200"


# 解析 slug 与获取元数据共用同一套错误
ResolutionError = FetchError


class TransportError(FetchError):
    """网络传输错误（连接、DNS、超时）"""

    def _get_default_code(self) -> str:
        return "E201"


class DecodeError(FetchError):
    """响应体不是合法的 JSON 或结构不符"""

    def _get_default_code(self) -> str:
        return "E202"


class RemoteApplicationError(FetchError):
    """服务端在响应体中报告了应用层错误"""

    def __init__(
        self,
        remote_message: str,
        status: Optional[int] = None,
        stacktrace: Optional[List[str]] = None,
        url: Optional[str] = None,
    ):
        super().__init__(
            f"远程服务返回错误: {remote_message}",
            context={
                "remote_message": remote_message,
                "status": status,
                "stacktrace": list(stacktrace or []),
            },
            url=url,
        )
        self.remote_message = remote_message
        self.status = status
        self.stacktrace = list(stacktrace or [])

    def _get_default_code(self) -> str:
        return "E203"


class NotFoundError(FetchError):
    """slug 没有匹配到任何模组"""

    def __init__(self, slug: str, url: Optional[str] = None):
        super().__init__(f"找不到模组: {slug}", context={"slug": slug}, url=url)
        self.slug = slug

    def _get_default_code(self) -> str:
        return "E404"


class IntegrityError(FetchError):
    """返回记录的 ID 与请求的 ID 不一致"""

    def __init__(
        self, expected_id: int, actual_id: Optional[int], url: Optional[str] = None
    ):
        super().__init__(
            f"响应中的模组 ID 与请求不一致: {expected_id}/{actual_id}",
            context={"expected_id": expected_id, "actual_id": actual_id},
            url=url,
        )
        self.expected_id = expected_id
        self.actual_id = actual_id

    def _get_default_code(self) -> str:
        return "E409"


__all__ = [
    "CurseFetchError",
    "ConfigError",
    "FetchError",
    "ResolutionError",
    "TransportError",
    "DecodeError",
    "RemoteApplicationError",
    "NotFoundError",
    "IntegrityError",
]
