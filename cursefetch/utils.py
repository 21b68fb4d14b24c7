import json
from typing import Any, Dict, Optional

from cursefetch.exceptions import DecodeError

_decoder = json.JSONDecoder()


def decode_json_body(body: bytes, url: Optional[str] = None) -> Dict[str, Any]:
    """
    解码响应体中的第一个完整 JSON 值，忽略其后的内容。

    找不到完整 JSON 值（空响应、截断、非 JSON）时抛出 DecodeError。
    """
    try:
        text = body.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DecodeError("响应体不是合法的 UTF-8", url=url) from e

    try:
        value, _ = _decoder.raw_decode(text.lstrip())
    except json.JSONDecodeError as e:
        raise DecodeError(f"响应体不是合法的 JSON: {e.msg}", url=url) from e

    if not isinstance(value, dict):
        raise DecodeError("响应体顶层应为 JSON 对象", url=url)
    return value
