"""
API 客户端

通过 CurseProxy GraphQL 接口解析 slug，通过 CurseMeta 接口获取模组元数据。
每次调用只发出一个请求，不缓存、不重试。
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp
from loguru import logger

from cursefetch.models import ClientConfig, MetadataResponse, ModRecord, SlugQuery, SlugResult
from cursefetch.exceptions import (
    IntegrityError,
    NotFoundError,
    RemoteApplicationError,
    TransportError,
)
from cursefetch.utils import decode_json_body


class CurseClient:
    """CurseForge 元数据客户端"""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or ClientConfig()
        self._session = session
        self._owned_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owned_session = True
        return self._session

    def _headers(self, with_body: bool = False) -> Dict[str, str]:
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        }
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(
        self, method: str, url: str, payload: Optional[dict] = None
    ) -> Dict[str, Any]:
        """发送请求并解码响应体，不检查状态码"""
        logger.debug(f"{method} {url}")
        try:
            async with self.session.request(
                method,
                url,
                json=payload,
                headers=self._headers(with_body=payload is not None),
            ) as response:
                body = await response.read()
                logger.debug(f"{method} {url} -> {response.status} ({len(body)} 字节)")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(
                f"请求失败: {str(e) or type(e).__name__}",
                context={"reason": type(e).__name__},
                url=url,
            ) from e
        return decode_json_body(body, url=url)

    async def resolve_slug(self, slug: str) -> int:
        """
        将 slug 解析为模组 ID

        存在多个匹配时返回第一个。

        Raises:
            TransportError, DecodeError, RemoteApplicationError, NotFoundError
        """
        url = self.config.graphql_url
        data = await self._request("POST", url, SlugQuery(slug).to_payload())
        result = SlugResult.from_dict(data)

        if result.is_error:
            raise RemoteApplicationError(
                result.error_message, stacktrace=result.stacktrace, url=url
            )
        if not result.addon_ids:
            raise NotFoundError(slug, url=url)
        return result.addon_ids[0]

    async def get_mod_info(self, mod_id: int) -> ModRecord:
        """
        获取模组元数据

        Raises:
            TransportError, DecodeError, RemoteApplicationError, IntegrityError
        """
        if isinstance(mod_id, bool) or not isinstance(mod_id, int) or mod_id <= 0:
            raise ValueError(f"模组 ID 必须是正整数: {mod_id!r}")

        url = self.config.addon_endpoint(mod_id)
        response = MetadataResponse.from_dict(await self._request("GET", url))

        if response.is_error:
            raise RemoteApplicationError(
                response.envelope.description or "",
                status=response.envelope.status,
                url=url,
            )
        if response.record_id != mod_id:
            raise IntegrityError(mod_id, response.record_id, url=url)
        return response.to_record()

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()


async def _resolve_slug(slug: str, config: Optional[ClientConfig]) -> int:
    async with CurseClient(config) as client:
        return await client.resolve_slug(slug)


async def _fetch_mod_record(mod_id: int, config: Optional[ClientConfig]) -> ModRecord:
    async with CurseClient(config) as client:
        return await client.get_mod_info(mod_id)


def resolve_slug_to_id(slug: str, config: Optional[ClientConfig] = None) -> int:
    """阻塞版本的 slug 解析，不能在运行中的事件循环里调用"""
    return asyncio.run(_resolve_slug(slug, config))


def fetch_mod_record(mod_id: int, config: Optional[ClientConfig] = None) -> ModRecord:
    """阻塞版本的元数据获取，不能在运行中的事件循环里调用"""
    return asyncio.run(_fetch_mod_record(mod_id, config))
