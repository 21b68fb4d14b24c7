"""
模组解析服务

把 slug 或 ID 统一解析为模组记录。
"""

from typing import List, Union

from cursefetch.models import ModRecord
from cursefetch.services.api_client import CurseClient


ModReference = Union[int, str]


class ModResolver:
    """模组解析器"""

    def __init__(self, client: CurseClient):
        self.client = client

    async def resolve_id(self, reference: ModReference) -> int:
        """纯数字视为模组 ID，否则当作 slug 查询"""
        if isinstance(reference, int) and not isinstance(reference, bool):
            return reference
        text = str(reference).strip()
        if text.isdecimal():
            return int(text)
        return await self.client.resolve_slug(text)

    async def resolve(self, reference: ModReference) -> ModRecord:
        """
        解析模组信息

        Args:
            reference: 模组 ID 或 slug

        Returns:
            模组记录
        """
        mod_id = await self.resolve_id(reference)
        return await self.client.get_mod_info(mod_id)

    async def resolve_many(self, references: List[ModReference]) -> List[ModRecord]:
        """
        批量解析模组，遇到第一个错误即停止

        Args:
            references: 模组 ID 或 slug 列表
        """
        results = []
        for reference in references:
            results.append(await self.resolve(reference))
        return results
