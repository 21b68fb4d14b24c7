"""Tests for ModResolver composition of slug resolution and metadata fetch."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cursefetch.exceptions import NotFoundError
from cursefetch.models import ModRecord
from cursefetch.services import ModResolver

from payloads import sample_record


def make_client() -> MagicMock:
    client = MagicMock()
    client.resolve_slug = AsyncMock(return_value=238222)
    client.get_mod_info = AsyncMock(
        side_effect=lambda mod_id: ModRecord.from_dict(sample_record(mod_id))
    )
    return client


class TestModResolver:
    @pytest.mark.asyncio
    async def test_slug_is_resolved_then_fetched(self) -> None:
        client = make_client()

        record = await ModResolver(client).resolve("jei")

        client.resolve_slug.assert_awaited_once_with("jei")
        client.get_mod_info.assert_awaited_once_with(238222)
        assert record.id == 238222

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reference", [238222, "238222", " 238222 "])
    async def test_numeric_reference_skips_slug_lookup(self, reference) -> None:
        client = make_client()

        record = await ModResolver(client).resolve(reference)

        client.resolve_slug.assert_not_awaited()
        assert record.id == 238222

    @pytest.mark.asyncio
    async def test_resolve_many_keeps_order(self) -> None:
        client = make_client()

        records = await ModResolver(client).resolve_many([3, "jei", 5])

        assert [record.id for record in records] == [3, 238222, 5]

    @pytest.mark.asyncio
    async def test_resolve_many_stops_at_first_error(self) -> None:
        client = make_client()
        client.resolve_slug.side_effect = NotFoundError("missing")

        with pytest.raises(NotFoundError):
            await ModResolver(client).resolve_many([3, "missing", 5])
        assert client.get_mod_info.await_count == 1

    @pytest.mark.asyncio
    async def test_against_mock_service(self, client, mock_service) -> None:
        mock_service.set_graphql({"data": {"addons": [{"id": 238222}]}})
        mock_service.set_addon(238222, sample_record())

        record = await ModResolver(client).resolve("jei")

        assert record.name == "Just Enough Items"
        assert [request["method"] for request in mock_service.requests] == ["POST", "GET"]
