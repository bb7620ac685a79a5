# tests/integration/test_hub_sqlite.py
"""`LabelHub` 在 SQLite 存储上的端到端测试：茶室界面的完整流程。"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio

from label_hub import LabelHub, LabelHubConfig, ViewDefinition
from label_hub.core.exceptions import StoreIOError
from label_hub.core.types import LabelRecord
from tests.helpers.factories import (
    EXPECTED_TEA_ROOM_EN,
    EXPECTED_TEA_ROOM_ZH,
    TEA_ROOM_SCOPE,
)
from tests.helpers.schemas import TeaRoomLabels


@pytest_asyncio.fixture
async def hub(
    db_url: str, tea_records: list[LabelRecord]
) -> AsyncGenerator[LabelHub, None]:
    async with LabelHub(LabelHubConfig(database_url=db_url)) as hub:
        await hub.seed(tea_records)
        yield hub


async def tea_menu(language: str) -> list[dict[str, Any]]:
    return [{"name": "sencha", "price": 4}]


@pytest.mark.asyncio
async def test_tea_room_view_in_each_language(hub: LabelHub) -> None:
    hub.register_view(
        ViewDefinition(name="teaRoom", scope_key=TEA_ROOM_SCOPE, data_loader=tea_menu)
    )

    zh = await hub.fetch("teaRoom", "zh")
    fr = await hub.fetch("teaRoom", "fr")

    assert zh.labels == EXPECTED_TEA_ROOM_ZH
    assert not zh.is_fallback
    assert fr.labels == EXPECTED_TEA_ROOM_EN
    assert fr.is_fallback
    assert zh.data == fr.data == [{"name": "sencha", "price": 4}]


@pytest.mark.asyncio
async def test_partial_translation_is_not_back_filled(hub: LabelHub) -> None:
    result = await hub.fetch_view(TEA_ROOM_SCOPE, "ja")
    assert result.labels == {"pageTitle": "茶室"}
    assert result.used_language == "ja"


@pytest.mark.asyncio
async def test_typed_bundle(hub: LabelHub) -> None:
    labels = await hub.get_labels(TEA_ROOM_SCOPE, "zh", schema=TeaRoomLabels)
    assert labels.menu.price.label == "价格"
    assert labels.footer is None


@pytest.mark.asyncio
async def test_unknown_scope(hub: LabelHub) -> None:
    result = await hub.fetch_view("unknownView", "zh", data_loader=tea_menu)
    assert result.labels is None
    assert result.data is not None


@pytest.mark.asyncio
async def test_missing_table_raises_store_io_error(db_url: str) -> None:
    hub = LabelHub(LabelHubConfig(database_url=db_url, auto_create_schema=False))
    await hub.initialize()
    try:
        with pytest.raises(StoreIOError):
            await hub.fetch_view(TEA_ROOM_SCOPE, "en")
    finally:
        await hub.close()
