import logging
import uuid

import pytest

from affinity_mcp.design import DesignServiceClient


@pytest.mark.asyncio
async def test_create_returns_a_demo_id_without_url() -> None:
    client = DesignServiceClient()

    first = await client.create("Poster")
    second = await client.create("Flyer", template_id="tpl-1", width=1080, height=1920)

    assert first.design_id.startswith("demo-")
    uuid.UUID(first.design_id.removeprefix("demo-"))
    assert first.design_id != second.design_id
    assert first.url is None
    assert first.model_dump() == {"design_id": first.design_id, "url": None}


@pytest.mark.asyncio
async def test_logs_whether_an_api_key_is_present(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="affinity_mcp")

    await DesignServiceClient(api_key="secret").create("With key")
    await DesignServiceClient().create("Without key")

    messages = [record.getMessage() for record in caplog.records]
    assert any("api key present" in message for message in messages)
    assert any("api key missing" in message for message in messages)
    assert not any("secret" in message for message in messages)
