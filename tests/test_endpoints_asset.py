import json

import httpx
import pytest
import respx
from contentful_cma.core.client import ContentfulClient
from contentful_cma.endpoints import asset

ASSETS = "https://api.contentful.com/spaces/s1/environments/dev/assets"
IDS = {"space_id": "s1", "environment_id": "dev"}

ASSET_PAYLOAD = {
    "sys": {"id": "a1", "type": "Asset", "version": 2},
    "fields": {
        "title": {"en-US": "Logo"},
        "file": {
            "en-US": {
                "contentType": "image/png",
                "fileName": "logo.png",
                "upload": "https://example.com/logo.png",
            }
        },
    },
}


@pytest.fixture
def client():
    return ContentfulClient(access_token="mock-token")


@pytest.mark.asyncio
@respx.mock
async def test_get_and_get_many(client):
    one = respx.get(f"{ASSETS}/a1").mock(
        return_value=httpx.Response(200, json=ASSET_PAYLOAD)
    )
    many = respx.get(ASSETS).mock(
        return_value=httpx.Response(200, json={"total": 1, "items": [ASSET_PAYLOAD]})
    )

    async with client:
        got = await asset.get(client, **IDS, asset_id="a1")
        listed = await asset.get_many(client, **IDS, query={"select": "fields"})

    assert got["sys"]["id"] == "a1"
    assert listed["items"][0]["sys"]["id"] == "a1"
    assert one.called
    assert many.calls[0].request.url.params["select"] == "fields,sys"


@pytest.mark.asyncio
@respx.mock
async def test_create_and_create_with_id(client):
    post = respx.post(ASSETS).mock(return_value=httpx.Response(201, json=ASSET_PAYLOAD))
    put = respx.put(f"{ASSETS}/a1").mock(
        return_value=httpx.Response(201, json=ASSET_PAYLOAD)
    )
    body = {"fields": ASSET_PAYLOAD["fields"]}

    async with client:
        await asset.create(client, **IDS, data=body)
        await asset.create_with_id(client, **IDS, asset_id="a1", data=body)

    assert json.loads(post.calls[0].request.content) == body
    assert json.loads(put.calls[0].request.content) == body


@pytest.mark.asyncio
@respx.mock
async def test_update_and_publish_versions(client):
    update = respx.put(f"{ASSETS}/a1").mock(
        return_value=httpx.Response(200, json=ASSET_PAYLOAD)
    )
    publish = respx.put(f"{ASSETS}/a1/published").mock(
        return_value=httpx.Response(200, json=ASSET_PAYLOAD)
    )

    async with client:
        await asset.update(client, **IDS, asset_id="a1", data=ASSET_PAYLOAD)
        await asset.publish(client, **IDS, asset_id="a1", data=ASSET_PAYLOAD)

    assert update.calls[0].request.headers["X-Contentful-Version"] == "2"
    assert "sys" not in json.loads(update.calls[0].request.content)
    assert publish.calls[0].request.headers["X-Contentful-Version"] == "2"


@pytest.mark.asyncio
@respx.mock
async def test_lifecycle_routes(client):
    routes = [
        respx.delete(f"{ASSETS}/a1/published").mock(
            return_value=httpx.Response(200, json=ASSET_PAYLOAD)
        ),
        respx.put(f"{ASSETS}/a1/archived").mock(
            return_value=httpx.Response(200, json=ASSET_PAYLOAD)
        ),
        respx.delete(f"{ASSETS}/a1/archived").mock(
            return_value=httpx.Response(200, json=ASSET_PAYLOAD)
        ),
        respx.delete(f"{ASSETS}/a1").mock(return_value=httpx.Response(204)),
    ]

    async with client:
        await asset.unpublish(client, **IDS, asset_id="a1")
        await asset.archive(client, **IDS, asset_id="a1")
        await asset.unarchive(client, **IDS, asset_id="a1")
        await asset.delete(client, **IDS, asset_id="a1")

    assert all(r.called for r in routes)


@pytest.mark.asyncio
@respx.mock
async def test_process_for_locale(client):
    route = respx.put(f"{ASSETS}/a1/files/en-US/process").mock(
        return_value=httpx.Response(204)
    )

    async with client:
        result = await asset.process_for_locale(
            client, **IDS, asset=ASSET_PAYLOAD, locale="en-US"
        )

    assert result == {}
    assert route.calls[0].request.headers["X-Contentful-Version"] == "2"


@pytest.mark.asyncio
async def test_process_for_locale_requires_id(client):
    async with client:
        with pytest.raises(ValueError):
            await asset.process_for_locale(
                client, **IDS, asset={"fields": {}}, locale="en-US"
            )
