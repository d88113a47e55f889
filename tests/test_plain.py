import httpx
import pytest
import respx
from contentful_cma.core.client import ContentfulClient
from contentful_cma.plain import PlainClient
from contentful_cma.registry import (
    discover_endpoint_modules,
    endpoint_table,
    iter_endpoint_functions,
)

BASE = "https://api.contentful.com"


@pytest.fixture
def plain():
    client = ContentfulClient(access_token="mock-token")
    return PlainClient(client, defaults={"space_id": "s1", "environment_id": "master"})


def test_discovers_all_resources():
    names = {m.__name__.rsplit(".", 1)[-1] for m in discover_endpoint_modules()}
    assert names == {"asset", "content_type", "entry", "environment", "space", "team"}


def test_endpoint_functions_skip_imports_and_helpers():
    from contentful_cma.endpoints import entry

    names = {f.__name__ for f in iter_endpoint_functions(entry)}
    assert "get" in names and "create_with_id" in names
    assert "_entity_url" not in names
    assert "normalize_select" not in names


def test_endpoint_table_shape():
    table = endpoint_table()
    assert "process_for_locale" in table["asset"]
    assert set(table["team"]) == {"get", "get_many", "create", "update", "delete"}


@pytest.mark.asyncio
@respx.mock
async def test_defaults_fill_space_and_environment(plain):
    route = respx.get(f"{BASE}/spaces/s1/environments/master/entries/e1").mock(
        return_value=httpx.Response(200, json={"sys": {"id": "e1"}})
    )

    async with plain:
        data = await plain.entry.get(entry_id="e1")

    assert data["sys"]["id"] == "e1"
    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_explicit_kwargs_win_over_defaults(plain):
    route = respx.get(f"{BASE}/spaces/s1/environments/staging/assets").mock(
        return_value=httpx.Response(200, json={"items": []})
    )

    async with plain:
        await plain.asset.get_many(environment_id="staging")

    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_defaults_only_passed_where_accepted(plain):
    # space.get_many takes no space_id; the default must not leak into it
    route = respx.get(f"{BASE}/spaces").mock(
        return_value=httpx.Response(200, json={"items": []})
    )

    async with plain:
        await plain.space.get_many()

    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_organization_default_for_teams():
    route = respx.get(f"{BASE}/organizations/org1/teams").mock(
        return_value=httpx.Response(200, json={"items": []})
    )
    client = ContentfulClient(access_token="mock-token")
    async with PlainClient(client, defaults={"organization_id": "org1"}) as plain:
        await plain.team.get_many()

    assert route.called


def test_unknown_resource_and_operation(plain):
    with pytest.raises(AttributeError):
        plain.webhook
    with pytest.raises(AttributeError):
        plain.entry.explode
    assert "publish" in dir(plain.entry)
