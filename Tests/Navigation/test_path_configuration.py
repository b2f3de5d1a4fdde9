"""
Tests for loading path configuration from the server and bundled sources.
"""

import json

import httpx
import pytest

from turbo_shell.Constants import BUNDLED_PATH_CONFIGURATION, SOURCE_BUNDLED, SOURCE_SERVER
from turbo_shell.navigation.path_configuration import (
    PathConfiguration,
    PathConfigurationSource,
    configured_sources,
)

from Tests.turbo_test_utilities import BASE_URL


def write_document(tmp_path, name, document):
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def client(fake_site):
    return httpx.AsyncClient(transport=fake_site.transport())


@pytest.mark.asyncio
async def test_server_and_bundled_rules_are_concatenated_in_source_order(tmp_path, fake_site, client):
    fake_site.json("/turbo.json", {
        "settings": {"tabs": [{"title": "Home", "visit": "/"}]},
        "rules": [{"patterns": ["/new$"], "properties": {"presentation": "modal"}}],
    })
    bundled = write_document(tmp_path, "bundled.json", {
        "settings": {"navbar": {"background": "#000000"}},
        "rules": [{"patterns": ["/new$"], "properties": {"presentation": "default"}}],
    })
    configuration = PathConfiguration(
        [PathConfigurationSource.server(BASE_URL + "/turbo.json"), PathConfigurationSource.file(bundled)],
        client=client,
    )

    rules = await configuration.load()

    assert len(rules) == 2
    # The bundled rule comes later, so it wins
    assert configuration.properties_for(BASE_URL + "/posts/new") == {"presentation": "default"}
    assert configuration.settings == {
        "tabs": [{"title": "Home", "visit": "/"}],
        "navbar": {"background": "#000000"},
    }
    await client.aclose()


@pytest.mark.asyncio
async def test_unreachable_server_falls_back_to_bundled_rules(tmp_path, fake_site, client):
    fake_site.json("/turbo.json", {"error": "nope"}, status_code=500)
    bundled = write_document(tmp_path, "bundled.json", {
        "rules": [{"patterns": ["/edit$"], "properties": {"presentation": "modal"}}],
    })
    configuration = PathConfiguration(
        [PathConfigurationSource.server(BASE_URL + "/turbo.json"), PathConfigurationSource.file(bundled)],
        client=client,
    )

    await configuration.load()

    assert configuration.loaded
    assert configuration.properties_for(BASE_URL + "/posts/1/edit") == {"presentation": "modal"}
    await client.aclose()


@pytest.mark.asyncio
async def test_malformed_document_is_skipped(tmp_path, fake_site, client):
    fake_site.route("/turbo.json", lambda request: httpx.Response(200, content=b"{not json"))
    configuration = PathConfiguration([PathConfigurationSource.server(BASE_URL + "/turbo.json")], client=client)

    rules = await configuration.load()

    assert rules == ()
    assert configuration.loaded
    assert configuration.properties_for(BASE_URL + "/anything") == {}
    await client.aclose()


@pytest.mark.asyncio
async def test_missing_bundled_file_yields_no_rules(tmp_path):
    configuration = PathConfiguration([PathConfigurationSource.file(tmp_path / "missing.json")])
    assert await configuration.load() == ()
    assert configuration.settings == {}


@pytest.mark.asyncio
async def test_properties_are_empty_before_load(tmp_path):
    bundled = write_document(tmp_path, "bundled.json", {
        "rules": [{"patterns": [".*"], "properties": {"presentation": "modal"}}],
    })
    configuration = PathConfiguration([PathConfigurationSource.file(bundled)])
    assert configuration.properties_for(BASE_URL + "/x") == {}


@pytest.mark.asyncio
async def test_load_is_cached_until_refresh(fake_site, client):
    fake_site.json("/turbo.json", {"rules": []})
    configuration = PathConfiguration([PathConfigurationSource.server(BASE_URL + "/turbo.json")], client=client)

    await configuration.load()
    await configuration.load()
    assert fake_site.requested_paths() == ["/turbo.json"]

    fake_site.json("/turbo.json", {"rules": [{"patterns": ["/a"], "properties": {"action": "replace"}}]})
    await configuration.refresh()
    assert fake_site.requested_paths() == ["/turbo.json", "/turbo.json"]
    assert configuration.properties_for(BASE_URL + "/a") == {"action": "replace"}
    await client.aclose()


@pytest.mark.asyncio
async def test_bundled_configuration_ships_with_the_package():
    configuration = PathConfiguration([PathConfigurationSource.file(BUNDLED_PATH_CONFIGURATION)])
    await configuration.load()
    assert configuration.properties_for(BASE_URL + "/posts/new") == {"presentation": "modal"}


def test_configured_sources_follow_the_config_order(write_config):
    write_config('[path_configuration]\nsources = ["bundled", "server"]\nserver_path = "/config/turbo.json"\n')

    sources = configured_sources(BASE_URL)

    assert [source.kind for source in sources] == [SOURCE_BUNDLED, SOURCE_SERVER]
    assert sources[0].location == str(BUNDLED_PATH_CONFIGURATION)
    assert sources[1].location == BASE_URL + "/config/turbo.json"


def test_configured_sources_default_to_server_then_bundled():
    sources = configured_sources(BASE_URL)
    assert [source.kind for source in sources] == [SOURCE_SERVER, SOURCE_BUNDLED]
    assert sources[0].location == BASE_URL + "/turbo.json"
