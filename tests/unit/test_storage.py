"""Unit tests for storage clients."""

import httpx
import pytest

from base_connector.client import HttpApiClient
from base_connector.exceptions import TransportError
from base_connector.storage import (
    EntityStorageClientBase,
    HttpStorageClient,
    Queryable,
    count_query,
    merge_configuration,
)
from base_connector.utils.http import HttpxClientBuilder


class FixtureStorageClient(EntityStorageClientBase):
    """Storage client answering queries from a fixed list."""

    def __init__(self, rows, configuration=None, plugin_definition=None):
        self.rows = rows
        self.queries = []
        super().__init__(
            configuration,
            "fixture",
            plugin_definition
            or {"name": "fixture", "label": "Fixture", "description": "In memory"},
        )

    def default_configuration(self):
        return {"page_size": 50, "filters": {"status": "published", "lang": "en"}}

    def query(self, parameters=None):
        self.queries.append(parameters)
        parameters = parameters or {}
        return [r for r in self.rows if all(r.get(k) == v for k, v in parameters.items())]


class TestMergeConfiguration:
    def test_supplied_wins(self):
        assert merge_configuration({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_mappings_merged(self):
        merged = merge_configuration(
            {"auth": {"type": "bearer", "token": None}, "path": "/items"},
            {"auth": {"token": "abc"}},
        )
        assert merged == {"auth": {"type": "bearer", "token": "abc"}, "path": "/items"}

    def test_lists_replaced(self):
        assert merge_configuration({"ids": [1, 2]}, {"ids": [3]}) == {"ids": [3]}

    def test_inputs_not_mutated(self):
        defaults = {"filters": {"status": "published"}}
        supplied = {"filters": {"lang": "fr"}}
        merged = merge_configuration(defaults, supplied)
        merged["filters"]["status"] = "draft"

        assert defaults == {"filters": {"status": "published"}}
        assert supplied == {"filters": {"lang": "fr"}}

    def test_none_inputs(self):
        assert merge_configuration(None, None) == {}


class TestEntityStorageClientBase:
    def test_metadata(self):
        client = FixtureStorageClient([])
        assert client.get_name() == "fixture"
        assert client.label() == "Fixture"
        assert client.get_description() == "In memory"
        assert client.get_plugin_id() == "fixture"

    def test_description_defaults_to_empty(self):
        client = FixtureStorageClient([], plugin_definition={"name": "n", "label": "L"})
        assert client.get_description() == ""

    def test_configuration_merged_over_defaults(self):
        client = FixtureStorageClient([], {"filters": {"lang": "fr"}, "extra": True})
        assert client.get_configuration() == {
            "page_size": 50,
            "filters": {"status": "published", "lang": "fr"},
            "extra": True,
        }

    def test_set_configuration_replaces_previous(self):
        client = FixtureStorageClient([], {"page_size": 10})
        client.set_configuration({"extra": 1})
        assert client.get_configuration()["page_size"] == 50
        assert client.get_configuration()["extra"] == 1

    def test_base_defaults(self):
        class Minimal(EntityStorageClientBase):
            def query(self, parameters=None):
                return []

        client = Minimal(None, "minimal", {"name": "minimal", "label": "Minimal"})
        assert client.default_configuration() == {}
        assert client.calculate_dependencies() == {}
        assert client.get_configuration() == {}

    def test_query_is_abstract(self):
        with pytest.raises(TypeError):
            EntityStorageClientBase({}, "x", {"name": "x", "label": "X"})

    def test_count_query(self):
        rows = [{"type": "a"}, {"type": "b"}, {"type": "a"}]
        client = FixtureStorageClient(rows)

        assert client.count_query() == 3
        assert client.count_query({"type": "a"}) == 2
        assert client.queries[-1] == {"type": "a"}

    def test_count_query_over_protocol(self):
        class Listing:
            def query(self, parameters=None):
                return ["x", "y"]

        assert isinstance(Listing(), Queryable)
        assert count_query(Listing()) == 2


class TestHttpStorageClient:
    @pytest.fixture
    def api_client(self, bearer_auth):
        def handler(request):
            if request.url.path == "/v1/articles":
                items = [{"id": 1, "status": "live"}, {"id": 2, "status": "live"}]
                params = dict(request.url.params)
                return httpx.Response(200, json={"data": items, "params": params})
            if request.url.path == "/v1/plain":
                return httpx.Response(200, json=[{"id": 1}])
            return httpx.Response(200, text="<html></html>")

        builder = HttpxClientBuilder(transport=httpx.MockTransport(handler))
        return HttpApiClient(
            bearer_auth, "https://api.example.com/v1", {"http_client_builder": builder}
        )

    def test_query_with_list_key(self, api_client):
        storage = HttpStorageClient(
            api_client, {"path": "/articles", "list_key": "data"}
        )
        assert [item["id"] for item in storage.query()] == [1, 2]
        assert storage.count_query({"status": "live"}) == 2

    def test_parameters_sent_as_query_string(self, api_client):
        captured = {}
        original_get = api_client.get

        def spy(uri, headers=None):
            captured["uri"] = uri
            return original_get(uri, headers)

        api_client.get = spy
        storage = HttpStorageClient(
            api_client,
            {"path": "/articles", "list_key": "data", "parameters": {"lang": "en"}},
        )
        storage.query({"status": "live"})

        assert captured["uri"].params["lang"] == "en"
        assert captured["uri"].params["status"] == "live"

    def test_plain_list_response(self, api_client):
        storage = HttpStorageClient(api_client, {"path": "/plain"})
        assert storage.query() == [{"id": 1}]
        assert storage.get_name() == "http"

    def test_non_json_response(self, api_client):
        storage = HttpStorageClient(api_client, {"path": "/html"})
        with pytest.raises(TransportError, match="not valid JSON"):
            storage.query()

    def test_missing_list_key(self, api_client):
        storage = HttpStorageClient(api_client, {"path": "/plain", "list_key": "data"})
        with pytest.raises(TransportError, match="no 'data' member"):
            storage.query()

    def test_object_response_without_list_key(self, api_client):
        storage = HttpStorageClient(api_client, {"path": "/articles"})
        with pytest.raises(TransportError, match="not a list"):
            storage.query()
