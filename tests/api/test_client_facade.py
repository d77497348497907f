from typing import Any

import pytest

from blaze.api import Client, ClientSettings, QueryResult
from blaze.api.errors import ApiConfigError
from blaze.core.query import from_

ROOT = "projects/demo/databases/(default)/documents"


class FakeTransport:
    """Records every call and answers with canned raw JSON."""

    def __init__(self, reply: Any = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def _record(self, method: str, *args: Any, **opts: Any) -> Any:
        self.calls.append((method, args, opts))
        if self.error is not None:
            raise self.error
        return self.reply

    def create_document(self, parent, collection_id, body, **opts):
        return self._record("create_document", parent, collection_id, body, **opts)

    def get(self, name, **opts):
        return self._record("get", name, **opts)

    def patch(self, name, body, **opts):
        return self._record("patch", name, body, **opts)

    def delete(self, name, **opts):
        return self._record("delete", name, **opts)

    def list(self, parent, collection_id, **opts):
        return self._record("list", parent, collection_id, **opts)

    def run_query(self, parent, body, **opts):
        return self._record("run_query", parent, body, **opts)


def _doc(**fields: Any) -> dict[str, Any]:
    return {
        "name": f"{ROOT}/books/b1",
        "fields": {k: {"stringValue": v} for k, v in fields.items()},
    }


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(project_id="demo")


def test_create_document_encodes_body_and_uses_default_parent(settings) -> None:
    transport = FakeTransport(reply=_doc(title="TAOCP"))
    result = Client(transport, settings).create_document(
        None, "books", {"title": "TAOCP", "volumes": [1, 2]}, documentId="b1"
    )

    method, args, opts = transport.calls[0]
    assert method == "create_document"
    assert args == (
        ROOT,
        "books",
        {
            "fields": {
                "title": {"stringValue": "TAOCP"},
                "volumes": {"arrayValue": {"values": [{"integerValue": 1}, {"integerValue": 2}]}},
            }
        },
    )
    assert opts == {"documentId": "b1"}
    assert result == QueryResult(documents={"title": "TAOCP"})


def test_explicit_parent_wins_over_settings(settings) -> None:
    transport = FakeTransport(reply=_doc())
    Client(transport, settings).create_document("projects/other/x", "books", {})
    assert transport.calls[0][1][0] == "projects/other/x"


def test_update_get_and_delete_pass_paths_through(settings) -> None:
    path = f"{ROOT}/books/b1"
    transport = FakeTransport(reply=_doc(title="t"))
    client = Client(transport, settings)

    assert client.update_document(path, {"title": "t"}).documents == {"title": "t"}
    assert client.get_document(path).documents == {"title": "t"}
    transport.reply = {}
    assert client.delete_document(path) == QueryResult()

    assert [(m, a[0]) for m, a, _ in transport.calls] == [
        ("patch", path),
        ("get", path),
        ("delete", path),
    ]
    assert transport.calls[0][1][1] == {"fields": {"title": {"stringValue": "t"}}}


def test_list_documents_applies_default_page_size() -> None:
    transport = FakeTransport(reply={"documents": [_doc(title="a")], "nextPageToken": "T"})
    client = Client(transport, ClientSettings(project_id="demo", page_size=25))

    result = client.list_documents(None, "books")
    assert transport.calls[0] == ("list", (ROOT, "books"), {"pageSize": 25})
    assert result == QueryResult(documents=[{"title": "a"}], page_token="T")

    client.list_documents(None, "books", pageSize=5, pageToken="T")
    assert transport.calls[1][2] == {"pageSize": 5, "pageToken": "T"}


def test_list_documents_without_default_page_size_sends_no_options(settings) -> None:
    transport = FakeTransport(reply={})
    Client(transport, settings).list_documents(None, "books")
    assert transport.calls[0][2] == {}


@pytest.mark.parametrize("build", [False, True])
def test_run_query_wraps_structured_query(settings, build: bool) -> None:
    transport = FakeTransport(
        reply=[{"readTime": "r"}, {"document": _doc(title="a"), "readTime": "r"}]
    )
    query = from_("books").where({"title": "a"}).limit(1)
    result = Client(transport, settings).run_query(None, query.build() if build else query)

    method, (parent, body), _ = transport.calls[0]
    assert (method, parent) == ("run_query", ROOT)
    assert body == {"structuredQuery": query.to_body()}
    assert result.documents == [{"title": "a"}]


def test_transport_errors_propagate_unchanged(settings) -> None:
    boom = RuntimeError("permission denied")
    client = Client(FakeTransport(error=boom), settings)
    with pytest.raises(RuntimeError) as excinfo:
        client.get_document(f"{ROOT}/books/b1")
    assert excinfo.value is boom


def test_missing_project_id_raises_config_error() -> None:
    client = Client(FakeTransport(reply={}), ClientSettings())
    with pytest.raises(ApiConfigError, match="project_id"):
        client.list_documents(None, "books")


def test_client_loads_settings_when_omitted(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BLAZE_PROJECT_ID", "from-env")
    monkeypatch.delenv("BLAZE_DATABASE", raising=False)
    monkeypatch.delenv("BLAZE_PAGE_SIZE", raising=False)
    client = Client(FakeTransport())
    assert client.settings.documents_path() == "projects/from-env/databases/(default)/documents"
