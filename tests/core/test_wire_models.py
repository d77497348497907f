import pytest
from pydantic import ValidationError

from blaze.core.codec import encode
from blaze.core.native import bytes_value
from blaze.core.serde import json_dumps_canonical, json_loads, to_body
from blaze.core.wire import (
    Document,
    ListDocumentsResponse,
    RunQueryResponse,
    WireValue,
)


def test_wire_value_requires_a_populated_variant() -> None:
    with pytest.raises(ValidationError, match="exactly one populated variant"):
        WireValue()


def test_wire_value_rejects_two_populated_variants() -> None:
    with pytest.raises(ValidationError, match="exactly one populated variant"):
        WireValue(string_value="a", integer_value=1)


def test_wire_value_accepts_camel_case_input() -> None:
    wv = WireValue.model_validate({"stringValue": "x"})
    assert wv.string_value == "x"
    assert wv.variant == "string_value"


def test_to_body_uses_camel_case_and_drops_absent_variants() -> None:
    body = to_body(encode({"a": None, "b": [1], "c": {"d": "e"}}))
    assert body == {
        "fields": {
            "a": {"nullValue": "NULL_VALUE"},
            "b": {"arrayValue": {"values": [{"integerValue": 1}]}},
            "c": {"mapValue": {"fields": {"d": {"stringValue": "e"}}}},
        }
    }


def test_to_body_serializes_bytes_as_base64() -> None:
    body = to_body(encode({"blob": bytes_value(b"hi")}))
    assert body == {"fields": {"blob": {"bytesValue": "aGk="}}}


def test_envelopes_ignore_unknown_server_keys() -> None:
    resp = RunQueryResponse.model_validate(
        {
            "readTime": "2024-01-01T00:00:00Z",
            "document": {"name": "n", "fields": {"x": {"booleanValue": True}}},
            "explainMetrics": {},
        }
    )
    assert resp.read_time == "2024-01-01T00:00:00Z"
    assert resp.document.fields["x"].boolean_value is True


def test_list_response_carries_page_token() -> None:
    page = ListDocumentsResponse.model_validate(
        {"documents": [{"name": "a"}, {"name": "b"}], "nextPageToken": "T"}
    )
    assert [d.name for d in page.documents] == ["a", "b"]
    assert page.next_page_token == "T"


def test_document_keeps_server_timestamps() -> None:
    doc = Document.model_validate({"name": "n", "createTime": "c", "updateTime": "u"})
    assert (doc.create_time, doc.update_time, doc.fields) == ("c", "u", None)


def test_canonical_json_is_key_order_insensitive() -> None:
    a = json_dumps_canonical({"b": 1, "a": {"y": 2, "x": 1}})
    b = json_dumps_canonical({"a": {"x": 1, "y": 2}, "b": 1})
    assert a == b
    assert json_loads(a) == {"a": {"x": 1, "y": 2}, "b": 1}
