import json
import uuid

import pytest

from core.document import (
    get_json_value,
    parse_block_document,
    read_version,
    to_text,
)

DEF_ID = "3cffc1a4-1359-4f99-8a23-9b61b4f9e969"


def test_get_json_value_parses_object_text():
    assert get_json_value('{"version": 2}') == {"version": 2}


@pytest.mark.parametrize("raw", ["", "plain text", "[1, 2]", "{not json}", 42, None, ["a"]])
def test_get_json_value_returns_none_for_non_objects(raw):
    assert get_json_value(raw) is None


def test_get_json_value_accepts_bytes():
    assert get_json_value(b'{"version": 2}') == {"version": 2}


def test_get_json_value_copies_dict_input():
    original = {"version": 2, "header": {"content": [1]}}
    copied = get_json_value(original)
    copied["header"]["content"].append(2)
    assert original["header"]["content"] == [1]


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"version": 2}, 2),
        ({"version": "2"}, 2),
        ({"version": 2.0}, 2),
        ({"version": 2.5}, None),
        ({"version": "two"}, None),
        ({"version": True}, None),
        ({}, None),
    ],
)
def test_read_version(data, expected):
    assert read_version(data) == expected


def test_parse_block_document_only_accepts_version_2():
    assert parse_block_document('{"version": 1}') is None
    assert parse_block_document('{"version": 3, "header": {}}') is None
    assert parse_block_document('{"header": {}}') is None
    assert parse_block_document('{"version": 2}') is not None


def test_parse_block_document_exposes_header_and_blocks():
    value = {
        "version": 2,
        "header": {"definitionId": DEF_ID, "content": []},
        "blocks": [{"definitionId": "not-a-guid"}, "junk", {"content": [{"a": 1}]}],
    }
    doc = parse_block_document(value)

    assert doc.has_header and doc.has_blocks
    assert doc.header.definition_key == uuid.UUID(DEF_ID)
    assert doc.header.has_content
    assert doc.blocks[0].definition_key is None
    assert doc.blocks[1] is None
    assert doc.blocks[2].content == [{"a": 1}]


def test_block_content_null_counts_as_missing():
    doc = parse_block_document({"version": 2, "header": {"content": None}})
    assert not doc.header.has_content


def test_definition_key_accepts_braced_and_compact_guids():
    doc = parse_block_document({
        "version": 2,
        "blocks": [
            {"definitionId": "{" + DEF_ID + "}"},
            {"definitionId": uuid.UUID(DEF_ID).hex},
            {"definitionId": 12345},
        ],
    })
    assert doc.blocks[0].definition_key == uuid.UUID(DEF_ID)
    assert doc.blocks[1].definition_key == uuid.UUID(DEF_ID)
    assert doc.blocks[2].definition_key is None


def test_to_text():
    assert to_text(None) is None
    assert to_text("abc") == "abc"
    assert to_text(b"abc") == "abc"
    assert to_text(7) == "7"
    assert json.loads(to_text({"a": [1]})) == {"a": [1]}


def test_to_text_keeps_invalid_utf8_bytes_recoverable():
    """非法 UTF-8 不做替换，编码回去得到原始字节。"""
    raw = b"caf\xe9 \xff"
    text = to_text(raw)
    assert "\ufffd" not in text
    assert text.encode("utf-8", errors="surrogateescape") == raw
