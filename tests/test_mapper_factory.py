import json
import uuid

import pytest

from mapper.content_blocks import ContentBlocksMapper
from mapper.factory import SyncValueMapperFactory, build_default_factory
from mapper.nested_content import NestedContentMapper
from mapper.schema import BlockDefinition, DataType, DependencyFlags
from service.registry import InMemoryDataTypeService, InMemoryDefinitionRepository

DEF_ID = uuid.UUID("3cffc1a4-1359-4f99-8a23-9b61b4f9e969")
DT_KEY = uuid.UUID("0b2d1a5e-6f0c-4b53-9a49-2f0c5e0e9a11")
MEDIA = "umb://media/662af6ca411a4c93a6c722c4845698e7"

SAMPLE_VALUE = {
    "version": 2,
    "header": {
        "id": "207257ac-808b-4d11-a061-47efccce178b",
        "definitionId": str(DEF_ID),
        "layoutId": "de6adecf-2950-4fe6-b817-c3fd619f2fff",
        "content": [
            {
                "key": "57356efa-7fd1-4064-ba51-66080cab99de",
                "ncContentTypeAlias": "nestedContent",
                "title": "Title",
                "publishDate": "2021-06-30 12:00",
                "image": MEDIA,
            }
        ],
    },
    "blocks": [],
}


def _factory():
    return build_default_factory(
        InMemoryDefinitionRepository([BlockDefinition(id=DEF_ID, data_type_key=DT_KEY)]),
        InMemoryDataTypeService([DataType(key=DT_KEY, name="Text")]),
    )


def test_default_factory_routes_by_editor_alias():
    factory = _factory()
    assert isinstance(factory.get_mapper("Perplex.ContentBlocks"), ContentBlocksMapper)
    assert isinstance(factory.get_mapper("Umbraco.NestedContent"), NestedContentMapper)
    assert factory.get_mapper("Umbraco.TextBox") is None


def test_content_blocks_mapper_uses_injected_nested_mapper():
    factory = _factory()
    blocks = factory.get_mapper("Perplex.ContentBlocks")
    assert blocks.nested_mapper is factory.get_mapper("Umbraco.NestedContent")


def test_unknown_editor_passes_through():
    factory = _factory()
    assert factory.get_export_value("hello", "Umbraco.TextBox") == "hello"
    assert factory.get_import_value("hello", "Umbraco.TextBox") == "hello"
    assert factory.get_dependencies(json.dumps(SAMPLE_VALUE), "Umbraco.TextBox") == []


def test_end_to_end_export_maps_nested_dates():
    factory = _factory()
    out = json.loads(factory.get_export_value(json.dumps(SAMPLE_VALUE), "Perplex.ContentBlocks"))
    item = out["header"]["content"][0]
    assert item["publishDate"] == "2021-06-30T12:00:00"
    assert item["image"] == MEDIA
    assert out["header"]["layoutId"] == SAMPLE_VALUE["header"]["layoutId"]


@pytest.mark.parametrize("content", ["plain", {"a": 1}, 5, "", '{"not": "a list"}'])
def test_export_keeps_non_list_content_unchanged(content):
    factory = _factory()
    value = {"version": 2, "header": {"content": content}, "blocks": [{"id": "b", "content": content}]}

    out = json.loads(factory.get_export_value(value, "Perplex.ContentBlocks"))

    assert out == value


def test_export_keeps_json_string_content_as_string():
    factory = _factory()
    content = json.dumps([{"key": "k", "publishDate": "2021-06-30 12:00"}])
    value = {"version": 2, "header": {"content": content}}

    out = json.loads(factory.get_export_value(value, "Perplex.ContentBlocks"))

    assert isinstance(out["header"]["content"], str)
    assert json.loads(out["header"]["content"]) == [{"key": "k", "publishDate": "2021-06-30T12:00:00"}]


def test_end_to_end_dependencies():
    factory = _factory()
    deps = factory.get_dependencies(
        json.dumps(SAMPLE_VALUE), "Perplex.ContentBlocks", DependencyFlags.INCLUDE_MEDIA
    )
    assert [str(d.udi) for d in deps] == [f"umb://data-type/{DT_KEY.hex}", MEDIA]


def test_custom_mapper_list():
    nested = NestedContentMapper()
    factory = SyncValueMapperFactory([nested])
    assert factory.get_mapper("Perplex.ContentBlocks") is None
    assert factory.get_dependencies("{}", "Perplex.ContentBlocks", DependencyFlags.NONE) == []
