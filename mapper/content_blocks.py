# mapper/content_blocks.py
"""
Content Blocks 值映射器

Content Blocks 的值里嵌套了 Nested Content 条目，导出映射和依赖检查都要进入
block 内部才能覆盖这些条目：

- 导出：大多数字段都是 GUID 不需要改写，但 content 要交给 Nested Content 映射器，
  以保证其中的日期等格式一致
- 依赖：block 定义关联的数据类型，以及 content 里引用的媒体/文档等

值格式（只支持 version 2）::

    {
      "version": 2,
      "header": {
        "id": "207257ac-808b-4d11-a061-47efccce178b",
        "definitionId": "3cffc1a4-1359-4f99-8a23-9b61b4f9e969",
        "layoutId": "de6adecf-2950-4fe6-b817-c3fd619f2fff",
        "content": [
          {
            "key": "57356efa-7fd1-4064-ba51-66080cab99de",
            "ncContentTypeAlias": "nestedContent",
            "title": "Title",
            "image": "umb://media/662af6ca411a4c93a6c722c4845698e7"
          }
        ]
      },
      "blocks": [ ...与 header 结构相同... ]
    }
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from config import CONTENT_BLOCKS_EDITOR_ALIAS, NESTED_CONTENT_EDITOR_ALIAS
from core.document import Block, dump_json, parse_block_document, to_text
from mapper.base import SyncMapperError, SyncValueMapperBase
from mapper.schema import (
    DataTypeService,
    DefinitionRepository,
    DependencyFlags,
    NestedValueMapper,
    SyncDependency,
)

logger = logging.getLogger(__name__)


class ContentBlocksMapper(SyncValueMapperBase):
    """Content Blocks 值/依赖映射器，协作者在构造时注入。"""

    name = "Content Blocks Mapper"
    editors = [CONTENT_BLOCKS_EDITOR_ALIAS]

    def __init__(
        self,
        definition_repository: DefinitionRepository,
        data_type_service: DataTypeService,
        nested_mapper: NestedValueMapper,
        nested_editor_alias: str = NESTED_CONTENT_EDITOR_ALIAS,
    ):
        self.definition_repository = definition_repository
        self.data_type_service = data_type_service
        self.nested_mapper = nested_mapper
        self.nested_editor_alias = nested_editor_alias

    # ------------------------------------------------------------------
    # 导出
    # ------------------------------------------------------------------

    def get_export_value(self, value: Any, editor_alias: str) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, (str, bytes)) and not value:
            return to_text(value)

        doc = parse_block_document(value)
        if doc is None:
            logger.debug("content blocks value is opaque (not json or version != 2), passing through")
            return to_text(value)

        if doc.header is not None:
            self._export_block(doc.header)

        for block in doc.blocks:
            if block is not None:
                self._export_block(block)

        return dump_json(doc.raw)

    def _export_block(self, block: Block) -> None:
        """把 content 交给嵌套内容映射器，再把返回的文本解析回 JSON 替换 content。"""
        if not block.has_content:
            return

        mapped = self.nested_mapper.get_export_value(block.content, self.nested_editor_alias)
        if mapped is None:
            raise SyncMapperError(
                f"{self.nested_editor_alias} 映射器对 content 返回了空值",
                error_type="delegate_format",
            )
        try:
            parsed = json.loads(mapped)
        except (TypeError, json.JSONDecodeError) as e:
            raise SyncMapperError(
                f"{self.nested_editor_alias} 映射器返回的 content 不是合法 JSON: {e}",
                error_type="delegate_format",
            ) from e

        # content 原本是 JSON 字符串时，映射结果也编码回字符串，保持字段类型不变
        if isinstance(block.content, str) and not isinstance(parsed, str):
            parsed = json.dumps(parsed, ensure_ascii=False)
        block.raw["content"] = parsed

    # ------------------------------------------------------------------
    # 依赖
    # ------------------------------------------------------------------

    def get_dependencies(
        self, value: Any, editor_alias: str, flags: DependencyFlags
    ) -> List[SyncDependency]:
        if value is None:
            return []

        doc = parse_block_document(value)
        if doc is None:
            return []

        dependencies: List[SyncDependency] = []

        # header 总是排在 blocks 之前（header 通常也是 blocks 之一，不去重）
        if doc.header is not None:
            dependencies.extend(self._block_dependencies(doc.header, flags))

        for block in doc.blocks:
            if block is not None:
                dependencies.extend(self._block_dependencies(block, flags))

        return dependencies

    def _block_dependencies(self, block: Block, flags: DependencyFlags) -> List[SyncDependency]:
        dependencies: List[SyncDependency] = []

        dependency = self._definition_dependency(block, flags)
        if dependency is not None:
            dependencies.append(dependency)

        if block.has_content:
            dependencies.extend(
                self.nested_mapper.get_dependencies(block.content, self.nested_editor_alias, flags)
            )

        return dependencies

    def _definition_dependency(self, block: Block, flags: DependencyFlags) -> Optional[SyncDependency]:
        """definitionId -> 定义 -> 数据类型；任何一步查不到都静默返回 None。"""
        key = block.definition_key
        if key is None:
            if block.definition_id is not None:
                logger.debug("definitionId %r is not a guid, skipped", block.definition_id)
            return None

        definition = self.definition_repository.get_by_id(key)
        if definition is None or definition.data_type_key is None:
            logger.debug("no data type for block definition %s", key)
            return None

        data_type = self.data_type_service.get_data_type(definition.data_type_key)
        if data_type is None:
            logger.debug("data type %s not found (definition %s)", definition.data_type_key, key)
            return None

        return self.create_dependency(data_type.udi, flags)
