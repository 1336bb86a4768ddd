# mapper/factory.py
# 按属性编辑器别名把值路由到对应的映射器；没有映射器的编辑器原样透传
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from core.document import to_text
from mapper.base import SyncValueMapperBase
from mapper.content_blocks import ContentBlocksMapper
from mapper.nested_content import NestedContentMapper
from mapper.schema import DataTypeService, DefinitionRepository, DependencyFlags, SyncDependency

logger = logging.getLogger(__name__)


class SyncValueMapperFactory:
    def __init__(self, mappers: Iterable[SyncValueMapperBase]):
        self.mappers: List[SyncValueMapperBase] = list(mappers)

    def get_mapper(self, editor_alias: str) -> Optional[SyncValueMapperBase]:
        for mapper in self.mappers:
            if mapper.is_mapper_for(editor_alias):
                return mapper
        return None

    def get_export_value(self, value: Any, editor_alias: str) -> Optional[str]:
        mapper = self.get_mapper(editor_alias)
        if mapper is None:
            logger.debug("no mapper for editor %r, exporting value as-is", editor_alias)
            return to_text(value)
        return mapper.get_export_value(value, editor_alias)

    def get_import_value(self, value: Any, editor_alias: str) -> Optional[str]:
        mapper = self.get_mapper(editor_alias)
        if mapper is None:
            return to_text(value)
        return mapper.get_import_value(value, editor_alias)

    def get_dependencies(
        self, value: Any, editor_alias: str, flags: DependencyFlags = DependencyFlags.NONE
    ) -> List[SyncDependency]:
        mapper = self.get_mapper(editor_alias)
        if mapper is None:
            return []
        return mapper.get_dependencies(value, editor_alias, flags)


def build_default_factory(
    definition_repository: DefinitionRepository,
    data_type_service: DataTypeService,
) -> SyncValueMapperFactory:
    """Nested Content 映射器显式注入 Content Blocks 映射器，两者都注册到工厂。"""
    nested = NestedContentMapper()
    blocks = ContentBlocksMapper(
        definition_repository=definition_repository,
        data_type_service=data_type_service,
        nested_mapper=nested,
    )
    return SyncValueMapperFactory([blocks, nested])
