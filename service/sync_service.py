# service/sync_service.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

from config import REGISTRY_PATH
from mapper.factory import SyncValueMapperFactory, build_default_factory
from mapper.schema import DependencyFlags, SyncDependency
from service.registry import InMemoryDataTypeService, InMemoryDefinitionRepository, load_registry


@dataclass
class DependencyReport:
    editor_alias: str
    flags: int
    dependencies: List[SyncDependency] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.dependencies)

    def to_dict(self) -> dict:
        return {
            "editor_alias": self.editor_alias,
            "flags": self.flags,
            "count": self.count,
            "dependencies": [
                {"name": d.name, "udi": str(d.udi), "flags": int(d.flags)}
                for d in self.dependencies
            ],
        }


def build_factory(registry_path: Optional[str] = None) -> SyncValueMapperFactory:
    """
    从登记文件构造映射器工厂。

    - registry_path: None 时使用 config.REGISTRY_PATH；默认路径不存在时使用空登记表，
      显式传入的路径不存在则抛出 FileNotFoundError
    """
    if registry_path is None:
        if os.path.exists(REGISTRY_PATH):
            definitions, data_types = load_registry(REGISTRY_PATH)
        else:
            definitions, data_types = InMemoryDefinitionRepository(), InMemoryDataTypeService()
    else:
        definitions, data_types = load_registry(registry_path)
    return build_default_factory(definitions, data_types)


def export_value(
    value: Any,
    editor_alias: str,
    factory: Optional[SyncValueMapperFactory] = None,
) -> Optional[str]:
    factory = factory or build_factory()
    return factory.get_export_value(value, editor_alias)


def collect_dependencies(
    value: Any,
    editor_alias: str,
    flags: int = 0,
    factory: Optional[SyncValueMapperFactory] = None,
) -> DependencyReport:
    factory = factory or build_factory()
    dep_flags = DependencyFlags(flags)
    dependencies = factory.get_dependencies(value, editor_alias, dep_flags)
    return DependencyReport(editor_alias=editor_alias, flags=int(dep_flags), dependencies=dependencies)
