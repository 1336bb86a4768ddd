# mapper/base.py
# 值映射器基类：默认原样导出/导入、无依赖；子类按编辑器别名覆盖
from __future__ import annotations

from typing import Any, List, Optional

from core.document import to_text
from mapper.schema import DependencyFlags, SyncDependency, Udi


class SyncMapperError(Exception):
    """映射失败时抛出的自定义异常（只用于协作者违约，数据形状问题不抛）"""
    def __init__(self, message: str, error_type: str = "unknown"):
        super().__init__(message)
        self.error_type = error_type  # "delegate_format" | "unknown"


class SyncValueMapperBase:
    """
    属性值映射器基类。

    name / editors 由子类声明；editors 为该映射器负责的属性编辑器别名列表。
    """

    name: str = "Value Mapper"
    editors: List[str] = []

    def is_mapper_for(self, editor_alias: str) -> bool:
        return editor_alias in self.editors

    def get_export_value(self, value: Any, editor_alias: str) -> Optional[str]:
        return to_text(value)

    def get_import_value(self, value: Any, editor_alias: str) -> Optional[str]:
        return to_text(value)

    def get_dependencies(
        self, value: Any, editor_alias: str, flags: DependencyFlags
    ) -> List[SyncDependency]:
        return []

    def create_dependency(self, udi: Udi, flags: DependencyFlags) -> SyncDependency:
        return SyncDependency(name=str(udi), udi=udi, flags=flags)
