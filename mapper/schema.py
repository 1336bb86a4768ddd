# mapper/schema.py
# 使用 pydantic 定义依赖、UDI、block 定义与数据类型等结构，以及外部协作者的接口约定
from __future__ import annotations

import enum
import re
import uuid
from typing import Any, List, Optional, Protocol

from pydantic import BaseModel

_UDI_PATTERN = re.compile(r"^umb://([a-z][a-z\-]*)/([0-9a-fA-F]{32})$")


class DependencyFlags(enum.IntFlag):
    """依赖收集标志位，由调用方传入并原样传给每条依赖（本映射器不解释）"""

    NONE = 0
    INCLUDE_CHILDREN = 2
    INCLUDE_ANCESTORS = 4
    INCLUDE_DEPENDENCIES = 8
    INCLUDE_VIEWS = 16
    INCLUDE_MEDIA = 32
    INCLUDE_LINKED = 64
    INCLUDE_MEDIA_FILES = 128
    INCLUDE_CONFIG = 256


class Udi(BaseModel):
    """实体的稳定外部引用：umb://<entity_type>/<32 位十六进制 key>"""

    entity_type: str
    key: uuid.UUID

    def __str__(self) -> str:
        return f"umb://{self.entity_type}/{self.key.hex}"

    @classmethod
    def parse(cls, text: Any) -> Optional["Udi"]:
        """解析 UDI 字符串；格式不合法时返回 None。"""
        if not isinstance(text, str):
            return None
        m = _UDI_PATTERN.match(text.strip())
        if not m:
            return None
        return cls(entity_type=m.group(1), key=uuid.UUID(hex=m.group(2)))


class SyncDependency(BaseModel):
    """单条依赖引用"""

    # 显示名（默认为 UDI 字符串）
    name: str
    udi: Udi
    flags: DependencyFlags = DependencyFlags.NONE


class BlockDefinition(BaseModel):
    """block 类型定义，可关联一个数据类型"""

    id: uuid.UUID
    name: str = ""
    # 关联的数据类型 key（可选）
    data_type_key: Optional[uuid.UUID] = None


class DataType(BaseModel):
    key: uuid.UUID
    name: str = ""
    editor_alias: str = ""

    @property
    def udi(self) -> Udi:
        return Udi(entity_type="data-type", key=self.key)


# ---------------------------------------------------------------------------
# 外部协作者接口（由宿主提供，映射器只做只读查询）
# ---------------------------------------------------------------------------

class DefinitionRepository(Protocol):
    def get_by_id(self, id: uuid.UUID) -> Optional[BlockDefinition]:
        ...


class DataTypeService(Protocol):
    def get_data_type(self, key: uuid.UUID) -> Optional[DataType]:
        ...


class NestedValueMapper(Protocol):
    """嵌套内容映射器：block 的 content 整体交给它处理"""

    def get_export_value(self, value: Any, editor_alias: str) -> Optional[str]:
        ...

    def get_dependencies(
        self, value: Any, editor_alias: str, flags: DependencyFlags
    ) -> List[SyncDependency]:
        ...
