# service/registry.py
# block 定义与数据类型的只读登记表（内存实现 + YAML 加载）
import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pydantic
import yaml

from mapper.schema import BlockDefinition, DataType


class InMemoryDefinitionRepository:
    def __init__(self, definitions: Iterable[BlockDefinition] = ()):
        self._by_id: Dict[uuid.UUID, BlockDefinition] = {d.id: d for d in definitions}

    def get_by_id(self, id: uuid.UUID) -> Optional[BlockDefinition]:
        return self._by_id.get(id)

    def __len__(self) -> int:
        return len(self._by_id)


class InMemoryDataTypeService:
    def __init__(self, data_types: Iterable[DataType] = ()):
        self._by_key: Dict[uuid.UUID, DataType] = {d.key: d for d in data_types}

    def get_data_type(self, key: uuid.UUID) -> Optional[DataType]:
        return self._by_key.get(key)

    def __len__(self) -> int:
        return len(self._by_key)


def _ensure_list(value: Any, key: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"registry.{key} must be a list")
    return value


def _parse_entries(items: List[Any], key: str, model):
    out = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"registry.{key}[{i}] must be a mapping")
        try:
            out.append(model(**item))
        except pydantic.ValidationError as e:
            raise ValueError(f"registry.{key}[{i}] is invalid: {e}") from e
    return out


def parse_registry(data: Dict[str, Any]) -> Tuple[InMemoryDefinitionRepository, InMemoryDataTypeService]:
    data_types = _parse_entries(_ensure_list(data.get("data_types"), "data_types"), "data_types", DataType)
    definitions = _parse_entries(_ensure_list(data.get("definitions"), "definitions"), "definitions", BlockDefinition)
    return InMemoryDefinitionRepository(definitions), InMemoryDataTypeService(data_types)


def load_registry(path: str) -> Tuple[InMemoryDefinitionRepository, InMemoryDataTypeService]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Registry file not found: {path!r}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("registry file must be a YAML mapping at top-level")

    return parse_registry(data)
