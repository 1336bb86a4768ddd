# mapper/nested_content.py
# Nested Content 值映射器：Content Blocks 把每个 block 的 content 交给它处理
from __future__ import annotations

import datetime as _dt
import json
import re
from typing import Any, Iterator, List, Optional

from config import NESTED_CONTENT_EDITOR_ALIAS
from core.document import detect_is_json, dump_json
from mapper.base import SyncValueMapperBase
from mapper.schema import DependencyFlags, SyncDependency, Udi

# 条目自身的标识字段，导出时不做任何改写
RESERVED_ITEM_KEYS = {"key", "ncContentTypeAlias", "name"}

RE_DATETIME = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})[ T](\d{2}:\d{2})(:\d{2})?\s*$")
RE_UDI = re.compile(r"umb://[a-z][a-z\-]*/[0-9a-fA-F]{32}")

# entity_type -> 需要的标志位；不在表中的实体类型总是收集
ENTITY_FLAG_REQUIREMENTS = {
    "media": DependencyFlags.INCLUDE_MEDIA,
    "document": DependencyFlags.INCLUDE_LINKED,
}


def normalize_datetime(text: str) -> str:
    """'2020-01-02 03:04' / '2020-01-02 03:04:05' -> '2020-01-02T03:04:05'；其他文本原样返回。"""
    m = RE_DATETIME.match(text)
    if not m:
        return text
    date_part, hm, sec = m.group(1), m.group(2), m.group(3) or ":00"
    candidate = f"{date_part}T{hm}{sec}"
    try:
        _dt.datetime.strptime(candidate, "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return text
    return candidate


def _load_items(value: Any) -> Optional[list]:
    if isinstance(value, list):
        return value
    if isinstance(value, str) and detect_is_json(value):
        try:
            data = json.loads(value)
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, list) else None
    return None


def _iter_strings(value: Any) -> Iterator[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for v in value.values():
            yield from _iter_strings(v)
    elif isinstance(value, list):
        for v in value:
            yield from _iter_strings(v)


class NestedContentMapper(SyncValueMapperBase):
    name = "Nested Content Mapper"
    editors = [NESTED_CONTENT_EDITOR_ALIAS]

    def get_export_value(self, value: Any, editor_alias: str) -> Optional[str]:
        if value is None:
            return None
        items = _load_items(value)
        if items is None:
            # 不是条目列表：原样编码为 JSON，调用方解析回来仍是同一个值
            return dump_json(value)

        mapped = []
        for item in items:
            if not isinstance(item, dict):
                mapped.append(item)
                continue
            out = {}
            for k, v in item.items():
                if k not in RESERVED_ITEM_KEYS and isinstance(v, str):
                    v = normalize_datetime(v)
                out[k] = v
            mapped.append(out)
        return dump_json(mapped)

    def get_dependencies(
        self, value: Any, editor_alias: str, flags: DependencyFlags
    ) -> List[SyncDependency]:
        items = _load_items(value)
        if not items:
            return []

        dependencies: List[SyncDependency] = []
        seen = set()
        for text in _iter_strings(items):
            for match in RE_UDI.findall(text):
                udi = Udi.parse(match)
                if udi is None or str(udi) in seen:
                    continue
                required = ENTITY_FLAG_REQUIREMENTS.get(udi.entity_type)
                if required is not None and not (flags & required):
                    continue
                seen.add(str(udi))
                dependencies.append(self.create_dependency(udi, flags))
        return dependencies
