# core/document.py
# Content Blocks 值的解析与版本校验：只认识 version / header / blocks 以及 block 的 definitionId / content
import copy
import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config import EXPORT_INDENT

# 目前只支持 v2（严格相等，不做向前兼容）
SUPPORTED_VERSION = 2


@dataclass
class Block:
    """header 或 blocks 中的单个 block，raw 为原始 JSON 对象（就地修改）"""

    raw: Dict[str, Any]

    @property
    def definition_id(self) -> Any:
        return self.raw.get("definitionId")

    @property
    def definition_key(self) -> Optional[uuid.UUID]:
        """definitionId 解析为 UUID；缺失或格式不合法时返回 None。"""
        value = self.definition_id
        if not isinstance(value, str):
            return None
        try:
            return uuid.UUID(value.strip())
        except ValueError:
            return None

    @property
    def has_content(self) -> bool:
        # content: null 视为没有 content
        return self.raw.get("content") is not None

    @property
    def content(self) -> Any:
        return self.raw.get("content")


@dataclass
class BlockDocument:
    version: int
    raw: Dict[str, Any]
    header: Optional[Block] = None
    blocks: List[Optional[Block]] = field(default_factory=list)

    @property
    def has_header(self) -> bool:
        return "header" in self.raw

    @property
    def has_blocks(self) -> bool:
        return isinstance(self.raw.get("blocks"), list)


def _as_block(value: Any) -> Optional[Block]:
    return Block(raw=value) if isinstance(value, dict) else None


def detect_is_json(text: str) -> bool:
    t = text.strip()
    return (t.startswith("{") and t.endswith("}")) or (t.startswith("[") and t.endswith("]"))


def get_json_value(value: Any) -> Optional[Dict[str, Any]]:
    """
    把输入值转成 JSON 对象（dict）。

    - str / bytes：看起来像 JSON 时才解析，解析失败或顶层不是对象返回 None
    - dict：深拷贝，调用方的值不会被修改
    - 其他类型：None（按不透明值处理）
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(value, str):
        if not detect_is_json(value):
            return None
        try:
            data = json.loads(value)
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None

    if isinstance(value, dict):
        return copy.deepcopy(value)

    return None


def read_version(data: Dict[str, Any]) -> Optional[int]:
    """读取 version 字段；缺失、bool、非整数的数值或非数字文本都返回 None。"""
    raw = data.get("version")
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def parse_block_document(value: Any) -> Optional[BlockDocument]:
    """解析为 BlockDocument；不是 JSON 对象或版本不是 v2 时返回 None（不透明值）。"""
    data = get_json_value(value)
    if data is None:
        return None

    version = read_version(data)
    if version != SUPPORTED_VERSION:
        return None

    doc = BlockDocument(version=version, raw=data)
    if doc.has_header:
        doc.header = _as_block(data["header"])
    if doc.has_blocks:
        doc.blocks = [_as_block(b) for b in data["blocks"]]
    return doc


def dump_json(data: Any) -> str:
    """稳定的多行缩进序列化（保留键顺序）。"""
    return json.dumps(data, ensure_ascii=False, indent=EXPORT_INDENT)


def to_text(value: Any) -> Optional[str]:
    """输入值的文本形式，用于不透明值的原样返回。"""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        # 非法 UTF-8 字节用 surrogateescape 保留，encode(..., "surrogateescape") 可还原原始字节
        return value.decode("utf-8", errors="surrogateescape")
    if isinstance(value, (dict, list)):
        return dump_json(value)
    return str(value)
