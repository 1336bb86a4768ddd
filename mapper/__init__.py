# mapper/__init__.py
# 公开 mapper 包的核心类与异常，方便外部直接 from mapper import ...
from mapper.base import SyncMapperError, SyncValueMapperBase
from mapper.content_blocks import ContentBlocksMapper
from mapper.factory import SyncValueMapperFactory, build_default_factory
from mapper.nested_content import NestedContentMapper
from mapper.schema import DependencyFlags, SyncDependency, Udi

__all__ = [
    "SyncMapperError",
    "SyncValueMapperBase",
    "ContentBlocksMapper",
    "NestedContentMapper",
    "SyncValueMapperFactory",
    "build_default_factory",
    "DependencyFlags",
    "SyncDependency",
    "Udi",
]
