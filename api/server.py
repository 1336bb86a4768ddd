from __future__ import annotations

import logging
import secrets
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

from config import CONTENT_BLOCKS_EDITOR_ALIAS, REQUIRE_AUTH, SERVER_API_KEY
from mapper.base import SyncMapperError
from mapper.factory import SyncValueMapperFactory
from service.sync_service import build_factory, collect_dependencies, export_value

logger = logging.getLogger(__name__)

if REQUIRE_AUTH and not SERVER_API_KEY:
    raise RuntimeError("REQUIRE_AUTH=true but SERVER_API_KEY is not set")

app = FastAPI(
    title="Content Blocks Sync Mapper API",
    version="0.1.0",
    description="Content Blocks 属性值的导出映射与依赖提取。",
)


def _verify_api_key(x_api_key: str = Header(default="")) -> None:
    """若 SERVER_API_KEY 已配置，则验证请求头中的 X-API-Key。"""
    if SERVER_API_KEY and not secrets.compare_digest(x_api_key, SERVER_API_KEY):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


@lru_cache(maxsize=1)
def get_factory() -> SyncValueMapperFactory:
    return build_factory()


class ExportRequest(BaseModel):
    value: Any = None
    editor_alias: str = CONTENT_BLOCKS_EDITOR_ALIAS


class DependenciesRequest(BaseModel):
    value: Any = None
    editor_alias: str = CONTENT_BLOCKS_EDITOR_ALIAS
    flags: int = Field(default=0, ge=0)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/v1/mapper/export", dependencies=[Depends(_verify_api_key)])
def export_endpoint(req: ExportRequest, factory: SyncValueMapperFactory = Depends(get_factory)):
    try:
        value = export_value(req.value, req.editor_alias, factory=factory)
    except SyncMapperError as e:
        logger.error("export failed for editor %r: %s", req.editor_alias, e, exc_info=True)
        raise HTTPException(status_code=502, detail=f"Mapper error ({e.error_type})") from e

    return {"status": "ok", "editor_alias": req.editor_alias, "value": value}


@app.post("/v1/mapper/dependencies", dependencies=[Depends(_verify_api_key)])
def dependencies_endpoint(req: DependenciesRequest, factory: SyncValueMapperFactory = Depends(get_factory)):
    try:
        report = collect_dependencies(req.value, req.editor_alias, req.flags, factory=factory)
    except SyncMapperError as e:
        logger.error("dependency check failed for editor %r: %s", req.editor_alias, e, exc_info=True)
        raise HTTPException(status_code=502, detail=f"Mapper error ({e.error_type})") from e

    return {"status": "ok", **report.to_dict()}
