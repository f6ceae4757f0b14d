from __future__ import annotations
from dotenv import load_dotenv

load_dotenv()

import logging
from functools import lru_cache
from typing import Any, Dict, Tuple

import jsonschema
from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .auth import get_settings, require_roles_access
from .config import Settings, load_settings
from .exceptions import NonUniqueResultError
from .executor import QueryExecutor
from .filters import QueryModel, parse_query_model_json
from .query import build_count_statement, build_list_statement, build_page_statement
from .registry import Registry, RegistryEntry
from .validation import (
    _assert_field_allowed,
    _assert_filters_allowed,
    _assert_sorts_allowed,
    _cap_page_size,
)

log = logging.getLogger("api")

_settings = load_settings()

app = FastAPI(title="docquery", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_settings.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

REG = Registry(_settings.entities_path, _settings.global_max_page_size)


@app.on_event("startup")
def _startup():
    REG.load_entities()


def get_registry() -> Registry:
    return REG


@lru_cache(maxsize=1)
def _executor() -> QueryExecutor:
    return QueryExecutor(load_settings())


def get_executor() -> QueryExecutor:
    return _executor()


def _prepare(payload: Dict[str, Any], registry: Registry) -> Tuple[QueryModel, RegistryEntry]:
    qm = parse_query_model_json(payload, validate=True)
    entry = registry.ensure_entity(qm.entity_name)
    _assert_filters_allowed(qm.entity_name, qm.filters)
    _assert_sorts_allowed(qm.entity_name, qm.sort)
    qm.page_size = _cap_page_size(qm.entity_name, qm.page_size, entry)
    return qm, entry


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, KeyError):
        return HTTPException(status_code=404, detail=str(e.args[0]) if e.args else str(e))
    if isinstance(e, NonUniqueResultError):
        return HTTPException(
            status_code=409,
            detail={"message": "Query returned more than one result", "filters": e.filters},
        )
    if isinstance(e, jsonschema.ValidationError):
        return HTTPException(status_code=400, detail=e.message)
    return HTTPException(status_code=400, detail=str(e))


_CLIENT_ERRORS = (KeyError, ValueError, jsonschema.ValidationError, NonUniqueResultError)


@app.get("/healthz")
def health(registry: Registry = Depends(get_registry), settings: Settings = Depends(get_settings)):
    return {
        "ok": True,
        "bucket": settings.bucket,
        "entities": list(registry.entities_cfg.keys()),
    }


@app.get("/entities", dependencies=[Depends(require_roles_access(["read:data"]))])
def list_entities(registry: Registry = Depends(get_registry)):
    out = []
    for name, meta in registry.entities_cfg.items():
        out.append(
            {
                "entity": name,
                "model": meta.get("model"),
                "maxPageSize": int(meta.get("maxPageSize", registry.max_page_size)),
            }
        )
    return {"entities": out}


@app.post("/find", dependencies=[Depends(require_roles_access(["read:data"]))])
def find(
    payload: dict = Body(..., description="Filter map query JSON"),
    registry: Registry = Depends(get_registry),
    executor: QueryExecutor = Depends(get_executor),
):
    try:
        qm, entry = _prepare(payload, registry)
        items = executor.find(qm.filters, entry["model"])
        return {"entity": qm.entity_name, "items": items, "count": len(items)}
    except _CLIENT_ERRORS as e:
        raise _http_error(e)


@app.post("/find-one", dependencies=[Depends(require_roles_access(["read:data"]))])
def find_one(
    payload: dict = Body(..., description="Filter map query JSON"),
    registry: Registry = Depends(get_registry),
    executor: QueryExecutor = Depends(get_executor),
):
    try:
        qm, entry = _prepare(payload, registry)
        item = executor.find_one(qm.filters, entry["model"])
        return {"entity": qm.entity_name, "item": item}
    except _CLIENT_ERRORS as e:
        raise _http_error(e)


@app.post("/page", dependencies=[Depends(require_roles_access(["read:data"]))])
def page(
    payload: dict = Body(..., description="Filter map query JSON"),
    registry: Registry = Depends(get_registry),
    executor: QueryExecutor = Depends(get_executor),
):
    try:
        qm, entry = _prepare(payload, registry)
        result = executor.find_page(qm.filters, qm.page_request(), entry["model"])
        return {"entity": qm.entity_name, **result.to_dict()}
    except _CLIENT_ERRORS as e:
        raise _http_error(e)


@app.post("/count", dependencies=[Depends(require_roles_access(["read:data"]))])
def count(
    payload: dict = Body(..., description="Filter map query JSON"),
    registry: Registry = Depends(get_registry),
    executor: QueryExecutor = Depends(get_executor),
):
    try:
        qm, _ = _prepare(payload, registry)
        return {"entity": qm.entity_name, "count": executor.count(qm.filters)}
    except _CLIENT_ERRORS as e:
        raise _http_error(e)


@app.post("/sum", dependencies=[Depends(require_roles_access(["read:data"]))])
def sum_field(
    payload: dict = Body(..., description="Filter map query JSON"),
    registry: Registry = Depends(get_registry),
    executor: QueryExecutor = Depends(get_executor),
):
    try:
        qm, _ = _prepare(payload, registry)
        _assert_field_allowed(qm.entity_name, qm.field)
        return {
            "entity": qm.entity_name,
            "field": qm.field,
            "sum": executor.sum(qm.filters, qm.field),
        }
    except _CLIENT_ERRORS as e:
        raise _http_error(e)


@app.post("/n1ql", dependencies=[Depends(require_roles_access(["read:data"]))])
def build_query(
    payload: dict = Body(..., description="Filter map query JSON"),
    registry: Registry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
):
    """
    Build the list, page and count statements for a request without running them.
    """
    try:
        qm, entry = _prepare(payload, registry)
        list_stmt = build_list_statement(settings.bucket, qm.filters)
        page_stmt = build_page_statement(settings.bucket, qm.filters, qm.page_request())
        count_stmt = build_count_statement(settings.bucket, qm.filters)
        return {
            "sql": list_stmt.sql,
            "pageSql": page_stmt.sql,
            "countSql": count_stmt.sql,
            "params": dict(list_stmt.params),
            "pageSizeApplied": qm.page_size,
            "maxPageSize": entry["maxPageSize"],
        }
    except _CLIENT_ERRORS as e:
        raise _http_error(e)


@app.post("/reload", dependencies=[Depends(require_roles_access(["admin"]))])
def reload_registry(registry: Registry = Depends(get_registry)):
    try:
        return {"reloaded": registry.refresh_all()}
    except Exception as e:
        log.exception("Entity reload failed")
        raise HTTPException(status_code=500, detail=str(e))
