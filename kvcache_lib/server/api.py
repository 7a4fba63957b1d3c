from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, field_validator
import logging

from kvcache_lib.locking import GuardedCache
from kvcache_lib.services.resolver import resolve_service
from .health import get_health

logger = logging.getLogger(__name__)
router = APIRouter()


def _require_utf8(text: str) -> str:
    # JSON escapes can smuggle in lone surrogates that no backend can store
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError("must be valid UTF-8 text") from None
    return text


class KeyPayload(BaseModel):
    key: str

    @field_validator("key")
    @classmethod
    def key_is_utf8(cls, v: str) -> str:
        return _require_utf8(v)


class EntryPayload(KeyPayload):
    value: str

    @field_validator("value")
    @classmethod
    def value_is_utf8(cls, v: str) -> str:
        return _require_utf8(v)


class AddPayload(EntryPayload):
    pass


class DeletePayload(KeyPayload):
    pass


class ModifyPayload(EntryPayload):
    pass


class GetPayload(KeyPayload):
    pass


def _cache(request: Request) -> GuardedCache:
    return resolve_service(request, 'cache')


def _storage_failure(op: str, exc: Exception) -> HTTPException:
    logger.exception("Cache %s failed: %s", op, exc)
    return HTTPException(status_code=500, detail=str(exc))


@router.get('/list')
def api_list(request: Request):
    cache = _cache(request)
    try:
        return cache.list()
    except Exception as e:
        raise _storage_failure('list', e)


@router.put('/add', status_code=201)
def api_add(request: Request, payload: AddPayload):
    cache = _cache(request)
    logger.debug("Adding key %r", payload.key)
    try:
        cache.add(payload.key, payload.value)
    except Exception as e:
        raise _storage_failure('add', e)
    return Response(status_code=201)


@router.delete('/delete')
def api_delete(request: Request, payload: DeletePayload):
    cache = _cache(request)
    logger.debug("Deleting key %r", payload.key)
    try:
        deleted = cache.delete(payload.key)
    except Exception as e:
        raise _storage_failure('delete', e)
    return Response(status_code=204 if deleted else 404)


@router.patch('/modify')
def api_modify(request: Request, payload: ModifyPayload):
    cache = _cache(request)
    logger.debug("Modifying key %r", payload.key)
    try:
        modified = cache.modify(payload.key, payload.value)
    except Exception as e:
        raise _storage_failure('modify', e)
    return Response(status_code=204 if modified else 404)


@router.get('/get')
def api_get(request: Request, payload: GetPayload):
    cache = _cache(request)
    try:
        value = cache.get(payload.key)
    except Exception as e:
        raise _storage_failure('get', e)
    if value is None:
        return PlainTextResponse('', status_code=404)
    return PlainTextResponse(value)


@router.get('/health')
def api_health(request: Request):
    return get_health(_cache(request).backend_name)
