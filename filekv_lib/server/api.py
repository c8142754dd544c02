import base64
import logging

from fastapi import APIRouter, HTTPException, Request

from filekv_lib.config.health import get_health
from filekv_lib.storage import Entry, InvalidEntryError
from .resolver import resolve_backend

logger = logging.getLogger(__name__)

router = APIRouter()


def _storage_failure(op: str, key: str, exc: Exception) -> HTTPException:
    logger.error('%s %r failed: %s', op, key, exc)
    return HTTPException(status_code=500, detail={'error': 'storage_error', 'message': str(exc)})


@router.get('/v1/kv/{key:path}')
def api_kv_get(key: str, request: Request):
    backend = resolve_backend(request)
    try:
        entry = backend.get(key)
    except Exception as e:
        raise _storage_failure('get', key, e)
    if entry is None:
        raise HTTPException(status_code=404, detail={'error': 'not_found', 'message': f'No entry for {key!r}'})
    return {'key': entry.key, 'value': base64.b64encode(entry.value).decode('ascii')}


@router.put('/v1/kv/{key:path}')
async def api_kv_put(key: str, request: Request):
    backend = resolve_backend(request)
    body = await request.body()
    try:
        backend.put(Entry(key=key, value=body))
    except InvalidEntryError as e:
        raise HTTPException(status_code=400, detail={'error': 'invalid_entry', 'message': str(e)})
    except Exception as e:
        raise _storage_failure('put', key, e)
    logger.info('Stored %r (%d bytes)', key, len(body))
    return {'ok': True, 'key': key}


@router.delete('/v1/kv/{key:path}')
def api_kv_delete(key: str, request: Request):
    backend = resolve_backend(request)
    try:
        backend.delete(key)
    except Exception as e:
        raise _storage_failure('delete', key, e)
    logger.info('Deleted %r', key)
    return {'ok': True}


@router.get('/v1/list')
def api_list(request: Request, prefix: str = ''):
    backend = resolve_backend(request)
    try:
        keys = backend.list(prefix)
    except Exception as e:
        raise _storage_failure('list', prefix, e)
    return {'prefix': prefix, 'keys': keys}


@router.get('/health')
async def api_health(request: Request):
    return get_health(getattr(request.app.state, 'backend_kind', 'unknown'))
