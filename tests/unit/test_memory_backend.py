import pytest

from filekv_lib.storage import ConfigError, Entry, FileBackend, InmemBackend, InvalidEntryError, create_backend
from filekv_lib.storage.interfaces import BackendProtocol


def test_memory_basic_operations():
    m = InmemBackend()

    m.put(Entry(key='a/b', value=b'v1'))
    m.put(Entry(key='x', value=b'v2'))
    assert m.get('a/b') == Entry(key='a/b', value=b'v1')
    assert m.get('missing') is None

    assert sorted(m.list('')) == ['a/', 'x']
    assert m.list('a') == ['b']
    assert m.list('a/') == ['b']
    assert m.list('nope') == []

    m.delete('a/b')
    m.delete('a/b')
    assert m.get('a/b') is None
    assert m.list('') == ['x']


def test_memory_list_deduplicates_containers():
    m = InmemBackend()
    for k in ('d/1', 'd/2', 'd/e/3'):
        m.put(Entry(key=k, value=b''))
    assert m.list('') == ['d/']
    assert sorted(m.list('d')) == ['1', '2', 'e/']


def test_memory_rejects_invalid_entries():
    m = InmemBackend()
    with pytest.raises(InvalidEntryError):
        m.put(None)
    with pytest.raises(InvalidEntryError):
        m.put(Entry(key='', value=b'x'))


def test_create_backend(tmp_path):
    assert isinstance(create_backend('inmem'), InmemBackend)
    b = create_backend('file', {'path': str(tmp_path)})
    assert isinstance(b, FileBackend)
    assert isinstance(b, BackendProtocol)
    with pytest.raises(ConfigError):
        create_backend('consul', {})
    with pytest.raises(ConfigError):
        create_backend('file', {})
