import pytest
from fastapi.testclient import TestClient

from kvcache_lib.config import Config
from kvcache_lib.main import create_app


@pytest.fixture(params=["memory", "disk"])
def client(request, tmp_path):
    cache_dir = str(tmp_path / "cache") if request.param == "disk" else None
    return TestClient(create_app(Config(cache_dir=cache_dir)))


def _add(client, key, value):
    return client.put('/add', json={'key': key, 'value': value})


def test_empty_list(client):
    resp = client.get('/list')
    assert resp.status_code == 200
    assert resp.json() == {}


def test_add(client):
    assert _add(client, 'some key', 'a value').status_code == 201
    resp = client.get('/list')
    assert resp.status_code == 200
    assert resp.json() == {'some key': 'a value'}


def test_add_two_values(client):
    assert _add(client, 'a', 'x').status_code == 201
    assert _add(client, 'b', 'y').status_code == 201
    assert client.get('/list').json() == {'a': 'x', 'b': 'y'}


def test_add_overrides_previous_entry(client):
    _add(client, 'some key', 'a value')
    assert _add(client, 'some key', 'another value').status_code == 201
    assert client.get('/list').json() == {'some key': 'another value'}


def test_deleting_nonexistent_entry(client):
    resp = client.request('DELETE', '/delete', json={'key': 'some key'})
    assert resp.status_code == 404


def test_delete(client):
    _add(client, 'some key', 'a value')
    resp = client.request('DELETE', '/delete', json={'key': 'some key'})
    assert resp.status_code == 204
    assert client.get('/list').json() == {}


def test_modifying_nonexistent_entry(client):
    resp = client.patch('/modify', json={'key': 'some key', 'value': 'a value'})
    assert resp.status_code == 404
    assert client.get('/list').json() == {}


def test_modify(client):
    _add(client, 'some key', 'a value')
    resp = client.patch('/modify', json={'key': 'some key', 'value': 'another value'})
    assert resp.status_code == 204
    assert client.get('/list').json() == {'some key': 'another value'}


def test_get_nonexistent_entry(client):
    resp = client.request('GET', '/get', json={'key': 'some key'})
    assert resp.status_code == 404
    assert resp.text == ''


def test_get(client):
    _add(client, 'some key', 'a value')
    resp = client.request('GET', '/get', json={'key': 'some key'})
    assert resp.status_code == 200
    assert resp.text == 'a value'


def test_invalid_payload_rejected(client):
    resp = client.put('/add', json={'key': 'only key'})
    assert resp.status_code == 422


@pytest.mark.parametrize("body", [
    b'{"key": "\\ud800", "value": "v"}',
    b'{"key": "k", "value": "\\udfff"}',
])
def test_non_utf8_text_rejected(client, body):
    resp = client.put('/add', content=body, headers={'content-type': 'application/json'})
    assert resp.status_code == 422
    assert resp.json()['detail'][0]['loc'][0] == 'body'
    resp = client.get('/list')
    assert resp.status_code == 200
    assert resp.json() == {}


def test_non_utf8_key_rejected_on_every_route(client):
    body = b'{"key": "\\ud800", "value": "v"}'
    headers = {'content-type': 'application/json'}
    for method, path in [('DELETE', '/delete'), ('PATCH', '/modify'), ('GET', '/get')]:
        resp = client.request(method, path, content=body, headers=headers)
        assert resp.status_code == 422, (method, path)


def test_health_reports_backend(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    body = resp.json()
    assert body['status'] == 'ok'
    assert body['backend'] in ('MemoryCache', 'DiskCache')


def test_storage_failure_is_500(tmp_path, monkeypatch):
    from kvcache_lib.storage.file_backend import DiskCache

    client = TestClient(create_app(Config(cache_dir=str(tmp_path))))

    def broken(self, key, value):
        raise OSError(28, 'No space left on device')

    monkeypatch.setattr(DiskCache, 'add', broken)
    resp = _add(client, 'k', 'v')
    assert resp.status_code == 500
    assert 'No space left' in resp.json()['detail']


def test_disk_app_sees_previous_data(tmp_path):
    first = TestClient(create_app(Config(cache_dir=str(tmp_path))))
    _add(first, 'k', 'v')
    second = TestClient(create_app(Config(cache_dir=str(tmp_path))))
    assert second.request('GET', '/get', json={'key': 'k'}).text == 'v'
