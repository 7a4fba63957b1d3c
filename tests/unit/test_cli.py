import kvcache


def test_cli_flags_override_config(tmp_path, monkeypatch):
    cfg = tmp_path / 'kvcache.yml'
    cfg.write_text('address: 0.0.0.0:9000\nlog_level: INFO\n')
    seen = {}

    def fake_run(app, host, port, log_level):
        seen.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(kvcache.uvicorn, 'run', fake_run)
    rc = kvcache.main(['--config', str(cfg), '--address', '127.0.0.1:8081', '--cache-dir', str(tmp_path / 'c')])
    assert rc == 0
    assert seen['host'] == '127.0.0.1'
    assert seen['port'] == 8081
    assert seen['log_level'] == 'info'
    assert (tmp_path / 'c').is_dir()


def test_cli_bad_address_fails(monkeypatch, capsys):
    monkeypatch.setattr(kvcache.uvicorn, 'run', lambda *a, **k: None)
    rc = kvcache.main(['--address', 'nonsense'])
    assert rc == 1
    assert 'Startup failed' in capsys.readouterr().err
