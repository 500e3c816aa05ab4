from lts.config import coerce_scalar, deep_merge, load_config, load_typed_config
from lts.config_types import AppConfig, CallbackSettings


def test_defaults(monkeypatch):
    monkeypatch.delenv('LTS_ENABLE_DOTENV', raising=False)
    cfg = load_config()
    assert cfg['log_level'] == 'INFO'
    assert cfg['callback']['port'] == 9876
    assert cfg['secrets']['directory'] == 'data/secrets'
    assert cfg['providers']['spotify']['client_id'] is None


def test_env_override_nested(monkeypatch):
    monkeypatch.setenv('LTS__CALLBACK__PORT', '5555')
    monkeypatch.setenv('LTS__PROVIDERS__LASTFM__API_KEY', '0123456789')
    cfg = load_config()
    assert cfg['callback']['port'] == 5555
    # Credentials stay strings even when numeric
    assert cfg['providers']['lastfm']['api_key'] == '0123456789'


def test_env_file_loading(tmp_path, monkeypatch):
    env_file = tmp_path / '.env'
    env_file.write_text(
        'LTS__SECRETS__DIRECTORY="/tmp/lts secrets"  # where sessions live\n'
        'OTHER__VALUE=ignored\n',
        encoding='utf-8',
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('LTS_ENABLE_DOTENV', '1')
    cfg = load_config()
    assert cfg['secrets']['directory'] == '/tmp/lts secrets'
    # explicit OS environment should override .env
    monkeypatch.setenv('LTS__SECRETS__DIRECTORY', '/elsewhere')
    assert load_config()['secrets']['directory'] == '/elsewhere'


def test_env_file_skipped_during_tests(tmp_path, monkeypatch):
    (tmp_path / '.env').write_text('LTS__LOG_LEVEL=DEBUG\n', encoding='utf-8')
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('LTS_ENABLE_DOTENV', raising=False)
    assert load_config()['log_level'] == 'INFO'


def test_overrides_win(monkeypatch):
    monkeypatch.setenv('LTS__CALLBACK__HOST', 'localhost')
    cfg = load_config({'callback': {'host': '0.0.0.0'}})
    assert cfg['callback']['host'] == '0.0.0.0'
    assert cfg['callback']['port'] == 9876


def test_typed_config():
    cfg = load_typed_config({'providers': {'spotify': {'client_id': 'abc', 'unknown': 1}}})
    assert isinstance(cfg, AppConfig)
    assert cfg.providers.spotify.client_id == 'abc'
    assert AppConfig.from_dict(cfg.to_dict()) == cfg


def test_redirect_url_normalizes_path():
    assert CallbackSettings(path='cb').redirect_url() == 'http://127.0.0.1:9876/cb'
    assert CallbackSettings(host='localhost', port=5555, path='/').redirect_url() == 'http://localhost:5555/'


def test_coerce_scalar():
    assert coerce_scalar('true') is True
    assert coerce_scalar('no') is False
    assert coerce_scalar('42') == 42
    assert coerce_scalar('-1') == -1
    assert coerce_scalar('0.5') == 0.5
    assert coerce_scalar('hello') == 'hello'
    assert coerce_scalar('[1, 2]') == '[1, 2]'


def test_deep_merge():
    merged = deep_merge({'a': {'b': 1, 'c': 2}}, {'a': {'c': 3}, 'd': 4})
    assert merged == {'a': {'b': 1, 'c': 3}, 'd': 4}
