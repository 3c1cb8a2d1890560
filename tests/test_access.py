import json

import google.auth
import google.auth.exceptions
import pytest
from google.oauth2.credentials import Credentials

from a1sheets.access import _GWSAccess, service
from a1sheets.errors import AuthenticationError, TokenError

SHEETS = "https://www.googleapis.com/auth/spreadsheets"
DRIVE = "https://www.googleapis.com/auth/drive"

@pytest.fixture
def no_default_creds(monkeypatch):
    def _default(*args, **kwargs):
        raise google.auth.exceptions.DefaultCredentialsError("no default credentials")
    monkeypatch.setattr(google.auth, "default", _default)

@pytest.fixture
def access(tmp_path):
    a = _GWSAccess()
    a.config = {'secrets': tmp_path / "client_secret.json", 'cache': tmp_path / "tokencache.json"}
    return a

def write_cache(path, scopes):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump({'refresh_token': 'refresh', 'client_id': 'id', 'client_secret': 'secret',
                   'scopes': scopes}, f)

def test_defaults():
    a = _GWSAccess()
    assert(a.scopes == [SHEETS])
    assert(a.config['secrets'] == "client_secret.json")
    assert(a.config['cache'] == "tokencache.json")
    assert(a.client_secrets.name == "client_secret.json")
    assert(a.cred_cache.name == "tokencache.json")
    assert(not a)
    assert(str(a).startswith("Disconnected"))

def test_scopes():
    assert(_GWSAccess.get_scope("sheets") == SHEETS)
    assert(_GWSAccess.get_scope(DRIVE) == DRIVE)
    assert(_GWSAccess.get_scope("calendar") == "")
    a = _GWSAccess()
    a.scopes = ["sheets", "drive", "nonsense", "sheets"]
    assert(a.scopes == [SHEETS, DRIVE])
    a.scopes = None
    assert(a.scopes == [])

def test_config_round_trip(tmp_path):
    a = _GWSAccess()
    a.config = {'secrets': str(tmp_path / "s.json"), 'cache': str(tmp_path / "c.json"),
                'scopes': ["sheets-ro"], 'server': "127.0.0.1", 'port': "8080"}
    c = a.config
    assert(c['secrets'] == str(tmp_path / "s.json"))
    assert(c['cache'] == str(tmp_path / "c.json"))
    assert(c['scopes'] == ["https://www.googleapis.com/auth/spreadsheets.readonly"])
    assert(c['server'] == "127.0.0.1")
    assert(c['port'] == 8080)

def test_no_credentials(access, no_default_creds):
    assert(not access.connect())
    with pytest.raises(AuthenticationError) as e:
        access.get_service("sheets", "v4")
    assert("secrets" in e.value.details)

def test_no_scopes(access):
    access.scopes = []
    assert(not access.connect())

def test_cache_for_other_scopes_removed(access, tmp_path, no_default_creds):
    cache = tmp_path / "tokencache.json"
    write_cache(cache, [DRIVE])
    assert(not access.connect())
    assert(not cache.exists())

def test_cache_not_an_object_removed(access, tmp_path, no_default_creds):
    cache = tmp_path / "tokencache.json"
    cache.write_text("[]", encoding='utf-8')
    assert(not access.connect())
    assert(not cache.exists())

def test_cache_not_json_removed(access, tmp_path, no_default_creds):
    cache = tmp_path / "tokencache.json"
    cache.write_text("not json", encoding='utf-8')
    assert(not access.connect())
    assert(not cache.exists())

def test_unrefreshable_cache(access, tmp_path, monkeypatch):
    cache = tmp_path / "tokencache.json"
    write_cache(cache, [SHEETS])
    def _refresh(self, request):
        raise google.auth.exceptions.RefreshError("invalid_grant")
    monkeypatch.setattr(Credentials, "refresh", _refresh)
    with pytest.raises(TokenError) as e:
        access.connect()
    assert(e.value.scopes == [SHEETS])
    assert(not cache.exists())

def test_bad_secrets_file(access, tmp_path):
    (tmp_path / "client_secret.json").write_text("{}", encoding='utf-8')
    with pytest.raises(AuthenticationError):
        access.connect()

def test_service_decorator_passes_through():
    @service("sheets", "v4")
    def op(value, service=None):
        return value, service

    # an explicit service never touches authentication
    assert(op(1, service="fake") == (1, "fake"))
