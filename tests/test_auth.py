from types import SimpleNamespace

import pytest

import sheet_records.auth as auth


def test_service_account_provider_loads_key_file_with_scopes(monkeypatch):
    calls = {}

    def _from_file(path, scopes):
        calls["args"] = (path, scopes)
        return "sa-creds"

    monkeypatch.setattr(auth.service_account.Credentials, "from_service_account_file", _from_file)

    provider = auth.service_account_provider("key.json")

    assert provider() == "sa-creds"
    assert calls["args"] == ("key.json", auth.SCOPES)


def test_build_service_passes_google_auth_credentials(monkeypatch):
    calls = {}

    def _build(*args, **kwargs):
        calls["build"] = (args, kwargs)
        return "svc"

    monkeypatch.setattr(auth, "build", _build)

    service = auth.build_service(lambda: object())

    assert service == "svc"
    args, kwargs = calls["build"]
    assert args == ("sheets", "v4")
    assert "credentials" in kwargs
    assert kwargs["cache_discovery"] is False


def test_build_service_authorizes_http_for_oauth2client_credentials(monkeypatch):
    calls = {}
    creds = SimpleNamespace(authorize=lambda http: "authorized-http")
    monkeypatch.setattr(auth, "build", lambda *args, **kwargs: calls.update(kwargs) or "svc")

    assert auth.build_service(lambda: creds) == "svc"
    assert calls["http"] == "authorized-http"


class _FakeStorage:
    stored = None

    def __init__(self, path):
        self.path = path

    def get(self):
        return type(self).stored


def test_oauth_provider_uses_cached_token(monkeypatch, tmp_path):
    cached = SimpleNamespace(invalid=False)
    _FakeStorage.stored = cached
    monkeypatch.setattr(auth.file, "Storage", _FakeStorage)
    monkeypatch.setattr(auth.tools, "run_flow", lambda *_a, **_k: pytest.fail("flow should not run"))

    provider = auth.oauth_provider(tmp_path / "secrets.json", tmp_path / "token.json")

    assert provider() is cached


def test_oauth_provider_runs_flow_when_token_missing(monkeypatch, tmp_path):
    secrets = tmp_path / "secrets.json"
    secrets.write_text("{}", encoding="utf-8")
    _FakeStorage.stored = None
    calls = {}
    monkeypatch.setattr(auth.file, "Storage", _FakeStorage)
    monkeypatch.setattr(
        auth.client,
        "flow_from_clientsecrets",
        lambda path, scope: calls.setdefault("flow", (path, scope)),
    )
    monkeypatch.setattr(auth.tools, "run_flow", lambda flow, store, flags: "fresh-creds")

    provider = auth.oauth_provider(secrets, tmp_path / "token.json")

    assert provider() == "fresh-creds"
    assert calls["flow"] == (str(secrets), " ".join(auth.SCOPES))


def test_oauth_provider_missing_client_secrets(monkeypatch, tmp_path):
    _FakeStorage.stored = None
    monkeypatch.setattr(auth.file, "Storage", _FakeStorage)

    provider = auth.oauth_provider(tmp_path / "missing.json", tmp_path / "token.json")

    with pytest.raises(FileNotFoundError, match="missing.json"):
        provider()
