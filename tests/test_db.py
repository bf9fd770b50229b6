from types import SimpleNamespace

import pytest

from donation_points.config import Settings
from donation_points.db import supabase as supabase_module


class FakeSession:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(supabase_module, "_client", None)
    yield


def test_init_returns_none_without_credentials(monkeypatch: pytest.MonkeyPatch):
    def fail_if_called(url, key):
        raise AssertionError("client must not be created without credentials")

    monkeypatch.setattr(supabase_module, "create_client", fail_if_called)

    client = supabase_module.init_supabase_client(Settings(supabase_url=None, supabase_key=None))

    assert client is None
    assert supabase_module.get_supabase_client() is None


def test_init_returns_none_when_client_creation_fails(monkeypatch: pytest.MonkeyPatch):
    def broken_create(url, key):
        raise ValueError("Invalid API key")

    monkeypatch.setattr(supabase_module, "create_client", broken_create)

    settings = Settings(supabase_url="https://demo.supabase.co", supabase_key="bad")

    assert supabase_module.init_supabase_client(settings) is None
    assert supabase_module.get_supabase_client() is None


def test_init_is_shared_and_close_resets(monkeypatch: pytest.MonkeyPatch):
    session = FakeSession()
    created = []

    def fake_create(url, key):
        client = SimpleNamespace(postgrest=SimpleNamespace(session=session))
        created.append((url, key))
        return client

    monkeypatch.setattr(supabase_module, "create_client", fake_create)
    settings = Settings(supabase_url="https://demo.supabase.co", supabase_key="service-key")

    first = supabase_module.init_supabase_client(settings)
    second = supabase_module.init_supabase_client(settings)

    assert first is second
    assert created == [("https://demo.supabase.co", "service-key")]
    assert supabase_module.get_supabase_client() is first

    supabase_module.close_supabase_client()

    assert session.closed is True
    assert supabase_module.get_supabase_client() is None


def test_close_without_client_is_a_no_op():
    supabase_module.close_supabase_client()

    assert supabase_module.get_supabase_client() is None
