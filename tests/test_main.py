import httpx
from fastapi.testclient import TestClient

from haloride import main
from haloride.core.settings import Settings
from haloride.main import app
from haloride.services import lead_store
from haloride.services.lead_store import SupabaseLeadStore
from haloride.services.supabase import SupabaseClient

client = TestClient(app)


def test_read_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"app": "HaloRide lead capture backend", "status": "ok"}


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_shutdown_closes_supabase_client(monkeypatch):
    http_client = SupabaseClient(
        "https://project.supabase.co",
        "anon-key",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])),
    )
    monkeypatch.setattr(main, "settings", Settings(lead_store="supabase"))
    monkeypatch.setattr(lead_store, "_store_instance", SupabaseLeadStore(http_client, "halorides-form"))

    with TestClient(app):
        assert not http_client._client.is_closed
    assert http_client._client.is_closed
