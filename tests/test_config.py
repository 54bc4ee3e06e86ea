import pytest

from globesync.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GLOBESYNC_BACKEND_URL", "GLOBESYNC_NOMINATIM_BASE_URL", "GLOBESYNC_OSRM_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


def test_backend_is_disabled_by_default():
    assert Settings(_env_file=None).backend_url is None


def test_blank_backend_url_disables_backend(monkeypatch):
    monkeypatch.setenv("GLOBESYNC_BACKEND_URL", "   ")

    assert Settings(_env_file=None).backend_url is None


def test_provider_urls_lose_trailing_slash(monkeypatch):
    monkeypatch.setenv("GLOBESYNC_BACKEND_URL", "http://routing-backend:8080/")
    monkeypatch.setenv("GLOBESYNC_OSRM_BASE_URL", "https://osrm.example.org/")

    config = Settings(_env_file=None)

    assert config.backend_url == "http://routing-backend:8080"
    assert config.osrm_base_url == "https://osrm.example.org"


def test_blank_provider_url_stays_a_string(monkeypatch):
    monkeypatch.setenv("GLOBESYNC_OSRM_BASE_URL", "")
    monkeypatch.setenv("GLOBESYNC_NOMINATIM_BASE_URL", " / ")

    config = Settings(_env_file=None)

    assert config.osrm_base_url == ""
    assert config.nominatim_base_url == ""
