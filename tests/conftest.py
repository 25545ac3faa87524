from pathlib import Path

import pytest

from geoip_resolver.config import Settings

DATA_DIR = Path(__file__).parent / "data"

ENV_VARS = [
    "IPINFO_URL",
    "IPINFO_TOKEN",
    "IPINFO_TIMEOUT",
    "GEOIP_REMOTE_ENABLED",
    "GEOIP_EXTERNAL_DB",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_db():
    # 0.0.0.0/1 -> {"country": "JP", "continent": "AS", ...}, 128.0.0.0/1 absent
    return DATA_DIR / "sample.mmdb"


@pytest.fixture
def missing_db(tmp_path):
    return tmp_path / "missing.db"


@pytest.fixture
def corrupt_db(tmp_path):
    path = tmp_path / "ipinfo_lite.mmdb"
    path.write_bytes(b"this is not a maxmind database")
    return path


@pytest.fixture
def local_settings(missing_db):
    return Settings(remote_enabled=False, external_db_path=str(missing_db))
