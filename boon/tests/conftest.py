import os
import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "boon_test.db"
    # Point the service at this temp DB; the bootstrapper creates it on first use
    os.environ["BOON_DB_PATH"] = str(path)
    return str(path)


@pytest.fixture()
def store_config(tmp_db_path):
    from boon.db import load_config
    return load_config()


@pytest.fixture()
def repo(store_config, tmp_db_path):
    from boon.repository import open_repository
    # Safety: only ever wipe the temp DB
    assert os.environ.get("BOON_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    r = open_repository(store_config)
    r.conn.execute("DELETE FROM reports")
    yield r
    r.close()


@pytest.fixture()
def client(repo):
    from boon.api import create_app
    from fastapi.testclient import TestClient
    return TestClient(create_app(repo))


@pytest.fixture()
def fresh_config(tmp_path):
    """Config pointing at a database file that does not exist yet."""
    from boon.db import StoreConfig
    return StoreConfig(path=str(tmp_path / "sub" / "fresh.db"))
