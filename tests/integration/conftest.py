from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bakery_pos.infrastructure.db import session as db_session

BACKEND_DIR = Path(__file__).resolve().parents[2]


@pytest.fixture(scope="session", autouse=True)
def integration_environment(tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    database_path = tmp_path_factory.mktemp("db") / "bakery.sqlite3"
    database_url = f"sqlite:///{database_path}"

    os.environ["DATABASE_URL"] = database_url
    os.environ.pop("REDIS_URL", None)
    os.environ["ORDER_TOTALS_CHECK"] = "strict"
    os.environ.setdefault("OTEL_SERVICE_NAME", "bakery-pos-backend-test")
    os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")

    db_session._build_engine.cache_clear()

    env = os.environ.copy()
    env["PYTHONPATH"] = f"{BACKEND_DIR / 'src'}{os.pathsep}{env.get('PYTHONPATH', '')}".rstrip(
        os.pathsep
    )

    subprocess.run(
        [sys.executable, "-m", "alembic", "-c", "alembic.ini", "upgrade", "head"],
        cwd=BACKEND_DIR,
        env=env,
        check=True,
    )
    subprocess.run(
        [sys.executable, "-m", "bakery_pos.tools.seed"],
        cwd=BACKEND_DIR,
        env=env,
        check=True,
    )
    yield
    db_session._build_engine.cache_clear()


@pytest.fixture
def client() -> Iterator[TestClient]:
    from bakery_pos.api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def menu_by_name(client: TestClient) -> dict[str, dict]:
    response = client.get("/menu-items")
    assert response.status_code == 200
    return {item["name"]: item for item in response.json()}


@pytest.fixture
def owner(client: TestClient) -> dict:
    response = client.post("/login", json={"access_code": "10001"})
    assert response.status_code == 200
    return response.json()
