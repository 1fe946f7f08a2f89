from __future__ import annotations

import os
import sys
from pathlib import Path

import jwt
import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-catalog-api-0123456789")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")

from fastapi.testclient import TestClient

from catalog_data import build_catalog_db
from grocery.database import get_database
from grocery.services.reference_resolver import ReferenceResolver
from grocery.services.reference_store import ReferenceStore


@pytest.fixture()
def catalog_db():
    return build_catalog_db()


@pytest.fixture()
def resolver(catalog_db):
    return ReferenceResolver(ReferenceStore(catalog_db))


@pytest.fixture()
def client(catalog_db):
    from index import app

    app.dependency_overrides[get_database] = lambda: catalog_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    token = jwt.encode({"user_id": "admin-1", "user_type": "admin"}, os.environ["JWT_SECRET"], algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}
