# tests/conftest.py
import io
import os
import tempfile
from pathlib import Path

import pytest

# settings are read at import time: point them to a temp sqlite db / upload dir
# before anything from `app` is imported
_tmp_dir = Path(tempfile.mkdtemp(prefix="test_locacao_"))
os.environ["DB_URL"] = f"sqlite:///{(_tmp_dir / 'test.db').as_posix()}"
os.environ["DEBUG"] = "false"
os.environ["FILES_BASE_PATH"] = str(_tmp_dir / "uploads")
os.environ["FILES_PUBLIC_BASE_URL"] = "https://bucket.test"
os.environ["APP_PREFIX"] = "/apps/locacao"

from app.infrastructure.database.session import db_session, drop_db, init_db  # noqa: E402
from app.infrastructure.storage.local_file_storage import (  # noqa: E402
    LocalFileStorage,
    LocalFileStorageConfig,
)
from app.repositories.contract_repository import ContractRepository  # noqa: E402
from app.repositories.product_repository import ProductRepository  # noqa: E402
from app.services.contract_service import ContractService  # noqa: E402
from app.services.product_service import ProductService  # noqa: E402

API = "/apps/locacao/api"
PUBLIC_BASE_URL = "https://bucket.test"


class RecordingNotifier:
    """Collects product events instead of emitting them over Socket.IO."""

    def __init__(self):
        self.events = []

    def notify_product_created(self, event):
        self.events.append(("created", event))

    def notify_product_updated(self, event):
        self.events.append(("updated", event))

    def notify_product_deleted(self, event):
        self.events.append(("deleted", event))

    def notify_product_popularity_changed(self, event):
        self.events.append(("popularity_changed", event))

    def kinds(self):
        return [k for k, _ in self.events]


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    init_db()
    try:
        yield
    finally:
        drop_db()


@pytest.fixture
def session(database):
    with db_session() as s:
        yield s


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(config=LocalFileStorageConfig(base_path=str(tmp_path / "storage")))


@pytest.fixture
def product_service(session, storage, notifier):
    return ProductService(
        product_repo=ProductRepository(session),
        storage=storage,
        public_base_url=PUBLIC_BASE_URL,
        max_image_bytes=1024,
        allowed_mime_types={"image/png", "image/jpeg"},
        product_notifier=notifier,
    )


@pytest.fixture
def contract_service(session, product_service):
    return ContractService(
        contract_repo=ContractRepository(session),
        product_repo=ProductRepository(session),
        product_service=product_service,
    )


@pytest.fixture
def make_product(product_service):
    """
    Create a product through the service.
    Usage: p = make_product(code="X1", price=100)
    """
    def _fn(code="X1", price=100.0, **kwargs):
        data = {"description": "Vestido longo", "modelo": "Sereia", "color": "azul"}
        data.update(kwargs)
        return product_service.create(code=code, price=price, **data)
    return _fn


@pytest.fixture
def contract_payload():
    def _fn(number=1, **overrides):
        data = {
            "number": number,
            "retirada": "2026-10-01",
            "devolucao": "2026-10-05",
            "observacao": None,
            "tipo": "aluguel",
            "status": "ativo",
        }
        data.update(overrides)
        return data
    return _fn


# -------------------------
# HTTP
# -------------------------

@pytest.fixture(scope="session")
def flask_app():
    from app.app_factory import create_app

    return create_app()


@pytest.fixture
def emitted(monkeypatch):
    """Socket.IO emits captured as (event, payload) tuples."""
    from app.infrastructure.realtime.socketio_server import socketio

    calls = []
    monkeypatch.setattr(socketio, "emit", lambda event, payload, **kw: calls.append((event, payload)))
    return calls


@pytest.fixture
def client(flask_app, emitted):
    return flask_app.test_client()


@pytest.fixture
def create_product_api(client):
    def _fn(code="X1", price=100.0, **kwargs):
        payload = {
            "code": code,
            "price": price,
            "description": "Vestido longo",
            "modelo": "Sereia",
            "color": "azul",
        }
        payload.update(kwargs)
        resp = client.post(f"{API}/products", json=payload)
        assert resp.status_code == 201, resp.get_data(as_text=True)
        return resp.get_json()
    return _fn


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def upload_form():
    """Multipart form for the product image endpoint."""
    def _fn(content: bytes, filename="foto.png", content_type="image/png"):
        return {"image": (io.BytesIO(content), filename, content_type)}
    return _fn
