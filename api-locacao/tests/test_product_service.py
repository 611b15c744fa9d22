# tests/test_product_service.py
import io
import uuid

import pytest
from sqlalchemy import func, select

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.infrastructure.database.models.product_model import ProductModel


def test_find_all_empty(product_service):
    assert product_service.find_all() == []


def test_create_derives_total_value_and_zero_popularity(make_product, notifier):
    product = make_product(code="X1", price=100.0)

    assert product.id is not None
    assert product.total_value == pytest.approx(300.0)
    assert product.popularity == 0
    assert product.image is None
    assert notifier.kinds() == ["created"]
    assert notifier.events[0][1].code == "X1"


def test_create_duplicate_code_conflicts(make_product, session):
    make_product(code="X1", price=100.0)

    with pytest.raises(ConflictError) as exc_info:
        make_product(code="X1", price=200.0)

    assert str(exc_info.value) == "Este Produto ja esta cadastrado"
    assert exc_info.value.status_code == 409
    count = session.execute(select(func.count(ProductModel.id)).where(ProductModel.code == "X1")).scalar_one()
    assert count == 1


def test_find_all_orders_by_code_desc(make_product, product_service):
    make_product(code="A10")
    make_product(code="C30")
    make_product(code="B20")

    codes = [p.code for p in product_service.find_all()]
    assert codes == ["C30", "B20", "A10"]


def test_find_unique_and_not_found(make_product, product_service):
    product = make_product()
    assert product_service.find_unique(product.id).code == "X1"

    with pytest.raises(NotFoundError) as exc_info:
        product_service.find_unique(uuid.uuid4())
    assert exc_info.value.status_code == 404


def test_update_unique_recomputes_total_value(make_product, product_service, notifier):
    product = make_product(price=100.0)
    assert product.total_value == pytest.approx(300.0)

    updated = product_service.update_unique(product.id, price=50.0)

    assert updated.price == pytest.approx(50.0)
    assert updated.total_value == pytest.approx(150.0)
    assert updated.description == "Vestido longo"
    assert updated.modelo == "Sereia"
    assert updated.color == "azul"
    assert notifier.events[-1][0] == "updated"
    assert set(notifier.events[-1][1].changed_fields) == {"price", "totalValue"}


def test_update_unique_keeps_values_for_falsy_input(make_product, product_service):
    product = make_product(price=80.0)

    updated = product_service.update_unique(
        product.id, price=0, description="", modelo=None, color="vermelho"
    )

    assert updated.price == pytest.approx(80.0)
    assert updated.total_value == pytest.approx(240.0)
    assert updated.description == "Vestido longo"
    assert updated.modelo == "Sereia"
    assert updated.color == "vermelho"


def test_update_unique_not_found(product_service):
    with pytest.raises(NotFoundError) as exc_info:
        product_service.update_unique(uuid.uuid4(), price=10.0)
    assert str(exc_info.value) == "Produto Não Encontrado"


def test_delete_unique_is_idempotent(make_product, product_service, notifier):
    product = make_product()

    product_service.delete_unique(product.id)
    product_service.delete_unique(product.id)
    product_service.delete_unique(uuid.uuid4())

    assert product_service.find_all() == []
    assert notifier.kinds().count("deleted") == 1


def test_update_popularity_counts_contracts(make_product, product_service, contract_service, contract_payload):
    product = make_product()
    for n in (1, 2, 3):
        contract_service.create_contract(product.id, **contract_payload(number=n))

    product.popularity = 0
    product_service.update_popularity(product.id)

    assert product.popularity == 3
    assert product_service.find_unique(product.id).popularity == 3


def test_update_popularity_missing_product(product_service):
    with pytest.raises(NotFoundError):
        product_service.update_popularity(uuid.uuid4())


def test_upload_image_sets_public_url(make_product, product_service, storage, png_bytes):
    product = make_product()

    updated = product_service.upload_image(
        product.id, fileobj=io.BytesIO(png_bytes), filename="foto.png", content_type="image/png"
    )

    assert updated.image.startswith("https://bucket.test/products/")
    assert updated.image.endswith(".png")
    stored_name = updated.image[len("https://bucket.test/"):]
    assert storage.get(stored_name=stored_name) == png_bytes


def test_upload_image_missing_product_is_not_found(product_service, storage, png_bytes):
    with pytest.raises(NotFoundError):
        product_service.upload_image(
            uuid.uuid4(), fileobj=io.BytesIO(png_bytes), filename="foto.png", content_type="image/png"
        )
    assert not any(storage._base.rglob("*.png"))


def test_upload_image_rejects_mime_type(make_product, product_service):
    product = make_product()
    with pytest.raises(ValidationError):
        product_service.upload_image(
            product.id, fileobj=io.BytesIO(b"%PDF"), filename="doc.pdf", content_type="application/pdf"
        )
    assert product.image is None


def test_upload_image_too_large_removes_file(make_product, product_service, storage):
    product = make_product()
    with pytest.raises(ValidationError):
        product_service.upload_image(
            product.id, fileobj=io.BytesIO(b"x" * 2048), filename="big.png", content_type="image/png"
        )
    assert product.image is None
    assert not any(p.is_file() for p in storage._base.rglob("*"))


def test_get_image(make_product, product_service, png_bytes):
    product = make_product()
    updated = product_service.upload_image(
        product.id, fileobj=io.BytesIO(png_bytes), filename="foto.png", content_type="image/png"
    )
    name = updated.image.rsplit("https://bucket.test/", 1)[-1]

    assert product_service.get_image(name) == png_bytes
    assert product_service.get_image("products/nao-existe.png") is None
    assert product_service.get_image("../../etc/passwd") is None


def test_create_rejects_blank_code(product_service, notifier):
    with pytest.raises(ValidationError):
        product_service.create(code="   ", price=10.0)

    assert product_service.find_all() == []
    assert notifier.events == []
