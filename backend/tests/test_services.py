import logging

import pytest

from app.models import Product
from app.repositories import ProductRepository, StoreError
from app.services import ProductService


class FailingRepository:
    def find_all(self):
        raise StoreError("find_all failed: gone")


def test_service_forwards_to_repository(session):
    svc = ProductService(ProductRepository(session))
    saved = svc.save(Product(name="Lamp", price=20.0))
    assert svc.find_by_id(saved.id).name == "Lamp"
    assert [p.id for p in svc.find_all()] == [saved.id]
    svc.delete_by_id(saved.id)
    assert svc.find_by_id(saved.id) is None


def test_service_calls_are_logged(session, caplog):
    svc = ProductService(ProductRepository(session))
    with caplog.at_level(logging.INFO, logger="app.services"):
        svc.find_all()
    phases = [r.getMessage() for r in caplog.records if r.name == "app.services"]
    assert len(phases) == 3
    assert '"phase": "before"' in phases[0]
    assert '"phase": "returned"' in phases[1]
    assert '"phase": "after"' in phases[2]
    assert "ProductService.find_all" in phases[0]


def test_service_errors_are_logged_and_reraised(caplog):
    svc = ProductService(FailingRepository())
    with caplog.at_level(logging.INFO, logger="app.services"):
        with pytest.raises(StoreError):
            svc.find_all()
    messages = [r.getMessage() for r in caplog.records if r.name == "app.services"]
    assert any('"phase": "raised"' in m and "gone" in m for m in messages)
    assert '"phase": "after"' in messages[-1]
