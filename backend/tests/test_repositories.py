import pytest
from sqlalchemy.exc import OperationalError

from app.models import Product
from app.repositories import ProductRepository, StoreError


def test_save_assigns_id_and_reads_back(session):
    repo = ProductRepository(session)
    saved = repo.save(Product(name="Widget", description="blue", price=9.99))
    assert saved.id is not None
    found = repo.find_by_id(saved.id)
    assert (found.name, found.description, found.price) == ("Widget", "blue", 9.99)


def test_find_by_id_missing_returns_none(session):
    assert ProductRepository(session).find_by_id(12345) is None


def test_delete_by_id_is_idempotent(session):
    repo = ProductRepository(session)
    saved = repo.save(Product(name="Gadget", price=1.5))
    repo.delete_by_id(saved.id)
    repo.delete_by_id(saved.id)
    assert all(p.id != saved.id for p in repo.find_all())


def test_delete_unknown_id_is_noop(session):
    repo = ProductRepository(session)
    repo.save(Product(name="Keep"))
    repo.delete_by_id(999)
    assert [p.name for p in repo.find_all()] == ["Keep"]


def test_save_existing_id_overwrites_every_field(session):
    repo = ProductRepository(session)
    saved = repo.save(Product(name="Old", description="old text", price=3.0))
    updated = repo.save(Product(id=saved.id, name="New", description=None, price=None))
    assert updated.id == saved.id
    found = repo.find_by_id(saved.id)
    assert (found.name, found.description, found.price) == ("New", None, None)
    assert len(repo.find_all()) == 1


def test_save_unknown_id_inserts_with_store_assigned_id(session):
    repo = ProductRepository(session)
    first = repo.save(Product(name="First"))
    created = repo.save(Product(id=500, name="Orphan"))
    assert created.id != 500
    assert created.id > first.id
    assert repo.find_by_id(500) is None


def test_find_all_orders_by_id(session):
    repo = ProductRepository(session)
    for name in ("a", "b", "c"):
        repo.save(Product(name=name))
    ids = [p.id for p in repo.find_all()]
    assert ids == sorted(ids)


def test_database_errors_surface_as_store_error(session, monkeypatch):
    repo = ProductRepository(session)

    def boom(*_args, **_kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "exec", boom)
    with pytest.raises(StoreError) as info:
        repo.find_all()
    assert "find_all failed" in str(info.value)
