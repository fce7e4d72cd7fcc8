import pytest

from app.schemas import FormBindingError, ProductForm


def test_bind_coerces_price_and_strips_name():
    form = ProductForm.bind({"name": "  Widget ", "description": "", "price": "9.99"})
    assert form.name == "Widget"
    assert form.description is None
    assert form.price == 9.99


def test_bind_drops_posted_id():
    product = ProductForm.bind({"id": "9", "name": "Widget"}).to_product(5)
    assert product.id == 5
    assert ProductForm.bind({"id": "9", "name": "Widget"}).to_product().id is None


def test_bind_reports_every_field_error():
    with pytest.raises(FormBindingError) as info:
        ProductForm.bind({"name": None, "price": "abc"})
    fields = [m.split(":")[0] for m in info.value.messages]
    assert fields == ["name", "price"]


def test_bind_rejects_non_finite_price():
    for value in ("nan", "inf"):
        with pytest.raises(FormBindingError) as info:
            ProductForm.bind({"name": "Widget", "price": value})
        assert info.value.messages[0].startswith("price:")
