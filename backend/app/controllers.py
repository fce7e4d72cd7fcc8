"""HTTP controllers for the product pages.

Routes are thin: they bind the request, call `ProductService` and return
a `ModelAndView` that `app.views.render` turns into a response. Every
write answers with a redirect to the list page so refreshing the browser
never repeats the submission.

Endpoints implemented:
- GET  /products
- GET  /products/new
- POST /products
- GET  /products/edit/{product_id}
- POST /products/edit/{product_id}
- GET  /products/delete/{product_id}
"""

from typing import Optional
from fastapi import APIRouter, Depends, Form, Request
from sqlmodel import Session
from . import models
from .database import get_session
from .repositories import ProductRepository
from .schemas import ProductForm
from .services import ProductService
from .views import ModelAndView, redirect, render

LIST_URL = "/products"

router = APIRouter(prefix="/products", tags=["products"])


def get_product_service(db: Session = Depends(get_session)) -> ProductService:
    """Build the per-request service over a session-bound repository."""
    return ProductService(ProductRepository(db))


def bind_product_form(
    name: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    price: Optional[str] = Form(default=None),
) -> ProductForm:
    """Bind the posted product fields; raises `FormBindingError` on mismatch."""
    return ProductForm.bind({"name": name, "description": description, "price": price})


@router.get("")
def list_products(request: Request, service: ProductService = Depends(get_product_service)):
    """Show every product."""
    products = service.find_all()
    return render(request, ModelAndView("list", {"products": products}))


@router.get("/new")
def show_new_form(request: Request):
    """Show the create form bound to an empty product."""
    return render(request, ModelAndView("new", {"product": models.Product()}))


@router.post("")
def create_product(
    request: Request,
    form: ProductForm = Depends(bind_product_form),
    service: ProductService = Depends(get_product_service),
):
    """Create a product from the posted form and go back to the list."""
    service.save(form.to_product())
    return render(request, redirect(LIST_URL))


@router.get("/edit/{product_id}")
def show_edit_form(request: Request, product_id: int, service: ProductService = Depends(get_product_service)):
    """Show the edit form for an existing product, or 404 if it is gone."""
    product = service.find_by_id(product_id)
    if product is None:
        return render(request, ModelAndView(
            "error",
            {"title": "Product not found", "messages": [f"No product with id {product_id}."]},
            status_code=404,
        ))
    return render(request, ModelAndView("edit", {"product": product}))


@router.post("/edit/{product_id}")
def update_product(
    request: Request,
    product_id: int,
    form: ProductForm = Depends(bind_product_form),
    service: ProductService = Depends(get_product_service),
):
    """Replace the product at `product_id` with the posted fields.

    The id always comes from the path; an id posted in the form is ignored.
    """
    service.save(form.to_product(product_id))
    return render(request, redirect(LIST_URL))


@router.get("/delete/{product_id}")
def delete_product(request: Request, product_id: int, service: ProductService = Depends(get_product_service)):
    """Delete a product; unknown ids are ignored."""
    service.delete_by_id(product_id)
    return render(request, redirect(LIST_URL))
