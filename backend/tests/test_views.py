from app.views import ModelAndView, RedirectView, TemplateView, ViewResolver, redirect


def test_resolve_concatenates_prefix_name_suffix():
    resolver = ViewResolver(prefix="/WEB-INF/jsp/", suffix=".jsp")
    assert resolver.resolve("list") == "/WEB-INF/jsp/list.jsp"


def test_resolve_view_returns_template_view():
    view = ViewResolver("products/", ".html").resolve_view("edit")
    assert isinstance(view, TemplateView)
    assert view.path == "products/edit.html"


def test_resolve_view_handles_redirect_names():
    view = ViewResolver("products/", ".html").resolve_view(redirect("/products").view_name)
    assert isinstance(view, RedirectView)
    assert view.url == "/products"


def test_model_and_view_copies_model():
    model = {"products": []}
    mav = ModelAndView("list", model)
    mav.model["extra"] = 1
    assert "extra" not in model
    assert mav.status_code == 200
