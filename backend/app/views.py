"""View resolution and rendering.

Route handlers return a `ModelAndView`: a logical view name plus the data
the view needs. `ViewResolver` maps the name to a template path by plain
concatenation (`prefix + name + suffix`); names of the form
`redirect:<url>` become a 302 redirect instead of a template.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from .interceptors import apply_post_handle

REDIRECT_PREFIX = "redirect:"


class ModelAndView:
    """Handler result: a logical view name and its model."""
    def __init__(self, view_name: str, model: Optional[dict] = None, status_code: int = 200):
        self.view_name = view_name
        self.model = dict(model or {})
        self.status_code = status_code

    def __repr__(self):
        return f"ModelAndView(view_name={self.view_name!r}, keys={sorted(self.model)}, status_code={self.status_code})"


def redirect(url: str) -> ModelAndView:
    return ModelAndView(REDIRECT_PREFIX + url)


class TemplateView:
    def __init__(self, path: str):
        self.path = path

    def render(self, request: Request, templates: Jinja2Templates, mav: ModelAndView) -> Response:
        return templates.TemplateResponse(request, self.path, mav.model, status_code=mav.status_code)


class RedirectView:
    def __init__(self, url: str):
        self.url = url

    def render(self, request: Request, templates: Jinja2Templates, mav: ModelAndView) -> Response:
        return RedirectResponse(url=self.url, status_code=302)


class ViewResolver:
    """Resolve logical view names against a fixed prefix and suffix."""
    def __init__(self, prefix: str = "", suffix: str = ""):
        self.prefix = prefix
        self.suffix = suffix

    def resolve(self, view_name: str) -> str:
        """Return the template path for `view_name`."""
        return f"{self.prefix}{view_name}{self.suffix}"

    def resolve_view(self, view_name: str):
        """Return a `RedirectView` for `redirect:` names, else a `TemplateView`."""
        if view_name.startswith(REDIRECT_PREFIX):
            return RedirectView(view_name[len(REDIRECT_PREFIX):])
        return TemplateView(self.resolve(view_name))


def render(request: Request, mav: ModelAndView) -> Response:
    """Run post-handle hooks, then resolve and render `mav`."""
    apply_post_handle(request, mav)
    view = request.app.state.view_resolver.resolve_view(mav.view_name)
    return view.render(request, request.app.state.templates, mav)


def render_error(request: Request, status_code: int, title: str, messages=()) -> Response:
    """Render the `error` view directly, without post-handle hooks."""
    path = request.app.state.view_resolver.resolve("error")
    model = {"title": title, "messages": list(messages)}
    return request.app.state.templates.TemplateResponse(request, path, model, status_code=status_code)
