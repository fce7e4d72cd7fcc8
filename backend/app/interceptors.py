"""Request interceptors with pre/post/completion hooks.

An interceptor observes every request whose path matches one of its
glob patterns:

- `pre_handle` runs before the route, in registration order. Returning
  `False` stops processing and the client gets a 403.
- `post_handle` runs after the route produced its `ModelAndView` and
  before the view is rendered, in reverse order.
- `after_completion` runs once the response exists, in reverse order,
  with the error raised while processing (or `None`). Only interceptors
  whose `pre_handle` returned `True` are completed.

The HTTP middleware that drives the hooks lives in `app.main`; the
post-handle step is driven by `app.views.render`.
"""

from __future__ import annotations

import json
import logging
from fnmatch import fnmatchcase
from typing import Iterable, List, Optional

from fastapi import Request, Response

_LOGGER = logging.getLogger("app.interceptors")


class HandlerInterceptor:
    """Base interceptor; every hook is a no-op that lets the request through."""

    def pre_handle(self, request: Request) -> bool:
        return True

    def post_handle(self, request: Request, model_and_view) -> None:
        pass

    def after_completion(self, request: Request, response: Optional[Response], error: Optional[BaseException]) -> None:
        pass


class LoggingInterceptor(HandlerInterceptor):
    """Log each hook; never vetoes a request."""

    def pre_handle(self, request: Request) -> bool:
        _LOGGER.info("pre_handle %s", json.dumps(_describe(request), ensure_ascii=True))
        return True

    def post_handle(self, request: Request, model_and_view) -> None:
        data = _describe(request)
        data["view"] = model_and_view.view_name
        _LOGGER.info("post_handle %s", json.dumps(data, ensure_ascii=True))

    def after_completion(self, request: Request, response: Optional[Response], error: Optional[BaseException]) -> None:
        data = _describe(request)
        data["status_code"] = response.status_code if response is not None else None
        if error is not None:
            data["error"] = repr(error)[:200]
            _LOGGER.warning("after_completion %s", json.dumps(data, ensure_ascii=True))
        else:
            _LOGGER.info("after_completion %s", json.dumps(data, ensure_ascii=True))


def _describe(request: Request) -> dict:
    return {
        "request_id": getattr(request.state, "request_id", ""),
        "method": request.method,
        "path": request.url.path,
    }


class _Registration:
    def __init__(self, interceptor: HandlerInterceptor, path_patterns: Iterable[str], exclude_patterns: Iterable[str]):
        self.interceptor = interceptor
        self.path_patterns = tuple(path_patterns)
        self.exclude_patterns = tuple(exclude_patterns)

    def matches(self, path: str) -> bool:
        if any(fnmatchcase(path, p) for p in self.exclude_patterns):
            return False
        return any(fnmatchcase(path, p) for p in self.path_patterns)


class InterceptorRegistry:
    """Ordered collection of interceptors and the paths they observe."""

    def __init__(self):
        self._registrations: List[_Registration] = []

    def add(self, interceptor: HandlerInterceptor, path_patterns: Iterable[str] = ("/**",), exclude_patterns: Iterable[str] = ()) -> HandlerInterceptor:
        """Register `interceptor` for glob `path_patterns`; `/**` matches every path."""
        self._registrations.append(_Registration(interceptor, path_patterns, exclude_patterns))
        return interceptor

    def for_path(self, path: str) -> List[HandlerInterceptor]:
        """Return the interceptors matching `path`, in registration order."""
        return [r.interceptor for r in self._registrations if r.matches(path)]


def apply_pre_handle(request: Request, interceptors: List[HandlerInterceptor]) -> bool:
    """Run pre-hooks in order, recording the ones that let the request pass.

    Passed interceptors are kept on `request.state.passed_interceptors` so
    the post and completion hooks only reach them.
    """
    passed: List[HandlerInterceptor] = []
    request.state.passed_interceptors = passed
    for interceptor in interceptors:
        if not interceptor.pre_handle(request):
            return False
        passed.append(interceptor)
    return True


def apply_post_handle(request: Request, model_and_view) -> None:
    for interceptor in reversed(getattr(request.state, "passed_interceptors", [])):
        interceptor.post_handle(request, model_and_view)


def trigger_after_completion(request: Request, response: Optional[Response], error: Optional[BaseException]) -> None:
    """Run completion hooks in reverse order.

    A failing hook is logged and does not stop the remaining hooks or
    change the response.
    """
    for interceptor in reversed(getattr(request.state, "passed_interceptors", [])):
        try:
            interceptor.after_completion(request, response, error)
        except Exception:
            _LOGGER.exception("after_completion failed for %s", type(interceptor).__name__)
