"""Call logging decorator for service methods.

Wraps a function so every call emits `before`, `returned` or `raised`,
and `after` events on the `app.services` logger. The wrapped function's
control flow is never altered: results are passed through and errors are
re-raised unchanged.
"""

from __future__ import annotations

import functools
import json
import logging

_LOGGER = logging.getLogger("app.services")
_MAX_REPR = 200


def _event(phase: str, method: str, **extra) -> str:
    return json.dumps({"phase": phase, "method": method, **extra}, ensure_ascii=True)


def logged(func):
    """Log entry, result or error, and exit of every call to `func`."""
    method = func.__qualname__

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        _LOGGER.info("service_call %s", _event("before", method))
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            _LOGGER.error("service_call %s", _event("raised", method, error=repr(exc)[:_MAX_REPR]))
            raise
        else:
            _LOGGER.info("service_call %s", _event("returned", method, result=repr(result)[:_MAX_REPR]))
            return result
        finally:
            _LOGGER.info("service_call %s", _event("after", method))

    return wrapper
